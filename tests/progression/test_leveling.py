"""
Tests for EXP rewards, growth composition and level-up application.
"""

import random

import pytest

from rpgcore.character.factory import create_character, create_enemy
from rpgcore.character.stats import calculate_max_hp
from rpgcore.core.constants import ArmorSlot, ClassName, RaceName, StatName, SubtypeName
from rpgcore.core.stat_block import StatGrowth, create_base_stats
from rpgcore.progression.exp_table import get_exp_for_level
from rpgcore.progression.growth import calculate_stat_gains, get_effective_growth
from rpgcore.progression.leveling import (
    calculate_battle_exp_reward,
    calculate_enemy_exp_reward,
    can_level_up,
    format_exp_display,
    get_exp_progress_percent,
    get_exp_remaining,
    grant_battle_exp,
    grant_exp,
    process_level_up,
)


@pytest.fixture
def warrior():
    return create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR)


@pytest.fixture
def goblin():
    return create_enemy("Goblin", create_base_stats(AGI=10, CON=2), level=10)


# ---- Growth ----


def test_growth_composition():
    assert get_effective_growth(RaceName.HUMAN, ClassName.WARRIOR) == StatGrowth(
        STR=3, AGI=3, MAG=1, DEF=1, CON=1
    )
    esper = get_effective_growth(RaceName.ESPER, ClassName.MAGE)
    assert esper.STR == 1.5
    assert esper.AGI == 4
    assert esper.MAG == 6


def test_gear_dependent_race_has_no_growth():
    assert get_effective_growth(RaceName.CYBORG, ClassName.WARRIOR).is_zero


def test_subtype_growth_replaces_race_and_class_growth():
    growth = get_effective_growth(RaceName.FAE, ClassName.WARRIOR, SubtypeName.WOLF)
    assert growth == StatGrowth(STR=1.5, AGI=3)
    fallback = get_effective_growth(RaceName.FAE, ClassName.MAGE)
    assert fallback.MAG == 3


def test_stat_gains_floor_per_step():
    assert calculate_stat_gains(StatGrowth(AGI=0.5))[StatName.AGI] == 0
    assert calculate_stat_gains(StatGrowth(AGI=0.5), 2)[StatName.AGI] == 1


# ---- EXP rewards ----


def test_enemy_exp_reward_pinned_variance(mocker, goblin):
    mocker.patch("random.random", return_value=0.0)
    assert calculate_enemy_exp_reward(goblin) == 180
    assert calculate_enemy_exp_reward(goblin, is_dungeon=True) == 360


def test_enemy_exp_reward_distribution(goblin):
    """Test that rewards average 20 EXP per level, doubled in dungeons."""
    rng = random.Random(1234)
    trials = 2000
    normal = sum(calculate_enemy_exp_reward(goblin, rng=rng) for _ in range(trials)) / trials
    dungeon = (
        sum(calculate_enemy_exp_reward(goblin, True, rng=rng) for _ in range(trials)) / trials
    )
    assert abs(normal - 200) <= 200 * 0.15
    assert abs(dungeon - 2 * normal) <= 2 * normal * 0.20


def test_enemy_exp_reward_minimum():
    weakling = create_enemy("Rat", create_base_stats(), level=1)
    rng = random.Random(7)
    assert all(calculate_enemy_exp_reward(weakling, rng=rng) >= 1 for _ in range(100))


def test_battle_exp_reward_sums_enemies(mocker, goblin):
    mocker.patch("random.random", return_value=0.0)
    assert calculate_battle_exp_reward([goblin, goblin]) == 360
    assert calculate_battle_exp_reward([]) == 0


# ---- Level up ----


def test_no_level_up_without_exp(warrior):
    assert not can_level_up(warrior)
    assert process_level_up(warrior) is None
    assert warrior.level == 1


def test_single_level_up(warrior):
    warrior.exp = get_exp_for_level(2)
    result = process_level_up(warrior)
    assert result is not None
    assert result.previous_level == 1
    assert result.new_level == 2
    assert result.stat_gains[StatName.STR] == 3
    assert result.new_max_hp == calculate_max_hp(11)
    assert warrior.level == 2
    assert warrior.base_stats.STR == 33
    assert warrior.max_hp == result.new_max_hp
    assert result.new_gear_slots == []
    assert result.new_abilities == []


def test_grant_exp_spanning_two_levels(warrior):
    """Test that an award spanning two thresholds yields two chained results."""
    results = grant_exp(warrior, get_exp_for_level(3))
    assert len(results) == 2
    assert results[1].previous_level == results[0].new_level
    assert warrior.level == 3
    assert warrior.base_stats.STR == 36


def test_growth_is_floored_one_level_at_a_time():
    """Test that half-point growth never accumulates across a multi-level award."""
    defender = create_character("Brom", RaceName.HUMAN, ClassName.DEFENDER)
    results = grant_exp(defender, get_exp_for_level(3))
    assert len(results) == 2
    assert all(result.stat_gains[StatName.AGI] == 0 for result in results)
    assert defender.base_stats.AGI == 10
    assert defender.base_stats.DEF == 30 + 4


def test_grant_exp_rejects_negative_amounts(warrior):
    with pytest.raises(ValueError):
        grant_exp(warrior, -1)


def test_grant_exp_at_cap_retains_exp(mocker):
    mock_log_warning = mocker.patch("rpgcore.progression.leveling.log_warning")
    veteran = create_character("Old", RaceName.HUMAN, ClassName.WARRIOR, level=50)
    exp_before = veteran.exp
    assert grant_exp(veteran, 500) == []
    assert veteran.level == 50
    assert veteran.exp == exp_before + 500
    mock_log_warning.assert_called_once()


def test_cyborg_unlocks_gear_slot():
    cyborg = create_character("Unit", RaceName.CYBORG, ClassName.WARRIOR, level=9)
    results = grant_exp(cyborg, get_exp_for_level(10) - cyborg.exp)
    assert len(results) == 1
    assert results[0].new_gear_slots == [ArmorSlot.ARMS]
    assert all(gain == 0 for gain in results[0].stat_gains.values())


def test_slot_class_reports_new_slots():
    mage = create_character("Vera", RaceName.HUMAN, ClassName.MAGE, level=9)
    results = grant_exp(mage, get_exp_for_level(10) - mage.exp)
    assert results[0].new_abilities == ["+1 Spell Slot", "+1 Tome Slot"]


def test_level_up_keeps_current_hp(warrior):
    warrior.current_hp = 100
    grant_exp(warrior, get_exp_for_level(2))
    assert warrior.current_hp == 100
    assert warrior.max_hp == calculate_max_hp(11)


def test_grant_battle_exp_skips_fallen_members(mocker, goblin):
    mocker.patch("random.random", return_value=0.0)
    alive = create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR, character_id="a")
    fallen = create_character("Brom", RaceName.HUMAN, ClassName.DEFENDER, character_id="b")
    fallen.current_hp = 0

    results = grant_battle_exp([alive, fallen], [goblin])
    assert set(results) == {"a"}
    assert alive.exp == 180
    assert fallen.exp == 0
    assert [result.new_level for result in results["a"]] == [2]


def test_grant_battle_exp_gives_full_sum_to_each_member(mocker, goblin):
    mocker.patch("random.random", return_value=0.0)
    party = [
        create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR, character_id="a"),
        create_character("Vera", RaceName.HUMAN, ClassName.MAGE, character_id="b"),
    ]
    grant_battle_exp(party, [goblin], is_dungeon=True)
    assert [member.exp for member in party] == [360, 360]


# ---- Display ----


def test_exp_display_helpers(warrior):
    warrior.exp = 50
    assert get_exp_progress_percent(warrior) == 50
    assert get_exp_remaining(warrior) == 50
    assert format_exp_display(warrior) == "50 / 100"


def test_exp_display_at_cap():
    veteran = create_character("Old", RaceName.HUMAN, ClassName.WARRIOR, level=50)
    assert get_exp_progress_percent(veteran) == 100
    assert get_exp_remaining(veteran) == 0
    assert format_exp_display(veteran) == f"{veteran.exp} (MAX)"
