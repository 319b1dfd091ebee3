"""
Tests for final stat composition, resource caps and resistances.
"""

import pytest

from rpgcore.character.factory import create_character
from rpgcore.character.stats import (
    calculate_equipment_def,
    calculate_final_resistances,
    calculate_final_stats,
    calculate_max_hp,
    calculate_max_mp,
    clamp_hp,
    clamp_mp,
    get_stat_display,
    recalculate_resources,
    refresh_character,
)
from rpgcore.core.constants import (
    ArmorSlot,
    ClassName,
    DamageType,
    Element,
    RaceName,
    StatName,
    SubtypeName,
    WeaponType,
)
from rpgcore.items.equipment import Armor, Equipment, Shield, Weapon


@pytest.fixture
def sword():
    return Weapon(
        name="Iron Sword",
        type=WeaponType.SWORD,
        damage_type=DamageType.MELEE,
        power=10,
        stat_bonuses={StatName.STR: 5},
    )


@pytest.fixture
def buckler():
    return Shield(name="Buckler", defense_bonus=5, resistances={Element.FIRE: 0.2})


@pytest.fixture
def chainmail():
    return Armor(
        name="Chainmail",
        slot=ArmorSlot.BODY,
        defense_bonus=10,
        stat_bonuses={StatName.CON: 4},
        resistances={Element.FIRE: 0.1, Element.ICE: 0.3},
    )


@pytest.fixture
def loadout(sword, buckler, chainmail):
    return Equipment(weapon=sword, shield=buckler, armor={ArmorSlot.BODY: chainmail})


def test_max_hp_formula():
    """Test the HP cap over the whole stat range."""
    previous = 0
    for con in range(0, 201):
        hp = calculate_max_hp(con)
        assert hp == min(100 + 50 * con, 9999)
        assert hp >= previous
        previous = hp


def test_max_mp_formula():
    assert calculate_max_mp(10) == 600
    assert calculate_max_mp(200) == 9999
    assert calculate_max_mp(200, RaceName.CYBORG) == 50
    assert calculate_max_mp(0, RaceName.CYBORG) == 50


def test_resource_clamps():
    assert clamp_hp(-10) == 0
    assert clamp_hp(20000) == 9999
    assert clamp_mp(120, RaceName.CYBORG) == 50
    assert clamp_mp(120, RaceName.HUMAN) == 120


def test_final_stats_include_equipment(loadout):
    """Test that stat and DEF bonuses are added to base stats."""
    character = create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR, equipment=loadout)
    stats = calculate_final_stats(character)
    assert stats.STR == 10 + 20 + 5
    assert stats.DEF == 10 + 5 + 10
    assert stats.CON == 10 + 4
    assert character.current_stats == stats
    assert character.max_hp == calculate_max_hp(14)


def test_reduced_agi_class():
    character = create_character("Brom", RaceName.HUMAN, ClassName.DEFENDER)
    assert character.base_stats.AGI == 10
    assert character.stats.AGI == 8
    assert character.stats.DEF == 30
    assert character.stats.CON == 30


def test_agi_reduction_applies_before_clamping():
    """Test that the reduced AGI is taken from the unclamped sum."""
    charm = Armor(name="Wind Charm", slot=ArmorSlot.BODY, stat_bonuses={StatName.AGI: 30})
    defender = create_character(
        "Brom",
        RaceName.HUMAN,
        ClassName.DEFENDER,
        equipment=Equipment(armor={ArmorSlot.BODY: charm}),
    )
    defender.base_stats = defender.base_stats.model_copy(update={"AGI": 190})
    assert calculate_final_stats(defender).AGI == 176


def test_final_stats_clamped_once_at_both_ends():
    cursed = Armor(
        name="Cursed Plate",
        slot=ArmorSlot.BODY,
        stat_bonuses={StatName.STR: 250, StatName.CON: -100},
    )
    character = create_character(
        "Aria",
        RaceName.HUMAN,
        ClassName.WARRIOR,
        equipment=Equipment(armor={ArmorSlot.BODY: cursed}),
    )
    stats = calculate_final_stats(character)
    assert stats.STR == 200
    assert stats.CON == 0
    assert character.max_hp == calculate_max_hp(0)


def test_armor_def_ignored_for_fae(buckler, chainmail):
    equipment = Equipment(shield=buckler, armor={ArmorSlot.BODY: chainmail})
    assert calculate_equipment_def(equipment, RaceName.FAE) == 5
    assert calculate_equipment_def(equipment, RaceName.HUMAN) == 15


def test_fae_def_display(buckler, chainmail):
    """Test that ignored armor DEF is shown separately."""
    equipment = Equipment(shield=buckler, armor={ArmorSlot.BODY: chainmail})
    fae = create_character(
        "Pix",
        RaceName.FAE,
        ClassName.WARRIOR,
        fae_subtype=SubtypeName.GOBLIN,
        equipment=equipment,
    )
    assert get_stat_display(fae, StatName.DEF) == "15 (10X)"
    assert get_stat_display(fae, StatName.STR) == "20"


def test_resistances_from_equipment_and_level(loadout):
    defender = create_character("Brom", RaceName.HUMAN, ClassName.DEFENDER, level=10)
    resistances = calculate_final_resistances(defender)
    assert resistances[Element.DARK] == pytest.approx(0.10)

    freelancer = create_character(
        "Kit", RaceName.HUMAN, ClassName.FREELANCER, level=10, equipment=loadout
    )
    resistances = calculate_final_resistances(freelancer)
    assert resistances[Element.FIRE] == pytest.approx(0.2 + 0.1 + 0.075)
    assert resistances[Element.ICE] == pytest.approx(0.3 + 0.075)

    warrior = create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR, level=10)
    assert calculate_final_resistances(warrior)[Element.WATER] == 0.0


def test_resistances_are_clamped():
    shield = Shield(name="Flame Ward", resistances={Element.FIRE: 0.8})
    armor = Armor(name="Flame Coat", slot=ArmorSlot.BODY, resistances={Element.FIRE: 0.8})
    character = create_character(
        "Aria",
        RaceName.HUMAN,
        ClassName.WARRIOR,
        equipment=Equipment(shield=shield, armor={ArmorSlot.BODY: armor}),
    )
    assert character.resistances[Element.FIRE] == 1.0


def test_recalculate_resources_is_pure(loadout):
    character = create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR)
    character.equipment = loadout
    max_hp, max_mp = recalculate_resources(character)
    assert max_hp == calculate_max_hp(14)
    assert max_mp == calculate_max_mp(10)
    assert character.max_hp == calculate_max_hp(10)


def test_refresh_clamps_current_hp(loadout):
    """Test that unequipping CON gear clamps current HP to the new cap."""
    character = create_character("Aria", RaceName.HUMAN, ClassName.WARRIOR, equipment=loadout)
    assert character.current_hp == calculate_max_hp(14)

    character.equipment = Equipment()
    refresh_character(character)
    assert character.max_hp == calculate_max_hp(10)
    assert character.current_hp == character.max_hp
    assert character.stats.STR == 30
