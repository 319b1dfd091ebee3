"""
Tests for stat vectors, growth tables and the random helpers.
"""

import pytest
from pydantic import ValidationError

from rpgcore.core.constants import Element, StatName
from rpgcore.core.errors import RulesError, UnknownArchetypeError
from rpgcore.core.stat_block import (
    StatGrowth,
    Stats,
    add_stats,
    clamp_stat,
    create_base_stats,
    create_empty_resistances,
    multiply_stat_growth,
)
from rpgcore.core.utils import random_range, roll_chance


def test_clamp_stat_bounds():
    """Test that stats are floored and clamped to [0, 200]."""
    assert clamp_stat(250) == 200
    assert clamp_stat(-5) == 0
    assert clamp_stat(10.9) == 10


def test_stats_reject_out_of_range_values():
    """Test that a stat vector cannot hold a value above the cap."""
    with pytest.raises(ValidationError):
        Stats(STR=201)
    with pytest.raises(ValidationError):
        Stats(DEF=-1)


def test_stats_are_immutable():
    stats = create_base_stats(STR=10)
    with pytest.raises(ValidationError):
        stats.STR = 20


def test_stats_lookup_by_name():
    stats = create_base_stats(STR=1, AGI=2, MAG=3, DEF=4, CON=5)
    assert stats.get(StatName.MAG) == 3
    assert stats["CON"] == 5
    assert stats.as_dict()[StatName.AGI] == 2


def test_add_stats_clamps_result():
    """Test that adding a bonus never pushes a stat past the cap."""
    base = create_base_stats(STR=195, AGI=10)
    result = add_stats(base, {StatName.STR: 10, StatName.AGI: -20})
    assert result.STR == 200
    assert result.AGI == 0
    # The input vector is untouched.
    assert base.STR == 195


def test_multiply_stat_growth_floors_after_multiplying():
    """Test that fractional growth is multiplied before it is floored."""
    growth = StatGrowth(STR=1.5, AGI=0.5)
    gains = multiply_stat_growth(growth, 3)
    assert gains[StatName.STR] == 4
    assert gains[StatName.AGI] == 1
    assert gains[StatName.MAG] == 0


def test_stat_growth_addition():
    combined = StatGrowth(STR=1, AGI=0.5) + StatGrowth(STR=2, CON=1)
    assert combined.STR == 3
    assert combined.AGI == 0.5
    assert combined.CON == 1
    assert not combined.is_zero
    assert StatGrowth().is_zero


def test_empty_resistances_cover_every_element():
    resistances = create_empty_resistances()
    assert set(resistances) == set(Element)
    assert all(value == 0.0 for value in resistances.values())


def test_roll_chance_edges():
    """Test that a chance of 0 never succeeds and a chance of 1 always does."""
    for _ in range(50):
        assert roll_chance(0.0) is False
        assert roll_chance(1.0) is True


def test_roll_chance_compares_against_draw(mocker):
    """Test that roll_chance succeeds only when the draw is below the chance."""
    mocker.patch("random.random", return_value=0.3)
    assert roll_chance(0.25) is False
    assert roll_chance(0.5) is True


def test_random_range_uses_injected_generator(mocker):
    rng = mocker.Mock()
    rng.random.return_value = 0.5
    assert random_range(0.8, 1.2, rng) == pytest.approx(1.0)
    rng.random.assert_called_once_with()


def test_unknown_archetype_error_is_a_key_error():
    error = UnknownArchetypeError("race", "Elf")
    assert isinstance(error, KeyError)
    assert isinstance(error, RulesError)
    assert str(error) == "Unknown race: 'Elf'"
