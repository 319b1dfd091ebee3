"""
Tests for the EXP table and level lookups.
"""

from rpgcore.core.constants import MAX_LEVEL
from rpgcore.progression.exp_table import (
    calculate_level_from_exp,
    generate_exp_table,
    get_exp_for_level,
    get_exp_table,
    get_exp_to_next_level,
)


def test_table_covers_every_level():
    table = generate_exp_table()
    assert len(table) == MAX_LEVEL
    assert [entry.level for entry in table] == list(range(1, MAX_LEVEL + 1))
    assert table[0].total_exp == 0


def test_cumulative_exp_strictly_increasing():
    table = get_exp_table()
    for previous, current in zip(table, table[1:]):
        assert current.total_exp > previous.total_exp
        assert current.total_exp - previous.total_exp == current.exp_from_previous


def test_curve_segments():
    """Test one delta from each segment of the curve."""
    table = generate_exp_table()
    assert table[1].exp_from_previous == 100
    assert table[2].exp_from_previous == 200
    assert table[9].exp_from_previous == 2962
    assert table[10].exp_from_previous == 3850
    assert table[30].exp_from_previous == 27000
    assert table[49].exp_from_previous == 65000


def test_table_is_cached():
    assert get_exp_table() is get_exp_table()


def test_exp_for_level_bounds():
    assert get_exp_for_level(0) == 0
    assert get_exp_for_level(1) == 0
    assert get_exp_for_level(3) == 300
    assert get_exp_for_level(60) == get_exp_for_level(MAX_LEVEL)


def test_exp_to_next_level():
    assert get_exp_to_next_level(1) == 100
    assert get_exp_to_next_level(2) == 200
    assert get_exp_to_next_level(MAX_LEVEL) == 0


def test_level_from_exp_round_trips_thresholds():
    for level in range(1, MAX_LEVEL + 1):
        assert calculate_level_from_exp(get_exp_for_level(level)) == level


def test_level_from_exp_between_and_beyond_thresholds():
    assert calculate_level_from_exp(0) == 1
    assert calculate_level_from_exp(99) == 1
    assert calculate_level_from_exp(299) == 2
    assert calculate_level_from_exp(get_exp_for_level(MAX_LEVEL) * 10) == MAX_LEVEL
