"""
EXP table for the rules core.

The table is generated once per process and cached. Cumulative EXP is
strictly increasing from 0 at level 1 to the level cap.
"""

import math
import threading

from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import MAX_LEVEL


class ExpTableEntry(BaseModel):
    """A row of the EXP table."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=MAX_LEVEL)
    total_exp: int = Field(ge=0, description="Cumulative EXP needed to reach the level.")
    exp_from_previous: int = Field(ge=0, description="EXP needed from the previous level.")


def _exp_delta(level: int) -> int:
    """EXP needed to go from `level - 1` to `level`."""
    if level <= 10:
        return math.floor(100 * 1.5 ** (level - 2) + (level - 2) * 50)
    if level <= 30:
        return math.floor(3000 + (level - 10) * 800 + (level - 10) ** 2 * 50)
    return 25000 + (level - 30) * 2000


def generate_exp_table() -> list[ExpTableEntry]:
    """
    Generates the EXP table for levels 1 to MAX_LEVEL.

    Levels 2-10 grow exponentially, levels 11-30 quadratically and levels
    31-50 linearly.

    Returns:
        list[ExpTableEntry]: One entry per level, index 0 is level 1.

    """
    table = [ExpTableEntry(level=1, total_exp=0, exp_from_previous=0)]
    total_exp = 0
    for level in range(2, MAX_LEVEL + 1):
        delta = _exp_delta(level)
        total_exp += delta
        table.append(
            ExpTableEntry(level=level, total_exp=total_exp, exp_from_previous=delta)
        )
    return table


_EXP_TABLE_CACHE: tuple[ExpTableEntry, ...] | None = None
_EXP_TABLE_LOCK = threading.Lock()


def get_exp_table() -> tuple[ExpTableEntry, ...]:
    """Returns the cached EXP table, generating it on first use."""
    global _EXP_TABLE_CACHE

    if _EXP_TABLE_CACHE is None:
        with _EXP_TABLE_LOCK:
            if _EXP_TABLE_CACHE is None:
                _EXP_TABLE_CACHE = tuple(generate_exp_table())
    return _EXP_TABLE_CACHE


def get_exp_for_level(level: int) -> int:
    """
    Get the cumulative EXP needed to reach a level.

    Args:
        level (int): The level. Below 1 yields 0; above the cap is clamped.

    Returns:
        int: The cumulative EXP.

    """
    if level < 1:
        return 0
    return get_exp_table()[min(level, MAX_LEVEL) - 1].total_exp


def get_exp_to_next_level(current_level: int) -> int:
    """EXP between the current level and the next, 0 at the cap."""
    if current_level >= MAX_LEVEL:
        return 0
    return get_exp_table()[max(current_level, 1)].exp_from_previous


def calculate_level_from_exp(total_exp: int) -> int:
    """
    Calculate what level a character should be at for a total EXP.

    Returns:
        int: The highest level whose cumulative EXP is at most `total_exp`,
            clamped to [1, MAX_LEVEL].

    """
    for entry in reversed(get_exp_table()):
        if total_exp >= entry.total_exp:
            return entry.level
    return 1
