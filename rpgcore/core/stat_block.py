"""
Stat vectors and growth tables.

A `Stats` instance is an immutable vector of the five core stats. Every value
is an integer in [0, MAX_STAT]; operations that could leave that range clamp
and return a new instance.
"""

import math
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .constants import MAX_STAT, Element, StatName


def clamp_stat(value: float) -> int:
    """
    Clamps a stat value to [0, MAX_STAT], flooring fractional values.

    Args:
        value (float): The raw value.

    Returns:
        int: The clamped stat.

    """
    return max(0, min(MAX_STAT, math.floor(value)))


class Stats(BaseModel):
    """The five core stats of a combatant."""

    model_config = ConfigDict(frozen=True)

    STR: int = Field(default=0, ge=0, le=MAX_STAT, description="Strength")
    AGI: int = Field(default=0, ge=0, le=MAX_STAT, description="Agility")
    MAG: int = Field(default=0, ge=0, le=MAX_STAT, description="Magic")
    DEF: int = Field(default=0, ge=0, le=MAX_STAT, description="Defense")
    CON: int = Field(default=0, ge=0, le=MAX_STAT, description="Constitution")

    def get(self, stat: StatName | str) -> int:
        """
        Returns the value of a single stat.

        Args:
            stat (StatName | str): The stat to read.

        Returns:
            int: The stat value.

        """
        return getattr(self, StatName(stat).value)

    def as_dict(self) -> dict[StatName, int]:
        return {stat: self.get(stat) for stat in StatName}

    def __getitem__(self, stat: StatName | str) -> int:
        return self.get(stat)

    def __str__(self) -> str:
        return " ".join(f"{stat.value} {value}" for stat, value in self.as_dict().items())


class StatGrowth(BaseModel):
    """Fractional per-level growth rates for the five core stats."""

    model_config = ConfigDict(frozen=True)

    STR: float = Field(default=0.0, ge=0.0, description="Strength growth per level")
    AGI: float = Field(default=0.0, ge=0.0, description="Agility growth per level")
    MAG: float = Field(default=0.0, ge=0.0, description="Magic growth per level")
    DEF: float = Field(default=0.0, ge=0.0, description="Defense growth per level")
    CON: float = Field(default=0.0, ge=0.0, description="Constitution growth per level")

    def get(self, stat: StatName | str) -> float:
        return getattr(self, StatName(stat).value)

    def as_dict(self) -> dict[StatName, float]:
        return {stat: self.get(stat) for stat in StatName}

    def __add__(self, other: "StatGrowth") -> "StatGrowth":
        return StatGrowth(
            **{stat.value: self.get(stat) + other.get(stat) for stat in StatName}
        )

    @property
    def is_zero(self) -> bool:
        return all(rate == 0 for rate in self.as_dict().values())


def create_base_stats(
    STR: float = 0,
    AGI: float = 0,
    MAG: float = 0,
    DEF: float = 0,
    CON: float = 0,
) -> Stats:
    """Builds a stat vector, clamping every component."""
    return Stats(
        STR=clamp_stat(STR),
        AGI=clamp_stat(AGI),
        MAG=clamp_stat(MAG),
        DEF=clamp_stat(DEF),
        CON=clamp_stat(CON),
    )


def add_stats(base: Stats, delta: Mapping[StatName, float]) -> Stats:
    """
    Adds a partial stat vector to a full one, clamping the result.

    Args:
        base (Stats): The starting stats.
        delta (Mapping[StatName, float]): Per-stat amounts to add. Missing stats add 0.

    Returns:
        Stats: A new, clamped stat vector.

    """
    return Stats(
        **{
            stat.value: clamp_stat(base.get(stat) + delta.get(stat, 0))
            for stat in StatName
        }
    )


def multiply_stat_growth(
    growth: StatGrowth | Mapping[StatName, float], levels: int
) -> dict[StatName, int]:
    """
    Multiplies growth rates by a number of levels, flooring each product.

    Args:
        growth (StatGrowth | Mapping[StatName, float]): Per-level growth rates.
        levels (int): The number of levels applied in one step.

    Returns:
        dict[StatName, int]: The integer gain per stat.

    """
    rates = growth.as_dict() if isinstance(growth, StatGrowth) else growth
    return {
        StatName(stat): math.floor((rate or 0) * levels) for stat, rate in rates.items()
    }


# =============================================================================
# ELEMENTAL RESISTANCES
# =============================================================================

# Fraction of elemental damage ignored, 0 (none) to 1 (immune).
ElementalResistances = dict[Element, float]


def create_empty_resistances() -> ElementalResistances:
    return {element: 0.0 for element in Element}
