import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rpgcore.actions.martial_art import MartialArt
from rpgcore.core.constants import StatName, SubtypeName
from rpgcore.core.stat_block import StatGrowth, Stats, create_base_stats


class LevelRange(BaseModel):
    """Inclusive level range."""

    min: int = Field(ge=1)
    max: int = Field(ge=1)

    def contains(self, level: int) -> bool:
        return self.min <= level <= self.max


class CreatureSubtype(BaseModel):
    """
    A creature form of the shapeshifting race. The active subtype fully
    determines the shapeshifter's stats, growth and martial arts.
    """

    model_config = ConfigDict(frozen=True)

    name: SubtypeName = Field(
        description="The name of the subtype.",
    )
    description: str = Field(
        default="",
        description="A short description of the creature.",
    )
    base_stats: Stats = Field(
        description="Stats at level 1.",
    )
    base_hp: int = Field(
        gt=0,
        description="Nominal HP at level 1.",
    )
    growth: StatGrowth = Field(
        description="Per-level growth while in this form.",
    )
    available_at: LevelRange | None = Field(
        default=None,
        description="Levels at which the form can be chosen, or None if it must be unlocked.",
    )
    martial_arts: list[MartialArt] = Field(
        default_factory=list,
        description="Techniques available in this form.",
    )

    def model_post_init(self, _: Any) -> None:
        assert self.martial_arts, f"Subtype {self.name} must define martial arts."

    def is_available_at(self, level: int) -> bool:
        return self.available_at is not None and self.available_at.contains(level)

    def stats_at_level(self, level: int) -> Stats:
        """
        Returns the stats of this form at a given level.

        Growth is multiplied by the levels above 1 before flooring.
        """
        levels_gained = max(0, level - 1)
        return create_base_stats(
            **{
                stat.value: math.floor(
                    self.base_stats.get(stat) + self.growth.get(stat) * levels_gained
                )
                for stat in StatName
            }
        )

    def __hash__(self) -> int:
        return hash(self.name)
