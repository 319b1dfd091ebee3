from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import ClassName, RaceName, RaceTrait, WeaknessType
from rpgcore.core.stat_block import StatGrowth, Stats


class CharacterRace(BaseModel):
    """
    Represents a playable race: its stat baseline, growth, the classes it may
    take, its traits and its weakness.
    """

    model_config = ConfigDict(frozen=True)

    name: RaceName = Field(
        description="The name of the race.",
    )
    description: str = Field(
        default="",
        description="A short description of the race.",
    )
    base_stats: Stats = Field(
        description="Stats of a freshly recruited member of the race.",
    )
    growth: StatGrowth | None = Field(
        default=None,
        description="Per-level growth, or None for races that do not grow by level.",
    )
    allowed_classes: list[ClassName] = Field(
        description="Classes the race may take.",
    )
    traits: list[RaceTrait] = Field(
        default_factory=list,
        description="Race-specific traits.",
    )
    weakness: WeaknessType = Field(
        description="The damage category the race takes 1.5x damage from.",
    )

    def has_trait(self, trait: RaceTrait) -> bool:
        return trait in self.traits

    def allows_class(self, class_name: ClassName) -> bool:
        return class_name in self.allowed_classes

    @property
    def is_gear_dependent(self) -> bool:
        return self.has_trait(RaceTrait.GEAR_DEPENDENT)

    @property
    def is_subtype_dependent(self) -> bool:
        return self.has_trait(RaceTrait.SUBTYPE_DEPENDENT)

    def __hash__(self) -> int:
        """
        Hash the character race based on its name.

        Returns:
            int:
                The hash value of the character race.

        """
        return hash(self.name)
