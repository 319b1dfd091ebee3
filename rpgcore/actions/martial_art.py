"""
Martial art module for the rules core.

Martial arts are the natural attacks of creature subtypes: a flat base damage
plus one of the attacker's stats, delivered at melee or ranged reach.
"""

from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import (
    DamageType,
    Element,
    MartialArtType,
    StatName,
    Targeting,
)


class MartialArt(BaseModel):
    """A martial art technique."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the martial art.",
    )
    type: MartialArtType = Field(
        description="Whether the technique is delivered at melee or ranged reach.",
    )
    targeting: Targeting = Field(
        default=Targeting.SINGLE,
        description="How many enemies the technique hits.",
    )
    base_damage: int = Field(
        ge=0,
        description="Flat damage before the scaling stat is added.",
    )
    scaling_stat: StatName = Field(
        description="The attacker stat added to the base damage.",
    )
    element: Element | None = Field(
        default=None,
        description="Optional element carried by the technique.",
    )

    @property
    def damage_type(self) -> DamageType:
        """The damage category used for weakness checks."""
        return self.type.damage_type

    @property
    def is_multi_target(self) -> bool:
        return self.targeting.is_multi_target

    @property
    def description(self) -> str:
        """One-line summary, e.g. 'Bite: melee single target, 25 + STR damage'."""
        target_desc = {
            Targeting.SINGLE: "single target",
            Targeting.MULTI: "multiple targets",
        }.get(self.targeting, "all enemies")
        element_desc = f" ({self.element.value})" if self.element else ""
        return (
            f"{self.name}: {self.type.value} {target_desc}, "
            f"{self.base_damage} + {self.scaling_stat.value} damage{element_desc}"
        )

    def __hash__(self) -> int:
        return hash(self.name)
