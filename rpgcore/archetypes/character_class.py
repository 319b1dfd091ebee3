from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import ClassAbility, ClassName, ClassRestriction, StatName
from rpgcore.core.stat_block import StatGrowth

from .capabilities import CapabilitySet, InheritedCapabilitySet


class CharacterClass(BaseModel):
    """
    Represents a character class with its stat bonus, growth, abilities and
    restrictions.
    """

    model_config = ConfigDict(frozen=True)

    name: ClassName = Field(
        description="The name of the character class.",
    )
    description: str = Field(
        default="",
        description="A short description of the class.",
    )
    base_stat_bonus: dict[StatName, int] = Field(
        default_factory=dict,
        description="Stats added on recruitment for races that grow by level.",
    )
    growth: StatGrowth = Field(
        description="Per-level growth contributed by the class.",
    )
    abilities: list[ClassAbility] = Field(
        default_factory=list,
        description="Abilities held natively by the class.",
    )
    restrictions: list[ClassRestriction] = Field(
        default_factory=list,
        description="Equipment and ability restrictions.",
    )
    inherits_all: bool = Field(
        default=False,
        description="Whether the class holds every ability at reduced potency.",
    )

    @property
    def capabilities(self) -> CapabilitySet:
        """The capability set backing every ability query for this class."""
        if self.inherits_all:
            return InheritedCapabilitySet()
        return CapabilitySet(abilities=frozenset(self.abilities))

    def has_ability(self, ability: ClassAbility) -> bool:
        return self.capabilities.has(ability)

    def has_restriction(self, restriction: ClassRestriction) -> bool:
        return restriction in self.restrictions

    @property
    def potency(self) -> float:
        return self.capabilities.potency

    def __hash__(self) -> int:
        """
        Hash the character class based on its name.

        Returns:
            int:
                The hash value of the character class.

        """
        return hash(self.name)
