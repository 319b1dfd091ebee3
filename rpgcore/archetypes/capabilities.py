"""
Capability sets answer "does this class have ability X, and how strongly?".

Most classes carry an explicit ability list at full potency. The inherit-all
variant answers yes to every ability, at a reduced potency.
"""

from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import ClassAbility, FREELANCER_PASSIVE_POTENCY


class CapabilitySet(BaseModel):
    """An explicit set of abilities held at a single potency."""

    model_config = ConfigDict(frozen=True)

    abilities: frozenset[ClassAbility] = Field(
        default_factory=frozenset,
        description="The abilities in the set.",
    )
    potency: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description="Strength at which every held ability applies.",
    )

    def has(self, ability: ClassAbility) -> bool:
        return ability in self.abilities

    def potency_of(self, ability: ClassAbility) -> float:
        """
        Returns the potency of an ability, or 0 if the set lacks it.

        Args:
            ability (ClassAbility): The ability to query.

        Returns:
            float: 0.0 when absent, the set potency otherwise.

        """
        return self.potency if self.has(ability) else 0.0

    def scale_chance(self, ability: ClassAbility, chance: float) -> float:
        """Scales a probability granted by an ability."""
        return chance * self.potency_of(ability)

    def scale_multiplier(self, ability: ClassAbility, multiplier: float) -> float:
        """
        Scales the bonus part of a multiplier granted by an ability.

        A x2 multiplier at potency 0.75 becomes x1.75; without the ability
        it is x1.
        """
        return 1.0 + (multiplier - 1.0) * self.potency_of(ability)


class InheritedCapabilitySet(CapabilitySet):
    """Holds every ability at reduced potency."""

    potency: float = Field(
        default=FREELANCER_PASSIVE_POTENCY,
        gt=0.0,
        le=1.0,
        description="Strength at which every inherited ability applies.",
    )

    def has(self, ability: ClassAbility) -> bool:
        return True
