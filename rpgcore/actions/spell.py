"""
Spell and tome module for the rules core.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rpgcore.core.constants import Element, SpellKind, StatusEffect, Targeting


class Spell(BaseModel):
    """
    Represents a spell a character can cast with MP, or read from a tome.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the spell.",
    )
    kind: SpellKind = Field(
        description="What the spell does (damage, healing, buff, debuff, status).",
    )
    power: int = Field(
        default=0,
        ge=0,
        description="Flat power added to the caster's MAG.",
    )
    mp_cost: int = Field(
        default=0,
        ge=0,
        description="MP spent to cast the spell.",
    )
    targeting: Targeting = Field(
        default=Targeting.SINGLE,
        description="Who the spell can target.",
    )
    element: Element | None = Field(
        default=None,
        description="Optional element of the spell.",
    )
    status_effect: StatusEffect | None = Field(
        default=None,
        description="Status inflicted by status spells.",
    )

    @property
    def is_multi_target(self) -> bool:
        return self.targeting.is_multi_target

    @property
    def is_healing(self) -> bool:
        return self.kind == SpellKind.HEALING

    def __hash__(self) -> int:
        return hash(self.name)


class Tome(BaseModel):
    """A limited-use item that casts a spell without spending MP."""

    name: str = Field(
        description="The name of the tome.",
    )
    spell: Spell = Field(
        description="The spell the tome casts.",
    )
    max_uses: int = Field(
        ge=1,
        description="Uses available when fully charged.",
    )
    current_uses: int = Field(
        default=-1,
        description="Uses remaining; defaults to max_uses.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.current_uses < 0:
            self.current_uses = self.max_uses
        assert self.current_uses <= self.max_uses, "Tome uses cannot exceed its maximum."

    @property
    def is_depleted(self) -> bool:
        return self.current_uses <= 0
