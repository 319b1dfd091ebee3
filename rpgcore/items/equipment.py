"""
Equipment module for the rules core.

Defines weapons, shields and armor pieces, and the loadout a character
carries. Only the values the stat and damage formulas read are modelled.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field

from rpgcore.core.constants import (
    ArmorSlot,
    DamageType,
    Element,
    StatName,
    StatusEffect,
    WeaponType,
)


class PowerRange(BaseModel):
    """Power range of a variable-damage weapon or attack."""

    min: int = Field(ge=0, description="Lowest power the weapon can roll.")
    max: int = Field(ge=0, description="Highest power the weapon can roll.")

    def model_post_init(self, _: Any) -> None:
        assert self.min <= self.max, "Power range minimum must not exceed its maximum."


class Weapon(BaseModel):
    """
    Represents a weapon that can be wielded by characters in combat.

    Weapons deal melee or ranged damage scaled off STR or AGI respectively.
    A weapon with a `power_range` rolls its power on every hit instead of
    using the fixed `power`.
    """

    name: str = Field(
        description="The name of the weapon.",
    )
    type: WeaponType = Field(
        description="The weapon family.",
    )
    damage_type: DamageType = Field(
        description="Melee or ranged.",
    )
    power: int = Field(
        default=0,
        ge=0,
        description="Flat power added to the scaling stat.",
    )
    power_range: PowerRange | None = Field(
        default=None,
        description="Optional power range for variable damage weapons.",
    )
    element: Element | None = Field(
        default=None,
        description="Optional elemental damage.",
    )
    stat_bonuses: dict[StatName, int] = Field(
        default_factory=dict,
        description="Stat bonuses granted while equipped.",
    )

    def model_post_init(self, _: Any) -> None:
        assert self.name, "Weapon name must not be empty."
        assert self.damage_type in (
            DamageType.MELEE,
            DamageType.RANGED,
        ), "Weapons deal melee or ranged damage."

    @property
    def is_consumable(self) -> bool:
        return self.type.is_consumable

    @property
    def is_unarmed(self) -> bool:
        return self.type == WeaponType.UNARMED

    def __hash__(self) -> int:
        return hash(self.name)


class Shield(BaseModel):
    """A shield. Its DEF bonus always applies."""

    name: str = Field(
        description="The name of the shield.",
    )
    defense_bonus: int = Field(
        default=0,
        ge=0,
        description="DEF added while equipped.",
    )
    stat_bonuses: dict[StatName, int] = Field(
        default_factory=dict,
        description="Other stat bonuses granted while equipped.",
    )
    resistances: dict[Element, float] = Field(
        default_factory=dict,
        description="Elemental resistances granted while equipped.",
    )


class Armor(BaseModel):
    """A piece of armor worn in one slot."""

    name: str = Field(
        description="The name of the armor piece.",
    )
    slot: ArmorSlot = Field(
        description="The slot where this armor piece is equipped.",
    )
    defense_bonus: int = Field(
        default=0,
        ge=0,
        description="DEF added while equipped, unless the wearer's race ignores armor DEF.",
    )
    stat_bonuses: dict[StatName, int] = Field(
        default_factory=dict,
        description="Other stat bonuses granted while equipped.",
    )
    resistances: dict[Element, float] = Field(
        default_factory=dict,
        description="Elemental resistances granted while equipped.",
    )
    status_immunities: list[StatusEffect] = Field(
        default_factory=list,
        description="Status effects the wearer cannot receive.",
    )


class Equipment(BaseModel):
    """
    The equipment loadout of a character. Second weapon and shield slots are
    only usable by races that can dual wield.
    """

    weapon: Weapon | None = Field(default=None)
    second_weapon: Weapon | None = Field(default=None)
    shield: Shield | None = Field(default=None)
    second_shield: Shield | None = Field(default=None)
    armor: dict[ArmorSlot, Armor] = Field(default_factory=dict)

    def model_post_init(self, _: Any) -> None:
        for slot, piece in self.armor.items():
            assert piece.slot == slot, f"{piece.name} cannot be worn in the {slot.value} slot."

    def weapons(self) -> Iterator[Weapon]:
        for weapon in (self.weapon, self.second_weapon):
            if weapon is not None:
                yield weapon

    def shields(self) -> Iterator[Shield]:
        for shield in (self.shield, self.second_shield):
            if shield is not None:
                yield shield

    def armor_pieces(self) -> Iterator[Armor]:
        yield from self.armor.values()

    def items(self) -> Iterator[Weapon | Shield | Armor]:
        """Yields every equipped item."""
        yield from self.weapons()
        yield from self.shields()
        yield from self.armor_pieces()
