"""
Character module for the rules core.

Defines the two combatant record types: player characters, which have a
race and class and grow through levels, and enemies, which carry a fixed
stat block and an optional race and class.
"""

import uuid
from typing import Any, Literal

from pydantic import BaseModel, Field

from rpgcore.actions.martial_art import MartialArt
from rpgcore.actions.spell import Spell, Tome
from rpgcore.core.constants import (
    MAX_LEVEL,
    ClassName,
    DamageType,
    Element,
    RaceName,
    Stance,
    StatusEffect,
    SubtypeName,
    Targeting,
)
from rpgcore.core.stat_block import ElementalResistances, Stats, create_empty_resistances
from rpgcore.items.equipment import Equipment, PowerRange


def _new_id() -> str:
    return uuid.uuid4().hex


class Character(BaseModel):
    """
    Represents a player character.

    `base_stats` holds the stats before equipment; `current_stats` holds the
    final stats after equipment and class adjustments. Both are recomputed by
    the stat model and must not be edited piecemeal.
    """

    id: str = Field(
        default_factory=_new_id,
        description="Unique identifier of the character.",
    )
    name: str = Field(
        description="The name of the character.",
    )
    race: RaceName = Field(
        description="The race of the character.",
    )
    character_class: ClassName = Field(
        description="The class of the character.",
    )
    level: int = Field(
        default=1,
        ge=1,
        le=MAX_LEVEL,
        description="The current level.",
    )
    exp: int = Field(
        default=0,
        ge=0,
        description="Total experience earned.",
    )
    base_stats: Stats = Field(
        description="Stats before equipment.",
    )
    current_stats: Stats | None = Field(
        default=None,
        description="Final stats after equipment and class adjustments.",
    )
    current_hp: int = Field(default=0, ge=0)
    max_hp: int = Field(default=0, ge=0)
    current_mp: int = Field(default=0, ge=0)
    max_mp: int = Field(default=0, ge=0)
    equipment: Equipment = Field(
        default_factory=Equipment,
        description="The equipment loadout.",
    )
    resistances: ElementalResistances = Field(
        default_factory=create_empty_resistances,
        description="Final elemental resistances.",
    )
    status_effects: list[StatusEffect] = Field(
        default_factory=list,
        description="Active status effects.",
    )
    stance: Stance = Field(
        default=Stance.NONE,
        description="Temporary combat stance.",
    )
    fae_subtype: SubtypeName | None = Field(
        default=None,
        description="Active creature form, for the shapeshifting race.",
    )
    spells: list[Spell] = Field(default_factory=list)
    tomes: list[Tome] = Field(default_factory=list)
    martial_arts: list[MartialArt] = Field(default_factory=list)

    def model_post_init(self, _: Any) -> None:
        if self.current_stats is None:
            self.current_stats = self.base_stats

    @property
    def stats(self) -> Stats:
        """The stats combat formulas read."""
        assert self.current_stats is not None
        return self.current_stats

    @property
    def is_player(self) -> bool:
        return True

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def __hash__(self) -> int:
        return hash(self.id)


class EnemyAttack(BaseModel):
    """An attack pattern an enemy can use."""

    name: str = Field(description="The name of the attack.")
    damage_type: DamageType = Field(description="The damage category of the attack.")
    power: int = Field(default=0, ge=0, description="Flat power of the attack.")
    power_range: PowerRange | None = Field(
        default=None,
        description="Optional power range for variable damage attacks.",
    )
    targeting: Targeting = Field(default=Targeting.SINGLE)
    element: Element | None = Field(default=None)
    status_effect: StatusEffect | None = Field(default=None)
    use_chance: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Chance to use this attack.",
    )
    crit_chance: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Critical hit chance override.",
    )


class EnemyDrop(BaseModel):
    """An entry of an enemy drop table."""

    item_type: Literal["gold", "item", "meat", "runestone"]
    item_id: str | None = None
    chance: float = Field(ge=0.0, le=1.0)
    quantity: PowerRange = Field(default_factory=lambda: PowerRange(min=1, max=1))


class Enemy(BaseModel):
    """
    Represents an enemy. Enemies have no progression; their stat block is
    fixed at spawn.
    """

    id: str = Field(
        default_factory=_new_id,
        description="Unique identifier of the enemy.",
    )
    name: str = Field(
        description="The name of the enemy.",
    )
    level: int = Field(
        default=1,
        ge=1,
        le=MAX_LEVEL,
        description="Level of the enemy, used for EXP rewards.",
    )
    stats: Stats = Field(
        description="Stats of the enemy.",
    )
    max_hp: int = Field(default=0, ge=0)
    current_hp: int = Field(default=0, ge=0)
    resistances: ElementalResistances = Field(default_factory=create_empty_resistances)
    attacks: list[EnemyAttack] = Field(default_factory=list)
    drops: list[EnemyDrop] = Field(default_factory=list)
    exp_reward: int = Field(default=0, ge=0)
    gold_reward: int = Field(default=0, ge=0)
    race: RaceName | None = Field(
        default=None,
        description="Optional race, for humanoid enemies.",
    )
    character_class: ClassName | None = Field(
        default=None,
        description="Optional class, for humanoid enemies.",
    )
    status_effects: list[StatusEffect] = Field(default_factory=list)
    stance: Stance = Field(default=Stance.NONE)
    equipment: Equipment = Field(
        default_factory=Equipment,
        description="Armor worn by the enemy. Enemies are usually bare.",
    )

    @property
    def is_player(self) -> bool:
        return False

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def __hash__(self) -> int:
        return hash(self.id)
