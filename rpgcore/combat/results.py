"""
Result records produced by the combat engine, and the battle context an
attack is computed from.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from rpgcore.actions.martial_art import MartialArt
from rpgcore.actions.spell import Spell
from rpgcore.archetypes.rules import get_capabilities
from rpgcore.character.character import EnemyAttack
from rpgcore.character.combatant import Combatant
from rpgcore.core.constants import ClassAbility, DamageType, Stance
from rpgcore.items.equipment import Weapon


class AttackResult(BaseModel):
    """The resolved outcome of one attack against one target."""

    attacker: str = Field(description="Name of the attacker.")
    target: str = Field(description="Name of the target.")
    damage_type: DamageType = Field(description="Damage category of the attack.")
    base_damage: int = Field(ge=0, description="Damage from the formula engine, before crits.")
    critical_multiplier: float = Field(default=1.0)
    is_critical: bool = Field(default=False)
    final_damage: int = Field(ge=0, description="Damage the target takes.")
    is_dodged: bool = Field(default=False)
    is_negated: bool = Field(default=False)
    is_reflected: bool = Field(default=False)
    reflect_damage: int = Field(
        default=0,
        ge=0,
        description="Damage to apply back to the attacker after a reflect.",
    )
    thorns_damage: int = Field(
        default=0,
        ge=0,
        description="Damage to apply back to the attacker from thorns.",
    )
    counter_damage: int = Field(
        default=0,
        ge=0,
        description="Damage to apply back to the attacker from a counter.",
    )

    @property
    def is_hit(self) -> bool:
        return not (self.is_dodged or self.is_negated or self.is_reflected)

    @property
    def retaliation_damage(self) -> int:
        """Total damage owed back to the attacker."""
        return self.reflect_damage + self.thorns_damage + self.counter_damage


class HealResult(BaseModel):
    """The resolved outcome of one heal."""

    healer: str
    target: str
    base_healing: int = Field(ge=0, description="MAG plus spell power.")
    class_multiplier: float = Field(default=1.0, description="Healer-side multiplier.")
    target_multiplier: float = Field(default=1.0, description="Target-side multiplier.")
    final_healing: int = Field(ge=0)


@dataclass(frozen=True)
class TurnOrderEntry:
    """A combatant's place in the turn order."""

    combatant: Combatant
    effective_agi: int
    is_player: bool


@dataclass
class BattleContext:
    """
    Everything the formula engine needs to compute one attack.

    At most one of `weapon`, `spell`, `martial_art` and `enemy_attack` is
    set; with none set the attack is a bare-handed melee strike. Stance
    flags default to the attacker's and target's current stances. Focus only
    takes hold for classes with the focus ability.
    """

    attacker: Combatant
    target: Combatant
    weapon: Weapon | None = None
    spell: Spell | None = None
    martial_art: MartialArt | None = None
    enemy_attack: EnemyAttack | None = None
    is_concentrated: bool | None = None
    is_focused: bool | None = None
    is_bracing: bool | None = None

    def __post_init__(self) -> None:
        actions = [self.weapon, self.spell, self.martial_art, self.enemy_attack]
        assert sum(action is not None for action in actions) <= 1, (
            "A battle context describes a single action."
        )
        if self.is_concentrated is None:
            self.is_concentrated = self.attacker.stance == Stance.CONCENTRATE
        if self.is_focused is None:
            self.is_focused = self.attacker.stance == Stance.FOCUS
        if self.is_focused:
            self.is_focused = get_capabilities(self.attacker.character_class).has(
                ClassAbility.FOCUS
            )
        if self.is_bracing is None:
            self.is_bracing = self.target.stance == Stance.BRACE

    @property
    def is_multi_target(self) -> bool:
        if self.spell is not None:
            return self.spell.is_multi_target or bool(self.is_focused)
        if self.martial_art is not None:
            return self.martial_art.is_multi_target
        if self.enemy_attack is not None:
            return self.enemy_attack.targeting.is_multi_target
        return False
