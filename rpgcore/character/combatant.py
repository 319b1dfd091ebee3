"""
The combatant surface shared by player characters and enemies.

Combat math reads only these attributes and never branches on the concrete
record type.
"""

from typing import Protocol, runtime_checkable

from rpgcore.core.constants import ClassName, RaceName, Stance, StatusEffect
from rpgcore.core.stat_block import ElementalResistances, Stats
from rpgcore.items.equipment import Equipment


@runtime_checkable
class Combatant(Protocol):
    """Anything that can attack, be attacked, heal or be healed."""

    id: str
    name: str
    level: int
    current_hp: int
    max_hp: int
    race: RaceName | None
    character_class: ClassName | None
    resistances: ElementalResistances
    status_effects: list[StatusEffect]
    stance: Stance
    equipment: Equipment

    @property
    def stats(self) -> Stats: ...

    @property
    def is_player(self) -> bool: ...
