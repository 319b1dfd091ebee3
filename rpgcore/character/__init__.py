"""
Character system module for the rules core.

Handles the combatant records and the stat and resource model: final stat
composition, HP and MP caps, resistances, creation and transformation.
"""

from .character import Character, Enemy, EnemyAttack, EnemyDrop
from .combatant import Combatant
from .stats import (
    calculate_equipment_def,
    calculate_equipment_resistances,
    calculate_equipment_stats,
    calculate_final_resistances,
    calculate_final_stats,
    calculate_max_hp,
    calculate_max_mp,
    clamp_hp,
    clamp_mp,
    get_stat_display,
    recalculate_resources,
    refresh_character,
)
from .factory import create_character, create_enemy
from .transformation import (
    TransformResult,
    apply_transformation,
    calculate_transform_hp,
    calculate_transform_stats,
    transform_fae,
)

__all__ = [
    # Import from character.py
    "Character",
    "Enemy",
    "EnemyAttack",
    "EnemyDrop",
    # Import from combatant.py
    "Combatant",
    # Import from stats.py
    "calculate_equipment_def",
    "calculate_equipment_resistances",
    "calculate_equipment_stats",
    "calculate_final_resistances",
    "calculate_final_stats",
    "calculate_max_hp",
    "calculate_max_mp",
    "clamp_hp",
    "clamp_mp",
    "get_stat_display",
    "recalculate_resources",
    "refresh_character",
    # Import from factory.py
    "create_character",
    "create_enemy",
    # Import from transformation.py
    "TransformResult",
    "apply_transformation",
    "calculate_transform_hp",
    "calculate_transform_stats",
    "transform_fae",
]
