"""
Progression engine: EXP curve, EXP rewards, growth composition and level-up
application.
"""

from .exp_table import (
    ExpTableEntry,
    calculate_level_from_exp,
    generate_exp_table,
    get_exp_for_level,
    get_exp_table,
    get_exp_to_next_level,
)
from .growth import calculate_stat_gains, get_effective_growth
from .leveling import (
    LevelUpResult,
    calculate_battle_exp_reward,
    calculate_enemy_exp_reward,
    can_level_up,
    format_exp_display,
    get_exp_progress_percent,
    get_exp_remaining,
    grant_battle_exp,
    grant_exp,
    process_level_up,
)

__all__ = [
    # Import from exp_table.py
    "ExpTableEntry",
    "calculate_level_from_exp",
    "generate_exp_table",
    "get_exp_for_level",
    "get_exp_table",
    "get_exp_to_next_level",
    # Import from growth.py
    "calculate_stat_gains",
    "get_effective_growth",
    # Import from leveling.py
    "LevelUpResult",
    "calculate_battle_exp_reward",
    "calculate_enemy_exp_reward",
    "can_level_up",
    "format_exp_display",
    "get_exp_progress_percent",
    "get_exp_remaining",
    "grant_battle_exp",
    "grant_exp",
    "process_level_up",
]
