"""
Combat: damage and healing formulas, and per-attack resolution.
"""

from .formulas import (
    calculate_attack_damage,
    calculate_defense_reduction,
    calculate_elemental_multiplier,
    calculate_healing,
    calculate_martial_arts_damage,
    calculate_melee_damage,
    calculate_ranged_damage,
    calculate_spell_damage,
    check_weakness_multiplier,
    get_weapon_power,
    roll_damage_variance,
    roll_power,
    roll_spell_variance,
    split_damage_for_multi_target,
)
from .resolution import (
    apply_damage,
    apply_healing,
    are_enemies_defeated,
    calculate_counter_damage,
    calculate_crit_chance,
    calculate_crit_multiplier,
    calculate_dodge_chance,
    calculate_reflect_damage,
    calculate_revive_hp,
    calculate_thorns_damage,
    calculate_turn_order,
    can_cover,
    can_defender_cover,
    is_alive,
    is_party_defeated,
    is_status_immune,
    perform_attack,
    resolve_attack,
    resolve_heal,
    resolve_revive,
    roll_brace_block,
    roll_critical,
    roll_cyborg_consumable_save,
    roll_dodge,
    roll_fae_double_attack,
    roll_martial_counter,
    roll_ranged_negate,
    roll_spell_reflect,
    roll_thorns,
)
from .results import AttackResult, BattleContext, HealResult, TurnOrderEntry

__all__ = [
    # Import from formulas.py
    "calculate_attack_damage",
    "calculate_defense_reduction",
    "calculate_elemental_multiplier",
    "calculate_healing",
    "calculate_martial_arts_damage",
    "calculate_melee_damage",
    "calculate_ranged_damage",
    "calculate_spell_damage",
    "check_weakness_multiplier",
    "get_weapon_power",
    "roll_damage_variance",
    "roll_power",
    "roll_spell_variance",
    "split_damage_for_multi_target",
    # Import from resolution.py
    "apply_damage",
    "apply_healing",
    "are_enemies_defeated",
    "calculate_counter_damage",
    "calculate_crit_chance",
    "calculate_crit_multiplier",
    "calculate_dodge_chance",
    "calculate_reflect_damage",
    "calculate_revive_hp",
    "calculate_thorns_damage",
    "calculate_turn_order",
    "can_cover",
    "can_defender_cover",
    "is_alive",
    "is_party_defeated",
    "is_status_immune",
    "perform_attack",
    "resolve_attack",
    "resolve_heal",
    "resolve_revive",
    "roll_brace_block",
    "roll_critical",
    "roll_cyborg_consumable_save",
    "roll_dodge",
    "roll_fae_double_attack",
    "roll_martial_counter",
    "roll_ranged_negate",
    "roll_spell_reflect",
    "roll_thorns",
    # Import from results.py
    "AttackResult",
    "BattleContext",
    "HealResult",
    "TurnOrderEntry",
]
