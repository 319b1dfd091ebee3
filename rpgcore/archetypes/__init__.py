"""
Archetype registry: races, classes and creature subtypes.

This package loads the declarative archetype tables and answers every
capability question the stat, damage and progression engines ask.
"""

from .capabilities import CapabilitySet, InheritedCapabilitySet
from .character_class import CharacterClass
from .character_race import CharacterRace
from .creature_subtype import CreatureSubtype, LevelRange
from .registry import (
    ArchetypeRegistry,
    get_available_subtypes,
    get_class,
    get_class_ability_descriptions,
    get_class_base_stat_bonus,
    get_class_growth,
    get_class_restriction_descriptions,
    get_early_subtypes,
    get_race,
    get_race_base_stats,
    get_race_growth,
    get_race_trait_descriptions,
    get_race_weakness_description,
    get_registry,
    get_subtype,
    get_subtype_base_hp,
    get_subtype_base_stats,
    get_subtype_description,
    get_subtype_growth,
    get_subtype_martial_art_descriptions,
    get_subtype_martial_arts,
)
from .rules import (
    calculate_spell_slots,
    calculate_tome_slots,
    can_cyborg_equip_slot,
    can_dual_wield,
    can_use_martial_arts,
    can_use_tomes,
    can_use_weapon,
    class_has_ability,
    class_has_restriction,
    get_ability_potency,
    get_allowed_classes_for_race,
    get_capabilities,
    get_cyborg_gear_slots,
    get_martial_arts_uses_multiplier,
    get_next_cyborg_slot_unlock_level,
    get_tome_uses_multiplier,
    is_class_allowed_for_race,
    race_has_trait,
)

__all__ = [
    # Import from capabilities.py
    "CapabilitySet",
    "InheritedCapabilitySet",
    # Import from character_class.py
    "CharacterClass",
    # Import from character_race.py
    "CharacterRace",
    # Import from creature_subtype.py
    "CreatureSubtype",
    "LevelRange",
    # Import from registry.py
    "ArchetypeRegistry",
    "get_available_subtypes",
    "get_class",
    "get_class_ability_descriptions",
    "get_class_base_stat_bonus",
    "get_class_growth",
    "get_class_restriction_descriptions",
    "get_early_subtypes",
    "get_race",
    "get_race_base_stats",
    "get_race_growth",
    "get_race_trait_descriptions",
    "get_race_weakness_description",
    "get_registry",
    "get_subtype",
    "get_subtype_base_hp",
    "get_subtype_base_stats",
    "get_subtype_description",
    "get_subtype_growth",
    "get_subtype_martial_art_descriptions",
    "get_subtype_martial_arts",
    # Import from rules.py
    "calculate_spell_slots",
    "calculate_tome_slots",
    "can_cyborg_equip_slot",
    "can_dual_wield",
    "can_use_martial_arts",
    "can_use_tomes",
    "can_use_weapon",
    "class_has_ability",
    "class_has_restriction",
    "get_ability_potency",
    "get_allowed_classes_for_race",
    "get_capabilities",
    "get_cyborg_gear_slots",
    "get_martial_arts_uses_multiplier",
    "get_next_cyborg_slot_unlock_level",
    "get_tome_uses_multiplier",
    "is_class_allowed_for_race",
    "race_has_trait",
]
