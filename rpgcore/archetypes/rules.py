"""
Capability predicates derived from the archetype tables: class eligibility,
ability potency, gear slot unlocks, spell slots and equipment restrictions.
"""

from rpgcore.core.constants import (
    CYBORG_BASE_GEAR_SLOTS,
    CYBORG_SLOT_UNLOCK_INTERVAL,
    CYBORG_SLOT_UNLOCK_ORDER,
    SLOT_UNLOCK_INTERVAL,
    ArmorSlot,
    ClassAbility,
    ClassName,
    ClassRestriction,
    RaceName,
    RaceTrait,
    WeaponType,
)

from .capabilities import CapabilitySet
from .registry import get_class, get_race

# =============================================================================
# PREDICATES
# =============================================================================


def is_class_allowed_for_race(race: RaceName | str, class_name: ClassName | str) -> bool:
    return get_race(race).allows_class(get_class(class_name).name)


def get_allowed_classes_for_race(race: RaceName | str) -> list[ClassName]:
    return list(get_race(race).allowed_classes)


def race_has_trait(race: RaceName | str | None, trait: RaceTrait) -> bool:
    """Checks a race trait. A missing race has no traits."""
    if race is None:
        return False
    return get_race(race).has_trait(trait)


def get_capabilities(class_name: ClassName | str | None) -> CapabilitySet:
    """Returns the capability set of a class. A missing class has none."""
    if class_name is None:
        return CapabilitySet()
    return get_class(class_name).capabilities


def class_has_ability(class_name: ClassName | str | None, ability: ClassAbility) -> bool:
    return get_capabilities(class_name).has(ability)


def class_has_restriction(
    class_name: ClassName | str | None, restriction: ClassRestriction
) -> bool:
    if class_name is None:
        return False
    return get_class(class_name).has_restriction(restriction)


def get_ability_potency(class_name: ClassName | str) -> float:
    """
    Returns the potency at which a class applies its abilities.

    Args:
        class_name (ClassName | str): The class to query.

    Returns:
        float: 0.75 for the inherit-all class, 1.0 for every other class.

    """
    return get_class(class_name).potency


# =============================================================================
# GEAR SLOTS
# =============================================================================


def get_cyborg_gear_slots(level: int) -> list[ArmorSlot]:
    """
    Returns the armor slots a gear-dependent character can use at a level.

    Starts with head and body, then unlocks arms, legs, torso and back at
    levels 10, 20, 30 and 40.
    """
    count = CYBORG_BASE_GEAR_SLOTS + max(0, level) // CYBORG_SLOT_UNLOCK_INTERVAL
    count = min(count, len(CYBORG_SLOT_UNLOCK_ORDER))
    return list(CYBORG_SLOT_UNLOCK_ORDER[:count])


def can_cyborg_equip_slot(level: int, slot: ArmorSlot) -> bool:
    return slot in get_cyborg_gear_slots(level)


def get_next_cyborg_slot_unlock_level(current_level: int) -> int | None:
    """Returns the level that unlocks the next gear slot, or None once all are open."""
    count = len(get_cyborg_gear_slots(current_level))
    if count >= len(CYBORG_SLOT_UNLOCK_ORDER):
        return None
    return (count - CYBORG_BASE_GEAR_SLOTS + 1) * CYBORG_SLOT_UNLOCK_INTERVAL


# =============================================================================
# SPELL, TOME AND MARTIAL ART SLOTS
# =============================================================================


def calculate_spell_slots(
    class_name: ClassName | str,
    level: int,
    race: RaceName | str | None = None,
) -> int:
    """
    Calculate spell slots for a class at a given level.

    Every class has one slot. Slot-granting classes add one more at the
    start and another every 10 levels, scaled by their potency and floored.
    The extra-slot race trait adds one on top.

    Args:
        class_name (ClassName | str): The character class.
        level (int): The character level.
        race (RaceName | str | None): Optional race, for the extra-slot trait.

    Returns:
        int: The number of spell slots.

    """
    capabilities = get_capabilities(class_name)
    bonus = 1 + level // SLOT_UNLOCK_INTERVAL
    slots = 1 + int(bonus * capabilities.potency_of(ClassAbility.EXTRA_SLOTS))
    if race_has_trait(race, RaceTrait.EXTRA_SPELL_SLOT):
        slots += 1
    return slots


def calculate_tome_slots(
    class_name: ClassName | str,
    level: int,
    race: RaceName | str | None = None,
) -> int:
    """Tome slots follow the spell slot rules."""
    return calculate_spell_slots(class_name, level, race)


def get_tome_uses_multiplier(class_name: ClassName | str) -> float:
    return get_capabilities(class_name).scale_multiplier(ClassAbility.DOUBLE_TOME_USES, 2)


def get_martial_arts_uses_multiplier(class_name: ClassName | str) -> float:
    return get_capabilities(class_name).scale_multiplier(
        ClassAbility.MARTIAL_DOUBLE_USES, 2
    )


# =============================================================================
# EQUIPMENT AND FEATURE ELIGIBILITY
# =============================================================================


def can_use_weapon(
    race: RaceName | str | None,
    class_name: ClassName | str | None,
    weapon_type: WeaponType,
) -> bool:
    """Checks whether a race/class pair may wield a weapon type."""
    if not weapon_type.is_magic:
        return True
    if race_has_trait(race, RaceTrait.NO_STAVES_WANDS):
        return False
    return not class_has_restriction(class_name, ClassRestriction.NO_MAGIC_WEAPONS)


def can_use_martial_arts(
    race: RaceName | str | None, class_name: ClassName | str | None
) -> bool:
    if race_has_trait(race, RaceTrait.NO_MARTIAL_ARTS):
        return False
    return not class_has_restriction(class_name, ClassRestriction.NO_MARTIAL_ARTS)


def can_use_tomes(race: RaceName | str | None) -> bool:
    return not race_has_trait(race, RaceTrait.NO_TOMES)


def can_dual_wield(race: RaceName | str | None) -> bool:
    return race_has_trait(race, RaceTrait.DUAL_WIELD)
