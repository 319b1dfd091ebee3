"""
Tests for capability sets and the archetype rule predicates.
"""

import pytest

from rpgcore.archetypes.capabilities import CapabilitySet, InheritedCapabilitySet
from rpgcore.archetypes.rules import (
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
from rpgcore.core.constants import (
    ArmorSlot,
    ClassAbility,
    ClassName,
    ClassRestriction,
    RaceName,
    RaceTrait,
    WeaponType,
)


# ---- Capability sets ----


def test_explicit_capability_set():
    capabilities = CapabilitySet(abilities=frozenset({ClassAbility.THORNS}))
    assert capabilities.has(ClassAbility.THORNS)
    assert not capabilities.has(ClassAbility.REFLECT)
    assert capabilities.potency_of(ClassAbility.THORNS) == 1.0
    assert capabilities.potency_of(ClassAbility.REFLECT) == 0.0
    assert capabilities.scale_multiplier(ClassAbility.REFLECT, 2) == 1.0


def test_inherited_capability_set_answers_yes_at_reduced_potency():
    capabilities = InheritedCapabilitySet()
    assert capabilities.has(ClassAbility.COUNTER_MARTIAL)
    assert capabilities.potency_of(ClassAbility.AVOID) == 0.75
    assert capabilities.scale_chance(ClassAbility.HIGH_CRIT, 0.5) == pytest.approx(0.375)
    assert capabilities.scale_multiplier(ClassAbility.SPELL_POWER, 2) == pytest.approx(1.75)


def test_missing_class_has_no_capabilities():
    assert get_capabilities(None).abilities == frozenset()
    assert not class_has_ability(None, ClassAbility.BRACE)
    assert not race_has_trait(None, RaceTrait.DUAL_WIELD)


# ---- Predicates ----


def test_class_eligibility():
    assert is_class_allowed_for_race(RaceName.HUMAN, ClassName.FREELANCER)
    assert not is_class_allowed_for_race(RaceName.ESPER, ClassName.WARRIOR)
    assert not is_class_allowed_for_race(RaceName.CYBORG, ClassName.FREELANCER)
    assert ClassName.FREELANCER not in get_allowed_classes_for_race(RaceName.FAE)


def test_ability_potency():
    assert get_ability_potency(ClassName.FREELANCER) == 0.75
    assert get_ability_potency(ClassName.WARRIOR) == 1.0


def test_inherit_all_class_has_every_ability_but_no_restrictions():
    """Test that the inherit-all class answers yes to abilities only."""
    assert class_has_ability(ClassName.FREELANCER, ClassAbility.THORNS)
    assert class_has_ability(ClassName.FREELANCER, ClassAbility.HIGH_CRIT)
    assert not class_has_ability(ClassName.WARRIOR, ClassAbility.THORNS)
    assert not class_has_restriction(ClassName.FREELANCER, ClassRestriction.REDUCED_AGI)
    assert class_has_restriction(ClassName.DEFENDER, ClassRestriction.REDUCED_AGI)


# ---- Gear slots ----


@pytest.mark.parametrize(
    "level, expected",
    [
        (1, [ArmorSlot.HEAD, ArmorSlot.BODY]),
        (9, [ArmorSlot.HEAD, ArmorSlot.BODY]),
        (10, [ArmorSlot.HEAD, ArmorSlot.BODY, ArmorSlot.ARMS]),
        (20, [ArmorSlot.HEAD, ArmorSlot.BODY, ArmorSlot.ARMS, ArmorSlot.LEGS]),
        (
            30,
            [ArmorSlot.HEAD, ArmorSlot.BODY, ArmorSlot.ARMS, ArmorSlot.LEGS, ArmorSlot.TORSO],
        ),
        (40, list(ArmorSlot)),
    ],
)
def test_cyborg_gear_slots(level, expected):
    assert get_cyborg_gear_slots(level) == expected


def test_cyborg_gear_slots_never_exceed_six():
    for level in range(40, 51):
        assert len(get_cyborg_gear_slots(level)) == 6


def test_cyborg_slot_helpers():
    assert can_cyborg_equip_slot(1, ArmorSlot.HEAD)
    assert not can_cyborg_equip_slot(9, ArmorSlot.ARMS)
    assert can_cyborg_equip_slot(10, ArmorSlot.ARMS)
    assert get_next_cyborg_slot_unlock_level(1) == 10
    assert get_next_cyborg_slot_unlock_level(10) == 20
    assert get_next_cyborg_slot_unlock_level(39) == 40
    assert get_next_cyborg_slot_unlock_level(40) is None


# ---- Slots and uses ----


def test_spell_slots():
    assert calculate_spell_slots(ClassName.WARRIOR, 1) == 1
    assert calculate_spell_slots(ClassName.MAGE, 1) == 2
    assert calculate_spell_slots(ClassName.MAGE, 9) == 2
    assert calculate_spell_slots(ClassName.MAGE, 10) == 3
    assert calculate_spell_slots(ClassName.MAGE, 1, RaceName.ESPER) == 3
    assert calculate_tome_slots(ClassName.HEALER, 20) == 4


def test_spell_slots_scale_with_potency():
    """Test that the inherit-all class floors its reduced slot bonus."""
    assert calculate_spell_slots(ClassName.FREELANCER, 1) == 1
    assert calculate_spell_slots(ClassName.FREELANCER, 10) == 2
    assert calculate_spell_slots(ClassName.FREELANCER, 30) == 4


def test_uses_multipliers():
    assert get_tome_uses_multiplier(ClassName.MAGE) == 2
    assert get_tome_uses_multiplier(ClassName.WARRIOR) == 1
    assert get_tome_uses_multiplier(ClassName.FREELANCER) == pytest.approx(1.75)
    assert get_martial_arts_uses_multiplier(ClassName.HEALER) == 2
    assert get_martial_arts_uses_multiplier(ClassName.DEFENDER) == 1


# ---- Eligibility ----


def test_weapon_eligibility():
    assert can_use_weapon(RaceName.HUMAN, ClassName.WARRIOR, WeaponType.SWORD)
    assert not can_use_weapon(RaceName.HUMAN, ClassName.WARRIOR, WeaponType.STAFF)
    assert not can_use_weapon(RaceName.CYBORG, ClassName.MAGE, WeaponType.WAND)
    assert can_use_weapon(RaceName.HUMAN, ClassName.MAGE, WeaponType.WAND)
    assert can_use_weapon(None, None, WeaponType.STAFF)


def test_feature_eligibility():
    assert not can_use_martial_arts(RaceName.ESPER, ClassName.MAGE)
    assert not can_use_martial_arts(RaceName.HUMAN, ClassName.MAGE)
    assert can_use_martial_arts(RaceName.FAE, ClassName.WARRIOR)
    assert not can_use_tomes(RaceName.FAE)
    assert can_use_tomes(RaceName.HUMAN)
    assert can_dual_wield(RaceName.CYBORG)
    assert not can_dual_wield(RaceName.HUMAN)
