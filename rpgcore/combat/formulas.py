"""
Damage and healing formulas.

Every formula floors its result and enforces a minimum of 1 unless stated
otherwise. Variance is rolled when not supplied; pass `variance` to make a
formula deterministic.

Class bonuses accept a `potency`: a bonus multiplier m applied at potency p
becomes 1 + (m - 1) * p.
"""

import math
import random

from catchery import log_error

from rpgcore.archetypes.rules import get_capabilities, race_has_trait
from rpgcore.core.constants import (
    DAMAGE_VARIANCE_MAX,
    DAMAGE_VARIANCE_MIN,
    DEFENDER_HEAL_RECEIVED_MULTIPLIER,
    ESPER_SPELL_DAMAGE_MULTIPLIER,
    FAE_WEAPON_DAMAGE_REDUCTION,
    HEALER_HEAL_MULTIPLIER,
    MAGE_FOCUS_MULTIPLIER,
    MAGE_SPELL_DAMAGE_MULTIPLIER,
    MAX_DEFENSE_REDUCTION,
    RACE_WEAKNESS_MULTIPLIER,
    SPELL_VARIANCE_MAX,
    SPELL_VARIANCE_MIN,
    WARRIOR_UNARMED_MULTIPLIER,
    WEAPON_STAT_DIVISOR,
    ClassAbility,
    DamageType,
    RaceName,
    RaceTrait,
    SpellKind,
    WeaknessType,
)
from rpgcore.core.errors import InvalidActionError
from rpgcore.core.stat_block import ElementalResistances, Stats
from rpgcore.core.utils import random_range
from rpgcore.actions.martial_art import MartialArt
from rpgcore.archetypes.registry import get_race
from rpgcore.items.equipment import PowerRange, Weapon

from .results import BattleContext


def _scaled(multiplier: float, potency: float) -> float:
    return 1.0 + (multiplier - 1.0) * potency


# =============================================================================
# VARIANCE
# =============================================================================


def roll_damage_variance(rng: random.Random | None = None) -> float:
    """Variance multiplier for melee, ranged and martial damage, in [0.8, 1.2)."""
    return random_range(DAMAGE_VARIANCE_MIN, DAMAGE_VARIANCE_MAX, rng)


def roll_spell_variance(rng: random.Random | None = None) -> float:
    """Variance multiplier for spell damage, in [0.9, 1.1)."""
    return random_range(SPELL_VARIANCE_MIN, SPELL_VARIANCE_MAX, rng)


# =============================================================================
# REDUCTIONS AND WEAKNESSES
# =============================================================================


def calculate_defense_reduction(target_def: int) -> float:
    """
    Defense multiplier: 1 - DEF / 200.

    Returns:
        float: From 1 (no reduction) at DEF 0 to 0 at DEF 200.

    """
    return 1 - target_def / MAX_DEFENSE_REDUCTION


def calculate_elemental_multiplier(resistance: float) -> float:
    """Elemental multiplier: 1 - resistance, with resistance clamped to [0, 1]."""
    return 1 - min(1.0, max(0.0, resistance))


_WEAKNESS_DAMAGE_TYPES: dict[WeaknessType, tuple[DamageType, ...]] = {
    WeaknessType.MELEE: (DamageType.MELEE,),
    WeaknessType.RANGED: (DamageType.RANGED,),
    WeaknessType.MAGIC: (DamageType.SPELL,),
}


def check_weakness_multiplier(
    target_race: RaceName | str | None,
    damage_type: DamageType,
    is_consumable: bool = False,
) -> float:
    """
    Returns the race weakness multiplier for one hit.

    Each race has exactly one weakness, so at most one 1.5x applies.

    Args:
        target_race (RaceName | str | None): The target's race, if any.
        damage_type (DamageType): The incoming damage category.
        is_consumable (bool): Whether the hit comes from a consumable weapon.

    Returns:
        float: 1.5 if the hit matches the target's weakness, else 1.

    """
    if target_race is None:
        return 1.0
    weakness = get_race(target_race).weakness
    if weakness == WeaknessType.CONSUMABLE:
        matches = is_consumable
    else:
        matches = damage_type in _WEAKNESS_DAMAGE_TYPES[weakness]
    return RACE_WEAKNESS_MULTIPLIER if matches else 1.0


# =============================================================================
# MELEE AND RANGED
# =============================================================================


def _weapon_damage(
    stat: int,
    weapon_power: int,
    target_def: int,
    variance: float,
    unarmed_multiplier: float,
    is_half_weapon_damage: bool,
    is_weak: bool,
) -> int:
    base_damage = math.floor(stat / WEAPON_STAT_DIVISOR + weapon_power)
    if unarmed_multiplier != 1.0:
        base_damage = math.floor(base_damage * unarmed_multiplier)
    if is_half_weapon_damage and weapon_power > 0:
        base_damage = math.floor(base_damage * FAE_WEAPON_DAMAGE_REDUCTION)

    damage = base_damage * variance * calculate_defense_reduction(target_def)
    if is_weak:
        damage *= RACE_WEAKNESS_MULTIPLIER
    return math.floor(max(1, damage))


def calculate_melee_damage(
    attacker_str: int,
    weapon_power: int,
    target_def: int,
    *,
    variance: float | None = None,
    is_unarmed_bonus: bool = False,
    is_half_weapon_damage: bool = False,
    is_weak: bool = False,
    potency: float = 1.0,
    rng: random.Random | None = None,
) -> int:
    """
    Calculate melee damage.

    floor(STR / 2 + power), optionally x1.5 for the unarmed bonus and x0.5
    for half weapon damage (only with a real weapon), floored again; then
    x variance x defense reduction, optionally x1.5 for a race weakness.

    Args:
        attacker_str (int): The attacker's STR.
        weapon_power (int): The weapon's power, 0 when unarmed.
        target_def (int): The target's DEF.
        variance (float | None): Fixed variance; rolled in [0.8, 1.2) if None.
        is_unarmed_bonus (bool): Attacker gets the unarmed bonus.
        is_half_weapon_damage (bool): Attacker deals half weapon damage.
        is_weak (bool): The hit matches the target's weakness.
        potency (float): Potency of the attacker's class bonuses.
        rng (random.Random | None): Optional injected generator.

    Returns:
        int: The damage, at least 1.

    """
    if variance is None:
        variance = roll_damage_variance(rng)
    unarmed = _scaled(WARRIOR_UNARMED_MULTIPLIER, potency) if is_unarmed_bonus else 1.0
    return _weapon_damage(
        attacker_str,
        weapon_power,
        target_def,
        variance,
        unarmed,
        is_half_weapon_damage,
        is_weak,
    )


def calculate_ranged_damage(
    attacker_agi: int,
    weapon_power: int,
    target_def: int,
    *,
    variance: float | None = None,
    is_half_weapon_damage: bool = False,
    is_weak: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Ranged damage: the melee formula scaled off AGI, without the unarmed bonus."""
    if variance is None:
        variance = roll_damage_variance(rng)
    return _weapon_damage(
        attacker_agi,
        weapon_power,
        target_def,
        variance,
        1.0,
        is_half_weapon_damage,
        is_weak,
    )


# =============================================================================
# SPELLS AND HEALING
# =============================================================================


def calculate_spell_damage(
    attacker_mag: int,
    spell_power: int,
    target_resistance: float,
    *,
    variance: float | None = None,
    is_mage: bool = False,
    is_esper: bool = False,
    is_focused: bool = False,
    is_weak: bool = False,
    potency: float = 1.0,
    rng: random.Random | None = None,
) -> int:
    """
    Calculate spell or tome damage.

    (MAG + power) x variance, x2 for the spell-power class, x2 for the
    spell-damage race, x2.5 when focused, x elemental multiplier, x1.5 for a
    magic weakness. Only the final result is floored.

    Args:
        attacker_mag (int): The caster's MAG.
        spell_power (int): The spell's power.
        target_resistance (float): Target resistance to the spell's element.
        variance (float | None): Fixed variance; rolled in [0.9, 1.1) if None.
        is_mage (bool): Caster's class has the spell-power bonus.
        is_esper (bool): Caster's race doubles spell damage.
        is_focused (bool): Caster is in the focus stance.
        is_weak (bool): Target is weak to magic.
        potency (float): Potency of the caster's class bonuses.
        rng (random.Random | None): Optional injected generator.

    Returns:
        int: The damage, at least 1.

    """
    if variance is None:
        variance = roll_spell_variance(rng)

    damage = (attacker_mag + spell_power) * variance
    if is_mage:
        damage *= _scaled(MAGE_SPELL_DAMAGE_MULTIPLIER, potency)
    if is_esper:
        damage *= ESPER_SPELL_DAMAGE_MULTIPLIER
    if is_focused:
        damage *= _scaled(MAGE_FOCUS_MULTIPLIER, potency)
    damage *= calculate_elemental_multiplier(target_resistance)
    if is_weak:
        damage *= RACE_WEAKNESS_MULTIPLIER
    return math.floor(max(1, damage))


def calculate_healing(
    healer_mag: int,
    spell_power: int,
    *,
    is_healer: bool = False,
    target_is_defender: bool = False,
    healer_potency: float = 1.0,
    target_potency: float = 1.0,
) -> int:
    """
    Calculate healing: (MAG + power), x2 for the heal-bonus class, x2 for a
    target that receives double healing. No variance.
    """
    healing = float(healer_mag + spell_power)
    if is_healer:
        healing *= _scaled(HEALER_HEAL_MULTIPLIER, healer_potency)
    if target_is_defender:
        healing *= _scaled(DEFENDER_HEAL_RECEIVED_MULTIPLIER, target_potency)
    return math.floor(max(1, healing))


# =============================================================================
# MARTIAL ARTS
# =============================================================================


def calculate_martial_arts_damage(
    martial_art: MartialArt,
    attacker_stats: Stats,
    target_def: int,
    target_resistances: ElementalResistances | None = None,
    *,
    variance: float | None = None,
    is_unarmed_bonus: bool = False,
    target_race: RaceName | str | None = None,
    potency: float = 1.0,
    rng: random.Random | None = None,
) -> int:
    """
    Calculate martial arts damage.

    (base damage + scaling stat), floored after the optional unarmed bonus,
    then x variance x defense reduction, x elemental multiplier if the art
    has an element, x the race weakness matching the art's reach.

    Returns:
        int: The damage, at least 1.

    """
    base_damage = martial_art.base_damage + attacker_stats.get(martial_art.scaling_stat)
    if is_unarmed_bonus:
        base_damage = math.floor(base_damage * _scaled(WARRIOR_UNARMED_MULTIPLIER, potency))

    if variance is None:
        variance = roll_damage_variance(rng)
    damage = base_damage * variance * calculate_defense_reduction(target_def)

    if martial_art.element is not None:
        resistance = (target_resistances or {}).get(martial_art.element, 0.0)
        damage *= calculate_elemental_multiplier(resistance)

    damage *= check_weakness_multiplier(target_race, martial_art.damage_type)
    return math.floor(max(1, damage))


def split_damage_for_multi_target(total_damage: int, target_count: int) -> int:
    """Split damage equally among targets. No targets means no damage."""
    if target_count <= 0:
        return 0
    return total_damage // target_count


# =============================================================================
# BATTLE CONTEXT
# =============================================================================


def roll_power(power: int, power_range: PowerRange | None, rng: random.Random | None = None) -> int:
    """Rolls a power value: floor of a uniform draw over the range, if any."""
    if power_range is None:
        return power
    return math.floor(random_range(power_range.min, power_range.max, rng))


def get_weapon_power(weapon: Weapon, rng: random.Random | None = None) -> int:
    """Get weapon power, rolling it for variable damage weapons."""
    return roll_power(weapon.power, weapon.power_range, rng)


def calculate_attack_damage(context: BattleContext, rng: random.Random | None = None) -> int:
    """
    Calculate the damage of the action in a battle context, deriving every
    class, race and weakness flag from the combatants' archetypes.

    Args:
        context (BattleContext): The attacker, target and action.
        rng (random.Random | None): Optional injected generator.

    Returns:
        int: The pre-resolution damage.

    Raises:
        InvalidActionError: If the context carries a spell that deals no damage.

    """
    attacker, target = context.attacker, context.target
    capabilities = get_capabilities(attacker.character_class)
    potency = capabilities.potency
    attacker_stats, target_stats = attacker.stats, target.stats
    is_half_weapon_damage = race_has_trait(attacker.race, RaceTrait.HALF_WEAPON_DAMAGE)

    if context.spell is not None:
        spell = context.spell
        if spell.kind != SpellKind.DAMAGE:
            log_error(
                "Only damage spells can be resolved as attacks.",
                {"spell": spell.name, "kind": spell.kind.value, "attacker": attacker.name},
            )
            raise InvalidActionError(f"Spell '{spell.name}' does not deal damage.")
        resistance = target.resistances.get(spell.element, 0.0) if spell.element else 0.0
        return calculate_spell_damage(
            attacker_stats.MAG,
            spell.power,
            resistance,
            is_mage=capabilities.has(ClassAbility.SPELL_POWER),
            is_esper=race_has_trait(attacker.race, RaceTrait.SPELL_DAMAGE_DOUBLE),
            is_focused=bool(context.is_focused),
            is_weak=check_weakness_multiplier(target.race, DamageType.SPELL) > 1,
            potency=potency,
            rng=rng,
        )

    if context.martial_art is not None:
        return calculate_martial_arts_damage(
            context.martial_art,
            attacker_stats,
            target_stats.DEF,
            target.resistances,
            is_unarmed_bonus=capabilities.has(ClassAbility.UNARMED_BONUS),
            target_race=target.race,
            potency=potency,
            rng=rng,
        )

    if context.enemy_attack is not None:
        attack = context.enemy_attack
        power = roll_power(attack.power, attack.power_range, rng)
        if attack.damage_type == DamageType.SPELL:
            resistance = target.resistances.get(attack.element, 0.0) if attack.element else 0.0
            return calculate_spell_damage(
                attacker_stats.MAG,
                power,
                resistance,
                is_weak=check_weakness_multiplier(target.race, DamageType.SPELL) > 1,
                rng=rng,
            )
        if attack.damage_type == DamageType.RANGED:
            return calculate_ranged_damage(
                attacker_stats.AGI,
                power,
                target_stats.DEF,
                is_weak=check_weakness_multiplier(target.race, DamageType.RANGED) > 1,
                rng=rng,
            )
        return calculate_melee_damage(
            attacker_stats.STR,
            power,
            target_stats.DEF,
            is_weak=check_weakness_multiplier(target.race, DamageType.MELEE) > 1,
            rng=rng,
        )

    if context.weapon is not None:
        weapon = context.weapon
        weapon_power = get_weapon_power(weapon, rng)
        is_weak = (
            check_weakness_multiplier(target.race, weapon.damage_type, weapon.is_consumable) > 1
        )
        if weapon.damage_type == DamageType.RANGED:
            return calculate_ranged_damage(
                attacker_stats.AGI,
                weapon_power,
                target_stats.DEF,
                is_half_weapon_damage=is_half_weapon_damage,
                is_weak=is_weak,
                rng=rng,
            )
        return calculate_melee_damage(
            attacker_stats.STR,
            weapon_power,
            target_stats.DEF,
            is_unarmed_bonus=weapon.is_unarmed and capabilities.has(ClassAbility.UNARMED_BONUS),
            is_half_weapon_damage=is_half_weapon_damage,
            is_weak=is_weak,
            potency=potency,
            rng=rng,
        )

    # Bare-handed strike.
    return calculate_melee_damage(
        attacker_stats.STR,
        0,
        target_stats.DEF,
        is_unarmed_bonus=capabilities.has(ClassAbility.UNARMED_BONUS),
        is_weak=check_weakness_multiplier(target.race, DamageType.MELEE) > 1,
        potency=potency,
        rng=rng,
    )
