"""
Combat resolution for the rules core.

Critical hits, dodge, turn order, defensive reactions and the per-attack
resolution pipeline. Every probability check draws one independent uniform
sample from the injected generator, or from the `random` module when none is
given.
"""

import math
import random
from collections.abc import Iterable, Sequence

from catchery import log_debug, log_error

from rpgcore.actions.spell import Spell
from rpgcore.archetypes.rules import get_capabilities, race_has_trait
from rpgcore.character.combatant import Combatant
from rpgcore.core.constants import (
    BASE_CRIT_CHANCE,
    CRIT_DAMAGE_MULTIPLIER,
    CYBORG_CONSUMABLE_CRIT_MULTIPLIER,
    CYBORG_CONSUMABLE_SAVE_CHANCE,
    DEFENDER_BRACE_MAX,
    DEFENDER_BRACE_MIN,
    DEFENDER_COUNTER_CHANCE,
    DEFENDER_COUNTER_DAMAGE,
    DEFENDER_RANGED_NEGATE_CHANCE,
    DEFENDER_REFLECT_CHANCE,
    DEFENDER_REFLECT_DAMAGE,
    DEFENDER_THORNS_CHANCE,
    DEFENDER_THORNS_DAMAGE,
    DODGE_DIVISOR,
    ESPER_CRIT_DAMAGE_BONUS,
    FAE_DOUBLE_ATTACK_CHANCE,
    HEALER_DODGE_DIVISOR,
    HEALER_IMMUNE_STATUSES,
    HEALER_REVIVE_HP_PERCENT,
    WARRIOR_CRIT_CHANCE,
    ClassAbility,
    ClassName,
    DamageType,
    RaceName,
    RaceTrait,
    StatusEffect,
)
from rpgcore.core.errors import InvalidActionError
from rpgcore.core.utils import random_range, roll_chance
from rpgcore.items.equipment import Weapon

from .formulas import calculate_attack_damage, calculate_healing, split_damage_for_multi_target
from .results import AttackResult, BattleContext, HealResult, TurnOrderEntry

# =============================================================================
# CRITICAL HITS
# =============================================================================


def calculate_crit_chance(
    attacker_class: ClassName | str | None,
    weapon: Weapon | None = None,
    *,
    is_concentrated: bool = False,
    is_multi_target: bool = False,
) -> float:
    """
    Calculate the critical hit chance of an attack.

    Args:
        attacker_class (ClassName | str | None): The attacker's class, if any.
        weapon (Weapon | None): The weapon used, if any.
        is_concentrated (bool): Attacker is in the guaranteed-crit stance.
        is_multi_target (bool): The attack hits more than one target.

    Returns:
        float: 1.0 for a concentrated single-target attack; the high-crit
            class rate with a weapon (scaled by potency); 5% otherwise.

    """
    if is_concentrated and not is_multi_target:
        return 1.0
    if weapon is None:
        return BASE_CRIT_CHANCE
    weapon_crit = get_capabilities(attacker_class).scale_chance(
        ClassAbility.HIGH_CRIT, WARRIOR_CRIT_CHANCE
    )
    return max(BASE_CRIT_CHANCE, weapon_crit)


def calculate_crit_multiplier(
    attacker_race: RaceName | str | None,
    *,
    is_spell_or_tome: bool = False,
    is_consumable: bool = False,
) -> float:
    """
    Calculate the critical damage multiplier.

    The additive spell bonus is applied before the multiplicative consumable
    bonus.
    """
    multiplier = float(CRIT_DAMAGE_MULTIPLIER)
    if is_spell_or_tome and race_has_trait(attacker_race, RaceTrait.SPELL_CRIT_BONUS):
        multiplier += ESPER_CRIT_DAMAGE_BONUS
    if is_consumable and race_has_trait(attacker_race, RaceTrait.CONSUMABLE_CRIT):
        multiplier *= CYBORG_CONSUMABLE_CRIT_MULTIPLIER
    return multiplier


def roll_critical(crit_chance: float, rng: random.Random | None = None) -> bool:
    return roll_chance(crit_chance, rng)


# =============================================================================
# DODGE
# =============================================================================


def calculate_dodge_chance(defender_agi: int, defender_class: ClassName | str | None) -> float:
    """
    Calculate the dodge chance of a defender.

    AGI / 200 by default; AGI / 5 for classes with Avoid, scaled by potency.
    """
    capabilities = get_capabilities(defender_class)
    if capabilities.has(ClassAbility.AVOID):
        return capabilities.scale_chance(ClassAbility.AVOID, defender_agi / HEALER_DODGE_DIVISOR)
    return defender_agi / DODGE_DIVISOR


def roll_dodge(dodge_chance: float, rng: random.Random | None = None) -> bool:
    return roll_chance(dodge_chance, rng)


# =============================================================================
# TURN ORDER
# =============================================================================


def calculate_turn_order(
    party: Iterable[Combatant],
    enemies: Iterable[Combatant],
) -> list[TurnOrderEntry]:
    """
    Sort living combatants by AGI for turn order.

    Ties go to the player side; within a side, arrival order is kept.
    Combatants at 0 HP are excluded.

    Args:
        party (Iterable[Combatant]): The player party.
        enemies (Iterable[Combatant]): The enemy group.

    Returns:
        list[TurnOrderEntry]: The acting order.

    """
    entries = [
        TurnOrderEntry(combatant=member, effective_agi=member.stats.AGI, is_player=True)
        for member in party
        if member.current_hp > 0
    ]
    entries.extend(
        TurnOrderEntry(combatant=enemy, effective_agi=enemy.stats.AGI, is_player=False)
        for enemy in enemies
        if enemy.current_hp > 0
    )
    return sorted(entries, key=lambda entry: (-entry.effective_agi, not entry.is_player))


# =============================================================================
# DEFENSIVE REACTIONS
# =============================================================================


def can_defender_cover(defender_agi: int, attacker_agi: int) -> bool:
    """Cover requires the defender to be strictly faster than the attacker."""
    return defender_agi > attacker_agi


def can_cover(defender: Combatant, attacker: Combatant) -> bool:
    """Checks whether a combatant may take a hit for an ally against this attacker."""
    if not get_capabilities(defender.character_class).has(ClassAbility.COVER):
        return False
    return can_defender_cover(defender.stats.AGI, attacker.stats.AGI)


def roll_brace_block(rng: random.Random | None = None) -> float:
    """Rolls the fraction of damage a brace blocks, in [0.25, 0.75)."""
    return random_range(DEFENDER_BRACE_MIN, DEFENDER_BRACE_MAX, rng)


def roll_thorns(potency: float = 1.0, *, rng: random.Random | None = None) -> bool:
    return roll_chance(DEFENDER_THORNS_CHANCE * potency, rng)


def roll_spell_reflect(potency: float = 1.0, *, rng: random.Random | None = None) -> bool:
    return roll_chance(DEFENDER_REFLECT_CHANCE * potency, rng)


def roll_ranged_negate(potency: float = 1.0, *, rng: random.Random | None = None) -> bool:
    return roll_chance(DEFENDER_RANGED_NEGATE_CHANCE * potency, rng)


def roll_martial_counter(potency: float = 1.0, *, rng: random.Random | None = None) -> bool:
    return roll_chance(DEFENDER_COUNTER_CHANCE * potency, rng)


def calculate_thorns_damage(received_damage: int) -> int:
    """Thorns return half of the damage actually received."""
    return math.floor(received_damage * DEFENDER_THORNS_DAMAGE)


def calculate_reflect_damage(spell_damage: int) -> int:
    return math.floor(spell_damage * DEFENDER_REFLECT_DAMAGE)


def calculate_counter_damage(attacker_damage: int) -> int:
    return math.floor(attacker_damage * DEFENDER_COUNTER_DAMAGE)


# =============================================================================
# RACE ROLLS
# =============================================================================


def roll_fae_double_attack(rng: random.Random | None = None) -> bool:
    """25% chance for a martial art to strike twice."""
    return roll_chance(FAE_DOUBLE_ATTACK_CHANCE, rng)


def roll_cyborg_consumable_save(rng: random.Random | None = None) -> bool:
    """25% chance for a consumable use not to be spent."""
    return roll_chance(CYBORG_CONSUMABLE_SAVE_CHANCE, rng)


# =============================================================================
# ATTACK RESOLUTION
# =============================================================================


def resolve_attack(
    attacker: Combatant,
    target: Combatant,
    base_damage: int,
    damage_type: DamageType,
    *,
    weapon: Weapon | None = None,
    is_concentrated: bool = False,
    is_bracing: bool = False,
    is_consumable: bool = False,
    is_spell_or_tome: bool = False,
    is_martial_art: bool = False,
    is_multi_target: bool = False,
    crit_chance: float | None = None,
    rng: random.Random | None = None,
) -> AttackResult:
    """
    Resolve one attack against one target.

    Steps run in order: dodge, ranged negate and spell reflect (each
    terminal), then the critical check, damage finalization with brace, and
    finally the independent retaliation checks (thorns and martial counter).

    Args:
        attacker (Combatant): The attacker.
        target (Combatant): The target.
        base_damage (int): Damage from the formula engine.
        damage_type (DamageType): The incoming damage category.
        weapon (Weapon | None): The weapon used, if any.
        is_concentrated (bool): Attacker is in the guaranteed-crit stance.
        is_bracing (bool): Target is bracing.
        is_consumable (bool): The attack uses a consumable weapon.
        is_spell_or_tome (bool): The attack is a spell or tome.
        is_martial_art (bool): The attack is a martial art.
        is_multi_target (bool): The attack hits several targets.
        crit_chance (float | None): Overrides the computed crit chance.
        rng (random.Random | None): Optional injected generator.

    Returns:
        AttackResult: The outcome. Retaliation damage is reported, not applied.

    """
    target_capabilities = get_capabilities(target.character_class)
    result = AttackResult(
        attacker=attacker.name,
        target=target.name,
        damage_type=damage_type,
        base_damage=base_damage,
        final_damage=base_damage,
    )

    dodge_chance = calculate_dodge_chance(target.stats.AGI, target.character_class)
    if roll_dodge(dodge_chance, rng):
        result.is_dodged = True
        result.final_damage = 0
        log_debug(
            f"{target.name} dodged {attacker.name}'s attack",
            {"attacker": attacker.name, "target": target.name, "dodge_chance": dodge_chance},
        )
        return result

    if damage_type == DamageType.RANGED and target_capabilities.has(ClassAbility.RANGED_NEGATE):
        if roll_ranged_negate(target_capabilities.potency, rng=rng):
            result.is_negated = True
            result.final_damage = 0
            log_debug(
                f"{target.name} negated {attacker.name}'s ranged attack",
                {"attacker": attacker.name, "target": target.name},
            )
            return result

    if damage_type == DamageType.SPELL and target_capabilities.has(ClassAbility.REFLECT):
        if roll_spell_reflect(target_capabilities.potency, rng=rng):
            result.is_reflected = True
            result.reflect_damage = calculate_reflect_damage(base_damage)
            result.final_damage = 0
            log_debug(
                f"{target.name} reflected {attacker.name}'s spell",
                {
                    "attacker": attacker.name,
                    "target": target.name,
                    "reflect_damage": result.reflect_damage,
                },
            )
            return result

    if crit_chance is None:
        crit_chance = calculate_crit_chance(
            attacker.character_class,
            weapon,
            is_concentrated=is_concentrated,
            is_multi_target=is_multi_target,
        )
    if roll_critical(crit_chance, rng):
        result.is_critical = True
        result.critical_multiplier = calculate_crit_multiplier(
            attacker.race,
            is_spell_or_tome=is_spell_or_tome,
            is_consumable=is_consumable,
        )

    final_damage = base_damage * result.critical_multiplier
    if is_bracing and target_capabilities.has(ClassAbility.BRACE):
        block = roll_brace_block(rng) * target_capabilities.potency
        final_damage *= 1 - block
    result.final_damage = math.floor(max(1, final_damage))

    if damage_type == DamageType.MELEE and target_capabilities.has(ClassAbility.THORNS):
        if roll_thorns(target_capabilities.potency, rng=rng):
            result.thorns_damage = calculate_thorns_damage(result.final_damage)

    # Counters use the pre-critical damage.
    if is_martial_art and target_capabilities.has(ClassAbility.COUNTER_MARTIAL):
        if roll_martial_counter(target_capabilities.potency, rng=rng):
            result.counter_damage = calculate_counter_damage(base_damage)

    return result


def perform_attack(
    context: BattleContext,
    *,
    target_count: int = 1,
    rng: random.Random | None = None,
) -> AttackResult:
    """
    Compute and resolve the action described by a battle context.

    Multi-target actions split their damage across `target_count` targets
    before resolution.

    Args:
        context (BattleContext): The attacker, target and action.
        target_count (int): Number of targets the action is spread over.
        rng (random.Random | None): Optional injected generator.

    Returns:
        AttackResult: The resolved outcome against `context.target`.

    """
    base_damage = calculate_attack_damage(context, rng)
    if context.is_multi_target:
        base_damage = split_damage_for_multi_target(base_damage, target_count)

    damage_type = DamageType.MELEE
    crit_chance = None
    is_consumable = False
    if context.spell is not None:
        damage_type = DamageType.SPELL
    elif context.martial_art is not None:
        damage_type = context.martial_art.damage_type
    elif context.enemy_attack is not None:
        damage_type = context.enemy_attack.damage_type
        crit_chance = context.enemy_attack.crit_chance
    elif context.weapon is not None:
        damage_type = context.weapon.damage_type
        is_consumable = context.weapon.is_consumable

    return resolve_attack(
        context.attacker,
        context.target,
        base_damage,
        damage_type,
        weapon=context.weapon,
        is_concentrated=bool(context.is_concentrated),
        is_bracing=bool(context.is_bracing),
        is_consumable=is_consumable,
        is_spell_or_tome=context.spell is not None,
        is_martial_art=context.martial_art is not None,
        is_multi_target=context.is_multi_target,
        crit_chance=crit_chance,
        rng=rng,
    )


# =============================================================================
# HEALING AND REVIVAL
# =============================================================================


def resolve_heal(healer: Combatant, target: Combatant, spell: Spell) -> HealResult:
    """
    Resolve a healing spell.

    Raises:
        InvalidActionError: If the spell does not heal.

    """
    if not spell.is_healing:
        log_error(
            "Only healing spells can be resolved as heals.",
            {"spell": spell.name, "kind": spell.kind.value, "healer": healer.name},
        )
        raise InvalidActionError(f"Spell '{spell.name}' is not a healing spell.")

    healer_capabilities = get_capabilities(healer.character_class)
    target_capabilities = get_capabilities(target.character_class)
    final_healing = calculate_healing(
        healer.stats.MAG,
        spell.power,
        is_healer=healer_capabilities.has(ClassAbility.HEAL_BONUS),
        target_is_defender=target_capabilities.has(ClassAbility.DOUBLE_HEALING),
        healer_potency=healer_capabilities.potency,
        target_potency=target_capabilities.potency,
    )
    return HealResult(
        healer=healer.name,
        target=target.name,
        base_healing=healer.stats.MAG + spell.power,
        class_multiplier=healer_capabilities.scale_multiplier(ClassAbility.HEAL_BONUS, 2),
        target_multiplier=target_capabilities.scale_multiplier(ClassAbility.DOUBLE_HEALING, 2),
        final_healing=final_healing,
    )


def calculate_revive_hp(max_hp: int, healer_class: ClassName | str | None) -> int:
    """
    HP a fallen ally returns with: 50% of max HP, scaled by the reviver's
    potency, minimum 1.
    """
    potency = get_capabilities(healer_class).potency_of(ClassAbility.REVIVE)
    return max(1, math.floor(max_hp * HEALER_REVIVE_HP_PERCENT * potency))


def resolve_revive(healer: Combatant, target: Combatant) -> int:
    """
    Revive a fallen ally in place.

    Returns:
        int: The HP the target returns with.

    Raises:
        InvalidActionError: If the healer cannot revive or the target is alive.

    """
    if not get_capabilities(healer.character_class).has(ClassAbility.REVIVE):
        log_error("Revive attempted without the revive ability.", {"healer": healer.name})
        raise InvalidActionError(f"{healer.name} cannot revive allies.")
    if target.current_hp > 0:
        log_error("Revive attempted on a living target.", {"target": target.name})
        raise InvalidActionError(f"{target.name} is not fallen.")
    target.current_hp = calculate_revive_hp(target.max_hp, healer.character_class)
    log_debug(
        f"{healer.name} revived {target.name}",
        {"healer": healer.name, "target": target.name, "hp": target.current_hp},
    )
    return target.current_hp


def is_status_immune(combatant: Combatant, status: StatusEffect) -> bool:
    """Checks class immunities and armor immunities."""
    if status in HEALER_IMMUNE_STATUSES and get_capabilities(combatant.character_class).has(
        ClassAbility.STATUS_IMMUNE
    ):
        return True
    return any(
        status in piece.status_immunities for piece in combatant.equipment.armor_pieces()
    )


# =============================================================================
# HP BOOKKEEPING
# =============================================================================


def apply_damage(target: Combatant, damage: int) -> int:
    """
    Apply damage to a target, clamping HP at 0.

    Returns:
        int: The HP actually lost.

    """
    if damage < 0:
        raise ValueError(f"Damage must be non-negative, got {damage}")
    previous_hp = target.current_hp
    target.current_hp = max(0, previous_hp - damage)
    return previous_hp - target.current_hp


def apply_healing(target: Combatant, healing: int) -> int:
    """
    Apply healing to a living target, clamping HP at its cap.

    Fallen targets are not healed; see `resolve_revive`.

    Returns:
        int: The HP actually restored.

    """
    if healing < 0:
        raise ValueError(f"Healing must be non-negative, got {healing}")
    if target.current_hp <= 0:
        return 0
    previous_hp = target.current_hp
    target.current_hp = min(target.max_hp, previous_hp + healing)
    return target.current_hp - previous_hp


def is_alive(combatant: Combatant) -> bool:
    return combatant.current_hp > 0


def is_party_defeated(party: Sequence[Combatant]) -> bool:
    return all(member.current_hp <= 0 for member in party)


def are_enemies_defeated(enemies: Sequence[Combatant]) -> bool:
    return all(enemy.current_hp <= 0 for enemy in enemies)
