"""
Leveling module for the rules core.

Handles EXP rewards, level-up application and the EXP display helpers.
A level-up either applies fully (stats, level, caps and result) or not at
all.
"""

import math
import random
from collections.abc import Iterable

from catchery import log_debug, log_warning
from pydantic import BaseModel, Field

from rpgcore.archetypes.registry import get_race
from rpgcore.archetypes.rules import calculate_spell_slots, calculate_tome_slots, get_cyborg_gear_slots
from rpgcore.character.character import Character, Enemy
from rpgcore.character.stats import (
    calculate_final_resistances,
    calculate_final_stats,
    calculate_max_hp,
    calculate_max_mp,
)
from rpgcore.core.constants import (
    DUNGEON_EXP_MULTIPLIER,
    EXP_PER_ENEMY_LEVEL,
    EXP_VARIANCE,
    MAX_LEVEL,
    ArmorSlot,
    StatName,
)
from rpgcore.core.stat_block import add_stats
from rpgcore.core.utils import random_range

from .exp_table import get_exp_for_level
from .growth import calculate_stat_gains, get_effective_growth


class LevelUpResult(BaseModel):
    """The outcome of a single level-up step."""

    previous_level: int = Field(description="Level before the step.")
    new_level: int = Field(description="Level after the step.")
    stat_gains: dict[StatName, int] = Field(
        default_factory=dict,
        description="Stat points gained per stat.",
    )
    new_max_hp: int = Field(description="HP cap after the step.")
    new_max_mp: int = Field(description="MP cap after the step.")
    new_abilities: list[str] = Field(
        default_factory=list,
        description="Named unlocks, such as extra spell or tome slots.",
    )
    new_gear_slots: list[ArmorSlot] = Field(
        default_factory=list,
        description="Armor slots unlocked by the step, for gear-dependent races.",
    )


# =============================================================================
# EXP REWARDS
# =============================================================================


def calculate_enemy_exp_reward(
    enemy: Enemy,
    is_dungeon: bool = False,
    *,
    rng: random.Random | None = None,
) -> int:
    """
    Calculate the EXP reward for defeating an enemy.

    floor(level * 20 * U[0.9, 1.1]), doubled for dungeon battles, minimum 1.

    Args:
        enemy (Enemy): The defeated enemy.
        is_dungeon (bool): Whether the battle took place in a dungeon.
        rng (random.Random | None): Optional injected generator.

    Returns:
        int: The EXP reward.

    """
    variance = random_range(1 - EXP_VARIANCE, 1 + EXP_VARIANCE, rng)
    exp = math.floor(enemy.level * EXP_PER_ENEMY_LEVEL * variance)
    if is_dungeon:
        exp *= DUNGEON_EXP_MULTIPLIER
    return max(1, exp)


def calculate_battle_exp_reward(
    enemies: Iterable[Enemy],
    is_dungeon: bool = False,
    *,
    rng: random.Random | None = None,
) -> int:
    """Total EXP from a battle: the sum of every enemy's reward."""
    return sum(calculate_enemy_exp_reward(enemy, is_dungeon, rng=rng) for enemy in enemies)


# =============================================================================
# LEVEL UP
# =============================================================================


def can_level_up(character: Character) -> bool:
    if character.level >= MAX_LEVEL:
        return False
    return character.exp >= get_exp_for_level(character.level + 1)


def process_level_up(character: Character) -> LevelUpResult | None:
    """
    Apply a single level-up to a character, if its EXP allows it.

    Growth is re-derived from the character's current race, class and
    subtype and floored for this one level. Final stats, caps and
    resistances are recomputed from the new base stats and the equipment.

    Args:
        character (Character): The character to level up. Mutated in place.

    Returns:
        LevelUpResult | None: The result, or None if no level-up is due.

    """
    if not can_level_up(character):
        return None

    previous_level = character.level
    new_level = previous_level + 1

    growth = get_effective_growth(
        character.race, character.character_class, character.fae_subtype
    )
    stat_gains = calculate_stat_gains(growth)

    # Build the leveled state on a copy so a failure leaves the record intact.
    leveled = character.model_copy(
        update={
            "base_stats": add_stats(character.base_stats, stat_gains),
            "level": new_level,
        }
    )
    final_stats = calculate_final_stats(leveled)
    new_max_hp = calculate_max_hp(final_stats.CON)
    new_max_mp = calculate_max_mp(final_stats.MAG, character.race)
    resistances = calculate_final_resistances(leveled)

    result = LevelUpResult(
        previous_level=previous_level,
        new_level=new_level,
        stat_gains=stat_gains,
        new_max_hp=new_max_hp,
        new_max_mp=new_max_mp,
    )

    if get_race(character.race).is_gear_dependent:
        previous_slots = get_cyborg_gear_slots(previous_level)
        result.new_gear_slots = [
            slot for slot in get_cyborg_gear_slots(new_level) if slot not in previous_slots
        ]

    if calculate_spell_slots(
        character.character_class, new_level, character.race
    ) > calculate_spell_slots(character.character_class, previous_level, character.race):
        result.new_abilities.append("+1 Spell Slot")
    if calculate_tome_slots(
        character.character_class, new_level, character.race
    ) > calculate_tome_slots(character.character_class, previous_level, character.race):
        result.new_abilities.append("+1 Tome Slot")

    character.base_stats = leveled.base_stats
    character.level = new_level
    character.current_stats = final_stats
    character.max_hp = new_max_hp
    character.max_mp = new_max_mp
    character.resistances = resistances
    character.current_hp = min(character.current_hp, new_max_hp)
    character.current_mp = min(character.current_mp, new_max_mp)

    log_debug(
        f"{character.name} reached level {new_level}",
        {
            "character": character.name,
            "previous_level": previous_level,
            "new_level": new_level,
            "stat_gains": {stat.value: gain for stat, gain in stat_gains.items()},
        },
    )
    return result


def grant_exp(character: Character, exp_amount: int) -> list[LevelUpResult]:
    """
    Grant EXP to a character and process every level-up it unlocks.

    Level-ups are applied one level at a time, re-deriving growth for each.
    EXP granted at the level cap is retained with no further effect.

    Args:
        character (Character): The character. Mutated in place.
        exp_amount (int): The EXP to grant.

    Returns:
        list[LevelUpResult]: One result per level gained, in order.

    """
    if exp_amount < 0:
        raise ValueError(f"EXP amount must be non-negative, got {exp_amount}")

    if character.level >= MAX_LEVEL and exp_amount > 0:
        log_warning(
            f"{character.name} is at the level cap; EXP has no further effect.",
            {"character": character.name, "exp_amount": exp_amount},
        )

    character.exp += exp_amount
    results: list[LevelUpResult] = []
    while (result := process_level_up(character)) is not None:
        results.append(result)
    return results


def grant_battle_exp(
    party: Iterable[Character],
    enemies: Iterable[Enemy],
    is_dungeon: bool = False,
    *,
    rng: random.Random | None = None,
) -> dict[str, list[LevelUpResult]]:
    """
    Grant the full battle EXP to every living party member.

    The reward is not split: each living member receives the whole sum.

    Returns:
        dict[str, list[LevelUpResult]]: Level-up results keyed by character id.
            Fallen members are absent.

    """
    total_exp = calculate_battle_exp_reward(enemies, is_dungeon, rng=rng)
    return {
        character.id: grant_exp(character, total_exp)
        for character in party
        if character.current_hp > 0
    }


# =============================================================================
# EXP DISPLAY HELPERS
# =============================================================================


def get_exp_progress_percent(character: Character) -> int:
    """Progress towards the next level, as a whole percentage."""
    if character.level >= MAX_LEVEL:
        return 100
    current_level_exp = get_exp_for_level(character.level)
    next_level_exp = get_exp_for_level(character.level + 1)
    into_level = character.exp - current_level_exp
    return math.floor(into_level / (next_level_exp - current_level_exp) * 100)


def get_exp_remaining(character: Character) -> int:
    if character.level >= MAX_LEVEL:
        return 0
    return get_exp_for_level(character.level + 1) - character.exp


def format_exp_display(character: Character) -> str:
    """Formats EXP as 'into level / needed', or 'total (MAX)' at the cap."""
    if character.level >= MAX_LEVEL:
        return f"{character.exp} (MAX)"
    current_level_exp = get_exp_for_level(character.level)
    next_level_exp = get_exp_for_level(character.level + 1)
    return f"{character.exp - current_level_exp} / {next_level_exp - current_level_exp}"
