"""
Character stats module for the rules core.

Composes base stats, equipment bonuses and class adjustments into final
stats, and derives the HP and MP caps and elemental resistances from them.
"""

import math

from rpgcore.archetypes.rules import (
    class_has_restriction,
    get_capabilities,
    race_has_trait,
)
from rpgcore.core.constants import (
    BASE_HP,
    BASE_MP,
    CYBORG_MAX_MP,
    DEFENDER_AGI_REDUCTION,
    DEFENDER_RESIST_PER_LEVEL,
    HP_PER_CON,
    MAX_HP,
    MAX_MP,
    MP_PER_MAG,
    ClassAbility,
    ClassRestriction,
    Element,
    RaceName,
    RaceTrait,
    StatName,
)
from rpgcore.core.stat_block import (
    ElementalResistances,
    Stats,
    clamp_stat,
    create_empty_resistances,
)
from rpgcore.items.equipment import Equipment

from .character import Character

# =============================================================================
# HP AND MP
# =============================================================================


def calculate_max_hp(con: int) -> int:
    """
    Calculate max HP from CON.

    Args:
        con (int): The constitution stat.

    Returns:
        int: 100 + 50 per CON point, capped at 9999.

    """
    return min(BASE_HP + con * HP_PER_CON, MAX_HP)


def calculate_max_mp(mag: int, race: RaceName | str | None = None) -> int:
    """
    Calculate max MP from MAG.

    The MP-capped race clamps its effective MAG to 50 and its MP to 50,
    regardless of actual MAG.

    Args:
        mag (int): The magic stat.
        race (RaceName | str | None): The race of the character, if any.

    Returns:
        int: The MP cap.

    """
    if race_has_trait(race, RaceTrait.MP_CAPPED):
        effective_mag = min(mag, CYBORG_MAX_MP)
        return min(BASE_MP + effective_mag * MP_PER_MAG, CYBORG_MAX_MP)
    return min(BASE_MP + mag * MP_PER_MAG, MAX_MP)


def clamp_hp(value: int) -> int:
    return max(0, min(MAX_HP, value))


def clamp_mp(value: int, race: RaceName | str | None = None) -> int:
    cap = CYBORG_MAX_MP if race_has_trait(race, RaceTrait.MP_CAPPED) else MAX_MP
    return max(0, min(cap, value))


# =============================================================================
# EQUIPMENT CONTRIBUTIONS
# =============================================================================


def calculate_equipment_stats(equipment: Equipment) -> dict[StatName, int]:
    """
    Sums the stat bonuses of every equipped item.

    DEF bonuses from shields and armor are not included here; see
    `calculate_equipment_def`.
    """
    totals: dict[StatName, int] = {}
    for item in equipment.items():
        for stat, value in item.stat_bonuses.items():
            totals[stat] = totals.get(stat, 0) + value
    return totals


def calculate_equipment_def(equipment: Equipment, race: RaceName | str | None) -> int:
    """
    Calculate the DEF granted by shields and armor.

    Shield DEF always applies. Armor DEF is ignored for races with the
    armor-DEF-ignored trait.

    Args:
        equipment (Equipment): The equipment loadout.
        race (RaceName | str | None): The wearer's race.

    Returns:
        int: The total DEF bonus.

    """
    total = sum(shield.defense_bonus for shield in equipment.shields())
    if not race_has_trait(race, RaceTrait.DEF_FROM_ARMOR_IGNORED):
        total += sum(piece.defense_bonus for piece in equipment.armor_pieces())
    return total


def calculate_equipment_resistances(equipment: Equipment) -> ElementalResistances:
    """Sums the elemental resistances of shields and armor."""
    resistances = create_empty_resistances()
    for item in (*equipment.shields(), *equipment.armor_pieces()):
        for element, value in item.resistances.items():
            resistances[element] += value
    return resistances


# =============================================================================
# FINAL STATS
# =============================================================================


def calculate_final_stats(character: Character) -> Stats:
    """
    Calculate final stats including equipment and class modifiers.

    Bonuses are summed without intermediate clamping; every stat is clamped
    once at the end.

    Args:
        character (Character): The character to evaluate.

    Returns:
        Stats: The final stat vector.

    """
    raw = {stat: character.base_stats.get(stat) for stat in StatName}
    for stat, value in calculate_equipment_stats(character.equipment).items():
        raw[stat] += value
    raw[StatName.DEF] += calculate_equipment_def(character.equipment, character.race)

    if class_has_restriction(character.character_class, ClassRestriction.REDUCED_AGI):
        raw[StatName.AGI] = math.floor(raw[StatName.AGI] * (1 - DEFENDER_AGI_REDUCTION))

    return Stats(**{stat.value: clamp_stat(value) for stat, value in raw.items()})


def recalculate_resources(character: Character) -> tuple[int, int]:
    """
    Recalculate the HP and MP caps from the character's final stats.

    Pure; the caller writes the returned caps back.

    Returns:
        tuple[int, int]: (max_hp, max_mp).

    """
    final_stats = calculate_final_stats(character)
    return (
        calculate_max_hp(final_stats.CON),
        calculate_max_mp(final_stats.MAG, character.race),
    )


def calculate_final_resistances(character: Character) -> ElementalResistances:
    """
    Calculate final resistances: equipment plus the per-level elemental
    resistance of classes with that ability, clamped to [0, 1].
    """
    resistances = calculate_equipment_resistances(character.equipment)
    bonus = (
        character.level
        * DEFENDER_RESIST_PER_LEVEL
        * get_capabilities(character.character_class).potency_of(
            ClassAbility.ELEMENTAL_RESIST
        )
    )
    return {
        element: max(0.0, min(1.0, resistances[element] + bonus)) for element in Element
    }


def refresh_character(character: Character) -> Character:
    """
    Recompute a character's final stats, caps and resistances in place.

    Called after an equipment change, a level-up or a transformation.
    Current HP and MP are clamped to the new caps.

    Args:
        character (Character): The character to refresh.

    Returns:
        Character: The same character, for chaining.

    """
    character.current_stats = calculate_final_stats(character)
    character.max_hp, character.max_mp = recalculate_resources(character)
    character.resistances = calculate_final_resistances(character)
    character.current_hp = min(character.current_hp, character.max_hp)
    character.current_mp = min(character.current_mp, character.max_mp)
    return character


# =============================================================================
# DISPLAY
# =============================================================================


def get_stat_display(character: Character, stat: StatName) -> str:
    """
    Returns the status-screen text for a stat.

    For races that ignore armor DEF, DEF shows base plus shield DEF, with
    the ignored armor DEF appended as "(nX)".
    """
    if stat == StatName.DEF and race_has_trait(
        character.race, RaceTrait.DEF_FROM_ARMOR_IGNORED
    ):
        equipment = character.equipment
        shown = character.base_stats.DEF + sum(s.defense_bonus for s in equipment.shields())
        armor_def = sum(piece.defense_bonus for piece in equipment.armor_pieces())
        if armor_def > 0:
            return f"{shown} ({armor_def}X)"
        return f"{shown}"
    return f"{calculate_final_stats(character).get(stat)}"
