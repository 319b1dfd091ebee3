"""
Shapeshifting for the subtype-dependent race.

Transforming resets the character's stats to the new form's table at the
current level and replaces its martial arts.
"""

from catchery import log_debug, log_error
from pydantic import BaseModel

from rpgcore.actions.martial_art import MartialArt
from rpgcore.archetypes.registry import get_race, get_subtype
from rpgcore.core.constants import SubtypeName
from rpgcore.core.errors import InvalidArchetypeError
from rpgcore.core.stat_block import Stats

from .character import Character
from .stats import calculate_max_hp, refresh_character


class TransformResult(BaseModel):
    """Stats, HP cap and martial arts of a form at a given level."""

    new_stats: Stats
    new_max_hp: int
    new_martial_arts: list[MartialArt]


def calculate_transform_stats(subtype: SubtypeName | str, level: int) -> Stats:
    return get_subtype(subtype).stats_at_level(level)


def calculate_transform_hp(subtype: SubtypeName | str, level: int) -> int:
    """HP cap in a form: the standard HP formula over the form's CON."""
    return calculate_max_hp(calculate_transform_stats(subtype, level).CON)


def transform_fae(level: int, subtype: SubtypeName | str) -> TransformResult:
    """
    Compute the outcome of transforming into a form at a level. Pure.

    Args:
        level (int): The character level.
        subtype (SubtypeName | str): The target form.

    Returns:
        TransformResult: The new stats, HP cap and martial arts.

    """
    return TransformResult(
        new_stats=calculate_transform_stats(subtype, level),
        new_max_hp=calculate_transform_hp(subtype, level),
        new_martial_arts=list(get_subtype(subtype).martial_arts),
    )


def apply_transformation(character: Character, subtype: SubtypeName | str) -> TransformResult:
    """
    Transform a character into a new form, in place.

    Base stats and martial arts are replaced, then final stats, caps and
    resistances are recomputed with the current equipment.

    Raises:
        InvalidArchetypeError: If the character's race does not shapeshift.

    """
    if not get_race(character.race).is_subtype_dependent:
        log_error(
            f"{character.name} cannot transform.",
            {"character": character.name, "race": character.race.value},
        )
        raise InvalidArchetypeError(f"Race {character.race.value} cannot transform")

    result = transform_fae(character.level, subtype)
    character.fae_subtype = get_subtype(subtype).name
    character.base_stats = result.new_stats
    character.martial_arts = list(result.new_martial_arts)
    refresh_character(character)

    log_debug(
        f"{character.name} transformed into a {character.fae_subtype.value}",
        {"character": character.name, "subtype": character.fae_subtype.value},
    )
    return result
