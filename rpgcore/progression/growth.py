"""
Growth composition for the rules core.
"""

from rpgcore.archetypes.registry import get_class, get_race, get_subtype
from rpgcore.core.constants import ClassName, RaceName, StatName, SubtypeName
from rpgcore.core.stat_block import StatGrowth, multiply_stat_growth


def get_effective_growth(
    race: RaceName | str,
    class_name: ClassName | str,
    subtype: SubtypeName | str | None = None,
) -> StatGrowth:
    """
    Get the effective per-level growth for a race, class and active subtype.

    - Gear-dependent races have no level growth.
    - Subtype-dependent races use the active subtype's growth, ignoring race
      and class growth. Without an active subtype they fall back to class
      growth.
    - Every other race adds its growth to the class growth.

    Args:
        race (RaceName | str): The race.
        class_name (ClassName | str): The class.
        subtype (SubtypeName | str | None): The active creature form, if any.

    Returns:
        StatGrowth: The combined growth rates.

    """
    race_data = get_race(race)
    if race_data.is_gear_dependent:
        return StatGrowth()
    if race_data.is_subtype_dependent and subtype is not None:
        return get_subtype(subtype).growth
    class_growth = get_class(class_name).growth
    if race_data.growth is None:
        return class_growth
    return race_data.growth + class_growth


def calculate_stat_gains(growth: StatGrowth, levels_gained: int = 1) -> dict[StatName, int]:
    """Stat gains for a step of `levels_gained` levels: floor(rate * levels)."""
    return multiply_stat_growth(growth, levels_gained)
