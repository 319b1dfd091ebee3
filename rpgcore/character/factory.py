"""
Factory functions for creating characters and enemies.
"""

from catchery import log_error

from rpgcore.archetypes.registry import get_class, get_race, get_subtype
from rpgcore.core.constants import ClassName, RaceName, SubtypeName
from rpgcore.core.errors import InvalidArchetypeError
from rpgcore.core.stat_block import ElementalResistances, Stats, add_stats, create_empty_resistances
from rpgcore.items.equipment import Equipment
from rpgcore.progression.exp_table import get_exp_for_level
from rpgcore.progression.growth import calculate_stat_gains, get_effective_growth

from .character import Character, Enemy, EnemyAttack, EnemyDrop
from .stats import calculate_max_hp, refresh_character


def create_character(
    name: str,
    race: RaceName | str,
    class_name: ClassName | str,
    *,
    level: int = 1,
    fae_subtype: SubtypeName | str | None = None,
    equipment: Equipment | None = None,
    character_id: str | None = None,
) -> Character:
    """
    Create a recruited character at full HP and MP.

    Races that grow by level start from race base stats plus the class
    bonus, with growth for every level above 1 applied in one step.
    Gear-dependent races start from race base stats. The shapeshifting race
    starts from its subtype's table for the level.

    Args:
        name (str): The character name.
        race (RaceName | str): The race.
        class_name (ClassName | str): The class.
        level (int): Starting level.
        fae_subtype (SubtypeName | str | None): Starting creature form.
        equipment (Equipment | None): Starting equipment.
        character_id (str | None): Explicit id; generated when omitted.

    Raises:
        InvalidArchetypeError: If the race cannot take the class, or a
            subtype is given for a race that does not shapeshift.

    Returns:
        Character: The new character.

    """
    race_data = get_race(race)
    class_data = get_class(class_name)
    if not race_data.allows_class(class_data.name):
        log_error(
            f"{race_data.name} cannot be a {class_data.name}.",
            {"race": race_data.name.value, "class": class_data.name.value},
        )
        raise InvalidArchetypeError(
            f"Class {class_data.name.value} is not allowed for race {race_data.name.value}"
        )

    subtype = get_subtype(fae_subtype) if fae_subtype is not None else None
    if subtype is not None and not race_data.is_subtype_dependent:
        log_error(
            f"{race_data.name} cannot take a creature form.",
            {"race": race_data.name.value, "subtype": subtype.name.value},
        )
        raise InvalidArchetypeError(
            f"Race {race_data.name.value} cannot take the {subtype.name.value} form"
        )

    if subtype is not None:
        base_stats = subtype.stats_at_level(level)
    elif race_data.growth is None:
        base_stats = race_data.base_stats
    else:
        base_stats = add_stats(race_data.base_stats, class_data.base_stat_bonus)
        if level > 1:
            growth = get_effective_growth(race_data.name, class_data.name)
            base_stats = add_stats(base_stats, calculate_stat_gains(growth, level - 1))

    extra = {"id": character_id} if character_id is not None else {}
    character = Character(
        name=name,
        race=race_data.name,
        character_class=class_data.name,
        level=level,
        exp=get_exp_for_level(level),
        base_stats=base_stats,
        equipment=equipment or Equipment(),
        fae_subtype=subtype.name if subtype is not None else None,
        martial_arts=list(subtype.martial_arts) if subtype is not None else [],
        **extra,
    )
    refresh_character(character)
    character.current_hp = character.max_hp
    character.current_mp = character.max_mp
    return character


def create_enemy(
    name: str,
    stats: Stats,
    *,
    level: int = 1,
    max_hp: int | None = None,
    resistances: ElementalResistances | None = None,
    attacks: list[EnemyAttack] | None = None,
    drops: list[EnemyDrop] | None = None,
    exp_reward: int = 0,
    gold_reward: int = 0,
    race: RaceName | None = None,
    character_class: ClassName | None = None,
    equipment: Equipment | None = None,
) -> Enemy:
    """
    Create an enemy at full HP.

    When `max_hp` is omitted it is derived from CON like a character's.
    """
    hp = max_hp if max_hp is not None else calculate_max_hp(stats.CON)
    return Enemy(
        name=name,
        level=level,
        stats=stats,
        max_hp=hp,
        current_hp=hp,
        resistances=resistances if resistances is not None else create_empty_resistances(),
        attacks=attacks or [],
        drops=drops or [],
        exp_reward=exp_reward,
        gold_reward=gold_reward,
        race=race,
        character_class=character_class,
        equipment=equipment or Equipment(),
    )
