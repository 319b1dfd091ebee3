"""
Archetype registry for the rules core.

Loads the race, class and creature subtype tables from JSON once per process
and serves name-keyed lookups over them. Names outside the closed
enumerations are integration faults and raise `UnknownArchetypeError`.
"""

import json
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from catchery import log_error
from pydantic import ValidationError

from rpgcore.actions.martial_art import MartialArt
from rpgcore.core.constants import ClassName, RaceName, StatName, SubtypeName
from rpgcore.core.errors import ArchetypeDataError, UnknownArchetypeError
from rpgcore.core.stat_block import StatGrowth, Stats
from rpgcore.core.utils import Singleton

from .character_class import CharacterClass
from .character_race import CharacterRace
from .creature_subtype import CreatureSubtype

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_E = TypeVar("_E", bound=Enum)


class ArchetypeRegistry(metaclass=Singleton):
    """
    One-stop registry for every archetype table that needs fast by-name access.
    """

    races: dict[RaceName, CharacterRace]
    classes: dict[ClassName, CharacterClass]
    subtypes: dict[SubtypeName, CreatureSubtype]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ArchetypeRegistry.

        Args:
            data_dir (Path | None):
                The directory containing the archetype tables. Defaults to the
                tables shipped with the package. Passing a directory to an
                existing registry reloads it from there.

        """
        if data_dir is not None:
            self.reload(data_dir)
        elif not hasattr(self, "data_dir"):
            self.reload(DEFAULT_DATA_DIR)

    def reload(self, root: Path) -> None:
        """
        (Re)load every archetype table from disk.

        Args:
            root (Path):
                The directory containing races.json, classes.json and subtypes.json.

        Raises:
            ArchetypeDataError: If a table is missing, malformed or incomplete.

        """
        races = _load_json_file(root / "races.json", self._load_races, "races")
        classes = _load_json_file(root / "classes.json", self._load_classes, "classes")
        subtypes = _load_json_file(root / "subtypes.json", self._load_subtypes, "subtypes")
        self._check_complete(RaceName, races, "race")
        self._check_complete(ClassName, classes, "class")
        self._check_complete(SubtypeName, subtypes, "subtype")
        # Swap only once every table is valid.
        self.races, self.classes, self.subtypes = races, classes, subtypes
        self.data_dir = root

    def get_race(self, name: RaceName | str) -> CharacterRace:
        """Get a race by name."""
        return self.races[_coerce_name(RaceName, name, "race")]

    def get_class(self, name: ClassName | str) -> CharacterClass:
        """Get a character class by name."""
        return self.classes[_coerce_name(ClassName, name, "class")]

    def get_subtype(self, name: SubtypeName | str) -> CreatureSubtype:
        """Get a creature subtype by name."""
        return self.subtypes[_coerce_name(SubtypeName, name, "subtype")]

    @staticmethod
    def _check_complete(enum_cls: type[Enum], table: dict, kind: str) -> None:
        missing = [member.value for member in enum_cls if member not in table]
        if missing:
            log_error(
                f"Archetype table is missing {kind} entries.",
                {"kind": kind, "missing": missing},
            )
            raise ArchetypeDataError(f"Missing {kind} entries: {', '.join(missing)}")

    @staticmethod
    def _load_races(data: list[dict]) -> dict[RaceName, CharacterRace]:
        """
        Load races from JSON data.

        Args:
            data (list[dict]): List of race data dictionaries.

        Returns:
            dict[RaceName, CharacterRace]: Dictionary mapping race names to races.

        Raises:
            ValueError: If duplicate race names are found.

        """
        races: dict[RaceName, CharacterRace] = {}
        for race_data in data:
            race = CharacterRace(**race_data)
            if race.name in races:
                raise ValueError(f"Duplicate race name: {race.name}")
            races[race.name] = race
        return races

    @staticmethod
    def _load_classes(data: list[dict]) -> dict[ClassName, CharacterClass]:
        classes: dict[ClassName, CharacterClass] = {}
        for class_data in data:
            character_class = CharacterClass(**class_data)
            if character_class.name in classes:
                raise ValueError(f"Duplicate class name: {character_class.name}")
            classes[character_class.name] = character_class
        return classes

    @staticmethod
    def _load_subtypes(data: list[dict]) -> dict[SubtypeName, CreatureSubtype]:
        subtypes: dict[SubtypeName, CreatureSubtype] = {}
        for subtype_data in data:
            subtype = CreatureSubtype(**subtype_data)
            if subtype.name in subtypes:
                raise ValueError(f"Duplicate subtype name: {subtype.name}")
            subtypes[subtype.name] = subtype
        return subtypes


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[Any, Any]],
    description: str,
) -> dict[Any, Any]:
    """Helper to load and validate JSON files"""
    try:
        if not filepath.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValidationError, ValueError) as e:
        log_error(
            f"Failed to load {description}.",
            {"file": str(filepath), "error": str(e)},
        )
        raise ArchetypeDataError(f"File {filepath} raised an error: {e}") from e


def _coerce_name(enum_cls: type[_E], name: Any, kind: str) -> _E:
    """Converts a raw name into its enumeration member, failing loudly."""
    try:
        return enum_cls(name)
    except ValueError:
        log_error(f"Unknown {kind} requested.", {"kind": kind, "name": name})
        raise UnknownArchetypeError(kind, str(name)) from None


# =============================================================================
# MODULE-LEVEL LOOKUPS
# =============================================================================


def get_registry() -> ArchetypeRegistry:
    return ArchetypeRegistry()


def get_race(name: RaceName | str) -> CharacterRace:
    return get_registry().get_race(name)


def get_class(name: ClassName | str) -> CharacterClass:
    return get_registry().get_class(name)


def get_subtype(name: SubtypeName | str) -> CreatureSubtype:
    return get_registry().get_subtype(name)


def get_race_base_stats(race: RaceName | str) -> Stats:
    """Returns a copy of the race's level 1 stats."""
    return get_race(race).base_stats.model_copy()


def get_race_growth(race: RaceName | str) -> StatGrowth | None:
    growth = get_race(race).growth
    return growth.model_copy() if growth is not None else None


def get_class_base_stat_bonus(class_name: ClassName | str) -> dict[StatName, int]:
    return dict(get_class(class_name).base_stat_bonus)


def get_class_growth(class_name: ClassName | str) -> StatGrowth:
    return get_class(class_name).growth.model_copy()


def get_subtype_base_stats(subtype: SubtypeName | str) -> Stats:
    return get_subtype(subtype).base_stats.model_copy()


def get_subtype_growth(subtype: SubtypeName | str) -> StatGrowth:
    return get_subtype(subtype).growth.model_copy()


def get_subtype_base_hp(subtype: SubtypeName | str) -> int:
    return get_subtype(subtype).base_hp


def get_subtype_martial_arts(subtype: SubtypeName | str) -> list[MartialArt]:
    return list(get_subtype(subtype).martial_arts)


def get_available_subtypes(level: int) -> list[SubtypeName]:
    """
    Returns the subtypes that can be chosen at a given level.

    Subtypes without a level range are unlocked through world progression
    and are never returned here.
    """
    return [
        subtype.name
        for subtype in get_registry().subtypes.values()
        if subtype.is_available_at(level)
    ]


def get_early_subtypes() -> list[SubtypeName]:
    return get_available_subtypes(1)


# =============================================================================
# DESCRIPTIONS
# =============================================================================


def get_race_weakness_description(race: RaceName | str) -> str:
    return get_race(race).weakness.description


def get_race_trait_descriptions(race: RaceName | str) -> list[str]:
    return [trait.description for trait in get_race(race).traits]


def get_class_ability_descriptions(class_name: ClassName | str) -> list[str]:
    return [ability.description for ability in get_class(class_name).abilities]


def get_class_restriction_descriptions(class_name: ClassName | str) -> list[str]:
    return [
        restriction.description
        for restriction in get_class(class_name).restrictions
    ]


def get_subtype_description(subtype: SubtypeName | str) -> str:
    return get_subtype(subtype).description


def get_subtype_martial_art_descriptions(subtype: SubtypeName | str) -> list[str]:
    return [art.description for art in get_subtype(subtype).martial_arts]
