"""
Tests for the archetype registry and its lookups.
"""

import json

import pytest

from rpgcore.archetypes.registry import (
    ArchetypeRegistry,
    DEFAULT_DATA_DIR,
    _load_json_file,
    get_available_subtypes,
    get_class,
    get_class_growth,
    get_early_subtypes,
    get_race,
    get_race_base_stats,
    get_race_growth,
    get_race_weakness_description,
    get_registry,
    get_subtype,
    get_subtype_base_hp,
    get_subtype_martial_art_descriptions,
    get_subtype_martial_arts,
)
from rpgcore.core.constants import (
    ClassName,
    RaceName,
    RaceTrait,
    SubtypeName,
    WeaknessType,
)
from rpgcore.core.errors import ArchetypeDataError, UnknownArchetypeError


def test_registry_is_a_singleton():
    assert get_registry() is ArchetypeRegistry()
    assert get_registry().data_dir == DEFAULT_DATA_DIR


def test_every_archetype_is_loaded():
    """Test that the shipped tables cover every closed enumeration."""
    registry = get_registry()
    assert set(registry.races) == set(RaceName)
    assert set(registry.classes) == set(ClassName)
    assert set(registry.subtypes) == set(SubtypeName)


def test_lookup_by_string_and_enum():
    assert get_race("Human") is get_race(RaceName.HUMAN)
    assert get_class("Mage").name == ClassName.MAGE
    assert get_subtype("Wolf").name == SubtypeName.WOLF


def test_unknown_names_fail_loudly(mocker):
    """Test that names outside the enumerations raise instead of defaulting."""
    mock_log_error = mocker.patch("rpgcore.archetypes.registry.log_error")
    with pytest.raises(UnknownArchetypeError):
        get_race("Elf")
    with pytest.raises(KeyError):
        get_class("Bard")
    with pytest.raises(UnknownArchetypeError, match="subtype"):
        get_subtype("Dragon")
    assert mock_log_error.call_count == 3


def test_race_records():
    esper = get_race(RaceName.ESPER)
    assert esper.allowed_classes == [ClassName.MAGE]
    assert esper.has_trait(RaceTrait.SPELL_DAMAGE_DOUBLE)
    assert esper.weakness == WeaknessType.MELEE
    assert get_race(RaceName.CYBORG).is_gear_dependent
    assert get_race(RaceName.FAE).is_subtype_dependent


def test_getters_return_copies():
    stats = get_race_base_stats(RaceName.HUMAN)
    assert stats == get_race(RaceName.HUMAN).base_stats
    assert stats is not get_race(RaceName.HUMAN).base_stats
    assert get_race_growth(RaceName.CYBORG) is None
    assert get_class_growth(ClassName.WARRIOR).STR == 3


def test_subtype_availability():
    """Test that only the early forms can be picked by level."""
    early = [SubtypeName.SLIME, SubtypeName.DINO, SubtypeName.WOLF, SubtypeName.GOBLIN]
    assert get_early_subtypes() == early
    assert get_available_subtypes(5) == early
    assert get_available_subtypes(10) == []
    assert not get_subtype(SubtypeName.SCORPION).is_available_at(1)


def test_subtype_data():
    assert get_subtype_base_hp(SubtypeName.GOBLIN) == 105
    arts = get_subtype_martial_arts(SubtypeName.WOLF)
    assert [art.name for art in arts] == ["Bite", "Scratch"]


def test_descriptions():
    assert (
        get_race_weakness_description(RaceName.HUMAN)
        == "Takes 1.5x damage from consumable weapons"
    )
    assert get_subtype_martial_art_descriptions(SubtypeName.SCORPION)[0] == (
        "Poison Sting: melee single target, 20 + AGI damage (dark)"
    )


def test_load_json_file_rejects_malformed_data(tmp_path, mocker):
    mocker.patch("rpgcore.archetypes.registry.log_error")
    broken = tmp_path / "races.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ArchetypeDataError):
        _load_json_file(broken, ArchetypeRegistry._load_races, "races")

    broken.write_text(json.dumps({"name": "Human"}), encoding="utf-8")
    with pytest.raises(ArchetypeDataError, match="Expected list"):
        _load_json_file(broken, ArchetypeRegistry._load_races, "races")


def test_duplicate_names_are_rejected():
    data = json.loads((DEFAULT_DATA_DIR / "races.json").read_text(encoding="utf-8"))
    with pytest.raises(ValueError, match="Duplicate race name"):
        ArchetypeRegistry._load_races(data + data[:1])


def test_failed_reload_keeps_previous_tables(tmp_path, mocker):
    """Test that an incomplete data directory leaves the registry untouched."""
    mocker.patch("rpgcore.archetypes.registry.log_error")
    races = json.loads((DEFAULT_DATA_DIR / "races.json").read_text(encoding="utf-8"))
    (tmp_path / "races.json").write_text(json.dumps(races[:1]), encoding="utf-8")
    for name in ("classes.json", "subtypes.json"):
        (tmp_path / name).write_text(
            (DEFAULT_DATA_DIR / name).read_text(encoding="utf-8"), encoding="utf-8"
        )

    registry = get_registry()
    with pytest.raises(ArchetypeDataError, match="Missing race entries"):
        registry.reload(tmp_path)
    assert set(registry.races) == set(RaceName)
    assert registry.data_dir == DEFAULT_DATA_DIR


def test_constructor_with_data_dir_reloads_existing_registry(tmp_path):
    """Test that passing a data directory to the cached registry loads it."""
    races = json.loads((DEFAULT_DATA_DIR / "races.json").read_text(encoding="utf-8"))
    for race in races:
        if race["name"] == "Human":
            race["base_stats"]["STR"] = 99
    (tmp_path / "races.json").write_text(json.dumps(races), encoding="utf-8")
    for name in ("classes.json", "subtypes.json"):
        (tmp_path / name).write_text(
            (DEFAULT_DATA_DIR / name).read_text(encoding="utf-8"), encoding="utf-8"
        )

    assert get_race(RaceName.HUMAN).base_stats.STR == 10
    try:
        registry = ArchetypeRegistry(tmp_path)
        assert registry is get_registry()
        assert registry.data_dir == tmp_path
        assert get_race(RaceName.HUMAN).base_stats.STR == 99
    finally:
        get_registry().reload(DEFAULT_DATA_DIR)
    assert get_race(RaceName.HUMAN).base_stats.STR == 10
