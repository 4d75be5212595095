import json

import pytest

from salahtimes.calc import Coordinates
from salahtimes.config import MemoryPreferenceStore, PreferenceStore
from salahtimes.methods import CalculationMethod
from salahtimes.settings import (
    DEFAULT_COORDINATES,
    PersistedPreferences,
    SettingsResolver,
    parse_coordinates,
    record_location,
    set_calculation_method,
    set_city,
    set_use_location,
)


def test_first_run_defaults(tmp_path):
    prefs = SettingsResolver(PreferenceStore(str(tmp_path / "missing.json"))).resolve()
    assert prefs == PersistedPreferences(
        calculation_method=CalculationMethod.MUSLIM_WORLD_LEAGUE,
        city="",
        use_location=True,
        coordinates=Coordinates(23.777176, 90.399452),
    )


def test_reads_stored_values():
    store = MemoryPreferenceStore({
        "calculationMethod": "ummAlQura",
        "city": "Makkah",
        "useLocation": False,
        "LastKnownLocation": {"latitude": 21.4225, "longitude": 39.8262},
    })
    prefs = SettingsResolver(store).resolve()
    assert prefs.calculation_method is CalculationMethod.UMM_AL_QURA
    assert prefs.city == "Makkah"
    assert prefs.use_location is False
    assert prefs.coordinates == Coordinates(21.4225, 39.8262)


def test_display_name_method_is_accepted():
    store = MemoryPreferenceStore({"calculationMethod": "Moonsighting Committee"})
    assert SettingsResolver(store).resolve().calculation_method is CalculationMethod.MOONSIGHTING_COMMITTEE


@pytest.mark.parametrize("values", [
    {"calculationMethod": "bogus", "city": 42, "useLocation": "yes"},
    {"calculationMethod": 7, "city": None, "useLocation": 1},
])
def test_malformed_values_use_defaults(values):
    prefs = SettingsResolver(MemoryPreferenceStore(values)).resolve()
    assert prefs == PersistedPreferences()


@pytest.mark.parametrize("raw", [
    None,
    "23.7,90.4",
    {"latitude": 23.7},
    {"latitude": "23.7", "longitude": "90.4"},
    {"latitude": True, "longitude": 90.4},
    {"latitude": 123.0, "longitude": 90.4},
    {"latitude": 23.7, "longitude": 181.0},
    {"latitude": float("nan"), "longitude": 90.4},
])
def test_malformed_location_falls_back(raw):
    assert parse_coordinates(raw) is None
    store = MemoryPreferenceStore({"LastKnownLocation": raw})
    assert SettingsResolver(store).resolve().coordinates == DEFAULT_COORDINATES


def test_integer_degrees_are_accepted():
    assert parse_coordinates({"latitude": 0, "longitude": -180}) == Coordinates(0.0, -180.0)


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    assert SettingsResolver(PreferenceStore(str(path))).resolve() == PersistedPreferences()


def test_write_path_round_trips_through_file(tmp_path):
    path = tmp_path / "group" / "prefs.json"
    store = PreferenceStore(str(path))
    record_location(store, Coordinates(51.5074, -0.1278))
    set_calculation_method(store, "Karachi")
    set_city(store, "  London ")
    set_use_location(store, False)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {
        "LastKnownLocation": {"latitude": 51.5074, "longitude": -0.1278},
        "calculationMethod": "karachi",
        "city": "London",
        "useLocation": False,
    }
    prefs = SettingsResolver(PreferenceStore(str(path))).resolve()
    assert prefs.calculation_method is CalculationMethod.KARACHI
    assert prefs.coordinates == Coordinates(51.5074, -0.1278)


def test_write_path_rejects_bad_input():
    store = MemoryPreferenceStore()
    with pytest.raises(ValueError):
        set_calculation_method(store, "bogus")
    with pytest.raises(ValueError):
        record_location(store, Coordinates(91.0, 0.0))
    assert store.as_dict() == {}
