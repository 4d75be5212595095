import logging
import math
from dataclasses import dataclass

from .calc import Coordinates
from .config import (
    KEY_CALCULATION_METHOD,
    KEY_CITY,
    KEY_LAST_KNOWN_LOCATION,
    KEY_USE_LOCATION,
)
from .methods import DEFAULT_METHOD, CalculationMethod, get_method, resolve_method

logger = logging.getLogger(__name__)

DEFAULT_COORDINATES = Coordinates(latitude=23.777176, longitude=90.399452)


@dataclass(frozen=True)
class PersistedPreferences:
    calculation_method: CalculationMethod = DEFAULT_METHOD
    city: str = ""
    use_location: bool = True
    coordinates: Coordinates = DEFAULT_COORDINATES


def _degrees(value, limit):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or abs(value) > limit:
        return None
    return value


def parse_coordinates(raw):
    """Decode a stored {latitude, longitude} record, or None if malformed."""
    if not isinstance(raw, dict):
        return None
    latitude = _degrees(raw.get("latitude"), 90.0)
    longitude = _degrees(raw.get("longitude"), 180.0)
    if latitude is None or longitude is None:
        return None
    return Coordinates(latitude, longitude)


class SettingsResolver:
    """Reads persisted preferences, substituting defaults for anything missing.

    Absence is the normal first-launch state, so nothing here raises.
    """

    def __init__(self, store):
        self.store = store

    def resolve(self):
        raw_method = self.store.get(KEY_CALCULATION_METHOD)
        method = resolve_method(raw_method)
        if raw_method is not None and method is DEFAULT_METHOD and raw_method != DEFAULT_METHOD.value:
            logger.debug("Unknown calculation method %r, using %s", raw_method, DEFAULT_METHOD.value)

        city = self.store.get(KEY_CITY)
        if not isinstance(city, str):
            city = ""

        use_location = self.store.get(KEY_USE_LOCATION)
        if not isinstance(use_location, bool):
            use_location = True

        raw_location = self.store.get(KEY_LAST_KNOWN_LOCATION)
        coordinates = parse_coordinates(raw_location)
        if coordinates is None:
            if raw_location is not None:
                logger.debug("Malformed %s %r, using fallback location", KEY_LAST_KNOWN_LOCATION, raw_location)
            coordinates = DEFAULT_COORDINATES

        return PersistedPreferences(
            calculation_method=method,
            city=city,
            use_location=use_location,
            coordinates=coordinates,
        )


def record_location(store, coordinates):
    if parse_coordinates({"latitude": coordinates.latitude, "longitude": coordinates.longitude}) is None:
        raise ValueError(f"Invalid coordinates: {coordinates}")
    store.set(KEY_LAST_KNOWN_LOCATION, {
        "latitude": float(coordinates.latitude),
        "longitude": float(coordinates.longitude),
    })


def set_calculation_method(store, value):
    method = get_method(value)
    store.set(KEY_CALCULATION_METHOD, method.value)
    return method


def set_city(store, city):
    if not isinstance(city, str):
        raise ValueError(f"City must be a string, got {type(city).__name__}")
    store.set(KEY_CITY, city.strip())


def set_use_location(store, enabled):
    store.set(KEY_USE_LOCATION, bool(enabled))
