"""
Device location as an injected, future-based service.

A LocationService hands back a concurrent.futures.Future that resolves to
Coordinates or fails with LocationError. LocationUpdater turns a fix into the
shared LastKnownLocation preference that schedule builds read.
"""
import logging
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

from .geo import IP_PROVIDERS, fetch_json, lookup_ip_location
from .settings import (
    DEFAULT_COORDINATES,
    SettingsResolver,
    parse_coordinates,
    record_location,
    set_city,
)

logger = logging.getLogger(__name__)


class LocationError(RuntimeError):
    pass


def _completed(fn):
    future = Future()
    try:
        future.set_result(fn())
    except LocationError as exc:
        future.set_exception(exc)
    return future


class LocationService:
    def request_location(self):
        raise NotImplementedError


class StaticLocationService(LocationService):
    """Always reports the same fix; the fallback when location access is denied."""

    def __init__(self, coordinates=DEFAULT_COORDINATES):
        self.coordinates = coordinates

    def request_location(self):
        return _completed(lambda: self.coordinates)


class IPLocationService(LocationService):
    """One-shot IP geolocation. Runs on `executor` when given, inline otherwise."""

    def __init__(self, providers=IP_PROVIDERS, fetch=fetch_json, executor=None):
        self.providers = list(providers)
        self.fetch = fetch
        self.executor = executor

    def _locate(self):
        result = lookup_ip_location(self.providers, fetch=self.fetch)
        if result is None:
            raise LocationError("Unable to detect location (network or provider error)")
        coordinates, _city = result
        valid = parse_coordinates({"latitude": coordinates.latitude, "longitude": coordinates.longitude})
        if valid is None:
            raise LocationError(f"Provider returned invalid coordinates: {coordinates}")
        return valid

    def request_location(self):
        if self.executor is not None:
            return self.executor.submit(self._locate)
        return _completed(self._locate)


class LocationUpdater:
    def __init__(self, service, store, reverse_geocoder=None):
        self.service = service
        self.store = store
        self.reverse_geocoder = reverse_geocoder

    def refresh(self, timeout=10):
        """Request a fix and persist it; returns the coordinates now in effect.

        On failure the stored location is left untouched.
        """
        future = self.service.request_location()
        try:
            coordinates = future.result(timeout=timeout)
        except (LocationError, FutureTimeoutError) as exc:
            logger.warning("Location update failed: %s", str(exc) or "timed out")
            return SettingsResolver(self.store).resolve().coordinates

        try:
            record_location(self.store, coordinates)
        except ValueError as exc:
            logger.warning("Location update rejected: %s", exc)
            return SettingsResolver(self.store).resolve().coordinates
        logger.info("Recorded location %.4f, %.4f", coordinates.latitude, coordinates.longitude)

        if self.reverse_geocoder is not None:
            try:
                city = self.reverse_geocoder(coordinates)
            except (OSError, ValueError) as exc:
                logger.warning("Reverse geocoding failed: %s", exc)
                city = None
            if city:
                set_city(self.store, city)
        return coordinates
