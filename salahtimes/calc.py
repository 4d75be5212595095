import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from adhanpy.PrayerTimes import PrayerTimes
from adhanpy.calculation.CalculationMethod import CalculationMethod as AdhanMethod
from adhanpy.calculation.CalculationParameters import CalculationParameters
from adhanpy.calculation.PrayerAdjustments import PrayerAdjustments

from .methods import method_name, method_preset

logger = logging.getLogger(__name__)

# Adhan presets that adhanpy does not ship as named CalculationMethod members
FALLBACK_PRESETS = {
    "TEHRAN": {"fajr_angle": 17.7, "isha_angle": 14.0},
    "TURKEY": {
        "fajr_angle": 18.0,
        "isha_angle": 17.0,
        "method_adjustments": PrayerAdjustments(sunrise=-7, dhuhr=5, asr=4, maghrib=7),
    },
    "OTHER": {"fajr_angle": 0.0, "isha_angle": 0.0},
}


def local_timezone():
    return datetime.now().astimezone().tzinfo


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DailyTimes:
    fajr: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime


def adhan_preset(method):
    """Map a method setting to adhanpy's named preset, or explicit parameters."""
    preset = method_preset(method)
    adhan_method = getattr(AdhanMethod, preset, None)
    if adhan_method is not None:
        return adhan_method
    return CalculationParameters(**FALLBACK_PRESETS[preset])


class AdhanCalculator:
    """Computes one civil day of prayer times with adhanpy.

    Returns None when the geometry leaves a prayer undefined for the method,
    e.g. twilight angles that are never reached near the poles.
    """

    def __init__(self, time_zone=None):
        self.time_zone = time_zone or local_timezone()

    def __call__(self, coordinates: Coordinates, day: date, method) -> Optional[DailyTimes]:
        coords = (coordinates.latitude, coordinates.longitude)
        midnight = datetime(day.year, day.month, day.day)
        preset = adhan_preset(method)
        try:
            if isinstance(preset, CalculationParameters):
                times = PrayerTimes(coords, midnight, calculation_parameters=preset, time_zone=self.time_zone)
            else:
                times = PrayerTimes(coords, midnight, preset, time_zone=self.time_zone)
        except (ValueError, ArithmeticError, RuntimeError) as exc:
            logger.warning(
                "No prayer times for %s on %s with %s: %s",
                coordinates, day.isoformat(), method_name(method), exc,
            )
            return None

        values = [times.fajr, times.dhuhr, times.asr, times.maghrib, times.isha]
        if any(value is None for value in values):
            logger.warning("Incomplete prayer times for %s on %s", coordinates, day.isoformat())
            return None
        return DailyTimes(*values)
