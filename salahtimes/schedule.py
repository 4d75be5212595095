import logging
from dataclasses import dataclass
from datetime import date, datetime

from .calc import AdhanCalculator
from .methods import PRAYER_ORDER, method_name, resolve_method

logger = logging.getLogger(__name__)


@dataclass
class PrayerTime:
    name: str
    time: datetime
    is_next: bool = False


def civil_date(day):
    """Calendar date of `day`; a datetime keeps its own wall-clock date."""
    if isinstance(day, datetime):
        day = day.date()
    return date(day.year, day.month, day.day)


def find_next_prayer(prayers, now):
    for index, prayer in enumerate(prayers):
        if prayer.time > now:
            return index
    return None


def next_prayer(prayers):
    for prayer in prayers:
        if prayer.is_next:
            return prayer
    return None


def build_schedule(day, coordinates, method, now, calculator=None):
    """Today's five prayers in canonical order, with the first upcoming one flagged.

    Returns an empty list when the calculator has no result for the inputs.
    Once Isha has passed nothing is flagged; there is no rollover to the
    next day's Fajr.
    """
    day = civil_date(day)
    method = resolve_method(method)
    if calculator is None:
        calculator = AdhanCalculator()

    times = calculator(coordinates, day, method)
    if times is None:
        logger.info("Prayer times unavailable for %s (%s)", day.isoformat(), method_name(method))
        return []

    prayers = [PrayerTime(name=name, time=getattr(times, name.lower())) for name in PRAYER_ORDER]

    if now.tzinfo is None and prayers[0].time.tzinfo is not None:
        now = now.astimezone()
    index = find_next_prayer(prayers, now)
    if index is not None:
        prayers[index].is_next = True
    return prayers


def build_for_preferences(prefs, day, now, calculator=None):
    return build_schedule(day, prefs.coordinates, prefs.calculation_method, now, calculator=calculator)
