from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from salahtimes.calc import Coordinates, DailyTimes

DHAKA = ZoneInfo("Asia/Dhaka")


class FakeCalculator:
    """Returns fixed Dhaka-like times for whatever day it is asked about."""

    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def __call__(self, coordinates, day, method):
        self.calls.append((coordinates, day, method))
        if not self.result:
            return None
        at = lambda h, m: datetime(day.year, day.month, day.day, h, m, tzinfo=DHAKA)
        return DailyTimes(
            fajr=at(4, 55),
            dhuhr=at(11, 48),
            asr=at(15, 36),
            maghrib=at(17, 15),
            isha=at(18, 31),
        )


@pytest.fixture
def calculator():
    return FakeCalculator()


@pytest.fixture
def coords():
    return Coordinates(23.777176, 90.399452)
