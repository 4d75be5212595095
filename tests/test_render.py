from datetime import date, datetime, timedelta

from salahtimes.render import format_countdown, format_time, render_list, render_widget
from salahtimes.schedule import build_schedule
from salahtimes.settings import PersistedPreferences

from conftest import DHAKA

DAY = date(2024, 11, 16)


def schedule_at(calculator, coords, h, m):
    now = datetime(2024, 11, 16, h, m, tzinfo=DHAKA)
    return build_schedule(DAY, coords, "muslimWorldLeague", now, calculator=calculator), now


def test_format_time():
    dt = datetime(2024, 11, 16, 15, 6)
    assert format_time(dt, True) == "15:06"
    assert format_time(dt, False) == "3:06 PM"


def test_format_countdown():
    assert format_countdown(timedelta(hours=2, minutes=5)) == "2h05"
    assert format_countdown(timedelta(minutes=7, seconds=59)) == "7m"
    assert format_countdown(timedelta(seconds=-30)) == "0m"


def test_widget_shows_next_prayer(calculator, coords):
    prayers, now = schedule_at(calculator, coords, 12, 0)
    payload = render_widget(prayers, PersistedPreferences(city="Dhaka"), now)
    assert payload["text"] == "Asr 15:36 - 3h36"
    assert payload["class"] == "prayertimes"
    assert payload["tooltip"].splitlines()[0] == "Dhaka (Muslim World League)"
    assert "Asr     15:36  <- next" in payload["tooltip"]


def test_widget_after_isha(calculator, coords):
    prayers, now = schedule_at(calculator, coords, 22, 0)
    payload = render_widget(prayers, PersistedPreferences(), now)
    assert payload["text"] == "Isha 18:31"
    assert payload["class"] == "prayertimes-done"


def test_widget_unavailable():
    payload = render_widget([], PersistedPreferences(), datetime(2024, 11, 16, tzinfo=DHAKA))
    assert payload["class"] == "prayertimes-unavailable"
    assert payload["tooltip"] == "Prayer Times (Muslim World League)"


def test_render_list(calculator, coords):
    prayers, _ = schedule_at(calculator, coords, 5, 0)
    lines = render_list(prayers, PersistedPreferences(), DAY)
    assert lines[0] == "Prayer Times - Sat 16 Nov 2024"
    assert lines[1:] == [
        "Fajr    04:55",
        "Dhuhr   11:48  <- next",
        "Asr     15:36",
        "Maghrib 17:15",
        "Isha    18:31",
    ]
