import argparse
import json
import logging
import sys
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .calc import AdhanCalculator, Coordinates, local_timezone
from .config import PreferenceStore
from .geo import geocode_city, reverse_geocode
from .location import IPLocationService, LocationUpdater
from .methods import CalculationMethod, method_name
from .render import render_list, render_widget
from .schedule import build_for_preferences
from .settings import (
    SettingsResolver,
    record_location,
    set_calculation_method,
    set_city,
    set_use_location,
)

logger = logging.getLogger("salahtimes")


def get_timezone(tz_name):
    if tz_name:
        return ZoneInfo(tz_name)
    return local_timezone()


def handle_cli(args):
    store = PreferenceStore(args.prefs)

    if args.list_methods:
        for method in CalculationMethod:
            print(f"{method.value}: {method_name(method)}")
        return 0

    if args.set_method:
        method = set_calculation_method(store, args.set_method)
        logger.info("Calculation method set to %s", method.value)
        return 0

    if args.set_city:
        if args.lat is not None and args.lng is not None:
            coordinates = Coordinates(float(args.lat), float(args.lng))
        else:
            result = geocode_city(args.set_city)
            if not result:
                raise ValueError(f"Location not found: {args.set_city}")
            coordinates, label = result
            logger.info("Resolved %s to %s", args.set_city, label)
        record_location(store, coordinates)
        set_city(store, args.set_city)
        set_use_location(store, False)
        return 0

    if args.use_location:
        set_use_location(store, True)
        updater = LocationUpdater(IPLocationService(), store, reverse_geocoder=reverse_geocode)
        coordinates = updater.refresh()
        print(f"{coordinates.latitude:.6f}, {coordinates.longitude:.6f}")
        return 0

    prefs = SettingsResolver(store).resolve()
    tzinfo = get_timezone(args.tz)
    now = datetime.now(tzinfo)
    day = date.fromisoformat(args.date) if args.date else now.date()
    prayers = build_for_preferences(prefs, day, now, calculator=AdhanCalculator(time_zone=tzinfo))

    format_24h = not args.twelve_hour
    if args.waybar:
        payload = render_widget(prayers, prefs, now, format_24h=format_24h)
        print(json.dumps(payload, ensure_ascii=True))
        return 0

    print("\n".join(render_list(prayers, prefs, day, format_24h=format_24h)))
    return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Daily prayer times widget")
    parser.add_argument("--waybar", action="store_true", help="Output Waybar JSON payload")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--set-method", help="Set calculation method (key or name)")
    parser.add_argument("--set-city", help="Set a manual city and stop using device location")
    parser.add_argument("--lat", type=float, help="Latitude for --set-city (skips geocoding)")
    parser.add_argument("--lng", type=float, help="Longitude for --set-city (skips geocoding)")
    parser.add_argument("--use-location", action="store_true", help="Detect location now and keep using it")
    parser.add_argument("--date", help="Civil date to show (YYYY-MM-DD), default today")
    parser.add_argument("--tz", help="IANA time zone for displayed times (default local)")
    parser.add_argument("--12h", dest="twelve_hour", action="store_true", help="Use 12-hour times")
    parser.add_argument("--prefs", help="Preferences file (default ~/.config/salahtimes/<group>.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return handle_cli(args)
    except Exception as exc:
        logger.debug("Command failed", exc_info=True)
        if args.waybar:
            payload = {
                "text": "Prayer?",
                "tooltip": str(exc),
                "class": "prayertimes-error"
            }
            print(json.dumps(payload, ensure_ascii=True))
            return 0
        print(f"Error: {exc}", file=sys.stderr)
        return 1
