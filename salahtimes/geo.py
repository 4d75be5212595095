import json
import logging
import re
import urllib.parse
import urllib.request

from .calc import Coordinates

logger = logging.getLogger(__name__)

USER_AGENT = "salahtimes/1.0"
NOMINATIM_URL = "https://nominatim.openstreetmap.org"
IP_PROVIDERS = [
    "https://ipapi.co/json/",
    "https://ipinfo.io/json"
]

_LATIN_RE = re.compile(r"[A-Za-z]")
_ARABIC_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]")
_TIFINAGH_RE = re.compile(r"[\u2D30-\u2D7F]")


def clean_label(label):
    parts = [p.strip() for p in label.split(",") if p.strip()]
    kept = []
    for part in parts:
        if _TIFINAGH_RE.search(part):
            continue
        if not (_LATIN_RE.search(part) or _ARABIC_RE.search(part)):
            continue
        kept.append(part)
    return ", ".join(kept) if kept else label


def fetch_json(url, timeout=6):
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.load(resp)


def lookup_ip_location(providers=IP_PROVIDERS, fetch=fetch_json):
    """Approximate (Coordinates, city) from the public IP, or None."""
    data = None
    for url in providers:
        try:
            data = fetch(url)
        except (OSError, ValueError) as exc:
            logger.debug("IP location provider %s failed: %s", url, exc)
            continue
        if data:
            break
    if not data:
        return None

    lat = data.get("latitude")
    lon = data.get("longitude")
    if lat is None or lon is None:
        loc = data.get("loc")
        if loc and "," in loc:
            lat, lon = loc.split(",", 1)
    if lat is None or lon is None:
        return None
    try:
        coordinates = Coordinates(float(lat), float(lon))
    except (TypeError, ValueError):
        return None
    return coordinates, data.get("city") or ""


def geocode_city(query, fetch=fetch_json):
    """Resolve a city name to (Coordinates, label), or None when not found."""
    params = {
        "format": "jsonv2",
        "limit": 1,
        "addressdetails": 1,
        "q": query.strip()
    }
    data = fetch(f"{NOMINATIM_URL}/search?{urllib.parse.urlencode(params)}")
    if not data:
        return None
    item = data[0]
    coordinates = Coordinates(float(item["lat"]), float(item["lon"]))
    return coordinates, clean_label(item.get("display_name", query))


def reverse_geocode(coordinates, fetch=fetch_json):
    """Locality name for a coordinate, or None."""
    params = {
        "format": "jsonv2",
        "zoom": 10,
        "addressdetails": 1,
        "lat": coordinates.latitude,
        "lon": coordinates.longitude
    }
    data = fetch(f"{NOMINATIM_URL}/reverse?{urllib.parse.urlencode(params)}")
    address = (data or {}).get("address") or {}
    for key in ("city", "town", "village", "municipality"):
        if address.get(key):
            return clean_label(address[key])
    return None
