import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

# Storage namespace shared by the app and every widget surface
APP_GROUP = "group.bd.com.islamicguidence.prayertime"

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "salahtimes")
PREFS_ENV = "SALAHTIMES_PREFS"

KEY_CALCULATION_METHOD = "calculationMethod"
KEY_CITY = "city"
KEY_USE_LOCATION = "useLocation"
KEY_LAST_KNOWN_LOCATION = "LastKnownLocation"


def default_prefs_path(group=APP_GROUP):
    override = os.environ.get(PREFS_ENV)
    if override:
        return os.path.expanduser(override)
    return os.path.join(CONFIG_DIR, f"{group}.json")


def load_prefs(path):
    """Read the preference document; anything unreadable counts as empty."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable preferences at %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring preferences at %s: expected an object", path)
        return {}
    return data


def save_prefs(prefs, path):
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".prefs-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(prefs, f, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class PreferenceStore:
    """Key-value preferences backed by one JSON document per namespace."""

    def __init__(self, path=None):
        self.path = path or default_prefs_path()

    def get(self, key, default=None):
        return load_prefs(self.path).get(key, default)

    def set(self, key, value):
        prefs = load_prefs(self.path)
        prefs[key] = value
        save_prefs(prefs, self.path)
        logger.debug("Saved %s to %s", key, self.path)

    def remove(self, key):
        prefs = load_prefs(self.path)
        if key in prefs:
            del prefs[key]
            save_prefs(prefs, self.path)

    def as_dict(self):
        return load_prefs(self.path)


class MemoryPreferenceStore:
    def __init__(self, values=None):
        self._values = dict(values or {})

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value

    def remove(self, key):
        self._values.pop(key, None)

    def as_dict(self):
        return dict(self._values)
