import json
import re
from cdt.common.logger import log
from cdt.common.setup import PATHS


#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.settings

DISPLAY_MODES = ("default", "dvd")

# Default values for every setting, which also double as the expected type of each one.
_SETTINGS_DEFAULTS = {
    "fps": 60,
    "window_width": 800,
    "window_height": 600,
    "font_family": "Roboto",
    "font_file": None,
    "background": "#000000",
    "foreground": "#ffffff",
    "paused_foreground": "#787878",
    "show_hundredths": False,
    "display_mode": "default",
    "velocity": 3,
    "notify": True,
    "flash": True,
    "exit_on_expiry": False,
    "always_on_top": False,
}
# Settings that must be strictly positive integers.
_POSITIVE_INTS = ("fps", "window_width", "window_height", "velocity")
# Colour settings, written as #rgb or #rrggbb.
_COLORS = ("background", "foreground", "paused_foreground")
_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return dict(_SETTINGS_DEFAULTS)

# Checks a single value against its default's type. bools are ints in Python, so they're kept apart explicitly.
def _is_valid(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if key == "font_file":
        return value is None or isinstance(value, str)
    if key == "display_mode":
        return value in DISPLAY_MODES
    if key in _COLORS:
        return isinstance(value, str) and _HEX_COLOR.fullmatch(value) is not None
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool) and (key not in _POSITIVE_INTS or value > 0)
    return isinstance(value, type(default))

#endregion === Helpers and Paths ===

#region === Loading Settings ===

# Loads settings from the given path (or SETTINGS_PATH), filling in defaults for anything missing or invalid. The
# file is optional and never written back.
def load_settings(path=None):
    path = path or SETTINGS_PATH
    settings = build_default_settings()
    try:
        if not path.exists():
            log.info(f"No settings file found at '{path}', using default settings.")
            return settings

        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise TypeError(f"Expected a JSON object in '{path}', got {type(loaded).__name__}")

        defaulted_values = set()
        for key in _SETTINGS_DEFAULTS:
            if key not in loaded:
                continue
            if _is_valid(key, loaded[key]):
                settings[key] = loaded[key]
            else:
                defaulted_values.add(key)

        # Log results
        if defaulted_values:
            log.warning(f"Loaded settings from '{path}', but with invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{path}'.")
        return settings
    # Fall back to defaults in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError, UnicodeDecodeError):
        log.warning(f"Ran into an error while trying to load '{path}', falling back to default settings.",exc_info=True)
        return build_default_settings()

#endregion === Loading Settings ===
