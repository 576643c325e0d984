"""Duration parsing and formatting: ``HH:MM:SS`` text <-> seconds."""

import math
import re

_FIELD = re.compile(r"[0-9]+")


class FormatError(ValueError):
    """Raised when a duration string is not a valid ``HH:MM:SS``."""


def parse_duration(text):
    """Return the total seconds of an ``HH:MM:SS`` string.

    Each field is one or more digits. Minutes and seconds must be within
    0-59, hours are unbounded. Anything else raises FormatError.
    """
    parts = text.strip().split(":")
    if len(parts) != 3:
        raise FormatError(f"Invalid duration '{text}': expected exactly three fields (hh:mm:ss)")
    for part in parts:
        if not _FIELD.fullmatch(part):
            raise FormatError(f"Invalid duration '{text}': '{part}' is not a number")

    hours, minutes, seconds = (int(p) for p in parts)
    if minutes > 59:
        raise FormatError(f"Invalid duration '{text}': minutes must be between 0 and 59")
    if seconds > 59:
        raise FormatError(f"Invalid duration '{text}': seconds must be between 0 and 59")
    return hours * 3600 + minutes * 60 + seconds


def format_duration(seconds, hundredths=False):
    """Format remaining seconds as HH:MM:SS. Negative values clamp to zero.

    Whole-second display rounds up, so 00:00:00 only shows once time is
    actually out. With ``hundredths`` the seconds field carries two
    decimals, floored.
    """
    seconds = max(0.0, float(seconds))
    if hundredths:
        centis = int(seconds * 100)
        h, rem = divmod(centis, 360000)
        m, rem = divmod(rem, 6000)
        s, cs = divmod(rem, 100)
        return f"{h:02d}:{m:02d}:{s:02d}.{cs:02d}"

    whole = math.ceil(seconds)
    h, rem = divmod(whole, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"
