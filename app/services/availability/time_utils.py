"""Wall-clock arithmetic shared by the availability and conflict logic"""
import re
from datetime import time
from typing import Optional, Union

from app.core.exceptions import InvalidTimeError

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def to_minutes(value: Optional[Union[str, time]]) -> int:
    """
    Convert "HH:MM" or "HH:MM:SS" into minutes since midnight.

    Empty or missing values count as midnight. Anything else that does not
    parse raises InvalidTimeError instead of silently becoming 0.
    """
    if value is None or value == "":
        return 0

    if isinstance(value, time):
        return value.hour * 60 + value.minute

    match = _CLOCK_RE.match(str(value).strip())
    if not match:
        raise InvalidTimeError(f"Invalid time format: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 24 or minutes > 59 or (hours == 24 and minutes):
        raise InvalidTimeError(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def to_clock_string(minutes: int) -> str:
    """Minutes since midnight -> zero-padded "HH:MM"."""
    return f"{int(minutes // 60):02d}:{int(minutes % 60):02d}"


def is_valid_time(value: Optional[str]) -> bool:
    """True for a 00:00-23:59 wall-clock string, optionally with seconds."""
    if not value:
        return False
    match = _CLOCK_RE.match(value)
    if not match:
        return False
    seconds = match.group(3)
    return (
        int(match.group(1)) <= 23
        and int(match.group(2)) <= 59
        and (seconds is None or int(seconds) <= 59)
    )


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval overlap; touching endpoints do not overlap."""
    return max(a_start, b_start) < min(a_end, b_end)
