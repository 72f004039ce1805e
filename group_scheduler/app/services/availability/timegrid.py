# group_scheduler/app/services/availability/timegrid.py
"""
Fixed-resolution time grid.

A day is cut into buckets of `resolution` minutes; a bucket is identified by
its start in minutes since midnight. Turning ranges into bucket sets makes
overlap between participants a plain set operation.
"""

import re

from .errors import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def to_minutes(time_str: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    "24:00" is accepted as the end-of-day boundary (1440).
    Raises InvalidTimeFormatError for anything else that is not a
    zero-padded 24-hour time.
    """
    if not isinstance(time_str, str):
        raise InvalidTimeFormatError(time_str)
    if time_str == "24:00":
        return MINUTES_PER_DAY

    match = _TIME_RE.match(time_str)
    if not match:
        raise InvalidTimeFormatError(time_str)

    return int(match.group(1)) * 60 + int(match.group(2))


def to_time_string(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes must be in [0, {MINUTES_PER_DAY}), got {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_boundary(minutes: int) -> str:
    """Like to_time_string, but renders the end of the day as "24:00"."""
    if minutes == MINUTES_PER_DAY:
        return "24:00"
    return to_time_string(minutes)


def enumerate_buckets(start_minutes: int, end_minutes: int, resolution: int) -> list[int]:
    """
    Bucket starts from start_minutes while strictly below end_minutes.

    Degenerate ranges (end <= start) produce an empty list.
    """
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    if end_minutes <= start_minutes:
        return []
    return list(range(start_minutes, end_minutes, resolution))
