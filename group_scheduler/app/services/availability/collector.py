# group_scheduler/app/services/availability/collector.py
"""
Per-participant, per-day bucket collection.

Expands the enabled time ranges of one day into the set of occupied
bucket starts. Buckets step from each range's own start (09:10 gives
09:10, 09:25, ...); overlapping ranges collapse through set union.

Malformed ranges (bad "HH:MM" or end <= start) are skipped and logged;
the remaining ranges of the day still count.
"""

import logging

from ...schemas.availability import DayAvailability, Participant, TimeRange
from .errors import AvailabilityError, DegenerateRangeError
from .timegrid import enumerate_buckets, to_minutes

logger = logging.getLogger(__name__)


def collect_day_buckets(
    day: DayAvailability,
    resolution: int,
    participant: str = "",
) -> set[int]:
    """
    Occupied bucket starts (minutes since midnight) for one day.

    Args:
        day: the participant's availability for that weekday
        resolution: grid step in minutes
        participant: identifier, only used in log messages
    """
    buckets: set[int] = set()

    for time_range in day.effective_slots:
        try:
            start_min, end_min = parse_range(time_range)
        except AvailabilityError as e:
            logger.warning(f"Skipping time range for {participant or 'participant'}: {e}")
            continue

        buckets.update(enumerate_buckets(start_min, end_min, resolution))

    return buckets


def build_day_grid(
    participants: list[Participant],
    day_name: str,
    resolution: int,
) -> dict[int, list[int]]:
    """
    Map bucket start -> positions of the participants occupying it.

    Positions (not identifiers) keep duplicate identifiers apart and come
    out in participant input order.
    """
    grid: dict[int, list[int]] = {}

    for position, participant in enumerate(participants):
        day = participant.availability.day(day_name)
        if not day.enabled:
            continue
        for bucket in collect_day_buckets(day, resolution, participant.identifier):
            grid.setdefault(bucket, []).append(position)

    return grid


def parse_range(time_range: TimeRange) -> tuple[int, int]:
    """
    Convert a TimeRange to (start, end) minutes.

    Raises InvalidTimeFormatError or DegenerateRangeError.
    """
    start_min = to_minutes(time_range.start)
    end_min = to_minutes(time_range.end)
    if end_min <= start_min:
        raise DegenerateRangeError(time_range.start, time_range.end)
    return start_min, end_min
