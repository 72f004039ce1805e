# group_scheduler/app/services/availability/formatter.py
"""
Presentation helpers and the read-only result report.

No business logic here: only string formatting, overlap-level
classification for colouring, and filtering by weekday.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ...schemas.availability import WEEKDAYS, CollectiveSlot, RoundRobinSlot
from .errors import UnknownWeekdayError
from .timegrid import to_minutes

DAY_LABELS = {
    "monday": "Monday",
    "tuesday": "Tuesday",
    "wednesday": "Wednesday",
    "thursday": "Thursday",
    "friday": "Friday",
    "saturday": "Saturday",
    "sunday": "Sunday",
}


def day_label(day: str) -> str:
    return DAY_LABELS[day]


def format_12h(time_str: str) -> str:
    """Convert "HH:MM" to 12-hour display, e.g. "14:30" -> "2:30 PM"."""
    minutes = to_minutes(time_str)
    hour, minute = divmod(minutes, 60)
    hour %= 24
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def format_range_12h(start: str, end: str) -> str:
    return f"{format_12h(start)} - {format_12h(end)}"


def availability_level(available: int, total: int) -> str:
    """
    Overlap level used for threshold colouring.

    full:   everyone is free
    high:   at least 70%
    medium: at least 40%
    low:    anything below
    """
    if total <= 0:
        return "low"
    ratio = available / total
    if ratio >= 1:
        return "full"
    if ratio >= 0.7:
        return "high"
    if ratio >= 0.4:
        return "medium"
    return "low"


def describe_collective(slot: CollectiveSlot) -> dict:
    return {
        "day": day_label(slot.day),
        "time": format_range_12h(slot.start, slot.end),
        "available": f"{slot.available_count}/{slot.total_participants}",
        "participants": list(slot.available_participants),
        "level": availability_level(slot.available_count, slot.total_participants),
    }


def describe_round_robin(slot: RoundRobinSlot) -> dict:
    return {
        "day": day_label(slot.day),
        "time": format_range_12h(slot.start, slot.end),
        "assigned": slot.assigned_participant,
    }


@dataclass(frozen=True)
class AvailabilityReport:
    """
    Read-only view over one aggregation call.

    Holds both collections; either may be empty when only one mode
    was computed.
    """
    collective: tuple[CollectiveSlot, ...] = ()
    round_robin: tuple[RoundRobinSlot, ...] = ()
    assignment_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, "collective", tuple(self.collective))
        object.__setattr__(self, "round_robin", tuple(self.round_robin))
        object.__setattr__(self, "assignment_counts", MappingProxyType(dict(self.assignment_counts)))

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to book ("no overlapping availability")."""
        return not self.collective and not self.round_robin

    def collective_for(self, day: str) -> list[CollectiveSlot]:
        _check_day(day)
        return [slot for slot in self.collective if slot.day == day]

    def round_robin_for(self, day: str) -> list[RoundRobinSlot]:
        _check_day(day)
        return [slot for slot in self.round_robin if slot.day == day]

    def days_with_slots(self) -> list[str]:
        """Weekdays that have at least one slot in either collection, Monday first."""
        used = {slot.day for slot in self.collective} | {slot.day for slot in self.round_robin}
        return [day for day in WEEKDAYS if day in used]

    def display(self, day: str) -> dict:
        """Formatted rows for one weekday."""
        return {
            "day": day_label(day),
            "collective": [describe_collective(slot) for slot in self.collective_for(day)],
            "round_robin": [describe_round_robin(slot) for slot in self.round_robin_for(day)],
        }


def _check_day(day: str) -> None:
    if day not in WEEKDAYS:
        raise UnknownWeekdayError([day])
