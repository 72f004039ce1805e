# group_scheduler/app/services/availability/__init__.py
"""
Group availability aggregation.

Collective mode: maximal windows with an identical set of free participants
Round-robin mode: fixed slots, each assigned to one participant, fairness first
"""

from .config import AggregationConfig, get_aggregation_config
from .engine import (
    build_report,
    compute_availability,
    compute_group_availability,
    load_participants,
)
from .collective import aggregate_collective
from .round_robin import assign_round_robin
from .formatter import AvailabilityReport
from .calendar import expand_collective_slots, expand_round_robin_slots
from .handoff import build_meeting_request, submit_booking
from .errors import (
    AvailabilityError,
    DegenerateRangeError,
    HandoffError,
    InvalidModeError,
    InvalidParticipantError,
    InvalidTimeFormatError,
    UnknownWeekdayError,
)

__all__ = [
    "AggregationConfig",
    "get_aggregation_config",
    "build_report",
    "compute_availability",
    "compute_group_availability",
    "load_participants",
    "aggregate_collective",
    "assign_round_robin",
    "AvailabilityReport",
    "expand_collective_slots",
    "expand_round_robin_slots",
    "build_meeting_request",
    "submit_booking",
    "AvailabilityError",
    "DegenerateRangeError",
    "HandoffError",
    "InvalidModeError",
    "InvalidParticipantError",
    "InvalidTimeFormatError",
    "UnknownWeekdayError",
]
