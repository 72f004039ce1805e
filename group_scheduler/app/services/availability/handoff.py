# group_scheduler/app/services/availability/handoff.py
"""
Slot-booking handoff.

Once a caller picks a dated slot, it is turned into a GroupMeetingRequest
and passed to collaborators this package does not implement:

- ConflictChecker: third-party calendar lookup per attendee
- BookingCreator:  persists the booking, enforces uniqueness

The engine is not called again on this path.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Protocol

from pydantic import ValidationError

from ...schemas.availability import (
    DatedGroupSlot,
    DatedRoundRobinSlot,
    GroupMeetingRequest,
)
from .config import COLLECTIVE, ROUND_ROBIN
from .errors import HandoffError

logger = logging.getLogger(__name__)


class ConflictChecker(Protocol):
    def has_conflict(self, attendee: str, start: datetime, end: datetime) -> bool: ...


class BookingCreator(Protocol):
    def create_group_booking(self, request: GroupMeetingRequest) -> str:
        """Persist the booking and return its id."""
        ...


def build_meeting_request(
    slot: DatedGroupSlot | DatedRoundRobinSlot,
    *,
    group_id: str,
    organizer_email: str,
    organizer_name: str,
    title: str,
    duration: int,
    start: Optional[datetime] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    meeting_link: Optional[str] = None,
    agenda: Optional[str] = None,
    optional_attendees: Iterable[str] = (),
) -> GroupMeetingRequest:
    """
    Build the booking request for a chosen slot.

    The meeting starts at `start` (default: slot start) and must end
    inside the slot. Collective slots invite every available participant;
    round-robin slots go to the assigned participant.

    Raises:
        HandoffError: meeting does not fit the slot or the request is invalid
    """
    start = start or slot.start
    end = start + timedelta(minutes=duration)
    if start < slot.start or end > slot.end:
        raise HandoffError(
            f"Meeting {start:%Y-%m-%d %H:%M} + {duration} min does not fit slot "
            f"{slot.start:%H:%M}-{slot.end:%H:%M} on {slot.date.isoformat()}"
        )

    if isinstance(slot, DatedRoundRobinSlot):
        meeting_type = ROUND_ROBIN
        required = [slot.assigned_participant]
        assigned = slot.assigned_participant
    else:
        meeting_type = COLLECTIVE
        required = list(dict.fromkeys(slot.available_participants))
        assigned = None

    try:
        return GroupMeetingRequest(
            group_id=group_id,
            organizer_email=organizer_email,
            organizer_name=organizer_name,
            title=title,
            description=description,
            location=location,
            meeting_link=meeting_link,
            agenda=agenda,
            preferred_start=start,
            duration=duration,
            meeting_type=meeting_type,
            required_attendees=required,
            optional_attendees=[a for a in optional_attendees if a not in required],
            assigned_member=assigned,
        )
    except ValidationError as exc:
        raise HandoffError(f"Invalid meeting request: {exc}") from exc


def submit_booking(
    request: GroupMeetingRequest,
    creator: BookingCreator,
    conflict_checker: ConflictChecker | None = None,
) -> str:
    """
    Check required attendees for calendar conflicts, then hand the request
    to the booking creator.

    Returns:
        Booking id from the creator.
    """
    end = request.preferred_start + timedelta(minutes=request.duration)

    if conflict_checker is not None:
        busy = [
            attendee for attendee in request.required_attendees
            if conflict_checker.has_conflict(attendee, request.preferred_start, end)
        ]
        if busy:
            raise HandoffError(f"Calendar conflict for: {', '.join(busy)}")

    booking_id = creator.create_group_booking(request)
    logger.info(
        f"Group booking {booking_id} handed off: {request.meeting_type}, "
        f"{request.preferred_start:%Y-%m-%d %H:%M}, {len(request.required_attendees)} attendees"
    )
    return booking_id
