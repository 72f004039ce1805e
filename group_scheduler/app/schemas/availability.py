# group_scheduler/app/schemas/availability.py
"""
Pydantic schemas for group availability.

Input records (participants and their weekly pattern) are parsed strictly:
unknown keys and missing required fields fail at this boundary.
Time strings inside TimeRange are left as plain strings; the collector
skips and logs malformed ones instead of failing the whole call.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DayName = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
Mode = Literal["collective", "round-robin"]
Confidence = Literal["high", "medium", "low"]


# ── Input ────────────────────────────────────────────────────────────────


class TimeRange(BaseModel):
    """A "HH:MM"-"HH:MM" range inside one day."""
    start: str
    end: str

    model_config = {"extra": "forbid", "frozen": True}


class DayAvailability(BaseModel):
    enabled: bool
    time_slots: list[TimeRange] = Field(
        default_factory=list,
        validation_alias=AliasChoices("time_slots", "timeSlots"),
    )

    model_config = {"extra": "forbid"}

    @property
    def effective_slots(self) -> list[TimeRange]:
        """Ranges that count: none at all when the day is disabled."""
        return self.time_slots if self.enabled else []


class WeeklyAvailability(BaseModel):
    """Recurring Monday..Sunday pattern. All seven days are required."""
    monday: DayAvailability
    tuesday: DayAvailability
    wednesday: DayAvailability
    thursday: DayAvailability
    friday: DayAvailability
    saturday: DayAvailability
    sunday: DayAvailability

    model_config = {"extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def reject_unknown_weekdays(cls, data):
        if isinstance(data, dict):
            unknown = sorted(str(key) for key in data if key not in WEEKDAYS)
            if unknown:
                raise PydanticCustomError(
                    "unknown_weekday",
                    "Unknown weekday key(s): {keys}",
                    {"keys": ", ".join(unknown)},
                )
        return data

    def day(self, name: str) -> DayAvailability:
        return getattr(self, name)


class Participant(BaseModel):
    identifier: str = Field(
        min_length=1,
        validation_alias=AliasChoices("identifier", "email"),
    )
    availability: WeeklyAvailability = Field(
        validation_alias=AliasChoices("availability", "weekly_availability", "weeklyAvailability"),
    )

    model_config = {"extra": "forbid", "frozen": True}


# ── Output ───────────────────────────────────────────────────────────────


class CollectiveSlot(BaseModel):
    """Maximal window of a weekday during which the same participants are free."""
    day: DayName
    start: str  # "HH:MM"
    end: str    # "HH:MM", "24:00" at end of day
    available_participants: tuple[str, ...]
    total_participants: int

    model_config = {"frozen": True}

    @property
    def available_count(self) -> int:
        return len(self.available_participants)


class RoundRobinSlot(BaseModel):
    """Fixed-length slot assigned to exactly one participant."""
    day: DayName
    start: str
    end: str
    assigned_participant: str

    model_config = {"frozen": True}


class RoundRobinAssignment(BaseModel):
    """Round-robin slots plus the final per-participant assignment counts."""
    slots: list[RoundRobinSlot]
    assignment_counts: dict[str, int]

    model_config = {"frozen": True}


class DatedGroupSlot(BaseModel):
    """Collective slot placed on a concrete calendar date."""
    date: date
    day: DayName
    start: datetime
    end: datetime
    available_participants: tuple[str, ...]
    total_participants: int
    confidence: Confidence

    model_config = {"frozen": True}


class DatedRoundRobinSlot(BaseModel):
    """Round-robin slot placed on a concrete calendar date."""
    date: date
    day: DayName
    start: datetime
    end: datetime
    assigned_participant: str

    model_config = {"frozen": True}


# ── Booking handoff ──────────────────────────────────────────────────────


class GroupMeetingRequest(BaseModel):
    """What the booking-creation collaborator receives for a chosen slot."""
    group_id: str = Field(min_length=1)
    organizer_email: str = Field(min_length=1)
    organizer_name: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    meeting_link: Optional[str] = None
    agenda: Optional[str] = None
    preferred_start: datetime
    duration: int = Field(ge=15, le=480, description="Meeting length in minutes")
    meeting_type: Mode
    required_attendees: list[str] = Field(default_factory=list)
    optional_attendees: list[str] = Field(default_factory=list)
    assigned_member: Optional[str] = None  # round-robin only

    model_config = {"extra": "forbid", "str_strip_whitespace": True}
