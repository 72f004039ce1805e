# group_scheduler/app/services/availability/errors.py
"""
Error taxonomy of the availability engine.

Skipped (logged, not raised to the caller):
- InvalidTimeFormatError: bad "HH:MM" boundary in a time range
- DegenerateRangeError: end <= start in a time range

Fatal (raised to the caller):
- UnknownWeekdayError: weekday key outside monday..sunday
- InvalidParticipantError: any other malformed participant record
- InvalidModeError: unsupported aggregation mode
- HandoffError: booking handoff request breaks its contract

An empty participant list is not an error: it yields no slots.
"""


class AvailabilityError(ValueError):
    """Base class for engine errors."""


class InvalidTimeFormatError(AvailabilityError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time format {value!r}, expected zero-padded HH:MM")


class DegenerateRangeError(AvailabilityError):
    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"Time range {start}-{end} ends before it starts")


class UnknownWeekdayError(AvailabilityError):
    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__(f"Unknown weekday key(s): {', '.join(self.keys)}")


class InvalidParticipantError(AvailabilityError):
    pass


class InvalidModeError(AvailabilityError):
    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"mode must be 'collective' or 'round-robin', got {mode!r}")


class HandoffError(AvailabilityError):
    pass
