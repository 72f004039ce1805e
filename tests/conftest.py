from datetime import date

import pytest

from group_scheduler.app.schemas.availability import WEEKDAYS, Participant
from group_scheduler.app.services.availability.config import AggregationConfig

# Monday
MONDAY = date(2026, 1, 5)


def build_week(**days) -> dict:
    """
    Raw weekly pattern: each keyword is a weekday mapped to a list of
    (start, end) pairs. Days not mentioned are disabled.
    """
    pattern = {}
    for day in WEEKDAYS:
        ranges = days.get(day) or []
        pattern[day] = {
            "enabled": bool(ranges),
            "timeSlots": [{"start": start, "end": end} for start, end in ranges],
        }
    return pattern


@pytest.fixture
def week():
    return build_week


@pytest.fixture
def person():
    def _person(identifier: str, **days) -> Participant:
        return Participant.model_validate({
            "identifier": identifier,
            "availability": build_week(**days),
        })
    return _person


@pytest.fixture
def config() -> AggregationConfig:
    return AggregationConfig()


@pytest.fixture
def monday() -> date:
    return MONDAY
