# group_scheduler/app/services/availability/engine.py
"""
Entry point of the availability engine.

compute_availability(participants, mode, days_ahead) parses the participant
records, picks the weekdays reachable within the horizon and runs the
aggregator for the requested mode. Every call is a pure function of its
arguments; nothing is cached between calls apart from the read-only
configuration.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Protocol

from pydantic import ValidationError

from ...schemas.availability import (
    WEEKDAYS,
    CollectiveSlot,
    Participant,
    RoundRobinSlot,
)
from .collective import aggregate_collective
from .config import (
    COLLECTIVE,
    MAX_DAYS_AHEAD,
    MODES,
    ROUND_ROBIN,
    AggregationConfig,
    get_aggregation_config,
)
from .errors import InvalidModeError, InvalidParticipantError, UnknownWeekdayError
from .formatter import AvailabilityReport
from .round_robin import assign_round_robin

logger = logging.getLogger(__name__)


class ParticipantSource(Protocol):
    """Persistence layer supplying pre-fetched participant records."""

    def load_participants(self, group_id: str) -> list[Participant | dict]: ...


def compute_availability(
    participants: Iterable[Participant | dict],
    mode: str = COLLECTIVE,
    days_ahead: int | None = None,
    config: AggregationConfig | None = None,
    today: date | None = None,
) -> list[CollectiveSlot] | list[RoundRobinSlot]:
    """
    Aggregate group availability for one mode.

    Args:
        participants: Participant models or raw records (dicts)
        mode: "collective" or "round-robin"
        days_ahead: number of upcoming dates mapped onto the weekly pattern;
            defaults to config.default_days_ahead
        config: aggregation config, defaults to the cached one
        today: first date of the horizon, defaults to date.today()

    Returns:
        list[CollectiveSlot] for collective mode,
        list[RoundRobinSlot] for round-robin. Empty list = no slots.

    Raises:
        InvalidModeError, UnknownWeekdayError, InvalidParticipantError
    """
    if mode not in MODES:
        raise InvalidModeError(mode)

    config = config or get_aggregation_config()
    members = load_participants(participants)
    if not members:
        logger.info("No participants supplied, returning no slots")
        return []

    weekdays = weekdays_in_horizon(
        days_ahead if days_ahead is not None else config.default_days_ahead, today
    )

    if mode == ROUND_ROBIN:
        return assign_round_robin(members, config, weekdays).slots
    return aggregate_collective(members, config, weekdays)


def build_report(
    participants: Iterable[Participant | dict],
    days_ahead: int | None = None,
    config: AggregationConfig | None = None,
    today: date | None = None,
) -> AvailabilityReport:
    """Run both modes over the same participants and wrap the results."""
    config = config or get_aggregation_config()
    members = load_participants(participants)
    if not members:
        return AvailabilityReport()

    weekdays = weekdays_in_horizon(
        days_ahead if days_ahead is not None else config.default_days_ahead, today
    )
    assignment = assign_round_robin(members, config, weekdays)

    return AvailabilityReport(
        collective=aggregate_collective(members, config, weekdays),
        round_robin=assignment.slots,
        assignment_counts=assignment.assignment_counts,
    )


def compute_group_availability(
    source: ParticipantSource,
    group_id: str,
    mode: str = COLLECTIVE,
    days_ahead: int | None = None,
    config: AggregationConfig | None = None,
    today: date | None = None,
) -> list[CollectiveSlot] | list[RoundRobinSlot]:
    """Load a group's participants from the persistence layer and aggregate them."""
    records = source.load_participants(group_id)
    logger.debug(f"Group {group_id}: {len(records)} participant records loaded")
    return compute_availability(records, mode, days_ahead, config, today)


# ── Ingestion ────────────────────────────────────────────────────────────


def load_participants(records: Iterable[Participant | dict]) -> list[Participant]:
    """
    Parse raw participant records into Participant models.

    Raises:
        UnknownWeekdayError: a weekly pattern has a key outside monday..sunday
        InvalidParticipantError: any other shape problem
    """
    participants: list[Participant] = []

    for index, record in enumerate(records):
        if isinstance(record, Participant):
            participants.append(record)
            continue

        try:
            participants.append(Participant.model_validate(record))
        except ValidationError as exc:
            for error in exc.errors():
                if error["type"] == "unknown_weekday":
                    raise UnknownWeekdayError(error["ctx"]["keys"].split(", ")) from exc
            raise InvalidParticipantError(f"Participant #{index} is malformed: {exc}") from exc

    return participants


def weekdays_in_horizon(days_ahead: int, today: date | None = None) -> tuple[str, ...]:
    """
    Weekdays of the dates [today, today + days_ahead).

    A horizon of a week or more covers every weekday.
    """
    if not 1 <= days_ahead <= MAX_DAYS_AHEAD:
        raise ValueError(f"days_ahead must be between 1 and {MAX_DAYS_AHEAD}, got {days_ahead}")
    if days_ahead >= 7:
        return WEEKDAYS

    today = today or date.today()
    reachable = {(today + timedelta(days=offset)).weekday() for offset in range(days_ahead)}
    return tuple(WEEKDAYS[index] for index in sorted(reachable))
