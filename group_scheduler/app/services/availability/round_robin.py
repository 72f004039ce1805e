# group_scheduler/app/services/availability/round_robin.py
"""
Round-robin mode: one assignee per fixed-length slot.

Every occupied 30-minute bucket of any participant becomes a candidate
slot. Candidates are processed once, in (weekday, start) order; each goes
to the available participant with the fewest assignments so far.

Tie-break: the participant listed first in the candidate's availability
list wins, and that list follows participant input order. The heuristic is
greedy and never revisits an earlier assignment, so it is not a min-max
optimal balance.
"""

import logging
from dataclasses import dataclass

from ...schemas.availability import (
    WEEKDAYS,
    Participant,
    RoundRobinAssignment,
    RoundRobinSlot,
)
from .collector import build_day_grid
from .config import ROUND_ROBIN, AggregationConfig, get_aggregation_config
from .timegrid import format_boundary, to_time_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A bucket with at least one free participant."""
    day_index: int
    start_min: int
    available: tuple[int, ...]  # participant positions, input order


def assign_round_robin(
    participants: list[Participant],
    config: AggregationConfig | None = None,
    weekdays: tuple[str, ...] = WEEKDAYS,
) -> RoundRobinAssignment:
    """
    Assign every candidate slot to exactly one participant.

    Returns:
        RoundRobinAssignment with the slots in processing order and the
        final assignment count per identifier (participants that were
        never available keep 0).
    """
    config = config or get_aggregation_config()
    if not participants:
        return RoundRobinAssignment(slots=[], assignment_counts={})

    resolution = config.resolution_for(ROUND_ROBIN)
    candidates = collect_candidates(participants, resolution, weekdays)

    counts = [0] * len(participants)
    slots: list[RoundRobinSlot] = []

    for candidate in candidates:
        chosen = pick_least_assigned(candidate.available, counts)
        counts[chosen] += 1

        slots.append(RoundRobinSlot(
            day=WEEKDAYS[candidate.day_index],
            start=to_time_string(candidate.start_min),
            end=format_boundary(candidate.start_min + resolution),
            assigned_participant=participants[chosen].identifier,
        ))

    assignment_counts: dict[str, int] = {}
    for position, participant in enumerate(participants):
        assignment_counts[participant.identifier] = (
            assignment_counts.get(participant.identifier, 0) + counts[position]
        )

    logger.debug(f"Round-robin assignment: {len(slots)} slots over {len(participants)} participants")
    return RoundRobinAssignment(slots=slots, assignment_counts=assignment_counts)


def collect_candidates(
    participants: list[Participant],
    resolution: int,
    weekdays: tuple[str, ...] = WEEKDAYS,
) -> list[Candidate]:
    """Candidate slots of all weekdays, sorted by (weekday index, start)."""
    candidates: list[Candidate] = []

    for day_index, day_name in enumerate(WEEKDAYS):
        if day_name not in weekdays:
            continue
        grid = build_day_grid(participants, day_name, resolution)
        for bucket, positions in grid.items():
            candidates.append(Candidate(day_index, bucket, tuple(positions)))

    candidates.sort(key=lambda c: (c.day_index, c.start_min))
    return candidates


def pick_least_assigned(available: tuple[int, ...], counts: list[int]) -> int:
    """
    Position with the smallest count; the earliest in `available` on a tie.
    """
    chosen = available[0]
    for position in available[1:]:
        if counts[position] < counts[chosen]:
            chosen = position
    return chosen
