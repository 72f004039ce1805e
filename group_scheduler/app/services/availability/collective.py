# group_scheduler/app/services/availability/collective.py
"""
Collective mode: windows where some or all participants overlap.

Per weekday:
1. Bucket grid of who is free when (15-minute resolution by default)
2. Sweep buckets in time order, extending a run while the participant
   set stays the same and buckets stay adjacent
3. Close the run when the set changes or a gap appears; the final run
   closes at its last bucket + one resolution unit

A window with a single free participant is still reported; colouring by
overlap ratio is left to the presentation layer.
"""

import logging

from ...schemas.availability import WEEKDAYS, CollectiveSlot, Participant
from .collector import build_day_grid
from .config import COLLECTIVE, AggregationConfig, get_aggregation_config
from .timegrid import format_boundary, to_time_string

logger = logging.getLogger(__name__)


def aggregate_collective(
    participants: list[Participant],
    config: AggregationConfig | None = None,
    weekdays: tuple[str, ...] = WEEKDAYS,
) -> list[CollectiveSlot]:
    """
    Collective slots for every requested weekday, Monday first.

    Returns:
        List of CollectiveSlot. Empty list = no participant is ever free.
    """
    config = config or get_aggregation_config()
    if not participants:
        return []

    resolution = config.resolution_for(COLLECTIVE)
    slots: list[CollectiveSlot] = []

    for day_name in WEEKDAYS:
        if day_name not in weekdays:
            continue
        grid = build_day_grid(participants, day_name, resolution)
        if not grid:
            continue

        for start_min, end_min, members in _sweep_runs(grid, resolution):
            slots.append(CollectiveSlot(
                day=day_name,
                start=to_time_string(start_min),
                end=format_boundary(end_min),
                available_participants=tuple(participants[i].identifier for i in members),
                total_participants=len(participants),
            ))

    logger.debug(f"Collective aggregation: {len(participants)} participants → {len(slots)} slots")
    return slots


def _sweep_runs(
    grid: dict[int, list[int]],
    resolution: int,
) -> list[tuple[int, int, list[int]]]:
    """
    Maximal runs of adjacent buckets with an identical participant set.

    Returns (start_min, end_min, positions) triples in time order.
    """
    runs: list[tuple[int, int, list[int]]] = []

    run_start: int | None = None
    run_members: frozenset[int] = frozenset()
    last_bucket = 0

    for bucket in sorted(grid):
        members = frozenset(grid[bucket])

        if run_start is not None and members == run_members and bucket == last_bucket + resolution:
            last_bucket = bucket
            continue

        if run_start is not None:
            _close_run(runs, run_start, last_bucket + resolution, run_members, resolution)

        run_start = bucket
        run_members = members
        last_bucket = bucket

    # Final run ends one unit after its last bucket
    if run_start is not None:
        _close_run(runs, run_start, last_bucket + resolution, run_members, resolution)

    return runs


def _close_run(
    runs: list,
    start_min: int,
    end_min: int,
    members: frozenset[int],
    resolution: int,
) -> None:
    if end_min - start_min < resolution or not members:
        return
    runs.append((start_min, end_min, sorted(members)))
