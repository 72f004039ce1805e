# group_scheduler/app/services/availability/calendar.py
"""
Mapping the weekly pattern onto concrete dates.

The engine reasons in weekdays only. Callers that need bookable instances
(the group booking form) expand the slots over the next `days_ahead` dates
here. Datetimes are naive: no timezone conversion is applied.
"""

from datetime import date, datetime, timedelta

from ...schemas.availability import (
    WEEKDAYS,
    CollectiveSlot,
    DatedGroupSlot,
    DatedRoundRobinSlot,
    RoundRobinSlot,
)
from .config import MAX_DAYS_AHEAD, AggregationConfig, get_aggregation_config
from .timegrid import to_minutes


def upcoming_dates(days_ahead: int, start_date: date | None = None) -> list[date]:
    """Dates start_date .. start_date + days_ahead - 1."""
    if not 1 <= days_ahead <= MAX_DAYS_AHEAD:
        raise ValueError(f"days_ahead must be between 1 and {MAX_DAYS_AHEAD}, got {days_ahead}")
    start_date = start_date or date.today()
    return [start_date + timedelta(days=offset) for offset in range(days_ahead)]


def confidence_for(available: int, total: int) -> str:
    """high >= 80% of participants free, medium >= 50%, low otherwise."""
    ratio = available / total if total else 0
    if ratio >= 0.8:
        return "high"
    if ratio >= 0.5:
        return "medium"
    return "low"


def expand_collective_slots(
    slots: list[CollectiveSlot],
    days_ahead: int | None = None,
    start_date: date | None = None,
    config: AggregationConfig | None = None,
) -> list[DatedGroupSlot]:
    """
    Place collective slots on every matching date of the horizon.

    Returns:
        DatedGroupSlot list sorted by start datetime.
    """
    config = config or get_aggregation_config()
    if days_ahead is None:
        days_ahead = config.default_days_ahead
    dates = upcoming_dates(days_ahead, start_date)
    by_day = _group_by_day(slots)

    dated: list[DatedGroupSlot] = []
    for target_date in dates:
        day_name = WEEKDAYS[target_date.weekday()]
        for slot in by_day.get(day_name, []):
            dated.append(DatedGroupSlot(
                date=target_date,
                day=day_name,
                start=_at(target_date, slot.start),
                end=_at(target_date, slot.end),
                available_participants=slot.available_participants,
                total_participants=slot.total_participants,
                confidence=confidence_for(slot.available_count, slot.total_participants),
            ))

    dated.sort(key=lambda s: s.start)
    return dated


def expand_round_robin_slots(
    slots: list[RoundRobinSlot],
    days_ahead: int | None = None,
    start_date: date | None = None,
    config: AggregationConfig | None = None,
) -> list[DatedRoundRobinSlot]:
    """Place round-robin slots on every matching date of the horizon."""
    config = config or get_aggregation_config()
    if days_ahead is None:
        days_ahead = config.default_days_ahead
    dates = upcoming_dates(days_ahead, start_date)
    by_day = _group_by_day(slots)

    dated: list[DatedRoundRobinSlot] = []
    for target_date in dates:
        day_name = WEEKDAYS[target_date.weekday()]
        for slot in by_day.get(day_name, []):
            dated.append(DatedRoundRobinSlot(
                date=target_date,
                day=day_name,
                start=_at(target_date, slot.start),
                end=_at(target_date, slot.end),
                assigned_participant=slot.assigned_participant,
            ))

    dated.sort(key=lambda s: s.start)
    return dated


# ── Helpers ──────────────────────────────────────────────────────────────


def _group_by_day(slots: list) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for slot in slots:
        grouped.setdefault(slot.day, []).append(slot)
    return grouped


def _at(target_date: date, time_str: str) -> datetime:
    """Naive datetime for "HH:MM" on target_date ("24:00" is the next midnight)."""
    return datetime.combine(target_date, datetime.min.time()) + timedelta(minutes=to_minutes(time_str))
