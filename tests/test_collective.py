from group_scheduler.app.schemas.availability import WEEKDAYS, Participant
from group_scheduler.app.services.availability.collective import aggregate_collective
from group_scheduler.app.services.availability.config import AggregationConfig
from group_scheduler.app.services.availability.timegrid import enumerate_buckets, to_minutes


def _window(slot):
    return (slot.day, slot.start, slot.end, slot.available_participants)


def test_identical_schedules_give_one_slot(person, config):
    participants = [
        person("a", monday=[("09:00", "12:00")]),
        person("b", monday=[("09:00", "12:00")]),
    ]

    slots = aggregate_collective(participants, config)

    assert len(slots) == 1
    slot = slots[0]
    assert (slot.day, slot.start, slot.end) == ("monday", "09:00", "12:00")
    assert set(slot.available_participants) == {"a", "b"}
    assert slot.total_participants == 2


def test_partial_overlap_gives_three_slots(person, config):
    participants = [
        person("a", monday=[("09:00", "10:00")]),
        person("b", monday=[("09:30", "10:30")]),
    ]

    slots = aggregate_collective(participants, config)

    assert [_window(s) for s in slots] == [
        ("monday", "09:00", "09:30", ("a",)),
        ("monday", "09:30", "10:00", ("a", "b")),
        ("monday", "10:00", "10:30", ("b",)),
    ]


def test_final_single_bucket_run_is_closed(person, config):
    participants = [
        person("a", monday=[("09:00", "10:00")]),
        person("b", monday=[("09:45", "10:00")]),
    ]

    slots = aggregate_collective(participants, config)

    assert [_window(s) for s in slots] == [
        ("monday", "09:00", "09:45", ("a",)),
        ("monday", "09:45", "10:00", ("a", "b")),
    ]


def test_final_run_unchanged_through_last_bucket(person, config):
    slots = aggregate_collective([person("a", monday=[("09:00", "09:15")])], config)

    assert [_window(s) for s in slots] == [("monday", "09:00", "09:15", ("a",))]


def test_window_starts_at_the_participant_range_start(person, config):
    slots = aggregate_collective([person("a", monday=[("09:10", "10:00")])], config)

    assert [(s.start, s.available_participants) for s in slots] == [("09:10", ("a",))]


def test_gap_splits_runs_with_same_participants(person, config):
    participants = [person("a", monday=[("09:00", "10:00"), ("11:00", "12:00")])]

    slots = aggregate_collective(participants, config)

    assert [(s.start, s.end) for s in slots] == [("09:00", "10:00"), ("11:00", "12:00")]


def test_overlapping_input_ranges(person, config):
    participants = [person("a", monday=[("09:00", "10:30"), ("10:00", "11:00")])]

    slots = aggregate_collective(participants, config)

    assert [(s.start, s.end) for s in slots] == [("09:00", "11:00")]


def test_single_available_participant_still_reported(person, config):
    participants = [
        person("a", tuesday=[("14:00", "15:00")]),
        person("b"),
        person("c"),
    ]

    slots = aggregate_collective(participants, config)

    assert len(slots) == 1
    assert slots[0].available_participants == ("a",)
    assert slots[0].total_participants == 3


def test_participant_without_enabled_days_is_never_available(person, config):
    participants = [person("a", monday=[("09:00", "10:00")]), person("idle")]

    slots = aggregate_collective(participants, config)

    assert all("idle" not in s.available_participants for s in slots)


def test_disabled_day_with_ranges_contributes_nothing(person, week, config):
    pattern = week(monday=[("09:00", "10:00")])
    pattern["tuesday"] = {"enabled": False, "timeSlots": [{"start": "09:00", "end": "17:00"}]}
    participant = Participant.model_validate({"identifier": "a", "availability": pattern})

    slots = aggregate_collective([participant], config)

    assert {s.day for s in slots} == {"monday"}


def test_slot_ending_at_midnight(person, config):
    slots = aggregate_collective([person("a", friday=[("23:00", "24:00")])], config)

    assert [(s.start, s.end) for s in slots] == [("23:00", "24:00")]


def test_days_are_emitted_monday_first(person, config):
    participants = [person("a", sunday=[("09:00", "10:00")], monday=[("18:00", "19:00")])]

    slots = aggregate_collective(participants, config)

    assert [s.day for s in slots] == ["monday", "sunday"]


def test_weekday_filter(person, config):
    participants = [person("a", monday=[("09:00", "10:00")], wednesday=[("09:00", "10:00")])]

    slots = aggregate_collective(participants, config, weekdays=("wednesday",))

    assert [s.day for s in slots] == ["wednesday"]


def test_coarser_resolution(person):
    participants = [
        person("a", monday=[("09:00", "10:00")]),
        person("b", monday=[("09:30", "10:30")]),
    ]

    slots = aggregate_collective(participants, AggregationConfig(collective_resolution_minutes=30))

    assert [(s.start, s.end) for s in slots] == [("09:00", "09:30"), ("09:30", "10:00"), ("10:00", "10:30")]


def test_empty_participant_list(config):
    assert aggregate_collective([], config) == []


# ── Invariants over a mixed fixture ───────────────────────────────────────


def _mixed_group(person):
    return [
        person("a", monday=[("08:00", "12:00"), ("13:00", "17:00")], wednesday=[("10:00", "11:30")]),
        person("b", monday=[("09:30", "13:30")], wednesday=[("09:00", "10:15"), ("11:00", "12:00")]),
        person("c", monday=[("11:45", "12:15"), ("16:00", "18:00")], friday=[("07:00", "08:00")]),
        person("d", monday=[("08:00", "08:30")], wednesday=[("10:00", "10:30"), ("10:15", "10:45")]),
    ]


def test_every_occupied_bucket_is_covered_exactly_once(person, config):
    participants = _mixed_group(person)
    step = config.collective_resolution_minutes

    slots = aggregate_collective(participants, config)

    for day in WEEKDAYS:
        occupied = set()
        for p in participants:
            availability = p.availability.day(day)
            for r in availability.effective_slots:
                occupied.update(enumerate_buckets(to_minutes(r.start), to_minutes(r.end), step))

        covered = []
        for s in slots:
            if s.day == day:
                covered.extend(enumerate_buckets(to_minutes(s.start), to_minutes(s.end), step))

        assert sorted(covered) == sorted(occupied)


def test_adjacent_slots_have_different_participants(person, config):
    slots = aggregate_collective(_mixed_group(person), config)

    for prev, nxt in zip(slots, slots[1:]):
        if prev.day == nxt.day and prev.end == nxt.start:
            assert set(prev.available_participants) != set(nxt.available_participants)


def test_slots_are_chronological_and_non_overlapping(person, config):
    slots = aggregate_collective(_mixed_group(person), config)

    for prev, nxt in zip(slots, slots[1:]):
        if prev.day == nxt.day:
            assert to_minutes(prev.end) <= to_minutes(nxt.start)
    assert all(to_minutes(s.start) < to_minutes(s.end) for s in slots)
    assert all(s.available_participants for s in slots)
