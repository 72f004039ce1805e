import pytest

from group_scheduler.app.services.availability.errors import InvalidTimeFormatError
from group_scheduler.app.services.availability.timegrid import (
    enumerate_buckets,
    format_boundary,
    to_minutes,
    to_time_string,
)


@pytest.mark.parametrize("value, expected", [
    ("00:00", 0),
    ("09:30", 570),
    ("23:59", 1439),
    ("24:00", 1440),
])
def test_to_minutes(value, expected):
    assert to_minutes(value) == expected


@pytest.mark.parametrize("value", ["9:00", "24:01", "12:60", "1200", "", "ab:cd", " 09:00", 900, None])
def test_to_minutes_rejects_bad_format(value):
    with pytest.raises(InvalidTimeFormatError):
        to_minutes(value)


def test_to_time_string():
    assert to_time_string(0) == "00:00"
    assert to_time_string(545) == "09:05"
    assert to_time_string(1439) == "23:59"


@pytest.mark.parametrize("minutes", [-1, 1440, 5000])
def test_to_time_string_out_of_range_is_fatal(minutes):
    with pytest.raises(ValueError):
        to_time_string(minutes)


def test_format_boundary_renders_end_of_day():
    assert format_boundary(1440) == "24:00"
    assert format_boundary(600) == "10:00"


def test_enumerate_buckets():
    assert enumerate_buckets(540, 600, 15) == [540, 555, 570, 585]
    assert enumerate_buckets(540, 600, 30) == [540, 570]


def test_enumerate_buckets_partial_last_bucket():
    assert enumerate_buckets(540, 580, 30) == [540, 570]


@pytest.mark.parametrize("start, end", [(600, 540), (540, 540)])
def test_enumerate_buckets_degenerate_is_empty(start, end):
    assert enumerate_buckets(start, end, 15) == []
