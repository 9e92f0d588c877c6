"""Tests for interval primitives."""

from datetime import date, datetime

import pytest

from calendar_engine.scheduling import (
    InvalidRangeError,
    MinuteRange,
    TimeRange,
    clip_to_day,
    duration_minutes,
    from_minutes,
    overlaps,
    to_minutes,
)


def _range(start_hour: int, end_hour: int, end_minute: int = 0) -> TimeRange:
    return TimeRange(
        start=datetime(2024, 6, 1, start_hour),
        end=datetime(2024, 6, 1, end_hour, end_minute),
    )


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (_range(9, 10), _range(9, 11), True),
        (_range(9, 12), _range(10, 11), True),
        (_range(9, 10), _range(10, 11), False),
        (_range(9, 10), _range(11, 12), False),
        (_range(9, 9, 30), _range(9, 10), True),
    ],
)
def test_overlaps_is_symmetric(a: TimeRange, b: TimeRange, expected: bool) -> None:
    assert overlaps(a, b) is expected
    assert overlaps(b, a) is expected


def test_touching_ranges_do_not_overlap() -> None:
    first = MinuteRange(start=540, end=600)
    second = MinuteRange(start=600, end=660)

    assert not overlaps(first, second)
    assert not overlaps(second, first)


def test_zero_length_range_inside_other_overlaps() -> None:
    instant = TimeRange(start=datetime(2024, 6, 1, 9, 30), end=datetime(2024, 6, 1, 9, 30))
    assert overlaps(instant, _range(9, 10))


def test_time_range_rejects_reversed_bounds() -> None:
    with pytest.raises(InvalidRangeError):
        TimeRange(start=datetime(2024, 6, 1, 10), end=datetime(2024, 6, 1, 9))


def test_duration_minutes() -> None:
    assert duration_minutes(_range(9, 10, 30)) == 90
    assert duration_minutes(MinuteRange(start=540, end=600)) == 60


def test_duration_minutes_rejects_reversed_range() -> None:
    class RawRange:
        start = 600
        end = 540

    with pytest.raises(InvalidRangeError):
        duration_minutes(RawRange())


def test_minute_conversion_round_trip_boundaries() -> None:
    assert to_minutes(datetime(2024, 6, 1, 13, 45, 59)) == 825
    assert from_minutes(date(2024, 6, 1), 0) == datetime(2024, 6, 1)
    assert from_minutes(date(2024, 6, 1), 1440) == datetime(2024, 6, 2)

    with pytest.raises(InvalidRangeError):
        from_minutes(date(2024, 6, 1), 1441)


class TestClipToDay:
    """Projection of absolute ranges onto one day."""

    def test_range_inside_day(self) -> None:
        clipped = clip_to_day(_range(10, 11), date(2024, 6, 1))
        assert clipped == MinuteRange(start=600, end=660)

    def test_range_spanning_midnight(self) -> None:
        overnight = TimeRange(start=datetime(2024, 5, 31, 22), end=datetime(2024, 6, 1, 2))

        assert clip_to_day(overnight, date(2024, 5, 31)) == MinuteRange(start=1320, end=1440)
        assert clip_to_day(overnight, date(2024, 6, 1)) == MinuteRange(start=0, end=120)

    def test_range_on_other_day(self) -> None:
        assert clip_to_day(_range(10, 11), date(2024, 6, 2)) is None

    def test_partial_minutes_are_widened(self) -> None:
        odd = TimeRange(
            start=datetime(2024, 6, 1, 10, 0, 30),
            end=datetime(2024, 6, 1, 10, 59, 10),
        )
        assert clip_to_day(odd, date(2024, 6, 1)) == MinuteRange(start=600, end=660)
