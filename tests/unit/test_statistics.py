"""Tests for event filtering, grouping and statistics."""

from datetime import datetime

import pytest

from calendar_engine.scheduling import (
    CalendarStats,
    EventCategory,
    EventStatus,
    EventType,
    compute_statistics,
    filter_by_range,
    filter_overlapping,
    group_by_day,
)


@pytest.fixture
def week_events(make_event):
    return [
        make_event(
            datetime(2024, 6, 4, 9),
            datetime(2024, 6, 4, 10),
            id="lecture",
            type=EventType.CLASS,
            category=EventCategory.ACADEMIC,
            status=EventStatus.COMPLETED,
        ),
        make_event(
            datetime(2024, 6, 3, 13),
            datetime(2024, 6, 3, 15),
            id="exam",
            type=EventType.EXAM,
            category=EventCategory.ACADEMIC,
            status=EventStatus.COMPLETED,
        ),
        make_event(
            datetime(2024, 6, 3, 8),
            datetime(2024, 6, 3, 9),
            id="staff",
            type=EventType.MEETING,
            category=EventCategory.ADMINISTRATIVE,
        ),
        make_event(
            datetime(2024, 6, 5, 16),
            datetime(2024, 6, 5, 17),
            id="board",
            type=EventType.MEETING,
            category=EventCategory.ADMINISTRATIVE,
        ),
        make_event(
            datetime(2024, 6, 7, 10),
            datetime(2024, 6, 7, 11),
            id="social",
            type=EventType.OTHER,
            category=EventCategory.SOCIAL,
            status=EventStatus.CANCELLED,
        ),
    ]


class TestFilterByRange:
    """Start-time-only window filter."""

    def test_bounds_are_inclusive(self, week_events) -> None:
        result = filter_by_range(
            week_events, datetime(2024, 6, 3, 8), datetime(2024, 6, 5, 16)
        )
        assert [e.id for e in result] == ["lecture", "exam", "staff", "board"]

    def test_event_running_into_window_is_excluded(self, make_event) -> None:
        conference = make_event(datetime(2024, 6, 2, 9), datetime(2024, 6, 4, 17))

        window = (datetime(2024, 6, 3), datetime(2024, 6, 3, 23, 59))

        assert filter_by_range([conference], *window) == []
        assert filter_overlapping([conference], *window) == [conference]

    def test_overlapping_variant_uses_strict_overlap(self, make_event) -> None:
        ends_at_window_start = make_event(datetime(2024, 6, 2, 22), datetime(2024, 6, 3))

        assert filter_overlapping(
            [ends_at_window_start], datetime(2024, 6, 3), datetime(2024, 6, 4)
        ) == []


def test_group_by_day_orders_keys_and_buckets(week_events) -> None:
    grouped = group_by_day(week_events)

    assert list(grouped) == ["2024-06-03", "2024-06-04", "2024-06-05", "2024-06-07"]
    assert [e.id for e in grouped["2024-06-03"]] == ["staff", "exam"]
    assert sum(len(bucket) for bucket in grouped.values()) == len(week_events)


def test_group_by_day_empty() -> None:
    assert group_by_day([]) == {}


class TestComputeStatistics:
    """Counts and completion rate."""

    def test_completion_rate(self, week_events) -> None:
        stats = compute_statistics(week_events)

        assert stats.total_events == 5
        assert stats.completion_rate == 40
        assert stats.completed_events == 2

    def test_breakdowns(self, week_events) -> None:
        stats = compute_statistics(week_events)

        assert stats.events_by_type == {"class": 1, "exam": 1, "meeting": 2, "other": 1}
        assert stats.events_by_category == {
            "academic": 2,
            "administrative": 2,
            "social": 1,
        }
        assert stats.events_by_status == {
            "completed": 2,
            "scheduled": 2,
            "cancelled": 1,
        }
        assert stats.most_active_day == "Monday"

    def test_upcoming_requires_reference_time(self, week_events) -> None:
        assert compute_statistics(week_events).upcoming_events == 0

        stats = compute_statistics(week_events, now=datetime(2024, 6, 4, 12))

        # board is upcoming; social is upcoming but cancelled
        assert stats.upcoming_events == 1

    def test_empty_input_has_zero_rate(self) -> None:
        stats = compute_statistics([])

        assert stats == CalendarStats()
        assert stats.completion_rate == 0
        assert stats.most_active_day is None

    def test_statistics_are_idempotent(self, week_events) -> None:
        assert compute_statistics(week_events) == compute_statistics(week_events)
