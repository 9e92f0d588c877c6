"""Event filtering, day grouping and statistics for calendar views."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from datetime import datetime

from calendar_engine.scheduling.intervals import overlaps
from calendar_engine.scheduling.models import (
    CalendarStats,
    Event,
    EventStatus,
    TimeRange,
)
from calendar_engine.utils import get_logger

logger = get_logger(__name__)

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def filter_by_range(
    events: Iterable[Event], start: datetime, end: datetime
) -> list[Event]:
    """Get events starting within ``[start, end]``, both ends inclusive.

    Only ``start_time`` decides membership, so an event that began before
    ``start`` is excluded even if it is still running inside the window.
    Use :func:`filter_overlapping` for long-spanning events.
    """
    return [event for event in events if start <= event.start_time <= end]


def filter_overlapping(
    events: Iterable[Event], start: datetime, end: datetime
) -> list[Event]:
    """Get events whose time range overlaps ``[start, end)``."""
    window = TimeRange(start=start, end=end)
    return [event for event in events if overlaps(event.time_range, window)]


def day_key(moment: datetime) -> str:
    """Canonical sortable day key (``YYYY-MM-DD``)."""
    return moment.date().isoformat()


def group_by_day(events: Iterable[Event]) -> dict[str, list[Event]]:
    """Bucket events by the calendar day of their start.

    Keys come out in ascending order and each bucket is ordered by start time.
    """
    buckets: defaultdict[str, list[Event]] = defaultdict(list)
    for event in events:
        buckets[day_key(event.start_time)].append(event)

    return {
        key: sorted(buckets[key], key=lambda e: e.start_time)
        for key in sorted(buckets)
    }


def compute_statistics(
    events: Iterable[Event], now: datetime | None = None
) -> CalendarStats:
    """Compute counts and completion rate of ``events``.

    ``upcoming_events`` is only counted when ``now`` is given, so the result
    never depends on the wall clock.
    """
    events = list(events)
    total = len(events)

    by_type = Counter(event.type.value for event in events)
    by_category = Counter(event.category.value for event in events)
    by_status = Counter(event.status.value for event in events)
    weekdays = Counter(WEEKDAY_NAMES[e.start_time.weekday()] for e in events)

    completed = by_status.get(EventStatus.COMPLETED.value, 0)
    completion_rate = (completed / total) * 100 if total > 0 else 0.0

    upcoming = 0
    if now is not None:
        upcoming = sum(1 for event in events if event.is_upcoming(now))

    stats = CalendarStats(
        total_events=total,
        events_by_type=dict(by_type),
        events_by_category=dict(by_category),
        events_by_status=dict(by_status),
        completion_rate=completion_rate,
        upcoming_events=upcoming,
        most_active_day=weekdays.most_common(1)[0][0] if weekdays else None,
    )

    logger.debug(
        "Calendar statistics computed",
        total_events=total,
        completion_rate=completion_rate,
    )
    return stats
