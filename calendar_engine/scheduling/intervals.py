"""Interval primitives shared by every scheduling component.

Overlap is strict: ranges that only touch at a boundary (``a.end == b.start``)
do not overlap, so back-to-back events never conflict.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Protocol

from calendar_engine.scheduling.errors import InvalidRangeError
from calendar_engine.scheduling.models import MINUTES_PER_DAY, MinuteRange


class SupportsRange(Protocol):
    start: Any
    end: Any


def overlaps(a: SupportsRange, b: SupportsRange) -> bool:
    """Check if two ranges share any interior point."""
    return a.start < b.end and a.end > b.start


def duration_minutes(a: SupportsRange) -> float:
    """Get the length of a range in minutes.

    Datetime ranges yield fractional minutes; minute ranges yield their
    integer difference.
    """
    if a.end < a.start:
        raise InvalidRangeError(f"Range ends before it starts: {a.start} > {a.end}")

    delta = a.end - a.start
    if isinstance(delta, timedelta):
        return delta.total_seconds() / 60
    return delta


def to_minutes(moment: datetime) -> int:
    """Minutes since midnight of ``moment``'s own day, seconds truncated."""
    return moment.hour * 60 + moment.minute


def from_minutes(day: date, minutes: int, tz: tzinfo | None = None) -> datetime:
    """Absolute datetime for ``minutes`` since midnight of ``day``.

    ``1440`` maps to midnight of the following day.
    """
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise InvalidRangeError(f"Minutes out of day bounds: {minutes}")
    return datetime.combine(day, time.min, tzinfo=tz) + timedelta(minutes=minutes)


def clip_to_day(a: SupportsRange, day: date) -> MinuteRange | None:
    """Project an absolute range onto one calendar day.

    Returns ``None`` when the range does not overlap the day. Partial minutes
    are widened so the projection always covers the original range.
    """
    day_start = datetime.combine(day, time.min, tzinfo=a.start.tzinfo)
    day_end = day_start + timedelta(days=1)
    if not (a.start < day_end and a.end > day_start):
        return None

    start = max(a.start, day_start)
    end = min(a.end, day_end)
    start_minutes = int((start - day_start).total_seconds() // 60)
    end_seconds = (end - day_start).total_seconds()
    end_minutes = int(-(-end_seconds // 60))
    return MinuteRange(start=start_minutes, end=min(end_minutes, MINUTES_PER_DAY))
