"""Calendar view windows and view time slots."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from calendar_engine.config import get_settings
from calendar_engine.scheduling.errors import InvalidRangeError
from calendar_engine.scheduling.intervals import overlaps
from calendar_engine.scheduling.models import (
    CalendarView,
    Event,
    EventStatus,
    TimeRange,
    TimeSlot,
    ViewType,
)
from calendar_engine.scheduling.recurrence import expand_recurrence
from calendar_engine.scheduling.statistics import filter_by_range, group_by_day
from calendar_engine.utils import get_logger

logger = get_logger(__name__)

_VIEW_SPANS = {
    ViewType.DAY: relativedelta(days=1),
    ViewType.WEEK: relativedelta(days=7),
    ViewType.MONTH: relativedelta(months=1),
    ViewType.YEAR: relativedelta(years=1),
}


def view_window(view_type: ViewType, start: datetime) -> tuple[datetime, datetime]:
    """Get the ``[start, end)`` window shown by a view starting at ``start``."""
    return start, start + _VIEW_SPANS[ViewType(view_type)]


def generate_time_slots(
    start: datetime,
    end: datetime,
    events: Iterable[Event],
    slot_minutes: int | None = None,
) -> list[TimeSlot]:
    """Split ``[start, end)`` into fixed slots and attach occupying events.

    Cancelled events do not occupy slots. The last slot may extend past
    ``end`` when the window is not a multiple of ``slot_minutes``.
    """
    if slot_minutes is None:
        slot_minutes = get_settings().view_slot_minutes
    if slot_minutes <= 0:
        raise InvalidRangeError(
            f"Slot length must be positive, got {slot_minutes}"
        )

    active = [event for event in events if event.status != EventStatus.CANCELLED]
    step = timedelta(minutes=slot_minutes)

    slots = []
    current = start
    while current < end:
        window = TimeRange(start=current, end=current + step)
        conflicts = [event for event in active if overlaps(event.time_range, window)]
        slots.append(
            TimeSlot(
                start=window.start,
                end=window.end,
                is_available=not conflicts,
                conflicts=conflicts,
            )
        )
        current = window.end

    return slots


def build_calendar_view(
    view_type: ViewType,
    start: datetime,
    events: Iterable[Event],
    *,
    expand_recurring: bool = True,
) -> CalendarView:
    """Build the events, day buckets and (for day/week) slots of one view.

    Events are selected by start time within ``[start, end)``. Recurring
    definitions are expanded up to the view end unless ``expand_recurring``
    is false.
    """
    view_type = ViewType(view_type)
    start, end = view_window(view_type, start)

    candidates: list[Event] = []
    for event in events:
        if expand_recurring and event.is_recurring:
            candidates.extend(
                expand_recurrence(event, horizon=end, window_start=start)
            )
        else:
            candidates.append(event)

    # The window end belongs to the next view
    in_window = [
        event
        for event in filter_by_range(candidates, start, end)
        if event.start_time < end
    ]
    selected = sorted(in_window, key=lambda e: e.start_time)

    time_slots = None
    if view_type in (ViewType.DAY, ViewType.WEEK):
        time_slots = generate_time_slots(start, end, selected)

    logger.debug(
        "Calendar view built",
        view_type=view_type.value,
        start=start.isoformat(),
        end=end.isoformat(),
        events=len(selected),
    )

    return CalendarView(
        view_type=view_type,
        start=start,
        end=end,
        events=selected,
        days=group_by_day(selected),
        time_slots=time_slots,
    )
