"""Reminder fire time computation."""

from collections.abc import Iterable
from datetime import datetime, timedelta

from calendar_engine.scheduling.models import Event, EventStatus, ReminderFireTime
from calendar_engine.utils import get_logger

logger = get_logger(__name__)


def compute_reminder_fire_times(event: Event) -> list[ReminderFireTime]:
    """Compute when each enabled reminder of ``event`` fires.

    Disabled reminders are left out. Order follows ``event.reminders`` and
    reminders sharing a fire time are all kept.
    """
    return [
        ReminderFireTime(
            kind=reminder.kind,
            time=event.start_time - timedelta(minutes=reminder.minutes_before),
            event_id=event.id,
        )
        for reminder in event.reminders
        if reminder.enabled
    ]


def pending_reminders(
    events: Iterable[Event],
    start: datetime,
    end: datetime,
) -> list[ReminderFireTime]:
    """Get reminders of non-cancelled events firing within ``[start, end)``.

    The result is ordered by fire time; ties keep event and reminder order.
    """
    due: list[ReminderFireTime] = []
    for event in events:
        if event.status == EventStatus.CANCELLED:
            continue
        due.extend(
            fire_time
            for fire_time in compute_reminder_fire_times(event)
            if start <= fire_time.time < end
        )

    due.sort(key=lambda fire_time: fire_time.time)
    logger.debug(
        "Pending reminders collected",
        window_start=start.isoformat(),
        window_end=end.isoformat(),
        count=len(due),
    )
    return due
