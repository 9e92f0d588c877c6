"""Free slot computation inside working hours.

All arithmetic uses integer minutes since midnight. Conversion to and from
absolute timestamps happens only at the boundary helpers below.
"""

from collections.abc import Iterable
from datetime import date

from calendar_engine.config import get_settings
from calendar_engine.scheduling.errors import InvalidRangeError
from calendar_engine.scheduling.intervals import clip_to_day, from_minutes, overlaps
from calendar_engine.scheduling.models import (
    AvailabilitySlot,
    Event,
    EventStatus,
    MinuteRange,
    TimeRange,
    WeeklyWorkingHours,
    WorkingHoursSpec,
)
from calendar_engine.utils import get_logger, log_failures

logger = get_logger(__name__)


@log_failures("compute availability")
def compute_availability(
    working_hours: WorkingHoursSpec,
    busy: Iterable[MinuteRange],
    granularity: int | None = None,
) -> list[AvailabilitySlot]:
    """Compute bookable fixed-size slots of a working day.

    A candidate ``[t, t + granularity)`` is dropped when it overlaps a break
    or a busy range, or when it would run past the end of the day. Adjacent
    free slots are not merged.
    """
    if granularity is None:
        granularity = get_settings().default_slot_minutes
    if granularity <= 0:
        raise InvalidRangeError(
            f"Slot granularity must be positive, got {granularity}"
        )

    blocked = [*working_hours.breaks, *busy]
    slots: list[AvailabilitySlot] = []

    day_start, day_end = working_hours.start_of_day, working_hours.end_of_day
    for start in range(day_start, day_end, granularity):
        end = start + granularity
        if end > day_end:
            break
        candidate = MinuteRange(start=start, end=end)
        if any(overlaps(candidate, window) for window in blocked):
            continue
        slots.append(AvailabilitySlot(start=start, end=end))

    logger.debug(
        "Availability computed",
        granularity=granularity,
        blocked_ranges=len(blocked),
        free_slots=len(slots),
    )
    return slots


def busy_ranges_for_day(events: Iterable[Event], day: date) -> list[MinuteRange]:
    """Project the non-cancelled events touching ``day`` onto minute ranges."""
    ranges = []
    for event in events:
        if event.status == EventStatus.CANCELLED:
            continue
        clipped = clip_to_day(event.time_range, day)
        if clipped is not None:
            ranges.append(clipped)
    return sorted(ranges, key=lambda r: (r.start, r.end))


def compute_day_availability(
    day: date,
    schedule: WeeklyWorkingHours,
    events: Iterable[Event],
    granularity: int | None = None,
) -> list[AvailabilitySlot]:
    """Compute free slots of ``day`` against a weekly schedule and events.

    Non-working days have no slots.
    """
    working_hours = schedule.for_day(day)
    if working_hours is None:
        return []
    busy = busy_ranges_for_day(events, day)
    return compute_availability(working_hours, busy, granularity)


def slot_to_range(day: date, slot: AvailabilitySlot) -> TimeRange:
    """Convert a slot of ``day`` back to absolute timestamps."""
    return TimeRange(
        start=from_minutes(day, slot.start), end=from_minutes(day, slot.end)
    )
