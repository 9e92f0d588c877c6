"""Expansion of recurring events into concrete occurrences.

Generation stops at the pattern's occurrence count or ``until`` cutoff,
whichever comes first, or at the caller's ``horizon`` when the pattern has no
``until``. An expansion with none of these bounds is cut off by the
``recurrence_max_occurrences`` setting (366 by default). That cap is a
termination guard, not a business rule: it ends the series silently, and a
caller can detect it by comparing the result length with
:func:`occurrence_cap`.
"""

from collections.abc import Iterator
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from calendar_engine.config import get_settings
from calendar_engine.scheduling.errors import InvalidRecurrenceError
from calendar_engine.scheduling.models import Event, Frequency, RecurrencePattern
from calendar_engine.utils import get_logger, log_failures

logger = get_logger(__name__)


def occurrence_cap() -> int:
    """Get the safety cap applied to unbounded patterns."""
    return get_settings().recurrence_max_occurrences


def step_anchor(base: datetime, frequency: Frequency, steps: int) -> datetime:
    """Move ``base`` forward by ``steps`` units of ``frequency``.

    Month and year steps that land on a missing calendar day clamp to the last
    day of the target month (Jan 31 + 1 month = Feb 28/29). Offsets are always
    taken from the series anchor, so a clamped month does not shift the
    following ones.
    """
    frequency = Frequency.from_value(frequency)

    if frequency == Frequency.DAILY:
        return base + timedelta(days=steps)
    elif frequency == Frequency.WEEKLY:
        return base + timedelta(weeks=steps)
    elif frequency == Frequency.MONTHLY:
        return base + relativedelta(months=steps)
    else:
        return base + relativedelta(years=steps)


def _weekday_anchors(
    start: datetime, pattern: RecurrencePattern
) -> Iterator[datetime]:
    # The series start is always the first occurrence, even off-pattern.
    yield start

    start_weekday = start.weekday()
    for day in pattern.days_of_week:
        if day > start_weekday:
            yield start + timedelta(days=day - start_weekday)

    week = 1
    while True:
        week_offset = 7 * pattern.interval * week - start_weekday
        for day in pattern.days_of_week:
            yield start + timedelta(days=week_offset + day)
        week += 1


def iter_anchors(start: datetime, pattern: RecurrencePattern) -> Iterator[datetime]:
    """Yield candidate start times of a series in increasing order, unbounded."""
    if pattern.frequency == Frequency.WEEKLY and pattern.days_of_week:
        yield from _weekday_anchors(start, pattern)
        return

    index = 0
    while True:
        yield step_anchor(start, pattern.frequency, pattern.interval * index)
        index += 1


def _validate(event: Event, pattern: RecurrencePattern) -> Frequency:
    frequency = Frequency.from_value(pattern.frequency)

    if pattern.interval <= 0:
        raise InvalidRecurrenceError(
            f"Interval must be positive, got {pattern.interval}"
        )
    if pattern.until is not None and pattern.until < event.start_time:
        raise InvalidRecurrenceError("Recurrence end precedes the event start")
    return frequency


def _occurrence(event: Event, start: datetime, duration: timedelta) -> Event:
    return event.model_copy(
        update={
            "id": f"{event.id}:{start:%Y%m%dT%H%M}",
            "start_time": start,
            "end_time": start + duration,
            "is_recurring": False,
            "recurrence_pattern": None,
            "series_id": event.id,
        },
        deep=True,
    )


@log_failures("expand recurrence")
def expand_recurrence(
    event: Event,
    pattern: RecurrencePattern | None = None,
    *,
    horizon: datetime | None = None,
    window_start: datetime | None = None,
    max_occurrences: int | None = None,
) -> list[Event]:
    """Expand an event into its dated occurrences.

    Args:
        event: Base event; its start is the first anchor
        pattern: Rule to apply, defaults to ``event.recurrence_pattern``
        horizon: Caller's window end, used as cutoff when the pattern has
            no ``until``
        window_start: Occurrences starting before it are not returned.
            They still consume the occurrence count
        max_occurrences: Override for the safety cap

    Returns:
        Occurrences ordered by start time, each keeping the base duration.
        A non-recurring event without a pattern expands to itself.
    """
    pattern = pattern or event.recurrence_pattern
    if pattern is None:
        if event.is_recurring:
            raise InvalidRecurrenceError(
                "Recurring pattern is required for recurring events"
            )
        return [event.model_copy(deep=True)]

    frequency = _validate(event, pattern)

    cap = max_occurrences if max_occurrences is not None else occurrence_cap()
    cutoff = pattern.until if pattern.until is not None else horizon
    bounded = pattern.is_bounded or cutoff is not None
    exceptions = set(pattern.exceptions)
    duration = event.end_time - event.start_time

    occurrences: list[Event] = []
    for generated, anchor in enumerate(iter_anchors(event.start_time, pattern)):
        count = pattern.occurrence_count
        if count is not None and generated >= count:
            break
        if cutoff is not None and anchor > cutoff:
            break
        if not bounded and len(occurrences) >= cap:
            break
        # Skipped dates still consume the occurrence count
        if anchor.date() in exceptions:
            continue
        if window_start is not None and anchor < window_start:
            continue
        occurrences.append(_occurrence(event, anchor, duration))

    capped = not bounded and len(occurrences) >= cap
    logger.debug(
        "Recurrence expanded",
        event_id=event.id,
        frequency=frequency.value,
        occurrences=len(occurrences),
        capped=capped,
    )
    if capped:
        logger.info(
            "Recurrence stopped at safety cap",
            event_id=event.id,
            cap=cap,
        )

    return occurrences
