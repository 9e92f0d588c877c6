"""Scheduling engine: recurrence, conflicts, availability, reminders and views."""

from calendar_engine.scheduling.availability import (
    busy_ranges_for_day,
    compute_availability,
    compute_day_availability,
    slot_to_range,
)
from calendar_engine.scheduling.conflicts import (
    find_conflicts,
    find_event_conflicts,
    has_conflict,
)
from calendar_engine.scheduling.errors import (
    InvalidRangeError,
    InvalidRecurrenceError,
    SchedulingError,
    UnsupportedFrequencyError,
)
from calendar_engine.scheduling.intervals import (
    clip_to_day,
    duration_minutes,
    from_minutes,
    overlaps,
    to_minutes,
)
from calendar_engine.scheduling.models import (
    AvailabilitySlot,
    CalendarStats,
    CalendarView,
    Event,
    EventCategory,
    EventStatus,
    EventType,
    EventVisibility,
    Frequency,
    MinuteRange,
    RecurrencePattern,
    Reminder,
    ReminderFireTime,
    ReminderKind,
    TimeRange,
    TimeSlot,
    ViewType,
    WeeklyWorkingHours,
    WorkingHoursSpec,
    parse_clock_time,
)
from calendar_engine.scheduling.recurrence import (
    expand_recurrence,
    occurrence_cap,
    step_anchor,
)
from calendar_engine.scheduling.reminders import (
    compute_reminder_fire_times,
    pending_reminders,
)
from calendar_engine.scheduling.statistics import (
    compute_statistics,
    day_key,
    filter_by_range,
    filter_overlapping,
    group_by_day,
)
from calendar_engine.scheduling.views import (
    build_calendar_view,
    generate_time_slots,
    view_window,
)

__all__ = [
    # Models
    "AvailabilitySlot",
    "CalendarStats",
    "CalendarView",
    "Event",
    "EventCategory",
    "EventStatus",
    "EventType",
    "EventVisibility",
    "Frequency",
    "MinuteRange",
    "RecurrencePattern",
    "Reminder",
    "ReminderFireTime",
    "ReminderKind",
    "TimeRange",
    "TimeSlot",
    "ViewType",
    "WeeklyWorkingHours",
    "WorkingHoursSpec",
    "parse_clock_time",
    # Errors
    "SchedulingError",
    "InvalidRangeError",
    "InvalidRecurrenceError",
    "UnsupportedFrequencyError",
    # Intervals
    "overlaps",
    "duration_minutes",
    "to_minutes",
    "from_minutes",
    "clip_to_day",
    # Recurrence
    "expand_recurrence",
    "occurrence_cap",
    "step_anchor",
    # Conflicts
    "has_conflict",
    "find_conflicts",
    "find_event_conflicts",
    # Availability
    "compute_availability",
    "compute_day_availability",
    "busy_ranges_for_day",
    "slot_to_range",
    # Reminders
    "compute_reminder_fire_times",
    "pending_reminders",
    # Statistics and views
    "filter_by_range",
    "filter_overlapping",
    "group_by_day",
    "day_key",
    "compute_statistics",
    "view_window",
    "generate_time_slots",
    "build_calendar_view",
]
