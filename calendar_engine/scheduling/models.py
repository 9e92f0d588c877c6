"""Scheduling data models."""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from calendar_engine.config import get_settings
from calendar_engine.scheduling.errors import (
    InvalidRangeError,
    InvalidRecurrenceError,
    UnsupportedFrequencyError,
)

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


class EventType(str, Enum):
    """Event type enum."""

    CLASS = "class"
    EXAM = "exam"
    ASSIGNMENT = "assignment"
    MEETING = "meeting"
    WORKSHOP = "workshop"
    PRESENTATION = "presentation"
    CONSULTATION = "consultation"
    BREAK = "break"
    HOLIDAY = "holiday"
    OTHER = "other"


class EventCategory(str, Enum):
    """Event category enum."""

    ACADEMIC = "academic"
    ADMINISTRATIVE = "administrative"
    SOCIAL = "social"
    PERSONAL = "personal"
    SYSTEM = "system"


class EventStatus(str, Enum):
    """Event lifecycle status enum."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventVisibility(str, Enum):
    """Event visibility enum."""

    PUBLIC = "public"
    PRIVATE = "private"
    RESTRICTED = "restricted"
    COURSE_ONLY = "course_only"


class ReminderKind(str, Enum):
    """Reminder delivery kind enum."""

    EMAIL = "email"
    PUSH = "push"
    SMS = "sms"
    POPUP = "popup"


class Frequency(str, Enum):
    """Recurrence frequency enum."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def from_value(cls, value: Any) -> "Frequency":
        """Convert a raw value to Frequency, rejecting unsupported ones."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedFrequencyError(value) from None


class ViewType(str, Enum):
    """Calendar view type enum."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def parse_clock_time(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight.

    ``24:00`` is accepted as the end of the day.
    """
    if value == "24:00":
        return MINUTES_PER_DAY
    match = _CLOCK_PATTERN.match(value)
    if not match:
        raise InvalidRangeError(f"Invalid clock time: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


class Reminder(BaseModel):
    """Reminder configured relative to an event start."""

    kind: ReminderKind = Field(..., description="Delivery kind")
    minutes_before: int = Field(..., description="Minutes before event start", ge=0)
    enabled: bool = Field(default=True)

    @field_validator("minutes_before")
    @classmethod
    def validate_minutes_before(cls, v: int) -> int:
        """Validate the offset stays within the configured maximum."""
        limit = get_settings().max_reminder_minutes
        if v > limit:
            raise ValueError(f"Reminder offset cannot exceed {limit} minutes")
        return v


class RecurrencePattern(BaseModel):
    """Rule describing how an event repeats.

    ``days_of_week`` uses Python's ``date.weekday()`` numbering, Monday=0 to
    Sunday=6. Weekday lists stored with Sunday=0 numbering must be shifted by
    six (mod 7) before they are loaded.
    """

    frequency: Frequency = Field(..., description="Recurrence frequency")
    interval: int = Field(default=1, description="Step between occurrences")
    occurrence_count: int | None = Field(
        None, description="Maximum number of generated occurrences"
    )
    until: datetime | None = Field(None, description="Inclusive cutoff")
    days_of_week: list[int] = Field(
        default_factory=list, description="Weekdays for weekly rules, 0=Monday"
    )
    exceptions: list[date] = Field(
        default_factory=list, description="Dates without an occurrence"
    )

    @field_validator("frequency", mode="before")
    @classmethod
    def validate_frequency(cls, v: Any) -> Frequency:
        """Reject frequencies outside the supported set."""
        return Frequency.from_value(v)

    @field_validator("interval")
    @classmethod
    def validate_interval(cls, v: int) -> int:
        """Validate interval is positive."""
        if v <= 0:
            raise InvalidRecurrenceError(f"Interval must be positive, got {v}")
        return v

    @field_validator("occurrence_count")
    @classmethod
    def validate_occurrence_count(cls, v: int | None) -> int | None:
        """Validate occurrence count is positive."""
        if v is not None and v < 1:
            raise InvalidRecurrenceError(f"Occurrence count must be positive, got {v}")
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: list[int]) -> list[int]:
        """Validate weekday numbers and normalize their order."""
        for day in v:
            if not 0 <= day <= 6:
                raise InvalidRecurrenceError(f"Invalid weekday number: {day}")
        return sorted(set(v))

    @property
    def is_bounded(self) -> bool:
        """Check if the pattern carries its own count or cutoff."""
        return self.occurrence_count is not None or self.until is not None


class TimeRange(BaseModel):
    """Absolute time range, optionally scoped to a resource."""

    start: datetime
    end: datetime
    resource: str | None = Field(None, description="Resource scope, e.g. a location")

    @model_validator(mode="after")
    def validate_order(self) -> "TimeRange":
        """Validate end is not before start."""
        if self.end < self.start:
            raise InvalidRangeError(
                f"Range ends before it starts: {self.start} > {self.end}"
            )
        return self


class MinuteRange(BaseModel):
    """Range expressed in minutes since midnight."""

    start: int = Field(..., ge=0, le=MINUTES_PER_DAY)
    end: int = Field(..., ge=0, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def validate_order(self) -> "MinuteRange":
        """Validate end is not before start."""
        if self.end < self.start:
            raise InvalidRangeError(
                f"Range ends before it starts: {self.start} > {self.end}"
            )
        return self

    @classmethod
    def from_clock(cls, start: str, end: str) -> "MinuteRange":
        """Build a range from ``HH:MM`` strings."""
        return cls(start=parse_clock_time(start), end=parse_clock_time(end))


class WorkingHoursSpec(BaseModel):
    """Working day bounds and breaks in minutes since midnight."""

    start_of_day: int = Field(..., ge=0, le=MINUTES_PER_DAY)
    end_of_day: int = Field(..., ge=0, le=MINUTES_PER_DAY)
    breaks: list[MinuteRange] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_breaks(self) -> "WorkingHoursSpec":
        """Validate the day bounds and that breaks are contained and disjoint."""
        if self.end_of_day <= self.start_of_day:
            raise InvalidRangeError("Working day must end after it starts")

        ordered = sorted(self.breaks, key=lambda b: (b.start, b.end))
        for window in ordered:
            if window.start < self.start_of_day or window.end > self.end_of_day:
                raise InvalidRangeError(
                    f"Break {window.start}-{window.end} lies outside working hours"
                )
        for previous, current in zip(ordered, ordered[1:]):
            if current.start < previous.end:
                raise InvalidRangeError("Breaks must not overlap each other")

        self.breaks = ordered
        return self

    @classmethod
    def from_clock(
        cls,
        start: str,
        end: str,
        breaks: list[tuple[str, str]] | None = None,
    ) -> "WorkingHoursSpec":
        """Build working hours from ``HH:MM`` strings."""
        return cls(
            start_of_day=parse_clock_time(start),
            end_of_day=parse_clock_time(end),
            breaks=[MinuteRange.from_clock(s, e) for s, e in breaks or []],
        )


class WeeklyWorkingHours(BaseModel):
    """Working hours per weekday (0=Monday). Missing days are non-working."""

    days: dict[int, WorkingHoursSpec] = Field(default_factory=dict)

    @field_validator("days")
    @classmethod
    def validate_days(
        cls, v: dict[int, WorkingHoursSpec]
    ) -> dict[int, WorkingHoursSpec]:
        """Validate weekday keys."""
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Invalid weekday number: {day}")
        return v

    def for_day(self, day: date) -> WorkingHoursSpec | None:
        """Get the working hours for a calendar day, if it is a working day."""
        return self.days.get(day.weekday())

    @classmethod
    def business_week(
        cls, hours: WorkingHoursSpec | None = None
    ) -> "WeeklyWorkingHours":
        """Monday to Friday with the same hours, 09:00-17:00 by default."""
        hours = hours or WorkingHoursSpec.from_clock("09:00", "17:00")
        return cls(days={day: hours for day in range(5)})


class Event(BaseModel):
    """Calendar event or recurring series definition."""

    id: str = Field(..., description="Unique event ID")
    title: str = Field(..., description="Event title")
    description: str | None = Field(None, description="Event description")
    location: str | None = Field(
        None, description="Event location, used as resource scope"
    )
    type: EventType = Field(default=EventType.OTHER)
    category: EventCategory = Field(default=EventCategory.PERSONAL)
    start_time: datetime = Field(..., description="Event start")
    end_time: datetime = Field(..., description="Event end")
    is_recurring: bool = Field(default=False)
    recurrence_pattern: RecurrencePattern | None = Field(None)
    status: EventStatus = Field(default=EventStatus.SCHEDULED)
    reminders: list[Reminder] = Field(default_factory=list)
    visibility: EventVisibility = Field(default=EventVisibility.PUBLIC)
    capacity: int | None = Field(None, description="Maximum attendees", ge=0)
    attendees: list[str] = Field(default_factory=list)
    organizer: str | None = Field(None, description="Organizer user ID")
    series_id: str | None = Field(None, description="ID of the generating series")

    @model_validator(mode="after")
    def validate_event(self) -> "Event":
        """Validate the time range and recurrence consistency."""
        if self.end_time <= self.start_time:
            raise InvalidRangeError("End time must be after start time")
        if self.is_recurring and self.recurrence_pattern is None:
            raise InvalidRecurrenceError(
                "Recurring pattern is required for recurring events"
            )
        pattern = self.recurrence_pattern
        if (
            pattern is not None
            and pattern.until is not None
            and pattern.until < self.start_time
        ):
            raise InvalidRecurrenceError("Recurrence end precedes the event start")
        return self

    @property
    def duration_minutes(self) -> float:
        """Get event duration in minutes."""
        return (self.end_time - self.start_time).total_seconds() / 60

    @property
    def time_range(self) -> TimeRange:
        """Get the event's range scoped by its location."""
        return TimeRange(
            start=self.start_time, end=self.end_time, resource=self.location
        )

    def is_upcoming(self, now: datetime) -> bool:
        """Check if the event starts after ``now`` and is not cancelled."""
        return self.start_time > now and self.status != EventStatus.CANCELLED


class AvailabilitySlot(BaseModel):
    """Free slot in minutes since midnight."""

    start: int
    end: int
    available: bool = True

    @property
    def duration(self) -> int:
        return self.end - self.start


class ReminderFireTime(BaseModel):
    """Absolute fire time of one configured reminder."""

    kind: ReminderKind
    time: datetime
    event_id: str


class CalendarStats(BaseModel):
    """Aggregated event statistics."""

    total_events: int = Field(default=0)
    events_by_type: dict[str, int] = Field(default_factory=dict)
    events_by_category: dict[str, int] = Field(default_factory=dict)
    events_by_status: dict[str, int] = Field(default_factory=dict)
    completion_rate: float = Field(default=0.0)
    upcoming_events: int = Field(default=0)
    most_active_day: str | None = Field(None, description="Weekday name")

    @property
    def completed_events(self) -> int:
        return self.events_by_status.get(EventStatus.COMPLETED.value, 0)


class TimeSlot(BaseModel):
    """Fixed view slot with the events occupying it."""

    start: datetime
    end: datetime
    is_available: bool
    conflicts: list[Event] = Field(default_factory=list)


class CalendarView(BaseModel):
    """Events of one calendar window."""

    view_type: ViewType
    start: datetime
    end: datetime
    events: list[Event] = Field(default_factory=list)
    days: dict[str, list[Event]] = Field(default_factory=dict)
    time_slots: list[TimeSlot] | None = None
