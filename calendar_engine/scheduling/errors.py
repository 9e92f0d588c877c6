"""Scheduling error types.

All of these are input-validation failures. They are raised before any
output is produced and are never retryable.
"""


class SchedulingError(Exception):
    """Base class for scheduling engine errors."""


class InvalidRangeError(SchedulingError):
    """A range ends before it starts, or a required duration is not positive."""


class InvalidRecurrenceError(SchedulingError):
    """A recurrence pattern is malformed or inconsistent with its base event."""


class UnsupportedFrequencyError(InvalidRecurrenceError):
    """A recurrence frequency outside daily, weekly, monthly and yearly."""

    def __init__(self, frequency: object):
        self.frequency = frequency
        super().__init__(f"Unsupported recurrence frequency: {frequency!r}")
