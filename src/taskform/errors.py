"""Validation errors raised by the form core.

Every error blocks the submit action and is recovered by the user editing
the offending field. Nothing here is retried automatically.
"""

from __future__ import annotations


class FormValidationError(ValueError):
    """Base class for recoverable form validation failures."""

    code = "invalid"
    default_message = "The form contains invalid values."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidRangeError(FormValidationError):
    """Raised when the end of a range precedes its start."""

    code = "invalid_range"
    default_message = "End time must not be before the start time."

    def __init__(
        self,
        message: str | None = None,
        *,
        start: int | None = None,
        end: int | None = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


class MissingFrequencyError(FormValidationError):
    code = "missing_frequency"
    default_message = "Please select a frequency."


class MissingIntervalError(FormValidationError):
    code = "missing_interval"
    default_message = "Please specify the repeat interval."


class MissingWeekdaysError(FormValidationError):
    code = "missing_weekdays"
    default_message = "Select at least one day."


class MissingOccurrenceCountError(FormValidationError):
    code = "missing_occurrence_count"
    default_message = "Specify number of occurrences."


class MissingTitleError(FormValidationError):
    code = "missing_title"
    default_message = "A title is required."


class CycleViolationError(FormValidationError):
    """Raised when a task would become its own ancestor."""

    code = "cycle_violation"
    default_message = "A task cannot be nested under itself or its subtasks."

    def __init__(
        self,
        message: str | None = None,
        *,
        task_id: str | None = None,
        parent_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.task_id = task_id
        self.parent_id = parent_id


__all__ = [
    "FormValidationError",
    "InvalidRangeError",
    "MissingFrequencyError",
    "MissingIntervalError",
    "MissingWeekdaysError",
    "MissingOccurrenceCountError",
    "MissingTitleError",
    "CycleViolationError",
]
