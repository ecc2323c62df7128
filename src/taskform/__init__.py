"""Scheduling core behind the task and time-block forms."""

from .errors import (
    CycleViolationError,
    FormValidationError,
    InvalidRangeError,
    MissingFrequencyError,
    MissingIntervalError,
    MissingOccurrenceCountError,
    MissingTitleError,
    MissingWeekdaysError,
)
from .forms import TaskFormSession, TimeBlockFormSession
from .scheduling import FinalizedSchedule, TimeRangeState, TimeRangeSynchronizer

__all__ = [
    "CycleViolationError",
    "FormValidationError",
    "InvalidRangeError",
    "MissingFrequencyError",
    "MissingIntervalError",
    "MissingOccurrenceCountError",
    "MissingTitleError",
    "MissingWeekdaysError",
    "TaskFormSession",
    "TimeBlockFormSession",
    "FinalizedSchedule",
    "TimeRangeState",
    "TimeRangeSynchronizer",
]
