"""Validation and materialization of recurrence drafts."""
from __future__ import annotations

from typing import Optional

from ..errors import (
    MissingFrequencyError,
    MissingIntervalError,
    MissingOccurrenceCountError,
    MissingWeekdaysError,
)
from ..schemas.recurrence import (
    RecurrenceEndCondition,
    RecurrenceFrequency,
    RecurrencePattern,
    Weekday,
)


def validate_recurrence(pattern: Optional[RecurrencePattern], is_recurring: bool) -> None:
    """Raise the first problem that blocks submitting ``pattern``.

    Checks run in the order the form reports them: frequency, interval,
    weekdays, occurrence count. A non-recurring unit is never checked.
    """

    if not is_recurring:
        return
    if pattern is None or pattern.frequency is None:
        raise MissingFrequencyError()
    if pattern.interval is None or pattern.interval <= 0:
        raise MissingIntervalError()
    if pattern.frequency == RecurrenceFrequency.WEEKLY and not pattern.days_of_week:
        raise MissingWeekdaysError()
    if pattern.end_condition == RecurrenceEndCondition.AFTER_COUNT and (
        pattern.end_count is None or pattern.end_count <= 0
    ):
        raise MissingOccurrenceCountError()


def materialize_recurrence(pattern: RecurrencePattern) -> RecurrencePattern:
    """Return the rule to persist, dropping fields its settings do not use.

    Raises:
        FormValidationError: If the draft is incomplete
    """

    validate_recurrence(pattern, True)
    weekly = pattern.frequency == RecurrenceFrequency.WEEKLY
    after_count = pattern.end_condition == RecurrenceEndCondition.AFTER_COUNT
    until_date = pattern.end_condition == RecurrenceEndCondition.UNTIL_DATE

    return pattern.model_copy(
        update={
            "days_of_week": list(pattern.days_of_week) if weekly else [],
            "end_count": pattern.end_count if after_count else None,
            "end_date": pattern.end_date if until_date else None,
            "exclude_dates": list(pattern.exclude_dates),
            "completed_instances": list(pattern.completed_instances),
        }
    )


def toggle_weekday(pattern: RecurrencePattern, day: Weekday | str) -> RecurrencePattern:
    """Add ``day`` to the rule, or remove it when already selected."""

    weekday = Weekday(day)
    if weekday in pattern.days_of_week:
        pattern.days_of_week = [d for d in pattern.days_of_week if d != weekday]
    else:
        pattern.days_of_week = [*pattern.days_of_week, weekday]
    return pattern


def enable_recurrence(pattern: RecurrencePattern) -> RecurrencePattern:
    """Prime a draft when the repeat checkbox is ticked."""

    if not pattern.interval:
        pattern.interval = 1
    return pattern


def daily_default() -> RecurrencePattern:
    """Rule used when a form opens with recurrence pre-enabled."""

    return RecurrencePattern(
        frequency=RecurrenceFrequency.DAILY,
        interval=1,
        end_condition=RecurrenceEndCondition.NEVER,
    )


__all__ = [
    "validate_recurrence",
    "materialize_recurrence",
    "toggle_weekday",
    "enable_recurrence",
    "daily_default",
]
