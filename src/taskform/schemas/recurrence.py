"""Recurrence rule schema shared by tasks and time blocks.

The same model serves as the editable draft of an open form and as the
materialized rule that is handed to the persistence layer. Enum values are
the strings stored by that layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecurrenceFrequency(str, Enum):
    """How often a unit repeats."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class RecurrenceEndCondition(str, Enum):
    """When a repeating unit stops."""

    NEVER = "No end date"
    AFTER_COUNT = "After X occurrences"
    UNTIL_DATE = "Until specific date"


class Weekday(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"


WEEKDAY_ORDER: tuple[Weekday, ...] = tuple(Weekday)

INTERVAL_UNITS: dict[RecurrenceFrequency, str] = {
    RecurrenceFrequency.DAILY: "days",
    RecurrenceFrequency.WEEKLY: "weeks",
    RecurrenceFrequency.MONTHLY: "months",
}


class RecurrencePattern(BaseModel):
    """Repeating rule: every ``interval`` days, weeks or months."""

    model_config = ConfigDict(validate_assignment=True)

    frequency: Optional[RecurrenceFrequency] = Field(
        default=None,
        description="Repeat unit; unset while the user has not picked one",
    )
    interval: Optional[int] = Field(
        default=None,
        description="Repeat every N units; stored, never interpreted here",
    )
    days_of_week: list[Weekday] = Field(
        default_factory=list,
        description="Weekdays the unit repeats on, meaningful for weekly rules",
    )
    end_condition: RecurrenceEndCondition = Field(
        default=RecurrenceEndCondition.NEVER,
        description="How the repetition ends",
    )
    end_count: Optional[int] = Field(
        default=None,
        description="Number of occurrences for 'After X occurrences'",
    )
    end_date: Optional[int] = Field(
        default=None,
        description="Last day (instant, ms) for 'Until specific date'",
    )
    exclude_dates: list[int] = Field(
        default_factory=list,
        description="Occurrence instants that are skipped",
    )
    completed_instances: list[int] = Field(
        default_factory=list,
        description="Occurrence instants already marked completed",
    )

    @field_validator("days_of_week", mode="before")
    @classmethod
    def _normalize_days(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, Weekday)):
            return [value]
        return value

    @field_validator("days_of_week")
    @classmethod
    def _order_days(cls, value: list[Weekday]) -> list[Weekday]:
        # Set semantics, rendered Monday first.
        present = set(value)
        return [day for day in WEEKDAY_ORDER if day in present]


def interval_unit(frequency: Optional[RecurrenceFrequency]) -> str:
    """Return the unit the interval counts in (days when unset)."""

    if frequency is None:
        return INTERVAL_UNITS[RecurrenceFrequency.DAILY]
    return INTERVAL_UNITS[RecurrenceFrequency(frequency)]


__all__ = [
    "RecurrenceFrequency",
    "RecurrenceEndCondition",
    "Weekday",
    "WEEKDAY_ORDER",
    "RecurrencePattern",
    "interval_unit",
]
