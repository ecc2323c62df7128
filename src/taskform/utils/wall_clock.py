"""Local wall-clock conversions between form fields and instants.

Form fields carry dates as ``YYYY-MM-DD`` and times of day as ``HH:MM``.
Instants are integer milliseconds since the epoch. Conversions interpret
the wall clock in the platform's local timezone, with no UTC normalization,
so that a date and time typed into the form round-trip unchanged.
"""

from __future__ import annotations

import datetime
import math
from typing import Optional, Union

MS_PER_MINUTE = 60_000

DateInput = Union[str, datetime.date, None]
TimeInput = Union[str, datetime.time, None]


def parse_date(value: DateInput) -> Optional[datetime.date]:
    """Parse a ``YYYY-MM-DD`` field value.

    Args:
        value: Field text, a ``date`` instance, or ``None``

    Returns:
        The parsed date, or None when the field is blank

    Raises:
        ValueError: If the text is not a valid calendar date
    """
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    text = value.strip()
    if not text:
        return None
    return datetime.date.fromisoformat(text)


def parse_time_of_day(value: TimeInput) -> Optional[datetime.time]:
    """Parse an ``HH:MM`` field value.

    Args:
        value: Field text, a ``time`` instance, or ``None``

    Returns:
        The parsed time (seconds dropped), or None when the field is blank

    Raises:
        ValueError: If the text is not a valid time of day
    """
    if value is None:
        return None
    if isinstance(value, datetime.time):
        return value.replace(second=0, microsecond=0)

    text = value.strip()
    if not text:
        return None

    parts = text.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time of day: {value!r}")
    hour, minute = (int(part) for part in parts)
    return datetime.time(hour, minute)


def to_instant(day: DateInput, time_of_day: TimeInput = None) -> int:
    """Combine a date and an optional time of day into a local instant.

    A missing time of day means local midnight.
    """
    parsed_day = parse_date(day)
    if parsed_day is None:
        raise ValueError("A date is required to build an instant")
    parsed_time = parse_time_of_day(time_of_day) or datetime.time(0, 0)

    local = datetime.datetime.combine(parsed_day, parsed_time)
    return int(round(local.timestamp() * 1000))


def from_instant(instant: int) -> datetime.datetime:
    """Return the naive local datetime for ``instant``."""

    return datetime.datetime.fromtimestamp(instant / 1000)


def to_local_ymd(instant: int) -> str:
    return from_instant(instant).strftime("%Y-%m-%d")


def to_local_hm(instant: int) -> str:
    return from_instant(instant).strftime("%H:%M")


def add_minutes(instant: int, minutes: int) -> int:
    return instant + minutes * MS_PER_MINUTE


def minutes_between(start: int, end: int) -> int:
    """Whole minutes from ``start`` to ``end``, halves rounded up."""

    return math.floor((end - start) / MS_PER_MINUTE + 0.5)


__all__ = [
    "MS_PER_MINUTE",
    "parse_date",
    "parse_time_of_day",
    "to_instant",
    "from_instant",
    "to_local_ymd",
    "to_local_hm",
    "add_minutes",
    "minutes_between",
]
