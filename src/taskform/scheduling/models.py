"""Value objects produced by the time range synchronizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class TimeRangeState:
    """Field values a form renders after each edit."""

    start_date: Optional[str]
    start_time: Optional[str]
    end_date: Optional[str]
    end_time: Optional[str]
    duration_minutes: Optional[int]

    @property
    def is_all_day(self) -> bool:
        return self.start_time is None


@dataclass(frozen=True, slots=True)
class FinalizedSchedule:
    """Schedule fields materialized on submit."""

    scheduled_instant: Optional[int]
    is_all_day: bool
    duration_minutes: Optional[int]
    end_instant: Optional[int] = None

    @property
    def is_scheduled(self) -> bool:
        """Return True when the unit has a start instant."""

        return self.scheduled_instant is not None
