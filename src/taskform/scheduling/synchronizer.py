"""Keep start, end and duration of a schedulable unit consistent."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import InvalidRangeError
from ..utils.wall_clock import (
    DateInput,
    TimeInput,
    add_minutes,
    minutes_between,
    parse_date,
    parse_time_of_day,
    to_instant,
    to_local_hm,
    to_local_ymd,
)
from .models import FinalizedSchedule, TimeRangeState

logger = logging.getLogger(__name__)


def _normalize_date(value: DateInput) -> Optional[str]:
    parsed = parse_date(value)
    return parsed.isoformat() if parsed is not None else None


def _normalize_time(value: TimeInput) -> Optional[str]:
    parsed = parse_time_of_day(value)
    return parsed.strftime("%H:%M") if parsed is not None else None


def _check_duration(minutes: Optional[int]) -> Optional[int]:
    if minutes is None:
        return None
    if minutes < 0:
        raise ValueError(f"Duration must be non-negative, got {minutes}")
    return int(minutes)


class TimeRangeSynchronizer:
    """Own the ``{start, end, duration}`` triple of one form session.

    ``set_start``, ``set_end``, ``set_duration`` and ``finalize`` are the only
    mutation entry points. There is no notion of an authoritative field: the
    most recent of ``set_duration`` and ``set_end`` decides the end.
    """

    def __init__(
        self,
        start_date: DateInput = None,
        start_time: TimeInput = None,
        end_date: DateInput = None,
        end_time: TimeInput = None,
        duration_minutes: Optional[int] = None,
    ) -> None:
        self._start_date = _normalize_date(start_date)
        self._start_time = _normalize_time(start_time)
        self._end_date = _normalize_date(end_date)
        self._end_time = _normalize_time(end_time)
        self._duration = _check_duration(duration_minutes)

    @classmethod
    def from_instant(
        cls,
        scheduled_instant: Optional[int],
        *,
        is_all_day: bool,
        duration_minutes: Optional[int] = None,
    ) -> "TimeRangeSynchronizer":
        """Build the state shown when an already scheduled unit is opened.

        The end is projected from a positive duration. Without one the end
        stays unset, so a timed unit never opens with an end before its start.
        """

        duration = duration_minutes or None
        if scheduled_instant is None:
            return cls(duration_minutes=duration)

        start_date = to_local_ymd(scheduled_instant)
        start_time = None if is_all_day else to_local_hm(scheduled_instant)
        if duration is None:
            return cls(start_date, start_time)

        end = add_minutes(scheduled_instant, duration)
        return cls(
            start_date,
            start_time,
            to_local_ymd(end),
            None if is_all_day else to_local_hm(end),
            duration,
        )

    @property
    def start_date(self) -> Optional[str]:
        return self._start_date

    @property
    def start_time(self) -> Optional[str]:
        return self._start_time

    @property
    def end_date(self) -> Optional[str]:
        return self._end_date

    @property
    def end_time(self) -> Optional[str]:
        return self._end_time

    @property
    def duration_minutes(self) -> Optional[int]:
        return self._duration

    @property
    def is_all_day(self) -> bool:
        """All-day units have no time of day on their start."""

        return self._start_time is None

    @property
    def start_instant(self) -> Optional[int]:
        if self._start_date is None:
            return None
        return to_instant(self._start_date, self._start_time)

    @property
    def end_instant(self) -> Optional[int]:
        if self._end_date is None:
            return None
        return to_instant(self._end_date, self._end_time)

    def snapshot(self) -> TimeRangeState:
        return TimeRangeState(
            start_date=self._start_date,
            start_time=self._start_time,
            end_date=self._end_date,
            end_time=self._end_time,
            duration_minutes=self._duration,
        )

    def set_start(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        """Move the start, dragging the end along when a duration is known."""

        self._start_date = _normalize_date(day)
        self._start_time = _normalize_time(time_of_day)

        start = self.start_instant
        if start is None:
            return self.snapshot()

        if self._duration is not None:
            self._project_end(start)
        else:
            end = self.end_instant
            if end is not None and end < start:
                logger.debug("End precedes new start; moving end to %s", start)
                self._end_date = self._start_date
                self._end_time = self._start_time

        return self.snapshot()

    def set_end(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        """Move the end and derive the duration from it.

        The end fields are always stored. When the end precedes the start the
        duration is left alone and ``InvalidRangeError`` is raised so the
        caller can flag the field.
        """

        self._end_date = _normalize_date(day)
        self._end_time = _normalize_time(time_of_day)

        start = self.start_instant
        end = self.end_instant
        if start is None or end is None:
            return self.snapshot()

        if end < start:
            logger.debug("Rejected end %s before start %s", end, start)
            raise InvalidRangeError(start=start, end=end)

        self._duration = minutes_between(start, end)
        return self.snapshot()

    def set_duration(self, minutes: Optional[int]) -> TimeRangeState:
        """Store a typed duration and project the end from the start."""

        self._duration = _check_duration(minutes)
        if self._duration is None:
            return self.snapshot()

        start = self.start_instant
        if start is not None:
            self._project_end(start)
        return self.snapshot()

    def finalize(self) -> FinalizedSchedule:
        """Compute the submitted schedule without mutating the session.

        Raises:
            InvalidRangeError: If an end is set and precedes the start
        """

        is_all_day = self.is_all_day
        duration = self._duration
        start = self.start_instant
        if start is None:
            return FinalizedSchedule(None, is_all_day, duration)

        end = self.end_instant
        if end is not None:
            if end < start:
                raise InvalidRangeError(start=start, end=end)
            return FinalizedSchedule(start, is_all_day, minutes_between(start, end), end)

        if is_all_day:
            # A typed all-day duration is kept as-is with no derived end.
            return FinalizedSchedule(start, True, duration)

        projected = add_minutes(start, duration) if duration is not None else None
        return FinalizedSchedule(start, False, duration, projected)

    def _project_end(self, start: int) -> None:
        end = add_minutes(start, self._duration or 0)
        self._end_date = to_local_ymd(end)
        self._end_time = to_local_hm(end) if self._start_time is not None else None

    def __repr__(self) -> str:
        state = self.snapshot()
        return (
            "TimeRangeSynchronizer("
            f"start={state.start_date} {state.start_time}, "
            f"end={state.end_date} {state.end_time}, "
            f"duration={state.duration_minutes})"
        )


__all__ = ["TimeRangeSynchronizer"]
