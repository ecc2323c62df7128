"""Time-block form session: fixed start and end on the calendar."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

from ..config import Settings
from ..errors import FormValidationError, InvalidRangeError, MissingTitleError
from ..scheduling import TimeRangeState, TimeRangeSynchronizer
from ..schemas.payloads import TaskType, TimeBlockPayload
from ..services.invalid_range import InvalidRangeIndicator
from ..services.recurrence import materialize_recurrence, validate_recurrence
from ..tasks.models import Task, TimeBlock
from ..utils.wall_clock import (
    DateInput,
    TimeInput,
    add_minutes,
    from_instant,
    minutes_between,
    parse_time_of_day,
    to_instant,
    to_local_hm,
    to_local_ymd,
)
from .base import ScheduleFormSession

logger = logging.getLogger(__name__)


def _range_synchronizer(start: int, end: int) -> TimeRangeSynchronizer:
    return TimeRangeSynchronizer(
        to_local_ymd(start),
        to_local_hm(start),
        to_local_ymd(end),
        to_local_hm(end),
        minutes_between(start, end),
    )


def _floor_to_hour(instant: int) -> int:
    local = from_instant(instant).replace(minute=0, second=0, microsecond=0)
    return to_instant(local.date(), local.time())


class TimeBlockFormSession(ScheduleFormSession):
    """Owns the editable state of one open time-block form.

    Blocks always carry a time of day on both ends.
    """

    def __init__(
        self,
        *,
        block_id: Optional[str] = None,
        time_blocks: Iterable[TimeBlock] = (),
        all_tasks: Iterable[Task] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> None:
        tag_sources = [b.tags for b in time_blocks] + [t.tags for t in all_tasks]
        super().__init__(tag_sources=tag_sources, settings=settings, indicator=indicator)
        self.block_id = block_id
        self.task_type: Optional[TaskType] = None
        self.color: str = self.settings.default_block_color

    @classmethod
    def new(
        cls,
        *,
        now: Optional[int] = None,
        initial_instant: Optional[int] = None,
        initial_range: Optional[tuple[int, int]] = None,
        time_blocks: Iterable[TimeBlock] = (),
        all_tasks: Iterable[Task] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> "TimeBlockFormSession":
        """Open a blank block form.

        A picked range is used as-is; a picked instant starts a block of the
        default length; otherwise the block starts at the current hour.
        """

        session = cls(
            time_blocks=time_blocks,
            all_tasks=all_tasks,
            settings=settings,
            indicator=indicator,
        )
        default_minutes = session.settings.default_block_minutes
        if initial_range is not None:
            start, end = initial_range
        elif initial_instant is not None:
            start = initial_instant
            end = add_minutes(start, default_minutes)
        else:
            current = now if now is not None else int(time.time() * 1000)
            start = _floor_to_hour(current)
            end = add_minutes(start, default_minutes)

        session.time_range = _range_synchronizer(start, end)
        return session

    @classmethod
    def edit(
        cls,
        block: TimeBlock,
        *,
        time_blocks: Iterable[TimeBlock] = (),
        all_tasks: Iterable[Task] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> "TimeBlockFormSession":
        """Open the form on an existing block."""

        session = cls(
            block_id=block.id,
            time_blocks=time_blocks,
            all_tasks=all_tasks,
            settings=settings,
            indicator=indicator,
        )
        session.title = block.title
        session.task_type = block.task_type
        session.tags_text = ", ".join(block.tags)
        if block.color:
            session.color = block.color
        session.time_range = _range_synchronizer(block.start_time, block.end_time)
        session.is_recurring = block.is_recurring
        if block.recurrence_pattern is not None:
            session.recurrence = block.recurrence_pattern.model_copy(deep=True)
        return session

    def set_start(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        _require_time(time_of_day)
        return super().set_start(day, time_of_day)

    def set_end(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        _require_time(time_of_day)
        return super().set_end(day, time_of_day)

    def submit(self) -> TimeBlockPayload:
        """Validate the form and build the block payload.

        Raises:
            MissingTitleError: If the title is empty
            InvalidRangeError: If the end is not strictly after the start
            FormValidationError: If the recurrence draft is incomplete
        """

        if not self.title.strip():
            raise MissingTitleError()

        start = self.time_range.start_instant
        end = self.time_range.end_instant
        if start is None or end is None or end <= start:
            exc = InvalidRangeError(
                "End time must be after start time", start=start, end=end
            )
            self._flag_invalid_range(exc)
            raise exc

        try:
            validate_recurrence(self.recurrence, self.is_recurring)
        except FormValidationError as exc:
            logger.warning("Submit blocked: %s", exc)
            raise

        payload = TimeBlockPayload(
            title=self.title,
            start_time=start,
            end_time=end,
            task_type=self.task_type,
            tags=self.tags,
            color=self.color,
            is_recurring=self.is_recurring,
            recurrence_pattern=(
                materialize_recurrence(self.recurrence) if self.is_recurring else None
            ),
        )
        logger.info("Time block form submitted: %r", self.title)
        return payload


def _require_time(time_of_day: TimeInput) -> None:
    if parse_time_of_day(time_of_day) is None:
        raise ValueError("Time blocks need a time of day")


__all__ = ["TimeBlockFormSession"]
