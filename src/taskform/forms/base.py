"""Behaviour shared by the task and time-block form sessions."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..config import Settings, get_settings
from ..errors import InvalidRangeError
from ..scheduling import TimeRangeState, TimeRangeSynchronizer
from ..schemas.recurrence import RecurrencePattern, Weekday
from ..services.invalid_range import InvalidRangeIndicator
from ..services.recurrence import enable_recurrence, toggle_weekday
from ..services.tag_suggestions import (
    TagSuggestionMatcher,
    build_tag_corpus,
    parse_tags,
)
from ..utils.wall_clock import DateInput, TimeInput

logger = logging.getLogger(__name__)


class ScheduleFormSession:
    """State of one open form: a time range, a recurrence draft and tags."""

    def __init__(
        self,
        *,
        tag_sources: Iterable[Iterable[str] | None] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.indicator = indicator or InvalidRangeIndicator(
            self._settings.invalid_range_flash_ms
        )
        self.time_range = TimeRangeSynchronizer()
        self.title = ""
        self.tags_text = ""
        self.is_recurring = False
        self.recurrence = RecurrencePattern()
        self._tag_matcher = TagSuggestionMatcher(
            build_tag_corpus(tag_sources), limit=self._settings.suggestion_limit
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def tags(self) -> list[str]:
        return parse_tags(self.tags_text)

    def set_start(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        return self.time_range.set_start(day, time_of_day)

    def set_end(self, day: DateInput, time_of_day: TimeInput = None) -> TimeRangeState:
        try:
            return self.time_range.set_end(day, time_of_day)
        except InvalidRangeError:
            self.indicator.trigger()
            raise

    def set_duration(self, minutes: Optional[int]) -> TimeRangeState:
        return self.time_range.set_duration(minutes)

    def set_tags_text(self, text: str) -> list[str]:
        """Store the raw tag field and return fresh suggestions."""

        self.tags_text = text
        return self._tag_matcher.suggest(text)

    def tag_suggestions(self) -> list[str]:
        return self._tag_matcher.suggest(self.tags_text)

    def commit_tag(self, tag: str) -> str:
        self.tags_text = self._tag_matcher.commit(self.tags_text, tag)
        return self.tags_text

    def set_recurring(self, enabled: bool) -> None:
        self.is_recurring = enabled
        if enabled:
            enable_recurrence(self.recurrence)

    def toggle_weekday(self, day: Weekday | str) -> list[Weekday]:
        toggle_weekday(self.recurrence, day)
        return list(self.recurrence.days_of_week)

    def close(self) -> None:
        """Discard transient presentation state when the form closes."""

        self.indicator.close()

    def _flag_invalid_range(self, exc: InvalidRangeError) -> None:
        logger.warning("Submit blocked: %s", exc)
        self.indicator.trigger()


__all__ = ["ScheduleFormSession"]
