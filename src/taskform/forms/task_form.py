"""Task form session: edits, prefills and the submit payload."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..config import Settings
from ..errors import (
    CycleViolationError,
    FormValidationError,
    InvalidRangeError,
    MissingTitleError,
)
from ..scheduling import TimeRangeSynchronizer
from ..schemas.payloads import TaskPayload, TaskPriority, TaskStatus, TaskType
from ..schemas.recurrence import RecurrencePattern
from ..services.hierarchy import compute_excluded, filter_candidate_parents
from ..services.invalid_range import InvalidRangeIndicator
from ..services.recurrence import (
    daily_default,
    materialize_recurrence,
    validate_recurrence,
)
from ..tasks.models import Task, TaskFormPrefill, TimeBlock
from .base import ScheduleFormSession

logger = logging.getLogger(__name__)


class TaskFormSession(ScheduleFormSession):
    """Owns the editable state of one open task form."""

    def __init__(
        self,
        *,
        task_id: Optional[str] = None,
        all_tasks: Sequence[Task] = (),
        time_blocks: Iterable[TimeBlock] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> None:
        self._all_tasks = list(all_tasks)
        self._time_blocks = list(time_blocks)
        super().__init__(
            tag_sources=[t.tags for t in self._all_tasks]
            + [b.tags for b in self._time_blocks],
            settings=settings,
            indicator=indicator,
        )
        self.task_id = task_id
        self.description = ""
        self.status = TaskStatus.NOT_STARTED
        self.priority = TaskPriority.MEDIUM
        self.task_type: Optional[TaskType] = None
        self.color: Optional[str] = None
        self.actual_duration_minutes: Optional[int] = None
        self.collaborator_ids: list[str] = []
        self.assignee_id: Optional[str] = None
        self.parent_id: Optional[str] = None
        self.parent_search = ""
        self._excluded = compute_excluded(task_id, self._all_tasks)

    @classmethod
    def new(
        cls,
        *,
        all_tasks: Sequence[Task] = (),
        time_blocks: Iterable[TimeBlock] = (),
        default_parent_id: Optional[str] = None,
        scheduled_time: Optional[int] = None,
        is_all_day: bool = True,
        prefill: Optional[TaskFormPrefill] = None,
        allow_recurrence: bool = False,
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> "TaskFormSession":
        """Open a blank form, optionally pinned to a picked calendar slot.

        A picked slot starts with the prefill estimate, or the configured
        default, so the end is already projected.
        """

        session = cls(
            all_tasks=all_tasks,
            time_blocks=time_blocks,
            settings=settings,
            indicator=indicator,
        )
        estimate = prefill.time_estimate_minutes if prefill else None
        if scheduled_time is not None:
            session.time_range = TimeRangeSynchronizer.from_instant(
                scheduled_time,
                is_all_day=is_all_day,
                duration_minutes=estimate or session.settings.default_task_estimate_minutes,
            )
        elif estimate:
            session.time_range = TimeRangeSynchronizer(duration_minutes=estimate)

        if default_parent_id:
            session._select_known_parent(default_parent_id)

        if prefill is not None:
            session._apply_prefill(prefill)
        elif allow_recurrence:
            session.is_recurring = True
            session.recurrence = daily_default()
        return session

    @classmethod
    def edit(
        cls,
        task: Task,
        *,
        all_tasks: Sequence[Task] = (),
        time_blocks: Iterable[TimeBlock] = (),
        settings: Optional[Settings] = None,
        indicator: Optional[InvalidRangeIndicator] = None,
    ) -> "TaskFormSession":
        """Open the form on an existing task."""

        session = cls(
            task_id=task.id,
            all_tasks=all_tasks,
            time_blocks=time_blocks,
            settings=settings,
            indicator=indicator,
        )
        session.title = task.title
        session.description = task.description or ""
        session.status = task.status
        session.priority = task.priority
        session.task_type = task.task_type
        session.color = task.color
        session.time_range = TimeRangeSynchronizer.from_instant(
            task.scheduled_time,
            is_all_day=task.is_all_day,
            duration_minutes=task.time_estimate_minutes,
        )
        session.actual_duration_minutes = task.actual_duration_minutes or None
        session.collaborator_ids = list(task.collaborator_ids)
        session.assignee_id = task.assignee_id
        session.tags_text = ", ".join(task.tags)
        session.is_recurring = task.is_recurring
        if task.recurrence_pattern is not None:
            session.recurrence = task.recurrence_pattern.model_copy(deep=True)
        if task.parent_id:
            session._select_known_parent(task.parent_id)
        return session

    @property
    def excluded_parent_ids(self) -> set[str]:
        return set(self._excluded)

    def search_parent(self, text: str) -> list[Task]:
        """Store the parent search text and return selectable candidates."""

        self.parent_search = text
        return self.parent_candidates()

    def parent_candidates(self) -> list[Task]:
        return filter_candidate_parents(
            self.parent_search,
            self._all_tasks,
            self._excluded,
            limit=self.settings.parent_candidate_limit,
        )

    def select_parent(self, parent_id: str) -> None:
        if parent_id in self._excluded:
            raise CycleViolationError(task_id=self.task_id, parent_id=parent_id)
        if self._find_task(parent_id) is None:
            raise ValueError(f"Unknown task: {parent_id}")
        self._select_known_parent(parent_id)

    def clear_parent(self) -> None:
        self.parent_id = None
        self.parent_search = ""

    def toggle_collaborator(self, user_id: str) -> list[str]:
        """Add or remove a collaborator; removing the assignee unassigns."""

        if user_id in self.collaborator_ids:
            self.collaborator_ids = [c for c in self.collaborator_ids if c != user_id]
            if self.assignee_id == user_id:
                self.assignee_id = None
        else:
            self.collaborator_ids = [*self.collaborator_ids, user_id]
        return list(self.collaborator_ids)

    def set_assignee(self, user_id: Optional[str]) -> None:
        self.assignee_id = user_id or None

    def submit(self) -> TaskPayload:
        """Validate the form and build the payload to persist.

        Raises:
            MissingTitleError: If the title is empty
            FormValidationError: If the recurrence draft is incomplete
            InvalidRangeError: If the end precedes the start
        """

        if not self.title.strip():
            raise MissingTitleError()
        try:
            validate_recurrence(self.recurrence, self.is_recurring)
        except FormValidationError as exc:
            logger.warning("Submit blocked: %s", exc)
            raise
        try:
            schedule = self.time_range.finalize()
        except InvalidRangeError as exc:
            self._flag_invalid_range(exc)
            raise

        collaborators = list(self.collaborator_ids)
        if self.assignee_id and self.assignee_id not in collaborators:
            collaborators.append(self.assignee_id)

        payload = TaskPayload(
            title=self.title,
            description=self.description or None,
            status=self.status,
            priority=self.priority,
            task_type=self.task_type,
            color=self.color or None,
            scheduled_time=schedule.scheduled_instant,
            is_all_day=schedule.is_all_day,
            time_estimate_minutes=schedule.duration_minutes,
            actual_duration_minutes=self.actual_duration_minutes,
            tags=self.tags,
            collaborator_ids=collaborators,
            assignee_id=self.assignee_id,
            parent_id=self.parent_id,
            is_recurring=self.is_recurring,
            recurrence_pattern=(
                materialize_recurrence(self.recurrence) if self.is_recurring else None
            ),
        )
        logger.info("Task form submitted: %r", self.title)
        return payload

    def _find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self._all_tasks if t.id == task_id), None)

    def _select_known_parent(self, parent_id: str) -> None:
        parent = self._find_task(parent_id)
        self.parent_id = parent_id
        self.parent_search = parent.title if parent else ""

    def _apply_prefill(self, prefill: TaskFormPrefill) -> None:
        if prefill.tags:
            self.tags_text = ", ".join(prefill.tags)
        if prefill.task_type:
            self.task_type = prefill.task_type
        if prefill.is_recurring:
            self.is_recurring = True
            if prefill.recurrence_pattern is not None:
                source = prefill.recurrence_pattern
                self.recurrence = RecurrencePattern(
                    frequency=source.frequency,
                    interval=source.interval,
                    end_condition=source.end_condition,
                )


__all__ = ["TaskFormSession"]
