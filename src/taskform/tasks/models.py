"""Read-only snapshots of tasks and time blocks supplied by the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..schemas.payloads import TaskPriority, TaskStatus, TaskType
from ..schemas.recurrence import RecurrencePattern


@dataclass(slots=True)
class TaskNode:
    """The part of a task the hierarchy guard looks at."""

    id: str
    title: str
    parent_id: Optional[str] = None


@dataclass(slots=True)
class Task:
    """Representation of a stored task as the form receives it."""

    id: str
    title: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    scheduled_time: Optional[int] = None
    is_all_day: bool = True
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority = TaskPriority.MEDIUM
    color: Optional[str] = None
    time_estimate_minutes: Optional[int] = None
    actual_duration_minutes: Optional[int] = None
    tags: list[str] = field(default_factory=list)
    collaborator_ids: list[str] = field(default_factory=list)
    assignee_id: Optional[str] = None
    task_type: Optional[TaskType] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None

    @property
    def is_scheduled(self) -> bool:
        """Return True when the task has a start instant."""

        return self.scheduled_time is not None


@dataclass(slots=True)
class TimeBlock:
    """Fixed block of time on the calendar."""

    id: str
    title: str
    start_time: int
    end_time: int
    task_type: Optional[TaskType] = None
    tags: list[str] = field(default_factory=list)
    color: Optional[str] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None


@dataclass(slots=True)
class TaskFormPrefill:
    """Values a caller pushes into a freshly opened task form."""

    tags: Optional[list[str]] = None
    task_type: Optional[TaskType] = None
    time_estimate_minutes: Optional[int] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
