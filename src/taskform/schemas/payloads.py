"""Payload contracts handed to the persistence layer on submit."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .recurrence import RecurrencePattern

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"


class TaskStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TaskType(str, Enum):
    STUDY = "Study"
    WORK = "Work"
    HOBBY = "Hobby"
    HEALTH = "Health"
    HABIT = "Habit"
    CHORES = "Chores"
    COMMUTE = "Commute"


def _normalize_tags(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    raise TypeError("tags must be a sequence of strings")


class _SchedulablePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Annotated[
        str,
        Field(..., min_length=1, description="Display title of the unit"),
    ]
    task_type: Optional[TaskType] = Field(default=None)
    color: Optional[str] = Field(
        default=None,
        pattern=HEX_COLOR_PATTERN,
        description="Custom hex colour",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ordered tags, trimmed, empties dropped",
    )
    is_recurring: bool = Field(default=False)
    recurrence_pattern: Optional[RecurrencePattern] = Field(default=None)

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value: Any) -> Any:
        return _normalize_tags(value)

    @model_validator(mode="after")
    def _recurrence_iff_recurring(self) -> "_SchedulablePayload":
        if self.is_recurring and self.recurrence_pattern is None:
            raise ValueError("recurrence_pattern is required for recurring units")
        if not self.is_recurring and self.recurrence_pattern is not None:
            raise ValueError("recurrence_pattern is only allowed for recurring units")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready dict with unset optionals omitted."""

        return self.model_dump(mode="json", exclude_none=True)


class TaskPayload(_SchedulablePayload):
    """Fields submitted by the task form."""

    description: Optional[str] = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    scheduled_time: Optional[int] = Field(
        default=None,
        description="Start instant in ms; absent for unscheduled tasks",
    )
    is_all_day: bool = Field(default=True)
    time_estimate_minutes: Optional[int] = Field(default=None, ge=0)
    actual_duration_minutes: Optional[int] = Field(default=None, ge=0)
    collaborator_ids: list[str] = Field(default_factory=list)
    assignee_id: Optional[str] = Field(default=None)
    parent_id: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def _assignee_collaborates(self) -> "TaskPayload":
        if self.assignee_id and self.assignee_id not in self.collaborator_ids:
            self.collaborator_ids.append(self.assignee_id)
        return self


class TimeBlockPayload(_SchedulablePayload):
    """Fields submitted by the time-block form."""

    start_time: int = Field(..., description="Start instant in ms")
    end_time: int = Field(..., description="End instant in ms")

    @model_validator(mode="after")
    def _end_after_start(self) -> "TimeBlockPayload":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


__all__ = [
    "TaskStatus",
    "TaskPriority",
    "TaskType",
    "TaskPayload",
    "TimeBlockPayload",
]
