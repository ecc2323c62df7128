"""Task domain records consumed by the form core."""

from .models import Task, TaskFormPrefill, TaskNode, TimeBlock

__all__ = ["Task", "TaskFormPrefill", "TaskNode", "TimeBlock"]
