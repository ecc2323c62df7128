"""Form sessions wiring the scheduling core together."""

from .task_form import TaskFormSession
from .time_block_form import TimeBlockFormSession

__all__ = ["TaskFormSession", "TimeBlockFormSession"]
