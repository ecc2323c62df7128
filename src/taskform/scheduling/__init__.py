"""Time range synchronization for schedulable units."""

from .models import FinalizedSchedule, TimeRangeState
from .synchronizer import TimeRangeSynchronizer

__all__ = ["FinalizedSchedule", "TimeRangeState", "TimeRangeSynchronizer"]
