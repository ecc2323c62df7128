"""Utility helpers shared by the scheduling core."""

from .wall_clock import (
    add_minutes,
    from_instant,
    minutes_between,
    to_instant,
    to_local_hm,
    to_local_ymd,
)

__all__ = [
    "add_minutes",
    "from_instant",
    "minutes_between",
    "to_instant",
    "to_local_hm",
    "to_local_ymd",
]
