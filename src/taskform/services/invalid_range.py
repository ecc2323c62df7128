"""Transient highlight shown when an end is typed before its start."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_FLASH_MS = 500


class InvalidRangeIndicator:
    """Self-clearing flag for the invalid range highlight.

    The flag is pure presentation state: raising or clearing it never
    touches form data. Clearing runs as an asyncio task on the caller's
    loop; without a running loop the flag stays up until ``clear()``.
    """

    def __init__(
        self,
        duration_ms: int = DEFAULT_FLASH_MS,
        on_change: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._duration_ms = duration_ms
        self._on_change = on_change
        self._active = False
        self._clear_task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._active

    def trigger(self) -> None:
        """Raise the flag and (re)start the clear countdown."""

        self._cancel_pending()
        self._set(True)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; invalid range flag cleared manually")
            return
        self._clear_task = loop.create_task(self._clear_later())

    def clear(self) -> None:
        self._cancel_pending()
        self._set(False)

    def close(self) -> None:
        """Drop any pending clear when the form closes."""

        self._cancel_pending()
        self._set(False)

    async def _clear_later(self) -> None:
        await asyncio.sleep(self._duration_ms / 1000)
        self._clear_task = None
        self._set(False)

    def _cancel_pending(self) -> None:
        task = self._clear_task
        self._clear_task = None
        if task is not None and not task.done():
            task.cancel()

    def _set(self, value: bool) -> None:
        if self._active == value:
            return
        self._active = value
        if self._on_change is not None:
            self._on_change(value)


__all__ = ["InvalidRangeIndicator", "DEFAULT_FLASH_MS"]
