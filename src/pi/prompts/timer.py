"""Cancellable periodic callback on the running asyncio loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Invoke *callback* every *interval* seconds until cancelled.

    Each tick reschedules the next one with ``loop.call_later``.  Without a
    running event loop the task never fires.  ``cancel`` may be called any
    number of times.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._interval = interval
        self._callback = callback
        self._loop = loop
        self._timer_handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; periodic task will not fire")
                return
        self._schedule_next()

    def _schedule_next(self) -> None:
        if self._cancelled or self._loop is None:
            return
        self._timer_handle = self._loop.call_later(self._interval, self._tick)

    def _tick(self) -> None:
        if self._cancelled:
            return
        self._callback()
        self._schedule_next()

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None
