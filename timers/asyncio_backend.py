"""
Asyncio based repeating timers.

Timers are driven by loop.call_later on a single event loop and re-armed
after every firing. All calls must come from the loop's own thread.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from timers.base import TimerBackend, TimerHandle, validate_timer_args

logger = logging.getLogger(__name__)


class AsyncioRepeatingTimer(TimerHandle):
    """Repeating timer re-armed on an asyncio event loop after each firing."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[[], Any],
        interval_ms: float,
    ):
        validate_timer_args(callback, interval_ms)
        self.loop = loop
        self.callback = callback
        self.interval_ms = interval_ms
        self.fire_count = 0
        self._timer_handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def start(self) -> "AsyncioRepeatingTimer":
        self._arm()
        return self

    def _arm(self):
        self._timer_handle = self.loop.call_later(
            self.interval_ms / 1000.0, self._fire
        )

    def _fire(self):
        if self._cancelled:
            return

        self.fire_count += 1
        try:
            self.callback()
        except Exception:
            logger.exception(f"Timer callback {self.callback!r} failed")

        # The callback may have cancelled this timer
        if not self._cancelled:
            self._arm()

    def cancel(self):
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()

    @property
    def is_active(self) -> bool:
        return self._timer_handle is not None and not self._cancelled


class AsyncioTimerBackend(TimerBackend):
    """Timer backend scheduling on an asyncio event loop.

    Uses the loop given at construction, or the running loop at the time
    start() is called.
    """

    name = "asyncio"

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop

    def start(
        self, callback: Callable[[], Any], interval_ms: float
    ) -> AsyncioRepeatingTimer:
        loop = self.loop or asyncio.get_running_loop()
        return AsyncioRepeatingTimer(loop, callback, interval_ms).start()
