"""
Thread based repeating timers.

Each RepeatingTimer runs its callback on a daemon thread, waiting on a stop
event between firings, and keeps running when the callback raises.
"""

import itertools
import logging
import threading
from typing import Any, Callable, Optional

from timers.base import TimerBackend, TimerHandle, validate_timer_args

logger = logging.getLogger(__name__)

_timer_ids = itertools.count(1)


class RepeatingTimer(TimerHandle):
    """Invokes a callback every interval on a dedicated daemon thread.

    The first firing happens one full interval after start(). Once cancel()
    returns no new invocation is started; an invocation already running
    completes.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        interval_ms: float,
        name: Optional[str] = None,
    ):
        """Initialize RepeatingTimer.

        Args:
            callback: Zero-argument callable to invoke on every firing
            interval_ms: Firing period in milliseconds
            name: Thread name, generated when omitted
        """
        validate_timer_args(callback, interval_ms)
        self.callback = callback
        self.interval_ms = interval_ms
        self.name = name or f"RepeatingTimer-{next(_timer_ids)}"
        self.fire_count = 0
        self._stop_event = threading.Event()
        self._fire_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "RepeatingTimer":
        """Start the timer thread."""
        if self._thread is not None:
            raise RuntimeError(f"{self.name} already started")

        self._thread = threading.Thread(target=self._run, daemon=True, name=self.name)
        self._thread.start()
        logger.debug(f"{self.name} started with {self.interval_ms}ms interval")
        return self

    def cancel(self):
        """Stop future firings without waiting for the thread to exit."""
        with self._fire_lock:
            if self._stop_event.is_set():
                return
            self._stop_event.set()
        logger.debug(f"{self.name} cancelled after {self.fire_count} firings")

    def join(self, timeout: Optional[float] = None):
        """Wait for the timer thread to exit after cancel()."""
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    @property
    def is_active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def _run(self):
        """Main timer loop."""
        interval = self.interval_ms / 1000.0

        while not self._stop_event.wait(timeout=interval):
            # cancel() takes the same lock, so a firing is either committed
            # before cancel() returns or never started
            with self._fire_lock:
                if self._stop_event.is_set():
                    break
                self.fire_count += 1

            try:
                self.callback()
            except Exception:
                logger.exception(f"{self.name} callback failed")

    def __repr__(self) -> str:
        return (
            f"RepeatingTimer(name={self.name!r}, interval_ms={self.interval_ms}, "
            f"active={self.is_active})"
        )


class ThreadTimerBackend(TimerBackend):
    """Timer backend running every timer on its own daemon thread."""

    name = "thread"

    def start(self, callback: Callable[[], Any], interval_ms: float) -> RepeatingTimer:
        return RepeatingTimer(callback, interval_ms).start()
