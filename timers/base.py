"""Base timer backend abstract class.

Defines the repeating-timer primitive that the TimerRegistry delegates to:
start a callback every interval and cancel it again through the returned
handle.
"""

import math
import numbers
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable


def validate_timer_args(callback: Callable[[], Any], interval_ms: float):
    """Check the arguments every backend accepts.

    Raises:
        TypeError: If callback is not callable or interval_ms is not a number
        ValueError: If interval_ms is not positive, not finite, or longer than
            the longest wait threading supports
    """
    if not callable(callback):
        raise TypeError(
            f"Timer callback must be callable, got {type(callback).__name__}"
        )
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, numbers.Real):
        raise TypeError(
            "Timer interval must be a number of milliseconds, "
            f"got {type(interval_ms).__name__}"
        )
    if not interval_ms > 0:
        raise ValueError(f"Timer interval must be positive, got {interval_ms}")
    if not math.isfinite(interval_ms) or interval_ms / 1000.0 > threading.TIMEOUT_MAX:
        raise ValueError(
            "Timer interval must be finite and at most "
            f"{threading.TIMEOUT_MAX * 1000.0}ms, got {interval_ms}"
        )


class TimerHandle(ABC):
    """A cancellable, currently scheduled repeating timer."""

    interval_ms: float
    fire_count: int

    @abstractmethod
    def cancel(self):
        """Stop future firings. Safe to call more than once."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True until the timer is cancelled."""


class TimerBackend(ABC):
    """Host repeating-timer primitive.

    Backends validate their own arguments; the registry passes any error
    through to its caller unchanged.
    """

    name: str = "base"

    @abstractmethod
    def start(self, callback: Callable[[], Any], interval_ms: float) -> TimerHandle:
        """Invoke callback every interval_ms milliseconds until cancelled.

        Args:
            callback: Zero-argument callable
            interval_ms: Positive firing period in milliseconds

        Returns:
            Handle used to cancel the timer
        """

    def cancel(self, handle: TimerHandle):
        """Cancel a handle previously returned by start()."""
        handle.cancel()
