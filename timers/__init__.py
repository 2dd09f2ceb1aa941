"""Named timer registry package.

Start, restart and cancel repeating callbacks by name on a thread or
asyncio timer backend.
"""

from timers.asyncio_backend import AsyncioRepeatingTimer, AsyncioTimerBackend
from timers.base import TimerBackend, TimerHandle
from timers.repeating_timer import RepeatingTimer, ThreadTimerBackend
from timers.timer_registry import (
    TimerEntry,
    TimerRegistry,
    get_timer_registry,
    reset_timer_registry,
)

__all__ = [
    "AsyncioRepeatingTimer",
    "AsyncioTimerBackend",
    "RepeatingTimer",
    "ThreadTimerBackend",
    "TimerBackend",
    "TimerEntry",
    "TimerHandle",
    "TimerRegistry",
    "get_timer_registry",
    "reset_timer_registry",
]
