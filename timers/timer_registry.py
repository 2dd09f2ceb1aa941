"""
Named timer registry.

Lets callers start, restart and cancel repeating callbacks by a chosen name
instead of holding on to timer handles. Each registry owns a mapping from
name to TimerEntry and delegates the actual firing to a TimerBackend.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from config.timer_config import TimerRegistryConfig
from timers.asyncio_backend import AsyncioTimerBackend
from timers.base import TimerBackend, TimerHandle
from timers.repeating_timer import ThreadTimerBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerEntry:
    """Registry entry: the live timer handle and the callback it fires."""

    handle: TimerHandle
    callback: Callable[[], Any]


class TimerRegistry:
    """Registry of repeating timers keyed by caller-chosen names.

    All operations are synchronous. Callbacks may call back into the
    registry, including to cancel or restart their own timer.

    Scheduling a name that is already registered replaces the entry. By
    default the replaced timer is NOT cancelled and keeps firing, untracked;
    pass cancel_replaced=True to cancel it instead.
    """

    def __init__(
        self,
        backend: Optional[TimerBackend] = None,
        cancel_replaced: bool = False,
    ):
        """Initialize TimerRegistry.

        Args:
            backend: Repeating-timer primitive, ThreadTimerBackend by default
            cancel_replaced: Cancel the previous timer when a name is rescheduled
        """
        self.backend = backend or ThreadTimerBackend()
        self.cancel_replaced = cancel_replaced
        self._entries: dict[str, TimerEntry] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: TimerRegistryConfig, loop=None) -> "TimerRegistry":
        """Build a registry from TimerRegistryConfig.

        Args:
            config: Registry settings
            loop: Event loop for the asyncio backend, the running loop if omitted
        """
        if config.backend == "asyncio":
            backend = AsyncioTimerBackend(loop)
        else:
            backend = ThreadTimerBackend()
        return cls(backend=backend, cancel_replaced=config.cancel_replaced)

    def schedule(
        self,
        name: str,
        callback: Callable[[], Any],
        interval_ms: float,
        immediate: bool = False,
    ):
        """Start invoking callback every interval_ms under name.

        Args:
            name: Registry key, replaces any existing entry
            callback: Zero-argument callable
            interval_ms: Firing period in milliseconds
            immediate: Invoke callback once, synchronously, before scheduling
        """
        if immediate:
            callback()

        with self._lock:
            handle = self.backend.start(callback, interval_ms)
            previous = self._entries.get(name)
            self._entries[name] = TimerEntry(handle=handle, callback=callback)

        if previous is not None:
            if self.cancel_replaced:
                self.backend.cancel(previous.handle)
                logger.debug(f"Cancelled replaced timer '{name}'")
            else:
                logger.warning(
                    f"Timer '{name}' rescheduled; "
                    "the replaced timer keeps firing untracked"
                )

        logger.info(f"Scheduled timer '{name}' every {interval_ms}ms")

    def restart(self, name: str, interval_ms: float):
        """Restart a registered timer with a new interval, keeping its callback.

        Does nothing if name is not registered.
        """
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                logger.debug(f"Restart ignored, no timer named '{name}'")
                return

            # Start first so a rejected interval leaves the old timer in place
            handle = self.backend.start(entry.callback, interval_ms)
            self.backend.cancel(entry.handle)
            self._entries[name] = TimerEntry(handle=handle, callback=entry.callback)

        logger.debug(f"Restarted timer '{name}' every {interval_ms}ms")

    def cancel(self, name: str):
        """Cancel and remove a registered timer. Does nothing for unknown names."""
        with self._lock:
            entry = self._entries.pop(name, None)

        if entry is None:
            logger.debug(f"Cancel ignored, no timer named '{name}'")
            return

        self.backend.cancel(entry.handle)
        logger.debug(f"Cancelled timer '{name}'")

    def cancel_all(self):
        """Cancel every registered timer and empty the registry."""
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()

        for entry in entries:
            self.backend.cancel(entry.handle)

        logger.info(f"Cancelled {len(entries)} timers")

    def get(self, name: str) -> Optional[TimerEntry]:
        """Return the entry registered under name, if any."""
        with self._lock:
            return self._entries.get(name)

    def names(self) -> list[str]:
        """Return the registered timer names."""
        with self._lock:
            return list(self._entries)

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with registry statistics
        """
        with self._lock:
            return {
                "timer_count": len(self._entries),
                "names": list(self._entries),
                "backend": self.backend.name,
                "cancel_replaced": self.cancel_replaced,
            }

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __enter__(self) -> "TimerRegistry":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cancel_all()

    def __repr__(self) -> str:
        return f"TimerRegistry(backend={self.backend.name}, timers={len(self)})"


# Global timer registry instance
_timer_registry: Optional[TimerRegistry] = None
_timer_registry_lock = threading.Lock()


def get_timer_registry(config: Optional[TimerRegistryConfig] = None) -> TimerRegistry:
    """Get the process-wide timer registry, creating it on first use.

    Args:
        config: Settings used only when the registry is first created

    Returns:
        Global TimerRegistry instance
    """
    global _timer_registry
    with _timer_registry_lock:
        if _timer_registry is None:
            _timer_registry = TimerRegistry.from_config(config or TimerRegistryConfig())
        return _timer_registry


def reset_timer_registry():
    """Cancel every timer in the process-wide registry and discard it."""
    global _timer_registry
    with _timer_registry_lock:
        registry, _timer_registry = _timer_registry, None

    if registry is not None:
        registry.cancel_all()
