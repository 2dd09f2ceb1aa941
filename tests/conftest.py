"""Global pytest configuration and fixtures for the test suite."""

import pytest

from timers.base import TimerBackend, TimerHandle, validate_timer_args
from timers.timer_registry import TimerRegistry, reset_timer_registry


class FakeTimerHandle(TimerHandle):
    """Timer handle that only fires when the test calls fire()."""

    def __init__(self, callback, interval_ms):
        self.callback = callback
        self.interval_ms = interval_ms
        self.fire_count = 0
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    @property
    def is_active(self) -> bool:
        return not self.cancelled

    def fire(self):
        if self.cancelled:
            return
        self.fire_count += 1
        self.callback()


class FakeTimerBackend(TimerBackend):
    """Backend recording every started handle so tests can drive firings."""

    name = "fake"

    def __init__(self):
        self.handles: list[FakeTimerHandle] = []

    def start(self, callback, interval_ms):
        validate_timer_args(callback, interval_ms)
        handle = FakeTimerHandle(callback, interval_ms)
        self.handles.append(handle)
        return handle

    def fire_all(self):
        """Fire every handle that has not been cancelled, like one interval elapsing."""
        for handle in list(self.handles):
            handle.fire()

    @property
    def active_handles(self) -> list[FakeTimerHandle]:
        return [handle for handle in self.handles if not handle.cancelled]


@pytest.fixture
def fake_backend():
    """Recording timer backend."""
    return FakeTimerBackend()


@pytest.fixture
def registry(fake_backend):
    """TimerRegistry on the fake backend with the default replace behaviour."""
    registry = TimerRegistry(backend=fake_backend)
    yield registry
    registry.cancel_all()


@pytest.fixture
def thread_registry():
    """TimerRegistry on real daemon threads."""
    registry = TimerRegistry()
    yield registry
    registry.cancel_all()


@pytest.fixture(autouse=True)
def clean_global_registry():
    """Make sure no test leaks the process-wide registry into the next."""
    yield
    reset_timer_registry()
