"""Clocks used by metric timers.

Timers never call ``time`` directly. They read a ``TimeProvider``, either
one injected through the backend factory adapter or the process-wide
provider returned by :func:`get_default_time_provider`.

Example:
    >>> clock = FakeTimeProvider(start_time=100.0)
    >>> adapter = PrometheusMetricFactoryAdapter(registry, clock=clock)
    >>> clock.advance(0.25)  # the next timer release reports 0.25s
"""

from __future__ import annotations

import time
from threading import Lock
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimeProvider(Protocol):
    """Source of monotonic timestamps, in seconds."""

    def monotonic(self) -> float: ...


class DefaultTimeProvider:
    """Reads ``time.perf_counter``, the highest-resolution monotonic clock."""

    def monotonic(self) -> float:
        return time.perf_counter()


class FakeTimeProvider:
    """Manually driven clock for tests.

    Args:
        start_time: Initial reading
        step: Amount added after every ``monotonic()`` call, so code that
            reads the clock twice sees time pass without ``advance``
    """

    def __init__(self, start_time: float = 0.0, step: float = 0.0) -> None:
        if step < 0:
            raise ValueError("step must not be negative")
        self._now = start_time
        self._step = step
        self._lock = Lock()

    def monotonic(self) -> float:
        with self._lock:
            reading = self._now
            self._now += self._step
            return reading

    def advance(self, seconds: float) -> float:
        """Move the clock forward and return the new reading.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError("a monotonic clock cannot move backwards")
        with self._lock:
            self._now += seconds
            return self._now


_default_provider: TimeProvider = DefaultTimeProvider()


def get_default_time_provider() -> TimeProvider:
    return _default_provider


def set_default_time_provider(provider: TimeProvider) -> None:
    """Replace the clock used by timers created without one."""
    global _default_provider
    _default_provider = provider


def reset_default_time_provider() -> None:
    global _default_provider
    _default_provider = DefaultTimeProvider()
