"""Scoped timer and in-progress tracker resources.

Both are context managers whose release runs exactly once, on every exit
path of the ``with`` block (normal exit, early return or exception).

Example:
    >>> with histogram.new_timer():
    ...     handle_request()
    >>> with gauge.track_in_progress():
    ...     handle_request()
"""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock
from typing import Any

from .utils.time_provider import TimeProvider, get_default_time_provider


class Timer:
    """Measures wall-clock time from construction and reports it once.

    Args:
        sink: Callable receiving the elapsed duration in seconds on release
        clock: Time provider (defaults to the process-wide provider)
    """

    def __init__(self, sink: Callable[[float], None], clock: TimeProvider | None = None) -> None:
        self._sink = sink
        self._clock = clock or get_default_time_provider()
        self._start = self._clock.monotonic()
        self._lock = Lock()
        self._duration: float | None = None

    @property
    def elapsed(self) -> float:
        """Seconds elapsed so far, or the recorded duration once released."""
        if self._duration is not None:
            return self._duration
        return max(0.0, self._clock.monotonic() - self._start)

    def observe_duration(self) -> float:
        """Apply the elapsed duration to the owning metric.

        Only the first call reports to the metric; later calls return the
        duration recorded by the first one.

        Returns:
            Elapsed seconds
        """
        with self._lock:
            if self._duration is not None:
                return self._duration
            self._duration = max(0.0, self._clock.monotonic() - self._start)
        self._sink(self._duration)
        return self._duration

    def close(self) -> None:
        self.observe_duration()

    def __enter__(self) -> Timer:
        return self

    def __exit__(self, *args: Any) -> None:
        self.observe_duration()


class InProgressTracker:
    """Holds one unit of a gauge's in-progress count until released.

    The gauge is incremented on construction and decremented exactly once
    on release. Trackers on the same gauge are additive.
    """

    def __init__(self, increment: Callable[[], None], decrement: Callable[[], None]) -> None:
        self._decrement = decrement
        self._lock = Lock()
        self._released = False
        increment()

    @property
    def released(self) -> bool:
        return self._released

    def close(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        self._decrement()

    def __enter__(self) -> InProgressTracker:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
