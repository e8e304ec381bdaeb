"""Metric instances returned by the metric factory.

Each class wraps a backend adapter and forwards to it without caching or
batching values, so concurrent updates reach the backend unchanged. An
instance returned by the factory is the parent; ``with_labels`` returns an
independent child bound to concrete label values. Calling ``with_labels``
on a child raises :class:`~pulse.errors.InvalidOperationError`.

Example:
    >>> requests = factory.create_counter("requests", "Requests served", "route")
    >>> requests.with_labels("/health").increment()
    >>> with latency.new_timer():
    ...     handle()
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .interfaces import ExceptionFilter
from .prometheus.interfaces import CounterAdapter, GaugeAdapter, HistogramAdapter, SummaryAdapter
from .timers import InProgressTracker, Timer

T = TypeVar("T")


def _accept_all(_: BaseException) -> bool:
    return True


class PulseCounter:
    """Monotonically increasing counter."""

    def __init__(self, counter: CounterAdapter) -> None:
        self._counter = counter

    @property
    def value(self) -> float:
        return self._counter.value

    def with_labels(self, *labels: str) -> PulseCounter:
        return PulseCounter(self._counter.with_labels(*labels))

    def increment(self, value: float = 1.0) -> None:
        """Increment by ``value``; negative values are rejected by the backend."""
        self._counter.inc(value)

    def increment_to(self, target: float) -> None:
        """Raise the counter to ``target`` if it is currently lower."""
        self._counter.inc_to(target)

    def new_timer(self) -> Timer:
        """Start a timer that increments the counter by elapsed seconds on release."""
        return self._counter.new_timer()

    def _record_exception(self, exc: Exception, exception_filter: ExceptionFilter | None) -> None:
        if (exception_filter or _accept_all)(exc):
            self._counter.inc()

    def count_exceptions(
        self,
        func: Callable[..., T],
        *args: Any,
        exception_filter: ExceptionFilter | None = None,
        **kwargs: Any,
    ) -> T:
        """Call ``func`` and count the exception it raises, if any.

        The counter is incremented by one when ``func`` raises and
        ``exception_filter`` (default: accept all) returns True for the
        exception. The exception is always re-raised unchanged.

        Returns:
            Whatever ``func`` returns
        """
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            self._record_exception(exc, exception_filter)
            raise

    async def count_exceptions_async(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        exception_filter: ExceptionFilter | None = None,
        **kwargs: Any,
    ) -> T:
        """Await ``func(*args, **kwargs)`` and count the exception it raises, if any.

        Cancellation (``asyncio.CancelledError``) is not an error completion:
        it is never counted and propagates untouched.
        """
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            self._record_exception(exc, exception_filter)
            raise

    def count_exceptions_decorator(
        self, exception_filter: ExceptionFilter | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``count_exceptions`` for sync and async functions.

        Example:
            >>> @failures.count_exceptions_decorator()
            ... async def fetch(url): ...
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            if inspect.iscoroutinefunction(func):

                @functools.wraps(func)
                async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                    return await self.count_exceptions_async(
                        func, *args, exception_filter=exception_filter, **kwargs
                    )

                return async_wrapper

            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                return self.count_exceptions(func, *args, exception_filter=exception_filter, **kwargs)

            return wrapper

        return decorator


class PulseGauge:
    """Value that can go up and down."""

    def __init__(self, gauge: GaugeAdapter) -> None:
        self._gauge = gauge

    @property
    def value(self) -> float:
        return self._gauge.value

    def with_labels(self, *labels: str) -> PulseGauge:
        return PulseGauge(self._gauge.with_labels(*labels))

    def set(self, value: float) -> None:
        self._gauge.set(value)

    def increment(self, value: float = 1.0) -> None:
        self._gauge.inc(value)

    def increment_to(self, target: float) -> None:
        """Set the gauge to ``max(current, target)``."""
        self._gauge.inc_to(target)

    def decrement(self, value: float = 1.0) -> None:
        self._gauge.dec(value)

    def decrement_to(self, target: float) -> None:
        """Set the gauge to ``min(current, target)``."""
        self._gauge.dec_to(target)

    def new_timer(self) -> Timer:
        """Start a timer that sets the gauge to elapsed seconds on release."""
        return self._gauge.new_timer()

    def track_in_progress(self) -> InProgressTracker:
        """Increment now and decrement when the returned tracker is released."""
        return self._gauge.track_in_progress()


class PulseHistogram:
    def __init__(self, histogram: HistogramAdapter) -> None:
        self._histogram = histogram

    @property
    def sum(self) -> float:
        return self._histogram.sum

    @property
    def count(self) -> int:
        return self._histogram.count

    def with_labels(self, *labels: str) -> PulseHistogram:
        return PulseHistogram(self._histogram.with_labels(*labels))

    def observe(self, value: float, count: int = 1) -> None:
        """Record ``count`` pre-aggregated observations of ``value``."""
        self._histogram.observe(value, count)

    def new_timer(self) -> Timer:
        return self._histogram.new_timer()


class PulseSummary:
    # No sum/count accessors: the backend does not guarantee a consistent
    # snapshot of them across its sliding window.

    def __init__(self, summary: SummaryAdapter) -> None:
        self._summary = summary

    def with_labels(self, *labels: str) -> PulseSummary:
        return PulseSummary(self._summary.with_labels(*labels))

    def observe(self, value: float) -> None:
        self._summary.observe(value)

    def new_timer(self) -> Timer:
        return self._summary.new_timer()
