"""Metric protocols exposed to application code.

Application code depends on these protocols only; the concrete classes in
:mod:`pulse.metrics` satisfy them for any backend that implements the
adapter protocols in :mod:`pulse.prometheus.interfaces`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from datetime import timedelta
from types import TracebackType
from typing import Any, Protocol, TypeVar, runtime_checkable

from .configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    SummaryConfiguration,
)

T = TypeVar("T")

ExceptionFilter = Callable[[BaseException], bool]


@runtime_checkable
class Timer(Protocol):
    """Scoped resource reporting the time elapsed since its creation."""

    @property
    def elapsed(self) -> float: ...

    def observe_duration(self) -> float: ...

    def close(self) -> None: ...

    def __enter__(self) -> Timer: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class ProgressTracker(Protocol):
    def close(self) -> None: ...

    def __enter__(self) -> ProgressTracker: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class Counter(Protocol):
    @property
    def value(self) -> float: ...

    def with_labels(self, *labels: str) -> Counter: ...

    def increment(self, value: float = 1.0) -> None: ...

    def increment_to(self, target: float) -> None: ...

    def new_timer(self) -> Timer: ...

    def count_exceptions(
        self,
        func: Callable[..., T],
        *args: Any,
        exception_filter: ExceptionFilter | None = None,
        **kwargs: Any,
    ) -> T: ...

    async def count_exceptions_async(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        exception_filter: ExceptionFilter | None = None,
        **kwargs: Any,
    ) -> T: ...


@runtime_checkable
class Gauge(Protocol):
    @property
    def value(self) -> float: ...

    def with_labels(self, *labels: str) -> Gauge: ...

    def set(self, value: float) -> None: ...

    def increment(self, value: float = 1.0) -> None: ...

    def increment_to(self, target: float) -> None: ...

    def decrement(self, value: float = 1.0) -> None: ...

    def decrement_to(self, target: float) -> None: ...

    def new_timer(self) -> Timer: ...

    def track_in_progress(self) -> ProgressTracker: ...


@runtime_checkable
class Histogram(Protocol):
    @property
    def sum(self) -> float: ...

    @property
    def count(self) -> int: ...

    def with_labels(self, *labels: str) -> Histogram: ...

    def observe(self, value: float, count: int = 1) -> None: ...

    def new_timer(self) -> Timer: ...


@runtime_checkable
class Summary(Protocol):
    def with_labels(self, *labels: str) -> Summary: ...

    def observe(self, value: float) -> None: ...

    def new_timer(self) -> Timer: ...


@runtime_checkable
class MetricFactory(Protocol):
    def create_counter(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: CounterConfiguration | None = None,
    ) -> Counter: ...

    def create_gauge(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: GaugeConfiguration | None = None,
    ) -> Gauge: ...

    def create_histogram(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: HistogramConfiguration | None = None,
        buckets: Sequence[float] | None = None,
    ) -> Histogram: ...

    def create_summary(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: SummaryConfiguration | None = None,
        max_age: timedelta | None = None,
        age_buckets: int | None = None,
        buffer_size: int | None = None,
        objectives: Sequence[tuple[float, float]] | None = None,
    ) -> Summary: ...

    def create_counter_with_static_labels(
        self, name: str, help: str, static_labels: Mapping[str, str], *label_names: str
    ) -> Counter: ...

    def create_gauge_with_static_labels(
        self, name: str, help: str, static_labels: Mapping[str, str], *label_names: str
    ) -> Gauge: ...

    def create_histogram_with_static_labels(
        self,
        name: str,
        help: str,
        static_labels: Mapping[str, str],
        *label_names: str,
        buckets: Sequence[float] | None = None,
    ) -> Histogram: ...

    def create_summary_with_static_labels(
        self,
        name: str,
        help: str,
        static_labels: Mapping[str, str],
        *label_names: str,
        max_age: timedelta | None = None,
        age_buckets: int | None = None,
        buffer_size: int | None = None,
        objectives: Sequence[tuple[float, float]] | None = None,
    ) -> Summary: ...
