"""Backend adapter protocols.

The facade in :mod:`pulse.metrics` and :mod:`pulse.factory` talks to a
metrics backend only through these protocols, so a fake backend can stand in
for ``prometheus_client`` in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..timers import InProgressTracker, Timer
from .configuration import (
    PrometheusCounterConfiguration,
    PrometheusGaugeConfiguration,
    PrometheusHistogramConfiguration,
    PrometheusSummaryConfiguration,
)


@runtime_checkable
class CounterAdapter(Protocol):
    @property
    def value(self) -> float: ...

    def inc(self, value: float = 1.0) -> None: ...

    def inc_to(self, target: float) -> None: ...

    def with_labels(self, *labels: str) -> CounterAdapter: ...

    def new_timer(self) -> Timer: ...


@runtime_checkable
class GaugeAdapter(Protocol):
    @property
    def value(self) -> float: ...

    def set(self, value: float) -> None: ...

    def inc(self, value: float = 1.0) -> None: ...

    def inc_to(self, target: float) -> None: ...

    def dec(self, value: float = 1.0) -> None: ...

    def dec_to(self, target: float) -> None: ...

    def with_labels(self, *labels: str) -> GaugeAdapter: ...

    def new_timer(self) -> Timer: ...

    def track_in_progress(self) -> InProgressTracker: ...


@runtime_checkable
class HistogramAdapter(Protocol):
    @property
    def sum(self) -> float: ...

    @property
    def count(self) -> int: ...

    def observe(self, value: float, count: int = 1) -> None: ...

    def with_labels(self, *labels: str) -> HistogramAdapter: ...

    def new_timer(self) -> Timer: ...


@runtime_checkable
class SummaryAdapter(Protocol):
    def observe(self, value: float) -> None: ...

    def with_labels(self, *labels: str) -> SummaryAdapter: ...

    def new_timer(self) -> Timer: ...


@runtime_checkable
class MetricFactoryAdapter(Protocol):
    """Creates backend metric handles from native configuration.

    ``configuration=None`` means the backend defaults. Registration errors
    are raised unchanged.
    """

    def create_counter(
        self, name: str, help: str, configuration: PrometheusCounterConfiguration | None = None
    ) -> CounterAdapter: ...

    def create_gauge(
        self, name: str, help: str, configuration: PrometheusGaugeConfiguration | None = None
    ) -> GaugeAdapter: ...

    def create_histogram(
        self, name: str, help: str, configuration: PrometheusHistogramConfiguration | None = None
    ) -> HistogramAdapter: ...

    def create_summary(
        self, name: str, help: str, configuration: PrometheusSummaryConfiguration | None = None
    ) -> SummaryAdapter: ...
