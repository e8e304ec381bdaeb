"""prometheus_client implementation of the backend adapter protocols.

Each adapter wraps a prometheus_client metric in one of two label states:

- ``Unlabelled``: the metric as created by the factory. Its own series is
  the metric itself when it has no labels at all; otherwise it is the child
  bound to the static label values followed by an empty value for every
  mutable label name.
- ``Labelled``: a child returned by ``with_labels``. A labelled adapter
  cannot be labelled again.

Static labels are implemented as the leading label names of the
prometheus_client metric, followed by the mutable label names.

A parent's own labelled series only comes into existence when it is first
mutated, or at creation when the initial value is published. Reading a
value never creates it; a series that does not exist yet reads as zero.

All mutations of a metric and its children go through one lock so that
``inc_to``/``dec_to`` (read-compare-write) never lose a concurrent update.

Note:
    Reading values, batch histogram observations, ``inc_to`` on counters
    and looking up a parent series without creating it use internal
    prometheus_client attributes (``_value``, ``_sum``, ``_buckets``,
    ``_upper_bounds``, ``_metrics``) which have no public equivalent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, Summary
from prometheus_client.metrics import MetricWrapperBase

from ..errors import ErrorCode, InvalidOperationError
from ..timers import InProgressTracker, Timer
from ..utils.time_provider import TimeProvider
from .configuration import (
    PrometheusCounterConfiguration,
    PrometheusGaugeConfiguration,
    PrometheusHistogramConfiguration,
    PrometheusMetricConfiguration,
    PrometheusSummaryConfiguration,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Label state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Unlabelled:
    """A metric as returned by the factory."""

    metric: MetricWrapperBase
    static_values: tuple[str, ...] = ()
    mutable_count: int = 0

    @property
    def series_values(self) -> tuple[str, ...]:
        """Label values of the parent's own series."""
        return self.static_values + ("",) * self.mutable_count


@dataclass(frozen=True)
class Labelled:
    """A child series bound to concrete label values."""

    child: MetricWrapperBase


LabelState = Unlabelled | Labelled


@dataclass
class _Shared:
    """State shared between a metric's adapter and all of its children."""

    lock: Lock = field(default_factory=Lock)
    clock: TimeProvider | None = None


class _PrometheusAdapter:
    def __init__(self, state: LabelState, shared: _Shared | None = None) -> None:
        self._state = state
        self._shared = shared or _Shared()
        self._series_cache: MetricWrapperBase | None = None

    @property
    def is_labelled(self) -> bool:
        return isinstance(self._state, Labelled)

    @property
    def _lock(self) -> Lock:
        return self._shared.lock

    def _series(self) -> Any:
        """Return the prometheus_client object this adapter mutates, creating it if needed."""
        if self._series_cache is None:
            state = self._state
            if isinstance(state, Labelled):
                self._series_cache = state.child
            elif state.series_values:
                self._series_cache = state.metric.labels(*state.series_values)
            else:
                self._series_cache = state.metric
        return self._series_cache

    def _existing_series(self) -> Any | None:
        """Return the series if it has been created, without creating it."""
        if self._series_cache is not None:
            return self._series_cache
        state = self._state
        if isinstance(state, Labelled) or not state.series_values:
            return self._series()
        with state.metric._lock:
            child = state.metric._metrics.get(state.series_values)
        if child is not None:
            self._series_cache = child
        return child

    def _child_state(self, labels: tuple[str, ...]) -> Labelled:
        state = self._state
        if isinstance(state, Labelled):
            raise InvalidOperationError(
                "with_labels cannot be called on a labelled metric",
                details={"labels": list(labels)},
                code=ErrorCode.E201_ALREADY_LABELLED,
            )
        return Labelled(state.metric.labels(*state.static_values, *labels))

    def _timer(self, sink: Any) -> Timer:
        return Timer(sink, clock=self._shared.clock)


# ---------------------------------------------------------------------------
# Per-kind adapters
# ---------------------------------------------------------------------------


class PrometheusCounterAdapter(_PrometheusAdapter):
    @property
    def value(self) -> float:
        series = self._existing_series()
        if series is None:
            return 0.0
        return float(series._value.get())

    def with_labels(self, *labels: str) -> PrometheusCounterAdapter:
        return PrometheusCounterAdapter(self._child_state(labels), self._shared)

    def inc(self, value: float = 1.0) -> None:
        series = self._series()
        with self._lock:
            series.inc(value)

    def inc_to(self, target: float) -> None:
        series = self._series()
        with self._lock:
            if target > series._value.get():
                series._value.set(float(target))

    def new_timer(self) -> Timer:
        return self._timer(self.inc)


class PrometheusGaugeAdapter(_PrometheusAdapter):
    @property
    def value(self) -> float:
        series = self._existing_series()
        if series is None:
            return 0.0
        return float(series._value.get())

    def with_labels(self, *labels: str) -> PrometheusGaugeAdapter:
        return PrometheusGaugeAdapter(self._child_state(labels), self._shared)

    def set(self, value: float) -> None:
        series = self._series()
        with self._lock:
            series.set(value)

    def inc(self, value: float = 1.0) -> None:
        series = self._series()
        with self._lock:
            series.inc(value)

    def inc_to(self, target: float) -> None:
        series = self._series()
        with self._lock:
            if target > series._value.get():
                series.set(target)

    def dec(self, value: float = 1.0) -> None:
        series = self._series()
        with self._lock:
            series.dec(value)

    def dec_to(self, target: float) -> None:
        series = self._series()
        with self._lock:
            if target < series._value.get():
                series.set(target)

    def new_timer(self) -> Timer:
        return self._timer(self.set)

    def track_in_progress(self) -> InProgressTracker:
        return InProgressTracker(self.inc, self.dec)


class PrometheusHistogramAdapter(_PrometheusAdapter):
    @property
    def sum(self) -> float:
        series = self._existing_series()
        if series is None:
            return 0.0
        return float(series._sum.get())

    @property
    def count(self) -> int:
        series = self._existing_series()
        if series is None:
            return 0
        return int(sum(bucket.get() for bucket in series._buckets))

    def with_labels(self, *labels: str) -> PrometheusHistogramAdapter:
        return PrometheusHistogramAdapter(self._child_state(labels), self._shared)

    def observe(self, value: float, count: int = 1) -> None:
        """Record ``count`` observations of ``value``.

        A batch adds ``value * count`` to the sum and ``count`` to the bucket
        ``value`` falls into, in one step.
        """
        series = self._series()
        if count == 1:
            with self._lock:
                series.observe(value)
            return

        with self._lock:
            series._sum.inc(value * count)
            for i, bound in enumerate(series._upper_bounds):
                if value <= bound:
                    series._buckets[i].inc(count)
                    break

    def new_timer(self) -> Timer:
        return self._timer(self.observe)


class PrometheusSummaryAdapter(_PrometheusAdapter):
    def __init__(
        self,
        state: LabelState,
        shared: _Shared | None = None,
        configuration: PrometheusSummaryConfiguration | None = None,
    ) -> None:
        super().__init__(state, shared)
        self.configuration = configuration or PrometheusSummaryConfiguration()

    def with_labels(self, *labels: str) -> PrometheusSummaryAdapter:
        return PrometheusSummaryAdapter(self._child_state(labels), self._shared, self.configuration)

    def observe(self, value: float) -> None:
        series = self._series()
        with self._lock:
            series.observe(value)

    def new_timer(self) -> Timer:
        return self._timer(self.observe)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class PrometheusMetricFactoryAdapter:
    """Creates prometheus_client metrics and wraps them in adapters.

    Args:
        registry: Registry metrics are registered with. If None, uses the
            process-wide prometheus_client registry.
        namespace: Optional prefix joined to every metric name with ``_``
        clock: Time provider injected into timers
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        namespace: str = "",
        clock: TimeProvider | None = None,
    ) -> None:
        self.registry = registry or REGISTRY
        self.namespace = namespace
        self._clock = clock

    def _label_layout(
        self, configuration: PrometheusMetricConfiguration
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        static = dict(configuration.static_labels or {})
        label_names = tuple(static) + tuple(configuration.label_names or ())
        return label_names, tuple(static.values())

    def _initial_state(
        self, metric: MetricWrapperBase, configuration: PrometheusMetricConfiguration
    ) -> Unlabelled:
        _, static_values = self._label_layout(configuration)
        state = Unlabelled(metric, static_values, len(configuration.label_names or ()))
        # A metric without labels is always exported by prometheus_client.
        if state.series_values and not configuration.suppress_initial_value:
            metric.labels(*state.series_values)
        return state

    def _shared(self) -> _Shared:
        return _Shared(clock=self._clock)

    def create_counter(
        self, name: str, help: str, configuration: PrometheusCounterConfiguration | None = None
    ) -> PrometheusCounterAdapter:
        configuration = configuration or PrometheusCounterConfiguration()
        label_names, _ = self._label_layout(configuration)
        metric = Counter(
            name,
            help,
            labelnames=label_names,
            namespace=self.namespace,
            registry=self.registry,
        )
        return PrometheusCounterAdapter(self._initial_state(metric, configuration), self._shared())

    def create_gauge(
        self, name: str, help: str, configuration: PrometheusGaugeConfiguration | None = None
    ) -> PrometheusGaugeAdapter:
        configuration = configuration or PrometheusGaugeConfiguration()
        label_names, _ = self._label_layout(configuration)
        metric = Gauge(
            name,
            help,
            labelnames=label_names,
            namespace=self.namespace,
            registry=self.registry,
        )
        return PrometheusGaugeAdapter(self._initial_state(metric, configuration), self._shared())

    def create_histogram(
        self, name: str, help: str, configuration: PrometheusHistogramConfiguration | None = None
    ) -> PrometheusHistogramAdapter:
        configuration = configuration or PrometheusHistogramConfiguration()
        label_names, _ = self._label_layout(configuration)
        metric = Histogram(
            name,
            help,
            labelnames=label_names,
            namespace=self.namespace,
            registry=self.registry,
            buckets=configuration.buckets,
        )
        return PrometheusHistogramAdapter(self._initial_state(metric, configuration), self._shared())

    def create_summary(
        self, name: str, help: str, configuration: PrometheusSummaryConfiguration | None = None
    ) -> PrometheusSummaryAdapter:
        configuration = configuration or PrometheusSummaryConfiguration()
        label_names, _ = self._label_layout(configuration)
        metric = Summary(
            name,
            help,
            labelnames=label_names,
            namespace=self.namespace,
            registry=self.registry,
        )
        if configuration.objectives:
            logger.debug(
                "Summary %s exports count and sum only; quantile objectives are kept on the adapter",
                name,
                extra={"objectives": [tuple(pair) for pair in configuration.objectives]},
            )
        return PrometheusSummaryAdapter(
            self._initial_state(metric, configuration),
            self._shared(),
            configuration=configuration,
        )
