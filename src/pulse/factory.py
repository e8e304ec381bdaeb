"""Metric factory: the entry point application code creates metrics with.

Two call shapes per metric kind:

- ``create_counter(name, help, configuration=CounterConfiguration(...))``
  translates the configuration and hands it to the backend.
- ``create_counter(name, help, "route", "status")`` is shorthand for a
  configuration carrying those label names, no static labels and
  ``publish_on_creation=False``. With no label names at all the backend
  defaults are used.

The ``*_with_static_labels`` variants add labels fixed at creation.
Summary creation also accepts ``max_age``, ``age_buckets``, ``buffer_size``
and ``objectives`` directly.

Backend errors (duplicate names, malformed names) are not caught here.

Usage:
    from pulse import get_metric_factory

    factory = get_metric_factory()
    requests = factory.create_counter("requests", "Requests served", "route")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from threading import Lock
from typing import Any

from prometheus_client import CollectorRegistry

from .configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    SummaryConfiguration,
)
from .errors import InvalidArgumentError
from .metrics import PulseCounter, PulseGauge, PulseHistogram, PulseSummary
from .prometheus.adapters import PrometheusMetricFactoryAdapter
from .prometheus.interfaces import MetricFactoryAdapter
from .translation import (
    translate_counter_configuration,
    translate_gauge_configuration,
    translate_histogram_configuration,
    translate_summary_configuration,
)

logger = logging.getLogger(__name__)


def _reject_mixed(name: str, configuration: Any, shorthand: Mapping[str, Any]) -> None:
    if configuration is None:
        return
    given = sorted(key for key, value in shorthand.items() if value)
    if given:
        raise InvalidArgumentError(
            f"Metric {name!r}: pass either a configuration object or {', '.join(given)}, not both",
            details={"metric": name, "arguments": given},
        )


class PulseMetricFactory:
    """Creates metric instances through a backend adapter.

    Args:
        adapter: Backend metric factory adapter
    """

    def __init__(self, adapter: MetricFactoryAdapter) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> MetricFactoryAdapter:
        return self._adapter

    def _log_created(self, kind: str, name: str, configuration: Any) -> None:
        logger.debug(
            "Created %s %s",
            kind,
            name,
            extra={
                "event_type": "metric_created",
                "metric_kind": kind,
                "metric_name": name,
                "configured": configuration is not None,
            },
        )

    # ------------------------------------------------------------------
    # Counter
    # ------------------------------------------------------------------

    def create_counter(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: CounterConfiguration | None = None,
    ) -> PulseCounter:
        _reject_mixed(name, configuration, {"label_names": label_names})
        if configuration is None and label_names:
            configuration = CounterConfiguration(mutable_label_names=label_names, publish_on_creation=False)
        native = translate_counter_configuration(configuration)
        counter = PulseCounter(self._adapter.create_counter(name, help, native))
        self._log_created("counter", name, native)
        return counter

    def create_counter_with_static_labels(
        self, name: str, help: str, static_labels: Mapping[str, str], *label_names: str
    ) -> PulseCounter:
        return self.create_counter(
            name,
            help,
            configuration=CounterConfiguration(
                mutable_label_names=label_names,
                immutable_labels=static_labels,
                publish_on_creation=False,
            ),
        )

    # ------------------------------------------------------------------
    # Gauge
    # ------------------------------------------------------------------

    def create_gauge(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: GaugeConfiguration | None = None,
    ) -> PulseGauge:
        _reject_mixed(name, configuration, {"label_names": label_names})
        if configuration is None and label_names:
            configuration = GaugeConfiguration(mutable_label_names=label_names, publish_on_creation=False)
        native = translate_gauge_configuration(configuration)
        gauge = PulseGauge(self._adapter.create_gauge(name, help, native))
        self._log_created("gauge", name, native)
        return gauge

    def create_gauge_with_static_labels(
        self, name: str, help: str, static_labels: Mapping[str, str], *label_names: str
    ) -> PulseGauge:
        return self.create_gauge(
            name,
            help,
            configuration=GaugeConfiguration(
                mutable_label_names=label_names,
                immutable_labels=static_labels,
                publish_on_creation=False,
            ),
        )

    # ------------------------------------------------------------------
    # Histogram
    # ------------------------------------------------------------------

    def create_histogram(
        self,
        name: str,
        help: str,
        *label_names: str,
        configuration: HistogramConfiguration | None = None,
        buckets: Sequence[float] | None = None,
    ) -> PulseHistogram:
        """Create a histogram.

        Args:
            name: Metric name
            help: Help text
            *label_names: Mutable label names (shorthand form)
            configuration: Full configuration (exclusive with the shorthand)
            buckets: Bucket upper bounds (shorthand form)

        Raises:
            InvalidArgumentError: If both a configuration and shorthand
                arguments are given
        """
        _reject_mixed(name, configuration, {"label_names": label_names, "buckets": buckets is not None})
        if configuration is None and (label_names or buckets is not None):
            configuration = HistogramConfiguration(
                mutable_label_names=label_names,
                buckets=buckets,
                publish_on_creation=False,
            )
        native = translate_histogram_configuration(configuration)
        histogram = PulseHistogram(self._adapter.create_histogram(name, help, native))
        self._log_created("histogram", name, native)
        return histogram

    def create_histogram_with_static_labels(
        self,
        name: str,
        help: str,
        static_labels: Mapping[str, str],
        *label_names: str,
        buckets: Sequence[float] | None = None,
    ) -> PulseHistogram:
        return self.create_histogram(
            name,
            help,
            configuration=HistogramConfiguration(
                mutable_label_names=label_names,
                immutable_labels=static_labels,
                buckets=buckets,
                publish_on_creation=False,
            ),
        )

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

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
    ) -> PulseSummary:
        """Create a summary.

        ``max_age``, ``age_buckets``, ``buffer_size`` and ``objectives``
        fill the same fields a :class:`SummaryConfiguration` would, without
        building one.

        Raises:
            InvalidArgumentError: If both a configuration and shorthand
                arguments are given
        """
        shorthand = {
            "label_names": label_names,
            "max_age": max_age is not None,
            "age_buckets": age_buckets is not None,
            "buffer_size": buffer_size is not None,
            "objectives": objectives is not None,
        }
        _reject_mixed(name, configuration, shorthand)
        if configuration is None and any(shorthand.values()):
            configuration = SummaryConfiguration(
                mutable_label_names=label_names,
                publish_on_creation=False,
                objectives=objectives,
                max_age=max_age,
                age_buckets=age_buckets,
                buffer_size=buffer_size,
            )
        native = translate_summary_configuration(configuration)
        summary = PulseSummary(self._adapter.create_summary(name, help, native))
        self._log_created("summary", name, native)
        return summary

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
    ) -> PulseSummary:
        return self.create_summary(
            name,
            help,
            configuration=SummaryConfiguration(
                mutable_label_names=label_names,
                immutable_labels=static_labels,
                publish_on_creation=False,
                objectives=objectives,
                max_age=max_age,
                age_buckets=age_buckets,
                buffer_size=buffer_size,
            ),
        )


# Global instance for convenience
_metric_factory: PulseMetricFactory | None = None
_metric_factory_lock = Lock()


def get_metric_factory(
    registry: CollectorRegistry | None = None, namespace: str = ""
) -> PulseMetricFactory:
    """Get or create the process-wide metric factory.

    This function is thread-safe and implements the singleton pattern.

    Note:
        ``registry`` and ``namespace`` are only used when the singleton is
        created; later calls return the existing factory unchanged.

    Args:
        registry: Prometheus registry (defaults to the global registry)
        namespace: Prefix for every metric name

    Returns:
        PulseMetricFactory instance
    """
    global _metric_factory

    # Double-checked locking pattern for thread-safe singleton
    if _metric_factory is None:
        with _metric_factory_lock:
            if _metric_factory is None:
                _metric_factory = PulseMetricFactory(
                    PrometheusMetricFactoryAdapter(registry=registry, namespace=namespace)
                )

    return _metric_factory


def reset_metric_factory() -> None:
    """Drop the process-wide factory (metrics already registered stay registered)."""
    global _metric_factory
    with _metric_factory_lock:
        _metric_factory = None
