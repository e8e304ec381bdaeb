"""Translation of backend-agnostic configuration into backend configuration.

Each function maps one configuration kind onto the prometheus_client
backend's native type, substituting backend defaults for unset fields.
``None`` translates to ``None``: a metric created without configuration
gets the backend defaults directly.

Rules shared by every kind:
- ``static_labels`` <- ``immutable_labels`` (empty -> ``None``)
- ``label_names`` <- ``mutable_label_names`` (empty -> ``None``)
- ``suppress_initial_value`` <- ``not publish_on_creation``

Sequences and mappings are copied so that later changes to the caller's
configuration object cannot reach an existing metric.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .buckets import DEFAULT_BUCKETS
from .configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    MetricConfiguration,
    SummaryConfiguration,
)
from .prometheus.configuration import (
    DEFAULT_AGE_BUCKETS,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_AGE,
    PrometheusCounterConfiguration,
    PrometheusGaugeConfiguration,
    PrometheusHistogramConfiguration,
    PrometheusSummaryConfiguration,
    QuantileEpsilonPair,
)


def _label_names(names: Sequence[str] | None) -> tuple[str, ...] | None:
    if not names:
        return None
    return tuple(names)


def _static_labels(labels: Mapping[str, str] | None) -> dict[str, str] | None:
    if not labels:
        return None
    return dict(labels)


def _common_fields(config: MetricConfiguration) -> dict[str, Any]:
    return {
        "label_names": _label_names(config.mutable_label_names),
        "static_labels": _static_labels(config.immutable_labels),
        "suppress_initial_value": not config.publish_on_creation,
    }


def translate_counter_configuration(
    config: CounterConfiguration | None,
) -> PrometheusCounterConfiguration | None:
    if config is None:
        return None
    return PrometheusCounterConfiguration(**_common_fields(config))


def translate_gauge_configuration(
    config: GaugeConfiguration | None,
) -> PrometheusGaugeConfiguration | None:
    if config is None:
        return None
    return PrometheusGaugeConfiguration(**_common_fields(config))


def translate_histogram_configuration(
    config: HistogramConfiguration | None,
) -> PrometheusHistogramConfiguration | None:
    """Translate a histogram configuration.

    Buckets are passed through as given (validation of their order is left
    to the backend) or replaced with ``DEFAULT_BUCKETS`` when unset.
    """
    if config is None:
        return None
    buckets = tuple(config.buckets) if config.buckets is not None else DEFAULT_BUCKETS
    return PrometheusHistogramConfiguration(buckets=buckets, **_common_fields(config))


def translate_objectives(
    objectives: Sequence[tuple[float, float]] | None,
) -> tuple[QuantileEpsilonPair, ...] | None:
    """Convert ``(quantile, epsilon)`` tuples into backend objective pairs."""
    if objectives is None:
        return None
    return tuple(QuantileEpsilonPair(float(q), float(e)) for q, e in objectives)


def translate_summary_configuration(
    config: SummaryConfiguration | None,
) -> PrometheusSummaryConfiguration | None:
    """Translate a summary configuration.

    ``max_age``, ``age_buckets`` and ``buffer_size`` fall back to the backend
    constants when unset. Objectives are converted but not range-checked.
    """
    if config is None:
        return None
    return PrometheusSummaryConfiguration(
        objectives=translate_objectives(config.objectives),
        max_age=config.max_age if config.max_age is not None else DEFAULT_MAX_AGE,
        age_buckets=int(config.age_buckets) if config.age_buckets is not None else DEFAULT_AGE_BUCKETS,
        buffer_size=int(config.buffer_size) if config.buffer_size is not None else DEFAULT_BUFFER_SIZE,
        **_common_fields(config),
    )
