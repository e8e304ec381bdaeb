"""Native configuration types for the prometheus_client backend.

These mirror what the backend needs to build a metric. Defaults here are the
backend defaults a metric gets when it is created without configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import NamedTuple

from ..buckets import DEFAULT_BUCKETS

DEFAULT_MAX_AGE = timedelta(minutes=10)
DEFAULT_AGE_BUCKETS = 5
DEFAULT_BUFFER_SIZE = 500


class QuantileEpsilonPair(NamedTuple):
    """Summary objective: a quantile and its allowed error."""

    quantile: float
    epsilon: float


@dataclass(frozen=True)
class PrometheusMetricConfiguration:
    label_names: tuple[str, ...] | None = None
    static_labels: Mapping[str, str] | None = None
    suppress_initial_value: bool = False


@dataclass(frozen=True)
class PrometheusCounterConfiguration(PrometheusMetricConfiguration):
    pass


@dataclass(frozen=True)
class PrometheusGaugeConfiguration(PrometheusMetricConfiguration):
    pass


@dataclass(frozen=True)
class PrometheusHistogramConfiguration(PrometheusMetricConfiguration):
    buckets: tuple[float, ...] = DEFAULT_BUCKETS


@dataclass(frozen=True)
class PrometheusSummaryConfiguration(PrometheusMetricConfiguration):
    objectives: tuple[QuantileEpsilonPair, ...] | None = None
    max_age: timedelta = DEFAULT_MAX_AGE
    age_buckets: int = DEFAULT_AGE_BUCKETS
    buffer_size: int = DEFAULT_BUFFER_SIZE
