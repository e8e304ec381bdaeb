"""prometheus_client backend for Pulse."""

from .adapters import (
    Labelled,
    PrometheusCounterAdapter,
    PrometheusGaugeAdapter,
    PrometheusHistogramAdapter,
    PrometheusMetricFactoryAdapter,
    PrometheusSummaryAdapter,
    Unlabelled,
)
from .configuration import (
    DEFAULT_AGE_BUCKETS,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_AGE,
    PrometheusCounterConfiguration,
    PrometheusGaugeConfiguration,
    PrometheusHistogramConfiguration,
    PrometheusSummaryConfiguration,
    QuantileEpsilonPair,
)
from .interfaces import (
    CounterAdapter,
    GaugeAdapter,
    HistogramAdapter,
    MetricFactoryAdapter,
    SummaryAdapter,
)

__all__ = [
    "DEFAULT_AGE_BUCKETS",
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_MAX_AGE",
    "CounterAdapter",
    "GaugeAdapter",
    "HistogramAdapter",
    "Labelled",
    "MetricFactoryAdapter",
    "PrometheusCounterAdapter",
    "PrometheusCounterConfiguration",
    "PrometheusGaugeAdapter",
    "PrometheusGaugeConfiguration",
    "PrometheusHistogramAdapter",
    "PrometheusHistogramConfiguration",
    "PrometheusMetricFactoryAdapter",
    "PrometheusSummaryAdapter",
    "PrometheusSummaryConfiguration",
    "QuantileEpsilonPair",
    "SummaryAdapter",
    "Unlabelled",
]
