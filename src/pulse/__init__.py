"""Pulse: a backend-agnostic metrics instrumentation facade.

Application code creates counters, gauges, histograms and summaries through
:class:`PulseMetricFactory` and depends only on the protocols in
:mod:`pulse.interfaces`. The prometheus_client backend lives in
:mod:`pulse.prometheus`.

Example:
    >>> from pulse import get_metric_factory, exponential_buckets
    >>> factory = get_metric_factory()
    >>> latency = factory.create_histogram(
    ...     "request_latency_seconds", "Request latency", "route",
    ...     buckets=exponential_buckets(0.005, 2, 10),
    ... )
    >>> with latency.with_labels("/health").new_timer():
    ...     pass
"""

from .buckets import (
    DEFAULT_BUCKETS,
    exponential_buckets,
    linear_buckets,
    powers_of_ten_divided_buckets,
)
from .configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    MetricConfiguration,
    SummaryConfiguration,
)
from .errors import (
    ConfigurationError,
    ErrorCode,
    InvalidArgumentError,
    InvalidOperationError,
    PulseError,
)
from .factory import PulseMetricFactory, get_metric_factory, reset_metric_factory
from .interfaces import Counter, Gauge, Histogram, MetricFactory, ProgressTracker, Summary, Timer
from .metrics import PulseCounter, PulseGauge, PulseHistogram, PulseSummary
from .timers import InProgressTracker

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_BUCKETS",
    "ConfigurationError",
    "Counter",
    "CounterConfiguration",
    "ErrorCode",
    "Gauge",
    "GaugeConfiguration",
    "Histogram",
    "HistogramConfiguration",
    "InProgressTracker",
    "InvalidArgumentError",
    "InvalidOperationError",
    "MetricConfiguration",
    "MetricFactory",
    "ProgressTracker",
    "PulseCounter",
    "PulseError",
    "PulseGauge",
    "PulseHistogram",
    "PulseMetricFactory",
    "PulseSummary",
    "Summary",
    "SummaryConfiguration",
    "Timer",
    "exponential_buckets",
    "get_metric_factory",
    "linear_buckets",
    "powers_of_ten_divided_buckets",
    "reset_metric_factory",
]
