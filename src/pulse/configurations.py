"""Backend-agnostic metric configuration.

Every field is optional. Unset fields are replaced with backend defaults by
:mod:`pulse.translation` when the metric is created; nothing here knows the
backend's default values.

Label names listed in ``mutable_label_names`` get their values per
observation through ``with_labels``. ``immutable_labels`` are fixed at
creation. The two must not share a key.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import timedelta


@dataclass
class MetricConfiguration:
    """Options shared by every metric kind.

    Attributes:
        mutable_label_names: Label dimensions whose values are supplied per
            observation
        immutable_labels: Labels fixed at creation
        publish_on_creation: Whether the metric is exported with its zero
            value right away or only after its first mutation
    """

    mutable_label_names: Sequence[str] | None = None
    immutable_labels: Mapping[str, str] | None = None
    publish_on_creation: bool = True


@dataclass
class CounterConfiguration(MetricConfiguration):
    """Counter configuration."""


@dataclass
class GaugeConfiguration(MetricConfiguration):
    """Gauge configuration."""


@dataclass
class HistogramConfiguration(MetricConfiguration):
    """Histogram configuration.

    Attributes:
        buckets: Strictly increasing bucket upper bounds, see
            :mod:`pulse.buckets` for generators
    """

    buckets: Sequence[float] | None = None


@dataclass
class SummaryConfiguration(MetricConfiguration):
    """Summary configuration.

    Attributes:
        objectives: ``(quantile, epsilon)`` pairs
        max_age: How long observations stay in the sliding window
        age_buckets: Number of buckets the window is split into
        buffer_size: Observations buffered before being merged
    """

    objectives: Sequence[tuple[float, float]] | None = None
    max_age: timedelta | None = None
    age_buckets: int | None = None
    buffer_size: int | None = None
