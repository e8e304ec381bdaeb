"""Configuration for Pulse: runtime settings and declarative metric definitions."""

from .loader import (
    build_configuration,
    create_metrics,
    load_metric_definitions,
    parse_metric_definitions,
)
from .runtime import RuntimeConfig, get_runtime_config
from .schema import (
    BucketSpec,
    ExponentialBucketSpec,
    LinearBucketSpec,
    MetricDefinition,
    MetricKind,
    MetricsFile,
    ObjectiveSpec,
    PowersOfTenBucketSpec,
)

__all__ = [
    "BucketSpec",
    "ExponentialBucketSpec",
    "LinearBucketSpec",
    "MetricDefinition",
    "MetricKind",
    "MetricsFile",
    "ObjectiveSpec",
    "PowersOfTenBucketSpec",
    "RuntimeConfig",
    "build_configuration",
    "create_metrics",
    "get_runtime_config",
    "load_metric_definitions",
    "parse_metric_definitions",
]
