"""Loading declarative metric definitions and creating the metrics they describe.

Usage:
    from pulse import get_metric_factory
    from pulse.config.loader import create_metrics, load_metric_definitions

    definitions = load_metric_definitions("metrics.yaml")
    metrics = create_metrics(get_metric_factory(), definitions)
    metrics["requests"].increment()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    MetricConfiguration,
    SummaryConfiguration,
)
from ..errors import ConfigurationError, ErrorCode
from ..interfaces import MetricFactory
from .schema import MetricDefinition, MetricKind, MetricsFile

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            ErrorCode.E301_INVALID_CONFIG_FILE,
            f"Invalid YAML syntax in '{path}': {e}",
        ) from e


def parse_metric_definitions(data: Any, source: str = "<data>") -> list[MetricDefinition]:
    """Validate already-parsed definition data.

    Accepts either a mapping with a ``metrics`` key or a bare list of
    definitions.

    Raises:
        ConfigurationError: If the data does not match the schema
    """
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"metrics": data}
    try:
        return MetricsFile.model_validate(data).metrics
    except ValidationError as e:
        raise ConfigurationError(
            ErrorCode.E302_CONFIG_VALIDATION_FAILED,
            f"Metric definitions in '{source}' failed validation:\n{e}",
            details={"source": source, "errors": e.error_count()},
        ) from e


def load_metric_definitions(path: str | Path) -> list[MetricDefinition]:
    """Load and validate a YAML metric definition file.

    Raises:
        ConfigurationError: If the file is missing, is not YAML or fails
            validation
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            ErrorCode.E301_INVALID_CONFIG_FILE,
            f"Metric definition file not found: {path}",
        )
    if path.suffix not in (".yaml", ".yml"):
        raise ConfigurationError(
            ErrorCode.E301_INVALID_CONFIG_FILE,
            f"Unsupported metric definition file format: {path.suffix or '<none>'} "
            "(only .yaml and .yml are supported)",
        )

    definitions = parse_metric_definitions(_load_yaml(path), source=str(path))
    logger.info(
        "Loaded %d metric definitions from %s",
        len(definitions),
        path,
        extra={"event_type": "metric_definitions_loaded"},
    )
    return definitions


def build_configuration(definition: MetricDefinition) -> MetricConfiguration:
    """Turn a validated definition into the matching configuration object.

    Histogram bucket generators run here, so invalid generator parameters
    raise :class:`~pulse.errors.InvalidArgumentError`.
    """
    common: dict[str, Any] = {
        "mutable_label_names": tuple(definition.labels),
        "immutable_labels": dict(definition.static_labels),
        "publish_on_creation": definition.publish_on_creation,
    }
    if definition.kind is MetricKind.COUNTER:
        return CounterConfiguration(**common)
    if definition.kind is MetricKind.GAUGE:
        return GaugeConfiguration(**common)
    if definition.kind is MetricKind.HISTOGRAM:
        buckets = definition.buckets.generate() if definition.buckets is not None else None
        return HistogramConfiguration(buckets=buckets, **common)

    objectives = None
    if definition.objectives is not None:
        objectives = [(o.quantile, o.epsilon) for o in definition.objectives]
    max_age = None
    if definition.max_age_seconds is not None:
        max_age = timedelta(seconds=definition.max_age_seconds)
    return SummaryConfiguration(
        objectives=objectives,
        max_age=max_age,
        age_buckets=definition.age_buckets,
        buffer_size=definition.buffer_size,
        **common,
    )


def create_metrics(factory: MetricFactory, definitions: Iterable[MetricDefinition]) -> dict[str, Any]:
    """Create every defined metric through ``factory``.

    Creation stops at the first backend error, which propagates unchanged.

    Returns:
        Mapping of metric name to metric instance
    """
    metrics: dict[str, Any] = {}
    for definition in definitions:
        configuration = build_configuration(definition)
        if definition.kind is MetricKind.COUNTER:
            metric: Any = factory.create_counter(definition.name, definition.help, configuration=configuration)
        elif definition.kind is MetricKind.GAUGE:
            metric = factory.create_gauge(definition.name, definition.help, configuration=configuration)
        elif definition.kind is MetricKind.HISTOGRAM:
            metric = factory.create_histogram(definition.name, definition.help, configuration=configuration)
        else:
            metric = factory.create_summary(definition.name, definition.help, configuration=configuration)
        metrics[definition.name] = metric
    return metrics
