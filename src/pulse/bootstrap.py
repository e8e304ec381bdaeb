"""Process start-up wiring.

Reads the runtime configuration, configures logging, creates the
process-wide metric factory and the metrics listed in the definition file,
if one is configured. When a FastAPI app is passed, the metrics endpoint is
mounted at ``metrics_path``.

Usage:
    from fastapi import FastAPI
    from pulse.bootstrap import bootstrap

    app = FastAPI()
    state = bootstrap(app=app)
    state.metrics["requests"].increment()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from prometheus_client import CollectorRegistry

from .config.loader import create_metrics, load_metric_definitions
from .config.runtime import RuntimeConfig, get_runtime_config
from .factory import PulseMetricFactory, get_metric_factory
from .logger import configure_logging

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    config: RuntimeConfig
    factory: PulseMetricFactory
    metrics: dict[str, Any] = field(default_factory=dict)


def bootstrap(
    config: RuntimeConfig | None = None,
    registry: CollectorRegistry | None = None,
    app: FastAPI | None = None,
) -> BootstrapResult:
    """Wire logging and metrics from ``config`` (or the environment).

    Args:
        config: Runtime configuration (defaults to ``get_runtime_config()``)
        registry: Prometheus registry (defaults to the global registry)
        app: FastAPI app to mount the metrics endpoint on; requires the
            ``api`` extra

    Errors from loading definitions or registering metrics propagate.
    """
    config = config or get_runtime_config()
    configure_logging(config.log_level, json_logging=config.json_logging)

    factory = get_metric_factory(registry=registry, namespace=config.namespace)
    result = BootstrapResult(config=config, factory=factory)

    if not config.metrics_enabled:
        logger.info("Metrics disabled; skipping metric definitions and endpoint")
        return result

    if config.definitions_file:
        definitions = load_metric_definitions(config.definitions_file)
        result.metrics = create_metrics(factory, definitions)

    if app is not None:
        from .exposition import map_metrics

        map_metrics(app, path=config.metrics_path, registry=registry)

    logger.info(
        "Pulse initialized with %d predefined metrics",
        len(result.metrics),
        extra={"event_type": "pulse_initialized", "namespace": config.namespace},
    )
    return result
