"""Metrics endpoint glue for FastAPI applications.

The text format and its rendering belong to prometheus_client; this module
only routes a ``GET`` request to it.

Usage:
    from fastapi import FastAPI
    from pulse.exposition import map_metrics

    app = FastAPI()
    map_metrics(app)  # GET /metrics
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, CollectorRegistry, generate_latest

logger = logging.getLogger(__name__)


def get_metrics_text(registry: CollectorRegistry | None = None) -> str:
    """Export metrics in Prometheus text format.

    Args:
        registry: Registry to export (defaults to the global registry)
    """
    return generate_latest(registry or REGISTRY).decode("utf-8")


def create_metrics_router(
    registry: CollectorRegistry | None = None, path: str = "/metrics"
) -> APIRouter:
    """Create a router serving ``registry`` at ``path``."""
    target = registry or REGISTRY
    router = APIRouter(tags=["metrics"])

    @router.get(path, include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(target), media_type=CONTENT_TYPE_LATEST)

    return router


def map_metrics(
    app: FastAPI, path: str = "/metrics", registry: CollectorRegistry | None = None
) -> FastAPI:
    """Add the metrics endpoint to ``app`` and return it."""
    app.include_router(create_metrics_router(registry, path))
    logger.info("Metrics endpoint mapped at %s", path, extra={"event_type": "metrics_endpoint_mapped"})
    return app
