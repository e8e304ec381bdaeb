"""Integration tests for the FastAPI metrics endpoint."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST

from pulse.exposition import create_metrics_router, get_metrics_text, map_metrics

pytestmark = pytest.mark.integration


def test_get_metrics_text(factory, registry):
    factory.create_counter("orders", "Orders").increment(3)
    text = get_metrics_text(registry)
    assert "# HELP orders_total Orders" in text
    assert "orders_total 3.0" in text


def test_map_metrics_serves_registry(factory, registry):
    factory.create_gauge_with_static_labels("depth", "Depth", {"queue": "email"}).set(7)
    app = map_metrics(FastAPI(), registry=registry)

    response = TestClient(app).get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    assert 'depth{queue="email"} 7.0' in response.text


def test_custom_path(registry):
    app = FastAPI()
    app.include_router(create_metrics_router(registry, path="/internal/metrics"))
    client = TestClient(app)

    assert client.get("/internal/metrics").status_code == 200
    assert client.get("/metrics").status_code == 404


def test_map_metrics_returns_app(registry):
    app = FastAPI()
    assert map_metrics(app, registry=registry) is app
