"""Tests for start-up wiring."""

import logging

import pytest

from pulse.bootstrap import bootstrap
from pulse.config.runtime import RuntimeConfig
from pulse.errors import ConfigurationError
from pulse.factory import get_metric_factory
from pulse.logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def _restore_pulse_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_without_definitions(registry):
    result = bootstrap(RuntimeConfig(namespace="shop"), registry=registry)
    assert result.metrics == {}
    assert result.factory is get_metric_factory()
    assert result.factory.adapter.namespace == "shop"


def test_creates_defined_metrics(tmp_path, registry):
    path = tmp_path / "metrics.yaml"
    path.write_text("metrics:\n  - {kind: counter, name: jobs, labels: [queue]}\n", encoding="utf-8")
    result = bootstrap(RuntimeConfig(namespace="shop", definitions_file=str(path)), registry=registry)
    result.metrics["jobs"].with_labels("email").increment()
    assert registry.get_sample_value("shop_jobs_total", {"queue": "email"}) == 1.0


def test_metrics_disabled_skips_definitions(tmp_path, registry):
    config = RuntimeConfig(metrics_enabled=False, definitions_file=str(tmp_path / "missing.yaml"))
    assert bootstrap(config, registry=registry).metrics == {}


def test_missing_definitions_file_propagates(tmp_path, registry):
    with pytest.raises(ConfigurationError):
        bootstrap(RuntimeConfig(definitions_file=str(tmp_path / "missing.yaml")), registry=registry)


def test_applies_log_level(registry):
    bootstrap(RuntimeConfig(log_level="WARNING"), registry=registry)
    assert logging.getLogger(LOGGER_NAME).level == logging.WARNING


def test_mounts_endpoint_at_metrics_path(registry):
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    app = FastAPI()
    result = bootstrap(RuntimeConfig(metrics_path="/internal/metrics"), registry=registry, app=app)
    result.factory.create_counter("orders", "Orders").increment()

    client = TestClient(app)
    response = client.get("/internal/metrics")
    assert response.status_code == 200
    assert "orders_total 1.0" in response.text
    assert client.get("/metrics").status_code == 404


def test_metrics_disabled_mounts_nothing(registry):
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    app = FastAPI()
    bootstrap(RuntimeConfig(metrics_enabled=False), registry=registry, app=app)
    assert TestClient(app).get("/metrics").status_code == 404


def test_parent_of_defined_metric_is_usable(tmp_path, registry):
    path = tmp_path / "metrics.yaml"
    path.write_text("metrics:\n  - {kind: counter, name: requests, labels: [route]}\n", encoding="utf-8")
    result = bootstrap(RuntimeConfig(definitions_file=str(path)), registry=registry)
    result.metrics["requests"].increment()
    assert result.metrics["requests"].value == 1.0
    assert registry.get_sample_value("requests_total", {"route": ""}) == 1.0
