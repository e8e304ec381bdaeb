"""
Shared pytest fixtures and configuration for Pulse tests.

Every test that touches prometheus_client gets its own CollectorRegistry so
metric names never collide across tests.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Any

import pytest
from prometheus_client import CollectorRegistry

from pulse.factory import PulseMetricFactory, reset_metric_factory
from pulse.prometheus.adapters import PrometheusMetricFactoryAdapter
from pulse.utils.time_provider import FakeTimeProvider, reset_default_time_provider
from tests.utils.fakes import FakeMetricFactoryAdapter

# ============================================================
# Pytest Hooks and Configuration
# ============================================================


def pytest_configure(config: Any) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: marks unit tests")
    config.addinivalue_line("markers", "integration: marks tests against prometheus_client")
    config.addinivalue_line("markers", "property: marks property-based tests")


# ============================================================
# Metric Fixtures
# ============================================================


@pytest.fixture
def registry() -> CollectorRegistry:
    """Isolated Prometheus registry."""
    return CollectorRegistry()


@pytest.fixture
def fake_clock() -> FakeTimeProvider:
    return FakeTimeProvider()


@pytest.fixture
def prometheus_adapter(registry: CollectorRegistry, fake_clock: FakeTimeProvider) -> PrometheusMetricFactoryAdapter:
    """Backend adapter bound to an isolated registry and a fake clock."""
    return PrometheusMetricFactoryAdapter(registry=registry, clock=fake_clock)


@pytest.fixture
def factory(prometheus_adapter: PrometheusMetricFactoryAdapter) -> PulseMetricFactory:
    """Metric factory backed by prometheus_client with an isolated registry."""
    return PulseMetricFactory(prometheus_adapter)


@pytest.fixture
def fake_adapter(fake_clock: FakeTimeProvider) -> FakeMetricFactoryAdapter:
    return FakeMetricFactoryAdapter(clock=fake_clock)


@pytest.fixture
def fake_factory(fake_adapter: FakeMetricFactoryAdapter) -> PulseMetricFactory:
    """Metric factory over the in-memory fake backend."""
    return PulseMetricFactory(fake_adapter)


# ============================================================
# Global State Isolation
# ============================================================


@pytest.fixture(autouse=True)
def _reset_globals() -> Iterator[None]:
    """Reset process-wide singletons around every test."""
    reset_metric_factory()
    reset_default_time_provider()
    yield
    reset_metric_factory()
    reset_default_time_provider()


@pytest.fixture
def isolate_environment() -> Iterator[None]:
    """Snapshot os.environ and restore it after the test."""
    original_env = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(original_env)
