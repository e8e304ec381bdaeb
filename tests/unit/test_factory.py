"""Tests for PulseMetricFactory against the in-memory backend.

Tests cover:
- The native configuration each call shape hands to the backend
- Static-label variants
- Summary keyword shorthand
- Rejection of mixed configuration and shorthand arguments
- Backend errors propagating unchanged
- The process-wide singleton
"""

from datetime import timedelta

import pytest

from pulse.buckets import DEFAULT_BUCKETS
from pulse.configurations import (
    CounterConfiguration,
    GaugeConfiguration,
    HistogramConfiguration,
    SummaryConfiguration,
)
from pulse.errors import InvalidArgumentError
from pulse.factory import PulseMetricFactory, get_metric_factory, reset_metric_factory
from pulse.metrics import PulseCounter, PulseGauge, PulseHistogram, PulseSummary
from pulse.prometheus.adapters import PrometheusMetricFactoryAdapter
from pulse.prometheus.configuration import (
    DEFAULT_AGE_BUCKETS,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_AGE,
    PrometheusCounterConfiguration,
    PrometheusGaugeConfiguration,
    PrometheusHistogramConfiguration,
    PrometheusSummaryConfiguration,
    QuantileEpsilonPair,
)

STATIC = {"foo": "bar", "baz": "spaz"}


class TestCreateWithoutConfiguration:
    """No configuration and no label names means backend defaults."""

    def test_counter(self, fake_factory, fake_adapter):
        counter = fake_factory.create_counter("requests", "Requests served")
        assert isinstance(counter, PulseCounter)
        call = fake_adapter.last_call
        assert (call.kind, call.name, call.help, call.configuration) == (
            "counter",
            "requests",
            "Requests served",
            None,
        )

    def test_gauge(self, fake_factory, fake_adapter):
        assert isinstance(fake_factory.create_gauge("g", "h"), PulseGauge)
        assert fake_adapter.last_call.configuration is None

    def test_histogram(self, fake_factory, fake_adapter):
        assert isinstance(fake_factory.create_histogram("h", "h"), PulseHistogram)
        assert fake_adapter.last_call.configuration is None

    def test_summary(self, fake_factory, fake_adapter):
        assert isinstance(fake_factory.create_summary("s", "h"), PulseSummary)
        assert fake_adapter.last_call.configuration is None


class TestCreateWithConfiguration:
    def test_counter_immutable_labels(self, fake_factory, fake_adapter):
        fake_factory.create_counter("c", "h", configuration=CounterConfiguration(immutable_labels=STATIC))
        assert fake_adapter.last_call.configuration == PrometheusCounterConfiguration(static_labels=STATIC)

    def test_counter_mutable_labels(self, fake_factory, fake_adapter):
        fake_factory.create_counter(
            "c", "h", configuration=CounterConfiguration(mutable_label_names=["a", "b"])
        )
        assert fake_adapter.last_call.configuration == PrometheusCounterConfiguration(label_names=("a", "b"))

    def test_counter_publish_on_creation(self, fake_factory, fake_adapter):
        fake_factory.create_counter("c", "h", configuration=CounterConfiguration(publish_on_creation=False))
        assert fake_adapter.last_call.configuration.suppress_initial_value is True

    def test_gauge_all_fields(self, fake_factory, fake_adapter):
        config = GaugeConfiguration(
            mutable_label_names=["a"], immutable_labels=STATIC, publish_on_creation=False
        )
        fake_factory.create_gauge("g", "h", configuration=config)
        assert fake_adapter.last_call.configuration == PrometheusGaugeConfiguration(
            label_names=("a",), static_labels=STATIC, suppress_initial_value=True
        )

    def test_histogram_buckets(self, fake_factory, fake_adapter):
        fake_factory.create_histogram("h", "h", configuration=HistogramConfiguration(buckets=[1, 2, 3]))
        assert fake_adapter.last_call.configuration.buckets == (1, 2, 3)

    def test_histogram_default_buckets(self, fake_factory, fake_adapter):
        fake_factory.create_histogram("h", "h", configuration=HistogramConfiguration())
        assert fake_adapter.last_call.configuration == PrometheusHistogramConfiguration(buckets=DEFAULT_BUCKETS)

    def test_summary_objectives(self, fake_factory, fake_adapter):
        config = SummaryConfiguration(objectives=[(0.5, 0.05), (0.9, 0.01)])
        fake_factory.create_summary("s", "h", configuration=config)
        assert fake_adapter.last_call.configuration.objectives == (
            QuantileEpsilonPair(0.5, 0.05),
            QuantileEpsilonPair(0.9, 0.01),
        )

    def test_summary_window(self, fake_factory, fake_adapter):
        config = SummaryConfiguration(max_age=timedelta(minutes=60), age_buckets=3, buffer_size=1000)
        fake_factory.create_summary("s", "h", configuration=config)
        native = fake_adapter.last_call.configuration
        assert native.max_age == timedelta(minutes=60)
        assert native.age_buckets == 3
        assert native.buffer_size == 1000


class TestLabelNameShorthand:
    """Label names without a configuration suppress the initial value."""

    def test_counter(self, fake_factory, fake_adapter):
        fake_factory.create_counter("c", "h", "route", "status")
        assert fake_adapter.last_call.configuration == PrometheusCounterConfiguration(
            label_names=("route", "status"), suppress_initial_value=True
        )

    def test_gauge(self, fake_factory, fake_adapter):
        fake_factory.create_gauge("g", "h", "pool")
        assert fake_adapter.last_call.configuration == PrometheusGaugeConfiguration(
            label_names=("pool",), suppress_initial_value=True
        )

    def test_histogram_with_buckets(self, fake_factory, fake_adapter):
        fake_factory.create_histogram("h", "h", "route", buckets=(0.1, 1.0))
        assert fake_adapter.last_call.configuration == PrometheusHistogramConfiguration(
            label_names=("route",), buckets=(0.1, 1.0), suppress_initial_value=True
        )

    def test_histogram_buckets_only(self, fake_factory, fake_adapter):
        fake_factory.create_histogram("h", "h", buckets=(0.1, 1.0))
        native = fake_adapter.last_call.configuration
        assert native.label_names is None
        assert native.buckets == (0.1, 1.0)

    def test_summary(self, fake_factory, fake_adapter):
        fake_factory.create_summary("s", "h", "route")
        assert fake_adapter.last_call.configuration == PrometheusSummaryConfiguration(
            label_names=("route",), suppress_initial_value=True
        )

    def test_summary_keywords(self, fake_factory, fake_adapter):
        fake_factory.create_summary("s", "h", age_buckets=2, buffer_size=50, max_age=timedelta(seconds=5))
        native = fake_adapter.last_call.configuration
        assert native.age_buckets == 2
        assert native.buffer_size == 50
        assert native.max_age == timedelta(seconds=5)
        assert native.label_names is None

    def test_summary_unset_keywords_use_defaults(self, fake_factory, fake_adapter):
        fake_factory.create_summary("s", "h", objectives=[(0.5, 0.05)])
        native = fake_adapter.last_call.configuration
        assert native.max_age == DEFAULT_MAX_AGE
        assert native.age_buckets == DEFAULT_AGE_BUCKETS
        assert native.buffer_size == DEFAULT_BUFFER_SIZE


class TestStaticLabelVariants:
    def test_counter(self, fake_factory, fake_adapter):
        fake_factory.create_counter_with_static_labels("c", "h", STATIC, "a")
        assert fake_adapter.last_call.configuration == PrometheusCounterConfiguration(
            label_names=("a",), static_labels=STATIC, suppress_initial_value=True
        )

    def test_gauge_without_mutable_labels(self, fake_factory, fake_adapter):
        fake_factory.create_gauge_with_static_labels("g", "h", STATIC)
        assert fake_adapter.last_call.configuration == PrometheusGaugeConfiguration(
            static_labels=STATIC, suppress_initial_value=True
        )

    def test_histogram(self, fake_factory, fake_adapter):
        fake_factory.create_histogram_with_static_labels("h", "h", STATIC, "a", buckets=[1.0])
        native = fake_adapter.last_call.configuration
        assert native.static_labels == STATIC
        assert native.buckets == (1.0,)

    def test_histogram_default_buckets(self, fake_factory, fake_adapter):
        fake_factory.create_histogram_with_static_labels("h", "h", STATIC)
        assert fake_adapter.last_call.configuration.buckets == DEFAULT_BUCKETS

    def test_summary(self, fake_factory, fake_adapter):
        fake_factory.create_summary_with_static_labels("s", "h", STATIC, "a", age_buckets=4)
        native = fake_adapter.last_call.configuration
        assert native.static_labels == STATIC
        assert native.label_names == ("a",)
        assert native.age_buckets == 4


class TestMixedArguments:
    def test_counter_configuration_and_label_names(self, fake_factory, fake_adapter):
        with pytest.raises(InvalidArgumentError) as exc_info:
            fake_factory.create_counter("c", "h", "a", configuration=CounterConfiguration())
        assert exc_info.value.details == {"metric": "c", "arguments": ["label_names"]}
        assert fake_adapter.calls == []

    def test_histogram_configuration_and_buckets(self, fake_factory):
        with pytest.raises(InvalidArgumentError):
            fake_factory.create_histogram("h", "h", configuration=HistogramConfiguration(), buckets=[1.0])

    def test_summary_configuration_and_keywords(self, fake_factory):
        with pytest.raises(InvalidArgumentError) as exc_info:
            fake_factory.create_summary(
                "s", "h", configuration=SummaryConfiguration(), buffer_size=10, age_buckets=2
            )
        assert exc_info.value.details["arguments"] == ["age_buckets", "buffer_size"]


class TestBackendErrors:
    def test_duplicate_registration_propagates(self, factory):
        factory.create_counter("dup", "h")
        with pytest.raises(ValueError, match="Duplicated timeseries"):
            factory.create_counter("dup", "h")

    def test_reserved_label_propagates(self, factory):
        with pytest.raises(ValueError, match="Reserved label"):
            factory.create_histogram("latency", "h", "le")


class TestSingleton:
    def test_returns_same_instance(self, registry):
        first = get_metric_factory(registry=registry)
        assert get_metric_factory() is first

    def test_default_backend_is_prometheus(self, registry):
        adapter = get_metric_factory(registry=registry, namespace="app").adapter
        assert isinstance(adapter, PrometheusMetricFactoryAdapter)
        assert adapter.registry is registry
        assert adapter.namespace == "app"

    def test_reset_creates_new_instance(self, registry):
        first = get_metric_factory(registry=registry)
        reset_metric_factory()
        assert get_metric_factory(registry=registry) is not first

    def test_custom_adapter(self, fake_adapter):
        assert PulseMetricFactory(fake_adapter).adapter is fake_adapter


def test_creation_is_logged(fake_factory, caplog):
    with caplog.at_level("DEBUG", logger="pulse.factory"):
        fake_factory.create_gauge("queue_depth", "h")
    record = caplog.records[-1]
    assert record.event_type == "metric_created"
    assert record.metric_kind == "gauge"
    assert record.metric_name == "queue_depth"
    assert record.configured is False
