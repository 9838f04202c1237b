"""
Tests for idempotent Prometheus metric registration.
"""

import pytest
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from translation_relay.utils.metrics._helpers import get_or_create_metric


@pytest.fixture
def metrics_registry():
    return CollectorRegistry()


class TestGetOrCreateMetric:
    def test_second_call_returns_registered_collector(self, metrics_registry):
        first = get_or_create_metric(
            Counter,
            "frames_total",
            "Frames",
            ["type"],
            registry=metrics_registry,
        )
        second = get_or_create_metric(
            Counter,
            "frames_total",
            "Frames",
            ["type"],
            registry=metrics_registry,
        )

        assert first is second

    def test_histogram_buckets_passed_through(self, metrics_registry):
        histogram = get_or_create_metric(
            Histogram,
            "latency_seconds",
            "Latency",
            registry=metrics_registry,
            buckets=(0.1, 1.0),
        )
        histogram.observe(0.5)

        assert (
            metrics_registry.get_sample_value(
                "latency_seconds_bucket", {"le": "1.0"}
            )
            == 1
        )

    def test_type_mismatch_raises(self, metrics_registry):
        get_or_create_metric(Gauge, "rooms", "Rooms", registry=metrics_registry)

        with pytest.raises(TypeError):
            get_or_create_metric(
                Counter, "rooms", "Rooms", registry=metrics_registry
            )
