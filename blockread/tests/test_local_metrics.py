"""Tests for the OpenTelemetry-backed latency sink."""

from unittest import mock

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from blockread.errors import InstrumentationError
from blockread.metrics.local_metrics import LATENCY_INSTRUMENT_NAME, BlockReaderLocalMetrics


@pytest.fixture
def reader():
    return InMemoryMetricReader()


@pytest.fixture
def meter_provider(reader):
    provider = MeterProvider(metric_readers=[reader])
    yield provider
    provider.shutdown()


def _latency_points(reader):
    points = []
    data = reader.get_metrics_data()
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name == LATENCY_INSTRUMENT_NAME:
                    assert metric.unit == "ms"
                    points.extend(metric.data.data_points)
    return points


class TestHistogram:
    def test_samples_reach_histogram(self, reader, meter_provider):
        sink = BlockReaderLocalMetrics(meter_provider=meter_provider)

        sink.add_short_circuit_read_latency(5)
        sink.add_short_circuit_read_latency(1500)

        points = _latency_points(reader)
        assert len(points) == 1
        assert points[0].count == 2
        assert points[0].sum == 1505
        assert dict(points[0].attributes) == {"reader": "ShortCircuitLocalReads"}

    def test_record_latency_alias(self, reader, meter_provider):
        sink = BlockReaderLocalMetrics.create("dn-7", meter_provider=meter_provider)

        sink.record_latency(12)

        points = _latency_points(reader)
        assert points[0].count == 1
        assert dict(points[0].attributes) == {"reader": "dn-7"}

    def test_global_meter_by_default(self):
        sink = BlockReaderLocalMetrics()
        # Without a configured SDK the global meter is a no-op; recording must still work
        sink.add_short_circuit_read_latency(3)
        assert sink.get_stats()["count"] == 1

    def test_histogram_creation_failure(self):
        provider = mock.Mock()
        provider.get_meter.return_value.create_histogram.side_effect = RuntimeError("boom")

        with pytest.raises(InstrumentationError) as exc_info:
            BlockReaderLocalMetrics(name="broken", meter_provider=provider)
        assert exc_info.value.details["reader"] == "broken"


class TestStats:
    def test_running_stats(self, meter_provider):
        sink = BlockReaderLocalMetrics(meter_provider=meter_provider)
        for latency in (10, 20, 60):
            sink.add_short_circuit_read_latency(latency)

        stats = sink.get_stats()
        assert stats["count"] == 3
        assert stats["total_ms"] == 90
        assert stats["max_ms"] == 60
        assert stats["mean_ms"] == 30.0

    def test_empty_and_reset(self, meter_provider):
        sink = BlockReaderLocalMetrics(meter_provider=meter_provider)
        assert sink.get_stats()["mean_ms"] == 0

        sink.add_short_circuit_read_latency(7)
        sink.reset_stats()

        stats = sink.get_stats()
        assert stats["count"] == 0
        assert stats["max_ms"] == 0
