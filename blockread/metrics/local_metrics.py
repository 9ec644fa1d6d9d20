"""Latency sink for short-circuit local reads, backed by OpenTelemetry metrics."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from opentelemetry import metrics as metrics_api
from opentelemetry.metrics import Histogram, MeterProvider

from blockread.errors import InstrumentationError

LATENCY_INSTRUMENT_NAME = "dfs.client.short_circuit.read.latency"
METER_NAME = "blockread"


class BlockReaderLocalMetrics:
    """
    Accepts short-circuit read latency samples.

    Every sample goes to an OTel histogram; a small set of running stats is
    also kept in-process for quick inspection. Input is not validated.
    """

    def __init__(
        self,
        name: str = "ShortCircuitLocalReads",
        meter_provider: Optional[MeterProvider] = None,
    ) -> None:
        """
        Initialize the sink.

        Args:
            name: Metrics source name, attached to every sample as ``reader``
            meter_provider: Provider to create the histogram on (global one if None)
        """
        self.name = name
        if meter_provider is not None:
            meter = meter_provider.get_meter(METER_NAME)
        else:
            meter = metrics_api.get_meter(METER_NAME)
        try:
            self._histogram: Histogram = meter.create_histogram(
                LATENCY_INSTRUMENT_NAME,
                unit="ms",
                description="Latency of sampled short-circuit local reads",
            )
        except Exception as e:
            raise InstrumentationError(
                "Failed to create read latency histogram", {"reader": name, "error": repr(e)}
            ) from e
        self._attributes = {"reader": name}

        self._lock = threading.Lock()
        self._count = 0
        self._total_ms = 0
        self._max_ms = 0

    @classmethod
    def create(cls, name: str, meter_provider: Optional[MeterProvider] = None) -> "BlockReaderLocalMetrics":
        return cls(name=name, meter_provider=meter_provider)

    def add_short_circuit_read_latency(self, latency_ms: int) -> None:
        self._histogram.record(latency_ms, attributes=self._attributes)
        with self._lock:
            self._count += 1
            self._total_ms += latency_ms
            if latency_ms > self._max_ms:
                self._max_ms = latency_ms

    record_latency = add_short_circuit_read_latency

    def get_stats(self) -> Dict[str, Any]:
        """Get running latency statistics."""
        with self._lock:
            mean = (self._total_ms / self._count) if self._count > 0 else 0
            return {
                "name": self.name,
                "count": self._count,
                "total_ms": self._total_ms,
                "max_ms": self._max_ms,
                "mean_ms": round(mean, 2),
            }

    def reset_stats(self) -> None:
        """Reset statistics counters. The histogram is not affected."""
        with self._lock:
            self._count = 0
            self._total_ms = 0
            self._max_ms = 0
