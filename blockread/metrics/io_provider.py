"""Sampled latency profiling for short-circuit local reads."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from blockread.config import ScrMetricsConf
from blockread.metrics.sampler import compute_sample_threshold, should_sample
from blockread.file_io import positional_read

logger = logging.getLogger(__name__)

# Threshold in milliseconds above which a warning should be flagged.
SLOW_READ_WARNING_THRESHOLD_MS = 1000

ReadPrimitive = Callable[[Any, Any, int], int]


def _valid_percentage(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 100


class BlockReaderIoProvider:
    """
    Profiles short-circuit local read latencies when sampling is enabled.

    One instance belongs to one open local block file. A sampled read is
    bracketed with two monotonic clock readings and the difference goes to
    the metrics sink. The first read slower than
    SLOW_READ_WARNING_THRESHOLD_MS logs a warning; later ones on the same
    instance stay quiet.

    ``warning_logged`` is a plain bool written without a lock. Two threads
    racing on their first slow read may both log.
    """

    def __init__(
        self,
        conf: Optional[ScrMetricsConf],
        metrics,
        timer,
        read_primitive: ReadPrimitive = positional_read,
        log: Optional[logging.Logger] = None,
    ) -> None:
        """
        Args:
            conf: Sampling settings; None disables profiling
            metrics: Sink with ``add_short_circuit_read_latency(ms)``
            timer: Clock with ``monotonic_now() -> int`` in milliseconds
            read_primitive: ``(handle, buffer, position) -> bytes read``
            log: Logger for the slow-read warning (module logger if None)
        """
        self._read_primitive = read_primitive
        self._log = log or logger
        self._warning_logged = False
        self._instrumentation_failed = False

        if conf is not None and _valid_percentage(conf.sampling_percentage):
            self._enabled = bool(conf.sampling_enabled)
            self._sample_threshold = compute_sample_threshold(conf.sampling_percentage)
            self._metrics = metrics
            self._timer = timer
        else:
            self._enabled = False
            self._sample_threshold = 0
            self._metrics = None
            self._timer = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def sample_threshold(self) -> int:
        return self._sample_threshold

    @property
    def warning_logged(self) -> bool:
        return self._warning_logged

    def read(self, handle, buffer, position: int) -> int:
        """Read into ``buffer`` at ``position``; same contract as the read primitive."""
        begin = None
        if self._enabled and should_sample(self._sample_threshold):
            try:
                begin = self._timer.monotonic_now()
            except Exception as e:
                self._instrumentation_error("read clock", e)

        n_read = self._read_primitive(handle, buffer, position)

        if begin is not None:
            try:
                end = self._timer.monotonic_now()
            except Exception as e:
                self._instrumentation_error("read clock", e)
            else:
                self._add_latency(max(end - begin, 0))
        return n_read

    def _add_latency(self, latency: int) -> None:
        try:
            self._metrics.add_short_circuit_read_latency(latency)
        except Exception as e:
            self._instrumentation_error("record latency", e)

        if latency > SLOW_READ_WARNING_THRESHOLD_MS and not self._warning_logged:
            try:
                self._log.warning(
                    f"The Short Circuit Local Read latency, {latency} ms, "
                    f"is higher than the threshold ({SLOW_READ_WARNING_THRESHOLD_MS} ms). "
                    f"Suppressing further warnings for this block reader."
                )
            except Exception as e:
                self._instrumentation_error("log slow read", e)
            self._warning_logged = True

    def _instrumentation_error(self, action: str, error: Exception) -> None:
        """Swallow a sink or logger failure, noting the first one at debug level."""
        if self._instrumentation_failed:
            return
        self._instrumentation_failed = True
        try:
            logger.debug(f"Failed to {action} for short-circuit read: {error!r}")
        except Exception:
            pass
