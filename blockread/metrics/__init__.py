"""Short-circuit read profiling: sampling, latency sink and the timed read wrapper."""

from blockread.metrics.sampler import MAX_SAMPLE_SPACE, compute_sample_threshold, should_sample
from blockread.metrics.local_metrics import BlockReaderLocalMetrics
from blockread.metrics.io_provider import (
    SLOW_READ_WARNING_THRESHOLD_MS,
    BlockReaderIoProvider,
)

__all__ = [
    "MAX_SAMPLE_SPACE",
    "compute_sample_threshold",
    "should_sample",
    "BlockReaderLocalMetrics",
    "BlockReaderIoProvider",
    "SLOW_READ_WARNING_THRESHOLD_MS",
]
