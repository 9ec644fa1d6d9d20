"""blockread: sampled latency profiling for short-circuit local block reads."""

from blockread.clock import FakeTimer, Timer
from blockread.config import (
    ScrMetricsConf,
    load_conf_from_env,
    load_conf_from_mapping,
    validate_percentage,
)
from blockread.errors import (
    BlockReadError,
    ConfigError,
    InstrumentationError,
    ReaderClosedError,
)
from blockread.file_io import positional_read
from blockread.metrics import (
    MAX_SAMPLE_SPACE,
    SLOW_READ_WARNING_THRESHOLD_MS,
    BlockReaderIoProvider,
    BlockReaderLocalMetrics,
    compute_sample_threshold,
)
from blockread.reader import LocalBlockReader

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Timer",
    "FakeTimer",
    "ScrMetricsConf",
    "load_conf_from_env",
    "load_conf_from_mapping",
    "validate_percentage",
    "BlockReadError",
    "ConfigError",
    "InstrumentationError",
    "ReaderClosedError",
    "positional_read",
    "MAX_SAMPLE_SPACE",
    "SLOW_READ_WARNING_THRESHOLD_MS",
    "BlockReaderIoProvider",
    "BlockReaderLocalMetrics",
    "compute_sample_threshold",
    "LocalBlockReader",
]
