"""Local block file reader with sampled read latency profiling."""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional

from blockread.clock import Timer
from blockread.config import ScrMetricsConf
from blockread.errors import InstrumentationError, ReaderClosedError
from blockread.metrics.io_provider import BlockReaderIoProvider
from blockread.metrics.local_metrics import BlockReaderLocalMetrics

logger = logging.getLogger(__name__)


class LocalBlockReader:
    """
    Reads a local block file through a BlockReaderIoProvider.

    Each reader opens its own file and owns its own provider, so the one-shot
    slow-read warning is per reader. The metrics sink and timer may be shared
    between readers.
    """

    def __init__(
        self,
        path: str,
        conf: Optional[ScrMetricsConf] = None,
        metrics: Optional[BlockReaderLocalMetrics] = None,
        timer: Optional[Timer] = None,
    ) -> None:
        self.path = os.fspath(path)
        if conf is not None and metrics is None:
            try:
                metrics = BlockReaderLocalMetrics()
            except InstrumentationError as e:
                logger.warning(f"Disabling read latency profiling for {self.path}: {e}")
                conf = None
        self._io_provider = BlockReaderIoProvider(conf, metrics, timer or Timer())
        self._position = 0
        self._lock = threading.Lock()
        self._fd: Optional[int] = os.open(self.path, os.O_RDONLY)
        logger.debug(
            f"Opened local block reader path={self.path} "
            f"profiling={'on' if self._io_provider.enabled else 'off'}"
        )

    @property
    def io_provider(self) -> BlockReaderIoProvider:
        return self._io_provider

    @property
    def closed(self) -> bool:
        return self._fd is None

    def _check_open(self) -> int:
        fd = self._fd
        if fd is None:
            raise ReaderClosedError("Local block reader is closed", {"path": self.path})
        return fd

    def read_at(self, position: int, size: int) -> bytes:
        """Read up to ``size`` bytes at ``position`` without moving the stream position."""
        buf = bytearray(size)
        with self._lock:
            fd = self._check_open()
            n_read = self._io_provider.read(fd, buf, position)
        return bytes(buf[:n_read])

    def readinto(self, buffer) -> int:
        """Read sequentially into ``buffer``; returns 0 at end of file."""
        with self._lock:
            fd = self._check_open()
            n_read = self._io_provider.read(fd, buffer, self._position)
            if n_read > 0:
                self._position += n_read
        return n_read

    def seek(self, position: int) -> int:
        self._check_open()
        if position < 0:
            raise ValueError(f"Negative seek position: {position}")
        with self._lock:
            self._position = position
        return position

    def tell(self) -> int:
        self._check_open()
        return self._position

    def close(self) -> None:
        with self._lock:
            fd, self._fd = self._fd, None
        if fd is not None:
            os.close(fd)
            logger.debug(f"Closed local block reader path={self.path}")

    def __enter__(self) -> "LocalBlockReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LocalBlockReader(path={self.path!r}, closed={self.closed})"
