"""Time sources used to bracket sampled reads."""

from __future__ import annotations

import time
from collections import deque
from typing import Deque, Iterable, Optional


class Timer:
    """
    Millisecond clock backed by the standard ``time`` module.

    ``monotonic_now`` is the one to use for elapsed durations: it never goes
    backwards and ignores wall-clock adjustments. Only differences between
    two readings carry meaning.
    """

    def now(self) -> int:
        """Wall-clock time in milliseconds since the epoch."""
        return time.time_ns() // 1_000_000

    def monotonic_now(self) -> int:
        """Monotonic time in milliseconds from an arbitrary origin."""
        return time.monotonic_ns() // 1_000_000


class FakeTimer(Timer):
    """
    Deterministic timer for tests and simulations.

    Readings come from ``readings`` first (in order), then from an internal
    counter that only moves through ``advance``.
    """

    def __init__(self, start_ms: int = 0, readings: Optional[Iterable[int]] = None) -> None:
        self._now_ms = start_ms
        self._readings: Deque[int] = deque(readings or [])
        self.calls = 0

    def advance(self, millis: int) -> None:
        self._now_ms += millis

    def now(self) -> int:
        return self.monotonic_now()

    def monotonic_now(self) -> int:
        self.calls += 1
        if self._readings:
            return self._readings.popleft()
        return self._now_ms
