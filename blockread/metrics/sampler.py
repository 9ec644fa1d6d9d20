"""Sampling decisions for timed reads."""

import random
import threading

# Largest positive 32-bit signed int; draws fall in [0, MAX_SAMPLE_SPACE).
MAX_SAMPLE_SPACE = 2**31 - 1

_local = threading.local()


def compute_sample_threshold(percentage: int) -> int:
    """
    Cutoff such that a draw below it happens with probability ~percentage/100.

    The range is divided by 100 before multiplying, so 100% maps to
    2147483600 and a draw is missed 47 times in 2**31 - 1. Kept as is so the
    sampling rate matches existing deployments.
    """
    return (MAX_SAMPLE_SPACE // 100) * percentage


def _thread_random() -> random.Random:
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = random.Random()
        _local.rng = rng
    return rng


def should_sample(threshold: int) -> bool:
    """Draw from this thread's generator; True iff the draw is below threshold."""
    if threshold <= 0:
        return False
    return _thread_random().randrange(MAX_SAMPLE_SPACE) < threshold
