"""Positional read primitive for local block files."""

from __future__ import annotations

import os
from typing import Any


def _fileno(handle: Any) -> int:
    if isinstance(handle, int):
        return handle
    return handle.fileno()


def positional_read(handle: Any, buffer, position: int) -> int:
    """
    Read into ``buffer`` starting at absolute file offset ``position``.

    The handle's own file pointer is left where it was.

    Args:
        handle: File descriptor or any object with ``fileno()``
        buffer: Writable bytes-like object (bytearray, memoryview, ...)
        position: Absolute offset in the file

    Returns:
        Number of bytes read; 0 at end of file

    Raises:
        ValueError: if position is negative
        OSError: on I/O failure
    """
    if position < 0:
        raise ValueError(f"Negative position: {position}")
    view = memoryview(buffer).cast("B")
    if len(view) == 0:
        return 0
    data = os.pread(_fileno(handle), len(view), position)
    n_read = len(data)
    view[:n_read] = data
    return n_read
