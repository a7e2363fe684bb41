"""Math utilities for frame and coordinate arithmetic."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)

INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def to_f32(value: float) -> float:
    """Round a Python float to IEEE-754 single precision.

    Scene files store coordinates as float32, so in-memory values are
    kept at the same precision to make save/load lossless.

    Example:
        >>> to_f32(0.1)
        0.10000000149011612
    """
    return float(np.float32(value))


def window_progress(frame: int, start: int, duration: int) -> float:
    """Normalized position of ``frame`` inside ``[start, start + duration]``.

    A zero-length window is treated as instantaneous and reports 1.0.
    The result is clamped to [0, 1].
    """
    if duration <= 0:
        return 1.0
    return clamp((frame - start) / duration, 0.0, 1.0)
