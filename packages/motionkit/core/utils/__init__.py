"""Shared utilities for motionkit."""

from motionkit.core.utils.math import clamp, to_f32, window_progress

__all__ = [
    "clamp",
    "to_f32",
    "window_progress",
]
