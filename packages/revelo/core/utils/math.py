"""Math utilities for common operations."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


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


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def format_number(value: float) -> str:
    """Format a number for CSS-style output without a trailing ``.0``.

    Example:
        >>> format_number(120)
        '120'
        >>> format_number(-2.5)
        '-2.5'
    """
    as_float = float(value)
    if as_float.is_integer():
        return str(int(as_float))
    return f"{round(as_float, 4)}"
