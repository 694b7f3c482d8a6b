"""Shared utilities for Revelo."""

from revelo.core.utils.math import clamp, format_number, lerp

__all__ = [
    "clamp",
    "format_number",
    "lerp",
]
