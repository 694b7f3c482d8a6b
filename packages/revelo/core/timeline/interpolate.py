"""Value interpolation for the tween engine.

Supports plain numbers, colors (hex, rgb/rgba, ``transparent``) and compound
strings whose numeric and color tokens line up, such as ``"120%"`` to
``"0%"``, ``"blur(5px)"`` to ``"blur(0px)"`` or multi-part text shadows.
Anything else switches discretely at the end of the tween.
"""

from __future__ import annotations

import re
from typing import Any

from revelo.core.utils.math import clamp, format_number, lerp

RGBA = tuple[float, float, float, float]

_COLOR = r"#[0-9a-fA-F]{3,8}\b|transparent|rgba?\([^)]*\)"
_NUMBER = r"-?(?:\d+\.?\d*|\.\d+)(?:e-?\d+)?"
_TOKEN_PATTERN = re.compile(f"({_COLOR}|{_NUMBER})")
_COLOR_PATTERN = re.compile(f"^(?:{_COLOR})$")
_LENGTH_PATTERN = re.compile(f"^({_NUMBER})([a-z%]+)$")


def parse_color(value: str) -> RGBA | None:
    """Parse a CSS color into RGBA components (0-255, alpha 0-1).

    Example:
        >>> parse_color("#333")
        (51.0, 51.0, 51.0, 1.0)
    """
    text = value.strip()
    if text == "transparent":
        return (0.0, 0.0, 0.0, 0.0)
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits)
        if len(digits) not in (6, 8):
            return None
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError:
            return None
        alpha = channels[3] / 255 if len(channels) == 4 else 1.0
        return (float(channels[0]), float(channels[1]), float(channels[2]), alpha)
    if text.startswith("rgb"):
        inner = text[text.find("(") + 1 : text.rfind(")")]
        try:
            parts = [float(p) for p in inner.split(",")]
        except ValueError:
            return None
        if len(parts) == 3:
            parts.append(1.0)
        if len(parts) != 4:
            return None
        return (parts[0], parts[1], parts[2], parts[3])
    return None


def format_color(rgba: RGBA) -> str:
    """Format RGBA as hex, or as ``rgba()`` when translucent."""
    r, g, b = (min(255, max(0, round(channel))) for channel in rgba[:3])
    a = rgba[3]
    if a >= 1:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {format_number(a)})"


def _mix_colors(start: RGBA, end: RGBA, progress: float) -> RGBA:
    return (
        lerp(start[0], end[0], progress),
        lerp(start[1], end[1], progress),
        lerp(start[2], end[2], progress),
        clamp(lerp(start[3], end[3], progress), 0.0, 1.0),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _align_zero_unit(start: str, end: str) -> tuple[str, str]:
    # A zero length converts to any unit, so "0%" can tween to "5px"
    a, b = _LENGTH_PATTERN.match(start), _LENGTH_PATTERN.match(end)
    if a is None or b is None or a.group(2) == b.group(2):
        return start, end
    if float(a.group(1)) == 0:
        return f"0{b.group(2)}", end
    if float(b.group(1)) == 0:
        return start, f"0{a.group(2)}"
    return start, end


def _interpolate_strings(start: str, end: str, progress: float) -> str | None:
    start_parts = _TOKEN_PATTERN.split(start)
    end_parts = _TOKEN_PATTERN.split(end)
    if len(start_parts) != len(end_parts):
        return None

    out: list[str] = []
    for i, (a, b) in enumerate(zip(start_parts, end_parts, strict=True)):
        if i % 2 == 0:
            # Literal text between tokens must match exactly
            if a != b:
                return None
            out.append(a)
            continue
        a_color, b_color = _COLOR_PATTERN.match(a), _COLOR_PATTERN.match(b)
        if a_color and b_color:
            ca, cb = parse_color(a), parse_color(b)
            if ca is None or cb is None:
                return None
            out.append(format_color(_mix_colors(ca, cb, progress)))
        elif not a_color and not b_color:
            out.append(format_number(lerp(float(a), float(b), progress)))
        else:
            return None
    return "".join(out)


def interpolate(start: Any, end: Any, progress: float) -> Any:
    """Interpolate between two property values.

    Args:
        start: Value at progress 0 (None means "unknown").
        end: Value at progress 1.
        progress: Eased progress; may overshoot [0, 1].

    Returns:
        Interpolated value. Endpoints are returned unchanged.
    """
    if start is None:
        return end
    if progress == 0:
        return start
    if progress == 1:
        return end
    if _is_number(start) and _is_number(end):
        return lerp(start, end, progress)
    if isinstance(start, str) and isinstance(end, str):
        if start == end:
            return end
        mixed = _interpolate_strings(*_align_zero_unit(start, end), progress)
        if mixed is not None:
            return mixed
    return end if progress >= 1 else start


__all__ = [
    "format_color",
    "interpolate",
    "parse_color",
]
