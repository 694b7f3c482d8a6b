"""Custom eases built from cubic Bezier path data.

Path data uses the SVG subset ``M x,y C x1,y1 x2,y2 x,y [x1,y1 x2,y2 x,y ...]``
in the unit square, e.g. ``"M0,0 C0.082,0.894 0.19,1.018 1,1"``. Each cubic
segment is sampled with :mod:`bezier` and the ease is evaluated by linear
interpolation of progress (y) against time (x).
"""

from __future__ import annotations

import re

import bezier
import numpy as np

from revelo.core.errors import EasePathError

_NUMBER_PATTERN = re.compile(r"-?\d*\.?\d+(?:e-?\d+)?", re.IGNORECASE)

# Samples per cubic segment
_SEGMENT_SAMPLES = 96


def parse_path_segments(path_data: str) -> list[np.ndarray]:
    """Parse path data into Fortran-ordered 2x4 node arrays, one per segment.

    Args:
        path_data: SVG-style path starting with ``M`` followed by ``C``.

    Returns:
        List of node arrays suitable for ``bezier.Curve(nodes, degree=3)``.

    Raises:
        EasePathError: If the path is not a move followed by cubic segments.
    """
    stripped = path_data.strip()
    if not stripped.upper().startswith("M") or "C" not in stripped.upper():
        raise EasePathError(f"Ease path must be 'M x,y C ...': {path_data!r}")

    move_part, _, curve_part = stripped.upper().partition("C")
    start = [float(v) for v in _NUMBER_PATTERN.findall(move_part)]
    coords = [float(v) for v in _NUMBER_PATTERN.findall(curve_part)]

    if len(start) != 2:
        raise EasePathError(f"Ease path needs one start point: {path_data!r}")
    if not coords or len(coords) % 6 != 0:
        raise EasePathError(
            f"Ease path needs cubic segments of three points each: {path_data!r}"
        )

    segments: list[np.ndarray] = []
    current = (start[0], start[1])
    for i in range(0, len(coords), 6):
        x1, y1, x2, y2, x3, y3 = coords[i : i + 6]
        nodes = np.asfortranarray(
            [
                [current[0], x1, x2, x3],
                [current[1], y1, y2, y3],
            ]
        )
        segments.append(nodes)
        current = (x3, y3)

    return segments


class BezierEase:
    """Ease function defined by one or more cubic Bezier segments.

    Example:
        >>> liquid = BezierEase("M0,0 C0.082,0.894 0.19,1.018 1,1")
        >>> liquid(0.0), liquid(1.0)
        (0.0, 1.0)
    """

    def __init__(self, path_data: str) -> None:
        self.path_data = path_data
        xs: list[np.ndarray] = []
        ys: list[np.ndarray] = []
        params = np.linspace(0.0, 1.0, _SEGMENT_SAMPLES)
        for nodes in parse_path_segments(path_data):
            curve = bezier.Curve(nodes, degree=3)
            evaluated = curve.evaluate_multi(params)
            xs.append(evaluated[0, :])
            ys.append(evaluated[1, :])

        # Keep x monotonic so interpolation is well defined
        self._xs = np.maximum.accumulate(np.concatenate(xs))
        self._ys = np.concatenate(ys)

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return float(np.interp(t, self._xs, self._ys))

    def __repr__(self) -> str:
        return f"BezierEase({self.path_data!r})"


__all__ = [
    "BezierEase",
    "parse_path_segments",
]
