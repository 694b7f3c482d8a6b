"""Scatter value producers.

Scatter presets (``magneticForce``, ``systemCorruption``, ``staticShock``)
describe positions, rotations and skews as random ranges. Each producer is a
zero-argument callable evaluated once per target every time a timeline
(re)starts, so each character gets its own value and every replay re-rolls.

Entrance (``from``) and exit (``to``) producers are independent objects: a
character's entrance direction says nothing about its exit direction.
"""

from __future__ import annotations

from collections.abc import Sequence
import random
from typing import Any


class RandomRange:
    """Uniform random number in ``[low, high]``.

    Args:
        low: Lower bound.
        high: Upper bound.
        snap: If set, round to a multiple of this increment.
        rng: Random source (defaults to the ``random`` module).

    Example:
        >>> spread = RandomRange(-100, 100)
        >>> -100 <= spread() <= 100
        True
    """

    def __init__(
        self,
        low: float,
        high: float,
        snap: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if high < low:
            raise ValueError("high must be >= low")
        self.low = low
        self.high = high
        self.snap = snap
        self._rng = rng or random

    def __call__(self) -> float:
        value = self._rng.uniform(self.low, self.high)
        if self.snap:
            value = round(value / self.snap) * self.snap
        return value

    def __repr__(self) -> str:
        return f"RandomRange({self.low}, {self.high})"


class RandomChoice:
    """Uniform random pick from a fixed set of values.

    Example:
        >>> pick = RandomChoice(["#333333", "#EEEEEE"])
        >>> pick() in ("#333333", "#EEEEEE")
        True
    """

    def __init__(self, options: Sequence[Any], rng: random.Random | None = None) -> None:
        if not options:
            raise ValueError("options must not be empty")
        self.options = tuple(options)
        self._rng = rng or random

    def __call__(self) -> Any:
        return self._rng.choice(self.options)

    def __repr__(self) -> str:
        return f"RandomChoice({list(self.options)!r})"


def scatter(spread: float, rng: random.Random | None = None) -> RandomRange:
    """Symmetric random range ``[-spread, spread]``."""
    return RandomRange(-spread, spread, rng=rng)


__all__ = [
    "RandomChoice",
    "RandomRange",
    "scatter",
]
