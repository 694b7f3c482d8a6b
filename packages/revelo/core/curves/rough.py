"""Rough (jittery) ease.

Perturbs a template ease at a number of sample points and interpolates
linearly between them, producing an erratic, electric-looking progression.
Configuration mirrors the ``rough({...})`` expression syntax:

    rough({ template: none.out, strength: 15, points: 30, taper: 'both',
            randomize: true, clamp: false })
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

import numpy as np

from revelo.core.curves.functions import EaseFunction, linear
from revelo.core.utils.math import clamp

Taper = Literal["none", "in", "out", "both"]


class RoughEase:
    """Piecewise-linear ease built from perturbed template samples.

    Args:
        template: Underlying ease to perturb (linear by default).
        strength: Perturbation strength; 1 gives a bump of 0.4.
        points: Number of perturbed sample points.
        taper: Where the perturbation fades out.
        randomize: Random sample placement and bumps (else alternating).
        clamp: Clamp sample values to [0, 1].
        rng: Random generator used when randomize is enabled.
    """

    def __init__(
        self,
        template: EaseFunction | None = None,
        strength: float = 1.0,
        points: int = 20,
        taper: Taper = "none",
        randomize: bool = True,
        clamp: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        if points < 1:
            raise ValueError("points must be >= 1")
        self.template = template or linear
        self.strength = strength
        self.points = points
        self.taper = taper
        self.randomize = randomize
        self.clamp = clamp
        self._rng = rng or np.random.default_rng()
        self._xs, self._ys = self._build()

    def _bump(self, x: float, strength: float) -> float:
        if self.taper == "none":
            return strength
        if self.taper == "out":
            return (1 - x) ** 2 * strength
        if self.taper == "in":
            return x * x * strength
        inv = x * 2 if x < 0.5 else (1 - x) * 2
        return inv * inv * 0.5 * strength

    def _build(self) -> tuple[np.ndarray, np.ndarray]:
        strength = self.strength * 0.4
        samples: list[tuple[float, float]] = []
        for i in range(self.points):
            x = float(self._rng.random()) if self.randomize else i / self.points
            y = self.template(x)
            bump = self._bump(x, strength)
            if self.randomize:
                y += float(self._rng.random()) * bump - bump * 0.5
            elif i % 2:
                y += bump * 0.5
            else:
                y -= bump * 0.5
            if self.clamp:
                y = clamp(y, 0.0, 1.0)
            samples.append((x, y))

        samples.sort(key=lambda pair: pair[0])
        xs = np.array([0.0] + [x for x, _ in samples] + [1.0])
        ys = np.array([0.0] + [y for _, y in samples] + [1.0])
        return xs, ys

    def __call__(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return float(np.interp(t, self._xs, self._ys))


def rough_from_config(
    config: dict[str, Any],
    resolve_template: Callable[[str], EaseFunction],
    rng: np.random.Generator | None = None,
) -> RoughEase:
    """Build a RoughEase from a parsed ``rough({...})`` option mapping.

    Args:
        config: Parsed options (template, strength, points, taper, randomize, clamp).
        resolve_template: Callback resolving the template ease name.
        rng: Random generator for randomized sampling.

    Returns:
        Configured RoughEase.
    """
    template_name = config.get("template")
    template = resolve_template(str(template_name)) if template_name else None
    taper = str(config.get("taper", "none"))
    if taper not in ("none", "in", "out", "both"):
        raise ValueError(f"Unsupported rough taper: {taper!r}")
    return RoughEase(
        template=template,
        strength=float(config.get("strength", 1.0)),
        points=int(config.get("points", 20)),
        taper=taper,  # type: ignore[arg-type]
        randomize=bool(config.get("randomize", True)),
        clamp=bool(config.get("clamp", False)),
        rng=rng,
    )


__all__ = [
    "RoughEase",
    "Taper",
    "rough_from_config",
]
