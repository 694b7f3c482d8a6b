"""Standard ease functions.

Fixed-shape families (power, sine, expo, circ, bounce) come from
easing-functions. Back and elastic take shape arguments
(``back.out(1.7)``, ``elastic.out(1, 0.3)``), so they are built here as
``out`` eases; the ``in`` and ``inOut`` flavours are derived with
:func:`ease_in_from_out` and :func:`ease_in_out_from_out`.

All functions map normalized time [0, 1] to normalized progress with
``f(0) == 0`` and ``f(1) == 1``. Values in between may overshoot.
"""

from __future__ import annotations

from collections.abc import Callable
import math
from typing import Any

from easing_functions import (
    BounceEaseIn,
    BounceEaseInOut,
    BounceEaseOut,
    CircularEaseIn,
    CircularEaseInOut,
    CircularEaseOut,
    CubicEaseIn,
    CubicEaseInOut,
    CubicEaseOut,
    ExponentialEaseIn,
    ExponentialEaseInOut,
    ExponentialEaseOut,
    QuadEaseIn,
    QuadEaseInOut,
    QuadEaseOut,
    QuarticEaseIn,
    QuarticEaseInOut,
    QuarticEaseOut,
    QuinticEaseIn,
    QuinticEaseInOut,
    QuinticEaseOut,
    SineEaseIn,
    SineEaseInOut,
    SineEaseOut,
)

EaseFunction = Callable[[float], float]

_TWO_PI = 2 * math.pi

_EASING_DEFAULTS: dict[str, float] = {
    "start": 0.0,
    "end": 1.0,
    "duration": 1.0,
}


def linear(t: float) -> float:
    """Identity ease (``none`` / ``linear`` / ``power0``)."""
    return t


def _make_easing(easing_cls: type[Any]) -> EaseFunction:
    obj = easing_cls(**_EASING_DEFAULTS)

    def ease(t: float) -> float:
        # Pin the ends so tweens land exactly on their values
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return float(obj.ease(t))

    return ease


# Family -> (in, out, inOut) easing classes
LIBRARY_FAMILIES: dict[str, tuple[type[Any], type[Any], type[Any]]] = {
    "power1": (QuadEaseIn, QuadEaseOut, QuadEaseInOut),
    "power2": (CubicEaseIn, CubicEaseOut, CubicEaseInOut),
    "power3": (QuarticEaseIn, QuarticEaseOut, QuarticEaseInOut),
    "power4": (QuinticEaseIn, QuinticEaseOut, QuinticEaseInOut),
    "quad": (QuadEaseIn, QuadEaseOut, QuadEaseInOut),
    "cubic": (CubicEaseIn, CubicEaseOut, CubicEaseInOut),
    "quart": (QuarticEaseIn, QuarticEaseOut, QuarticEaseInOut),
    "quint": (QuinticEaseIn, QuinticEaseOut, QuinticEaseInOut),
    "strong": (QuinticEaseIn, QuinticEaseOut, QuinticEaseInOut),
    "sine": (SineEaseIn, SineEaseOut, SineEaseInOut),
    "expo": (ExponentialEaseIn, ExponentialEaseOut, ExponentialEaseInOut),
    "circ": (CircularEaseIn, CircularEaseOut, CircularEaseInOut),
    "bounce": (BounceEaseIn, BounceEaseOut, BounceEaseInOut),
}

_VARIANT_INDEX = {"in": 0, "out": 1, "inOut": 2}


def library_ease(family: str, variant: str = "out") -> EaseFunction:
    """Ease of a fixed-shape family.

    Args:
        family: Family name, e.g. ``"power3"`` or ``"expo"``.
        variant: ``"in"``, ``"out"`` or ``"inOut"``.

    Returns:
        Ease function.

    Raises:
        KeyError: If the family or variant is unknown.
    """
    return _make_easing(LIBRARY_FAMILIES[family][_VARIANT_INDEX[variant]])


def ease_in_from_out(ease_out: EaseFunction) -> EaseFunction:
    """Mirror an out-ease into its in-ease."""

    def ease_in(t: float) -> float:
        return 1.0 - ease_out(1.0 - t)

    return ease_in


def ease_in_out_from_out(ease_out: EaseFunction) -> EaseFunction:
    """Combine an out-ease into a symmetric in-out ease."""

    def ease_in_out(t: float) -> float:
        if t < 0.5:
            return (1.0 - ease_out(1.0 - t * 2)) / 2
        return 0.5 + ease_out((t - 0.5) * 2) / 2

    return ease_in_out


def back_out(overshoot: float = 1.70158) -> EaseFunction:
    """Out-ease that overshoots the target before settling."""

    def ease(t: float) -> float:
        u = t - 1.0
        return u * u * ((overshoot + 1) * u + overshoot) + 1.0

    return ease


def elastic_out(amplitude: float = 1.0, period: float = 0.3) -> EaseFunction:
    """Damped sine out-ease.

    Args:
        amplitude: Overshoot amplitude; values below 1 lengthen the period.
        period: Oscillation period in normalized time.

    Returns:
        Elastic out-ease.
    """
    p1 = amplitude if amplitude >= 1 else 1.0
    p2 = period / (amplitude if amplitude < 1 else 1.0)
    p3 = p2 / _TWO_PI * (math.asin(1 / p1) if p1 else 0.0)
    angular = _TWO_PI / p2

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return p1 * 2 ** (-10 * t) * math.sin((t - p3) * angular) + 1.0

    return ease


def steps(count: int) -> EaseFunction:
    """Hold-and-jump ease with ``count`` discrete levels."""
    if count < 1:
        raise ValueError("steps count must be >= 1")

    def ease(t: float) -> float:
        if t >= 1.0:
            return 1.0
        return math.floor(max(0.0, t) * count) / count

    return ease


# Shaped families: name -> builder of the out-ease, accepting the numeric
# arguments of expressions such as ``elastic.out(1, 0.5)``
SHAPED_BUILDERS: dict[str, Callable[..., EaseFunction]] = {
    "back": back_out,
    "elastic": elastic_out,
}

# Default elastic period differs for the in-out flavour
ELASTIC_IN_OUT_PERIOD = 0.45


__all__ = [
    "ELASTIC_IN_OUT_PERIOD",
    "EaseFunction",
    "LIBRARY_FAMILIES",
    "SHAPED_BUILDERS",
    "back_out",
    "ease_in_from_out",
    "ease_in_out_from_out",
    "elastic_out",
    "library_ease",
    "linear",
    "steps",
]
