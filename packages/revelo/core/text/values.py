"""Value compilation.

Turns a TierSpec's property map into flat ``from``/``to`` value maps ready
for interpolation. Numbers are rendered with their unit; producers are
wrapped so that every target evaluates them independently and lazily.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Literal

from revelo.core.text.models import ANIMATED_PROPERTIES, TierSpec
from revelo.core.utils.math import format_number

Side = Literal["from", "to"]
Renderer = Callable[[Any], Any]


def _suffix(unit: str) -> Renderer:
    def render(value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{format_number(value)}{unit}"
        return value

    return render


def _blur(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"blur({format_number(value)}px)"
    return value


def _identity(value: Any) -> Any:
    return value


RENDERERS: dict[str, Renderer] = {
    "x": _suffix("%"),
    "y": _suffix("%"),
    "rotate": _suffix("deg"),
    "rotate_x": _suffix("deg"),
    "skew_x": _suffix("deg"),
    "skew_y": _suffix("deg"),
    "filter": _blur,
    "letter_spacing": _suffix("px"),
}


def render_value(name: str, value: Any) -> Any:
    """Render a raw value for a property (``x=120`` gives ``"120%"``)."""
    return RENDERERS.get(name, _identity)(value)


class PerTargetValue:
    """Value evaluated separately for every target.

    Calls the wrapped producer on every evaluation and renders the result,
    so staggered targets get independent values and restarts re-roll them.
    """

    def __init__(self, name: str, producer: Callable[[], Any]) -> None:
        self.name = name
        self.producer = producer

    def __call__(self, index: int, target: Any, targets: Sequence[Any]) -> Any:
        return render_value(self.name, self.producer())

    def __repr__(self) -> str:
        return f"PerTargetValue({self.name}, {self.producer!r})"


def compile_values(spec: TierSpec, side: Side) -> dict[str, Any]:
    """Compile one side of a tier spec into a flat value map.

    Args:
        spec: Tier spec to compile.
        side: ``"from"`` or ``"to"``.

    Returns:
        Map of property name to rendered value or PerTargetValue. ``scale``
        never appears; it is expanded into equal ``scale_x``/``scale_y``.
    """
    values: dict[str, Any] = {}
    for name in ANIMATED_PROPERTIES:
        tween = getattr(spec, name)
        if tween is None:
            continue
        raw = tween.side(side)
        if raw is None:
            continue
        if callable(raw):
            values[name] = PerTargetValue(name, raw)
        else:
            values[name] = render_value(name, raw)

    if "scale" in values:
        scale = values.pop("scale")
        values["scale_x"] = scale
        values["scale_y"] = scale
    return values


__all__ = [
    "PerTargetValue",
    "RENDERERS",
    "Side",
    "compile_values",
    "render_value",
]
