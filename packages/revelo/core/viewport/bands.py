"""Viewport bands.

A band is a pair of ``"<element edge> <viewport position>"`` thresholds,
e.g. ``("top center", "bottom center")``: the band starts when the element's
top meets the viewport center and ends when its bottom does.
"""

from __future__ import annotations

from dataclasses import dataclass

from revelo.core.text.models import AnimationType, ViewportAnchor

_KEYWORDS = {"top": 0.0, "center": 0.5, "bottom": 1.0}

SCRUB_BANDS: dict[ViewportAnchor, tuple[str, str]] = {
    ViewportAnchor.TOP: ("top center", "bottom top"),
    ViewportAnchor.CENTER: ("top 80%", "bottom 20%"),
    ViewportAnchor.BOTTOM: ("top bottom", "bottom center"),
}


def parse_position(token: str) -> float:
    """Parse ``top``/``center``/``bottom`` or ``N%`` into a 0..1 fraction.

    Raises:
        ValueError: On an unknown token.
    """
    token = token.strip().lower()
    if token in _KEYWORDS:
        return _KEYWORDS[token]
    if token.endswith("%"):
        return float(token[:-1]) / 100
    raise ValueError(f"Unknown viewport position: {token!r}")


@dataclass(frozen=True)
class Threshold:
    """Where an element edge meets a viewport line (both as 0..1 fractions)."""

    element: float
    viewport: float

    @classmethod
    def parse(cls, text: str) -> Threshold:
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"Threshold must be '<element> <viewport>', got {text!r}")
        return cls(parse_position(parts[0]), parse_position(parts[1]))

    def scroll_offset(
        self, element_top: float, element_height: float, viewport_height: float
    ) -> float:
        """Scroll position at which the threshold is crossed."""
        return element_top + element_height * self.element - viewport_height * self.viewport


@dataclass(frozen=True)
class ViewportBand:
    """Start and end thresholds of a trigger or scrub range."""

    start: str
    end: str

    @property
    def start_threshold(self) -> Threshold:
        return Threshold.parse(self.start)

    @property
    def end_threshold(self) -> Threshold:
        return Threshold.parse(self.end)


def select_band(
    mode: AnimationType, anchor: ViewportAnchor = ViewportAnchor.CENTER
) -> ViewportBand:
    """Band for a playback mode and anchor.

    Trigger bands run from ``top {anchor}`` to ``bottom {anchor}``; scrub
    bands are wider so the scrub range is longer.

    Raises:
        ValueError: For manual mode, which never observes the viewport.
    """
    if mode is AnimationType.SCRUB:
        start, end = SCRUB_BANDS[anchor]
        return ViewportBand(start, end)
    if mode is AnimationType.TRIGGER:
        return ViewportBand(f"top {anchor.value}", f"bottom {anchor.value}")
    raise ValueError(f"No viewport band for mode '{mode.value}'")


__all__ = [
    "SCRUB_BANDS",
    "Threshold",
    "ViewportBand",
    "parse_position",
    "select_band",
]
