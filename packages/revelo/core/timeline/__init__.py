"""Tween engine, stagger distribution and timeline assembly."""

from revelo.core.timeline.engine import Ticker, Timeline, Tween, TweenEngine
from revelo.core.timeline.stagger import normalize_stagger, stagger_offsets

__all__ = [
    "Ticker",
    "Timeline",
    "Tween",
    "TweenEngine",
    "normalize_stagger",
    "stagger_offsets",
]
