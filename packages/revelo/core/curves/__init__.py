"""Ease curves and the injectable ease registry."""

from revelo.core.curves.custom import BezierEase
from revelo.core.curves.functions import EaseFunction
from revelo.core.curves.registry import EaseRegistry, build_default_registry
from revelo.core.curves.rough import RoughEase

__all__ = [
    "BezierEase",
    "EaseFunction",
    "EaseRegistry",
    "RoughEase",
    "build_default_registry",
]
