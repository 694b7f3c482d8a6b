"""Ease registry.

Resolves ease expressions such as ``"power3.out"``, ``"elastic.out(1, 0.5)"``,
``"steps(1)"``, ``"rough({ strength: 20, points: 10 })"`` or a registered
custom name (``"liquid"``) into callables.

The registry is an explicit object created once at start-up with
:func:`build_default_registry` and passed by reference to the timeline
builder and tween engine. Nothing here is module-global state.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import numpy as np

from revelo.core.curves.custom import BezierEase
from revelo.core.curves.functions import (
    ELASTIC_IN_OUT_PERIOD,
    LIBRARY_FAMILIES,
    SHAPED_BUILDERS,
    EaseFunction,
    ease_in_from_out,
    ease_in_out_from_out,
    library_ease,
    linear,
    steps,
)
from revelo.core.curves.rough import rough_from_config
from revelo.core.errors import UnknownEaseError

logger = logging.getLogger(__name__)

_EXPRESSION_PATTERN = re.compile(
    r"^\s*(?P<family>[A-Za-z][\w-]*)"
    r"(?:\.(?P<variant>in|out|inOut))?"
    r"\s*(?:\((?P<args>.*)\))?\s*$",
    re.DOTALL,
)
_OPTION_PATTERN = re.compile(r"(\w+)\s*:\s*([^,}]+)")

_LINEAR_NAMES = frozenset({"none", "linear", "power0"})

LIQUID_PATH = "M0,0 C0.082,0.894 0.19,1.018 1,1"
ANTICIPATION_PATH = "M0,0 C0.168,-0.1 0.222,1.2 0.4,1.05 0.6,0.85 0.818,1.004 1,1"


def _parse_scalar(raw: str) -> Any:
    value = raw.strip().strip("'\"")
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return float(value)
    except ValueError:
        return value


def parse_options(raw: str) -> dict[str, Any]:
    """Parse a ``{ key: value, ... }`` option block into a dict.

    Example:
        >>> parse_options("{ strength: 20, taper: 'both', randomize: true }")
        {'strength': 20.0, 'taper': 'both', 'randomize': True}
    """
    return {key: _parse_scalar(value) for key, value in _OPTION_PATTERN.findall(raw)}


class EaseRegistry:
    """Registry of named eases.

    Custom eases are registered by name; parametrised family expressions are
    parsed on lookup and cached per expression string.

    Example:
        >>> registry = build_default_registry()
        >>> ease = registry.resolve("power3.out")
        >>> ease(0.0), ease(1.0)
        (0.0, 1.0)
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._custom: dict[str, EaseFunction] = {}
        self._cache: dict[str, EaseFunction] = {}
        self._rng = rng or np.random.default_rng()

    def register(self, name: str, ease: EaseFunction) -> None:
        """Register a custom ease under a name.

        Args:
            name: Ease identifier used in tier specs.
            ease: Callable mapping [0, 1] to progress.

        Raises:
            ValueError: If the name is already registered.
        """
        if name in self._custom:
            raise ValueError(f"Ease '{name}' already registered")
        self._custom[name] = ease
        logger.debug("Registered custom ease '%s'", name)

    def register_path(self, name: str, path_data: str) -> bool:
        """Register a Bezier path ease unless one with that name exists.

        Args:
            name: Ease identifier.
            path_data: SVG cubic path data in the unit square.

        Returns:
            True if the ease was created, False if it already existed.
        """
        if name in self._custom:
            return False
        self.register(name, BezierEase(path_data))
        return True

    def has(self, name: str) -> bool:
        """Check whether a custom ease name is registered."""
        return name in self._custom

    def resolve(self, expression: str) -> EaseFunction:
        """Resolve an ease expression into a callable.

        Args:
            expression: Ease name or expression.

        Returns:
            Ease function.

        Raises:
            UnknownEaseError: If the expression cannot be resolved.
        """
        if expression in self._custom:
            return self._custom[expression]
        cached = self._cache.get(expression)
        if cached is not None:
            return cached

        ease = self._parse(expression)
        # Randomized rough eases must not be shared between tweens
        if not expression.strip().startswith("rough"):
            self._cache[expression] = ease
        return ease

    def _parse(self, expression: str) -> EaseFunction:
        match = _EXPRESSION_PATTERN.match(expression)
        if match is None:
            raise UnknownEaseError(expression)

        family = match.group("family")
        variant = match.group("variant") or "out"
        args = match.group("args")

        if family in _LINEAR_NAMES:
            return linear
        if family == "steps":
            try:
                count = int(float(args or "1"))
            except ValueError as e:
                raise UnknownEaseError(expression) from e
            return steps(count)
        if family == "rough":
            return rough_from_config(parse_options(args or ""), self.resolve, rng=self._rng)

        if family in LIBRARY_FAMILIES:
            # Fixed-shape families take no arguments
            if args and args.strip():
                raise UnknownEaseError(expression)
            return library_ease(family, variant)

        builder = SHAPED_BUILDERS.get(family)
        if builder is None:
            raise UnknownEaseError(expression)

        numbers: list[float] = []
        if args:
            try:
                numbers = [float(part) for part in args.split(",") if part.strip()]
            except ValueError as e:
                raise UnknownEaseError(expression) from e
        if family == "elastic" and variant == "inOut" and len(numbers) < 2:
            numbers = (numbers or [1.0]) + [ELASTIC_IN_OUT_PERIOD]

        try:
            ease_out = builder(*numbers)
        except TypeError as e:
            raise UnknownEaseError(expression) from e

        if variant == "in":
            return ease_in_from_out(ease_out)
        if variant == "inOut":
            return ease_in_out_from_out(ease_out)
        return ease_out

    @property
    def custom_names(self) -> list[str]:
        """List registered custom ease names."""
        return sorted(self._custom)

    def __contains__(self, expression: object) -> bool:
        if not isinstance(expression, str):
            return False
        try:
            self.resolve(expression)
        except UnknownEaseError:
            return False
        return True


def build_default_registry(rng: np.random.Generator | None = None) -> EaseRegistry:
    """Create an EaseRegistry with the built-in custom eases.

    Registers ``liquid`` and ``anticipation`` exactly once.

    Args:
        rng: Random generator for rough eases (seed it for reproducible output).

    Returns:
        Ready-to-use EaseRegistry.
    """
    registry = EaseRegistry(rng=rng)
    registry.register_path("liquid", LIQUID_PATH)
    registry.register_path("anticipation", ANTICIPATION_PATH)
    return registry


__all__ = [
    "ANTICIPATION_PATH",
    "EaseRegistry",
    "LIQUID_PATH",
    "build_default_registry",
    "parse_options",
]
