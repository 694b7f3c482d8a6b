"""Built-in effect adapters."""

from revelo.core.effects.handlers.flicker import FlickerAdapter
from revelo.core.effects.handlers.reel import ReelAdapter, ReelStrip
from revelo.core.effects.registry import AdapterRegistry


def load_builtin_adapters() -> AdapterRegistry:
    """Create an AdapterRegistry with all built-in adapters registered.

    Returns:
        AdapterRegistry with the flicker and reel adapters. Flicker is
        registered first so it keeps the chars tier when both match.
    """
    registry = AdapterRegistry()
    registry.register(FlickerAdapter())
    registry.register(ReelAdapter())
    return registry


__all__ = [
    "FlickerAdapter",
    "ReelAdapter",
    "ReelStrip",
    "load_builtin_adapters",
]
