"""Effect adapter registry.

Holds registered EffectAdapter instances and finds the adapters that
apply to a resolved config.
"""

from __future__ import annotations

import logging

from revelo.core.effects.protocol import EffectAdapter
from revelo.core.text.models import ResolvedConfig

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry for EffectAdapter instances.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(ReelAdapter())
        >>> registry.register(FlickerAdapter())
        >>> adapters = registry.matching(resolved)
    """

    def __init__(self) -> None:
        self._adapters: dict[str, EffectAdapter] = {}

    def register(self, adapter: EffectAdapter) -> None:
        """Register an effect adapter.

        Args:
            adapter: EffectAdapter implementation to register.
        """
        effect_type = adapter.effect_type
        if effect_type in self._adapters:
            logger.warning(
                "Overwriting adapter for effect '%s' (old=%s, new=%s)",
                effect_type,
                type(self._adapters[effect_type]).__name__,
                type(adapter).__name__,
            )
        self._adapters[effect_type] = adapter
        logger.debug("Registered adapter '%s' for effect '%s'", type(adapter).__name__, effect_type)

    def matching(self, resolved: ResolvedConfig) -> list[EffectAdapter]:
        """Adapters that apply to a config, one per tier at most.

        When two adapters claim the same tier the first registered wins.
        """
        claimed: dict[str, EffectAdapter] = {}
        for adapter in self._adapters.values():
            if not adapter.matches(resolved):
                continue
            tier = adapter.tier.value
            if tier in claimed:
                logger.warning(
                    "Effect '%s' skipped: tier '%s' already handled by '%s'",
                    adapter.effect_type,
                    tier,
                    claimed[tier].effect_type,
                )
                continue
            claimed[tier] = adapter
        return list(claimed.values())

    @property
    def registered_types(self) -> list[str]:
        """List all registered effect types."""
        return sorted(self._adapters)

    def __len__(self) -> int:
        return len(self._adapters)


__all__ = [
    "AdapterRegistry",
]
