"""Config resolution.

Merges a catalog preset, instance tier overrides and the duration
precedence chain into one ResolvedConfig. Pure: the catalog is never
mutated, a new model is always built.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging

from revelo.core.text.catalog import PresetCatalog
from revelo.core.text.models import (
    TIER_SLOTS,
    EffectKind,
    PresetDefinition,
    PropertyTween,
    ResolvedConfig,
    TierBundle,
    TierSpec,
)

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#EEEEEE"
DEFAULT_GLITCH_COLOR = "#333333"


def effective_duration(
    preset_id: str | None,
    duration: float | None = None,
    preset_durations: Mapping[str, float] | None = None,
) -> float | None:
    """Pick the duration override to stamp onto tiers.

    Precedence: preset-specific duration > global duration > None (each tier
    keeps the preset's own duration).
    """
    if preset_id and preset_durations:
        specific = preset_durations.get(preset_id)
        if specific is not None:
            return specific
    return duration


def _recolor(spec: TierSpec, color: str, glitch_color: str | None) -> TierSpec:
    if spec.color is None:
        return spec
    tween = PropertyTween(
        from_=glitch_color if glitch_color is not None else spec.color.from_,
        to=color,
    )
    return spec.model_copy(update={"color": tween})


def resolve_config(
    catalog: PresetCatalog,
    preset_id: str | None = None,
    overrides: TierBundle | None = None,
    duration: float | None = None,
    preset_durations: Mapping[str, float] | None = None,
    color: str = DEFAULT_COLOR,
    glitch_color: str = DEFAULT_GLITCH_COLOR,
) -> ResolvedConfig:
    """Resolve one instance's animation spec.

    Args:
        catalog: Shared preset catalog (read-only).
        preset_id: Catalog id; None or unknown gives an empty spec.
        overrides: Per-tier overrides merged over the preset.
        duration: Global duration override in seconds.
        preset_durations: Preset-specific duration overrides keyed by preset id.
        color: Foreground color forced onto every ``color.to``.
        glitch_color: Alternate color forced onto flicker ``chars.color.from``.

    Returns:
        New ResolvedConfig.
    """
    preset: PresetDefinition | None = None
    if preset_id:
        preset = catalog.get(preset_id)
        if preset is None:
            logger.warning("Unknown preset '%s', text stays static", preset_id)

    overrides = overrides or TierBundle()
    stamp = effective_duration(preset_id, duration, preset_durations)
    effect = preset.effect if preset is not None else None

    tiers: dict[str, TierSpec] = {}
    for slot in TIER_SLOTS:
        base: TierSpec = getattr(preset, slot) if preset is not None else TierSpec()
        override: TierSpec = getattr(overrides, slot)
        merged = base.merged_with(override)

        explicit = "duration" in override.model_fields_set
        if stamp is not None and not merged.is_empty and not explicit:
            merged = merged.model_copy(update={"duration": stamp})

        forced_from = glitch_color if effect is EffectKind.FLICKER and slot == "chars" else None
        tiers[slot] = _recolor(merged, color, forced_from)

    resolved = ResolvedConfig(
        preset_id=preset.preset_id if preset is not None else None,
        effect=effect,
        effective_duration=stamp,
        color=color,
        glitch_color=glitch_color,
        **tiers,
    )
    logger.debug(
        "Resolved preset=%s tiers=%s duration=%s",
        resolved.preset_id,
        [tier.value for tier in resolved.requested_tiers],
        stamp,
    )
    return resolved


__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_GLITCH_COLOR",
    "effective_duration",
    "resolve_config",
]
