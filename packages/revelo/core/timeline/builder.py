"""Timeline assembly.

Builds the paused in-timeline (and the optional out-timeline) of one
animation instance from its resolved config and segmented targets. Effect
adapters take over their tier first; every other non-empty tier gets one
tween at position 0 so all tiers run concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from revelo.core.effects.handlers import load_builtin_adapters
from revelo.core.effects.protocol import EffectContext
from revelo.core.effects.registry import AdapterRegistry
from revelo.core.text.models import ResolvedConfig, Tier, TierSpec, slot_name
from revelo.core.text.segmenter import TargetHierarchy
from revelo.core.text.values import compile_values
from revelo.core.timeline.engine import Timeline, TweenEngine
from revelo.core.timeline.stagger import normalize_stagger

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 1.0
DEFAULT_EASE = "expo.out"


@dataclass
class BuiltTimelines:
    """Timelines owned by one animation instance.

    Attributes:
        in_timeline: Entrance timeline (always present, possibly empty).
        out_timeline: Exit timeline, only when an out tier is configured.
        effects: Effect types that took over a tier.
    """

    in_timeline: Timeline
    out_timeline: Timeline | None = None
    effects: tuple[str, ...] = ()

    @property
    def has_in_animation(self) -> bool:
        return bool(self.in_timeline.children)

    def kill(self) -> None:
        self.in_timeline.kill()
        if self.out_timeline is not None:
            self.out_timeline.kill()


class TimelineBuilder:
    """Builds in/out timelines for resolved configs.

    Args:
        engine: Tween engine creating the timelines.
        adapters: Effect adapters (built-ins when omitted).

    Example:
        >>> builder = TimelineBuilder(engine)
        >>> built = builder.build(resolved, hierarchy)
        >>> built.in_timeline.restart()
    """

    def __init__(self, engine: TweenEngine, adapters: AdapterRegistry | None = None) -> None:
        self.engine = engine
        self.adapters = adapters if adapters is not None else load_builtin_adapters()

    def build(
        self,
        resolved: ResolvedConfig,
        hierarchy: TargetHierarchy,
        ctx: EffectContext | None = None,
    ) -> BuiltTimelines:
        """Build paused timelines.

        Args:
            resolved: Resolved config of the instance.
            hierarchy: Segmented targets.
            ctx: Effect parameters (defaults derived from the config colors).

        Returns:
            BuiltTimelines with the in-timeline rendered at its start.
        """
        ctx = ctx or EffectContext(color=resolved.color, glitch_color=resolved.glitch_color)
        in_timeline = self.engine.timeline(paused=True)

        handled: set[Tier] = set()
        effects: list[str] = []
        for adapter in self.adapters.matching(resolved):
            if not hierarchy.targets_for(adapter.tier):
                continue
            try:
                adapter.build(self.engine, in_timeline, resolved, hierarchy, ctx)
            except Exception as e:
                logger.warning("Effect '%s' dropped: %s", adapter.effect_type, e)
            else:
                effects.append(adapter.effect_type)
            handled.add(adapter.tier)

        for tier in Tier:
            if tier in handled:
                continue
            self._add_tier(in_timeline, tier, resolved.spec_for(tier), hierarchy, out=False)

        out_timeline: Timeline | None = None
        if resolved.has_out_animation:
            out_timeline = self.engine.timeline(paused=True)
            for tier in Tier:
                self._add_tier(
                    out_timeline, tier, resolved.spec_for(tier, out=True), hierarchy, out=True
                )

        # Entrance start values apply before playback starts
        in_timeline.seek(0.0)
        logger.debug(
            "Built timelines: in=%.2fs out=%s effects=%s",
            in_timeline.duration,
            f"{out_timeline.duration:.2f}s" if out_timeline is not None else None,
            effects,
        )
        return BuiltTimelines(in_timeline, out_timeline, tuple(effects))

    def _add_tier(
        self,
        timeline: Timeline,
        tier: Tier,
        spec: TierSpec,
        hierarchy: TargetHierarchy,
        *,
        out: bool,
    ) -> None:
        targets = hierarchy.targets_for(tier)
        if spec.is_empty or not targets:
            return

        to_vars: dict[str, Any] = compile_values(spec, "to")
        options: dict[str, Any] = {
            "duration": spec.duration if spec.duration is not None else DEFAULT_DURATION,
            "ease": spec.ease or DEFAULT_EASE,
            "delay": spec.delay or 0.0,
            "position": 0,
        }
        try:
            options["stagger"] = normalize_stagger(spec.stagger, spec.origin)
            if out:
                if spec.transform_origin:
                    to_vars["transform_origin"] = spec.transform_origin
                timeline.to(targets, to_vars, **options)
            else:
                from_vars: dict[str, Any] = compile_values(spec, "from")
                if spec.transform_origin:
                    from_vars["transform_origin"] = spec.transform_origin
                    to_vars["transform_origin"] = spec.transform_origin
                timeline.from_to(targets, from_vars, to_vars, **options)
        except Exception as e:
            logger.warning("Tween for '%s' dropped: %s", slot_name(tier, out=out), e)


__all__ = [
    "BuiltTimelines",
    "DEFAULT_DURATION",
    "DEFAULT_EASE",
    "TimelineBuilder",
]
