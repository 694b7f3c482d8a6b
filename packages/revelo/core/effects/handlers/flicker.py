"""Glitch flicker effect.

Three stages on the chars tier:

1. distortion: the tier's ``from`` values tween to its ``to`` values, with the
   displacement filter (when attached) falling from full strength to zero;
2. loop: ``floor(flicker_duration * flicker_speed)`` steps of
   ``1 / flicker_speed`` seconds, each re-rolling small jitters, colors and
   shadows per character (skipped when there are no steps);
3. settle: every character returns to rest over 0.5s.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import math
import random

from revelo.core.effects.protocol import DisplacementFilterProxy, EffectContext
from revelo.core.effects.scatter import RandomChoice, RandomRange, scatter
from revelo.core.text.models import (
    EffectKind,
    Origin,
    ResolvedConfig,
    StaggerSpec,
    Tier,
)
from revelo.core.text.segmenter import TargetHierarchy
from revelo.core.text.values import PerTargetValue, compile_values, render_value
from revelo.core.timeline.engine import Timeline, TweenEngine
from revelo.core.timeline.stagger import normalize_stagger
from revelo.core.utils.math import format_number

logger = logging.getLogger(__name__)

LOOP_SHADOW = "1px 1px 0px #00e6e6, -1px -1px 0px #ff00ff"
CLEAR_SHADOW = "0px 0px 0px transparent"
LOOP_EASE = "rough({ strength: 20, points: 10, randomize: true })"
LOOP_JITTER_PX = 8
LOOP_OFFSET = 0.1
SETTLE_DURATION = 0.5
SETTLE_EASE = "power3.out"
FLICKER_STAGGER = StaggerSpec(each=0.02, from_=Origin.RANDOM)


class _Pixels:
    """Per-target jitter rendered in pixels rather than the tier unit."""

    def __init__(self, producer: Callable[[], float]) -> None:
        self._producer = producer

    def __call__(self, index: int, target: object, targets: object) -> str:
        return f"{format_number(self._producer())}px"


def flicker_steps(duration: float, speed: float) -> int:
    """Number of loop steps for an effect duration and speed."""
    if duration <= 0 or speed <= 0:
        return 0
    return math.floor(duration * speed)


class _BaseFrequency:
    """Random ``"0.0a 0.0b"`` turbulence frequency."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def __call__(self, index: int, target: object, targets: object) -> str:
        return f"0.0{self._rng.randint(1, 9)} 0.0{self._rng.randint(1, 9)}"


class FlickerAdapter:
    """Builds the distortion, loop and settle stages for flicker presets."""

    @property
    def effect_type(self) -> str:
        return "flicker"

    @property
    def tier(self) -> Tier:
        return Tier.CHARS

    def matches(self, resolved: ResolvedConfig) -> bool:
        return resolved.effect is EffectKind.FLICKER and not resolved.chars.is_empty

    def _loop_vars(self, ctx: EffectContext) -> dict[str, object]:
        rng = ctx.rng
        scale = PerTargetValue("scale", RandomRange(0.95, 1.05, rng=rng))
        return {
            "x": _Pixels(scatter(LOOP_JITTER_PX, rng=rng)),
            "y": _Pixels(scatter(LOOP_JITTER_PX, rng=rng)),
            "rotate": PerTargetValue("rotate", scatter(10, rng=rng)),
            "skew_x": PerTargetValue("skew_x", scatter(15, rng=rng)),
            "scale_x": scale,
            "scale_y": scale,
            "opacity": PerTargetValue("opacity", RandomRange(0.4, 1, rng=rng)),
            "color": PerTargetValue("color", RandomChoice([ctx.glitch_color, ctx.color], rng=rng)),
            "text_shadow": PerTargetValue(
                "text_shadow", RandomChoice([LOOP_SHADOW, CLEAR_SHADOW], rng=rng)
            ),
        }

    def build_loop(
        self,
        engine: TweenEngine,
        targets: list[object],
        ctx: EffectContext,
        proxy: DisplacementFilterProxy | None,
    ) -> Timeline | None:
        """Build the repeating jitter loop, or None when it has no steps."""
        steps = flicker_steps(ctx.flicker_duration, ctx.flicker_speed)
        if steps == 0:
            return None
        step_duration = 1 / ctx.flicker_speed

        loop = engine.timeline(repeat=steps - 1, repeat_refresh=True)
        loop.to(
            targets,
            self._loop_vars(ctx),
            duration=step_duration,
            ease=LOOP_EASE,
            stagger=FLICKER_STAGGER,
        )
        if proxy is not None:
            strength = RandomRange(0, ctx.flicker_displacement * 0.75, rng=ctx.rng)
            loop.to(
                [proxy],
                {"scale": PerTargetValue("scale", strength)},
                duration=step_duration,
                ease="steps(1)",
                position="<",
            )
            loop.to(
                [proxy],
                {"base_frequency": _BaseFrequency(ctx.rng)},
                duration=step_duration,
                ease="steps(1)",
                position="<",
            )
        return loop

    def build(
        self,
        engine: TweenEngine,
        timeline: Timeline,
        resolved: ResolvedConfig,
        hierarchy: TargetHierarchy,
        ctx: EffectContext,
    ) -> None:
        spec = resolved.chars
        targets = list(hierarchy.chars)
        if not targets:
            return
        proxy = ctx.filter_proxy
        duration = spec.duration if spec.duration is not None else 0.4
        ease = spec.ease or "none"

        timeline.from_to(
            targets,
            compile_values(spec, "from"),
            compile_values(spec, "to"),
            duration=duration,
            ease=ease,
            delay=spec.delay or 0.0,
            stagger=normalize_stagger(spec.stagger, spec.origin),
            position=0,
        )
        if proxy is not None:
            timeline.from_to(
                [proxy],
                {"scale": ctx.flicker_displacement},
                {"scale": 0},
                duration=duration,
                ease=ease,
                position="<",
            )

        loop = self.build_loop(engine, targets, ctx, proxy)
        if loop is not None:
            timeline.add(loop, f"-={LOOP_OFFSET}")

        settle = engine.timeline()
        settle.to(
            targets,
            {
                "x": "0px",
                "y": "0px",
                "rotate": render_value("rotate", 0),
                "skew_x": render_value("skew_x", 0),
                "scale_x": 1,
                "scale_y": 1,
                "opacity": 1,
                "color": ctx.color,
                "text_shadow": CLEAR_SHADOW,
            },
            duration=SETTLE_DURATION,
            ease=SETTLE_EASE,
            stagger=FLICKER_STAGGER,
        )
        if proxy is not None:
            settle.to(
                [proxy], {"scale": 0}, duration=SETTLE_DURATION, ease=SETTLE_EASE, position="<"
            )
        timeline.add(settle)
        logger.debug(
            "Built flicker for %d chars (%d loop steps)",
            len(targets),
            flicker_steps(ctx.flicker_duration, ctx.flicker_speed),
        )


__all__ = [
    "FlickerAdapter",
    "flicker_steps",
]
