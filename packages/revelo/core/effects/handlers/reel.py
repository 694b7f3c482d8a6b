"""Slot-machine reel effect.

Every character becomes a vertical strip of glyph cells ending in the real
glyph. The strip scrolls up until the last cell is visible inside a clip of
one cell height.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
import string
from typing import Any

from revelo.core.effects.protocol import EffectContext
from revelo.core.text.models import ResolvedConfig, Tier
from revelo.core.text.segmenter import TargetHierarchy, TextTarget
from revelo.core.text.values import compile_values
from revelo.core.timeline.engine import Timeline, TweenEngine
from revelo.core.timeline.stagger import normalize_stagger

logger = logging.getLogger(__name__)

REEL_LETTERS = string.ascii_letters
REEL_GLYPHS = REEL_LETTERS + "0123456789!@#$%^&*()_+-=[]{}|;:<>?,./"


@dataclass
class ReelStrip:
    """Stack of glyph cells mounted inside a character target.

    Attributes:
        cells: Glyphs top to bottom; the last one is the original glyph.
        cell_height: Height of every cell (the measured character height).
        style: Rendered properties, ``y`` in pixels.
    """

    cells: list[str]
    cell_height: float
    style: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        glyph: str,
        cell_height: float,
        length: int = 30,
        letters_only: bool = False,
        rng: random.Random | None = None,
    ) -> ReelStrip:
        """Build a strip of ``length`` cells ending in ``glyph``."""
        rng = rng or random.Random()
        alphabet = REEL_LETTERS if letters_only else REEL_GLYPHS
        cells = [rng.choice(alphabet) for _ in range(length - 1)]
        cells.append(glyph)
        return cls(cells=cells, cell_height=cell_height, style={"y": 0.0})

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def final_glyph(self) -> str:
        return self.cells[-1]

    @property
    def travel(self) -> float:
        """Vertical end offset that reveals the final cell."""
        return -self.cell_height * (self.length - 1)


def _travel(index: int, strip: ReelStrip, strips: Any) -> float:
    return strip.travel


class ReelAdapter:
    """Builds reel strips for the chars tier when ``chars.reel`` is set."""

    @property
    def effect_type(self) -> str:
        return "reel"

    @property
    def tier(self) -> Tier:
        return Tier.CHARS

    def matches(self, resolved: ResolvedConfig) -> bool:
        return resolved.chars.reel

    def mount(self, targets: list[TextTarget], ctx: EffectContext) -> list[tuple[int, ReelStrip]]:
        """Mount a strip into every measurable, non-blank character.

        Returns:
            ``(index, strip)`` pairs; skipped characters stay static.
        """
        mounted: list[tuple[int, ReelStrip]] = []
        for i, target in enumerate(targets):
            height = target.height
            if height <= 0 or not target.text.strip():
                logger.debug("Reel skipped for %r (height=%s)", target, height)
                continue
            strip = ReelStrip.build(
                target.text,
                height,
                length=ctx.reel_length,
                letters_only=ctx.letters_only_reel,
                rng=ctx.rng,
            )
            target.clip(height)
            target.mount(strip)
            mounted.append((i, strip))
        return mounted

    def build(
        self,
        engine: TweenEngine,
        timeline: Timeline,
        resolved: ResolvedConfig,
        hierarchy: TargetHierarchy,
        ctx: EffectContext,
    ) -> None:
        spec = resolved.chars
        mounted = self.mount(hierarchy.chars, ctx)
        if not mounted:
            return

        duration = spec.duration if spec.duration is not None else 1.0
        ease = spec.ease or "expo.out"
        delay = spec.delay or 0.0
        from_vars = {"y": 0.0, **compile_values(spec, "from")}
        to_vars = {"y": _travel, **compile_values(spec, "to")}
        stagger = normalize_stagger(spec.stagger, spec.origin)

        if stagger.each is not None:
            for i, strip in mounted:
                timeline.from_to(
                    [strip],
                    from_vars,
                    to_vars,
                    duration=duration,
                    ease=ease,
                    delay=delay + stagger.each * i,
                    position=0,
                )
        else:
            timeline.from_to(
                [strip for _, strip in mounted],
                from_vars,
                to_vars,
                duration=duration,
                ease=ease,
                delay=delay,
                stagger=stagger,
                position=0,
            )
        logger.debug("Built %d reel strips", len(mounted))


__all__ = [
    "REEL_GLYPHS",
    "REEL_LETTERS",
    "ReelAdapter",
    "ReelStrip",
]
