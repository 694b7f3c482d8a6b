"""Effect adapter protocol and build context.

Effect adapters replace the generic tween path for a tier when a resolved
config asks for a bespoke multi-stage effect (slot-machine reel, glitch
flicker). The TimelineBuilder dispatches to them before compiling the
remaining tiers generically.
"""

from __future__ import annotations

import random
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from revelo.core.text.models import ResolvedConfig, Tier
from revelo.core.text.segmenter import TargetHierarchy
from revelo.core.timeline.engine import Timeline, TweenEngine


class DisplacementFilterProxy:
    """Stand-in for a displacement/turbulence filter pair.

    Tweens write ``scale`` and ``base_frequency`` into ``style`` just as
    they write properties of text targets.
    """

    def __init__(self, scale: float = 0.0, base_frequency: str = "0.01 0.01") -> None:
        self.style: dict[str, Any] = {"scale": scale, "base_frequency": base_frequency}

    def __repr__(self) -> str:
        return f"DisplacementFilterProxy({self.style!r})"


class EffectContext(BaseModel):
    """Instance parameters available to effect adapters.

    Attributes:
        color: Resolved foreground color.
        glitch_color: Alternate flicker color.
        letters_only_reel: Restrict reel glyphs to letters.
        reel_length: Number of cells in a reel strip.
        flicker_duration: Length of the flicker loop in seconds.
        flicker_speed: Flicker steps per second.
        flicker_displacement: Peak displacement-filter scale.
        filter_proxy: Displacement filter to co-tween, if one is attached.
        rng: Random source for glyph and flicker picks.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    color: str = Field(default="#EEEEEE", description="Foreground color")
    glitch_color: str = Field(default="#333333", description="Flicker alternate color")
    letters_only_reel: bool = Field(default=False, description="Letters-only reel glyphs")
    reel_length: int = Field(default=30, ge=2, description="Cells per reel strip")
    flicker_duration: float = Field(default=1.0, ge=0.0, description="Flicker loop seconds")
    flicker_speed: float = Field(default=5.0, gt=0.0, description="Flicker steps per second")
    flicker_displacement: float = Field(default=15.0, ge=0.0, description="Peak displacement")
    filter_proxy: DisplacementFilterProxy | None = None
    rng: random.Random = Field(default_factory=random.Random)


@runtime_checkable
class EffectAdapter(Protocol):
    """Protocol for bespoke effect builders.

    Each adapter owns exactly one tier of the in-timeline when it matches.
    """

    @property
    def effect_type(self) -> str:
        """Registry key of the effect."""
        ...

    @property
    def tier(self) -> Tier:
        """Tier the effect takes over."""
        ...

    def matches(self, resolved: ResolvedConfig) -> bool:
        """Whether the effect applies to this resolved config."""
        ...

    def build(
        self,
        engine: TweenEngine,
        timeline: Timeline,
        resolved: ResolvedConfig,
        hierarchy: TargetHierarchy,
        ctx: EffectContext,
    ) -> None:
        """Add the effect's tweens to the in-timeline.

        Args:
            engine: Tween engine for nested timelines.
            timeline: In-timeline under construction.
            resolved: Resolved config.
            hierarchy: Segmented targets.
            ctx: Instance effect parameters.
        """
        ...


__all__ = [
    "DisplacementFilterProxy",
    "EffectAdapter",
    "EffectContext",
]
