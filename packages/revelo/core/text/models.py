"""Text animation models.

This module defines the declarative vocabulary of the engine:
- Tier / Origin / EffectKind enums
- PropertyTween: a ``{from, to}`` pair for one animated property
- StaggerSpec: structured stagger descriptor
- TierSpec: the full animation of one granularity tier
- TierBundle, PresetDefinition, ResolvedConfig: six-tier containers

Input accepts both the camelCase keys of the original component surface
(``scaleX``, ``textShadow``, ``transformOrigin``) and snake_case field names.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# A zero-argument callable re-evaluated for every target, e.g. a random range.
ValueProducer = Callable[[], float]
PropertyValue = float | str | ValueProducer


class Tier(str, Enum):
    """Text granularity tiers, outermost first."""

    LINES = "lines"
    WORDS = "words"
    CHARS = "chars"


class Origin(str, Enum):
    """Stagger origin keywords."""

    START = "start"
    CENTER = "center"
    EDGES = "edges"
    RANDOM = "random"
    END = "end"


class EffectKind(str, Enum):
    """Bespoke multi-stage effects handled by effect adapters."""

    REEL = "reel"
    FLICKER = "flicker"


class AnimationType(str, Enum):
    """Playback modes of the viewport driver."""

    TRIGGER = "trigger"
    SCRUB = "scrub"
    MANUAL = "manual"


class ViewportAnchor(str, Enum):
    """Named viewport anchors for trigger and scrub bands."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class PropertyTween(BaseModel):
    """Start and end value of one animated property.

    Attributes:
        from_: Start value; None means "current rendered value".
        to: End value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    from_: PropertyValue | None = Field(default=None, alias="from")
    to: PropertyValue

    def side(self, name: str) -> PropertyValue | None:
        """Return the ``"from"`` or ``"to"`` value."""
        if name == "from":
            return self.from_
        if name == "to":
            return self.to
        raise ValueError(f"Unknown property side: {name!r}")


class StaggerSpec(BaseModel):
    """Structured stagger descriptor.

    Either ``each`` (fixed delay between consecutive targets) or ``amount``
    (total spread across all targets) distributes start offsets, measured
    from ``from_``. ``ease`` remaps the distribution.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    each: float | None = Field(default=None, ge=0.0)
    amount: float | None = Field(default=None, ge=0.0)
    from_: Origin | int = Field(default=Origin.START, alias="from")
    ease: str | None = None


# Property fields of TierSpec that hold PropertyTween values, in render order
ANIMATED_PROPERTIES: tuple[str, ...] = (
    "color",
    "text_stroke_color",
    "text_stroke_width",
    "text_shadow",
    "opacity",
    "x",
    "y",
    "scale",
    "scale_x",
    "scale_y",
    "filter",
    "rotate",
    "rotate_x",
    "letter_spacing",
    "skew_x",
    "skew_y",
)


class TierSpec(BaseModel):
    """Declarative animation for one granularity tier.

    Attributes:
        reel: Replace each character with a slot-machine reel.
        mask: Clip targets of this tier inside an overflow mask.
        transform_origin: CSS transform origin applied to both ends.
        duration: Tween duration in seconds.
        delay: Tween delay in seconds.
        ease: Ease expression resolved by the EaseRegistry.
        stagger: Total spread in seconds or a structured StaggerSpec.
        origin: Stagger origin used when ``stagger`` is a bare number.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    reel: bool = False
    mask: bool = False

    color: PropertyTween | None = None
    text_stroke_color: PropertyTween | None = None
    text_stroke_width: PropertyTween | None = None
    text_shadow: PropertyTween | None = None
    opacity: PropertyTween | None = None
    x: PropertyTween | None = None
    y: PropertyTween | None = None
    scale: PropertyTween | None = None
    scale_x: PropertyTween | None = None
    scale_y: PropertyTween | None = None
    filter: PropertyTween | None = None
    rotate: PropertyTween | None = None
    rotate_x: PropertyTween | None = None
    letter_spacing: PropertyTween | None = None
    skew_x: PropertyTween | None = None
    skew_y: PropertyTween | None = None

    transform_origin: str | None = None
    duration: float | None = Field(default=None, ge=0.0)
    delay: float | None = None
    ease: str | None = None
    stagger: float | StaggerSpec | None = None
    origin: Origin | None = None

    @property
    def is_empty(self) -> bool:
        """True when no key was specified for this tier."""
        return not self.model_fields_set

    def specified(self) -> dict[str, Any]:
        """Return the explicitly specified keys and their values."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def merged_with(self, override: TierSpec) -> TierSpec:
        """Shallow-merge another spec on top of this one.

        Every key specified in ``override`` replaces the same key here as a
        whole; ``from``/``to`` halves are never merged individually.
        """
        if override.is_empty:
            return self
        return self.model_copy(update=override.specified())


class TierBundle(BaseModel):
    """Six tier specs: three entrance tiers and their exit counterparts."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    lines: TierSpec = Field(default_factory=TierSpec)
    words: TierSpec = Field(default_factory=TierSpec)
    chars: TierSpec = Field(default_factory=TierSpec)
    lines_out: TierSpec = Field(default_factory=TierSpec)
    words_out: TierSpec = Field(default_factory=TierSpec)
    chars_out: TierSpec = Field(default_factory=TierSpec)

    def spec_for(self, tier: Tier, *, out: bool = False) -> TierSpec:
        """Return the entrance or exit spec of a tier."""
        return getattr(self, slot_name(tier, out=out))

    @property
    def has_in_animation(self) -> bool:
        return any(not self.spec_for(tier).is_empty for tier in Tier)

    @property
    def has_out_animation(self) -> bool:
        return any(not self.spec_for(tier, out=True).is_empty for tier in Tier)


def slot_name(tier: Tier, *, out: bool = False) -> str:
    """Name of the bundle field holding a tier's spec (``chars_out`` ...)."""
    return f"{tier.value}_out" if out else tier.value


TIER_SLOTS: tuple[str, ...] = tuple(
    slot_name(tier, out=out) for out in (False, True) for tier in Tier
)


class PresetDefinition(TierBundle):
    """Immutable named preset.

    Attributes:
        preset_id: Catalog key.
        description: Short human-readable description.
        effect: Optional bespoke effect applied to the chars tier.
    """

    preset_id: str = Field(min_length=1)
    description: str = ""
    effect: EffectKind | None = None


class ResolvedConfig(TierBundle):
    """Concrete per-instance animation spec produced by the resolver.

    Attributes:
        preset_id: Preset the config was resolved from (None if unknown/absent).
        effect: Bespoke effect of the preset, if any.
        effective_duration: Duration stamped onto non-empty tiers, if any.
        color: Resolved foreground color.
        glitch_color: Alternate color used by the flicker effect.
    """

    preset_id: str | None = None
    effect: EffectKind | None = None
    effective_duration: float | None = None
    color: str = "#EEEEEE"
    glitch_color: str = "#333333"

    @property
    def requested_tiers(self) -> list[Tier]:
        """Tiers that need segmentation (entrance or exit spec present)."""
        return [
            tier
            for tier in Tier
            if not self.spec_for(tier).is_empty or not self.spec_for(tier, out=True).is_empty
        ]

    @property
    def mask_tier(self) -> Tier | None:
        """Outermost entrance tier that asks for an overflow mask."""
        for tier in Tier:
            if self.spec_for(tier).mask:
                return tier
        return None


__all__ = [
    "ANIMATED_PROPERTIES",
    "AnimationType",
    "EffectKind",
    "Origin",
    "PresetDefinition",
    "PropertyTween",
    "PropertyValue",
    "ResolvedConfig",
    "StaggerSpec",
    "TIER_SLOTS",
    "Tier",
    "TierBundle",
    "TierSpec",
    "ValueProducer",
    "ViewportAnchor",
    "slot_name",
]
