"""Configuration models.

AnimationConfig is the declarative input of one animation instance. It
accepts the camelCase keys of the component surface (``animationType``,
``charsOut``, ``fluidityInMotionDuration``) as well as snake_case names.
AppConfig holds process-level settings (logging, previews).
"""

from __future__ import annotations

import random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from revelo.core.effects.protocol import EffectContext
from revelo.core.text.models import AnimationType, TierBundle, TierSpec, ViewportAnchor

DURATION_SUFFIX = "Duration"
# staticShockDuration is the flicker loop length, so the animation duration
# of that preset uses its own key
PRESET_DURATION_ALIASES = {"staticShockDurationProp": "staticShock"}

# Fields whose change never requires a rebuild
MANUAL_INTENT_FIELDS = frozenset({"animate_in", "animate_out"})


class AnimationConfig(BaseModel):
    """Per-instance animation configuration.

    Attributes:
        text: Source string to segment and animate.
        preset: Catalog preset id.
        animation_type: trigger, scrub or manual playback.
        viewport: Anchor of the trigger/scrub band.
        replay: Re-fire on repeated entry/exit (trigger mode).
        animate_in: Manual intent to play the entrance.
        animate_out: Manual intent to play the exit (wins over animate_in).
        duration: Global duration override in seconds.
        preset_durations: Preset-specific duration overrides keyed by preset id,
            collected from ``<presetId>Duration`` keys.
        color: Foreground color.
        glitch_color: Alternate flicker color.
        letters_only_reel: Restrict reel glyphs to letters.
        debug_markers: Show band markers (passed through to observers).
        static_shock_duration: Flicker loop length in seconds.
        static_shock_speed: Flicker steps per second.
        static_shock_displacement: Peak displacement filter scale.
        reel_length: Cells per reel strip.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    text: str = ""
    preset: str | None = None
    animation_type: AnimationType = AnimationType.TRIGGER
    viewport: ViewportAnchor = ViewportAnchor.CENTER
    replay: bool = True
    animate_in: bool = False
    animate_out: bool = False

    duration: float | None = Field(default=None, ge=0.0)
    preset_durations: dict[str, float] = Field(default_factory=dict)

    lines: TierSpec = Field(default_factory=TierSpec)
    words: TierSpec = Field(default_factory=TierSpec)
    chars: TierSpec = Field(default_factory=TierSpec)
    lines_out: TierSpec = Field(default_factory=TierSpec)
    words_out: TierSpec = Field(default_factory=TierSpec)
    chars_out: TierSpec = Field(default_factory=TierSpec)

    color: str = "#EEEEEE"
    glitch_color: str = "#333333"
    letters_only_reel: bool = False
    debug_markers: bool = False

    static_shock_duration: float = Field(default=1.0, ge=0.0)
    static_shock_speed: float = Field(default=5.0, gt=0.0)
    static_shock_displacement: float = Field(default=15.0, ge=0.0)
    reel_length: int = Field(default=30, ge=2)

    @model_validator(mode="before")
    @classmethod
    def _collect_preset_durations(cls, data: Any) -> Any:
        """Move ``<presetId>Duration`` keys into ``preset_durations``."""
        if not isinstance(data, dict):
            return data

        known = set(cls.model_fields)
        known.update(field.alias for field in cls.model_fields.values() if field.alias)

        data = dict(data)
        durations: dict[str, Any] = {}
        for key in ("preset_durations", "presetDurations"):
            durations.update(data.pop(key, None) or {})

        for key in list(data):
            if key in known:
                continue
            if key in PRESET_DURATION_ALIASES:
                preset_id = PRESET_DURATION_ALIASES[key]
            elif key.endswith(DURATION_SUFFIX) and len(key) > len(DURATION_SUFFIX):
                preset_id = key[: -len(DURATION_SUFFIX)]
            else:
                continue
            value = data.pop(key)
            if value is not None:
                durations[preset_id] = value

        data["preset_durations"] = durations
        return data

    @property
    def overrides(self) -> TierBundle:
        """Per-tier overrides as a TierBundle."""
        return TierBundle(
            lines=self.lines,
            words=self.words,
            chars=self.chars,
            lines_out=self.lines_out,
            words_out=self.words_out,
            chars_out=self.chars_out,
        )

    def effect_context(self, rng: random.Random | None = None, **kwargs: Any) -> EffectContext:
        """Effect parameters derived from this config."""
        return EffectContext(
            color=self.color,
            glitch_color=self.glitch_color,
            letters_only_reel=self.letters_only_reel,
            reel_length=self.reel_length,
            flicker_duration=self.static_shock_duration,
            flicker_speed=self.static_shock_speed,
            flicker_displacement=self.static_shock_displacement,
            rng=rng or random.Random(),
            **kwargs,
        )

    def requires_rebuild(self, other: AnimationConfig) -> bool:
        """True if switching to ``other`` changes more than manual intents."""
        exclude = set(MANUAL_INTENT_FIELDS)
        return self.model_dump(exclude=exclude) != other.model_dump(exclude=exclude)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class PreviewConfig(BaseModel):
    """Settings of the offline preview renderer."""

    fps: int = Field(default=30, ge=1, le=240)
    line_height: float = Field(default=24.0, ge=0.0)
    seed: int | None = Field(default=None, description="Random seed for reproducible previews")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)


__all__ = [
    "AnimationConfig",
    "AppConfig",
    "LoggingConfig",
    "MANUAL_INTENT_FIELDS",
    "PreviewConfig",
]
