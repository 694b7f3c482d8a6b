"""Tests for animation and application config models."""

from __future__ import annotations

import random

from pydantic import ValidationError
import pytest

from revelo.core.config.models import AnimationConfig, AppConfig
from revelo.core.effects.protocol import DisplacementFilterProxy
from revelo.core.text.models import AnimationType, ViewportAnchor


class TestAnimationConfig:
    """Tests for AnimationConfig validation."""

    def test_defaults(self) -> None:
        """Defaults match the component surface."""
        config = AnimationConfig()
        assert config.text == ""
        assert config.preset is None
        assert config.animation_type is AnimationType.TRIGGER
        assert config.viewport is ViewportAnchor.CENTER
        assert config.replay is True
        assert config.animate_in is False
        assert config.animate_out is False
        assert config.color == "#EEEEEE"
        assert config.glitch_color == "#333333"
        assert config.preset_durations == {}

    def test_camel_case_keys(self) -> None:
        """camelCase keys populate snake_case fields."""
        config = AnimationConfig.model_validate(
            {
                "text": "Hi",
                "animationType": "manual",
                "animateOut": True,
                "glitchColor": "#ff0000",
                "charsOut": {"opacity": {"to": 0}},
            }
        )
        assert config.animation_type is AnimationType.MANUAL
        assert config.animate_out is True
        assert config.glitch_color == "#ff0000"
        assert not config.chars_out.is_empty

    def test_snake_case_names(self) -> None:
        """Field names are accepted too."""
        config = AnimationConfig(animation_type=AnimationType.SCRUB, lines_out={"duration": 1})
        assert config.animation_type is AnimationType.SCRUB
        assert config.lines_out.duration == 1

    def test_preset_duration_keys_are_collected(self) -> None:
        """<presetId>Duration keys become preset_durations entries."""
        config = AnimationConfig.model_validate(
            {"fluidityInMotionDuration": 3, "grandPrizeDuration": 1.5, "duration": 2}
        )
        assert config.preset_durations == {"fluidityInMotion": 3, "grandPrize": 1.5}
        assert config.duration == 2

    def test_static_shock_duration_prop(self) -> None:
        """The flicker preset's own duration key maps to staticShock."""
        config = AnimationConfig.model_validate(
            {"staticShockDurationProp": 4, "staticShockDuration": 0.5}
        )
        assert config.preset_durations == {"staticShock": 4}
        assert config.static_shock_duration == 0.5

    def test_explicit_preset_durations_merge(self) -> None:
        """An explicit mapping merges with collected keys."""
        config = AnimationConfig.model_validate(
            {"presetDurations": {"a": 1}, "bDuration": 2, "cDuration": None}
        )
        assert config.preset_durations == {"a": 1, "b": 2}

    def test_unknown_keys_rejected(self) -> None:
        """Keys that are neither fields nor durations fail validation."""
        with pytest.raises(ValidationError):
            AnimationConfig.model_validate({"speed": 3})
        with pytest.raises(ValidationError):
            AnimationConfig.model_validate({"Duration": 3})

    def test_invalid_values_rejected(self) -> None:
        """Constraints are enforced."""
        with pytest.raises(ValidationError):
            AnimationConfig(duration=-1)
        with pytest.raises(ValidationError):
            AnimationConfig(reel_length=1)
        with pytest.raises(ValidationError):
            AnimationConfig.model_validate({"animationType": "hover"})

    def test_frozen(self) -> None:
        """Configs are immutable."""
        config = AnimationConfig()
        with pytest.raises(ValidationError):
            config.text = "changed"  # type: ignore[misc]

    def test_overrides_bundle(self) -> None:
        """Tier fields are exposed as a TierBundle."""
        config = AnimationConfig.model_validate({"words": {"delay": 0.2}})
        bundle = config.overrides
        assert bundle.words.delay == 0.2
        assert bundle.chars.is_empty

    def test_effect_context(self) -> None:
        """Effect parameters are derived from the config."""
        config = AnimationConfig.model_validate(
            {
                "color": "#123456",
                "lettersOnlyReel": True,
                "reelLength": 12,
                "staticShockDuration": 2,
                "staticShockSpeed": 8,
                "staticShockDisplacement": 30,
            }
        )
        proxy = DisplacementFilterProxy()
        rng = random.Random(1)
        ctx = config.effect_context(rng=rng, filter_proxy=proxy)
        assert ctx.color == "#123456"
        assert ctx.letters_only_reel is True
        assert ctx.reel_length == 12
        assert ctx.flicker_duration == 2
        assert ctx.flicker_speed == 8
        assert ctx.flicker_displacement == 30
        assert ctx.filter_proxy is proxy
        assert ctx.rng is rng

    def test_requires_rebuild(self) -> None:
        """Only manual intent changes avoid a rebuild."""
        base = AnimationConfig(text="Hi", preset="fluidityInMotion")
        assert not base.requires_rebuild(base.model_copy(update={"animate_in": True}))
        assert not base.requires_rebuild(base.model_copy(update={"animate_out": True}))
        assert base.requires_rebuild(base.model_copy(update={"text": "Hello"}))
        assert base.requires_rebuild(base.model_copy(update={"preset": "grandPrize"}))


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self) -> None:
        """Defaults cover logging and preview."""
        config = AppConfig()
        assert config.logging.level == "INFO"
        assert config.logging.structured is False
        assert config.preview.fps == 30
        assert config.preview.seed is None

    def test_extra_keys_ignored(self) -> None:
        """Unknown top-level sections are ignored."""
        config = AppConfig.model_validate({"logging": {"level": "DEBUG"}, "other": 1})
        assert config.logging.level == "DEBUG"

    def test_invalid_level(self) -> None:
        """Logging levels are restricted."""
        with pytest.raises(ValidationError):
            AppConfig.model_validate({"logging": {"level": "LOUD"}})
