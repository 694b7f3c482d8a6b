"""Shared pytest fixtures for revelo tests."""

from __future__ import annotations

from collections.abc import Callable
import random
from typing import Any

import numpy as np
import pytest

from revelo.core.animation import TextAnimation
from revelo.core.config.models import AnimationConfig
from revelo.core.curves.registry import EaseRegistry, build_default_registry
from revelo.core.text.catalog import PresetCatalog, load_builtin_presets
from revelo.core.text.models import ResolvedConfig
from revelo.core.text.resolver import resolve_config
from revelo.core.text.segmenter import TextSegmenter
from revelo.core.timeline.engine import TweenEngine
from revelo.core.viewport.observer import ScriptedViewportObserver

# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def eases() -> EaseRegistry:
    """Ease registry with the built-in custom eases and a seeded rng."""
    return build_default_registry(np.random.default_rng(7))


@pytest.fixture
def catalog() -> PresetCatalog:
    """Shared built-in preset catalog."""
    return load_builtin_presets()


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine(eases: EaseRegistry) -> TweenEngine:
    """Tween engine with a seeded random source."""
    return TweenEngine(eases=eases, rng=random.Random(7))


@pytest.fixture
def segmenter() -> TextSegmenter:
    """In-memory segmenter with a 24px line height."""
    return TextSegmenter(line_height=24.0)


@pytest.fixture
def observer() -> ScriptedViewportObserver:
    """Viewport observer driven by explicit emit_* calls."""
    return ScriptedViewportObserver()


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def resolve(catalog: PresetCatalog) -> Callable[..., ResolvedConfig]:
    """Factory resolving a preset against the built-in catalog."""

    def _resolve(preset_id: str | None = None, **kwargs: Any) -> ResolvedConfig:
        return resolve_config(catalog, preset_id, **kwargs)

    return _resolve


@pytest.fixture
def make_animation(
    engine: TweenEngine,
    segmenter: TextSegmenter,
    observer: ScriptedViewportObserver,
) -> Callable[..., TextAnimation]:
    """Factory creating a TextAnimation from config keys (camelCase accepted)."""

    def _make(ready: bool = True, **config: Any) -> TextAnimation:
        config.setdefault("text", "Hello world")
        return TextAnimation(
            AnimationConfig.model_validate(config),
            engine=engine,
            segmenter=segmenter,
            observer=observer,
            rng=random.Random(11),
            ready=ready,
        )

    return _make


@pytest.fixture
def advance(engine: TweenEngine) -> Callable[..., None]:
    """Advance the engine by a number of seconds in 60 fps frame steps."""

    def _advance(seconds: float, fps: int = 60) -> None:
        for _ in range(round(seconds * fps)):
            engine.tick(1 / fps)

    return _advance
