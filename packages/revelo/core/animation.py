"""Animation instance orchestration.

:class:`TextAnimation` composes the catalog, resolver, segmenter, timeline
builder and viewport driver for one piece of text and owns their lifecycle.
Nothing is shared between instances except the read-only preset catalog.
"""

from __future__ import annotations

from collections.abc import Callable
import itertools
import logging
import random

from revelo.core.config.models import AnimationConfig
from revelo.core.effects.protocol import DisplacementFilterProxy
from revelo.core.effects.registry import AdapterRegistry
from revelo.core.text.catalog import PresetCatalog, load_builtin_presets
from revelo.core.text.models import AnimationType, EffectKind, ResolvedConfig
from revelo.core.text.resolver import resolve_config
from revelo.core.text.segmenter import Segmenter, TargetHierarchy
from revelo.core.timeline.builder import BuiltTimelines, TimelineBuilder
from revelo.core.timeline.engine import TweenEngine
from revelo.core.utils.logging import get_logger
from revelo.core.viewport.driver import TriggerState, ViewportDriver
from revelo.core.viewport.observer import ViewportObserver

_instance_ids = itertools.count(1)


class TextAnimation:
    """One animated text instance.

    Args:
        config: Instance configuration.
        engine: Tween engine driving the timelines.
        segmenter: Segmenter owned by this instance.
        observer: Viewport observer (not needed in manual mode).
        catalog: Preset catalog (built-ins when omitted).
        adapters: Effect adapters (built-ins when omitted).
        filter_proxy: Displacement filter for flicker presets.
        rng: Random source for reels and flicker.
        ready: Whether the collaborators are available right away. When
            False, the text stays static and visible until :meth:`mark_ready`.

    Example:
        >>> animation = TextAnimation(config, engine=engine, segmenter=TextSegmenter(),
        ...                           observer=ScriptedViewportObserver())
        >>> animation.setup()
        >>> animation.observer.emit_enter()
        >>> engine.tick(1 / 60)
    """

    def __init__(
        self,
        config: AnimationConfig,
        *,
        engine: TweenEngine,
        segmenter: Segmenter,
        observer: ViewportObserver | None = None,
        catalog: PresetCatalog | None = None,
        adapters: AdapterRegistry | None = None,
        filter_proxy: DisplacementFilterProxy | None = None,
        rng: random.Random | None = None,
        ready: bool = True,
    ) -> None:
        self.config = config
        self.engine = engine
        self.segmenter = segmenter
        self.observer = observer
        self.catalog = catalog or load_builtin_presets()
        self.builder = TimelineBuilder(engine, adapters)
        self.filter_proxy = filter_proxy
        self.rng = rng or random.Random()

        self.ready = ready
        self.unavailable = False
        self.resolved: ResolvedConfig | None = None
        self.hierarchy: TargetHierarchy | None = None
        self.timelines: BuiltTimelines | None = None
        self.driver: ViewportDriver | None = None

        self.instance_id = next(_instance_ids)
        self.log = get_logger(__name__, instance_id=self.instance_id)

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    @property
    def is_static(self) -> bool:
        """True while the text is shown unanimated."""
        return self.timelines is None

    def mark_ready(self) -> None:
        """Collaborators became available; build the animation."""
        if self.unavailable or self.ready:
            return
        self.ready = True
        self.setup()

    def mark_unavailable(self) -> None:
        """Collaborators failed to load; stay static for good."""
        self.log.warning("Animation collaborators unavailable, text stays static")
        self.unavailable = True
        self.teardown()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def setup(self) -> None:
        """Resolve, segment, build paused timelines, then arm the driver.

        Failures are logged and leave the text static; they never propagate.
        """
        if self.unavailable or not self.ready:
            self.log.debug("Setup deferred (ready=%s)", self.ready)
            return
        if self.timelines is not None:
            self.teardown()

        config = self.config
        try:
            resolved = resolve_config(
                self.catalog,
                config.preset,
                config.overrides,
                duration=config.duration,
                preset_durations=config.preset_durations,
                color=config.color,
                glitch_color=config.glitch_color,
            )
            self.resolved = resolved
            if not (resolved.has_in_animation or resolved.has_out_animation):
                self.log.debug("Nothing to animate for preset=%s", config.preset)
                return

            self.hierarchy = self.segmenter.segment(
                config.text, resolved.requested_tiers, resolved.mask_tier
            )
            if resolved.effect is EffectKind.FLICKER and self.filter_proxy is None:
                self.filter_proxy = DisplacementFilterProxy()
            ctx = config.effect_context(rng=self.rng, filter_proxy=self.filter_proxy)
            timelines = self.builder.build(resolved, self.hierarchy, ctx)
            self.timelines = timelines

            driver = ViewportDriver(
                self.engine,
                mode=config.animation_type,
                observer=self.observer,
                anchor=config.viewport,
                replay=config.replay,
            )
            if config.debug_markers and driver.band is not None:
                self.log.info("Band markers: start=%r end=%r", driver.band.start, driver.band.end)
            driver.arm(timelines)
            self.driver = driver
        except Exception:
            self.log.exception("Setup failed, text stays static")
            self.teardown()
            return

        if config.animation_type is AnimationType.MANUAL:
            driver.apply_manual(config.animate_in, config.animate_out)
        self.log.debug(
            "Set up preset=%s mode=%s effects=%s",
            resolved.preset_id,
            config.animation_type.value,
            timelines.effects,
        )

    def teardown(self) -> None:
        """Dispose observer, kill timelines and revert segmentation.

        Every step runs even when an earlier one raises.
        """
        driver, timelines = self.driver, self.timelines
        steps: list[tuple[str, Callable[[], None] | None]] = [
            ("dispose observer", driver.dispose if driver is not None else None),
            ("kill in-timeline", timelines.in_timeline.kill if timelines is not None else None),
            (
                "kill out-timeline",
                timelines.out_timeline.kill
                if timelines is not None and timelines.out_timeline is not None
                else None,
            ),
            ("revert segmentation", self.segmenter.revert),
        ]
        for label, step in steps:
            if step is None:
                continue
            try:
                step()
            except Exception:
                self.log.exception("Teardown step failed: %s", label)

        self.driver = None
        self.timelines = None
        self.hierarchy = None

    def update(self, config: AnimationConfig) -> None:
        """Apply a new configuration.

        Changes limited to the manual intents are applied to the running
        driver; anything else tears down and rebuilds.
        """
        previous, self.config = self.config, config
        if self.driver is not None and not previous.requires_rebuild(config):
            self.driver.apply_manual(config.animate_in, config.animate_out)
            return
        self.teardown()
        self.setup()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    @property
    def state(self) -> TriggerState:
        return self.driver.state if self.driver is not None else TriggerState.IDLE

    def replay(self) -> None:
        """Restart the entrance from the beginning with fresh random values."""
        if self.timelines is not None:
            self.timelines.in_timeline.restart()

    def animate_in(self) -> None:
        self.update(self.config.model_copy(update={"animate_in": True, "animate_out": False}))

    def animate_out(self) -> None:
        self.update(self.config.model_copy(update={"animate_in": False, "animate_out": True}))


__all__ = [
    "TextAnimation",
]
