"""Viewport-driven playback.

:class:`ViewportDriver` is the state machine connecting an instance's
timelines to viewport events (trigger and scrub modes) or to manual intents.

States::

    IDLE --arm--> ARMED --enter--> PLAYING_FORWARD --complete--> ARMED
                  ARMED --leave--> PLAYING_REVERSE --complete--> ARMED
                  ARMED --progress--> SCRUBBING
    any --dispose--> IDLE
"""

from __future__ import annotations

from enum import Enum
import logging

from revelo.core.text.models import AnimationType, ViewportAnchor
from revelo.core.timeline.builder import BuiltTimelines
from revelo.core.timeline.engine import Timeline, TweenEngine
from revelo.core.viewport.bands import ViewportBand, select_band
from revelo.core.viewport.observer import ViewportCallbacks, ViewportObserver

logger = logging.getLogger(__name__)

SCRUB_FOLLOW_DURATION = 1.0
SCRUB_FOLLOW_EASE = "expo.out"


class TriggerState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    PLAYING_FORWARD = "playing_forward"
    PLAYING_REVERSE = "playing_reverse"
    SCRUBBING = "scrubbing"


class ViewportDriver:
    """Arms, plays, reverses or scrubs an instance's timelines.

    Args:
        engine: Tween engine (used for the scrub follow).
        mode: Playback mode.
        observer: Viewport observer; unused in manual mode.
        anchor: Viewport anchor selecting the band.
        replay: Re-fire on repeated entry and exit (trigger mode).
    """

    def __init__(
        self,
        engine: TweenEngine,
        mode: AnimationType = AnimationType.TRIGGER,
        observer: ViewportObserver | None = None,
        anchor: ViewportAnchor = ViewportAnchor.CENTER,
        replay: bool = True,
    ) -> None:
        if mode is not AnimationType.MANUAL and observer is None:
            raise ValueError(f"Mode '{mode.value}' needs a viewport observer")
        self.engine = engine
        self.mode = mode
        self.observer = observer
        self.anchor = anchor
        self.replay = replay
        self.state = TriggerState.IDLE
        self._timelines: BuiltTimelines | None = None
        self._armed = False

    @property
    def band(self) -> ViewportBand | None:
        if self.mode is AnimationType.MANUAL:
            return None
        return select_band(self.mode, self.anchor)

    @property
    def in_timeline(self) -> Timeline | None:
        return self._timelines.in_timeline if self._timelines is not None else None

    @property
    def out_timeline(self) -> Timeline | None:
        return self._timelines.out_timeline if self._timelines is not None else None

    def arm(self, timelines: BuiltTimelines) -> None:
        """Attach fully built timelines and start observing.

        Args:
            timelines: Paused in/out timelines of the instance.
        """
        self._timelines = timelines
        timelines.in_timeline.on_complete(self._on_complete)
        if timelines.out_timeline is not None:
            timelines.out_timeline.on_complete(self._on_complete)

        self._armed = True
        self.state = TriggerState.ARMED
        if self.mode is AnimationType.MANUAL:
            logger.debug("Armed in manual mode")
            return

        assert self.observer is not None
        band = select_band(self.mode, self.anchor)
        callbacks = ViewportCallbacks(
            on_enter=self._on_enter,
            on_leave=self._on_leave,
            on_enter_back=self._on_enter_back,
            on_leave_back=self._on_leave_back,
            on_progress=self._on_progress,
        )
        once = self.mode is AnimationType.TRIGGER and not self.replay
        self.observer.observe(band, callbacks, once=once)
        logger.debug("Armed %s mode on band %s -> %s", self.mode.value, band.start, band.end)

    def _on_complete(self, timeline: Timeline) -> None:
        playing = (TriggerState.PLAYING_FORWARD, TriggerState.PLAYING_REVERSE)
        if self._armed and self.state in playing:
            self.state = TriggerState.ARMED

    def _on_enter(self) -> None:
        if self.mode is not AnimationType.TRIGGER or self.in_timeline is None:
            return
        self.in_timeline.restart()
        self.state = TriggerState.PLAYING_FORWARD

    def _on_leave(self) -> None:
        if self.mode is not AnimationType.TRIGGER or self.in_timeline is None:
            return
        if not self.replay:
            # One-shot: the observer disposes itself after this event
            self._armed = False
            self.state = TriggerState.IDLE
            return
        self._play_exit()

    def _on_enter_back(self) -> None:
        if self.mode is AnimationType.TRIGGER and self.replay and self.in_timeline is not None:
            self.in_timeline.restart()
            self.state = TriggerState.PLAYING_FORWARD

    def _on_leave_back(self) -> None:
        if self.mode is AnimationType.TRIGGER and self.replay and self.in_timeline is not None:
            self.in_timeline.reverse()
            self.state = TriggerState.PLAYING_REVERSE

    def _on_progress(self, progress: float) -> None:
        if self.mode is not AnimationType.SCRUB or self.in_timeline is None:
            return
        self.engine.follow_progress(
            self.in_timeline,
            progress,
            duration=SCRUB_FOLLOW_DURATION,
            ease=SCRUB_FOLLOW_EASE,
        )
        self.state = TriggerState.SCRUBBING

    def _play_exit(self) -> None:
        assert self._timelines is not None
        if self._timelines.out_timeline is not None:
            self._timelines.out_timeline.restart()
        else:
            self._timelines.in_timeline.reverse()
        self.state = TriggerState.PLAYING_REVERSE

    def apply_manual(self, animate_in: bool = False, animate_out: bool = False) -> None:
        """Apply manual intents; ``animate_out`` wins when both are set.

        Out: the in-timeline jumps to its end, then the out-timeline restarts
        (or, without one, the in-timeline reverses). In: the in-timeline
        restarts. Neither: nothing happens.
        """
        if self.mode is not AnimationType.MANUAL:
            logger.debug("Manual intents ignored in %s mode", self.mode.value)
            return
        if self._timelines is None or not self._armed:
            logger.debug("Manual intents ignored: driver not armed")
            return

        if animate_out:
            if self._timelines.out_timeline is None and not self._timelines.has_in_animation:
                return
            self._timelines.in_timeline.progress = 1.0
            self._play_exit()
        elif animate_in:
            self._timelines.in_timeline.restart()
            self.state = TriggerState.PLAYING_FORWARD

    def dispose(self) -> None:
        """Stop observing and return to IDLE. Idempotent."""
        self._armed = False
        if self.observer is not None:
            self.observer.dispose()
        self.state = TriggerState.IDLE


__all__ = [
    "SCRUB_FOLLOW_DURATION",
    "SCRUB_FOLLOW_EASE",
    "TriggerState",
    "ViewportDriver",
]
