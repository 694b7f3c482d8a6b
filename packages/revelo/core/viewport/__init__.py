"""Viewport bands, observers and the playback state machine."""

from revelo.core.viewport.bands import ViewportBand, select_band
from revelo.core.viewport.driver import TriggerState, ViewportDriver
from revelo.core.viewport.observer import (
    ScriptedViewportObserver,
    ScrollViewportObserver,
    ViewportCallbacks,
    ViewportObserver,
)

__all__ = [
    "ScriptedViewportObserver",
    "ScrollViewportObserver",
    "TriggerState",
    "ViewportBand",
    "ViewportCallbacks",
    "ViewportDriver",
    "ViewportObserver",
    "select_band",
]
