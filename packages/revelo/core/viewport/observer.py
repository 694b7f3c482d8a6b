"""Viewport observers.

An observer watches one element against a :class:`ViewportBand` and reports
crossings through :class:`ViewportCallbacks`:

- ``on_enter``: band start crossed scrolling down
- ``on_leave``: band end crossed scrolling down
- ``on_enter_back``: band end crossed scrolling up
- ``on_leave_back``: band start crossed scrolling up
- ``on_progress``: position inside the band (0..1) changed

:class:`ScriptedViewportObserver` lets callers emit events directly;
:class:`ScrollViewportObserver` derives them from scroll geometry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Protocol

from revelo.core.viewport.bands import ViewportBand
from revelo.core.utils.math import clamp

logger = logging.getLogger(__name__)


@dataclass
class ViewportCallbacks:
    on_enter: Callable[[], None] | None = None
    on_leave: Callable[[], None] | None = None
    on_enter_back: Callable[[], None] | None = None
    on_leave_back: Callable[[], None] | None = None
    on_progress: Callable[[float], None] | None = None


class ViewportObserver(Protocol):
    """Capability interface for viewport observation."""

    def observe(self, band: ViewportBand, callbacks: ViewportCallbacks, once: bool = False) -> None:
        """Start observing.

        Args:
            band: Thresholds of the observed range.
            callbacks: Event callbacks.
            once: Dispose automatically after the band end is first reached.
        """
        ...

    def dispose(self) -> None:
        """Stop observing. Must be idempotent."""
        ...


class _BaseObserver:
    def __init__(self) -> None:
        self.band: ViewportBand | None = None
        self.callbacks: ViewportCallbacks | None = None
        self.once = False
        self.disposed = False

    @property
    def is_observing(self) -> bool:
        return self.callbacks is not None and not self.disposed

    def observe(self, band: ViewportBand, callbacks: ViewportCallbacks, once: bool = False) -> None:
        self.band = band
        self.callbacks = callbacks
        self.once = once
        self.disposed = False
        logger.debug("Observing band %s -> %s (once=%s)", band.start, band.end, once)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self.callbacks = None

    def _fire(self, name: str, *args: float) -> None:
        if not self.is_observing:
            return
        assert self.callbacks is not None
        callback = getattr(self.callbacks, name)
        if callback is not None:
            callback(*args)
        if self.once and name == "on_leave":
            self.dispose()


class ScriptedViewportObserver(_BaseObserver):
    """Observer driven by explicit ``emit_*`` calls (tests, previews)."""

    def emit_enter(self) -> None:
        self._fire("on_enter")

    def emit_leave(self) -> None:
        self._fire("on_leave")

    def emit_enter_back(self) -> None:
        self._fire("on_enter_back")

    def emit_leave_back(self) -> None:
        self._fire("on_leave_back")

    def emit_progress(self, progress: float) -> None:
        self._fire("on_progress", clamp(progress, 0.0, 1.0))


class ScrollViewportObserver(_BaseObserver):
    """Observer deriving events from element and viewport geometry.

    Args:
        element_top: Element top in document coordinates.
        element_height: Element height.
        viewport_height: Viewport height.

    Example:
        >>> observer = ScrollViewportObserver(element_top=1000, element_height=200,
        ...                                   viewport_height=800)
        >>> observer.observe(select_band(AnimationType.TRIGGER), callbacks)
        >>> observer.scroll_to(650)   # element top passes the viewport center
    """

    def __init__(self, element_top: float, element_height: float, viewport_height: float) -> None:
        super().__init__()
        self.element_top = element_top
        self.element_height = element_height
        self.viewport_height = viewport_height
        self.scroll = 0.0

    @property
    def range(self) -> tuple[float, float]:
        """Scroll positions of the band start and end."""
        if self.band is None:
            raise RuntimeError("Observer is not observing a band")
        geometry = (self.element_top, self.element_height, self.viewport_height)
        start = self.band.start_threshold.scroll_offset(*geometry)
        end = self.band.end_threshold.scroll_offset(*geometry)
        return start, max(start, end)

    def progress_at(self, scroll: float) -> float:
        start, end = self.range
        if end <= start:
            return 1.0 if scroll >= end else 0.0
        return clamp((scroll - start) / (end - start), 0.0, 1.0)

    def observe(self, band: ViewportBand, callbacks: ViewportCallbacks, once: bool = False) -> None:
        super().observe(band, callbacks, once)
        start, _ = self.range
        # Already scrolled past the start when observation begins
        if self.scroll > start:
            self._fire("on_enter")
            self._fire("on_progress", self.progress_at(self.scroll))

    def scroll_to(self, position: float) -> None:
        """Move the viewport and fire every crossing on the way."""
        previous, self.scroll = self.scroll, position
        if not self.is_observing:
            return
        start, end = self.range
        if position > previous:
            if previous <= start < position:
                self._fire("on_enter")
            if previous < end <= position:
                self._fire("on_leave")
        elif position < previous:
            if position < end <= previous:
                self._fire("on_enter_back")
            if position <= start < previous:
                self._fire("on_leave_back")
        if position != previous:
            self._fire("on_progress", self.progress_at(position))


__all__ = [
    "ScriptedViewportObserver",
    "ScrollViewportObserver",
    "ViewportCallbacks",
    "ViewportObserver",
]
