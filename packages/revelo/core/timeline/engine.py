"""Tween engine.

A small cooperative tween engine: :class:`Tween` interpolates property
values on a group of targets, :class:`Timeline` sequences tweens and nested
timelines, and :class:`Ticker` advances root timelines by explicit ``dt``
steps (one call per animation frame).

Targets are any objects exposing a mutable ``style`` dict. Vars maps hold
rendered values or per-target callables ``(index, target, targets)``; the
callables are evaluated when a tween first renders and again after every
invalidation, so restarts re-roll random values.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import logging
import random
from typing import Any, Protocol

from revelo.core.curves.functions import EaseFunction, linear
from revelo.core.curves.registry import EaseRegistry, build_default_registry
from revelo.core.text.models import StaggerSpec
from revelo.core.timeline.interpolate import interpolate
from revelo.core.timeline.stagger import normalize_stagger, stagger_offsets
from revelo.core.utils.math import clamp

logger = logging.getLogger(__name__)

CompleteCallback = Callable[["Timeline"], None]
Position = float | str | None

# Values assumed for properties never rendered before a to-only tween
REST_VALUES: dict[str, Any] = {
    "opacity": 1,
    "x": "0%",
    "y": "0%",
    "scale_x": 1,
    "scale_y": 1,
    "rotate": "0deg",
    "rotate_x": "0deg",
    "skew_x": "0deg",
    "skew_y": "0deg",
    "filter": "blur(0px)",
    "letter_spacing": "0px",
}


class Animatable(Protocol):
    style: dict[str, Any]


class Playable(Protocol):
    """Anything the ticker can advance."""

    def advance(self, dt: float) -> None: ...


class PlaybackTimeline(Protocol):
    """Playback surface of a timeline, as used by the viewport driver."""

    @property
    def duration(self) -> float: ...

    @property
    def progress(self) -> float: ...

    @progress.setter
    def progress(self, value: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def restart(self) -> None: ...

    def reverse(self) -> None: ...

    def kill(self) -> None: ...

    def on_complete(self, callback: CompleteCallback) -> None: ...


def _resolve_vars(
    values: Mapping[str, Any],
    index: int,
    target: Any,
    targets: Sequence[Any],
) -> dict[str, Any]:
    # One producer shared by several keys (scale_x/scale_y) yields one value
    memo: dict[int, Any] = {}
    resolved: dict[str, Any] = {}
    for name, value in values.items():
        if callable(value):
            key = id(value)
            if key not in memo:
                memo[key] = value(index, target, targets)
            resolved[name] = memo[key]
        else:
            resolved[name] = value
    return resolved


class Tween:
    """Interpolation of property values on a group of targets.

    Args:
        targets: Objects with a ``style`` dict.
        to_vars: End values.
        from_vars: Start values; None captures the current rendered values.
        duration: Seconds per target.
        ease: Ease function.
        delay: Seconds before the first target starts.
        offsets: Per-target stagger offsets in seconds.
    """

    def __init__(
        self,
        targets: Sequence[Animatable],
        to_vars: Mapping[str, Any],
        from_vars: Mapping[str, Any] | None = None,
        duration: float = 1.0,
        ease: EaseFunction = linear,
        delay: float = 0.0,
        offsets: Sequence[float] | None = None,
    ) -> None:
        if duration < 0:
            raise ValueError("duration must be >= 0")
        self.targets = list(targets)
        self.to_vars = dict(to_vars)
        self.from_vars = dict(from_vars) if from_vars is not None else None
        self.duration = duration
        self.ease = ease
        self.delay = delay
        self.offsets = list(offsets) if offsets is not None else [0.0] * len(self.targets)
        if len(self.offsets) != len(self.targets):
            raise ValueError("offsets must match targets")
        self._starts: list[dict[str, Any]] | None = None
        self._ends: list[dict[str, Any]] = []

    @property
    def total_duration(self) -> float:
        spread = max(self.offsets) if self.offsets else 0.0
        return max(0.0, self.delay + spread + self.duration)

    @property
    def is_from_to(self) -> bool:
        return self.from_vars is not None

    def invalidate(self) -> None:
        """Drop resolved values; the next render re-evaluates producers."""
        self._starts = None
        self._ends = []

    def _initialize(self) -> None:
        starts: list[dict[str, Any]] = []
        ends: list[dict[str, Any]] = []
        for i, target in enumerate(self.targets):
            end = _resolve_vars(self.to_vars, i, target, self.targets)
            if self.from_vars is not None:
                start = _resolve_vars(self.from_vars, i, target, self.targets)
                for name in end:
                    start.setdefault(name, target.style.get(name, REST_VALUES.get(name)))
                for name in start:
                    end.setdefault(name, target.style.get(name, REST_VALUES.get(name)))
            else:
                start = {
                    name: target.style.get(name, REST_VALUES.get(name)) for name in end
                }
            starts.append(start)
            ends.append(end)
        self._starts, self._ends = starts, ends

    def render(self, time: float) -> None:
        """Render at a local time in ``[0, total_duration]``."""
        if self._starts is None:
            # To-only tweens capture current values when they actually begin
            if not self.is_from_to and time <= self.delay:
                return
            self._initialize()
        assert self._starts is not None

        for i, target in enumerate(self.targets):
            elapsed = time - self.delay - self.offsets[i]
            if self.duration == 0:
                progress = 1.0 if elapsed >= 0 else 0.0
            else:
                progress = clamp(elapsed / self.duration, 0.0, 1.0)
            eased = progress if progress in (0.0, 1.0) else self.ease(progress)
            start, end = self._starts[i], self._ends[i]
            for name, value in end.items():
                target.style[name] = interpolate(start.get(name), value, eased)


class Timeline:
    """Sequence of tweens and nested timelines with one playhead.

    Example:
        >>> engine = TweenEngine()
        >>> target = SimpleNamespace(style={})
        >>> tl = engine.timeline()
        >>> tl = tl.from_to([target], {"opacity": 0}, {"opacity": 1}, duration=1.0, ease="none")
        >>> tl.restart()
        >>> engine.tick(0.5)
        >>> target.style["opacity"]
        0.5
    """

    def __init__(
        self,
        engine: TweenEngine,
        paused: bool = True,
        repeat: int = 0,
        repeat_refresh: bool = False,
    ) -> None:
        if repeat < 0:
            raise ValueError("repeat must be >= 0")
        self._engine = engine
        self._children: list[tuple[float, Tween | Timeline]] = []
        self._last_start = 0.0
        self.repeat = repeat
        self.repeat_refresh = repeat_refresh
        self.paused = paused
        self.reversed = False
        self.killed = False
        self._time = 0.0
        self._inner_time = 0.0
        self._iteration = 0
        self._callbacks: list[CompleteCallback] = []

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    @property
    def end_time(self) -> float:
        return max((start + child.total_duration for start, child in self._children), default=0.0)

    def _position(self, position: Position) -> float:
        if position is None:
            return self.end_time
        if isinstance(position, (int, float)):
            return max(0.0, float(position))
        text = position.strip()
        if text == "<":
            return self._last_start
        if text.startswith("+="):
            return self.end_time + float(text[2:])
        if text.startswith("-="):
            return max(0.0, self.end_time - float(text[2:]))
        raise ValueError(f"Unsupported position: {position!r}")

    def add(self, child: Tween | Timeline, position: Position = None) -> Timeline:
        """Insert a tween or nested timeline.

        Args:
            child: Tween or timeline to insert.
            position: Absolute seconds, ``"<"`` (start of previous child),
                ``"+=s"``/``"-=s"`` relative to the current end, or None to
                append.
        """
        start = self._position(position)
        if isinstance(child, Timeline):
            self._engine.ticker.remove(child)
            child.paused = False
        self._children.append((start, child))
        self._children.sort(key=lambda item: item[0])
        self._last_start = start
        return self

    def _tween(
        self,
        targets: Sequence[Animatable],
        from_vars: Mapping[str, Any] | None,
        to_vars: Mapping[str, Any],
        duration: float,
        ease: str | EaseFunction,
        delay: float,
        stagger: float | StaggerSpec | None,
    ) -> Tween:
        ease_fn = self._engine.eases.resolve(ease) if isinstance(ease, str) else ease
        offsets = stagger_offsets(
            normalize_stagger(stagger),
            len(targets),
            self._engine.eases,
            self._engine.rng,
        )
        return Tween(
            targets,
            to_vars,
            from_vars=from_vars,
            duration=duration,
            ease=ease_fn,
            delay=delay,
            offsets=offsets,
        )

    def from_to(
        self,
        targets: Sequence[Animatable],
        from_vars: Mapping[str, Any],
        to_vars: Mapping[str, Any],
        duration: float = 1.0,
        ease: str | EaseFunction = "power1.out",
        delay: float = 0.0,
        stagger: float | StaggerSpec | None = None,
        position: Position = None,
    ) -> Timeline:
        """Add a tween with explicit start and end values.

        Raises:
            UnknownEaseError: If the ease or stagger ease cannot be resolved.
            ValueError: On negative duration or a malformed position.
        """
        tween = self._tween(targets, from_vars, to_vars, duration, ease, delay, stagger)
        return self.add(tween, position)

    def to(
        self,
        targets: Sequence[Animatable],
        to_vars: Mapping[str, Any],
        duration: float = 1.0,
        ease: str | EaseFunction = "power1.out",
        delay: float = 0.0,
        stagger: float | StaggerSpec | None = None,
        position: Position = None,
    ) -> Timeline:
        """Add a tween from the current rendered values to ``to_vars``."""
        tween = self._tween(targets, None, to_vars, duration, ease, delay, stagger)
        return self.add(tween, position)

    @property
    def children(self) -> list[Tween | Timeline]:
        return [child for _, child in self._children]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        """Duration of one iteration."""
        return self.end_time

    @property
    def total_duration(self) -> float:
        return self.duration * (self.repeat + 1)

    @property
    def time(self) -> float:
        return self._time

    def invalidate(self) -> None:
        """Invalidate every child so producers are re-evaluated."""
        for child in self.children:
            child.invalidate()

    def _render_iteration(self, time: float) -> None:
        previous = self._inner_time
        if time >= previous:
            for start, child in self._children:
                if time >= start:
                    child.render(min(time - start, child.total_duration))
        else:
            for start, child in reversed(self._children):
                if time >= start:
                    child.render(min(time - start, child.total_duration))
                elif previous > start:
                    child.render(0.0)
        self._inner_time = time

    def render(self, time: float) -> None:
        """Render at a local time in ``[0, total_duration]``."""
        iteration_length = self.duration
        if self.repeat == 0 or iteration_length <= 0:
            self._render_iteration(min(time, iteration_length))
            return

        iteration = min(int(time // iteration_length), self.repeat)
        inner = time - iteration * iteration_length
        if iteration != self._iteration:
            if iteration > self._iteration:
                self._render_iteration(iteration_length)
            else:
                self._render_iteration(0.0)
            self._inner_time = 0.0 if iteration > self._iteration else iteration_length
            if self.repeat_refresh:
                self.invalidate()
            self._iteration = iteration
        self._render_iteration(inner)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    @property
    def progress(self) -> float:
        total = self.total_duration
        return self._time / total if total > 0 else (1.0 if self._time > 0 else 0.0)

    @progress.setter
    def progress(self, value: float) -> None:
        self.seek(clamp(value, 0.0, 1.0) * self.total_duration)

    def seek(self, time: float) -> None:
        self._time = min(max(0.0, time), self.total_duration)
        self.render(self._time)

    @property
    def is_active(self) -> bool:
        return not self.paused and not self.killed

    def play(self) -> None:
        if self.killed:
            return
        self.reversed = False
        self.paused = False

    def pause(self) -> None:
        self.paused = True

    def reverse(self) -> None:
        if self.killed:
            return
        self.reversed = True
        self.paused = False

    def restart(self) -> None:
        """Rewind to 0, re-roll producer values and play forward."""
        if self.killed:
            return
        self.invalidate()
        self._iteration = 0
        self._inner_time = 0.0
        self.seek(0.0)
        self.play()

    def kill(self) -> None:
        """Stop playback for good and release callbacks."""
        self.killed = True
        self.paused = True
        self._callbacks.clear()
        self._engine.ticker.remove(self)
        self._engine.cancel_follow(self)

    def on_complete(self, callback: CompleteCallback) -> None:
        """Register a callback fired when playback reaches either end."""
        self._callbacks.append(callback)

    def advance(self, dt: float) -> None:
        if not self.is_active:
            return
        step = -dt if self.reversed else dt
        self.seek(self._time + step)
        finished = self._time <= 0.0 if self.reversed else self._time >= self.total_duration
        if finished:
            self.paused = True
            for callback in list(self._callbacks):
                callback(self)


class ProgressFollow:
    """Eased follow of a timeline's progress towards a target value."""

    def __init__(
        self,
        timeline: Timeline,
        progress: float,
        duration: float,
        ease: EaseFunction,
        on_done: Callable[[ProgressFollow], None] | None = None,
    ) -> None:
        self.timeline = timeline
        self.start = timeline.progress
        self.target = clamp(progress, 0.0, 1.0)
        self.duration = duration
        self.ease = ease
        self.elapsed = 0.0
        self.done = False
        self.on_done = on_done

    def advance(self, dt: float) -> None:
        if self.done or self.timeline.killed:
            self.done = True
            return
        self.elapsed += dt
        ratio = 1.0 if self.duration <= 0 else min(1.0, self.elapsed / self.duration)
        eased = ratio if ratio >= 1.0 else self.ease(ratio)
        self.timeline.progress = self.start + (self.target - self.start) * eased
        if ratio >= 1.0:
            self.done = True


class Ticker:
    """Advances registered animations by explicit frame steps."""

    def __init__(self) -> None:
        self._animations: list[Playable] = []
        self.time = 0.0

    def add(self, animation: Playable) -> None:
        if animation not in self._animations:
            self._animations.append(animation)

    def remove(self, animation: Playable) -> None:
        if animation in self._animations:
            self._animations.remove(animation)

    def tick(self, dt: float) -> None:
        """Advance every animation by ``dt`` seconds."""
        self.time += dt
        for animation in list(self._animations):
            animation.advance(dt)
            if isinstance(animation, ProgressFollow) and animation.done:
                self.remove(animation)
                if animation.on_done is not None:
                    animation.on_done(animation)

    def __len__(self) -> int:
        return len(self._animations)


class TweenEngine:
    """Factory for timelines sharing one ease registry and ticker.

    Args:
        eases: Ease registry (a default one is built when omitted).
        ticker: Frame ticker.
        rng: Random source for random stagger order.
    """

    def __init__(
        self,
        eases: EaseRegistry | None = None,
        ticker: Ticker | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.eases = eases or build_default_registry()
        self.ticker = ticker or Ticker()
        self.rng = rng or random.Random()
        self._follows: dict[int, ProgressFollow] = {}

    def timeline(
        self,
        paused: bool = True,
        repeat: int = 0,
        repeat_refresh: bool = False,
    ) -> Timeline:
        """Create a root timeline registered with the ticker."""
        timeline = Timeline(self, paused=paused, repeat=repeat, repeat_refresh=repeat_refresh)
        self.ticker.add(timeline)
        return timeline

    def follow_progress(
        self,
        timeline: Timeline,
        progress: float,
        duration: float = 1.0,
        ease: str = "expo.out",
    ) -> ProgressFollow:
        """Ease a timeline's progress towards ``progress``.

        A new follow overwrites any follow still running on the same timeline.
        """
        previous = self._follows.pop(id(timeline), None)
        if previous is not None:
            self.ticker.remove(previous)
        follow = ProgressFollow(
            timeline,
            progress,
            duration,
            self.eases.resolve(ease),
            on_done=self._forget_follow,
        )
        self._follows[id(timeline)] = follow
        self.ticker.add(follow)
        return follow

    def cancel_follow(self, timeline: Timeline) -> None:
        """Stop and forget the follow running on a timeline, if any."""
        follow = self._follows.pop(id(timeline), None)
        if follow is not None:
            follow.done = True
            self.ticker.remove(follow)

    def _forget_follow(self, follow: ProgressFollow) -> None:
        if self._follows.get(id(follow.timeline)) is follow:
            del self._follows[id(follow.timeline)]

    def tick(self, dt: float) -> None:
        self.ticker.tick(dt)


__all__ = [
    "Animatable",
    "PlaybackTimeline",
    "ProgressFollow",
    "REST_VALUES",
    "Ticker",
    "Timeline",
    "Tween",
    "TweenEngine",
]
