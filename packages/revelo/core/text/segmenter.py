"""Text segmentation.

The orchestrator only talks to a :class:`Segmenter`; the bundled
:class:`TextSegmenter` is an in-memory implementation that splits a string
into line, word and character targets with a fixed measured line height.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable

from revelo.core.text.models import Tier

logger = logging.getLogger(__name__)


@runtime_checkable
class TargetHandle(Protocol):
    """Opaque animatable element produced by a segmenter."""

    @property
    def text(self) -> str: ...

    @property
    def height(self) -> float:
        """Measured rendered height (0 when not laid out yet)."""
        ...

    style: dict[str, Any]


@dataclass
class TextTarget:
    """In-memory target for one line, word or character.

    Attributes:
        text: Text content of the target.
        tier: Granularity tier the target belongs to.
        index: Position within its tier.
        height: Measured height in pixels.
        masked: Clipped inside an overflow mask.
        style: Current rendered property values, written by the tween engine.
        content: Replacement content mounted by effects (e.g. a reel strip).
    """

    text: str
    tier: Tier
    index: int
    height: float = 0.0
    masked: bool = False
    style: dict[str, Any] = field(default_factory=dict)
    content: Any = None

    def mount(self, content: Any) -> None:
        """Replace the rendered content of this target."""
        self.content = content

    def clip(self, height: float) -> None:
        """Clip rendering to ``height`` with hidden overflow."""
        self.style["height"] = height
        self.style["overflow"] = "hidden"

    def __repr__(self) -> str:
        return f"TextTarget({self.tier.value}[{self.index}]={self.text!r})"


@dataclass
class TargetHierarchy:
    """Segmented targets; only requested tiers are populated."""

    lines: list[TextTarget] = field(default_factory=list)
    words: list[TextTarget] = field(default_factory=list)
    chars: list[TextTarget] = field(default_factory=list)

    def targets_for(self, tier: Tier) -> list[TextTarget]:
        return getattr(self, tier.value)

    @property
    def is_empty(self) -> bool:
        return not (self.lines or self.words or self.chars)


class Segmenter(Protocol):
    """Capability interface for turning text into addressable targets."""

    def segment(
        self,
        text: str,
        requested_tiers: Iterable[Tier],
        mask_tier: Tier | None = None,
    ) -> TargetHierarchy:
        """Split text into targets for the requested tiers."""
        ...

    def revert(self) -> None:
        """Restore unsegmented text. Must be idempotent."""
        ...


class TextSegmenter:
    """In-memory segmenter.

    Lines split on newlines, words on whitespace, characters inside words
    (whitespace is never a character target).

    Args:
        line_height: Height assigned to every target; 0 simulates text that
            is not laid out yet.

    Example:
        >>> seg = TextSegmenter(line_height=24)
        >>> hierarchy = seg.segment("Hi there", [Tier.CHARS])
        >>> [t.text for t in hierarchy.chars]
        ['H', 'i', 't', 'h', 'e', 'r', 'e']
    """

    def __init__(self, line_height: float = 24.0) -> None:
        self.line_height = line_height
        self._hierarchy: TargetHierarchy | None = None
        self.revert_count = 0

    @property
    def is_segmented(self) -> bool:
        return self._hierarchy is not None

    @property
    def hierarchy(self) -> TargetHierarchy | None:
        return self._hierarchy

    def segment(
        self,
        text: str,
        requested_tiers: Iterable[Tier],
        mask_tier: Tier | None = None,
    ) -> TargetHierarchy:
        if self._hierarchy is not None:
            self.revert()

        tiers = set(requested_tiers)
        lines = text.splitlines() or [text]
        words = [word for line in lines for word in line.split()]
        chars = [char for word in words for char in word]

        def build(tier: Tier, parts: Sequence[str]) -> list[TextTarget]:
            if tier not in tiers:
                return []
            return [
                TextTarget(
                    text=part,
                    tier=tier,
                    index=i,
                    height=self.line_height,
                    masked=tier is mask_tier,
                )
                for i, part in enumerate(parts)
            ]

        self._hierarchy = TargetHierarchy(
            lines=build(Tier.LINES, lines),
            words=build(Tier.WORDS, words),
            chars=build(Tier.CHARS, chars),
        )
        logger.debug(
            "Segmented %d lines, %d words, %d chars",
            len(self._hierarchy.lines),
            len(self._hierarchy.words),
            len(self._hierarchy.chars),
        )
        return self._hierarchy

    def revert(self) -> None:
        if self._hierarchy is None:
            return
        self._hierarchy = None
        self.revert_count += 1


__all__ = [
    "Segmenter",
    "TargetHandle",
    "TargetHierarchy",
    "TextSegmenter",
    "TextTarget",
]
