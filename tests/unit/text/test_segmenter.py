"""Tests for the in-memory text segmenter."""

from __future__ import annotations

from revelo.core.text.models import Tier
from revelo.core.text.segmenter import TargetHandle, TextSegmenter, TextTarget


class TestTextSegmenter:
    """Tests for TextSegmenter."""

    def test_all_tiers(self) -> None:
        """Lines, words and characters are split; whitespace is never a target."""
        segmenter = TextSegmenter(line_height=30)
        hierarchy = segmenter.segment("Hello world\nagain", [Tier.LINES, Tier.WORDS, Tier.CHARS])

        assert [t.text for t in hierarchy.lines] == ["Hello world", "again"]
        assert [t.text for t in hierarchy.words] == ["Hello", "world", "again"]
        assert "".join(t.text for t in hierarchy.chars) == "Helloworldagain"
        assert [t.index for t in hierarchy.words] == [0, 1, 2]
        assert all(t.height == 30 for t in hierarchy.chars)

    def test_only_requested_tiers(self) -> None:
        """Tiers that were not requested stay empty."""
        hierarchy = TextSegmenter().segment("Hi there", [Tier.WORDS])
        assert [t.text for t in hierarchy.words] == ["Hi", "there"]
        assert hierarchy.lines == []
        assert hierarchy.chars == []
        assert hierarchy.targets_for(Tier.WORDS) is hierarchy.words

    def test_mask_tier(self) -> None:
        """Targets of the mask tier are clipped."""
        hierarchy = TextSegmenter().segment("a b", [Tier.WORDS, Tier.CHARS], Tier.WORDS)
        assert all(t.masked for t in hierarchy.words)
        assert not any(t.masked for t in hierarchy.chars)

    def test_no_tiers_is_empty(self) -> None:
        """Nothing requested gives an empty hierarchy."""
        assert TextSegmenter().segment("text", []).is_empty

    def test_revert_is_idempotent(self) -> None:
        """Reverting twice only reverts once."""
        segmenter = TextSegmenter()
        segmenter.segment("abc", [Tier.CHARS])
        assert segmenter.is_segmented

        segmenter.revert()
        segmenter.revert()
        assert not segmenter.is_segmented
        assert segmenter.hierarchy is None
        assert segmenter.revert_count == 1

    def test_segment_again_reverts_first(self) -> None:
        """Re-segmenting drops the previous split."""
        segmenter = TextSegmenter()
        first = segmenter.segment("abc", [Tier.CHARS])
        second = segmenter.segment("de", [Tier.CHARS])
        assert segmenter.revert_count == 1
        assert second is not first
        assert [t.text for t in second.chars] == ["d", "e"]


class TestTextTarget:
    """Tests for TextTarget."""

    def test_satisfies_handle_protocol(self) -> None:
        """TextTarget is a TargetHandle."""
        assert isinstance(TextTarget("a", Tier.CHARS, 0), TargetHandle)

    def test_clip_and_mount(self) -> None:
        """Clipping sets height and hidden overflow; mounting replaces content."""
        target = TextTarget("a", Tier.CHARS, 0, height=24)
        target.clip(24)
        target.mount("strip")
        assert target.style == {"height": 24, "overflow": "hidden"}
        assert target.content == "strip"
