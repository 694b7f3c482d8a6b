"""Tests for stagger normalization and offset distribution."""

from __future__ import annotations

import random

import pytest

from revelo.core.curves.registry import EaseRegistry
from revelo.core.errors import UnknownEaseError
from revelo.core.text.models import Origin, StaggerSpec
from revelo.core.timeline.stagger import normalize_stagger, stagger_offsets


class TestNormalizeStagger:
    """Tests for normalize_stagger."""

    def test_scalar_becomes_amount(self) -> None:
        """A bare number is a total spread from the start."""
        assert normalize_stagger(0.03) == StaggerSpec(amount=0.03, from_=Origin.START)

    def test_scalar_uses_tier_origin(self) -> None:
        """The tier's origin keyword applies to a bare number."""
        assert normalize_stagger(0.8, Origin.CENTER).from_ is Origin.CENTER

    def test_structured_passes_through(self) -> None:
        """A structured stagger is returned as the same object."""
        spec = StaggerSpec(each=0.15, from_=Origin.RANDOM)
        assert normalize_stagger(spec, Origin.END) is spec

    def test_none_means_no_spread(self) -> None:
        """No stagger gives a zero amount."""
        assert normalize_stagger(None).amount == 0.0


class TestStaggerOffsets:
    """Tests for stagger_offsets."""

    def test_amount_from_start(self) -> None:
        """amount spreads the whole group across that many seconds."""
        offsets = stagger_offsets(StaggerSpec(amount=0.3), 4)
        assert offsets == pytest.approx([0.0, 0.1, 0.2, 0.3])

    def test_each_from_start(self) -> None:
        """each spaces neighbours by a fixed delay."""
        offsets = stagger_offsets(StaggerSpec(each=0.15), 4)
        assert offsets == pytest.approx([0.0, 0.15, 0.3, 0.45])

    def test_from_end(self) -> None:
        """The last target starts first."""
        offsets = stagger_offsets(StaggerSpec(amount=1, from_=Origin.END), 3)
        assert offsets == pytest.approx([1.0, 0.5, 0.0])

    def test_from_center(self) -> None:
        """Distances grow outwards from the middle target."""
        offsets = stagger_offsets(StaggerSpec(each=0.1, from_=Origin.CENTER), 5)
        assert offsets == pytest.approx([0.2, 0.1, 0.0, 0.1, 0.2])

    def test_from_edges(self) -> None:
        """Both ends start first; the middle starts last."""
        offsets = stagger_offsets(StaggerSpec(amount=1, from_=Origin.EDGES), 5)
        assert offsets == pytest.approx([0.0, 0.5, 1.0, 0.5, 0.0])

    def test_from_index(self) -> None:
        """An integer origin measures distance from that target."""
        offsets = stagger_offsets(StaggerSpec(each=1, from_=1), 4)
        assert offsets == pytest.approx([1.0, 0.0, 1.0, 2.0])

    def test_random_is_a_permutation(self) -> None:
        """Random order uses the same offsets, shuffled."""
        offsets = stagger_offsets(
            StaggerSpec(each=0.1, from_=Origin.RANDOM), 6, rng=random.Random(3)
        )
        assert sorted(offsets) == pytest.approx([0.0, 0.1, 0.2, 0.3, 0.4, 0.5])

    def test_stagger_ease_remaps_distribution(self, eases: EaseRegistry) -> None:
        """The stagger ease bends the offsets."""
        offsets = stagger_offsets(StaggerSpec(each=1, ease="power2.in"), 3, eases)
        assert offsets == pytest.approx([0.0, 0.25, 2.0])

    def test_unknown_stagger_ease_raises(self, eases: EaseRegistry) -> None:
        """A bad stagger ease surfaces as UnknownEaseError."""
        with pytest.raises(UnknownEaseError):
            stagger_offsets(StaggerSpec(each=1, ease="wobble"), 3, eases)

    @pytest.mark.parametrize(("count", "expected"), [(0, []), (1, [0.0])])
    def test_degenerate_counts(self, count: int, expected: list[float]) -> None:
        """No targets or a single target never spread."""
        assert stagger_offsets(StaggerSpec(each=0.5), count) == expected

    def test_neither_each_nor_amount(self) -> None:
        """A descriptor without a spread gives zero offsets."""
        assert stagger_offsets(StaggerSpec(), 3) == [0.0, 0.0, 0.0]
