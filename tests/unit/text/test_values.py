"""Tests for value rendering and compilation."""

from __future__ import annotations

import random

import pytest

from revelo.core.effects.scatter import RandomRange
from revelo.core.text.models import TierSpec
from revelo.core.text.values import PerTargetValue, compile_values, render_value


class TestRenderValue:
    """Tests for per-property rendering."""

    @pytest.mark.parametrize(
        ("name", "raw", "expected"),
        [
            ("x", 120, "120%"),
            ("y", -2.5, "-2.5%"),
            ("rotate", -15, "-15deg"),
            ("rotate_x", -90, "-90deg"),
            ("skew_x", 30, "30deg"),
            ("skew_y", 10, "10deg"),
            ("filter", 5, "blur(5px)"),
            ("letter_spacing", 2, "2px"),
            ("scale_x", 1.5, 1.5),
            ("opacity", 0, 0),
            ("color", "#333", "#333"),
            ("text_shadow", "0px 0px 0px transparent", "0px 0px 0px transparent"),
        ],
    )
    def test_render(self, name: str, raw: object, expected: object) -> None:
        """Numbers get their property unit; other values pass through."""
        assert render_value(name, raw) == expected

    def test_strings_pass_through(self) -> None:
        """Pre-rendered strings are never re-rendered."""
        assert render_value("x", "50%") == "50%"
        assert render_value("filter", "blur(2px)") == "blur(2px)"


class TestCompileValues:
    """Tests for compile_values."""

    def test_compiles_each_side(self) -> None:
        """from and to maps are rendered independently."""
        spec = TierSpec.model_validate(
            {
                "opacity": {"from": 0, "to": 1},
                "y": {"from": 120, "to": 0},
                "filter": {"from": 5, "to": 0},
            }
        )
        assert compile_values(spec, "from") == {"opacity": 0, "y": "120%", "filter": "blur(5px)"}
        assert compile_values(spec, "to") == {"opacity": 1, "y": "0%", "filter": "blur(0px)"}

    def test_missing_side_dropped(self) -> None:
        """Properties without a value for the side are left out."""
        spec = TierSpec.model_validate({"opacity": {"to": 0}})
        assert compile_values(spec, "from") == {}
        assert compile_values(spec, "to") == {"opacity": 0}

    def test_scale_expands_to_both_axes(self) -> None:
        """``scale`` becomes equal scale_x and scale_y entries."""
        spec = TierSpec.model_validate({"scale": {"from": 0.2, "to": 1}})
        values = compile_values(spec, "from")
        assert "scale" not in values
        assert values == {"scale_x": 0.2, "scale_y": 0.2}

    def test_explicit_axis_replaced_by_uniform_scale(self) -> None:
        """Uniform scale takes over both axes when given together."""
        spec = TierSpec.model_validate(
            {"scale": {"from": 0.5, "to": 1}, "scaleX": {"from": 3, "to": 1}}
        )
        assert compile_values(spec, "from") == {"scale_x": 0.5, "scale_y": 0.5}

    def test_producers_are_wrapped_per_target(self) -> None:
        """Producers become PerTargetValues that render each call."""
        spec = TierSpec.model_validate(
            {"x": {"from": RandomRange(-100, 100, rng=random.Random(5)), "to": 0}}
        )
        value = compile_values(spec, "from")["x"]
        assert isinstance(value, PerTargetValue)

        first = value(0, None, [])
        second = value(1, None, [])
        assert first.endswith("%")
        assert second.endswith("%")
        assert first != second

    def test_scale_producer_shared_by_axes(self) -> None:
        """A scale producer is one value object for both axes."""
        spec = TierSpec.model_validate({"scale": {"from": RandomRange(0.5, 1.5), "to": 1}})
        values = compile_values(spec, "from")
        assert values["scale_x"] is values["scale_y"]
