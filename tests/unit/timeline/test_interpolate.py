"""Tests for property value interpolation."""

from __future__ import annotations

import pytest

from revelo.core.timeline.interpolate import format_color, interpolate, parse_color


class TestParseColor:
    """Tests for parse_color."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("#333", (51.0, 51.0, 51.0, 1.0)),
            ("#EEEEEE", (238.0, 238.0, 238.0, 1.0)),
            ("#ff000080", (255.0, 0.0, 0.0, 128 / 255)),
            ("rgb(1, 2, 3)", (1.0, 2.0, 3.0, 1.0)),
            ("rgba(1, 2, 3, 0.5)", (1.0, 2.0, 3.0, 0.5)),
            ("transparent", (0.0, 0.0, 0.0, 0.0)),
        ],
    )
    def test_parse(self, value: str, expected: tuple[float, float, float, float]) -> None:
        """Hex, rgb(a) and transparent are understood."""
        assert parse_color(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["blue", "#12", "#zzzzzz", "rgb(1, 2)"])
    def test_unparseable(self, value: str) -> None:
        """Anything else is not a color."""
        assert parse_color(value) is None

    def test_format(self) -> None:
        """Opaque colors are hex with clamped channels; translucent ones rgba()."""
        assert format_color((300.0, -5.0, 10.0, 1.0)) == "#ff000a"
        assert format_color((0.0, 115.0, 115.0, 0.5)) == "rgba(0, 115, 115, 0.5)"


class TestInterpolate:
    """Tests for interpolate."""

    def test_numbers(self) -> None:
        """Numbers interpolate linearly and may overshoot."""
        assert interpolate(0, 1, 0.5) == 0.5
        assert interpolate(0, 10, 1.2) == pytest.approx(12.0)

    def test_endpoints_unchanged(self) -> None:
        """Progress 0 and 1 return the exact endpoint values."""
        assert interpolate("#333", "#eee", 0) == "#333"
        assert interpolate("#333", "#eee", 1) == "#eee"

    def test_unknown_start(self) -> None:
        """A missing start value snaps to the end value."""
        assert interpolate(None, "0%", 0.3) == "0%"

    @pytest.mark.parametrize(
        ("start", "end", "progress", "expected"),
        [
            ("120%", "0%", 0.5, "60%"),
            ("-15deg", "0deg", 0.2, "-12deg"),
            ("blur(5px)", "blur(0px)", 0.5, "blur(2.5px)"),
            ("#000000", "#ffffff", 0.5, "#808080"),
        ],
    )
    def test_compound_strings(self, start: str, end: str, progress: float, expected: str) -> None:
        """Numeric and color tokens interpolate inside matching strings."""
        assert interpolate(start, end, progress) == expected

    def test_multi_part_shadow(self) -> None:
        """Every token of a multi-part shadow interpolates."""
        result = interpolate(
            "2px 2px 0px #00e6e6, -2px -2px 0px #ff00ff",
            "0px 0px 0px transparent, 0px 0px 0px transparent",
            0.5,
        )
        assert result == "1px 1px 0px rgba(0, 115, 115, 0.5), -1px -1px 0px rgba(128, 0, 128, 0.5)"

    def test_zero_length_bridges_units(self) -> None:
        """A zero length takes the unit of the other side."""
        assert interpolate("0%", "8px", 0.5) == "4px"
        assert interpolate("6px", "0%", 0.5) == "3px"
        assert interpolate("0%", "8px", 1.0) == "8px"
        assert interpolate("5%", "8px", 0.5) == "5%"

    def test_mismatched_strings_are_discrete(self) -> None:
        """Strings that do not line up switch at the end."""
        assert interpolate("left", "bottom", 0.5) == "left"
        assert interpolate("left", "bottom", 1.0) == "bottom"
        assert interpolate("1px 2px", "1px", 0.5) == "1px 2px"
