"""Tests for EaseRegistry expression parsing and custom ease registration."""

from __future__ import annotations

import pytest

from revelo.core.curves.custom import BezierEase
from revelo.core.curves.functions import linear
from revelo.core.curves.registry import (
    LIQUID_PATH,
    EaseRegistry,
    build_default_registry,
    parse_options,
)
from revelo.core.curves.rough import RoughEase
from revelo.core.errors import RevealError, UnknownEaseError


class TestParseOptions:
    """Tests for the rough option block parser."""

    def test_parses_numbers_strings_and_booleans(self) -> None:
        """Values are coerced to float, str or bool."""
        options = parse_options("{ strength: 20, taper: 'both', randomize: true, clamp: false }")
        assert options == {"strength": 20.0, "taper": "both", "randomize": True, "clamp": False}

    def test_empty_block(self) -> None:
        """An empty block gives no options."""
        assert parse_options("{}") == {}


class TestResolveFamilies:
    """Tests for standard ease families."""

    @pytest.mark.parametrize(
        "expression",
        [
            "power1.out",
            "power2.in",
            "power3.inOut",
            "power4.out",
            "expo.out",
            "expo.inOut",
            "sine.out",
            "circ.in",
            "back.out",
            "elastic.out(1, 0.5)",
            "elastic.inOut",
            "bounce.out",
        ],
    )
    def test_endpoints_are_fixed(self, eases: EaseRegistry, expression: str) -> None:
        """Every ease maps 0 to 0 and 1 to 1."""
        ease = eases.resolve(expression)
        assert ease(0.0) == pytest.approx(0.0, abs=1e-9)
        assert ease(1.0) == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("name", ["none", "linear", "power0"])
    def test_linear_aliases(self, eases: EaseRegistry, name: str) -> None:
        """Linear aliases resolve to the identity ease."""
        assert eases.resolve(name) is linear

    def test_variant_defaults_to_out(self, eases: EaseRegistry) -> None:
        """A bare family name is the out flavour."""
        assert eases.resolve("power1")(0.5) == pytest.approx(eases.resolve("power1.out")(0.5))

    def test_power_flavours(self, eases: EaseRegistry) -> None:
        """In, out and inOut flavours of power2."""
        assert eases.resolve("power1.out")(0.5) == pytest.approx(0.75)
        assert eases.resolve("power2.in")(0.5) == pytest.approx(0.125)
        assert eases.resolve("power2.inOut")(0.5) == pytest.approx(0.5)

    def test_elastic_overshoots(self, eases: EaseRegistry) -> None:
        """Elastic out overshoots the end value at some point."""
        ease = eases.resolve("elastic.out(1, 0.2)")
        assert max(ease(i / 100) for i in range(1, 100)) > 1.0

    def test_steps(self, eases: EaseRegistry) -> None:
        """steps(n) holds discrete levels and lands on 1."""
        one = eases.resolve("steps(1)")
        assert one(0.5) == 0.0
        assert one(1.0) == 1.0
        assert eases.resolve("steps(4)")(0.3) == pytest.approx(0.25)

    def test_family_eases_are_cached(self, eases: EaseRegistry) -> None:
        """Deterministic expressions resolve to the same callable."""
        assert eases.resolve("power3.out") is eases.resolve("power3.out")


class TestResolveErrors:
    """Tests for unresolvable expressions."""

    @pytest.mark.parametrize(
        "expression",
        ["wobble.out", "power3.sideways", "expo.out(2)", "elastic.out(a, b)", "steps(x)", ""],
    )
    def test_unknown_expression_raises(self, eases: EaseRegistry, expression: str) -> None:
        """Unknown families, variants and arguments raise UnknownEaseError."""
        with pytest.raises(UnknownEaseError) as exc_info:
            eases.resolve(expression)
        assert exc_info.value.expression == expression

    def test_unknown_ease_is_domain_and_value_error(self) -> None:
        """UnknownEaseError derives from RevealError and ValueError."""
        error = UnknownEaseError("wobble")
        assert isinstance(error, RevealError)
        assert isinstance(error, ValueError)

    def test_contains(self, eases: EaseRegistry) -> None:
        """Membership reports whether an expression resolves."""
        assert "liquid" in eases
        assert "power2.inOut" in eases
        assert "wobble" not in eases
        assert 3 not in eases


class TestCustomEases:
    """Tests for custom ease registration."""

    def test_default_registry_has_builtin_customs(self, eases: EaseRegistry) -> None:
        """liquid and anticipation are registered at start-up."""
        assert eases.custom_names == ["anticipation", "liquid"]
        assert isinstance(eases.resolve("liquid"), BezierEase)

    def test_register_path_is_idempotent(self) -> None:
        """A second registration under the same name is a no-op."""
        registry = EaseRegistry()
        assert registry.register_path("liquid", LIQUID_PATH) is True
        first = registry.resolve("liquid")
        assert registry.register_path("liquid", LIQUID_PATH) is False
        assert registry.resolve("liquid") is first

    def test_register_duplicate_raises(self) -> None:
        """Explicit duplicate registration is an error."""
        registry = EaseRegistry()
        registry.register("mine", linear)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("mine", linear)

    def test_custom_name_wins_over_family(self) -> None:
        """A custom ease shadows a family of the same name."""
        registry = EaseRegistry()

        def half(t: float) -> float:
            return t / 2

        registry.register("sine", half)
        assert registry.resolve("sine") is half
        assert registry.has("sine")

    def test_registries_are_independent(self) -> None:
        """Registries never share custom eases."""
        first = build_default_registry()
        second = EaseRegistry()
        first.register("only-here", linear)
        assert not second.has("only-here")
        assert "liquid" not in second.custom_names


class TestRoughExpressions:
    """Tests for rough({...}) expressions."""

    def test_rough_options_are_applied(self, eases: EaseRegistry) -> None:
        """Parsed options configure the RoughEase."""
        ease = eases.resolve("rough({ strength: 20, points: 10, randomize: true })")
        assert isinstance(ease, RoughEase)
        assert ease.strength == 20.0
        assert ease.points == 10
        assert ease.randomize is True

    def test_rough_template_resolves(self, eases: EaseRegistry) -> None:
        """A template name resolves through the registry."""
        ease = eases.resolve("rough({ template: none.out, strength: 1, points: 5 })")
        assert isinstance(ease, RoughEase)
        assert ease.template is linear

    def test_rough_eases_are_not_shared(self, eases: EaseRegistry) -> None:
        """Randomized rough eases are rebuilt on every lookup."""
        expression = "rough({ strength: 2, points: 8 })"
        assert eases.resolve(expression) is not eases.resolve(expression)
