"""Built-in preset catalog.

Each preset bundles per-tier animation specs. The catalog is built once and
shared read-only by every animation instance; resolving a config never
mutates it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import functools
import logging
from types import MappingProxyType
from typing import Any

from revelo.core.effects.scatter import RandomRange, scatter
from revelo.core.text.models import EffectKind, PresetDefinition

logger = logging.getLogger(__name__)

# Split shadow used by the glitch presets (cyan / magenta offset)
GLITCH_SHADOW = "2px 2px 0px #00e6e6, -2px -2px 0px #ff00ff"
REST_SHADOW = "0px 0px 0px transparent, 0px 0px 0px transparent"

_BUILTIN_PRESETS: dict[str, dict[str, Any]] = {
    "fluidityInMotion": {
        "description": "Characters rise, unblur and straighten with a liquid ease.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 120, "to": 0},
            "x": {"from": -20, "to": 0},
            "rotate": {"from": -15, "to": 0},
            "filter": {"from": 5, "to": 0},
            "duration": 1.5,
            "stagger": 0.03,
            "ease": "liquid",
        },
    },
    "grandPrize": {
        "description": "Slot-machine reel per character, landing on the real glyph.",
        "chars": {
            "reel": True,
            "duration": 2.5,
            "stagger": {"each": 0.15, "from": "start"},
            "ease": "expo.inOut",
        },
    },
    "rideTheWave": {
        "description": "Characters rise with a centered sine-staggered wave.",
        "chars": {
            "y": {"from": 80, "to": 0},
            "skewY": {"from": 10, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "duration": 2,
            "stagger": {"each": 0.05, "from": "center", "ease": "sine.out"},
            "ease": "power3.inOut",
        },
    },
    "unfoldYourStory": {
        "description": "Words unfold around the X axis from their baseline.",
        "words": {
            "color": {"from": "#444", "to": "#eee"},
            "rotateX": {"from": -90, "to": 0},
            "y": {"from": 50, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "duration": 2,
            "stagger": 0.1,
            "ease": "expo.out",
            "transformOrigin": "bottom",
        },
    },
    "warpSpeedAhead": {
        "description": "Lines rush in from the left, skewed, stretched and blurred.",
        "lines": {
            "x": {"from": -1000, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "skewX": {"from": -30, "to": 0},
            "filter": {"from": 20, "to": 0},
            "scaleX": {"from": 1.5, "to": 1},
            "transformOrigin": "left",
            "duration": 1.5,
            "stagger": 0.1,
            "ease": "power3.inOut",
        },
    },
    "chaosIntoOrder": {
        "description": "Characters spin in from a random order and assemble.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "scale": {"from": 0.2, "to": 1},
            "rotate": {"from": -270, "to": 0},
            "y": {"from": 200, "to": 0},
            "duration": 2,
            "stagger": {"amount": 0.8, "from": "random"},
            "ease": "power4.out",
        },
    },
    "chromaticFlow": {
        "description": "Color transition with a subtle skewed rise.",
        "chars": {
            "color": {"from": "#333", "to": "#eee"},
            "y": {"from": 80, "to": 0},
            "skewX": {"from": -10, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "duration": 1,
            "stagger": 0.04,
            "ease": "expo.out",
        },
    },
    "squashAndStretch": {
        "description": "Words drop in and bounce with elastic squash and stretch.",
        "words": {
            "y": {"from": -100, "to": 0},
            "scaleY": {"from": 2.5, "to": 1},
            "scaleX": {"from": 0.7, "to": 1},
            "opacity": {"from": 0, "to": 1},
            "duration": 2,
            "stagger": 0.1,
            "transformOrigin": "center",
            "ease": "elastic.out(1, 0.5)",
        },
    },
    "bringIntoFocus": {
        "description": "Rack-focus reveal: heavy blur resolving to sharp text.",
        "chars": {
            "filter": {"from": 40, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "scale": {"from": 1.2, "to": 1},
            "x": {"from": -30, "to": 0},
            "duration": 1.5,
            "stagger": 0.03,
            "ease": "power3.out",
        },
    },
    "shearDelight": {
        "description": "Lines slide up through a diagonal shear curtain.",
        "lines": {
            "y": {"from": 150, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "skewY": {"from": 10, "to": 0},
            "skewX": {"from": -10, "to": 0},
            "color": {"from": "#666", "to": "#eee"},
            "duration": 2,
            "stagger": 0.15,
            "ease": "expo.out",
        },
    },
    "cascadeOfIdeas": {
        "description": "Characters fall and settle like dominoes.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": -100, "to": 0},
            "rotate": {"from": 30, "to": 0},
            "scale": {"from": 0.5, "to": 1},
            "stagger": 0.04,
            "duration": 2,
            "ease": "power4.out",
            "origin": "start",
        },
    },
    "letItRain": {
        "description": "Characters rain down in random order and bounce.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": -300, "to": 0},
            "duration": 2,
            "stagger": {"amount": 1.5, "from": "random"},
            "ease": "bounce.out",
        },
    },
    "magneticForce": {
        "description": "Characters are pulled in from scattered positions and fly apart on exit.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": scatter(100), "to": 0},
            "x": {"from": scatter(100), "to": 0},
            "scale": {"from": 0.1, "to": 1},
            "rotate": {"from": scatter(90), "to": 0},
            "duration": 2,
            "stagger": {"amount": 1, "from": "random"},
            "ease": "power3.in",
        },
        "charsOut": {
            "opacity": {"to": 0},
            "y": {"to": scatter(150)},
            "x": {"to": scatter(150)},
            "scale": {"to": 0.1},
            "rotate": {"to": scatter(90)},
            "duration": 1.5,
            "stagger": {"amount": 1, "from": "random"},
            "ease": "power4.in",
        },
    },
    "floatingBubbles": {
        "description": "Characters drift gently upwards out of a soft blur.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 100, "to": 0},
            "x": {"from": -20, "to": 0},
            "scale": {"from": 0.7, "to": 1},
            "filter": {"from": 5, "to": 0},
            "duration": 3,
            "stagger": {"amount": 1, "from": "random", "ease": "power2.inOut"},
            "ease": "sine.out",
        },
    },
    "heavyImpact": {
        "description": "Words fall from above and hit the baseline with a bounce.",
        "words": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": -200, "to": 0},
            "rotate": {"from": 15, "to": 0},
            "duration": 2,
            "stagger": 0.1,
            "ease": "bounce.out",
        },
    },
    "jitterbugEnergy": {
        "description": "High-frequency elastic jitter into place.",
        "chars": {
            "y": {"from": 80, "to": 0},
            "rotate": {"from": 90, "to": 0},
            "opacity": {"from": 0, "to": 1},
            "scale": {"from": 0.5, "to": 1},
            "duration": 1.5,
            "stagger": {"amount": 0.8, "from": "random"},
            "ease": "elastic.out(1, 0.2)",
        },
    },
    "staticShock": {
        "description": "Glitch distortion, a flicker loop, then a clean settle.",
        "effect": EffectKind.FLICKER,
        "chars": {
            "color": {"from": "#333333", "to": "#EEEEEE"},
            "opacity": {"from": 0, "to": 1},
            "x": {"from": scatter(50), "to": 0},
            "y": {"from": scatter(50), "to": 0},
            "rotate": {"from": scatter(25), "to": 0},
            "scale": {"from": RandomRange(0.5, 1.5), "to": 1},
            "textShadow": {"from": GLITCH_SHADOW, "to": REST_SHADOW},
            "duration": 0.4,
            "stagger": {"each": 0.01, "from": "random"},
            "ease": (
                "rough({ template: none.out, strength: 300, points: 200, "
                "taper: 'none', randomize: true, clamp: false })"
            ),
        },
    },
    "liquidMetal": {
        "description": "Characters stretch and pour into place like molten metal.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 100, "to": 0},
            "scaleY": {"from": 3, "to": 1},
            "filter": {"from": 10, "to": 0},
            "transformOrigin": "bottom",
            "duration": 1.8,
            "stagger": {"each": 0.05, "from": "center", "ease": "sine.out"},
            "ease": "liquid",
        },
    },
    "anticipationPop": {
        "description": "Characters dip before popping up into place.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 80, "to": 0},
            "scale": {"from": 0.7, "to": 1},
            "rotate": {"from": -20, "to": 0},
            "duration": 1.5,
            "stagger": 0.04,
            "ease": "anticipation",
        },
    },
    "skewAndSettle": {
        "description": "Strong elastic skew that wobbles before settling.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 100, "to": 0},
            "skewX": {"from": 30, "to": 0},
            "duration": 2,
            "stagger": {"amount": 0.8, "from": "center"},
            "ease": "elastic.out(1, 0.4)",
        },
    },
    "systemCorruption": {
        "description": "Randomized glitch transforms on entrance and exit.",
        "chars": {
            "opacity": {"from": 0, "to": 1},
            "x": {"from": scatter(25), "to": 0},
            "y": {"from": scatter(25), "to": 0},
            "skewX": {"from": scatter(20), "to": 0},
            "skewY": {"from": scatter(20), "to": 0},
            "rotate": {"from": scatter(30), "to": 0},
            "duration": 0.8,
            "stagger": {"each": 0.03, "from": "random"},
            "ease": "power3.out",
        },
        "charsOut": {
            "opacity": {"to": 0},
            "x": {"to": scatter(30)},
            "y": {"to": scatter(30)},
            "skewX": {"to": scatter(30)},
            "skewY": {"to": scatter(30)},
            "rotate": {"to": scatter(90)},
            "duration": 0.5,
            "stagger": {"each": 0.02, "from": "random"},
            "ease": "power2.in",
        },
    },
    "madeWithRevelo": {
        "description": "Understated word fade-up used for footers.",
        "words": {
            "opacity": {"from": 0, "to": 1},
            "y": {"from": 20, "to": 0},
            "duration": 1,
            "stagger": 0.05,
            "ease": "expo.out",
        },
    },
}


class PresetCatalog(Mapping[str, PresetDefinition]):
    """Read-only mapping of preset id to PresetDefinition.

    Example:
        >>> catalog = load_builtin_presets()
        >>> catalog["grandPrize"].chars.reel
        True
    """

    def __init__(self, presets: Mapping[str, PresetDefinition]) -> None:
        for preset_id, preset in presets.items():
            if preset.preset_id != preset_id:
                raise ValueError(
                    f"Preset key '{preset_id}' does not match preset_id '{preset.preset_id}'"
                )
        self._presets = MappingProxyType(dict(presets))

    @classmethod
    def from_raw(cls, raw: Mapping[str, Mapping[str, Any]]) -> PresetCatalog:
        """Validate raw preset dicts (camelCase or snake_case keys).

        Args:
            raw: Mapping of preset id to preset body.

        Returns:
            PresetCatalog with validated definitions.

        Raises:
            pydantic.ValidationError: On malformed preset data.
        """
        presets = {
            preset_id: PresetDefinition.model_validate({"preset_id": preset_id, **body})
            for preset_id, body in raw.items()
        }
        return cls(presets)

    def get(self, preset_id: str, default: Any = None) -> Any:  # type: ignore[override]
        return self._presets.get(preset_id, default)

    def __getitem__(self, preset_id: str) -> PresetDefinition:
        return self._presets[preset_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)

    @property
    def preset_ids(self) -> list[str]:
        """Preset ids in catalog order."""
        return list(self._presets)


@functools.cache
def load_builtin_presets() -> PresetCatalog:
    """Build (once) and return the shared built-in catalog."""
    catalog = PresetCatalog.from_raw(_BUILTIN_PRESETS)
    logger.debug("Loaded %d built-in presets", len(catalog))
    return catalog


__all__ = [
    "GLITCH_SHADOW",
    "PresetCatalog",
    "REST_SHADOW",
    "load_builtin_presets",
]
