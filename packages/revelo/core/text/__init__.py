"""Text animation vocabulary: models, presets, resolution and segmentation."""

from revelo.core.text.models import (
    EffectKind,
    Origin,
    PresetDefinition,
    PropertyTween,
    ResolvedConfig,
    StaggerSpec,
    Tier,
    TierBundle,
    TierSpec,
)
from revelo.core.text.catalog import PresetCatalog, load_builtin_presets
from revelo.core.text.resolver import resolve_config
from revelo.core.text.segmenter import TargetHierarchy, TextSegmenter, TextTarget
from revelo.core.text.values import compile_values

__all__ = [
    "EffectKind",
    "Origin",
    "PresetCatalog",
    "PresetDefinition",
    "PropertyTween",
    "ResolvedConfig",
    "StaggerSpec",
    "TargetHierarchy",
    "TextSegmenter",
    "TextTarget",
    "Tier",
    "TierBundle",
    "TierSpec",
    "compile_values",
    "load_builtin_presets",
    "resolve_config",
]
