"""Configuration models and loaders."""

from revelo.core.config.loader import (
    apply_logging,
    detect_format,
    load_animation_config,
    load_app_config,
    load_config,
)
from revelo.core.config.models import AnimationConfig, AppConfig, LoggingConfig, PreviewConfig

__all__ = [
    "AnimationConfig",
    "AppConfig",
    "LoggingConfig",
    "PreviewConfig",
    "apply_logging",
    "detect_format",
    "load_animation_config",
    "load_app_config",
    "load_config",
]
