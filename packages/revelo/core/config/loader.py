"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from revelo.core.config.models import AnimationConfig, AppConfig
from revelo.core.utils.json import read_json
from revelo.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("reveal.json")
        'json'
        >>> detect_format("reveal.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(content).__name__}")
    return content


def load_animation_config(path: str | Path) -> AnimationConfig:
    """Load and validate an animation instance configuration.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Validated AnimationConfig

    Raises:
        ValidationError: If config is invalid

    Example:
        >>> config = load_animation_config("hero.yaml")
        >>> config.preset
        'fluidityInMotion'
    """
    raw_config = load_config(path)
    config = AnimationConfig.model_validate(raw_config)
    logger.debug("Loaded animation config from %s (preset=%s)", path, config.preset)
    return config


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file; defaults are used when None or missing.

    Returns:
        Validated AppConfig instance with defaults for missing values
    """
    if path is not None and Path(path).exists():
        return AppConfig.model_validate(load_config(path))
    if path is not None:
        logger.debug("App config %s not found, using defaults", path)
    return AppConfig()


def apply_logging(config: AppConfig) -> None:
    """Configure Python logging from app config."""
    configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


__all__ = [
    "apply_logging",
    "detect_format",
    "load_animation_config",
    "load_app_config",
    "load_config",
]
