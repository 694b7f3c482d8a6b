"""Tests for config file loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError
import pytest

from revelo.core.config.loader import (
    apply_logging,
    detect_format,
    load_animation_config,
    load_app_config,
    load_config,
)
from revelo.core.config.models import AppConfig, LoggingConfig


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("a.json", "json"), ("a.JSON", "json"), ("a.yaml", "yaml"), ("a.yml", "yaml")],
    )
    def test_known_suffixes(self, name: str, expected: str) -> None:
        """Known suffixes map to formats."""
        assert detect_format(name) == expected

    def test_unknown_suffix(self) -> None:
        """Other suffixes are rejected."""
        with pytest.raises(ValueError, match="Unsupported"):
            detect_format("a.toml")


class TestLoadConfig:
    """Tests for load_config."""

    def test_json(self, tmp_path: Path) -> None:
        """JSON objects load as dicts."""
        path = tmp_path / "reveal.json"
        path.write_text(json.dumps({"preset": "grandPrize"}))
        assert load_config(path) == {"preset": "grandPrize"}

    def test_yaml(self, tmp_path: Path) -> None:
        """YAML mappings load as dicts."""
        path = tmp_path / "reveal.yaml"
        path.write_text("preset: grandPrize\nchars:\n  duration: 2\n")
        assert load_config(path) == {"preset": "grandPrize", "chars": {"duration": 2}}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """An empty YAML file is an empty mapping."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        """Top-level YAML lists are rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises ValueError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML raises ValueError."""
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)


class TestLoadAnimationConfig:
    """Tests for load_animation_config."""

    def test_valid(self, tmp_path: Path) -> None:
        """A valid file gives an AnimationConfig."""
        path = tmp_path / "hero.yaml"
        path.write_text("text: Hello\npreset: fluidityInMotion\nfluidityInMotionDuration: 2\n")
        config = load_animation_config(path)
        assert config.text == "Hello"
        assert config.preset_durations == {"fluidityInMotion": 2}

    def test_invalid(self, tmp_path: Path) -> None:
        """Unknown keys fail validation."""
        path = tmp_path / "hero.json"
        path.write_text(json.dumps({"text": "Hi", "bogus": 1}))
        with pytest.raises(ValidationError):
            load_animation_config(path)


class TestLoadAppConfig:
    """Tests for load_app_config and apply_logging."""

    def test_defaults_without_path(self) -> None:
        """No path gives defaults."""
        assert load_app_config() == AppConfig()

    def test_defaults_for_missing_file(self, tmp_path: Path) -> None:
        """A missing file gives defaults."""
        assert load_app_config(tmp_path / "app.yaml") == AppConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values in the file override defaults."""
        path = tmp_path / "app.yaml"
        path.write_text("logging:\n  level: DEBUG\npreview:\n  fps: 12\n  seed: 3\n")
        config = load_app_config(path)
        assert config.logging.level == "DEBUG"
        assert config.preview.fps == 12
        assert config.preview.seed == 3

    def test_apply_logging(self) -> None:
        """apply_logging sets the root level."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            apply_logging(AppConfig(logging=LoggingConfig(level="WARNING")))
            assert root.level == logging.WARNING
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
