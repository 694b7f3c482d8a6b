"""Command-line interface for Revelo.

Commands:
    presets   List the built-in presets
    resolve   Print the resolved animation spec of a config file
    preview   Play the entrance in memory and print sampled frames
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import random
import sys
from typing import Any

import numpy as np
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from revelo.core import __version__
from revelo.core.animation import TextAnimation
from revelo.core.config.loader import apply_logging, load_animation_config, load_app_config
from revelo.core.config.models import AnimationConfig, AppConfig
from revelo.core.curves.registry import build_default_registry
from revelo.core.text.catalog import load_builtin_presets
from revelo.core.text.models import TIER_SLOTS, AnimationType, Tier
from revelo.core.text.resolver import resolve_config
from revelo.core.text.segmenter import TextSegmenter, TextTarget
from revelo.core.timeline.engine import TweenEngine
from revelo.core.utils.json import dumps, write_json

console = Console()
logger = logging.getLogger(__name__)

MAX_PREVIEW_TARGETS = 6
MAX_PREVIEW_SECONDS = 30.0


def _load_inputs(args: argparse.Namespace) -> tuple[AnimationConfig, AppConfig] | None:
    app_config = load_app_config(args.app_config)
    apply_logging(app_config)
    try:
        config = load_animation_config(Path(args.config))
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return None
    return config, app_config


def cmd_presets(args: argparse.Namespace) -> int:
    """Print a table of the built-in presets."""
    catalog = load_builtin_presets()
    table = Table(title=f"Revelo presets ({len(catalog)})")
    table.add_column("Preset", style="bold")
    table.add_column("Tiers")
    table.add_column("Effect")
    table.add_column("Description")
    for preset_id, preset in catalog.items():
        tiers = [slot for slot in TIER_SLOTS if not getattr(preset, slot).is_empty]
        effect = preset.effect.value if preset.effect else ("reel" if preset.chars.reel else "")
        table.add_row(preset_id, ", ".join(tiers), effect, preset.description)
    console.print(table)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print the resolved spec of a config file as JSON."""
    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    config, _ = loaded

    resolved = resolve_config(
        load_builtin_presets(),
        config.preset,
        config.overrides,
        duration=config.duration,
        preset_durations=config.preset_durations,
        color=config.color,
        glitch_color=config.glitch_color,
    )
    payload: dict[str, Any] = {
        "preset": resolved.preset_id,
        "effect": resolved.effect,
        "effectiveDuration": resolved.effective_duration,
        "color": resolved.color,
        "glitchColor": resolved.glitch_color,
        "requestedTiers": resolved.requested_tiers,
    }
    for slot in TIER_SLOTS:
        spec = getattr(resolved, slot)
        if not spec.is_empty:
            payload[slot] = spec.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    if args.output:
        write_json(args.output, payload)
        logger.info("Wrote resolved spec to %s", args.output)
    console.print_json(dumps(payload))
    return 0


def _summarize(target: TextTarget, properties: list[str]) -> str:
    style = dict(target.style)
    content_style = getattr(target.content, "style", None)
    if content_style:
        style.update({f"reel.{key}": value for key, value in content_style.items()})
    keys = [key for key in style if not properties or key in properties or key.startswith("reel.")]
    parts = []
    for key in keys:
        value = style[key]
        if isinstance(value, float):
            value = round(value, 3)
        parts.append(f"{key}={value}")
    return " ".join(parts)


def cmd_preview(args: argparse.Namespace) -> int:
    """Play the entrance timeline in memory and print sampled frames."""
    loaded = _load_inputs(args)
    if loaded is None:
        return 1
    config, app_config = loaded

    fps = args.fps or app_config.preview.fps
    seed = args.seed if args.seed is not None else app_config.preview.seed
    if seed is not None:
        random.seed(seed)
    eases = build_default_registry(np.random.default_rng(seed))
    engine = TweenEngine(eases=eases, rng=random.Random(seed))
    animation = TextAnimation(
        config.model_copy(
            update={
                "animation_type": AnimationType.MANUAL,
                "animate_in": True,
                "animate_out": False,
            }
        ),
        engine=engine,
        segmenter=TextSegmenter(line_height=app_config.preview.line_height),
        rng=random.Random(seed),
    )
    animation.setup()
    if animation.timelines is None or animation.hierarchy is None:
        console.print("[yellow]Nothing to animate: text stays static.[/yellow]")
        return 0

    tier = Tier(args.tier)
    targets = animation.hierarchy.targets_for(tier)[:MAX_PREVIEW_TARGETS]
    if not targets:
        console.print(f"[yellow]No {tier.value} targets in this animation.[/yellow]")
        return 0

    timeline = animation.timelines.in_timeline
    table = Table(title=f"{config.preset or 'custom'} - {tier.value} @ {fps} fps")
    table.add_column("t", justify="right")
    for target in targets:
        table.add_column(repr(target.text))

    dt = 1 / fps
    elapsed = 0.0
    while True:
        table.add_row(f"{elapsed:.3f}", *(_summarize(t, args.property) for t in targets))
        if timeline.paused or elapsed >= MAX_PREVIEW_SECONDS:
            break
        engine.tick(dt)
        elapsed += dt

    console.print(table)
    animation.teardown()
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="revelo",
        description="Revelo - preset-driven text reveal animations",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("presets", help="List the built-in presets")

    for name, help_text in (
        ("resolve", "Print the resolved animation spec"),
        ("preview", "Sample the entrance animation frame by frame"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--config", required=True, help="Animation config (.json/.yaml)")
        cmd.add_argument(
            "--app-config",
            default=None,
            help="App config with logging/preview settings (.json/.yaml)",
        )
        if name == "preview":
            cmd.add_argument("--fps", type=int, default=None, help="Frames per second")
            cmd.add_argument(
                "--tier",
                choices=[tier.value for tier in Tier],
                default=Tier.CHARS.value,
                help="Tier to sample (default: chars)",
            )
            cmd.add_argument(
                "--property",
                action="append",
                default=[],
                help="Only show this property (repeatable)",
            )
            cmd.add_argument("--seed", type=int, default=None, help="Random seed")
        else:
            cmd.add_argument("--output", default=None, help="Also write the JSON to this file")

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "presets":
        return cmd_presets(args)
    if args.cmd == "resolve":
        return cmd_resolve(args)
    if args.cmd == "preview":
        return cmd_preview(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
