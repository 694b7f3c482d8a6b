"""Revelo core: presets, timelines and viewport-driven playback for text reveals."""

__version__ = "0.3.0"
