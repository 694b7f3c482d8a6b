"""Test suite for revelo.

Test Structure:
- unit/: Unit tests for individual components
  - curves/: Ease registry, Bezier and rough eases
  - text/: Preset catalog, resolver, segmenter and value compilation
  - timeline/: Stagger, interpolation, tween engine and timeline builder
  - effects/: Reel and flicker adapters, adapter registry
  - viewport/: Bands, observers and the playback driver
  - config/: Config models and JSON/YAML loading
  - cli/: Command-line entry point
  - utils/: Logging and JSON helpers
- integration/: End-to-end animation scenarios
- conftest.py: Shared fixtures
"""
