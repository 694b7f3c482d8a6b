"""Bespoke multi-stage effects (reel, flicker) and scatter value producers."""
