"""Roof geometry helpers."""

from roofquote.geometry.pitch import (
    calculate_sloped_area,
    estimate_pitch_from_visual,
    pitch_multiplier,
    pitch_tier,
    surface_area,
)

__all__ = [
    "calculate_sloped_area",
    "estimate_pitch_from_visual",
    "pitch_multiplier",
    "pitch_tier",
    "surface_area",
]
