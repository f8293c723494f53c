"""Slope geometry: plan area to true surface area, and pitch classification.

Pure functions. A rise of ``r`` inches per 12 inches of run stretches the
plan area by ``sqrt(1 + (r / 12) ** 2)``.
"""

from __future__ import annotations

import math

from roofquote.exceptions import ValidationError
from roofquote.models.enums import PitchTier
from roofquote.models.roof import PitchCalculation

# Upper bound (inclusive) of each tier, in rise per 12.
_LOW_MAX_RISE = 4
_MEDIUM_MAX_RISE = 7

_TIER_DESCRIPTIONS: dict[PitchTier, str] = {
    PitchTier.LOW: "Low pitch (2/12 - 4/12)",
    PitchTier.MEDIUM: "Medium pitch (5/12 - 7/12)",
    PitchTier.STEEP: "Steep pitch (8/12 - 12/12)",
}

_VISUAL_PITCH: dict[str, float] = {
    "low": 3,
    "medium": 6,
    "steep": 9,
}


def _check_rise(rise_per_12: float) -> None:
    if rise_per_12 < 0 or math.isnan(rise_per_12):
        msg = f"Pitch rise must be non-negative, got {rise_per_12}"
        raise ValidationError(msg)


def pitch_multiplier(rise_per_12: float) -> float:
    """Surface-area multiplier for a given rise per 12."""
    _check_rise(rise_per_12)
    ratio = rise_per_12 / 12
    return math.sqrt(1 + ratio * ratio)


def surface_area(plan_area_sqft: float, rise_per_12: float) -> float:
    """True (sloped) surface area of a section."""
    if not plan_area_sqft > 0:
        msg = f"Plan area must be positive, got {plan_area_sqft}"
        raise ValidationError(msg)
    return plan_area_sqft * pitch_multiplier(rise_per_12)


def pitch_tier(rise_per_12: float) -> PitchTier:
    """Classify a rise per 12: <=4 LOW, <=7 MEDIUM, otherwise STEEP."""
    _check_rise(rise_per_12)
    if rise_per_12 <= _LOW_MAX_RISE:
        return PitchTier.LOW
    if rise_per_12 <= _MEDIUM_MAX_RISE:
        return PitchTier.MEDIUM
    return PitchTier.STEEP


def calculate_sloped_area(plan_area_sqft: float, rise_per_12: float) -> PitchCalculation:
    """Full slope calculation for one sloped section."""
    tier = pitch_tier(rise_per_12)
    return PitchCalculation(
        rise_per_12=rise_per_12,
        tier=tier,
        multiplier=pitch_multiplier(rise_per_12),
        sloped_area_sqft=surface_area(plan_area_sqft, rise_per_12),
        description=_TIER_DESCRIPTIONS[tier],
    )


def estimate_pitch_from_visual(visual_estimate: str) -> float:
    """Convert an eyeballed 'low' / 'medium' / 'steep' into a rise per 12."""
    try:
        return _VISUAL_PITCH[visual_estimate.lower()]
    except KeyError:
        msg = f"Unknown visual pitch estimate '{visual_estimate}'"
        raise ValidationError(msg) from None
