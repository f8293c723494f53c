"""Roof section domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roofquote.exceptions import ValidationError
from roofquote.models.enums import PitchTier, RoofKind, SystemType


class RoofComplexity(BaseModel):
    """Complexity counts that drive the waste adders."""

    model_config = ConfigDict(frozen=True)

    facets: int = Field(default=4, ge=0)
    hips_valleys: int = Field(default=0, ge=0)
    penetrations: int = Field(default=2, ge=0)


class RoofSection(BaseModel):
    """One physically distinct portion of a roof.

    Sections are immutable; applying a system selection returns a new
    section via :meth:`with_system`.
    """

    model_config = ConfigDict(frozen=True)

    kind: RoofKind
    plan_area_sqft: float = Field(gt=0)
    pitch_rise_per_12: float | None = Field(default=None, ge=0)
    complexity: RoofComplexity = Field(default_factory=RoofComplexity)
    system_type: SystemType | None = None
    section_id: str | None = None

    @model_validator(mode="after")
    def pitch_present_iff_sloped(self) -> RoofSection:
        if self.kind == RoofKind.SLOPED and self.pitch_rise_per_12 is None:
            msg = "Sloped sections require pitch_rise_per_12"
            raise ValueError(msg)
        if self.kind == RoofKind.FLAT and self.pitch_rise_per_12 is not None:
            msg = "Flat sections must not carry pitch_rise_per_12"
            raise ValueError(msg)
        return self

    @property
    def is_flat(self) -> bool:
        return self.kind == RoofKind.FLAT

    def with_system(self, system_type: SystemType) -> RoofSection:
        """Return a copy of this section with ``system_type`` selected.

        Raises:
            ValidationError: If the system belongs to the other family
                (flat sections stay flat, sloped sections stay pitched).
        """
        ensure_family_matches(self.kind, system_type)
        return self.model_copy(update={"system_type": system_type})


def ensure_family_matches(kind: RoofKind, system_type: SystemType) -> None:
    """Reject a system type whose family disagrees with the section kind."""
    if system_type.family != kind:
        msg = (
            f"System type {system_type} cannot be installed on a "
            f"{kind.lower()} section"
        )
        raise ValidationError(msg)


class PitchCalculation(BaseModel):
    """Slope geometry for a single sloped section."""

    rise_per_12: float
    tier: PitchTier
    multiplier: float
    sloped_area_sqft: float
    description: str
