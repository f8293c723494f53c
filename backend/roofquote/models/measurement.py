"""Measurement request/result models shared by the adapter chain."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roofquote.models.enums import MeasurementMethod, MeasurementQuality, RoofKind
from roofquote.models.roof import RoofComplexity, RoofSection


class MeasurementRequest(BaseModel):
    """Location of the building to measure."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    place_id: str = Field(min_length=1)
    address: str | None = None


class MeasurementResult(BaseModel):
    """Canonical output of exactly one measurement request."""

    model_config = ConfigDict(frozen=True)

    quality: MeasurementQuality
    method: MeasurementMethod
    sections: list[RoofSection]
    imagery_attribution: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def total_plan_area_sqft(self) -> float:
        return sum(s.plan_area_sqft for s in self.sections)


class ManualSection(BaseModel):
    """One operator-entered section of a manual override."""

    kind: RoofKind
    plan_area_sqft: float = Field(gt=0, le=10_000)
    pitch_rise_per_12: float | None = Field(default=None, ge=1, le=20)
    facets: int = Field(ge=1, le=50)
    hips_valleys: int = Field(ge=0, le=20)
    penetrations: int = Field(ge=0, le=50)

    @model_validator(mode="after")
    def pitch_present_iff_sloped(self) -> ManualSection:
        if self.kind == RoofKind.SLOPED and self.pitch_rise_per_12 is None:
            msg = "Sloped sections require pitch_rise_per_12"
            raise ValueError(msg)
        if self.kind == RoofKind.FLAT and self.pitch_rise_per_12 is not None:
            msg = "Flat sections must not carry pitch_rise_per_12"
            raise ValueError(msg)
        return self

    def to_section(self, index: int) -> RoofSection:
        return RoofSection(
            section_id=f"section-{index}",
            kind=self.kind,
            plan_area_sqft=self.plan_area_sqft,
            pitch_rise_per_12=self.pitch_rise_per_12,
            complexity=RoofComplexity(
                facets=self.facets,
                hips_valleys=self.hips_valleys,
                penetrations=self.penetrations,
            ),
        )


class ManualMeasurementData(BaseModel):
    """Operator-supplied measurement override for a single property."""

    sections: list[ManualSection] = Field(min_length=1)
    quality: MeasurementQuality
    notes: str | None = Field(default=None, max_length=1000)
