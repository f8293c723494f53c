"""Tests for domain model validation."""

from __future__ import annotations

import pytest

from roofquote.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from roofquote.models.enums import PitchTier, RoofKind, SystemType
from roofquote.models.quote import PricingContext, SectionPricingInput
from roofquote.models.roof import RoofSection
from roofquote.models.rules import RateCardKey, story_tier_for


class TestRoofSection:
    def test_sloped_requires_pitch(self) -> None:
        with pytest.raises(ValueError, match="pitch_rise_per_12"):
            RoofSection(kind=RoofKind.SLOPED, plan_area_sqft=1000)

    def test_flat_rejects_pitch(self) -> None:
        with pytest.raises(ValueError, match="must not carry"):
            RoofSection(kind=RoofKind.FLAT, plan_area_sqft=1000, pitch_rise_per_12=4)

    @pytest.mark.parametrize("area", [0, -1])
    def test_area_must_be_positive(self, area: float) -> None:
        with pytest.raises(ValueError):
            RoofSection(kind=RoofKind.FLAT, plan_area_sqft=area)

    def test_with_system_returns_new_section(self) -> None:
        section = RoofSection(kind=RoofKind.SLOPED, plan_area_sqft=1000, pitch_rise_per_12=5)
        selected = section.with_system(SystemType.METAL)
        assert selected.system_type == SystemType.METAL
        assert section.system_type is None

    @pytest.mark.parametrize("system", [SystemType.FLAT_TPO, SystemType.FLAT_BUR])
    def test_sloped_cannot_take_flat_system(self, system: SystemType) -> None:
        section = RoofSection(kind=RoofKind.SLOPED, plan_area_sqft=1000, pitch_rise_per_12=5)
        with pytest.raises(ValidationError):
            section.with_system(system)


class TestSystemType:
    def test_families(self) -> None:
        assert SystemType.SHINGLE.family == RoofKind.SLOPED
        assert SystemType.METAL.family == RoofKind.SLOPED
        assert SystemType.FLAT_MODBIT.family == RoofKind.FLAT


class TestPricingContext:
    def test_hvhz_derived_from_county(self) -> None:
        assert PricingContext(county="Miami-Dade").hvhz
        assert PricingContext(county="Broward County").hvhz
        assert not PricingContext(county="Palm Beach").hvhz

    def test_explicit_hvhz_wins(self) -> None:
        assert not PricingContext(county="Miami-Dade", hvhz=False).hvhz

    def test_county_normalized(self) -> None:
        assert PricingContext(county="Broward County").county == "Broward"

    @pytest.mark.parametrize(("stories", "tier"), [(1, 1), (2, 2), (3, 3), (5, 3)])
    def test_story_tier(self, stories: int, tier: int) -> None:
        assert PricingContext(county="X", story_count=stories).story_tier == tier
        assert story_tier_for(stories) == tier

    def test_tear_off_bounded(self) -> None:
        with pytest.raises(ValueError):
            PricingContext(county="X", tear_off_layers=3)


class TestRateCardKey:
    def test_equal_keys_hash_equal(self) -> None:
        a = RateCardKey(county="Broward", system_type=SystemType.SHINGLE, pitch_tier=PitchTier.LOW)
        b = RateCardKey(pitch_tier=PitchTier.LOW, system_type=SystemType.SHINGLE, county="Broward")
        assert a == b
        assert {a: 1}[b] == 1

    def test_flat_system_has_no_pitch(self) -> None:
        with pytest.raises(ValueError):
            RateCardKey(county="X", system_type=SystemType.FLAT_TPO, pitch_tier=PitchTier.LOW)

    def test_default_county_variant(self) -> None:
        key = RateCardKey(county="Orange", system_type=SystemType.FLAT_TPO)
        assert key.for_default_county().county == "DEFAULT"
        assert key.county == "Orange"

    def test_pricing_input_drops_pitch_for_flat(self) -> None:
        pricing_input = SectionPricingInput(
            kind=RoofKind.FLAT,
            system_type=SystemType.FLAT_TPO,
            final_squares=3,
            pitch_tier=PitchTier.LOW,
            context=PricingContext(county="Broward", story_count=4, tear_off_layers=2),
        )
        key = pricing_input.rate_card_key()
        assert key.pitch_tier is None
        assert key.story_tier == 3
        assert key.hvhz


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (ValidationError, 400),
        (NotFoundError, 404),
        (ServiceUnavailableError, 503),
        (ExternalServiceError, 503),
        (ConfigurationError, 500),
    ],
)
def test_status_code_hints(error: type[Exception], status: int) -> None:
    assert error("boom").status_code == status  # type: ignore[attr-defined]
