"""Pricing, financing and quote output models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roofquote.models.enums import PitchTier, RoofKind, RuleSource, SystemType
from roofquote.models.measurement import MeasurementResult
from roofquote.models.roof import PitchCalculation, RoofSection
from roofquote.models.rules import RateCardKey, story_tier_for


class PricingContext(BaseModel):
    """Quote-level pricing inputs shared by every section.

    All defaulting happens here, once: the county name is normalised
    ("Broward County" becomes "Broward") and, when ``hvhz`` is not given,
    it is derived from the county.
    """

    model_config = ConfigDict(frozen=True)

    county: str = Field(min_length=1)
    story_count: int = Field(default=1, ge=1)
    tear_off_layers: int = Field(default=0, ge=0, le=2)
    hvhz: bool = False

    @model_validator(mode="before")
    @classmethod
    def resolve_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("county"), str):
            return data
        from roofquote.data.counties import is_hvhz_county, normalize_county

        county = normalize_county(data["county"])
        data = {**data, "county": county}
        if data.get("hvhz") is None:
            data["hvhz"] = is_hvhz_county(county)
        return data

    @property
    def story_tier(self) -> int:
        return story_tier_for(self.story_count)


class SectionPricingInput(BaseModel):
    """Everything the pricing engine needs to price one section."""

    model_config = ConfigDict(frozen=True)

    kind: RoofKind
    system_type: SystemType
    final_squares: float = Field(ge=0)
    pitch_tier: PitchTier | None = None
    context: PricingContext
    section_id: str | None = None

    def rate_card_key(self) -> RateCardKey:
        return RateCardKey(
            county=self.context.county,
            system_type=self.system_type,
            pitch_tier=None if self.system_type.is_flat else self.pitch_tier,
            story_tier=self.context.story_tier,
            tear_off_layers=self.context.tear_off_layers,
            hvhz=self.context.hvhz,
        )


class WasteResult(BaseModel):
    """Waste percentage breakdown and post-waste area for one section."""

    base_waste: float
    facets_adder: float
    hips_valleys_adder: float
    penetrations_adder: float
    total_waste_percent: float
    final_area_sqft: float
    final_squares: float
    rule_source: RuleSource = RuleSource.STORE

    @property
    def used_default_rules(self) -> bool:
        return self.rule_source == RuleSource.BUILT_IN_DEFAULT


class BreakdownLine(BaseModel):
    """A single customer-facing line item."""

    description: str
    amount: float
    is_multiplier: bool = False


class PricingResult(BaseModel):
    """Priced section with a line-item breakdown.

    ``total_square_price`` is the unadjusted ``price_per_square *
    final_squares``; ``adjusted_square_price`` is after all multipliers.
    """

    section_id: str | None = None
    system_type: SystemType
    county: str
    used_default_county: bool = False
    price_per_square: float
    final_squares: float
    total_square_price: float
    multipliers: dict[str, float] = Field(default_factory=dict)
    adjusted_square_price: float
    fixed_adders: dict[str, float] = Field(default_factory=dict)
    total_price: float
    breakdown: list[BreakdownLine]


class QuotePrice(BaseModel):
    """Sum of several priced sections."""

    sections: list[PricingResult]
    total_price: float
    breakdown: list[BreakdownLine]


class SectionQuote(BaseModel):
    """A section carried through geometry, waste and pricing."""

    section: RoofSection
    pitch: PitchCalculation | None = None
    priced_area_sqft: float
    waste: WasteResult
    pricing: PricingResult

    @property
    def total_price(self) -> float:
        return self.pricing.total_price


class PaymentRange(BaseModel):
    """Monthly payment range in dollars."""

    monthly_min: float
    monthly_max: float


class FinancingOption(BaseModel):
    """Payment range for one eligible finance plan."""

    plan_id: str
    name: str
    apr_min: float
    apr_max: float
    term_min_months: int
    term_max_months: int
    dealer_fee_percent: float | None = None
    principal: float
    monthly_payment_min: float
    monthly_payment_max: float
    total_payment_min: float
    total_payment_max: float
    total_interest_min: float
    total_interest_max: float


class FinancingResult(BaseModel):
    """All eligible financing options for a loan amount."""

    loan_amount: float
    options: list[FinancingOption]
    overall_range: PaymentRange
    disclaimer: str | None = None


class QuotePricingResult(BaseModel):
    """Fully priced quote: per-section detail, totals and financing."""

    sections: list[SectionQuote]
    total_price: float
    breakdown: list[BreakdownLine]
    financing: FinancingResult
    degraded_pricing: bool = False

    def to_summary_dict(self) -> dict[str, Any]:
        """Flat summary for display, with formatted amounts."""
        from roofquote.formatting import (
            format_apr_range,
            format_currency,
            format_payment_range,
            format_term_range,
        )

        return {
            "total_price": self.total_price,
            "total_price_formatted": format_currency(self.total_price),
            "monthly_range_formatted": format_payment_range(
                self.financing.overall_range.monthly_min,
                self.financing.overall_range.monthly_max,
            ),
            "line_items": [
                {
                    "description": line.description,
                    "amount": line.amount,
                    "amount_formatted": format_currency(line.amount),
                }
                for line in self.breakdown
            ],
            "financing_options": [
                {
                    "plan_id": option.plan_id,
                    "name": option.name,
                    "monthly_range_formatted": format_payment_range(
                        option.monthly_payment_min, option.monthly_payment_max
                    ),
                    "apr_range_formatted": format_apr_range(option.apr_min, option.apr_max),
                    "term_range_formatted": format_term_range(
                        option.term_min_months, option.term_max_months
                    ),
                }
                for option in self.financing.options
            ],
            "num_sections": len(self.sections),
            "degraded_pricing": self.degraded_pricing,
        }


class Quote(BaseModel):
    """Aggregate of priced sections for one property."""

    quote_id: str | None = None
    context: PricingContext
    measurement: MeasurementResult
    sections: list[RoofSection]
    pricing: QuotePricingResult

    @property
    def total_price(self) -> float:
        return self.pricing.total_price

    @property
    def monthly_min(self) -> float:
        return self.pricing.financing.overall_range.monthly_min

    @property
    def monthly_max(self) -> float:
        return self.pricing.financing.overall_range.monthly_max
