"""Domain models for the roofquote pricing pipeline."""

from roofquote.models.enums import (
    MeasurementMethod,
    MeasurementQuality,
    PitchTier,
    RoofKind,
    RuleSource,
    SystemType,
)
from roofquote.models.measurement import (
    ManualMeasurementData,
    ManualSection,
    MeasurementRequest,
    MeasurementResult,
)
from roofquote.models.quote import (
    BreakdownLine,
    FinancingOption,
    FinancingResult,
    PaymentRange,
    PricingContext,
    PricingResult,
    Quote,
    QuotePrice,
    QuotePricingResult,
    SectionPricingInput,
    SectionQuote,
    WasteResult,
)
from roofquote.models.roof import PitchCalculation, RoofComplexity, RoofSection
from roofquote.models.rules import (
    DEFAULT_COUNTY,
    FinancePlan,
    RateCardEntry,
    RateCardKey,
    RateCardMultipliers,
    WasteRule,
    WasteRuleConfig,
)

__all__ = [
    "DEFAULT_COUNTY",
    "BreakdownLine",
    "FinancePlan",
    "FinancingOption",
    "FinancingResult",
    "ManualMeasurementData",
    "ManualSection",
    "MeasurementMethod",
    "MeasurementQuality",
    "MeasurementRequest",
    "MeasurementResult",
    "PaymentRange",
    "PitchCalculation",
    "PitchTier",
    "PricingContext",
    "PricingResult",
    "Quote",
    "QuotePrice",
    "QuotePricingResult",
    "RateCardEntry",
    "RateCardKey",
    "RateCardMultipliers",
    "RoofComplexity",
    "RoofKind",
    "RoofSection",
    "RuleSource",
    "SectionPricingInput",
    "SectionQuote",
    "SystemType",
    "WasteResult",
    "WasteRule",
    "WasteRuleConfig",
]
