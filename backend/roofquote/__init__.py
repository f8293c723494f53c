"""Roofquote: roof measurement to price quote to financing.

Usage::

    from roofquote import PricingContext, create_default_pipeline

    pipeline = create_default_pipeline()
    measurement = pipeline.resolve_measurement(25.76, -80.19, "place-1")
    quote = pipeline.build_quote(measurement, PricingContext(county="Broward"))
"""

from roofquote.engine import PricingEngine
from roofquote.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    NotFoundError,
    RoofQuoteError,
    ServiceUnavailableError,
    ValidationError,
)
from roofquote.factory import create_default_pipeline, create_default_store
from roofquote.finance import FinanceCalculator, monthly_payment
from roofquote.models.enums import (
    MeasurementMethod,
    MeasurementQuality,
    PitchTier,
    RoofKind,
    SystemType,
)
from roofquote.models.measurement import MeasurementRequest, MeasurementResult
from roofquote.models.quote import (
    FinancingResult,
    PricingContext,
    PricingResult,
    Quote,
    QuotePricingResult,
    SectionQuote,
    WasteResult,
)
from roofquote.models.roof import RoofComplexity, RoofSection
from roofquote.services.pipeline import QuotePipeline
from roofquote.waste import WasteRuleEvaluator

__all__ = [
    "ConfigurationError",
    "ExternalServiceError",
    "FinanceCalculator",
    "FinancingResult",
    "MeasurementMethod",
    "MeasurementQuality",
    "MeasurementRequest",
    "MeasurementResult",
    "NotFoundError",
    "PitchTier",
    "PricingContext",
    "PricingEngine",
    "PricingResult",
    "Quote",
    "QuotePipeline",
    "QuotePricingResult",
    "RoofComplexity",
    "RoofKind",
    "RoofQuoteError",
    "RoofSection",
    "SectionQuote",
    "ServiceUnavailableError",
    "SystemType",
    "ValidationError",
    "WasteResult",
    "WasteRuleEvaluator",
    "create_default_pipeline",
    "create_default_store",
    "monthly_payment",
]
