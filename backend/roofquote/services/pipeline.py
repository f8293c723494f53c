"""Quote pipeline: orchestrates measurement, geometry, waste, pricing and financing."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from roofquote.exceptions import ValidationError
from roofquote.geometry.pitch import calculate_sloped_area
from roofquote.models.enums import RoofKind, SystemType
from roofquote.models.measurement import MeasurementRequest
from roofquote.models.quote import (
    Quote,
    QuotePricingResult,
    SectionPricingInput,
    SectionQuote,
)

if TYPE_CHECKING:
    import threading
    from collections.abc import Mapping, Sequence

    from roofquote.engine import PricingEngine
    from roofquote.finance import FinanceCalculator
    from roofquote.models.measurement import ManualMeasurementData, MeasurementResult
    from roofquote.models.quote import FinancingResult, PricingContext, WasteResult
    from roofquote.models.roof import PitchCalculation, RoofSection
    from roofquote.services.manual import ManualMeasurementAdapter
    from roofquote.services.measurement import MeasurementAdapterChain
    from roofquote.waste import WasteRuleEvaluator

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_BY_KIND: dict[RoofKind, SystemType] = {
    RoofKind.SLOPED: SystemType.SHINGLE,
    RoofKind.FLAT: SystemType.FLAT_TPO,
}


class QuotePipeline:
    """Turns a location into a priced, financeable quote.

    Each section goes geometry → waste → pricing; the quote total is only
    financed once every section has priced successfully. Any failure
    propagates unchanged, so a caller never sees a partially priced quote.
    """

    def __init__(
        self,
        measurement_chain: MeasurementAdapterChain,
        waste_evaluator: WasteRuleEvaluator,
        pricing_engine: PricingEngine,
        finance_calculator: FinanceCalculator,
        manual_adapter: ManualMeasurementAdapter | None = None,
    ) -> None:
        self._measurement_chain = measurement_chain
        self._waste_evaluator = waste_evaluator
        self._pricing_engine = pricing_engine
        self._finance_calculator = finance_calculator
        self._manual_adapter = manual_adapter

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def resolve_measurement(
        self,
        lat: float,
        lng: float,
        place_id: str,
        address: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> MeasurementResult:
        """Measure the roof at a location through the adapter chain.

        Raises:
            ServiceUnavailableError: If no adapter is available.
            ExternalServiceError: If the selected adapter fails or the
                request is cancelled.
        """
        request = MeasurementRequest(lat=lat, lng=lng, place_id=place_id, address=address)
        result = self._measurement_chain.resolve(request, cancel_event=cancel_event)
        logger.info(
            "Measured %s via %s: %d section(s), %.0f sq ft",
            place_id,
            result.method,
            len(result.sections),
            result.total_plan_area_sqft,
        )
        return result

    def set_manual_override(self, place_id: str, data: ManualMeasurementData) -> None:
        if self._manual_adapter is None:
            msg = "Manual measurement overrides are not enabled"
            raise ValidationError(msg)
        self._manual_adapter.set_override(place_id, data)

    def clear_manual_override(self, place_id: str) -> None:
        if self._manual_adapter is not None:
            self._manual_adapter.clear_override(place_id)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def _prepare(
        self,
        section: RoofSection,
        context: PricingContext,
    ) -> tuple[PitchCalculation | None, float, WasteResult, SectionPricingInput]:
        if section.system_type is None:
            msg = f"Section {section.section_id or '?'} has no system type selected"
            raise ValidationError(msg)

        pitch: PitchCalculation | None = None
        if section.kind == RoofKind.SLOPED:
            assert section.pitch_rise_per_12 is not None
            pitch = calculate_sloped_area(section.plan_area_sqft, section.pitch_rise_per_12)
            area = pitch.sloped_area_sqft
        else:
            area = section.plan_area_sqft

        waste = self._waste_evaluator.evaluate(area, section.complexity)
        pricing_input = SectionPricingInput(
            kind=section.kind,
            system_type=section.system_type,
            final_squares=waste.final_squares,
            pitch_tier=pitch.tier if pitch is not None else None,
            context=context,
            section_id=section.section_id,
        )
        return pitch, area, waste, pricing_input

    def price_section(self, section: RoofSection, context: PricingContext) -> SectionQuote:
        """Price a single section with its selected system type.

        Raises:
            ValidationError: If no system type is selected, it belongs to
                the wrong family, or the geometry is invalid.
            NotFoundError: If the rate card has no matching entry.
        """
        pitch, area, waste, pricing_input = self._prepare(section, context)
        pricing = self._pricing_engine.price_section(pricing_input)
        return SectionQuote(
            section=section,
            pitch=pitch,
            priced_area_sqft=area,
            waste=waste,
            pricing=pricing,
        )

    def price_quote(
        self,
        sections: Sequence[RoofSection],
        context: PricingContext,
    ) -> QuotePricingResult:
        """Price every section, sum them and finance the total.

        All-or-nothing: if any section fails, nothing is returned and
        financing is never computed.
        """
        if not sections:
            msg = "A quote needs at least one roof section"
            raise ValidationError(msg)

        prepared = [self._prepare(section, context) for section in sections]
        quote_price = self._pricing_engine.calculate_quote_price(
            [pricing_input for _, _, _, pricing_input in prepared]
        )

        section_quotes = [
            SectionQuote(
                section=section,
                pitch=pitch,
                priced_area_sqft=area,
                waste=waste,
                pricing=pricing,
            )
            for section, (pitch, area, waste, _), pricing in zip(
                sections, prepared, quote_price.sections
            )
        ]
        degraded = any(sq.waste.used_default_rules for sq in section_quotes)
        if degraded:
            logger.warning("Quote priced with built-in default waste rules")

        financing = self.calculate_financing(quote_price.total_price)
        return QuotePricingResult(
            sections=section_quotes,
            total_price=quote_price.total_price,
            breakdown=quote_price.breakdown,
            financing=financing,
            degraded_pricing=degraded,
        )

    def calculate_financing(self, total_amount: float) -> FinancingResult:
        return self._finance_calculator.calculate_options(total_amount)

    # ------------------------------------------------------------------
    # Quote assembly
    # ------------------------------------------------------------------

    def build_quote(
        self,
        measurement: MeasurementResult,
        context: PricingContext,
        selections: Mapping[str, SystemType] | None = None,
    ) -> Quote:
        """Apply system selections to a measurement and price the result.

        Args:
            measurement: Sections to quote.
            context: County, stories and tear-off for the whole quote.
            selections: System type per ``section_id``. Sections without
                an entry keep their existing selection, or get the default
                for their kind (shingle for sloped, TPO for flat).

        Raises:
            ValidationError: If a selection crosses roof families.
        """
        selections = selections or {}
        sections = [
            section.with_system(
                selections.get(section.section_id or "")
                or section.system_type
                or DEFAULT_SYSTEM_BY_KIND[section.kind]
            )
            for section in measurement.sections
        ]

        pricing = self.price_quote(sections, context)
        return Quote(
            quote_id=uuid.uuid4().hex,
            context=context,
            measurement=measurement,
            sections=sections,
            pricing=pricing,
        )

    def close(self) -> None:
        """Close the measurement adapters."""
        self._measurement_chain.close()
