"""Pricing engine: rate-card lookup and per-section price composition.

For each section the engine:

1. **Family guard**: rejects a system type whose family (sloped / flat)
   disagrees with the section kind. Flat sections are never priced as
   metal or shingle.
2. **Rate-card lookup**: exact ``RateCardKey`` first, then the same key
   with ``county="DEFAULT"``; no match is a :class:`NotFoundError`, never a
   zero price.
3. **Square price**: ``price_per_square * final_squares``.
4. **Multipliers**, in fixed order: pitch tier (sloped only), story factor
   compounded per story above the first, tear-off ``1 + rate * layers``,
   HVHZ. Each applied step adds a breakdown line with the dollar delta it
   introduced, so the lines add up to the total.
5. **Fixed adders**: named dollar amounts (permit, disposal...) summed on
   top of the adjusted square price.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roofquote.data.cache import SnapshotCache
from roofquote.data.counties import is_service_county
from roofquote.exceptions import ConfigurationError, NotFoundError
from roofquote.models.enums import RoofKind
from roofquote.models.quote import BreakdownLine, PricingResult, QuotePrice
from roofquote.models.roof import ensure_family_matches

if TYPE_CHECKING:
    from roofquote.data.repository import ConfigurationStore
    from roofquote.models.quote import SectionPricingInput
    from roofquote.models.rules import RateCardEntry, RateCardKey

logger = logging.getLogger(__name__)

_ADDER_DESCRIPTIONS: dict[str, str] = {
    "permit": "Permit Fees",
    "disposal": "Material Disposal",
    "dumpster": "Dumpster Rental",
    "cleanup": "Job Site Cleanup",
    "delivery": "Material Delivery",
    "mobilization": "Mobilization",
}


def _cents(amount: float) -> float:
    return round(amount, 2)


def describe_adder(name: str) -> str:
    """Customer-facing label for a fixed adder key."""
    return _ADDER_DESCRIPTIONS.get(name, name[:1].upper() + name[1:])


class PricingEngine:
    """Prices roof sections against the rate card.

    Args:
        store: Configuration store providing rate-card entries.

    Example::

        engine = PricingEngine(store)
        result = engine.price_section(pricing_input)
    """

    def __init__(self, store: ConfigurationStore) -> None:
        self._store = store
        self._cache: SnapshotCache[RateCardKey, RateCardEntry] = SnapshotCache()

    def invalidate(self) -> None:
        """Forget every cached rate-card entry."""
        self._cache.invalidate()

    # ------------------------------------------------------------------
    # Rate-card resolution
    # ------------------------------------------------------------------

    def _fetch(self, key: RateCardKey) -> RateCardEntry | None:
        store = self._store
        try:
            return self._cache.get_or_load(key, lambda: store.get_rate_card_entry(key))
        except Exception as exc:
            msg = f"Rate card store unavailable while looking up {key.describe()}: {exc}"
            raise ConfigurationError(msg) from exc

    def resolve_entry(self, key: RateCardKey) -> tuple[RateCardEntry, bool]:
        """Find the entry for ``key``, falling back to the DEFAULT county.

        Returns:
            ``(entry, used_default_county)``.

        Raises:
            NotFoundError: If neither the county nor DEFAULT has a row.
            ConfigurationError: If the store cannot be reached.
        """
        entry = self._fetch(key)
        if entry is not None:
            return entry, False

        default_key = key.for_default_county()
        entry = self._fetch(default_key)
        if entry is not None:
            if is_service_county(key.county):
                logger.info("No rate card for %s; using DEFAULT county pricing", key.describe())
            else:
                logger.warning(
                    "%s is outside the service area; using DEFAULT county pricing", key.county
                )
            return entry, True

        msg = f"No pricing found for {key.describe()}"
        raise NotFoundError(msg)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def price_section(self, pricing_input: SectionPricingInput) -> PricingResult:
        """Price one section.

        Raises:
            ValidationError: If the system type's family disagrees with the
                section kind.
            NotFoundError: If no rate-card entry resolves.
        """
        ensure_family_matches(pricing_input.kind, pricing_input.system_type)

        context = pricing_input.context
        entry, used_default = self.resolve_entry(pricing_input.rate_card_key())
        multipliers = entry.multipliers

        price_per_square = entry.price_per_square
        squares = pricing_input.final_squares
        base_square_price = _cents(price_per_square * squares)
        breakdown = [
            BreakdownLine(
                description=(
                    f"{pricing_input.system_type} - {squares:.1f} squares "
                    f"@ ${price_per_square:,.2f}/sq"
                ),
                amount=base_square_price,
            )
        ]

        applied: dict[str, float] = {}
        steps: list[tuple[str, str, float]] = []

        tier = pricing_input.pitch_tier
        if pricing_input.kind == RoofKind.SLOPED and tier is not None and tier in multipliers.pitch:
            steps.append(("pitch", f"{tier} pitch adjustment", multipliers.pitch[tier]))

        if context.story_count > 1:
            factor = multipliers.story ** (context.story_count - 1)
            steps.append(("story", f"{context.story_count}-story adjustment", factor))

        layers = context.tear_off_layers
        if layers > 0:
            factor = 1 + multipliers.tear_off * layers
            label = f"{layers} layer{'s' if layers > 1 else ''} tear-off"
            steps.append(("tear_off", label, factor))

        if context.hvhz:
            steps.append(("hvhz", "High Velocity Hurricane Zone", multipliers.hvhz))

        running = base_square_price
        for name, description, factor in steps:
            if factor == 1.0:
                continue
            adjusted = _cents(running * factor)
            applied[name] = factor
            breakdown.append(
                BreakdownLine(
                    description=description,
                    amount=_cents(adjusted - running),
                    is_multiplier=True,
                )
            )
            running = adjusted

        fixed_adders = entry.fixed_adders
        fixed_total = 0.0
        for name, amount in fixed_adders.items():
            fixed_total += amount
            breakdown.append(BreakdownLine(description=describe_adder(name), amount=amount))

        return PricingResult(
            section_id=pricing_input.section_id,
            system_type=pricing_input.system_type,
            county=entry.key.county,
            used_default_county=used_default,
            price_per_square=price_per_square,
            final_squares=squares,
            total_square_price=base_square_price,
            multipliers=applied,
            adjusted_square_price=running,
            fixed_adders=fixed_adders,
            total_price=_cents(running + fixed_total),
            breakdown=breakdown,
        )

    def calculate_quote_price(self, inputs: list[SectionPricingInput]) -> QuotePrice:
        """Price every section and sum them into a quote total.

        Any section failure propagates; a partially priced quote is never
        returned.
        """
        results = [self.price_section(pricing_input) for pricing_input in inputs]

        breakdown: list[BreakdownLine] = []
        for pricing_input, result in zip(inputs, results):
            label = "Flat Sections" if pricing_input.kind == RoofKind.FLAT else "Sloped Sections"
            breakdown.append(
                BreakdownLine(
                    description=f"{label} ({pricing_input.system_type})",
                    amount=result.total_price,
                )
            )

        return QuotePrice(
            sections=results,
            total_price=_cents(sum(r.total_price for r in results)),
            breakdown=breakdown,
        )
