"""Factory functions for creating pre-configured pipeline instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roofquote.config import load_settings
from roofquote.data.repository import InMemoryConfigurationStore
from roofquote.data.seed import DEFAULT_WASTE_RULES, SEED_FINANCE_PLANS, build_seed_rate_card
from roofquote.engine import PricingEngine
from roofquote.finance import FinanceCalculator
from roofquote.services.heuristic import HeuristicMeasurementAdapter
from roofquote.services.manual import ManualMeasurementAdapter
from roofquote.services.measurement import MeasurementAdapterChain
from roofquote.services.pipeline import QuotePipeline
from roofquote.services.third_party import ThirdPartyMeasurementAdapter
from roofquote.waste import WasteRuleEvaluator

if TYPE_CHECKING:
    from roofquote.config import Settings


def create_default_store() -> InMemoryConfigurationStore:
    """In-memory configuration store loaded with the seed rate card,
    default waste rules and the standard/premium finance plans."""
    return InMemoryConfigurationStore(
        waste_rules=DEFAULT_WASTE_RULES,
        rate_card=build_seed_rate_card(),
        finance_plans=SEED_FINANCE_PLANS,
    )


def create_default_pipeline(
    store: InMemoryConfigurationStore | None = None,
    settings: Settings | None = None,
) -> QuotePipeline:
    """Create a QuotePipeline wired up with the seed configuration.

    Adapters are chained in preference order: third-party, manual override,
    heuristic. The waste evaluator and pricing engine caches are registered
    as change listeners on the store, so admin writes take effect on the
    next quote.

    Example::

        from roofquote import PricingContext, create_default_pipeline

        pipeline = create_default_pipeline()
        measurement = pipeline.resolve_measurement(25.76, -80.19, "place-1")
        quote = pipeline.build_quote(measurement, PricingContext(county="Miami-Dade"))
    """
    store = store if store is not None else create_default_store()
    settings = settings if settings is not None else load_settings()

    waste_evaluator = WasteRuleEvaluator(store)
    pricing_engine = PricingEngine(store)
    store.add_change_listener(waste_evaluator.invalidate)
    store.add_change_listener(pricing_engine.invalidate)

    manual = ManualMeasurementAdapter()
    chain = MeasurementAdapterChain(
        [
            ThirdPartyMeasurementAdapter(
                api_key=settings.third_party_api_key,
                base_url=settings.third_party_base_url,
                probe_timeout=settings.probe_timeout_seconds,
                measure_timeout=settings.measure_timeout_seconds,
            ),
            manual,
            HeuristicMeasurementAdapter(seed=settings.heuristic_seed),
        ]
    )
    return QuotePipeline(
        measurement_chain=chain,
        waste_evaluator=waste_evaluator,
        pricing_engine=pricing_engine,
        finance_calculator=FinanceCalculator(store),
        manual_adapter=manual,
    )
