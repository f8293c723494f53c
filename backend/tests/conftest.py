"""Shared fixtures: a seeded configuration store and the objects built on it."""

from __future__ import annotations

import pytest

from roofquote.config import Settings
from roofquote.data.repository import InMemoryConfigurationStore
from roofquote.engine import PricingEngine
from roofquote.factory import create_default_pipeline, create_default_store
from roofquote.finance import FinanceCalculator
from roofquote.services.pipeline import QuotePipeline
from roofquote.waste import WasteRuleEvaluator


@pytest.fixture()
def store() -> InMemoryConfigurationStore:
    """Store loaded with the seed rate card, waste rules and finance plans."""
    return create_default_store()


@pytest.fixture()
def evaluator(store: InMemoryConfigurationStore) -> WasteRuleEvaluator:
    return WasteRuleEvaluator(store)


@pytest.fixture()
def engine(store: InMemoryConfigurationStore) -> PricingEngine:
    return PricingEngine(store)


@pytest.fixture()
def finance(store: InMemoryConfigurationStore) -> FinanceCalculator:
    return FinanceCalculator(store)


@pytest.fixture()
def pipeline(store: InMemoryConfigurationStore) -> QuotePipeline:
    """Default pipeline with no third-party provider configured."""
    return create_default_pipeline(store=store, settings=Settings())
