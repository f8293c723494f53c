"""Tests for the public API surface of the roofquote package.

Verifies that consumers can import everything they need from the top-level
``roofquote`` package, use ``create_default_pipeline`` for quick setup, and
round-trip quotes through JSON serialization.
"""

from __future__ import annotations

import json

from roofquote import (
    PricingContext,
    Quote,
    RoofQuoteError,
    SystemType,
    ValidationError,
    create_default_pipeline,
)
from roofquote.config import Settings


def test_quick_start() -> None:
    pipeline = create_default_pipeline(settings=Settings())
    measurement = pipeline.resolve_measurement(26.1224, -80.1373, "broward-1")

    quote = pipeline.build_quote(measurement, PricingContext(county="Broward"))

    assert quote.context.hvhz
    assert quote.total_price > 0
    assert all(s.system_type in SystemType for s in quote.sections)


def test_quote_json_round_trip() -> None:
    pipeline = create_default_pipeline(settings=Settings())
    measurement = pipeline.resolve_measurement(26.1224, -80.1373, "broward-1")
    quote = pipeline.build_quote(measurement, PricingContext(county="Broward"))

    payload = json.loads(quote.model_dump_json())
    restored = Quote.model_validate(payload)

    assert restored == quote
    assert payload["measurement"]["method"] == "heuristic"


def test_errors_share_a_base() -> None:
    assert issubclass(ValidationError, RoofQuoteError)
    assert issubclass(ValidationError, ValueError)
