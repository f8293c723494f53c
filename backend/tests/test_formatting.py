"""Tests for the formatting helpers."""

from __future__ import annotations

from roofquote.formatting import (
    format_apr_range,
    format_currency,
    format_payment_range,
    format_term_range,
)


class TestFormatCurrency:
    def test_small_amount_keeps_cents(self) -> None:
        assert format_currency(7553.46) == "$7,553.46"

    def test_large_amount_drops_cents(self) -> None:
        assert format_currency(23_456.78) == "$23,457"


class TestFormatPaymentRange:
    def test_range(self) -> None:
        assert format_payment_range(72.2, 148.9) == "$72 - $149/month"

    def test_single_value_when_close(self) -> None:
        assert format_payment_range(120.10, 120.60) == "$120/month"


class TestFormatAprRange:
    def test_range(self) -> None:
        assert format_apr_range(7.99, 15.99) == "7.99% - 15.99% APR"

    def test_single(self) -> None:
        assert format_apr_range(5.5, 5.5) == "5.50% APR"


class TestFormatTermRange:
    def test_range(self) -> None:
        assert format_term_range(84, 180) == "7-15 years"

    def test_single_year(self) -> None:
        assert format_term_range(12, 12) == "1 year"

    def test_single_plural(self) -> None:
        assert format_term_range(120, 120) == "10 years"
