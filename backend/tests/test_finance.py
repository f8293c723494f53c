"""Tests for amortization and financing options."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from roofquote.data.repository import DEFAULT_FINANCING_DISCLAIMER, InMemoryConfigurationStore
from roofquote.exceptions import ConfigurationError, ValidationError
from roofquote.finance import FinanceCalculator, monthly_payment
from roofquote.models.rules import FinancePlan


class TestMonthlyPayment:
    def test_known_value(self) -> None:
        # $10,000 at 12% APR over 12 months
        assert monthly_payment(10_000, 12.0, 12) == 888.49

    def test_zero_rate_is_exact_division(self) -> None:
        assert monthly_payment(10_000, 0, 120) == 10_000 / 120
        assert monthly_payment(1_000, 0, 3) == 1_000 / 3

    def test_non_decreasing_in_apr(self) -> None:
        payments = [monthly_payment(25_000, apr / 2, 120) for apr in range(0, 40)]
        assert payments == sorted(payments)

    def test_non_increasing_in_term(self) -> None:
        payments = [monthly_payment(25_000, 9.99, term) for term in range(12, 241, 12)]
        assert payments == sorted(payments, reverse=True)

    @pytest.mark.parametrize("term", [0, -12])
    def test_bad_term(self, term: int) -> None:
        with pytest.raises(ValidationError):
            monthly_payment(10_000, 7.99, term)

    def test_negative_apr(self) -> None:
        with pytest.raises(ValidationError):
            monthly_payment(10_000, -1, 12)


class TestCalculateOptions:
    def test_small_job_only_standard_plan(self, finance: FinanceCalculator) -> None:
        result = finance.calculate_options(7553.46)

        assert [o.plan_id for o in result.options] == ["standard"]
        option = result.options[0]
        assert option.monthly_payment_min == monthly_payment(7553.46, 7.99, 180)
        assert option.monthly_payment_max == monthly_payment(7553.46, 15.99, 84)
        assert result.overall_range.monthly_min == option.monthly_payment_min
        assert result.overall_range.monthly_max == option.monthly_payment_max
        assert result.disclaimer == DEFAULT_FINANCING_DISCLAIMER

    def test_larger_job_both_plans(self, finance: FinanceCalculator) -> None:
        result = finance.calculate_options(20_000)

        assert {o.plan_id for o in result.options} == {"standard", "premium"}
        assert result.overall_range.monthly_min == min(
            o.monthly_payment_min for o in result.options
        )
        assert result.overall_range.monthly_max == max(
            o.monthly_payment_max for o in result.options
        )

    def test_dealer_fee_inflates_principal(self, finance: FinanceCalculator) -> None:
        result = finance.calculate_options(20_000)
        premium = next(o for o in result.options if o.plan_id == "premium")

        assert premium.principal == pytest.approx(20_500)
        assert premium.monthly_payment_min == monthly_payment(20_500, 5.99, 240)

    def test_totals_and_interest(self, finance: FinanceCalculator) -> None:
        option = finance.calculate_options(20_000).options[0]
        assert option.total_payment_min == pytest.approx(
            option.monthly_payment_min * option.term_max_months, abs=0.01
        )
        assert option.total_interest_max == pytest.approx(
            option.total_payment_max - option.principal, abs=0.01
        )

    def test_amount_outside_every_plan(self, finance: FinanceCalculator) -> None:
        with pytest.raises(ConfigurationError, match="No financing options"):
            finance.calculate_options(1_000)

    def test_inactive_plans_ignored(self) -> None:
        store = InMemoryConfigurationStore(
            finance_plans=[
                FinancePlan(
                    id="retired",
                    name="Retired",
                    apr_min=1,
                    apr_max=2,
                    term_min_months=12,
                    term_max_months=24,
                    active=False,
                )
            ]
        )
        with pytest.raises(ConfigurationError):
            FinanceCalculator(store).calculate_options(10_000)

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount(self, finance: FinanceCalculator, amount: float) -> None:
        with pytest.raises(ValidationError):
            finance.calculate_options(amount)

    def test_store_failure_is_configuration_error(self) -> None:
        store = MagicMock()
        store.list_active_finance_plans.side_effect = ConnectionError("down")
        with pytest.raises(ConfigurationError):
            FinanceCalculator(store).calculate_options(10_000)

    def test_custom_disclaimer(self, store: InMemoryConfigurationStore) -> None:
        store.set_financing_disclaimer("Subject to approval.")
        assert FinanceCalculator(store).disclaimer() == "Subject to approval."


class TestFinancePlan:
    def test_amount_window_inclusive(self) -> None:
        plan = FinancePlan(
            id="p",
            name="P",
            apr_min=5,
            apr_max=10,
            term_min_months=12,
            term_max_months=60,
            amount_min_cents=500_000,
            amount_max_cents=1_000_000,
        )
        assert plan.accepts_amount(5_000)
        assert plan.accepts_amount(10_000)
        assert not plan.accepts_amount(4_999.99)
        assert not plan.accepts_amount(10_000.01)

    def test_inverted_apr_rejected(self) -> None:
        with pytest.raises(ValueError, match="apr_min"):
            FinancePlan(
                id="p", name="P", apr_min=10, apr_max=5, term_min_months=12, term_max_months=24
            )
