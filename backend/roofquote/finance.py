"""Financing: eligible plans and monthly payment ranges for a loan amount."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roofquote.exceptions import ConfigurationError, ValidationError
from roofquote.models.quote import FinancingOption, FinancingResult, PaymentRange

if TYPE_CHECKING:
    from roofquote.data.repository import ConfigurationStore
    from roofquote.models.rules import FinancePlan

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def monthly_payment(principal: float, apr_percent: float, term_months: int) -> float:
    """Standard amortized monthly payment.

    ``apr_percent`` is annual (``7.99`` means 7.99%). With a zero rate the
    payment is exactly ``principal / term_months``; otherwise
    ``P * r * (1 + r)**n / ((1 + r)**n - 1)`` rounded to the cent.
    """
    if term_months <= 0:
        msg = f"Term must be a positive number of months, got {term_months}"
        raise ValidationError(msg)
    if apr_percent < 0:
        msg = f"APR must be non-negative, got {apr_percent}"
        raise ValidationError(msg)

    if apr_percent == 0:
        return principal / term_months

    rate = apr_percent / 100 / MONTHS_PER_YEAR
    growth = (1 + rate) ** term_months
    payment = principal * rate * growth / (growth - 1)
    return round(payment, 2)


class FinanceCalculator:
    """Computes financing options from the active finance plans.

    Args:
        store: Configuration store providing finance plans and the
            financing disclaimer.
    """

    def __init__(self, store: ConfigurationStore) -> None:
        self._store = store

    def _active_plans(self) -> list[FinancePlan]:
        try:
            return self._store.list_active_finance_plans()
        except Exception as exc:
            msg = f"Finance plan store unavailable: {exc}"
            raise ConfigurationError(msg) from exc

    def calculate_options(self, loan_amount: float) -> FinancingResult:
        """Payment ranges for every plan that can finance ``loan_amount``.

        Raises:
            ValidationError: If ``loan_amount`` is not positive.
            ConfigurationError: If no active plan covers the amount.
        """
        if not loan_amount > 0:
            msg = f"Loan amount must be positive, got {loan_amount}"
            raise ValidationError(msg)

        eligible = [
            plan
            for plan in self._active_plans()
            if plan.active and plan.accepts_amount(loan_amount)
        ]
        if not eligible:
            msg = f"No financing options available for ${loan_amount:,.2f}"
            raise ConfigurationError(msg)

        options = [self._option_for(plan, loan_amount) for plan in eligible]
        overall = PaymentRange(
            monthly_min=min(o.monthly_payment_min for o in options),
            monthly_max=max(o.monthly_payment_max for o in options),
        )
        logger.debug(
            "Financing $%.2f: %d plan(s), $%.2f - $%.2f/month",
            loan_amount,
            len(options),
            overall.monthly_min,
            overall.monthly_max,
        )
        return FinancingResult(
            loan_amount=loan_amount,
            options=options,
            overall_range=overall,
            disclaimer=self.disclaimer(),
        )

    def disclaimer(self) -> str | None:
        try:
            return self._store.get_financing_disclaimer()
        except Exception:
            logger.warning("Could not load financing disclaimer", exc_info=True)
            return None

    @staticmethod
    def _option_for(plan: FinancePlan, loan_amount: float) -> FinancingOption:
        """Best case is lowest APR at the longest term; worst is highest APR at the shortest."""
        principal = loan_amount
        if plan.dealer_fee_percent:
            principal = loan_amount * (1 + plan.dealer_fee_percent / 100)

        low = monthly_payment(principal, plan.apr_min, plan.term_max_months)
        high = monthly_payment(principal, plan.apr_max, plan.term_min_months)
        total_low = round(low * plan.term_max_months, 2)
        total_high = round(high * plan.term_min_months, 2)

        return FinancingOption(
            plan_id=plan.id,
            name=plan.name,
            apr_min=plan.apr_min,
            apr_max=plan.apr_max,
            term_min_months=plan.term_min_months,
            term_max_months=plan.term_max_months,
            dealer_fee_percent=plan.dealer_fee_percent,
            principal=round(principal, 2),
            monthly_payment_min=low,
            monthly_payment_max=high,
            total_payment_min=total_low,
            total_payment_max=total_high,
            total_interest_min=round(total_low - principal, 2),
            total_interest_max=round(total_high - principal, 2),
        )
