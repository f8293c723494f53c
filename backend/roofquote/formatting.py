"""Formatting helpers for quote and financing output.

Homeowners see monthly payments in whole dollars ('$189 - $247/month')
and totals with cents below $10,000.
"""

from __future__ import annotations

MONTHS_PER_YEAR = 12


def format_currency(amount: float) -> str:
    """Format a currency amount as a human-readable string.

    - Amounts >= $10,000: no cents, with comma separators (e.g., '$12,480')
    - Amounts < $10,000: with cents (e.g., '$7,553.46')
    """
    if amount >= 10_000:
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def format_payment_range(monthly_min: float, monthly_max: float) -> str:
    """'$X/month' when both ends round together, else '$X - $Y/month'."""
    if abs(monthly_max - monthly_min) < 1:
        return f"${monthly_min:,.0f}/month"
    return f"${monthly_min:,.0f} - ${monthly_max:,.0f}/month"


def format_apr_range(apr_min: float, apr_max: float) -> str:
    if apr_min == apr_max:
        return f"{apr_min:.2f}% APR"
    return f"{apr_min:.2f}% - {apr_max:.2f}% APR"


def format_term_range(term_min_months: int, term_max_months: int) -> str:
    """Express a term range in years, e.g. '7-15 years' or '1 year'."""
    min_years = term_min_months // MONTHS_PER_YEAR
    max_years = term_max_months // MONTHS_PER_YEAR
    if min_years == max_years:
        return f"{min_years} year{'s' if min_years != 1 else ''}"
    return f"{min_years}-{max_years} years"
