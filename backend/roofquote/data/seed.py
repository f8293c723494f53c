"""Seed configuration: default waste rules, finance plans and rate card.

Rate-card prices are South Florida 2025 figures per roofing square
(100 sq ft). County and HVHZ factors are baked into the stored price, so
the HVHZ multiplier on seeded entries is 1.0.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from roofquote.data.counties import COUNTY_MULTIPLIERS, HVHZ_COUNTIES
from roofquote.models.enums import PitchTier, SystemType
from roofquote.models.rules import (
    FinancePlan,
    RateCardEntry,
    RateCardKey,
    RateCardMultipliers,
    WasteRule,
    WasteRuleConfig,
)

DEFAULT_WASTE_RULES = WasteRuleConfig(
    base_percent=12,
    max_percent=22,
    facets=[
        WasteRule(min=0, max=6, add=0),
        WasteRule(min=7, max=12, add=2),
        WasteRule(min=13, max=20, add=4),
        WasteRule(min=21, max=999, add=6),
    ],
    hips_valleys=[
        WasteRule(min=0, max=2, add=0),
        WasteRule(min=3, max=5, add=1),
        WasteRule(min=6, max=10, add=3),
        WasteRule(min=11, max=999, add=5),
    ],
    penetrations=[
        WasteRule(min=0, max=3, add=0),
        WasteRule(min=4, max=8, add=1),
        WasteRule(min=9, max=15, add=2),
        WasteRule(min=16, max=999, add=4),
    ],
)

SEED_FINANCE_PLANS: list[FinancePlan] = [
    FinancePlan(
        id="standard",
        name="Standard Financing",
        apr_min=7.99,
        apr_max=15.99,
        term_min_months=84,
        term_max_months=180,
        amount_min_cents=500_000,
        amount_max_cents=10_000_000,
    ),
    FinancePlan(
        id="premium",
        name="Premium Financing",
        apr_min=5.99,
        apr_max=12.99,
        term_min_months=120,
        term_max_months=240,
        dealer_fee_percent=2.5,
        amount_min_cents=1_000_000,
        amount_max_cents=15_000_000,
    ),
]

# (base price per square in cents, HVHZ factor)
BASE_PRICES: dict[SystemType, tuple[int, Decimal]] = {
    SystemType.SHINGLE: (45_000, Decimal("1.15")),
    SystemType.METAL: (85_000, Decimal("1.20")),
    SystemType.FLAT_TPO: (75_000, Decimal("1.10")),
    SystemType.FLAT_MODBIT: (65_000, Decimal("1.10")),
    SystemType.FLAT_BUR: (70_000, Decimal("1.10")),
}

SEED_MULTIPLIERS = RateCardMultipliers(
    pitch={PitchTier.LOW: 1.0, PitchTier.MEDIUM: 1.05, PitchTier.STEEP: 1.15},
    story=1.08,
    tear_off=0.12,
    hvhz=1.0,
)

_PERMIT_RATE = Decimal("0.02")
_DISPOSAL_BASE_CENTS = 25_000
_DISPOSAL_PER_LAYER_CENTS = 15_000
_CLEANUP_CENTS = 15_000


def _round_cents(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def seed_price_per_square_cents(system_type: SystemType, county: str, hvhz: bool) -> int:
    """Stored price per square: base * county factor * HVHZ factor, half-up."""
    base_cents, hvhz_factor = BASE_PRICES[system_type]
    county_factor = Decimal(str(COUNTY_MULTIPLIERS[county]))
    price = Decimal(base_cents) * county_factor * (hvhz_factor if hvhz else Decimal(1))
    return _round_cents(price)


def seed_fixed_adders_cents(price_per_square_cents: int, tear_off_layers: int) -> dict[str, int]:
    return {
        "permit": _round_cents(Decimal(price_per_square_cents) * _PERMIT_RATE),
        "disposal": _DISPOSAL_BASE_CENTS + _DISPOSAL_PER_LAYER_CENTS * tear_off_layers,
        "cleanup": _CLEANUP_CENTS,
    }


def build_seed_rate_card() -> list[RateCardEntry]:
    """Generate the full seed rate card for every county and system.

    HVHZ counties only get hvhz=True rows; every other county (including
    DEFAULT) gets both.
    """
    entries: list[RateCardEntry] = []
    for county in COUNTY_MULTIPLIERS:
        hvhz_options = (True,) if county in HVHZ_COUNTIES else (False, True)
        for system_type in SystemType:
            pitch_tiers: tuple[PitchTier | None, ...] = (
                (None,) if system_type.is_flat else tuple(PitchTier)
            )
            for tier in pitch_tiers:
                for story_tier in (1, 2, 3):
                    for tear_off in (0, 1, 2):
                        for hvhz in hvhz_options:
                            price = seed_price_per_square_cents(system_type, county, hvhz)
                            entries.append(
                                RateCardEntry(
                                    key=RateCardKey(
                                        county=county,
                                        system_type=system_type,
                                        pitch_tier=tier,
                                        story_tier=story_tier,
                                        tear_off_layers=tear_off,
                                        hvhz=hvhz,
                                    ),
                                    price_per_square_cents=price,
                                    multipliers=SEED_MULTIPLIERS,
                                    fixed_adders_cents=seed_fixed_adders_cents(price, tear_off),
                                )
                            )
    return entries
