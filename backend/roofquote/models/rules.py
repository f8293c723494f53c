"""Administrator-owned configuration models: waste rules, rate card, finance plans."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roofquote.models.enums import PitchTier, SystemType

DEFAULT_COUNTY = "DEFAULT"

MAX_STORY_TIER = 3


class WasteRule(BaseModel):
    """One tier of a waste adder table: ``add`` percent for ``min <= value <= max``."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    add: float

    @model_validator(mode="after")
    def min_le_max(self) -> WasteRule:
        if self.min > self.max:
            msg = f"Waste rule min ({self.min}) must not exceed max ({self.max})"
            raise ValueError(msg)
        return self

    def matches(self, value: float) -> bool:
        return self.min <= value <= self.max


def _check_no_overlap(name: str, rules: list[WasteRule]) -> None:
    ordered = sorted(rules, key=lambda r: r.min)
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.min <= prev.max:
            msg = (
                f"Overlapping {name} waste tiers: "
                f"[{prev.min}, {prev.max}] and [{cur.min}, {cur.max}]"
            )
            raise ValueError(msg)


class WasteRuleConfig(BaseModel):
    """Waste percentage rules.

    ``base_percent`` is applied to every section, the three adder tables
    are looked up independently, and the sum is capped at ``max_percent``.
    Accepts the camelCase keys used by the admin JSON (``basePercent``,
    ``hipsValleys``...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_percent: float = Field(ge=0, alias="basePercent")
    max_percent: float = Field(ge=0, alias="maxPercent")
    facets: list[WasteRule] = Field(default_factory=list)
    hips_valleys: list[WasteRule] = Field(default_factory=list, alias="hipsValleys")
    penetrations: list[WasteRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def tiers_are_consistent(self) -> WasteRuleConfig:
        if self.base_percent > self.max_percent:
            msg = (
                f"base_percent ({self.base_percent}) must not exceed "
                f"max_percent ({self.max_percent})"
            )
            raise ValueError(msg)
        _check_no_overlap("facets", self.facets)
        _check_no_overlap("hips/valleys", self.hips_valleys)
        _check_no_overlap("penetrations", self.penetrations)
        return self


def story_tier_for(story_count: int) -> int:
    """Story tier used by the rate card: 1, 2 or 3 (meaning 3+)."""
    return min(story_count, MAX_STORY_TIER)


class RateCardKey(BaseModel):
    """Composite lookup key for a rate-card entry.

    Frozen and hashable, so it is used directly as a dict key.
    """

    model_config = ConfigDict(frozen=True)

    county: str = Field(min_length=1)
    system_type: SystemType
    pitch_tier: PitchTier | None = None
    story_tier: int = Field(default=1, ge=1, le=MAX_STORY_TIER)
    tear_off_layers: int = Field(default=0, ge=0, le=2)
    hvhz: bool = False

    @model_validator(mode="after")
    def flat_systems_have_no_pitch(self) -> RateCardKey:
        if self.system_type.is_flat and self.pitch_tier is not None:
            msg = f"Flat system {self.system_type} cannot be keyed by pitch tier"
            raise ValueError(msg)
        return self

    def for_default_county(self) -> RateCardKey:
        """The same key with the county replaced by the DEFAULT fallback."""
        return self.model_copy(update={"county": DEFAULT_COUNTY})

    def describe(self) -> str:
        pitch = self.pitch_tier.value if self.pitch_tier else "n/a"
        return (
            f"{self.system_type} in {self.county} (pitch={pitch}, "
            f"stories={self.story_tier}, tear_off={self.tear_off_layers}, "
            f"hvhz={self.hvhz})"
        )


class RateCardMultipliers(BaseModel):
    """Multiplicative adjustments stored with a rate-card entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pitch: dict[PitchTier, float] = Field(default_factory=dict)
    story: float = Field(default=1.0, gt=0)
    tear_off: float = Field(default=0.0, ge=0, alias="tearOff")
    hvhz: float = Field(default=1.0, gt=0)


class RateCardEntry(BaseModel):
    """Price per square plus the adjustment bundles for one rate-card key."""

    model_config = ConfigDict(frozen=True)

    key: RateCardKey
    price_per_square_cents: int = Field(ge=0)
    multipliers: RateCardMultipliers = Field(default_factory=RateCardMultipliers)
    fixed_adders_cents: dict[str, int] = Field(default_factory=dict)

    @property
    def price_per_square(self) -> float:
        return self.price_per_square_cents / 100

    @property
    def fixed_adders(self) -> dict[str, float]:
        return {name: cents / 100 for name, cents in self.fixed_adders_cents.items()}


class FinancePlan(BaseModel):
    """A lender program offered to customers.

    APR values are annual percentages (``7.99`` means 7.99%). The optional
    amount window is inclusive and expressed in cents.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    apr_min: float = Field(ge=0)
    apr_max: float = Field(ge=0)
    term_min_months: int = Field(gt=0)
    term_max_months: int = Field(gt=0)
    dealer_fee_percent: float | None = Field(default=None, ge=0)
    amount_min_cents: int | None = Field(default=None, ge=0)
    amount_max_cents: int | None = Field(default=None, ge=0)
    active: bool = True

    @model_validator(mode="after")
    def ranges_are_ordered(self) -> FinancePlan:
        if self.apr_min > self.apr_max:
            msg = f"apr_min ({self.apr_min}) must not exceed apr_max ({self.apr_max})"
            raise ValueError(msg)
        if self.term_min_months > self.term_max_months:
            msg = (
                f"term_min_months ({self.term_min_months}) must not exceed "
                f"term_max_months ({self.term_max_months})"
            )
            raise ValueError(msg)
        if (
            self.amount_min_cents is not None
            and self.amount_max_cents is not None
            and self.amount_min_cents > self.amount_max_cents
        ):
            msg = "amount_min_cents must not exceed amount_max_cents"
            raise ValueError(msg)
        return self

    def accepts_amount(self, loan_amount: float) -> bool:
        """Whether ``loan_amount`` (dollars) falls inside the eligibility window."""
        amount_cents = loan_amount * 100
        if self.amount_min_cents is not None and amount_cents < self.amount_min_cents:
            return False
        if self.amount_max_cents is not None and amount_cents > self.amount_max_cents:
            return False
        return True
