"""Service-area counties and their pricing classification.

County multipliers are relative to the DEFAULT rate card (1.00).
"""

from __future__ import annotations

from roofquote.models.rules import DEFAULT_COUNTY

SERVICE_COUNTIES: tuple[str, ...] = ("Miami-Dade", "Broward", "Palm Beach")

# High-Velocity Hurricane Zone counties. Rate cards for these counties are
# only seeded with hvhz=True.
HVHZ_COUNTIES: frozenset[str] = frozenset({"Miami-Dade", "Broward"})

COUNTY_MULTIPLIERS: dict[str, float] = {
    "Miami-Dade": 1.15,
    "Broward": 1.10,
    "Palm Beach": 1.05,
    DEFAULT_COUNTY: 1.00,
}


def normalize_county(county: str) -> str:
    """Strip a trailing ' County' suffix, as returned by geocoders."""
    name = county.strip()
    if name.lower().endswith(" county"):
        name = name[: -len(" county")]
    return name


def is_hvhz_county(county: str) -> bool:
    return normalize_county(county) in HVHZ_COUNTIES


def is_service_county(county: str) -> bool:
    return normalize_county(county) in SERVICE_COUNTIES
