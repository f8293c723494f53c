"""Enums for the roofquote domain models.

Values match the identifiers used by the rate card and the measurement
providers, so they serialise unchanged.
"""

from enum import StrEnum


class RoofKind(StrEnum):
    """Physical kind of a roof section."""

    SLOPED = "SLOPED"
    FLAT = "FLAT"


class SystemType(StrEnum):
    """Roofing material families offered in a quote."""

    SHINGLE = "SHINGLE"
    METAL = "METAL"
    FLAT_TPO = "FLAT_TPO"
    FLAT_MODBIT = "FLAT_MODBIT"
    FLAT_BUR = "FLAT_BUR"

    @property
    def is_flat(self) -> bool:
        return self.value.startswith("FLAT_")

    @property
    def family(self) -> RoofKind:
        """The section kind this system may be installed on."""
        return RoofKind.FLAT if self.is_flat else RoofKind.SLOPED


class PitchTier(StrEnum):
    """Pitch buckets used by the rate card."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    STEEP = "STEEP"


class MeasurementQuality(StrEnum):
    """Quality tier reported with a measurement."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MeasurementMethod(StrEnum):
    """How a measurement was acquired."""

    THIRD_PARTY = "thirdParty"
    HEURISTIC = "heuristic"
    MANUAL = "manual"


class RuleSource(StrEnum):
    """Where the waste rules used for a calculation came from."""

    STORE = "store"
    EXPLICIT = "explicit"
    BUILT_IN_DEFAULT = "built_in_default"
