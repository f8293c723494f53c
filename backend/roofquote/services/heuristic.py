"""Always-available heuristic measurement.

Produces a plausible residential roof when no real measurement source is
reachable. Output is derived from a PRNG seeded by the configured seed and
the request location, so the same request always yields the same roof.
"""

from __future__ import annotations

import hashlib
import logging
import random
from typing import TYPE_CHECKING

from roofquote.models.enums import MeasurementMethod, MeasurementQuality, RoofKind
from roofquote.models.measurement import MeasurementResult
from roofquote.models.roof import RoofComplexity, RoofSection
from roofquote.services.measurement import MeasurementAdapter

if TYPE_CHECKING:
    from roofquote.models.measurement import MeasurementRequest

logger = logging.getLogger(__name__)

HEURISTIC_ATTRIBUTION = "© Google / Heuristic Analysis"
HEURISTIC_CONFIDENCE = 0.65

FOOTPRINT_MIN_SQFT = 1800
FOOTPRINT_MAX_SQFT = 2600
MIXED_ROOF_PROBABILITY = 0.7
ALL_FLAT_PROBABILITY = 0.2
MIN_FLAT_PORTION_SQFT = 200
COMMON_PITCHES = (4, 5, 6, 7, 8)

# (facets, hips_valleys, penetrations) inclusive ranges by complexity
_COMPLEXITY_RANGES: dict[str, tuple[tuple[int, int], tuple[int, int], tuple[int, int]]] = {
    "simple": ((4, 5), (0, 1), (2, 3)),
    "moderate": ((6, 9), (2, 4), (4, 7)),
    "complex": ((10, 15), (5, 9), (6, 11)),
}

# Rough bounding box around the point, in degrees.
_BOUNDS_DELTA = 0.0002


def _complexity_level(area_sqft: float) -> str:
    if area_sqft < 1000:
        return "simple"
    if area_sqft < 2000:
        return "moderate"
    return "complex"


class HeuristicMeasurementAdapter(MeasurementAdapter):
    """Deterministic fallback measurement; never unavailable.

    Args:
        seed: Mixed into every request's PRNG seed. Changing it changes
            every generated roof.
    """

    name = "heuristic"

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed

    def _rng_for(self, request: MeasurementRequest) -> random.Random:
        material = f"{self._seed}|{request.lat:.7f}|{request.lng:.7f}|{request.place_id}"
        digest = hashlib.sha256(material.encode("utf-8")).digest()
        return random.Random(int.from_bytes(digest[:8], "big"))

    def is_available(self, request: MeasurementRequest) -> bool:
        return True

    def measure(self, request: MeasurementRequest) -> MeasurementResult:
        rng = self._rng_for(request)
        footprint = rng.uniform(FOOTPRINT_MIN_SQFT, FOOTPRINT_MAX_SQFT)
        sections = self._generate_sections(rng, footprint)
        logger.debug(
            "Heuristic measurement for %s: %.0f sq ft, %d section(s)",
            request.place_id,
            footprint,
            len(sections),
        )

        return MeasurementResult(
            quality=MeasurementQuality.MEDIUM,
            method=MeasurementMethod.HEURISTIC,
            sections=sections,
            imagery_attribution=HEURISTIC_ATTRIBUTION,
            metadata={
                "estimatedFootprintSqFt": round(footprint),
                "confidenceScore": HEURISTIC_CONFIDENCE,
                "needsUserConfirmation": len(sections) > 2,
                "bounds": {
                    "north": request.lat + _BOUNDS_DELTA,
                    "south": request.lat - _BOUNDS_DELTA,
                    "east": request.lng + _BOUNDS_DELTA,
                    "west": request.lng - _BOUNDS_DELTA,
                },
            },
        )

    def _generate_sections(self, rng: random.Random, footprint: float) -> list[RoofSection]:
        sections: list[RoofSection] = []

        if rng.random() < MIXED_ROOF_PROBABILITY:
            sloped_fraction = rng.uniform(0.6, 0.9)
            sloped_area = round(footprint * sloped_fraction)
            flat_area = round(footprint - sloped_area)
            sections.append(self._sloped_section(rng, len(sections), sloped_area))
            if flat_area > MIN_FLAT_PORTION_SQFT:
                sections.append(self._flat_section(len(sections), flat_area))
        elif rng.random() < ALL_FLAT_PROBABILITY:
            sections.append(self._flat_section(0, round(footprint)))
        else:
            sections.append(self._sloped_section(rng, 0, round(footprint)))

        return sections

    @staticmethod
    def _sloped_section(rng: random.Random, index: int, area: float) -> RoofSection:
        facets, hips, penetrations = _COMPLEXITY_RANGES[_complexity_level(area)]
        return RoofSection(
            section_id=f"section-{index}",
            kind=RoofKind.SLOPED,
            plan_area_sqft=area,
            pitch_rise_per_12=rng.choice(COMMON_PITCHES),
            complexity=RoofComplexity(
                facets=rng.randint(*facets),
                hips_valleys=rng.randint(*hips),
                penetrations=rng.randint(*penetrations),
            ),
        )

    @staticmethod
    def _flat_section(index: int, area: float) -> RoofSection:
        return RoofSection(
            section_id=f"section-{index}",
            kind=RoofKind.FLAT,
            plan_area_sqft=area,
            complexity=RoofComplexity(
                facets=1,
                hips_valleys=0,
                penetrations=max(1, int(area // 500)),
            ),
        )
