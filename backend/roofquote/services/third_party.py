"""Third-party aerial measurement provider over HTTP."""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError as PydanticValidationError

from roofquote.config import DEFAULT_MEASURE_TIMEOUT_SECONDS, DEFAULT_PROBE_TIMEOUT_SECONDS
from roofquote.exceptions import ExternalServiceError
from roofquote.models.enums import MeasurementMethod, MeasurementQuality, RoofKind
from roofquote.models.measurement import MeasurementRequest, MeasurementResult
from roofquote.models.roof import RoofComplexity, RoofSection
from roofquote.services.measurement import MeasurementAdapter

logger = logging.getLogger(__name__)

_DEFAULT_ATTRIBUTION = "© Third Party Measurement Service"

_HIGH_CONFIDENCE = 0.8
_MEDIUM_CONFIDENCE = 0.6


def quality_from_confidence(confidence: float | None) -> MeasurementQuality:
    """Map the vendor's 0-1 confidence onto our quality tiers."""
    if confidence is None:
        return MeasurementQuality.LOW
    if confidence > _HIGH_CONFIDENCE:
        return MeasurementQuality.HIGH
    if confidence > _MEDIUM_CONFIDENCE:
        return MeasurementQuality.MEDIUM
    return MeasurementQuality.LOW


class ThirdPartyMeasurementAdapter(MeasurementAdapter):
    """Calls an external measurement API.

    ``GET {base_url}/health`` is the availability probe and
    ``POST {base_url}/measure`` the measurement; both use bearer auth and
    explicit timeouts. Without an API key and base URL the adapter is
    simply unavailable.
    """

    name = "thirdParty"

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "",
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        measure_timeout: float = DEFAULT_MEASURE_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._probe_timeout = probe_timeout
        self._measure_timeout = measure_timeout
        self._session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._base_url)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def is_available(self, request: MeasurementRequest) -> bool:
        """Health probe; network errors propagate to the chain."""
        if not self.configured:
            return False
        response = self._session.get(
            f"{self._base_url}/health",
            headers=self._headers(),
            timeout=self._probe_timeout,
        )
        return response.ok

    def measure(self, request: MeasurementRequest) -> MeasurementResult:
        if not self.configured:
            msg = "Third-party measurement service not configured"
            raise ExternalServiceError(msg)

        payload = {
            "latitude": request.lat,
            "longitude": request.lng,
            "placeId": request.place_id,
            "address": request.address,
        }
        try:
            response = self._session.post(
                f"{self._base_url}/measure",
                json=payload,
                headers=self._headers(),
                timeout=self._measure_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as exc:
            msg = f"Third-party measurement timed out after {self._measure_timeout:.0f}s"
            raise ExternalServiceError(msg) from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "unknown"
            msg = f"Third-party service error: {status}"
            raise ExternalServiceError(msg) from exc
        except (requests.RequestException, ValueError) as exc:
            msg = f"Third-party measurement service unavailable: {exc}"
            raise ExternalServiceError(msg) from exc

        result = self.transform_response(data)
        logger.info(
            "Third-party measurement %s for %s: %d section(s), quality=%s",
            result.metadata.get("measurementId"),
            request.place_id,
            len(result.sections),
            result.quality,
        )
        return result

    @staticmethod
    def transform_response(data: Any) -> MeasurementResult:
        """Translate the vendor payload into a :class:`MeasurementResult`.

        Raises:
            ExternalServiceError: If the payload is malformed.
        """
        if not isinstance(data, dict):
            msg = "Malformed third-party response: expected a JSON object"
            raise ExternalServiceError(msg)

        raw_sections = data.get("roofSections") or []
        try:
            sections = [
                _translate_section(index, raw) for index, raw in enumerate(raw_sections)
            ]
            confidence = data.get("confidence")
            quality = quality_from_confidence(
                float(confidence) if confidence is not None else None
            )
        except (PydanticValidationError, TypeError, ValueError, KeyError) as exc:
            msg = f"Malformed third-party response: {exc}"
            raise ExternalServiceError(msg) from exc

        if not sections:
            msg = "Third-party response contained no roof sections"
            raise ExternalServiceError(msg)

        return MeasurementResult(
            quality=quality,
            method=MeasurementMethod.THIRD_PARTY,
            sections=sections,
            imagery_attribution=data.get("attribution") or _DEFAULT_ATTRIBUTION,
            metadata={
                "confidence": confidence,
                "processingTime": data.get("processingTimeMs"),
                "vendorId": data.get("vendorId"),
                "measurementId": data.get("measurementId"),
            },
        )

    def close(self) -> None:
        self._session.close()


def _translate_section(index: int, raw: Any) -> RoofSection:
    if not isinstance(raw, dict):
        msg = f"roof section {index} is not an object"
        raise TypeError(msg)
    kind = RoofKind.SLOPED if raw.get("type") == "pitched" else RoofKind.FLAT
    pitch = raw.get("pitch") if kind == RoofKind.SLOPED else None
    return RoofSection(
        section_id=f"section-{index}",
        kind=kind,
        plan_area_sqft=raw["planArea"],
        pitch_rise_per_12=pitch,
        complexity=RoofComplexity(
            facets=raw.get("facetCount") or 4,
            hips_valleys=raw.get("hipsAndValleys") or 0,
            penetrations=raw.get("penetrations") or 2,
        ),
    )
