"""Operator-entered measurement overrides."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from roofquote.exceptions import NotFoundError
from roofquote.models.enums import MeasurementMethod
from roofquote.models.measurement import ManualMeasurementData, MeasurementResult
from roofquote.services.measurement import MeasurementAdapter

if TYPE_CHECKING:
    from roofquote.models.measurement import MeasurementRequest

logger = logging.getLogger(__name__)

MANUAL_ATTRIBUTION = "© Manual Override"


class ManualMeasurementAdapter(MeasurementAdapter):
    """Serves manual overrides keyed by ``place_id``.

    The adapter is available for a request only when an override has been
    registered for that place. Overrides are stored per property, so two
    concurrent quotes for different places never see each other's data.
    """

    name = "manual"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._overrides: dict[str, tuple[ManualMeasurementData, datetime]] = {}

    def set_override(self, place_id: str, data: ManualMeasurementData) -> None:
        with self._lock:
            self._overrides[place_id] = (data, datetime.now(UTC))
        logger.info("Manual override set for %s (%d sections)", place_id, len(data.sections))

    def clear_override(self, place_id: str) -> None:
        with self._lock:
            removed = self._overrides.pop(place_id, None)
        if removed is not None:
            logger.info("Manual override cleared for %s", place_id)

    def has_override(self, place_id: str) -> bool:
        with self._lock:
            return place_id in self._overrides

    def is_available(self, request: MeasurementRequest) -> bool:
        return self.has_override(request.place_id)

    def measure(self, request: MeasurementRequest) -> MeasurementResult:
        with self._lock:
            stored = self._overrides.get(request.place_id)
        if stored is None:
            msg = f"No manual measurement data for {request.place_id}"
            raise NotFoundError(msg)

        data, set_at = stored
        return MeasurementResult(
            quality=data.quality,
            method=MeasurementMethod.MANUAL,
            sections=[s.to_section(i) for i, s in enumerate(data.sections)],
            imagery_attribution=MANUAL_ATTRIBUTION,
            metadata={
                "notes": data.notes,
                "overrideTimestamp": set_at.isoformat(),
            },
        )
