"""Measurement adapter interface and the fallback selection chain."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from roofquote.exceptions import (
    ExternalServiceError,
    RoofQuoteError,
    ServiceUnavailableError,
)

if TYPE_CHECKING:
    import threading
    from collections.abc import Sequence

    from roofquote.models.measurement import MeasurementRequest, MeasurementResult

logger = logging.getLogger(__name__)


class MeasurementAdapter(ABC):
    """A source of roof measurements.

    ``is_available`` is the cheap probe used for selection; ``measure``
    performs the real request. Adapters translate their native data into
    :class:`MeasurementResult`.
    """

    name: str = "adapter"

    @abstractmethod
    def is_available(self, request: MeasurementRequest) -> bool: ...

    @abstractmethod
    def measure(self, request: MeasurementRequest) -> MeasurementResult: ...

    def close(self) -> None:
        """Release any held resources. No-op by default."""


class MeasurementAdapterChain:
    """Selects the first available adapter in a fixed preference order.

    Only the availability probe falls back: a probe that raises is logged
    and the next adapter is tried. Once an adapter is selected its
    ``measure`` call is the whole request; a failure there is raised as
    :class:`ExternalServiceError` and is not retried elsewhere.
    """

    def __init__(self, adapters: Sequence[MeasurementAdapter]) -> None:
        if not adapters:
            msg = "MeasurementAdapterChain needs at least one adapter"
            raise ValueError(msg)
        self._adapters = tuple(adapters)

    @property
    def adapters(self) -> tuple[MeasurementAdapter, ...]:
        return self._adapters

    def select(self, request: MeasurementRequest) -> MeasurementAdapter:
        """Probe adapters in order and return the first available one.

        Raises:
            ServiceUnavailableError: If every probe failed or reported
                unavailable. ``probe_errors`` lists the failures.
        """
        probe_errors: list[str] = []
        for adapter in self._adapters:
            try:
                available = adapter.is_available(request)
            except Exception as exc:
                logger.warning("Adapter %s availability check failed: %s", adapter.name, exc)
                probe_errors.append(f"{adapter.name}: {exc}")
                continue
            if available:
                logger.info("Using measurement adapter: %s", adapter.name)
                return adapter
            logger.debug("Adapter %s reported unavailable", adapter.name)

        last_error = probe_errors[-1] if probe_errors else "none"
        msg = f"No measurement adapters available. Last error: {last_error}"
        raise ServiceUnavailableError(msg, probe_errors=probe_errors)

    def resolve(
        self,
        request: MeasurementRequest,
        cancel_event: threading.Event | None = None,
    ) -> MeasurementResult:
        """Produce exactly one measurement for ``request``.

        Args:
            request: Location to measure.
            cancel_event: When set before the measure call starts, the
                request is abandoned with :class:`ExternalServiceError`.
        """
        adapter = self.select(request)
        if cancel_event is not None and cancel_event.is_set():
            msg = f"Measurement request for {request.place_id} was cancelled"
            raise ExternalServiceError(msg)

        try:
            return adapter.measure(request)
        except ExternalServiceError:
            logger.error("Measurement failed with %s", adapter.name)
            raise
        except RoofQuoteError:
            raise
        except Exception as exc:
            logger.exception("Measurement failed with %s", adapter.name)
            msg = f"Measurement failed with {adapter.name}: {exc}"
            raise ExternalServiceError(msg) from exc

    def close(self) -> None:
        """Close every adapter, releasing pooled network connections.

        A measure call already in progress is not interrupted; it ends when
        it completes or its timeout expires.
        """
        for adapter in self._adapters:
            adapter.close()
