"""Custom exception hierarchy for the roofquote pipeline.

Each error carries a ``status_code`` hint so the request layer can map it
to an HTTP response without knowing the taxonomy.
"""

from __future__ import annotations


class RoofQuoteError(Exception):
    """Base exception for all roofquote errors."""

    status_code: int = 500


class ValidationError(RoofQuoteError, ValueError):
    """Raised for malformed or out-of-domain input. Never retried."""

    status_code = 400


class NotFoundError(RoofQuoteError):
    """Raised when a rate-card entry or referenced record cannot be resolved."""

    status_code = 404


class ServiceUnavailableError(RoofQuoteError):
    """Raised when no measurement adapter reports itself available."""

    status_code = 503

    def __init__(self, message: str, probe_errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.probe_errors = list(probe_errors or [])


class ExternalServiceError(RoofQuoteError):
    """Raised when a selected measurement adapter fails to measure."""

    status_code = 503


class ConfigurationError(RoofQuoteError):
    """Raised for operator-actionable configuration problems.

    No eligible financing plan, or a configuration store that is
    unreachable with no usable fallback.
    """

    status_code = 500
