"""Runtime settings read from the environment (and a ``.env`` file, if any)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from roofquote.exceptions import ConfigurationError

_backend_dir = Path(__file__).resolve().parent.parent
_project_root = _backend_dir.parent

DEFAULT_PROBE_TIMEOUT_SECONDS = 5.0
DEFAULT_MEASURE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Settings for the measurement providers."""

    third_party_api_key: str = ""
    third_party_base_url: str = ""
    probe_timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS
    measure_timeout_seconds: float = DEFAULT_MEASURE_TIMEOUT_SECONDS
    heuristic_seed: int = 0

    @property
    def third_party_configured(self) -> bool:
        return bool(self.third_party_api_key and self.third_party_base_url)


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"{name} must be a number, got '{raw}'"
        raise ConfigurationError(msg) from exc
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        raise ConfigurationError(msg)
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{name} must be an integer, got '{raw}'"
        raise ConfigurationError(msg) from exc


def load_settings(*, use_dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from environment variables.

    Reads ``.env`` from the project root and ``backend/`` first; values
    already in the environment win.
    """
    if use_dotenv:
        load_dotenv(_project_root / ".env")
        load_dotenv(_backend_dir / ".env")

    return Settings(
        third_party_api_key=os.environ.get("THIRD_PARTY_MEASUREMENT_API_KEY", ""),
        third_party_base_url=os.environ.get("THIRD_PARTY_MEASUREMENT_BASE_URL", "").rstrip("/"),
        probe_timeout_seconds=_float_env(
            "MEASUREMENT_PROBE_TIMEOUT_SECONDS", DEFAULT_PROBE_TIMEOUT_SECONDS
        ),
        measure_timeout_seconds=_float_env(
            "MEASUREMENT_TIMEOUT_SECONDS", DEFAULT_MEASURE_TIMEOUT_SECONDS
        ),
        heuristic_seed=_int_env("HEURISTIC_MEASUREMENT_SEED", 0),
    )
