"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from roofquote.config import Settings, load_settings
from roofquote.exceptions import ConfigurationError

_ENV_VARS = (
    "THIRD_PARTY_MEASUREMENT_API_KEY",
    "THIRD_PARTY_MEASUREMENT_BASE_URL",
    "MEASUREMENT_PROBE_TIMEOUT_SECONDS",
    "MEASUREMENT_TIMEOUT_SECONDS",
    "HEURISTIC_MEASUREMENT_SEED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings(use_dotenv=False)
        assert settings == Settings()
        assert settings.probe_timeout_seconds == 5.0
        assert settings.measure_timeout_seconds == 30.0
        assert not settings.third_party_configured

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THIRD_PARTY_MEASUREMENT_API_KEY", "secret")
        monkeypatch.setenv("THIRD_PARTY_MEASUREMENT_BASE_URL", "https://measure.example.com/")
        monkeypatch.setenv("MEASUREMENT_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("HEURISTIC_MEASUREMENT_SEED", "42")

        settings = load_settings(use_dotenv=False)

        assert settings.third_party_configured
        assert settings.third_party_base_url == "https://measure.example.com"
        assert settings.measure_timeout_seconds == 12.5
        assert settings.heuristic_seed == 42

    def test_key_without_url_is_not_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THIRD_PARTY_MEASUREMENT_API_KEY", "secret")
        assert not load_settings(use_dotenv=False).third_party_configured

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_bad_timeout(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("MEASUREMENT_PROBE_TIMEOUT_SECONDS", value)
        with pytest.raises(ConfigurationError):
            load_settings(use_dotenv=False)

    def test_bad_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HEURISTIC_MEASUREMENT_SEED", "abc")
        with pytest.raises(ConfigurationError, match="HEURISTIC_MEASUREMENT_SEED"):
            load_settings(use_dotenv=False)
