"""Tests for environment-driven settings."""

import pytest

from ratecalc.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for key in ("MAX_WORKERS", "LOG_LEVEL", "LOG_JSON", "REPORTING_CURRENCY"):
        monkeypatch.delenv(f"RATECALC_{key}", raising=False)
    settings = Settings()
    assert settings.max_workers == 4
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.reporting_currency is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RATECALC_MAX_WORKERS", "8")
    monkeypatch.setenv("RATECALC_LOG_LEVEL", "debug")
    monkeypatch.setenv("RATECALC_LOG_JSON", "yes")
    monkeypatch.setenv("RATECALC_REPORTING_CURRENCY", "USD")
    settings = get_settings()
    assert settings.max_workers == 8
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.reporting_currency == "USD"
    assert get_settings() is settings


def test_malformed_and_out_of_range_values(monkeypatch) -> None:
    monkeypatch.setenv("RATECALC_MAX_WORKERS", "many")
    assert Settings().max_workers == 4
    monkeypatch.setenv("RATECALC_MAX_WORKERS", "0")
    assert Settings().max_workers == 1
