"""Unit tests for service settings."""

import pytest

from insider_risk_index.settings import Settings


class TestSettings:
    """Environment overrides use the IRI_ prefix."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.service_name == "insider-risk-index"
        assert settings.persist_results is True
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.rate_limit_submit_per_minute == 10
        assert settings.rate_limit_read_per_minute == 60

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IRI_PERSIST_RESULTS", "false")
        monkeypatch.setenv("IRI_RATE_LIMIT_SUBMIT_PER_MINUTE", "3")
        settings = Settings()
        assert settings.persist_results is False
        assert settings.rate_limit_submit_per_minute == 3

    def test_log_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IRI_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("IRI_LOG_JSON", "false")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False
