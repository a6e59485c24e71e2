"""Tests for environment-driven settings."""

import pytest

from kraken_client.config import AppSettings, CredentialSettings, KrakenSettings
from kraken_client.exchange.kraken_client import ClientConfiguration


class TestKrakenSettings:
    def test_defaults(self) -> None:
        settings = KrakenSettings()
        assert settings.base_url == "https://api.kraken.com/0"
        assert settings.retry_max_elapsed_time == 15.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KRAKEN_BASE_URL", "https://api.kraken.test/0")
        monkeypatch.setenv("KRAKEN_RETRY_MULTIPLIER", "1.5")
        settings = KrakenSettings()
        assert settings.base_url == "https://api.kraken.test/0"
        assert settings.retry_multiplier == 1.5

    def test_to_configuration(self) -> None:
        settings = KrakenSettings(
            base_url="https://api.kraken.test/0",
            retry_initial_interval=1.0,
            retry_multiplier=3.0,
            retry_max_elapsed_time=20.0,
        )
        configuration = settings.to_configuration()
        assert configuration == ClientConfiguration(
            base_url="https://api.kraken.test/0",
            retry_initial_interval=1.0,
            retry_multiplier=3.0,
            retry_max_elapsed_time=20.0,
        )
        assert configuration.retry_policy.max_elapsed_time == 20.0


class TestCredentialSettings:
    def test_unconfigured_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("KRAKEN_API_KEY", raising=False)
        assert CredentialSettings().configured is False

    def test_loaded_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KRAKEN_API_KEY", "env-key")
        monkeypatch.setenv("KRAKEN_PRIVATE_KEY", "c2VjcmV0")
        monkeypatch.setenv("KRAKEN_OTP_SECRET", "GEZDGNBV")
        settings = CredentialSettings()
        credentials = settings.to_credentials()
        assert settings.configured is True
        assert credentials.api_key == "env-key"
        assert credentials.private_key == "c2VjcmV0"
        assert credentials.otp_secret == "GEZDGNBV"

    def test_secrets_masked(self) -> None:
        settings = CredentialSettings(api_key="visible-key", private_key="c2VjcmV0")  # type: ignore[arg-type]
        assert "visible-key" not in repr(settings)
        assert "c2VjcmV0" not in repr(settings)


class TestAppSettings:
    def test_composes_sub_settings(self) -> None:
        settings = AppSettings(log_level="DEBUG")
        assert settings.log_level == "DEBUG"
        assert isinstance(settings.kraken, KrakenSettings)
        assert isinstance(settings.credentials, CredentialSettings)
