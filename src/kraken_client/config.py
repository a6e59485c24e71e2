"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from kraken_client.exchange.kraken_client import ClientConfiguration
from kraken_client.models import Credentials


class KrakenSettings(BaseSettings):
    """Kraken connection and retry settings."""

    model_config = SettingsConfigDict(env_prefix="KRAKEN_")

    base_url: str = "https://api.kraken.com/0"
    retry_initial_interval: float = 2.0  # seconds
    retry_multiplier: float = 2.0
    retry_max_elapsed_time: float = 15.0  # seconds

    def to_configuration(self) -> ClientConfiguration:
        return ClientConfiguration(
            base_url=self.base_url,
            retry_initial_interval=self.retry_initial_interval,
            retry_multiplier=self.retry_multiplier,
            retry_max_elapsed_time=self.retry_max_elapsed_time,
        )


class CredentialSettings(BaseSettings):
    """API credentials for private endpoints.

    The private key is the base64 secret Kraken shows once on key creation;
    the OTP secret is the base32 seed of the key's 2FA password.
    """

    model_config = SettingsConfigDict(env_prefix="KRAKEN_")

    api_key: SecretStr = SecretStr("")
    private_key: SecretStr = SecretStr("")
    otp_secret: SecretStr = SecretStr("")

    @property
    def configured(self) -> bool:
        return bool(self.api_key.get_secret_value())

    def to_credentials(self) -> Credentials:
        return Credentials(
            api_key=self.api_key.get_secret_value(),
            private_key=self.private_key.get_secret_value(),
            otp_secret=self.otp_secret.get_secret_value(),
        )


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    kraken: KrakenSettings = KrakenSettings()
    credentials: CredentialSettings = CredentialSettings()
