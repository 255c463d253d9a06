"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from profilter.domain.exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.spotify.com/v1/"


class Settings(BaseSettings):
    """Profilter settings.

    The bearer credential is read from ``API_KEY`` (no prefix, it is shared
    with other Spotify tooling); everything else uses the ``PROFILTER_`` prefix.
    """

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "api_key"),
        description="Spotify Web API bearer token",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the Spotify Web API",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    model_config = SettingsConfigDict(
        env_prefix="PROFILTER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("api_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        # Resource paths are appended without a leading slash.
        return value if value.endswith("/") else f"{value}/"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def require_api_key(self) -> str:
        """Return the bearer credential or fail before any request is made.

        Raises:
            ConfigurationError: If no credential is configured
        """
        if self.api_key is None or not self.api_key.get_secret_value().strip():
            raise ConfigurationError(
                "You must provide an api key in the API_KEY env var"
            )
        return self.api_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance (read once)."""
    return Settings()
