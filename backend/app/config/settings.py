from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKETPULSE_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
    finnhub_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "MARKETPULSE_FINNHUB_API_KEY"),
    )
    finnhub_base_url: str = "https://finnhub.io"
    quote_timeout_seconds: float = 5.0
    quote_max_retries: int = 2


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKETPULSE_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "MARKETPULSE_ENV"),
    )
    log_level: str = "INFO"

    providers: ProviderSettings = Field(default_factory=ProviderSettings)

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


settings = Settings()
