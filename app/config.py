"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC offset) used to store and compare timestamps",
    )
    announcement_sweep_interval_seconds: int = Field(
        default=60,
        description="Seconds between two sweeps of due scheduled announcements",
        gt=0,
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Start the announcement scheduler together with the application",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma separated list of origins allowed by CORS",
    )

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        normalized = self.log_level.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        self.log_level = normalized
        return self

    @property
    def cors_origins_list(self) -> list[str]:
        """Return ``CORS_ORIGINS`` split into individual origins."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
