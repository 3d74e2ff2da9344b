"""
Offseason - Configuration and settings.

Loaded from environment variables (and .env in development).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str
    supabase_service_role_key: str

    # Table holding one row per user, keyed by auth user id
    profiles_table: str = "profiles"

    # Application
    offseason_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Dev user for the CLI
    dev_user_id: str = "00000000-0000-0000-0000-000000000001"

    @property
    def is_development(self) -> bool:
        return self.offseason_env == "development"

    @property
    def is_production(self) -> bool:
        return self.offseason_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
