from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    debug: bool = Field(default=False)
    config_path: str = Field(default="config.yml")

    # Mastodon HTTP access
    mastodon_timeout: int = Field(default=10)
    mastodon_user_agent: str = Field(default="handlecheck/1.0 (+Mastodon handle verification)")
    mastodon_template_cache_ttl_hours: int = Field(default=24)


class HandleFieldConfig:
    """Handle field configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.option_name: str = data.get("option_name", "ownMastodon")
        self.prefetch_subscribe_template: bool = data.get("prefetch_subscribe_template", True)


class MastodonConfig:
    """Mastodon client configuration from config.yml and environment."""

    def __init__(self, data: dict[str, Any], settings: "Settings") -> None:
        self.timeout_seconds: int = data.get("timeout_seconds", settings.mastodon_timeout)
        self.user_agent: str = settings.mastodon_user_agent
        self.template_cache_ttl_hours: int = data.get(
            "template_cache_ttl_hours",
            settings.mastodon_template_cache_ttl_hours,
        )


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path(self.settings.config_path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.handle_field = HandleFieldConfig(data.get("handle_field", {}))
        self.mastodon = MastodonConfig(data.get("mastodon", {}), self.settings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
