"""
Recipe Planner - Configuration and settings.

Settings are read from the environment and an optional .env file.
The OpenAI key is optional here: a missing key only matters when the
AI fallback actually runs, and surfaces as ProviderNotConfiguredError.
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

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_timeout_seconds: float | None = None  # None = client default
    openai_max_retries: int = 2

    # Page fetching
    fetch_timeout_seconds: float = 10.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (compatible; RecipePlanner/1.0; +https://github.com/recipe-planner)"
    )

    # AI extraction budgets
    max_html_chars: int = 100_000
    max_pdf_chars: int = 150_000
    html_max_tokens: int = 4096
    pdf_max_tokens: int = 8192

    # PDF import
    min_pdf_text_chars: int = 50
    max_pdf_upload_bytes: int = 20 * 1024 * 1024

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # LOG_PROMPTS=1 - write every AI prompt/response to prompt_logs/
    log_prompts: bool = False

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def ai_configured(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())


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
