"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(StrEnum):
    memory = "memory"
    redis = "redis"


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Storage ─────────────────────────────────────────────────────────────
    storage_backend: StorageBackend = StorageBackend.memory
    redis_url: str = "redis://localhost:6379/0"
    storage_key_prefix: str = "bio-calendar"

    # ── Calendar ────────────────────────────────────────────────────────────
    calendar_default_days: int = 30
    calendar_max_days: int = 366

    # ── Model council ───────────────────────────────────────────────────────
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    council_timeout_seconds: float = 30.0
    council_temperature: float = 0.2
    council_synthesizer_model: str = "anthropic/claude-sonnet-4.5"

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
