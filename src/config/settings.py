from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///kayanet_farm.db"
    log_level: str = "INFO"
    environment: str = "dev"
    # Directory holding the JSON blobs written by the old browser app
    # (kayanet_farm_sheep.json, kayanet_farm_transactions.json, kayanet_farm_health.json)
    legacy_data_dir: Path | None = None
    # Keep an in-memory working copy and flush it to the database periodically
    use_working_copy: bool = False
    flush_interval_seconds: float = 5.0
    # Serve from memory (degraded mode) when the database cannot be opened
    allow_memory_fallback: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="FARM_", extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def ensure_async_driver(cls, value: str) -> str:
        if value.startswith("sqlite://"):
            return value.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("flush_interval_seconds")
    @classmethod
    def ensure_positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("flush_interval_seconds must be positive")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
