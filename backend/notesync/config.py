"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - notes_path is always data_dir / notes_file

Design Decisions:
    - Defaults: port 3000, ./data/notes.json,
      24h token freshness, JSON file storage
"""

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notesync.core.domain_types import StorageBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Storage
    storage_backend: StorageBackend = StorageBackend.FILE
    data_dir: Path = Path("./data")
    notes_file: str = "notes.json"

    database_url: str = "sqlite+aiosqlite:///./data/notes.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Tokens
    token_max_age_seconds: int = 24 * 60 * 60

    # API
    cors_origins: list[str] = [
        "http://localhost:3000",
        "https://yourdomain.github.io",
    ]
    cors_allow_credentials: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def notes_path(self) -> Path:
        return self.data_dir / self.notes_file

    @property
    def token_max_age(self) -> timedelta:
        return timedelta(seconds=self.token_max_age_seconds)


@lru_cache
def get_settings() -> Settings:
    return Settings()
