"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default, the service starts with an empty environment
    - get_settings() is cached (lru_cache): single instance per process
    - Storage is always SQLite; database_url is derived from disk_path/db_filename
      unless DATABASE_URL overrides it

Design Decisions:
    - VALIDATION_MODE makes the permissive ingestion policy an explicit choice
      (lenient) with a strict alternative
    - Admin credentials are optional here; the admin gate reports a missing
      configuration at request time
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    disk_path: str = "./data"
    db_filename: str = "logs.db"
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str | None) -> str | None:
        """Plain sqlite:// URLs get the async driver; other engines are rejected."""
        if v is None or v == "":
            return None
        if not isinstance(v, str) or not v.startswith("sqlite"):
            raise ValueError("DATABASE_URL must be a sqlite URL")
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    # Ingestion
    validation_mode: Literal["lenient", "strict"] = "lenient"
    max_body_bytes: int = 5 * 1024 * 1024

    # Admin gate
    basic_auth_user: str | None = None
    basic_auth_pass: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 10000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        db_path = Path(self.disk_path) / self.db_filename
        return f"sqlite+aiosqlite:///{db_path.as_posix()}"

    @property
    def strict_validation(self) -> bool:
        return self.validation_mode == "strict"


@lru_cache
def get_settings() -> Settings:
    return Settings()
