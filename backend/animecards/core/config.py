"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="ANIMECARDS_",
        extra="ignore",
    )

    app_name: str = "Anime Cards"
    secret_key: str = "change-me"

    # Database
    database_url: str = "sqlite+aiosqlite:///./animecards.db"

    # Sessions
    session_ttl_minutes: int = 60 * 24 * 7
    session_cookie_name: str = "animecards_session"
    session_cookie_secure: bool = False
    session_purge_enabled: bool = True
    session_purge_interval_seconds: int = 900  # 15 minutes

    allowed_origins: Annotated[List[str], NoDecode] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5000",
        "http://127.0.0.1:5000",
    ]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
