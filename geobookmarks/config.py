"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All deployment-specific values come from environment variables or .env
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: a local SQLite file and public Nominatim
      work out-of-the-box
    - geocoder_timeout_seconds defaults to None: lookups are not bounded by a timeout
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (durable preference store)
    database_url: str = "sqlite+aiosqlite:///./geobookmarks.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Reverse geocoding (Nominatim)
    nominatim_user_agent: str = "geobookmarks/1.0"
    nominatim_domain: str = "nominatim.openstreetmap.org"
    geocoder_language: str = "en"
    geocoder_timeout_seconds: float | None = None
    # Nominatim usage policy: at most one request per second
    geocoder_min_delay_seconds: float = 1.0

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
