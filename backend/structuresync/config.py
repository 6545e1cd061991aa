"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Secrets (edit_api_token) come from environment variables, never hardcoded
    - get_settings() is cached (lru_cache) — single instance per process
    - The multi-value delimiter is one setting shared by template and form generation

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - No edit token configured → edit routes are open (local development default)
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://structuresync:structuresync@db:5432/structuresync"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Generation
    multi_value_delimiter: str = ";"
    composite_name_separator: str = "+"

    # Schema seed imported on startup when the store is empty (JSON or YAML)
    schema_seed_file: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    edit_api_token: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
