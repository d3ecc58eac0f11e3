"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All credentials come from environment variables or .env (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process
    - database_url always ends up as a postgresql+asyncpg:// (or test) URL

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - DB_HOST/DB_PORT/... parts assemble the URL when DATABASE_URL is unset,
      matching the docker-compose environment
"""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.domain_types import StorageBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "password"
    db_name: str = "myexpenses"
    db_sslmode: str = "disable"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    @model_validator(mode="after")
    def assemble_database_url(self) -> "Settings":
        if self.database_url:
            return self
        url = (
            f"postgresql+asyncpg://{quote_plus(self.db_user)}:"
            f"{quote_plus(self.db_password)}@{self.db_host}:{self.db_port}/{self.db_name}"
        )
        if self.db_sslmode and self.db_sslmode != "disable":
            url += f"?ssl={self.db_sslmode}"
        self.database_url = url
        return self

    # Storage
    storage_backend: StorageBackend = StorageBackend.POSTGRES
    auto_create_schema: bool = True
    request_timeout_seconds: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
