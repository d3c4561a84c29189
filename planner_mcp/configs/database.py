"""
Database configuration settings.

Manages the catalog database connection for SQLAlchemy.
Reads DATABASE_URL and pool tuning from the environment.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the content store gateway
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Catalog database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Catalog database URL (postgresql://... or any SQLAlchemy async URL)",
    )

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_url(self) -> str | None:
        """
        Construct the async driver URL.

        Plain postgres URLs (as handed out by most hosting providers) are
        rewritten to use asyncpg. URLs that already name a driver are kept.

        Returns:
            str | None: SQLAlchemy async-compatible database URL
        """
        if self.url is None:
            return None
        for prefix in ("postgres://", "postgresql://"):
            if self.url.startswith(prefix):
                return "postgresql+asyncpg://" + self.url[len(prefix):]
        return self.url

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL points at SQLite (no server-side pool)."""
        return bool(self.url) and self.url.startswith("sqlite")
