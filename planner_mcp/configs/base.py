"""
Base configuration settings.

Service-wide settings every config module inherits: .env loading, the
deployment the server runs in and the log level handed to
configure_logging() at startup.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class PlannerBaseSettings(BaseSettings):
    """Settings shared by the whole planner MCP service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Deployment the server runs in, reported in the startup log",
    )
    debug: bool = Field(
        default=False,
        description="Log at DEBUG regardless of LOG_LEVEL",
    )
    log_level: str = Field(
        default="INFO",
        description="Service log level (CRITICAL, ERROR, WARNING, INFO, DEBUG)",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVEL_NAMES)}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Level passed to configure_logging()."""
        return "DEBUG" if self.debug else self.log_level
