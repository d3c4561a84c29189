"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from planner_mcp.configs.base import PlannerBaseSettings
from planner_mcp.configs.database import DatabaseSettings
from planner_mcp.configs.mcp import McpSettings
from planner_mcp.configs.server import ServerSettings


class Settings(PlannerBaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    mcp: McpSettings = Field(default_factory=McpSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from planner_mcp.configs import get_settings
        settings = get_settings()
    """
    return Settings()
