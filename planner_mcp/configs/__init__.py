"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from planner_mcp.configs.base import PlannerBaseSettings
from planner_mcp.configs.database import DatabaseSettings
from planner_mcp.configs.mcp import McpSettings
from planner_mcp.configs.server import ServerSettings
from planner_mcp.configs.settings import Settings, get_settings

__all__ = [
    "DatabaseSettings",
    "McpSettings",
    "PlannerBaseSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
