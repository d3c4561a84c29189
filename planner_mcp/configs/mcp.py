"""
MCP server configuration settings.

Identity advertised during the protocol handshake and the pre-shared
service key guarding the /mcp routes.

Dependencies: pydantic_settings
System role: Protocol server configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class McpSettings(BaseSettings):
    """MCP server identity and credential."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MCP_",
        case_sensitive=False,
        extra="ignore",
    )

    server_name: str = Field(default="planner-mcp", description="Server name sent in serverInfo")
    server_version: str = Field(default="1.0.0", description="Server version sent in serverInfo")
    service_key: str = Field(default="", description="Pre-shared key required on every /mcp call")
