"""MCP protocol engine (one instance per session)."""

from planner_mcp.core.protocol.engine import (
    DEFAULT_LOG_LEVEL,
    LOG_LEVELS,
    McpEngine,
    jsonrpc_error,
)

__all__ = ["DEFAULT_LOG_LEVEL", "LOG_LEVELS", "McpEngine", "jsonrpc_error"]
