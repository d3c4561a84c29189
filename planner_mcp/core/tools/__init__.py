"""Tool registry and catalog tool definitions."""

from planner_mcp.core.tools.catalog_tools import build_tool_registry
from planner_mcp.core.tools.registry import ToolRegistry, ToolSpec
from planner_mcp.core.tools.results import error_result, json_result

__all__ = ["ToolRegistry", "ToolSpec", "build_tool_registry", "error_result", "json_result"]
