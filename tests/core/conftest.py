"""
Fixtures for protocol engine, transport and multiplexer tests.

Provides a database-free tool registry so the session machinery can be
exercised on its own.
"""

import pytest
from mcp.types import CallToolResult
from pydantic import BaseModel

from planner_mcp.core.protocol import McpEngine
from planner_mcp.core.tools import ToolRegistry, error_result, json_result


class GreetArgs(BaseModel):
    name: str


@pytest.fixture
def tool_registry() -> ToolRegistry:
    """Registry with one succeeding and one failing tool."""
    registry = ToolRegistry()

    @registry.tool("greet", "Say hello", GreetArgs)
    async def greet(args: GreetArgs) -> CallToolResult:
        return json_result({"greeting": f"hello {args.name}"})

    @registry.tool("refuse", "Always returns an error result", GreetArgs)
    async def refuse(args: GreetArgs) -> CallToolResult:
        return error_result(f"cannot greet {args.name}")

    return registry


@pytest.fixture
def engine_factory(tool_registry: ToolRegistry):
    """Callable building a fresh engine per session."""

    def factory() -> McpEngine:
        return McpEngine(server_name="planner-mcp", server_version="1.0.0", tools=tool_registry)

    return factory
