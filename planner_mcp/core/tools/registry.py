"""
Tool registry.

A fixed, declarative set of named operations. Each tool declares a pydantic
argument model (published as JSON Schema through tools/list) and an async
handler. Handlers return CallToolResult objects; anything they raise is
turned into a generic error result here, so a failing tool never ends the
session that called it.

Dependencies: mcp.types, pydantic
System role: Name → operation dispatch for the protocol engine
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from mcp.types import INVALID_PARAMS, CallToolResult, Tool
from pydantic import BaseModel, ValidationError

from planner_mcp.core.exceptions import ProtocolError
from planner_mcp.core.tools.results import error_result

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[CallToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    """
    Registered tool.

    Attributes:
        name: Tool name used in tools/call
        description: Human-readable description for clients
        args_model: Pydantic model validating the call arguments
        handler: Async callable receiving a validated args_model instance
    """

    name: str
    description: str
    args_model: type[BaseModel]
    handler: ToolHandler

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(),
        )


class ToolRegistry:
    """Ordered collection of tools available to every session."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        args_model: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolSpec:
        """
        Add a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        spec = ToolSpec(name=name, description=description, args_model=args_model, handler=handler)
        self._tools[name] = spec
        return spec

    def tool(
        self,
        name: str,
        description: str,
        args_model: type[BaseModel],
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of register()."""

        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(name, description, args_model, handler)
            return handler

        return decorator

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> list[Tool]:
        """Tool descriptors in registration order."""
        return [spec.to_tool() for spec in self._tools.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """
        Validate arguments and run a tool.

        Args:
            name: Registered tool name
            arguments: Raw call arguments

        Returns:
            CallToolResult: Handler result, or a generic error result if the
            handler raised

        Raises:
            ProtocolError: INVALID_PARAMS for an unknown tool or invalid arguments
        """
        spec = self._tools.get(name)
        if spec is None:
            raise ProtocolError(INVALID_PARAMS, f"Tool {name} not found")

        try:
            args = spec.args_model.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
                for error in e.errors()
            )
            raise ProtocolError(
                INVALID_PARAMS, f"Invalid arguments for tool {name}: {problems}"
            ) from e

        try:
            return await spec.handler(args)
        except Exception as e:
            logger.exception(
                f"Tool {name} failed unexpectedly",
                extra={"tool": name, "error_type": type(e).__name__},
            )
            return error_result(f"Error running {name}: internal error")
