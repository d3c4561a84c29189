"""
Tool result helpers.

Dependencies: mcp.types, pydantic
System role: Uniform success/error payloads for tool handlers
"""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def json_result(value: Any) -> CallToolResult:
    """Success result carrying the JSON encoding of value as text."""
    text = json.dumps(_to_jsonable(value))
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(message: str) -> CallToolResult:
    """Error result; the exchange itself still succeeds."""
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)
