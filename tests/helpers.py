"""
Shared test data and JSON-RPC message builders.

System role: Test helpers imported by test modules and conftest
"""

from typing import Any

SERVICE_KEY = "test-service-key"

UNIT_ID = "unit-fractions"
OTHER_UNIT_ID = "unit-cells"
RETIRED_UNIT_ID = "unit-retired"
LESSON_ID = "lesson-adding-fractions"
OTHER_LESSON_ID = "lesson-equivalent-fractions"
RETIRED_LESSON_ID = "lesson-retired"
INTRO_ACTIVITY_ID = "activity-intro"

VALID_MCQ_BODY = {
    "question": "2+2?",
    "options": [{"id": "a", "text": "3"}, {"id": "b", "text": "4"}],
    "correctOptionId": "b",
}

INITIALIZED_NOTIFICATION = {"jsonrpc": "2.0", "method": "notifications/initialized"}


def initialize_message(request_id: Any = 1, protocol_version: str = "2025-03-26") -> dict[str, Any]:
    """JSON-RPC initialize request as sent by a protocol client."""
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "initialize",
        "params": {
            "protocolVersion": protocol_version,
            "capabilities": {},
            "clientInfo": {"name": "test-client", "version": "0.0.1"},
        },
    }


def request_message(request_id: Any, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def tool_call_message(request_id: Any, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    return request_message(request_id, "tools/call", {"name": name, "arguments": arguments})
