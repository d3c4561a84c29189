"""Session multiplexing: registry, transport adapter and multiplexer."""

from planner_mcp.core.session.multiplexer import SessionMultiplexer
from planner_mcp.core.session.registry import McpSession, SessionRegistry
from planner_mcp.core.session.transport import (
    SESSION_HEADER,
    StreamableHttpTransport,
    TransportResponse,
    generate_session_id,
)

__all__ = [
    "SESSION_HEADER",
    "McpSession",
    "SessionMultiplexer",
    "SessionRegistry",
    "StreamableHttpTransport",
    "TransportResponse",
    "generate_session_id",
]
