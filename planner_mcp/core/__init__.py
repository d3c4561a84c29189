"""
Core business logic module.

Contains the session multiplexer, the protocol engine, the tool registry,
the content validation engine and the exception hierarchy.
"""

from planner_mcp.core.exceptions import (
    PlannerMcpException,
    ActivityValidationError,
    SessionNotFoundError,
    HandshakeError,
    SessionRegistryError,
    StorageError,
    ProtocolError,
    StartupCheckError,
    AuthenticationError,
)

__all__ = [
    "PlannerMcpException",
    "ActivityValidationError",
    "SessionNotFoundError",
    "HandshakeError",
    "SessionRegistryError",
    "StorageError",
    "ProtocolError",
    "StartupCheckError",
    "AuthenticationError",
]
