"""
Exception hierarchy for the planner MCP server.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PlannerMcpException(Exception):
    """Base exception for all planner MCP application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ActivityValidationError(PlannerMcpException):
    """Raised when an activity is rejected before persistence."""

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize activity validation error.

        Args:
            message: Aggregated, user-facing rejection reason
            kind: Activity kind that was being validated
            details: Additional context
        """
        details = details or {}
        if kind:
            details["kind"] = kind
        super().__init__(message, details)


class SessionNotFoundError(PlannerMcpException):
    """Raised when a session token does not resolve to a live session."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: Token of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class HandshakeError(PlannerMcpException):
    """Raised when a session-initiating request does not complete the handshake."""

    pass


class SessionRegistryError(PlannerMcpException):
    """Raised when a token is registered twice."""

    pass


class StorageError(PlannerMcpException):
    """Raised when a content store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Gateway operation that failed (list_units, create_activity, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ProtocolError(PlannerMcpException):
    """Raised inside the protocol engine; carries a JSON-RPC error code."""

    def __init__(
        self,
        code: int,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize protocol error.

        Args:
            code: JSON-RPC error code (see mcp.types)
            message: Error message sent to the client
            details: Additional context
        """
        self.code = code
        super().__init__(message, details)


class StartupCheckError(PlannerMcpException):
    """Raised when the service cannot start (configuration or database)."""

    pass


class AuthenticationError(PlannerMcpException):
    """Raised when a request to the protocol routes carries a missing or wrong key."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        """
        Initialize authentication error.

        Args:
            status_code: 401 for a missing credential, 403 for a wrong one
            error: Short error label sent to the client
            message: Human-readable explanation sent to the client
        """
        self.status_code = status_code
        self.error = error
        super().__init__(message, {"status_code": status_code})
