"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware.
"""

from planner_mcp.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from planner_mcp.observability.log_utils import log_exception_with_context, log_with_context
from planner_mcp.observability.logger import configure_logging
from planner_mcp.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "log_exception_with_context",
    "log_with_context",
    "set_correlation_id",
]
