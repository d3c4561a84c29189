"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived objects (settings,
gateway, multiplexer) are created once in the application lifespan and
read back from app.state here.

Dependencies: fastapi, planner_mcp.configs, planner_mcp.core, planner_mcp.boundary
System role: DI container for route handlers
"""

import logging
import secrets

from fastapi import Depends, Header, Request

from planner_mcp.boundary.db import CatalogGateway
from planner_mcp.configs import Settings
from planner_mcp.core.exceptions import AuthenticationError
from planner_mcp.core.session import SessionMultiplexer

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_settings_dependency(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_multiplexer(request: Request) -> SessionMultiplexer:
    """Get the process-wide session multiplexer."""
    return request.app.state.multiplexer


def get_gateway(request: Request) -> CatalogGateway:
    """Get the catalog gateway."""
    return request.app.state.gateway


def extract_service_key(authorization: str | None, mcp_key: str | None) -> str | None:
    """
    Pick the presented credential from the two accepted headers.

    The bearer header wins when both are present.

    Args:
        authorization: Value of the Authorization header
        mcp_key: Value of the x-mcp-key header

    Returns:
        str | None: The presented key, or None when neither header carries one
    """
    if authorization:
        token = authorization[len(BEARER_PREFIX):] if authorization.startswith(BEARER_PREFIX) else authorization
        if token:
            return token
    return mcp_key or None


async def require_service_key(
    request: Request,
    authorization: str | None = Header(default=None),
    x_mcp_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Reject the request unless it carries the pre-shared service key.

    Raises:
        AuthenticationError: 401 when no key is presented, 403 when it is wrong
    """
    provided = extract_service_key(authorization, x_mcp_key)
    if provided is None:
        logger.warning(f"[AUTH] 401 {request.method} {request.url.path} - Missing MCP service key")
        raise AuthenticationError(
            401,
            "Unauthorized",
            "MCP service key required. Provide via Authorization header or x-mcp-key header.",
        )

    expected = settings.mcp.service_key
    if not expected or not secrets.compare_digest(provided.encode(), expected.encode()):
        logger.warning(f"[AUTH] 403 {request.method} {request.url.path} - Invalid MCP service key")
        raise AuthenticationError(403, "Forbidden", "Invalid MCP service key")
