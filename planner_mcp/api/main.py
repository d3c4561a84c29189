"""
FastAPI application with assembled routers.

Initializes the FastAPI app, runs startup checks in the lifespan and
configures the uvicorn server.

Dependencies: fastapi, planner_mcp.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from planner_mcp.boundary.db import (
    CatalogGateway,
    get_async_engine,
    get_async_session_factory,
)
from planner_mcp.configs import Settings, get_settings
from planner_mcp.core.exceptions import AuthenticationError, StartupCheckError, StorageError
from planner_mcp.core.protocol import McpEngine
from planner_mcp.core.session import SessionMultiplexer
from planner_mcp.core.tools import build_tool_registry
from planner_mcp.observability.logger import configure_logging
from planner_mcp.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from planner_mcp.api import api_router

logger = logging.getLogger(__name__)


def check_required_settings(settings: Settings) -> None:
    """
    Fail fast when mandatory configuration is absent.

    Raises:
        StartupCheckError: If DATABASE_URL or MCP_SERVICE_KEY is unset
    """
    missing = []
    if not settings.database.url:
        missing.append("DATABASE_URL")
    if not settings.mcp.service_key:
        missing.append("MCP_SERVICE_KEY")
    if missing:
        raise StartupCheckError(
            f"Missing required environment variables: {', '.join(missing)}",
            {"missing": missing},
        )
    logger.info("Environment variables: OK")


async def check_database(gateway: CatalogGateway) -> int:
    """
    Verify the database answers and the units table is readable.

    Returns:
        int: Number of units found

    Raises:
        StartupCheckError: If either check fails
    """
    if not await gateway.ping():
        raise StartupCheckError("Cannot connect to database")
    logger.info("Database connection: OK")

    try:
        unit_count = await gateway.count_units()
    except StorageError as e:
        raise StartupCheckError("Failed to read units table", e.details) from e
    logger.info(f"Units table: OK ({unit_count} units found)")
    return unit_count


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: logging, startup checks, and the long-lived objects on app.state.
    Shutdown: close every live session, then dispose the engine.
    """
    settings: Settings = app.state.settings

    # Startup
    configure_logging(settings.effective_log_level)
    logger.info("Running startup checks...")
    check_required_settings(settings)

    engine = get_async_engine(settings.database)
    try:
        gateway = CatalogGateway(get_async_session_factory(engine))
        await check_database(gateway)
    except BaseException:
        await engine.dispose()
        raise

    tool_registry = build_tool_registry(gateway)
    multiplexer = SessionMultiplexer(
        engine_factory=lambda: McpEngine(
            server_name=settings.mcp.server_name,
            server_version=settings.mcp.server_version,
            tools=tool_registry,
        )
    )

    app.state.gateway = gateway
    app.state.tool_registry = tool_registry
    app.state.multiplexer = multiplexer
    logger.info(
        f"MCP server ready on port {settings.server.port}",
        extra={"tools": tool_registry.names, "environment": settings.environment},
    )

    yield

    # Shutdown
    logger.info("Shutting down...")
    await multiplexer.close_all()
    await engine.dispose()
    logger.info("Server closed")


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Render credential failures as {"error": ..., "message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings to run with (defaults to environment settings)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Planner MCP Server",
        description="Curriculum catalog exposed as MCP tools over streamable HTTP",
        version=settings.mcp.server_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(AuthenticationError, authentication_error_handler)

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["mcp-session-id"],
    )

    app.include_router(api_router)

    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
    )
