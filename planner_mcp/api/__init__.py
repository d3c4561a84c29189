"""
API routes module.

FastAPI routers for the protocol and health endpoints.
"""

from fastapi import APIRouter

from .routers import health_router, mcp_router

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(mcp_router)

__all__ = ["api_router"]
