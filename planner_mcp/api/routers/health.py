"""
Health check API endpoint.

Routes: GET /health

Unauthenticated. Reports database reachability.

Dependencies: planner_mcp.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from planner_mcp.api.deps import get_gateway
from planner_mcp.boundary.db import CatalogGateway

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    database_connected: bool


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(gateway: CatalogGateway = Depends(get_gateway)):
    """Report "ok" when the database answers, "degraded" otherwise."""
    try:
        connected = await gateway.ping()
    except Exception as e:
        logger.error(f"[ERROR] GET /health - {e}")
        return JSONResponse(status_code=500, content={"error": "Health check failed"})
    return HealthResponse(status="ok" if connected else "degraded", database_connected=connected)
