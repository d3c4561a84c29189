"""
MCP streamable HTTP endpoints.

Routes:
- POST /mcp - Initiate a session (no session header) or continue one
- GET /mcp - Poll queued server-to-client messages as server-sent events
- DELETE /mcp - Close a session

Every route requires the pre-shared service key.

Dependencies: fastapi, planner_mcp.core.session
System role: HTTP boundary of the session multiplexer
"""

import json
import logging
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.requests import ClientDisconnect
from starlette.types import Receive, Scope, Send

from planner_mcp.api.deps import get_multiplexer, require_service_key
from planner_mcp.core.exceptions import SessionNotFoundError
from planner_mcp.core.protocol import jsonrpc_error
from planner_mcp.core.session import SESSION_HEADER, SessionMultiplexer, TransportResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/mcp",
    tags=["mcp"],
    dependencies=[Depends(require_service_key)],
)

# Server-defined JSON-RPC error codes for session routing failures.
BAD_REQUEST = -32000
SESSION_NOT_FOUND = -32001


def _missing_session_header(method: str) -> JSONResponse:
    logger.warning(f"[WARN] {method} /mcp - Missing session ID")
    return JSONResponse(
        status_code=400,
        content=jsonrpc_error(None, BAD_REQUEST, "Bad Request: mcp-session-id header is required"),
    )


def _session_not_found(method: str, e: SessionNotFoundError) -> JSONResponse:
    logger.warning(f"[WARN] {method} /mcp - {e.message}", extra=e.details)
    return JSONResponse(
        status_code=404,
        content=jsonrpc_error(None, SESSION_NOT_FOUND, "Session not found"),
    )


def _internal_error(method: str) -> JSONResponse:
    logger.exception(f"[ERROR] {method} /mcp - Unexpected failure")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def _to_http(result: TransportResponse) -> Response:
    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(status_code=result.status_code, content=result.body, headers=result.headers)


def _sse_event(message: dict[str, Any]) -> str:
    return f"event: message\ndata: {json.dumps(message)}\n\n"


class SessionEventStream(StreamingResponse):
    """
    Server-sent events carrying a session's queued messages.

    A message leaves the session queue only after it was handed to the
    server. A stream that stops before the closing body message went out
    (socket error, client disconnect, cancellation) is an abnormal transport
    close and aborts the session.
    """

    media_type = "text/event-stream"

    def __init__(
        self,
        multiplexer: SessionMultiplexer,
        session_token: str,
        messages: list[dict[str, Any]],
    ) -> None:
        self.multiplexer = multiplexer
        self.session_token = session_token
        self.delivered = False
        super().__init__(
            self._events(messages),
            headers={"Cache-Control": "no-cache", SESSION_HEADER: session_token},
        )

    async def _events(self, messages: list[dict[str, Any]]) -> AsyncIterator[str]:
        for message in messages:
            yield _sse_event(message)
            self.multiplexer.acknowledge(self.session_token, message)

    async def stream_response(self, send: Send) -> None:
        await super().stream_response(send)
        self.delivered = True

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except ClientDisconnect:
            logger.info(
                f"[SESSION] Client disconnected from event stream: {self.session_token}",
                extra={"session_id": self.session_token},
            )
        finally:
            if not self.delivered:
                self.multiplexer.abort(self.session_token, "event stream interrupted")


@router.post("")
async def post_mcp(
    request: Request,
    mcp_session_id: str | None = Header(default=None),
    multiplexer: SessionMultiplexer = Depends(get_multiplexer),
) -> Response:
    """
    Route one JSON-RPC body to its session.

    Without a session header a new session is created, and registered only if
    the body completes the handshake.

    Returns:
        Response: The transport's answer; 404 for an unknown session
    """
    body = await request.body()
    try:
        result = await multiplexer.handle(body, mcp_session_id)
    except SessionNotFoundError as e:
        return _session_not_found("POST", e)
    except Exception:
        return _internal_error("POST")
    return _to_http(result)


@router.get("")
async def get_mcp(
    mcp_session_id: str | None = Header(default=None),
    multiplexer: SessionMultiplexer = Depends(get_multiplexer),
) -> Response:
    """
    Deliver queued server-to-client messages as a text/event-stream.

    An interrupted stream is an abnormal transport close and tears the
    session down.
    """
    if not mcp_session_id:
        return _missing_session_header("GET")
    try:
        messages = multiplexer.poll(mcp_session_id)
    except SessionNotFoundError as e:
        return _session_not_found("GET", e)
    except Exception:
        return _internal_error("GET")
    return SessionEventStream(multiplexer, mcp_session_id, messages)


@router.delete("")
async def delete_mcp(
    mcp_session_id: str | None = Header(default=None),
    multiplexer: SessionMultiplexer = Depends(get_multiplexer),
) -> Response:
    """Close a session after its in-flight request completes."""
    if not mcp_session_id:
        return _missing_session_header("DELETE")
    try:
        await multiplexer.close(mcp_session_id)
    except SessionNotFoundError as e:
        return _session_not_found("DELETE", e)
    except Exception:
        return _internal_error("DELETE")
    logger.info(f"[SESSION] Session deleted: {mcp_session_id}")
    return Response(status_code=200)
