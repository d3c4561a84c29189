"""
Streamable HTTP transport adapter.

Translates one HTTP POST body into messages for the session's protocol
server and the server's replies back into an HTTP status, headers and JSON
body. The server is fed through a pair of anyio memory streams; replies are
matched to the requests of the POST by JSON-RPC id, everything else the
server writes (log notifications) is queued for GET /mcp.

The adapter owns the handshake signal: session_initialized is a future that
resolves with the newly assigned session token when an initialize request
succeeds, or fails with HandshakeError when the initiating request does not
complete the handshake. It is always settled by the time handle_post()
returns for an uninitialized transport.

Dependencies: asyncio, anyio, mcp (types, SessionMessage), pydantic
System role: Boundary between raw HTTP bodies and the protocol engine
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable

import anyio
from mcp.shared.message import SessionMessage
from mcp.types import (
    CONNECTION_CLOSED,
    INVALID_REQUEST,
    PARSE_ERROR,
    JSONRPCError,
    JSONRPCMessage,
    JSONRPCRequest,
    JSONRPCResponse,
)
from pydantic import ValidationError

from planner_mcp.core.exceptions import HandshakeError
from planner_mcp.core.protocol.engine import jsonrpc_error

logger = logging.getLogger(__name__)

SESSION_HEADER = "mcp-session-id"


def generate_session_id() -> str:
    """Opaque, unguessable session token."""
    return uuid.uuid4().hex


@dataclass
class TransportResponse:
    """
    HTTP-level answer produced by the transport.

    Attributes:
        status_code: HTTP status to send
        body: JSON-serializable body, or None for an empty response
        headers: Extra response headers (the session header on initiation)
    """

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


class StreamableHttpTransport:
    """
    Per-session HTTP transport adapter.

    Attributes:
        read_stream: Stream the protocol server reads client messages from
        write_stream: Stream the protocol server writes its messages to
        session_id: Token assigned by a successful handshake
        session_initialized: Future settled by the initiating request
        closed: True once close() or abort() ran
        close_reason: Why the transport was closed
    """

    def __init__(self, session_id_generator: Callable[[], str] = generate_session_id) -> None:
        self._session_id_generator = session_id_generator
        self.session_id: str | None = None
        self.session_initialized: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self.closed = False
        self.close_reason: str | None = None

        self._to_server, self.read_stream = anyio.create_memory_object_stream[
            SessionMessage | Exception
        ](0)
        self.write_stream, self._from_server = anyio.create_memory_object_stream[SessionMessage](0)

        self._pending: dict[Any, asyncio.Future[dict[str, Any]]] = {}
        self._outbound: list[dict[str, Any]] = []
        self._close_callbacks: list[Callable[[], None]] = []
        self._reader: asyncio.Task | None = None

    def start(self) -> None:
        """Start routing what the server writes (replies and notifications)."""
        if self._reader is None:
            self._reader = asyncio.get_running_loop().create_task(self._route_server_messages())

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register a callback run exactly once when the transport closes."""
        self._close_callbacks.append(callback)

    def send(self, message: dict[str, Any]) -> None:
        """Queue a server-to-client message for the next poll."""
        if not self.closed:
            self._outbound.append(message)

    def pending(self) -> list[dict[str, Any]]:
        """Copy of the queued server-to-client messages; the queue is unchanged."""
        return list(self._outbound)

    def acknowledge(self, message: dict[str, Any]) -> None:
        """Remove a message once it was delivered to the client."""
        for index, queued in enumerate(self._outbound):
            if queued is message:
                del self._outbound[index]
                return

    async def handle_post(self, raw_body: bytes | str) -> TransportResponse:
        """
        Process one POST body (single JSON-RPC message or batch).

        Args:
            raw_body: Request body exactly as received

        Returns:
            TransportResponse: 200 with responses, 202 when the body held no
            requests, 400 for malformed bodies or a failed handshake
        """
        initiating = self.session_id is None
        try:
            messages, is_batch = self._parse(raw_body)
        except json.JSONDecodeError:
            return self._reject(initiating, PARSE_ERROR, "Parse error")
        except ValueError as e:
            return self._reject(initiating, INVALID_REQUEST, f"Invalid Request: {e}")

        requests = [m.root for m in messages if isinstance(m.root, JSONRPCRequest)]
        if initiating:
            if len(messages) != 1 or len(requests) != 1 or requests[0].method != "initialize":
                return self._reject(
                    initiating, INVALID_REQUEST, "Bad Request: Server not initialized"
                )
        elif any(getattr(m.root, "method", None) == "initialize" for m in messages):
            return self._reject(
                initiating, INVALID_REQUEST, "Invalid Request: Server already initialized"
            )

        request_ids = [request.id for request in requests]
        if len(set(request_ids)) != len(request_ids):
            return self._reject(initiating, INVALID_REQUEST, "Invalid Request: duplicate request id")

        responses = await self._forward(messages)

        if initiating:
            return self._complete_handshake(responses[0])

        if not responses:
            return TransportResponse(status_code=202)
        return TransportResponse(status_code=200, body=responses if is_batch else responses[0])

    async def _forward(self, messages: list[JSONRPCMessage]) -> list[dict[str, Any]]:
        loop = asyncio.get_running_loop()
        replies: list[asyncio.Future[dict[str, Any]]] = []
        try:
            for message in messages:
                root = message.root
                if isinstance(root, (JSONRPCResponse, JSONRPCError)):
                    # Replies to server-initiated requests; this server sends none.
                    continue
                if isinstance(root, JSONRPCRequest):
                    reply = loop.create_future()
                    self._pending[root.id] = reply
                    replies.append(reply)
                await self._to_server.send(SessionMessage(message))
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            logger.info("Transport closed while forwarding", extra={"session_id": self.session_id})
            self._fail_pending()
        return [await reply for reply in replies]

    async def _route_server_messages(self) -> None:
        try:
            async for session_message in self._from_server:
                root = session_message.message.root
                message = session_message.message.model_dump(
                    by_alias=True, mode="json", exclude_none=True
                )
                if isinstance(root, (JSONRPCResponse, JSONRPCError)):
                    reply = self._pending.pop(root.id, None)
                    if reply is not None and not reply.done():
                        reply.set_result(message)
                        continue
                self.send(message)
        finally:
            self._fail_pending()

    def _fail_pending(self) -> None:
        pending, self._pending = self._pending, {}
        for request_id, reply in pending.items():
            if not reply.done():
                reply.set_result(jsonrpc_error(request_id, CONNECTION_CLOSED, "Connection closed"))

    def _complete_handshake(self, response: dict[str, Any]) -> TransportResponse:
        if "error" in response:
            self._fail_handshake(response["error"].get("message", "initialize failed"))
            return TransportResponse(status_code=400, body=response)

        self.session_id = self._session_id_generator()
        self.session_initialized.set_result(self.session_id)
        return TransportResponse(
            status_code=200,
            body=response,
            headers={SESSION_HEADER: self.session_id},
        )

    def _reject(self, initiating: bool, code: int, message: str) -> TransportResponse:
        if initiating:
            self._fail_handshake(message)
        return TransportResponse(status_code=400, body=jsonrpc_error(None, code, message))

    def _fail_handshake(self, reason: str) -> None:
        if not self.session_initialized.done():
            self.session_initialized.set_exception(HandshakeError(reason))

    @staticmethod
    def _parse(raw_body: bytes | str) -> tuple[list[JSONRPCMessage], bool]:
        payload = json.loads(raw_body)
        is_batch = isinstance(payload, list)
        items = payload if is_batch else [payload]
        if not items:
            raise ValueError("empty batch")
        try:
            return [JSONRPCMessage.model_validate(item) for item in items], is_batch
        except ValidationError as e:
            raise ValueError("expected JSON-RPC 2.0 message") from e

    async def close(self) -> None:
        """Orderly close, e.g. explicit DELETE or process shutdown."""
        self._shutdown("closed")

    def abort(self, reason: str) -> None:
        """Abnormal close (client disconnect, socket error)."""
        self._shutdown(reason)

    def _shutdown(self, reason: str) -> None:
        if self.closed:
            return
        self.closed = True
        self.close_reason = reason
        self._outbound.clear()
        self._to_server.close()
        self._from_server.close()
        if self._reader is not None:
            self._reader.cancel()
        self._fail_pending()
        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            callback()
