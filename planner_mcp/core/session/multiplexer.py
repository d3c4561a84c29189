"""
Session multiplexer.

Reconciles stateless HTTP with the stateful protocol: every request is routed
by its session token to the engine that owns that conversation, sessions are
created on an initiating request and torn down on explicit close, abnormal
transport close or process shutdown.

Dependencies: asyncio (stdlib), planner_mcp.core.session, planner_mcp.core.protocol
System role: Owner of all live protocol sessions
"""

import logging
from typing import Any, Callable

from planner_mcp.core.exceptions import (
    HandshakeError,
    SessionNotFoundError,
    SessionRegistryError,
)
from planner_mcp.core.protocol.engine import McpEngine
from planner_mcp.core.session.registry import McpSession, SessionRegistry
from planner_mcp.core.session.transport import (
    StreamableHttpTransport,
    TransportResponse,
    generate_session_id,
)
from planner_mcp.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class SessionMultiplexer:
    """
    Find-or-create routing of protocol requests to live sessions.

    Attributes:
        registry: Live sessions keyed by token
    """

    def __init__(
        self,
        engine_factory: Callable[[], McpEngine],
        session_id_generator: Callable[[], str] = generate_session_id,
    ) -> None:
        """
        Initialize the multiplexer.

        Args:
            engine_factory: Builds a fresh protocol engine for each new session
            session_id_generator: Produces session tokens
        """
        self._engine_factory = engine_factory
        self._session_id_generator = session_id_generator
        self.registry = SessionRegistry()

    def __len__(self) -> int:
        return len(self.registry)

    async def handle(self, body: bytes | str, session_token: str | None = None) -> TransportResponse:
        """
        Route one POST body.

        Args:
            body: Raw request body
            session_token: Value of the session header, if any

        Returns:
            TransportResponse: What the session's transport answered

        Raises:
            SessionNotFoundError: If the token does not resolve to a live session
        """
        if session_token is None:
            return await self._initiate(body)

        session = self.registry.get(session_token)
        async with session.lock:
            # The session may have been closed while this request waited.
            if session.closed or self.registry.peek(session_token) is not session:
                raise SessionNotFoundError(session_token)
            return await session.transport.handle_post(body)

    async def _initiate(self, body: bytes | str) -> TransportResponse:
        engine = self._engine_factory()
        transport = StreamableHttpTransport(session_id_generator=self._session_id_generator)
        engine.connect(transport)

        try:
            response = await transport.handle_post(body)
            token = await transport.session_initialized
        except HandshakeError as e:
            logger.info("Session handshake failed", extra={"reason": e.message})
            await engine.close()
            return response
        except BaseException:
            await engine.close()
            raise

        session = McpSession(token=token, engine=engine, transport=transport)
        try:
            self.registry.add(session)
        except SessionRegistryError:
            await engine.close()
            raise
        transport.on_close(lambda: self._evict(session))
        log_with_context(
            logger,
            logging.INFO,
            f"[SESSION] New session created: {token}",
            session_id=token,
            live_sessions=len(self.registry),
        )
        return response

    def _evict(self, session: McpSession) -> None:
        if self.registry.discard(session.token, session):
            log_with_context(
                logger,
                logging.INFO,
                f"[SESSION] Session closed: {session.token}",
                session_id=session.token,
                reason=session.transport.close_reason,
                live_sessions=len(self.registry),
            )

    def poll(self, session_token: str) -> list[dict[str, Any]]:
        """
        Snapshot the queued server-to-client messages of a session.

        Messages stay queued until acknowledge() confirms their delivery.

        Raises:
            SessionNotFoundError: If the token does not resolve to a live session
        """
        session = self.registry.get(session_token)
        return session.transport.pending()

    def acknowledge(self, session_token: str, message: dict[str, Any]) -> None:
        """Drop a delivered message from the queue; no-op for gone sessions."""
        session = self.registry.peek(session_token)
        if session is not None:
            session.transport.acknowledge(message)

    async def close(self, session_token: str) -> None:
        """
        Explicitly close a session after its in-flight request finishes.

        Raises:
            SessionNotFoundError: If the token does not resolve to a live session
        """
        session = self.registry.get(session_token)
        async with session.lock:
            await session.close()
        self.registry.discard(session_token, session)

    def abort(self, session_token: str, reason: str) -> bool:
        """
        Tear a session down after an abnormal transport close.

        Safe to call for tokens that are already gone.

        Returns:
            bool: True if a live session was aborted
        """
        session = self.registry.peek(session_token)
        if session is None:
            return False
        logger.warning(
            f"[SESSION] Transport closed abnormally: {session_token}",
            extra={"session_id": session_token, "reason": reason},
        )
        session.engine.abort(reason)
        self.registry.discard(session_token, session)
        return True

    async def close_all(self) -> int:
        """
        Close every live session (process shutdown).

        Iterates over a snapshot, so sessions evicted concurrently by a
        disconnect callback are simply skipped.

        Returns:
            int: Number of sessions closed by this call
        """
        closed = 0
        for session in self.registry.snapshot():
            if self.registry.peek(session.token) is not session:
                continue
            await session.close()
            self.registry.discard(session.token, session)
            closed += 1
        logger.info(f"Closed {closed} session(s) on shutdown", extra={"closed_sessions": closed})
        return closed
