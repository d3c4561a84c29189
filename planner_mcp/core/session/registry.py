"""
Live session registry.

The single source of truth for which sessions are alive. Lookups are exact
token matches. The registry is only touched from the event loop thread and
no method awaits, so no mutation ever spans a suspension point.

Dependencies: asyncio (stdlib)
System role: token → session map shared by all requests
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from planner_mcp.core.exceptions import SessionNotFoundError, SessionRegistryError

if TYPE_CHECKING:
    from planner_mcp.core.protocol.engine import McpEngine
    from planner_mcp.core.session.transport import StreamableHttpTransport


@dataclass(eq=False)
class McpSession:
    """
    One logical client conversation.

    The engine and transport are owned by the session: created together,
    closed together. The lock serialises requests within the session.

    Attributes:
        token: Opaque session token
        engine: Protocol engine instance of this session
        transport: Transport adapter of this session
        lock: Per-session request ordering lock
        created_at: Registration time (UTC)
    """

    token: str
    engine: "McpEngine"
    transport: "StreamableHttpTransport"
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def closed(self) -> bool:
        return self.transport.closed or self.engine.closed

    async def close(self) -> None:
        await self.engine.close()


class SessionRegistry:
    """In-memory token → McpSession map."""

    def __init__(self) -> None:
        self._sessions: dict[str, McpSession] = {}

    def add(self, session: McpSession) -> None:
        """
        Register a session under its token.

        Raises:
            SessionRegistryError: If the token is already live
        """
        if session.token in self._sessions:
            raise SessionRegistryError(
                "Session token already registered", {"session_id": session.token}
            )
        self._sessions[session.token] = session

    def get(self, token: str) -> McpSession:
        """
        Resolve a token to its live session.

        Raises:
            SessionNotFoundError: If no live session has this exact token
        """
        session = self._sessions.get(token)
        if session is None:
            raise SessionNotFoundError(token)
        return session

    def peek(self, token: str) -> McpSession | None:
        return self._sessions.get(token)

    def discard(self, token: str, session: McpSession | None = None) -> bool:
        """
        Evict a token. Idempotent.

        When session is given, the entry is only removed if it still maps to
        that exact session object, so a stale close can never evict another
        session.

        Returns:
            bool: True if an entry was removed
        """
        current = self._sessions.get(token)
        if current is None:
            return False
        if session is not None and current is not session:
            return False
        del self._sessions[token]
        return True

    def snapshot(self) -> list[McpSession]:
        """Copy of the live sessions, safe to iterate across awaits."""
        return list(self._sessions.values())

    def tokens(self) -> list[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        return token in self._sessions
