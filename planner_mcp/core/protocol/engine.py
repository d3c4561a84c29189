"""
MCP protocol engine.

One engine instance serves exactly one session. It is a thin owner of the
SDK's low-level Server: the handlers registered here answer tools/list,
tools/call and logging/setLevel, while the SDK's ServerSession negotiates
initialize (protocol version, capabilities, serverInfo) and answers ping.
The server runs as a background task reading from and writing to the
memory streams of the session's transport.

Dependencies: mcp (lowlevel Server, types), planner_mcp.core.tools
System role: Stateful protocol endpoint behind the session multiplexer
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, get_args

from mcp.server.lowlevel import Server
from mcp.types import CallToolResult, LoggingLevel, Tool

from planner_mcp.core.exceptions import ProtocolError
from planner_mcp.core.tools.registry import ToolRegistry
from planner_mcp.core.tools.results import error_result
from planner_mcp.observability.log_utils import log_exception_with_context

if TYPE_CHECKING:
    from planner_mcp.core.session.transport import StreamableHttpTransport

logger = logging.getLogger(__name__)

# RFC 5424 severities, lowest first
LOG_LEVELS: tuple[str, ...] = get_args(LoggingLevel)

DEFAULT_LOG_LEVEL: LoggingLevel = "warning"


def jsonrpc_error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 error envelope."""
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


class McpEngine:
    """
    Protocol engine for a single session.

    Attributes:
        server: SDK server holding this session's request handlers
        tools: Tool registry shared by every session
        transport: Transport attached by connect()
        log_level: Lowest level forwarded as notifications/message
        closed: True once close() or abort() ran
    """

    def __init__(
        self,
        server_name: str,
        server_version: str,
        tools: ToolRegistry,
        instructions: str | None = None,
    ) -> None:
        self.server_name = server_name
        self.tools = tools
        self.log_level: LoggingLevel = DEFAULT_LOG_LEVEL
        self.closed = False

        self.server: Server = Server(server_name, version=server_version, instructions=instructions)
        self.server.list_tools()(self._list_tools)
        self.server.call_tool()(self._call_tool)
        self.server.set_logging_level()(self._set_level)

        self.transport: "StreamableHttpTransport | None" = None
        self._task: asyncio.Task | None = None

    def connect(self, transport: "StreamableHttpTransport") -> None:
        """Attach the transport and start serving its streams."""
        self.transport = transport
        transport.start()
        self._task = asyncio.get_running_loop().create_task(self._serve(transport))

    async def _serve(self, transport: "StreamableHttpTransport") -> None:
        try:
            await self.server.run(
                transport.read_stream,
                transport.write_stream,
                self.server.create_initialization_options(),
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                "Protocol server stopped unexpectedly",
                e,
                server=self.server_name,
                session_id=transport.session_id,
            )

    async def notify(self, level: LoggingLevel, data: Any) -> bool:
        """
        Send a notifications/message to the client of the current request.

        Only valid while a request of this session is being handled. Dropped
        when below the level the client asked for.

        Returns:
            bool: True if the notification was sent
        """
        if self.closed or LOG_LEVELS.index(level) < LOG_LEVELS.index(self.log_level):
            return False
        session = self.server.request_context.session
        await session.send_log_message(level=level, data=data, logger=self.server_name)
        return True

    async def close(self) -> None:
        """Shut the engine down and close its transport (idempotent)."""
        if not self.closed:
            self.closed = True
            if self.transport is not None:
                await self.transport.close()
        # Also reaps a server task cancelled by abort().
        if self._task is not None and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)

    def abort(self, reason: str) -> None:
        """Synchronous teardown after an abnormal transport close."""
        if self.closed:
            return
        self.closed = True
        if self.transport is not None:
            self.transport.abort(reason)
        if self._task is not None:
            self._task.cancel()

    async def _list_tools(self) -> list[Tool]:
        return self.tools.list_tools()

    async def _call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        try:
            result = await self.tools.call(name, arguments)
        except ProtocolError as e:
            result = error_result(e.message)

        if result.isError:
            message = result.content[0].text if result.content else ""
            await self.notify("warning", {"tool": name, "error": message})
        else:
            await self.notify("info", {"tool": name, "status": "completed"})
        return result

    async def _set_level(self, level: LoggingLevel) -> None:
        self.log_level = level
        logger.debug(f"Log level set to {level}", extra={"server": self.server_name})
