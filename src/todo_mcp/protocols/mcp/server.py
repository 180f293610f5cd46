"""MCPServer — accepts WebSocket connections and gives each its own channel.

All connections share one :class:`~todo_mcp.tools.registry.ToolRegistry`
(and through it one record store); each connection gets a fresh
:class:`ProtocolChannel` and has its frames handled strictly in order.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosedError

from todo_mcp.protocols.mcp.channel import ProtocolChannel
from todo_mcp.protocols.mcp.models import ServerInfo

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from todo_mcp.settings import ServerSettings
    from todo_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

# RFC 6455 "policy violation"
_CLOSE_UNKNOWN_PATH = 1008


class MCPServer:
    """WebSocket front end for a :class:`ToolRegistry`.

    Usage::

        server = MCPServer(build_registry(InMemoryRecordStore()), settings)
        await server.serve_forever()
    """

    def __init__(self, registry: ToolRegistry, settings: ServerSettings) -> None:
        self._registry = registry
        self._settings = settings
        self._server_info = ServerInfo(name=settings.server_name, version=settings.server_version)

    def new_channel(self, connection_id: str = "") -> ProtocolChannel:
        return ProtocolChannel(
            self._registry,
            server_info=self._server_info,
            protocol_version=self._settings.protocol_version,
            connection_id=connection_id,
        )

    async def handle_connection(self, websocket: ServerConnection) -> None:
        """Serve one connection until the peer goes away."""
        connection_id = str(websocket.id)
        path = websocket.request.path if websocket.request is not None else ""
        if path.split("?", 1)[0] != self._settings.path:
            logger.warning("Rejecting connection %s on unknown path %r", connection_id, path)
            await websocket.close(_CLOSE_UNKNOWN_PATH, "unknown path")
            return

        channel = self.new_channel(connection_id)
        logger.info("MCP client connected: %s", connection_id)
        try:
            async for raw in websocket:
                reply = await channel.handle_raw(raw)
                if reply is not None:
                    await websocket.send(reply)
        except ConnectionClosedError as exc:
            logger.info("MCP client %s dropped: %s", connection_id, exc)
        finally:
            logger.info("MCP client disconnected: %s", connection_id)

    @asynccontextmanager
    async def running(self) -> AsyncIterator[Server]:
        """Listen for the duration of the ``async with`` block."""
        async with serve(self.handle_connection, self._settings.host, self._settings.port) as server:
            for sock in server.sockets:
                logger.info("Listening on ws://%s:%s%s", *sock.getsockname()[:2], self._settings.path)
            yield server

    async def serve_forever(self) -> None:
        """Listen until cancelled."""
        async with self.running() as server:
            await server.serve_forever()
