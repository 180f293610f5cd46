"""MCP transport — the WebSocket communication layer used by the client.

The transport satisfies the :class:`MCPTransport` protocol, providing
``connect``, ``send``, ``receive``, and ``close`` methods.
"""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed


@runtime_checkable
class MCPTransport(Protocol):
    """Abstract transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, data: dict[str, Any]) -> None: ...
    async def receive(self) -> dict[str, Any]: ...
    async def close(self) -> None: ...


class WebSocketTransport:
    """Communicates with an MCP server over WebSocket text frames."""

    def __init__(self, url: str) -> None:
        self._url = url
        self._ws: ClientConnection | None = None

    async def connect(self) -> None:
        """Open the WebSocket connection."""
        self._ws = await connect(self._url)

    async def send(self, data: dict[str, Any]) -> None:
        """Send a JSON message over the WebSocket.

        Raises:
            RuntimeError: If the transport is not connected or the peer closed.
        """
        if self._ws is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        try:
            await self._ws.send(json.dumps(data))
        except ConnectionClosed as exc:
            msg = "Transport closed"
            raise RuntimeError(msg) from exc

    async def receive(self) -> dict[str, Any]:
        """Receive a JSON message from the WebSocket.

        Raises:
            RuntimeError: If the transport is not connected or the peer closed.
            ValueError: If the frame is not JSON.
        """
        if self._ws is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        try:
            raw = await self._ws.recv()
        except ConnectionClosed as exc:
            msg = "Transport closed"
            raise RuntimeError(msg) from exc
        return json.loads(raw)  # type: ignore[no-any-return]

    async def close(self) -> None:
        """Close the WebSocket connection."""
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
