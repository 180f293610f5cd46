"""Tests for the WebSocket transport with mocks."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import ConnectionClosed

from todo_mcp.protocols.mcp.transport import MCPTransport, WebSocketTransport


class TestMCPTransportProtocol:
    def test_websocket_satisfies_protocol(self) -> None:
        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        assert isinstance(transport, MCPTransport)


class TestWebSocketTransport:
    async def test_connect_opens_websocket(self) -> None:
        mock_ws = AsyncMock()

        with patch("todo_mcp.protocols.mcp.transport.connect", AsyncMock(return_value=mock_ws)) as mock_connect:
            transport = WebSocketTransport(url="ws://localhost:8080/mcp")
            await transport.connect()

        mock_connect.assert_awaited_once_with("ws://localhost:8080/mcp")
        assert transport._ws is mock_ws

    async def test_send_writes_json(self) -> None:
        mock_ws = AsyncMock()
        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        data = {"method": "ping"}
        await transport.send(data)
        mock_ws.send.assert_awaited_once_with(json.dumps(data))

    async def test_receive_reads_json(self) -> None:
        expected = {"result": {}}
        mock_ws = AsyncMock()
        mock_ws.recv = AsyncMock(return_value=json.dumps(expected))

        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        assert await transport.receive() == expected

    async def test_receive_invalid_json_raises_value_error(self) -> None:
        mock_ws = AsyncMock()
        mock_ws.recv = AsyncMock(return_value="{oops")

        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        with pytest.raises(ValueError):
            await transport.receive()

    async def test_receive_after_peer_close(self) -> None:
        mock_ws = AsyncMock()
        mock_ws.recv = AsyncMock(side_effect=ConnectionClosed(None, None))

        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        with pytest.raises(RuntimeError, match="closed"):
            await transport.receive()

    async def test_close_closes_websocket(self) -> None:
        mock_ws = AsyncMock()
        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        await transport.close()
        mock_ws.close.assert_awaited_once()
        assert transport._ws is None

    async def test_send_without_connect_raises(self) -> None:
        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        with pytest.raises(RuntimeError, match="not connected"):
            await transport.send({"test": True})

    async def test_receive_without_connect_raises(self) -> None:
        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        with pytest.raises(RuntimeError, match="not connected"):
            await transport.receive()

    async def test_send_after_peer_close(self) -> None:
        mock_ws = AsyncMock()
        mock_ws.send = AsyncMock(side_effect=ConnectionClosed(None, None))

        transport = WebSocketTransport(url="ws://localhost:8080/mcp")
        transport._ws = mock_ws

        with pytest.raises(RuntimeError, match="closed"):
            await transport.send({"method": "ping"})
