"""Live tests: MCPServer on an ephemeral port, driven by MCPClient."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator

import pytest
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed

from todo_mcp.protocols.errors import ToolExecutionError
from todo_mcp.protocols.mcp.client import MCPClient
from todo_mcp.protocols.mcp.server import MCPServer
from todo_mcp.relay import ActionRelay, HostSurface, RelayEventKind
from todo_mcp.settings import build_settings
from todo_mcp.store import InMemoryRecordStore
from todo_mcp.tools import TOOL_CREATE, TOOL_LIST, build_registry
from todo_mcp.ui import read_snapshot, tool_action


@pytest.fixture
async def server_url() -> AsyncIterator[str]:
    settings = build_settings(port=0)
    server = MCPServer(build_registry(InMemoryRecordStore()), settings)
    async with server.running() as ws_server:
        port = next(iter(ws_server.sockets)).getsockname()[1]
        yield f"ws://127.0.0.1:{port}{settings.path}"


class TestMCPServerLive:
    async def test_handshake_and_tools(self, server_url: str) -> None:
        async with MCPClient(server_url) as client:
            assert client.server_info["name"] == "todo-mcp-server"
            assert [tool.name for tool in client.tools] == [
                "todo_create",
                "todo_list",
                "todo_update",
                "todo_delete",
            ]

    async def test_connections_share_store(self, server_url: str) -> None:
        async with MCPClient(server_url) as writer, MCPClient(server_url) as reader:
            await writer.call_tool(TOOL_CREATE, {"title": "Buy milk"})
            result = await reader.call_tool(TOOL_LIST)
        assert [todo["title"] for todo in result["todos"]] == ["Buy milk"]

    async def test_application_error_over_the_wire(self, server_url: str) -> None:
        async with MCPClient(server_url) as client:
            with pytest.raises(ToolExecutionError) as info:
                await client.call_tool("todo_update", {"id": "nope", "completed": True})
        assert info.value.code == -32001
        assert info.value.detail == "Todo not found"

    async def test_malformed_frames_are_ignored(self, server_url: str) -> None:
        async with connect(server_url) as websocket:
            await websocket.send("{definitely not json")
            await websocket.send(json.dumps({"jsonrpc": "2.0", "method": "ping"}))
            await websocket.send(json.dumps({"jsonrpc": "2.0", "id": 5, "method": "ping"}))
            reply = json.loads(await websocket.recv())
        assert reply == {"jsonrpc": "2.0", "id": 5, "result": {}}

    async def test_replies_in_request_order(self, server_url: str) -> None:
        async with connect(server_url) as websocket:
            for request_id in (1, 2, 3):
                await websocket.send(json.dumps({"jsonrpc": "2.0", "id": request_id, "method": "ping"}))
            ids = [json.loads(await websocket.recv())["id"] for _ in range(3)]
        assert ids == [1, 2, 3]

    async def test_unknown_path_is_closed(self, server_url: str) -> None:
        other = server_url.rsplit("/", 1)[0] + "/elsewhere"
        async with connect(other) as websocket:
            with pytest.raises(ConnectionClosed):
                await websocket.recv()
        assert websocket.close_code == 1008


class TestRelayLive:
    async def test_dashboard_refresh_replaces_surface(self, server_url: str) -> None:
        async with MCPClient(server_url) as client:
            created = await client.call_tool(TOOL_CREATE, {"title": "Buy milk"})
            surface = HostSurface(surface_id="live")
            assert surface.show_result(created)
            first = surface.current

            await client.call_tool(TOOL_CREATE, {"title": "Walk dog"})
            event = await ActionRelay(client, surface).submit(tool_action(TOOL_LIST).to_wire())

        assert event.kind is RelayEventKind.REPLACED
        assert surface.current is not first

    async def test_server_gone_is_an_error_event(self) -> None:
        settings = build_settings(port=0)
        server = MCPServer(build_registry(InMemoryRecordStore()), settings)
        async with server.running() as ws_server:
            port = next(iter(ws_server.sockets)).getsockname()[1]
            client = MCPClient(f"ws://127.0.0.1:{port}{settings.path}")
            await client.connect()

        try:
            surface = HostSurface(surface_id="orphan")
            relay = ActionRelay(client, surface)
            event = await relay.submit(tool_action(TOOL_LIST).to_wire())
        finally:
            await client.close()

        assert event.kind is RelayEventKind.ERROR
        assert event.tool_name == TOOL_LIST
        assert surface.current is None
        assert not relay.busy
        assert [todo["title"] for todo in read_snapshot(surface.current)] == ["Buy milk", "Walk dog"]
