"""Shared fixtures: a fresh store, its registry, and a channel over it."""

from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from todo_mcp.protocols.mcp.channel import ProtocolChannel
from todo_mcp.protocols.mcp.models import JsonRpcResponse, ServerInfo
from todo_mcp.store import InMemoryRecordStore
from todo_mcp.tools import ToolRegistry, build_registry

RpcCall = Callable[..., Awaitable[JsonRpcResponse]]


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def registry(store: InMemoryRecordStore) -> ToolRegistry:
    return build_registry(store)


@pytest.fixture
def channel(registry: ToolRegistry) -> ProtocolChannel:
    return ProtocolChannel(
        registry,
        server_info=ServerInfo(name="todo-mcp-server", version="0.1.0"),
        connection_id="test",
    )


@pytest.fixture
def rpc(channel: ProtocolChannel) -> RpcCall:
    """Send a request through the channel and return its response."""
    ids = itertools.count(1)

    async def _rpc(method: str, params: dict[str, Any] | None = None) -> JsonRpcResponse:
        message = {"jsonrpc": "2.0", "id": next(ids), "method": method, "params": params or {}}
        response = await channel.handle_message(message)
        assert response is not None
        return response

    return _rpc


@pytest.fixture
def call_tool(rpc: RpcCall) -> RpcCall:
    """Shortcut for ``tools/call``."""

    async def _call(name: str, arguments: dict[str, Any] | None = None) -> JsonRpcResponse:
        return await rpc("tools/call", {"name": name, "arguments": arguments or {}})

    return _call
