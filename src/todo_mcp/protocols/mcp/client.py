"""MCPClient — connects to an MCP server and calls its tools.

Implements the ``initialize`` handshake, tool discovery (``tools/list``)
and execution (``tools/call``) over an :class:`MCPTransport`.  Several
requests may be in flight at once: a reader task matches each response to
its pending request by id and drops responses nobody is waiting for.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, cast

from pydantic import ValidationError

from todo_mcp import __version__
from todo_mcp.protocols.errors import ConnectionError, ProtocolError, ToolExecutionError
from todo_mcp.protocols.mcp.models import (
    DEFAULT_PROTOCOL_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDefinition,
)
from todo_mcp.protocols.mcp.transport import MCPTransport, WebSocketTransport

logger = logging.getLogger(__name__)


class MCPClient:
    """Async context manager that connects to an MCP server.

    Satisfies the :class:`~todo_mcp.relay.relay.ToolCaller` protocol.

    Usage::

        async with MCPClient("ws://127.0.0.1:8080/mcp") as client:
            result = await client.call_tool("todo_create", {"title": "Buy milk"})
    """

    def __init__(
        self,
        url: str,
        *,
        transport: MCPTransport | None = None,
        client_name: str = "todo-mcp-client",
    ) -> None:
        self._url = url
        self._transport = transport
        self._client_name = client_name
        self._tools: dict[str, ToolDefinition] = {}
        self._pending: dict[int, asyncio.Future[JsonRpcResponse]] = {}
        self._reader: asyncio.Task[None] | None = None
        self._next_id = 1
        self.server_info: dict[str, Any] = {}

    async def __aenter__(self) -> MCPClient:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    @property
    def tools(self) -> list[ToolDefinition]:
        """Tools cached from the last ``tools/list``."""
        return list(self._tools.values())

    async def connect(self) -> None:
        """Connect, start the reader, handshake, and discover tools."""
        if self._transport is None:
            self._transport = WebSocketTransport(self._url)
        try:
            await self._transport.connect()
        except Exception as exc:
            raise ConnectionError(str(exc)) from exc
        self._reader = asyncio.create_task(self._read_loop(self._transport))
        try:
            await self._handshake()
            await self.list_tools()
        except BaseException:
            await self.close()
            raise

    async def close(self) -> None:
        """Stop the reader, fail outstanding requests, and close the transport."""
        if self._reader is not None:
            self._reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reader
            self._reader = None
        self._fail_pending(ConnectionError("Client closed"))
        if self._transport is not None:
            await self._transport.close()
            self._transport = None

    async def list_tools(self) -> list[ToolDefinition]:
        """Send ``tools/list`` and cache the definitions."""
        response = await self.request("tools/list")
        if response.error is not None:
            raise ProtocolError(response.error.message)
        raw_tools = cast("list[dict[str, Any]]", (response.result or {}).get("tools", []))
        self._tools = {}
        for raw in raw_tools:
            tool = ToolDefinition.model_validate(raw)
            self._tools[tool.name] = tool
        return self.tools

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send ``tools/call`` and return the result payload.

        Raises:
            ToolExecutionError: If the server answers with an error envelope.
        """
        response = await self.request("tools/call", params={"name": name, "arguments": arguments or {}})
        if response.error is not None:
            raise ToolExecutionError(name, response.error.message, code=response.error.code)
        return response.result or {}

    async def request(self, method: str, params: dict[str, Any] | None = None) -> JsonRpcResponse:
        """Send a JSON-RPC request and wait for the matching response.

        Raises:
            ConnectionError: If the connection is gone before or while sending.
        """
        if self._transport is None or self._reader is None:
            msg = "Client not connected"
            raise RuntimeError(msg)
        if self._reader.done():
            raise ConnectionError(f"Connection to {self._url} is closed")

        request_id = self._next_id
        self._next_id += 1

        future: asyncio.Future[JsonRpcResponse] = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        request = JsonRpcRequest(method=method, id=request_id, params=params or {})
        try:
            try:
                await self._transport.send(request.model_dump())
            except RuntimeError as exc:
                raise ConnectionError(str(exc)) from exc
            return await future
        finally:
            self._pending.pop(request_id, None)

    async def _handshake(self) -> None:
        """Perform the MCP initialize handshake."""
        response = await self.request(
            "initialize",
            params={
                "protocolVersion": DEFAULT_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": self._client_name, "version": __version__},
            },
        )
        if response.error is not None:
            raise ConnectionError(f"initialize failed: {response.error.message}")
        self.server_info = dict((response.result or {}).get("serverInfo", {}))

    async def _read_loop(self, transport: MCPTransport) -> None:
        while True:
            try:
                raw = await transport.receive()
            except ValueError as exc:
                logger.warning("Dropping undecodable frame: %s", exc)
                continue
            except RuntimeError as exc:
                logger.info("Connection to %s ended: %s", self._url, exc)
                self._fail_pending(ConnectionError(str(exc)))
                return

            try:
                response = JsonRpcResponse.model_validate(raw)
            except ValidationError:
                logger.warning("Dropping frame that is not a JSON-RPC response: %r", raw)
                continue

            future = self._pending.get(response.id) if isinstance(response.id, int) else None
            if future is None:
                logger.warning("Dropping response with unknown id %r", response.id)
                continue
            if not future.done():
                future.set_result(response)

    def _fail_pending(self, exc: Exception) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(exc)
        self._pending.clear()
