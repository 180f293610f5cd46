"""MCP models — JSON-RPC 2.0 envelopes, tool definitions, and UI resources.

Wire names are camelCase (``inputSchema``, ``mimeType``); the models expose
snake_case attributes and serialise with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: int | str = 1
    params: dict[str, Any] = {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set on anything the server
    sends; :meth:`to_wire` drops the other key.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: int | str, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: int | str, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(exclude={"result", "error"})
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDefinition(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")
    output_schema: dict[str, Any] = Field(default_factory=dict, alias="outputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=DEFAULT_PROTOCOL_VERSION, alias="protocolVersion")
    server_info: ServerInfo = Field(alias="serverInfo")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})


class UIResource(BaseModel):
    """A rendered, self-contained document delivered as tool output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    mime_type: str = Field(default="text/html", alias="mimeType")
    text: str


class EmbeddedResource(BaseModel):
    """Wire wrapper: ``{"type": "resource", "resource": {...}}``."""

    model_config = ConfigDict(frozen=True)

    type: Literal["resource"] = "resource"
    resource: UIResource

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
