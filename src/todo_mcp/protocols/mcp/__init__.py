"""MCP protocol — JSON-RPC channel, WebSocket server, and client."""

from todo_mcp.protocols.mcp.channel import ProtocolChannel
from todo_mcp.protocols.mcp.client import MCPClient
from todo_mcp.protocols.mcp.models import (
    EmbeddedResource,
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    ToolDefinition,
    UIResource,
)
from todo_mcp.protocols.mcp.server import MCPServer
from todo_mcp.protocols.mcp.transport import MCPTransport, WebSocketTransport

__all__ = [
    "EmbeddedResource",
    "InitializeResult",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPClient",
    "MCPServer",
    "MCPTransport",
    "ProtocolChannel",
    "ServerInfo",
    "ToolDefinition",
    "UIResource",
    "WebSocketTransport",
]
