"""Protocol layer — JSON-RPC channel, tool-call errors, and the MCP client."""

from todo_mcp.protocols.errors import (
    APPLICATION_ERROR,
    METHOD_NOT_FOUND,
    ApplicationError,
    ConnectionError,
    FramingError,
    MethodNotFoundError,
    ProtocolError,
    RecordNotFoundError,
    RenderError,
    ToolArgumentError,
    ToolExecutionError,
    ToolNotFoundError,
)

__all__ = [
    "APPLICATION_ERROR",
    "METHOD_NOT_FOUND",
    "ApplicationError",
    "ConnectionError",
    "FramingError",
    "MethodNotFoundError",
    "ProtocolError",
    "RecordNotFoundError",
    "RenderError",
    "ToolArgumentError",
    "ToolExecutionError",
    "ToolNotFoundError",
]
