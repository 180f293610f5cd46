"""Tool registry — the todo tools and their schema contracts."""

from todo_mcp.tools.contracts import (
    TOOL_CREATE,
    TOOL_DELETE,
    TOOL_LIST,
    TOOL_NAMES,
    TOOL_UPDATE,
)
from todo_mcp.tools.registry import RegisteredTool, ToolRegistry
from todo_mcp.tools.todo import TodoTools, build_registry

__all__ = [
    "TOOL_CREATE",
    "TOOL_DELETE",
    "TOOL_LIST",
    "TOOL_NAMES",
    "TOOL_UPDATE",
    "RegisteredTool",
    "TodoTools",
    "ToolRegistry",
    "build_registry",
]
