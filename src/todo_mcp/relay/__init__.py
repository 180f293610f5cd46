"""Action relay — host-side replay of dashboard actions as tool calls."""

from todo_mcp.relay.relay import ActionRelay, ToolCaller
from todo_mcp.relay.surface import HostSurface, RelayEvent, RelayEventKind, extract_ui

__all__ = [
    "ActionRelay",
    "HostSurface",
    "RelayEvent",
    "RelayEventKind",
    "ToolCaller",
    "extract_ui",
]
