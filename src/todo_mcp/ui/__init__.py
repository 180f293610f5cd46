"""UI resources — the rendered dashboard and the actions it posts."""

from todo_mcp.ui.actions import (
    NotifyAction,
    ToolAction,
    UnknownAction,
    parse_action,
    tool_action,
)
from todo_mcp.ui.renderer import (
    DASHBOARD_URI,
    read_snapshot,
    render_dashboard,
    render_embedded,
)

__all__ = [
    "DASHBOARD_URI",
    "NotifyAction",
    "ToolAction",
    "UnknownAction",
    "parse_action",
    "read_snapshot",
    "render_dashboard",
    "render_embedded",
    "tool_action",
]
