"""Shared CLI output formatters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from todo_mcp.protocols.mcp.models import ToolDefinition, UIResource
    from todo_mcp.relay.surface import RelayEvent

console = Console()
err_console = Console(stderr=True)

_EVENT_STYLES = {
    "replaced": "green",
    "notified": "cyan",
    "diagnostic": "yellow",
    "rejected": "yellow",
    "error": "red",
}


def print_tools_table(tools: list[ToolDefinition]) -> None:
    """Pretty-print tool definitions as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.input_schema.get("required", [])
        table.add_row(tool.name, _truncate(tool.description), ", ".join(required) or "-")

    console.print(table)


def print_result(result: dict[str, Any]) -> None:
    """Print a tool result as JSON, leaving out the rendered document."""
    visible = {key: value for key, value in result.items() if key != "ui"}
    console.print_json(json.dumps(visible, default=str))


def print_relay_event(event: RelayEvent) -> None:
    style = _EVENT_STYLES.get(event.kind.value, "white")
    tool = f" {event.tool_name}" if event.tool_name else ""
    console.print(f"[{style}]{event.kind.value}[/{style}]{tool}: {escape(event.detail)}")


def write_resource(resource: UIResource, path: str) -> None:
    """Write a rendered document to *path*."""
    Path(path).write_text(resource.text, encoding="utf-8")
    console.print(f"Wrote {resource.uri} to {path}")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
