"""``todo-mcp relay`` — replay a dashboard action against a running server."""

from __future__ import annotations

import asyncio
import sys

import click

from todo_mcp.cli_commands._output import console, print_relay_event, write_resource


@click.command()
@click.argument("url")
@click.argument("action")
@click.option("--ui-out", type=click.Path(dir_okay=False, writable=True), default=None, help="Write the displayed UI document here.")
def relay(url: str, action: str, ui_out: str | None) -> None:
    """Replay ACTION (the JSON a dashboard posts) through the relay.

    \b
    Example:
        todo-mcp relay ws://127.0.0.1:8080/mcp \\
            '{"type": "tool", "payload": {"toolName": "todo_list", "params": {}}}'
    """
    from todo_mcp.protocols.mcp.client import MCPClient
    from todo_mcp.relay import ActionRelay, HostSurface, RelayEvent

    surface = HostSurface(surface_id="cli")

    async def _replay() -> RelayEvent:
        async with MCPClient(url) as client:
            return await ActionRelay(client, surface).submit(action)

    try:
        event = asyncio.run(_replay())
    except Exception as exc:
        console.print(f"[red]Connection error:[/red] {exc}")
        sys.exit(1)

    print_relay_event(event)

    if ui_out is not None and surface.current is not None:
        write_resource(surface.current, ui_out)
