"""``todo-mcp tools`` — list and call tools on a running server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from todo_mcp.cli_commands._output import console, print_result, print_tools_table, write_resource


@click.group()
def tools() -> None:
    """List and call tools."""


@tools.command("list")
@click.argument("url")
def list_tools(url: str) -> None:
    """List the tools served at URL (e.g. ws://127.0.0.1:8080/mcp)."""
    from todo_mcp.protocols.mcp.client import MCPClient

    async def _list() -> list[Any]:
        async with MCPClient(url) as client:
            return client.tools

    try:
        definitions = asyncio.run(_list())
    except Exception as exc:
        console.print(f"[red]Connection error:[/red] {exc}")
        sys.exit(1)

    if not definitions:
        console.print("[yellow]No tools served.[/yellow]")
        return

    print_tools_table(definitions)


@tools.command("call")
@click.argument("url")
@click.argument("name")
@click.option("--args", "-a", "raw_args", default="{}", help="Tool arguments as a JSON object.")
@click.option("--ui-out", type=click.Path(dir_okay=False, writable=True), default=None, help="Write the returned UI document here.")
def call_tool(url: str, name: str, raw_args: str, ui_out: str | None) -> None:
    """Call tool NAME on the server at URL."""
    from todo_mcp.protocols.errors import ToolExecutionError
    from todo_mcp.protocols.mcp.client import MCPClient
    from todo_mcp.relay.surface import extract_ui

    try:
        arguments = json.loads(raw_args)
    except ValueError as exc:
        console.print(f"[red]Invalid --args:[/red] {exc}")
        sys.exit(2)
    if not isinstance(arguments, dict):
        console.print("[red]Invalid --args:[/red] expected a JSON object")
        sys.exit(2)

    async def _call() -> dict[str, Any]:
        async with MCPClient(url) as client:
            return await client.call_tool(name, arguments)

    try:
        result = asyncio.run(_call())
    except ToolExecutionError as exc:
        console.print(f"[red]Tool error ({exc.code}):[/red] {exc.detail}")
        sys.exit(1)
    except Exception as exc:
        console.print(f"[red]Connection error:[/red] {exc}")
        sys.exit(1)

    print_result(result)

    if ui_out is not None:
        resource = extract_ui(result)
        if resource is None:
            console.print("[yellow]Result carried no UI resource.[/yellow]")
        else:
            write_resource(resource, ui_out)
