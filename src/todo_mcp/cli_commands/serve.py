"""``todo-mcp serve`` — run the WebSocket MCP server."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.markup import escape

from todo_mcp.cli_commands._output import console


@click.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), default=None, help="Settings YAML file.")
@click.option("--host", default=None, help="Interface to bind (default 127.0.0.1).")
@click.option("--port", type=int, default=None, help="Port to listen on (default 8080).")
@click.option("--path", "ws_path", default=None, help="WebSocket endpoint path (default /mcp).")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(
    config_path: str | None,
    host: str | None,
    port: int | None,
    ws_path: str | None,
    telemetry: bool,
) -> None:
    """Serve the todo tools over WebSocket until interrupted."""
    from todo_mcp.protocols.mcp.server import MCPServer
    from todo_mcp.settings import SettingsError, SettingsLoader, build_settings
    from todo_mcp.store import InMemoryRecordStore
    from todo_mcp.tools import build_registry

    overrides = {"host": host, "port": port, "path": ws_path}
    try:
        if config_path is not None:
            settings = SettingsLoader(Path(config_path)).load(**overrides)
        else:
            settings = build_settings(**overrides)
    except SettingsError as exc:
        console.print(f"[red]Settings error:[/red] {escape(str(exc))}")
        sys.exit(1)

    if telemetry:
        settings.telemetry.enabled = True

    if settings.telemetry.enabled:
        from todo_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(service_name=settings.server_name, otlp_endpoint=settings.telemetry.otlp_endpoint)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    server = MCPServer(build_registry(InMemoryRecordStore()), settings)
    console.print(f"Serving {settings.server_name} on [bold]{settings.url}[/bold]")

    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        console.print("Shutting down.")
    except OSError as exc:
        console.print(f"[red]Server error:[/red] {exc}")
        sys.exit(1)
