"""todo-mcp CLI entrypoint."""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from todo_mcp import __version__
from todo_mcp.cli_commands._output import err_console


@click.group()
@click.version_option(version=__version__, prog_name="todo-mcp")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Root logger level.",
)
def main(log_level: str) -> None:
    """todo-mcp — todo tools over MCP, with a dashboard that calls them back."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# Register subcommands
from todo_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
