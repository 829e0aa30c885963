#!/usr/bin/env python3
"""
Cartfold CLI - Event-sourced shopping cart replay

Main entrypoint for the cartfold command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cartfold.logging_config import setup_logging
from cli.commands import events, replay

# Initialize Typer app
app = typer.Typer(
    name="cartfold",
    help="Event-sourced shopping cart replay CLI",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command(name="replay")(replay.replay_command)
app.command(name="events")(events.events_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (overrides CARTFOLD_LOG_LEVEL)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="Log format: json or text (overrides CARTFOLD_LOG_FORMAT)"
    ),
):
    """Configure logging before running a command."""
    setup_logging(level=log_level, fmt=log_format)


@app.command()
def version():
    """Show version information."""
    from cartfold import __version__ as engine_version
    from cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Cartfold CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
