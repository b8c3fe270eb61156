#!/usr/bin/env python3
"""
ThinkSpace Notes CLI.

Command-line client for the notes backend.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                              # Show help

    # Server management
    python cli.py server start                        # Start FastAPI server
    python cli.py server start --reload               # Start with auto-reload

    # Database
    python cli.py db upgrade                          # Apply migrations
    python cli.py db current                          # Show current revision
    python cli.py db init                             # Create tables without Alembic

    # Notes (requires running server)
    python cli.py notes list                          # Active notes, newest first
    python cli.py notes list -q milk -t home          # Filter by text and tags
    python cli.py notes create --title T -c "body"    # Create a note
    python cli.py notes pin <id>                      # Pin a note
    python cli.py notes tags                          # All tags in use

    # Health checks
    python cli.py health check                        # Local health check (no server)
    python cli.py health status                       # Backend readiness
    python cli.py health ping                         # Ping backend

    # Terminal UI
    python cli.py tui                                 # Interactive notes board

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from thinkspace.cli.commands import db_app, health_app, notes_app, server_app

app = typer.Typer(
    name="cli",
    help="ThinkSpace Notes CLI - notes, server management, database and health checks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(server_app, name="server")
app.add_typer(db_app, name="db")
app.add_typer(notes_app, name="notes")
app.add_typer(health_app, name="health")


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.command()
def tui() -> None:
    """
    Start the interactive notes board (Textual).

    Requires a running server.
    """
    from thinkspace.tui.app import NotesTUI

    NotesTUI().run()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    ThinkSpace Notes CLI.

    Manage notes on a running backend, start the server, run migrations
    and check health.
    """
    _validate_project_root()

    if debug:
        from thinkspace.backend.core.logging import setup_logging
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        from thinkspace.backend.core.logging import setup_logging
        setup_logging(level="INFO", format_type="console")


if __name__ == "__main__":
    app()
