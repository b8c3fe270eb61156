"""
Database Commands.

Schema management for the notes store. Migrations run through Alembic's
command API against thinkspace/backend/migrations; `init` creates the
tables directly from the models for a quick local SQLite setup.
"""

import asyncio
from pathlib import Path

import typer
from alembic import command
from alembic.config import Config
from alembic.util.exc import CommandError
from rich.console import Console

app = typer.Typer(help="Database migration commands")
console = Console()

PROJECT_ROOT = Path(__file__).resolve().parents[3]
ALEMBIC_INI = PROJECT_ROOT / "thinkspace" / "backend" / "migrations" / "alembic.ini"


def _alembic_config() -> Config:
    """Build the Alembic config, failing cleanly if alembic.ini is missing."""
    if not ALEMBIC_INI.exists():
        console.print("[red]Error: thinkspace/backend/migrations/alembic.ini not found[/red]")
        raise typer.Exit(1)

    config = Config(str(ALEMBIC_INI))
    config.set_main_option(
        "script_location", str(PROJECT_ROOT / "thinkspace" / "backend" / "migrations")
    )
    return config


def _run(operation, *args, **kwargs) -> None:
    try:
        operation(_alembic_config(), *args, **kwargs)
    except CommandError as e:
        console.print(f"[red]Alembic error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def upgrade(
    revision: str = typer.Option("head", "--revision", "-r", help="Target revision"),
) -> None:
    """
    Upgrade database to a revision.

    Examples:
        cli.py db upgrade
        cli.py db upgrade -r 0001
    """
    console.print(f"[bold]Upgrading database to revision: {revision}[/bold]\n")
    _run(command.upgrade, revision)
    console.print("\n[green]Upgrade completed[/green]")


@app.command()
def downgrade(
    revision: str = typer.Option(..., "--revision", "-r", help="Target revision"),
) -> None:
    """
    Downgrade database to a revision.

    Examples:
        cli.py db downgrade --revision -1
        cli.py db downgrade --revision base
    """
    console.print(f"[bold]Downgrading database to revision: {revision}[/bold]\n")
    _run(command.downgrade, revision)
    console.print("\n[green]Downgrade completed[/green]")


@app.command()
def current() -> None:
    """Show current database revision."""
    console.print("[bold]Current database revision:[/bold]\n")
    _run(command.current, verbose=True)


@app.command()
def history() -> None:
    """Show migration history."""
    console.print("[bold]Migration history:[/bold]\n")
    _run(command.history, verbose=True)


@app.command()
def init() -> None:
    """
    Create missing tables straight from the models (no migration history).

    Examples:
        cli.py db init
    """
    from thinkspace.backend.core.config import get_database_url
    from thinkspace.backend.core.database import dispose_engine, init_db

    async def _init() -> None:
        try:
            await init_db()
        finally:
            await dispose_engine()

    console.print(f"[bold]Creating tables at {get_database_url().split('@')[-1]}[/bold]")
    asyncio.run(_init())
    console.print("[green]Tables ready[/green]")
