"""
Notes Commands.

Create, browse and manage notes on a running backend.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from thinkspace.backend.schemas.note import DEFAULT_COLOR
from thinkspace.cli.board import VIEWS, NoteBoard, color_swatch, highlight_text, load_palette
from thinkspace.cli.client import APIClient, ApiError, NotesClient

app = typer.Typer(help="Note management commands")
console = Console()


def get_notes_client() -> NotesClient:
    return NotesClient(APIClient(frontend="cli"))


def _run(action: Callable[[NotesClient], Awaitable[Any]]) -> Any:
    """Run one API action, turning ApiError into a red message and exit 1."""

    async def _runner() -> Any:
        client = get_notes_client()
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        return asyncio.run(_runner())
    except ApiError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


def _check_color(color: str | None) -> None:
    """Exit 2 unless the color is unset, a palette color or the default."""
    if color is None:
        return
    choices = load_palette()
    if color in choices or color == DEFAULT_COLOR:
        return
    console.print(f"[red]Unknown color '{color}'. Choose from: {', '.join(choices)}[/red]")
    console.print("[dim]See: cli.py notes colors[/dim]")
    raise typer.Exit(2)


def _format_timestamp(value: str | None) -> str:
    if not value:
        return "-"
    return value.replace("T", " ")[:16]


def _notes_table(notes: list[dict], query: str = "", title: str = "Notes") -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")
    table.add_column("Tags")
    table.add_column("Color", no_wrap=True)
    table.add_column("Pinned", justify="center")
    table.add_column("Archived", justify="center")
    table.add_column("Created")

    for note in notes:
        tags = Text(", ").join(highlight_text(tag, query) for tag in note.get("tags") or [])
        table.add_row(
            note["id"],
            highlight_text(note["title"], query),
            tags,
            color_swatch(note.get("color")),
            "📌" if note.get("isPinned") else "",
            "✓" if note.get("isArchived") else "",
            _format_timestamp(note.get("createdAt")),
        )
    return table


def _show_note(note: dict, query: str = "") -> None:
    body = Text()
    body.append_text(highlight_text(note["content"], query))
    body.append("\n\n")
    if note.get("tags"):
        body.append("Tags: ", style="bold")
        body.append(", ".join(note["tags"]))
        body.append("\n")
    body.append("Color: ", style="dim")
    body.append_text(color_swatch(note.get("color")))
    body.append(f"\nCreated: {_format_timestamp(note.get('createdAt'))}", style="dim")
    body.append(f"  Updated: {_format_timestamp(note.get('updatedAt'))}", style="dim")

    flags = []
    if note.get("isPinned"):
        flags.append("pinned")
    if note.get("isArchived"):
        flags.append("archived")
    subtitle = ", ".join(flags) or None

    console.print(Panel(
        body,
        title=highlight_text(note["title"], query),
        subtitle=subtitle,
        border_style="cyan",
    ))
    console.print(f"[dim]{note['id']}[/dim]")


@app.command("list")
def list_notes(
    query: str = typer.Option("", "--query", "-q", help="Filter by text in title, content or tags"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Require tag (repeatable)"),
    view: str = typer.Option("active", "--view", "-v", help="pinned, active, archived or all"),
) -> None:
    """
    List notes, newest first.

    Examples:
        cli.py notes list
        cli.py notes list -q milk
        cli.py notes list -t home -t errands --view archived
    """
    if view not in VIEWS:
        console.print(f"[red]Unknown view '{view}'. Choose from: {', '.join(VIEWS)}[/red]")
        raise typer.Exit(2)

    async def _list(client: NotesClient) -> list[dict]:
        board = NoteBoard(client)
        await board.load()
        board.query = query
        for name in tag or []:
            board.toggle_tag(name)
        return board.view(view)

    notes = _run(_list)
    if not notes:
        console.print("[dim]No notes found[/dim]")
        return
    console.print(_notes_table(notes, query, title=f"Notes ({view})"))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search for in title and content"),
) -> None:
    """
    Search notes on the server (title and content).

    Examples:
        cli.py notes search groceries
    """
    notes = _run(lambda client: client.search(query))
    if not notes:
        console.print("[dim]No matching notes[/dim]")
        return
    console.print(_notes_table(notes, query, title=f"Search: {query}"))


@app.command()
def show(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """Show one note in full."""
    _show_note(_run(lambda client: client.get(note_id)))


@app.command()
def create(
    title: str = typer.Option(..., "--title", help="Note title"),
    content: str = typer.Option(..., "--content", "-c", help="Note content"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    color: Optional[str] = typer.Option(None, "--color", help="Palette color, see `notes colors`"),
) -> None:
    """
    Create a note.

    Examples:
        cli.py notes create --title Shopping -c "milk, eggs" -t home
        cli.py notes create --title Ideas -c "..." --color "#fef9c3"
    """
    _check_color(color)
    note = _run(lambda client: client.create(title, content, tags=tag or [], color=color))
    console.print("[green]Note created successfully![/green]")
    _show_note(note)


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="New content"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Replace tags (repeatable)"),
    clear_tags: bool = typer.Option(False, "--clear-tags", help="Remove all tags"),
    color: Optional[str] = typer.Option(None, "--color", help="New palette color, see `notes colors`"),
) -> None:
    """
    Update fields of a note. Fields not given stay unchanged.

    Examples:
        cli.py notes edit <id> --title "Weekly shopping"
        cli.py notes edit <id> -t home -t weekly
    """
    _check_color(color)
    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    if clear_tags:
        changes["tags"] = []
    elif tag:
        changes["tags"] = tag
    if color is not None:
        changes["color"] = color

    if not changes:
        console.print("[yellow]Nothing to update[/yellow]")
        raise typer.Exit(1)

    note = _run(lambda client: client.update(note_id, changes))
    console.print("[green]Note updated successfully![/green]")
    _show_note(note)


def _set_flag(note_id: str, field: str, value: bool, message: str) -> None:
    _run(lambda client: client.update(note_id, {field: value}))
    console.print(f"[green]{message}[/green]")


@app.command()
def pin(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Pin a note."""
    _set_flag(note_id, "isPinned", True, "Note pinned!")


@app.command()
def unpin(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Unpin a note."""
    _set_flag(note_id, "isPinned", False, "Note unpinned!")


@app.command()
def archive(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Archive a note."""
    _set_flag(note_id, "isArchived", True, "Note archived!")


@app.command()
def unarchive(note_id: str = typer.Argument(..., help="Note ID")) -> None:
    """Restore an archived note."""
    _set_flag(note_id, "isArchived", False, "Note unarchived!")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a note permanently.

    Examples:
        cli.py notes delete <id>
        cli.py notes delete <id> -y
    """
    if not yes and not typer.confirm("Are you sure you want to delete this note?"):
        console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(0)

    message = _run(lambda client: client.delete(note_id))
    console.print(f"[green]{message or 'Note deleted'}[/green]")


@app.command()
def tags() -> None:
    """List every tag in use, in first-seen order."""

    async def _tags(client: NotesClient) -> list[str]:
        board = NoteBoard(client)
        await board.load()
        return board.all_tags

    names = _run(_tags)
    if not names:
        console.print("[dim]No tags yet[/dim]")
        return
    console.print(" ".join(f"[cyan]#{name}[/cyan]" for name in names))


@app.command()
def colors() -> None:
    """List the palette colors accepted by --color."""
    for color in load_palette():
        console.print(color_swatch(color))
