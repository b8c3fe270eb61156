"""
Note board view state.

Holds the full set of loaded notes in memory and derives the three views
shown by the frontends (pinned, active, archived). Each view is filtered
by the free-text query and by the selected tags. Mutations go through the
NotesClient and the server's returned record replaces the local copy.

Notes are plain dicts in the API's wire shape.
"""

import re
from typing import Any, Iterable, Literal

from rich.color import ColorParseError
from rich.style import Style
from rich.text import Text

from thinkspace.backend.core.config import get_app_config
from thinkspace.backend.core.logging import get_logger
from thinkspace.backend.schemas.note import DEFAULT_COLOR
from thinkspace.cli.client import NotesClient

logger = get_logger(__name__)

Note = dict[str, Any]
View = Literal["pinned", "active", "archived", "all"]

VIEWS: tuple[str, ...] = ("pinned", "active", "archived", "all")

HIGHLIGHT_STYLE = "bold black on yellow"


def matches_search(note: Note, query: str) -> bool:
    """Case-insensitive substring match against title, content or any tag."""
    if not query:
        return True
    needle = query.lower()
    if needle in (note.get("title") or "").lower():
        return True
    if needle in (note.get("content") or "").lower():
        return True
    return any(needle in tag.lower() for tag in note.get("tags") or [])


def matches_tags(note: Note, selected: Iterable[str]) -> bool:
    """A note matches only if it carries every selected tag."""
    tags = set(note.get("tags") or [])
    return all(tag in tags for tag in selected)


def in_view(note: Note, view: View) -> bool:
    archived = bool(note.get("isArchived"))
    if view == "pinned":
        return bool(note.get("isPinned")) and not archived
    if view == "active":
        return not archived
    if view == "archived":
        return archived
    if view == "all":
        return True
    raise ValueError(f"Unknown view: {view}")


def collect_tags(notes: Iterable[Note]) -> list[str]:
    """Distinct tags across notes, in first-seen order."""
    seen: dict[str, None] = {}
    for note in notes:
        for tag in note.get("tags") or []:
            seen.setdefault(tag, None)
    return list(seen)


def highlight(text: str, query: str) -> list[tuple[str, bool]]:
    """
    Split text into (segment, is_match) pairs.

    Every case-insensitive occurrence of the query becomes its own matched
    segment; the original casing of the text is kept.
    """
    if not text:
        return []
    if not query:
        return [(text, False)]

    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    segments = []
    for index, part in enumerate(pattern.split(text)):
        if part:
            # re.split with a capturing group puts matches at odd indexes
            segments.append((part, index % 2 == 1))
    return segments


def highlight_text(text: str, query: str, style: str = HIGHLIGHT_STYLE) -> Text:
    """Render highlight() segments as a Rich Text."""
    rendered = Text()
    for segment, is_match in highlight(text, query):
        rendered.append(segment, style=style if is_match else None)
    return rendered


def load_palette() -> list[str]:
    """Colors offered when creating or editing a note (application.yaml client.palette)."""
    return list(get_app_config().application.client.palette)


def color_swatch(color: str | None) -> Text:
    """
    A colored block followed by the color token.

    The backend stores any non-empty string as a color, so tokens Rich
    cannot parse render as plain text.
    """
    label = color or DEFAULT_COLOR
    try:
        style = Style(color=label)
    except ColorParseError:
        return Text(label)
    return Text.assemble(("■", style), f" {label}")


class NoteBoard:
    """
    In-memory view state for the notes frontends.

    Usage:
        board = NoteBoard(NotesClient(APIClient(frontend="tui")))
        await board.load()
        board.query = "milk"
        for note in board.view("active"):
            ...

    Failed calls raise ApiError and leave the board unchanged.
    """

    def __init__(self, client: NotesClient) -> None:
        self.client = client
        self.notes: list[Note] = []
        self.query: str = ""
        self.selected_tags: list[str] = []

    # -- derived state ----------------------------------------------------

    @property
    def all_tags(self) -> list[str]:
        """Tag universe across every loaded note, regardless of view."""
        return collect_tags(self.notes)

    def view(self, name: View) -> list[Note]:
        return [
            note
            for note in self.notes
            if in_view(note, name)
            and matches_search(note, self.query)
            and matches_tags(note, self.selected_tags)
        ]

    @property
    def pinned(self) -> list[Note]:
        return self.view("pinned")

    @property
    def active(self) -> list[Note]:
        return self.view("active")

    @property
    def archived(self) -> list[Note]:
        return self.view("archived")

    def find(self, note_id: str) -> Note | None:
        for note in self.notes:
            if note.get("id") == note_id:
                return note
        return None

    # -- filter controls --------------------------------------------------

    def toggle_tag(self, tag: str) -> None:
        if tag in self.selected_tags:
            self.selected_tags.remove(tag)
        else:
            self.selected_tags.append(tag)

    def clear_tags(self) -> None:
        self.selected_tags.clear()

    # -- server round trips -----------------------------------------------

    async def load(self) -> list[Note]:
        """Refetch every note from the server."""
        self.notes = await self.client.list()
        logger.debug("Board loaded", extra={"count": len(self.notes)})
        return self.notes

    def _replace(self, updated: Note) -> Note:
        for index, note in enumerate(self.notes):
            if note.get("id") == updated.get("id"):
                self.notes[index] = updated
                break
        return updated

    async def update(self, note_id: str, changes: dict[str, Any]) -> Note:
        updated = await self.client.update(note_id, changes)
        return self._replace(updated)

    async def toggle_pin(self, note_id: str) -> Note:
        note = self.find(note_id)
        if note is None:
            raise KeyError(note_id)
        return await self.update(note_id, {"isPinned": not note.get("isPinned")})

    async def toggle_archive(self, note_id: str) -> Note:
        note = self.find(note_id)
        if note is None:
            raise KeyError(note_id)
        return await self.update(note_id, {"isArchived": not note.get("isArchived")})

    async def create(
        self,
        title: str,
        content: str,
        tags: list[str] | None = None,
        color: str | None = None,
    ) -> Note:
        created = await self.client.create(title, content, tags=tags, color=color)
        self.notes.insert(0, created)
        return created

    async def delete(self, note_id: str) -> str:
        message = await self.client.delete(note_id)
        self.notes = [note for note in self.notes if note.get("id") != note_id]
        return message
