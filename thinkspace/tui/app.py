"""
Notes TUI.

Interactive board over the notes API. Three tabs (Pinned, Notes, Archived)
show the views derived by NoteBoard; the search box and tag filter apply to
all of them. Every action is one round trip; failures show a toast and
leave the board as it was.

Usage:
    python tui.py
    python cli.py tui
"""

from __future__ import annotations

from rich.text import Text
from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.color import Color, ColorParseError
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from thinkspace.backend.core.logging import get_logger, log_with_source
from thinkspace.backend.schemas.note import DEFAULT_COLOR
from thinkspace.cli.board import Note, NoteBoard, color_swatch, highlight_text, load_palette
from thinkspace.cli.client import APIClient, ApiError, NotesClient

logger = get_logger(__name__)

TABS: dict[str, str] = {
    "pinned": "Pinned",
    "active": "Notes",
    "archived": "Archived",
}

SNIPPET_LENGTH = 120


def render_note(note: Note, query: str) -> Text:
    """Title, content snippet and tags with search matches highlighted."""
    text = Text()
    if note.get("isPinned"):
        text.append("📌 ")
    text.append_text(highlight_text(note["title"], query, style="bold black on yellow"))
    text.stylize("bold", 0, len(text))

    content = note.get("content") or ""
    if len(content) > SNIPPET_LENGTH:
        content = content[:SNIPPET_LENGTH].rstrip() + "…"
    text.append("\n")
    text.append_text(highlight_text(content, query))

    tags = note.get("tags") or []
    if tags:
        text.append("\n")
        for tag in tags:
            text.append("#", style="cyan")
            text.append_text(highlight_text(tag, query, style="bold black on yellow"))
            text.append(" ")
    return text


def note_tint(color: str | None) -> Color | None:
    """Border color for a note, or None when the stored token is not a color."""
    try:
        return Color.parse(color or DEFAULT_COLOR)
    except ColorParseError:
        return None


class NoteItem(ListItem):
    """One note in a view list, edged in the note's color."""

    def __init__(self, note: Note, query: str) -> None:
        super().__init__(Static(render_note(note, query)))
        self.note_id = note["id"]
        tint = note_tint(note.get("color"))
        if tint is not None:
            self.styles.border_left = ("thick", tint)


class TagBar(Static):
    """Tag universe with the selected tags marked."""

    def show(self, all_tags: list[str], selected: list[str]) -> None:
        if not all_tags:
            self.update(Text("No tags yet", style="dim"))
            return
        text = Text("Tags: ", style="bold")
        for tag in all_tags:
            style = "reverse cyan" if tag in selected else "cyan"
            text.append(f" #{tag} ", style=style)
            text.append(" ")
        self.update(text)


class StatusBar(Static):
    """Counts per view."""

    pinned: reactive[int] = reactive(0)
    active: reactive[int] = reactive(0)
    archived: reactive[int] = reactive(0)
    connected: reactive[bool] = reactive(True)

    def render(self) -> Text:
        conn = "[green]connected[/]" if self.connected else "[red]offline[/]"
        return Text.from_markup(
            f" Pinned: [bold]{self.pinned}[/] | "
            f"Notes: [bold]{self.active}[/] | "
            f"Archived: [bold]{self.archived}[/] | "
            f"{conn}"
        )


class NoteForm(ModalScreen[dict | None]):
    """Create-note dialog. Dismisses with the form values or None."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, palette: list[str]) -> None:
        super().__init__()
        self.palette = palette

    def compose(self) -> ComposeResult:
        with Vertical(id="note-form"):
            yield Label("[bold]New note[/]")
            yield Input(placeholder="Title", id="form-title")
            yield Input(placeholder="Content", id="form-content")
            yield Input(placeholder="Tags (comma separated)", id="form-tags")
            yield Select(
                [(color_swatch(color), color) for color in self.palette],
                prompt="Color (default white)",
                id="form-color",
            )
            with Horizontal(classes="buttons"):
                yield Button("Create", variant="primary", id="form-create")
                yield Button("Cancel", id="form-cancel")

    @on(Button.Pressed, "#form-create")
    @on(Input.Submitted)
    def submit(self) -> None:
        title = self.query_one("#form-title", Input).value
        content = self.query_one("#form-content", Input).value
        if not title.strip() or not content.strip():
            self.notify("Title and content are required", severity="warning")
            return
        raw_tags = self.query_one("#form-tags", Input).value
        tags = [tag.strip() for tag in raw_tags.split(",") if tag.strip()]
        color = self.query_one("#form-color", Select).value
        self.dismiss({
            "title": title,
            "content": content,
            "tags": tags,
            "color": color if isinstance(color, str) else None,
        })

    @on(Button.Pressed, "#form-cancel")
    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmDelete(ModalScreen[bool]):
    """Yes/no confirmation before deleting a note."""

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n,escape", "cancel", "No"),
    ]

    def __init__(self, title: str) -> None:
        super().__init__()
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(f"Delete [bold]{self._title}[/]? This cannot be undone.")
            with Horizontal(classes="buttons"):
                yield Button("Delete", variant="error", id="confirm-yes")
                yield Button("Cancel", id="confirm-no")

    @on(Button.Pressed, "#confirm-yes")
    def action_confirm(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def action_cancel(self) -> None:
        self.dismiss(False)


class NotesTUI(App):
    """Terminal notes board."""

    TITLE = "ThinkSpace"
    SUB_TITLE = "Notes"

    CSS = """
    Screen {
        layout: vertical;
    }

    #filters {
        height: auto;
        padding: 0 1;
    }

    TagBar {
        height: auto;
        padding: 0 1;
    }

    TabbedContent {
        height: 1fr;
    }

    ListView {
        height: 1fr;
    }

    NoteItem {
        padding: 0 1;
        margin: 0 0 1 0;
        border-left: thick $primary;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
    }

    NoteForm, ConfirmDelete {
        align: center middle;
    }

    #note-form, #confirm-dialog {
        width: 70;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    .buttons {
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("n", "new_note", "New"),
        Binding("p", "toggle_pin", "Pin"),
        Binding("a", "toggle_archive", "Archive"),
        Binding("d", "delete_note", "Delete"),
        Binding("r", "refresh", "Refresh"),
        Binding("slash", "focus_search", "Search"),
        Binding("ctrl+x", "clear_tags", "Clear tags"),
        Binding("ctrl+q", "quit", "Quit"),
        Binding("f1", "show_tab('pinned')", "Pinned", show=False),
        Binding("f2", "show_tab('active')", "Notes", show=False),
        Binding("f3", "show_tab('archived')", "Archived", show=False),
    ]

    def __init__(self, client: NotesClient | None = None, palette: list[str] | None = None) -> None:
        super().__init__()
        self.board = NoteBoard(client or NotesClient(APIClient(frontend="tui")))
        self.palette = palette if palette is not None else load_palette()

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="filters"):
            yield Input(placeholder="Search notes...", id="search")
            yield Input(placeholder="Toggle tag filter (Enter)", id="tag-filter")
        yield TagBar(id="tag-bar")
        with TabbedContent(initial="active"):
            for view, label in TABS.items():
                with TabPane(label, id=view):
                    yield ListView(id=f"list-{view}")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.action_refresh()

    async def on_unmount(self) -> None:
        await self.board.client.close()

    # -- rendering --------------------------------------------------------

    def _render_views(self) -> None:
        for view in TABS:
            list_view = self.query_one(f"#list-{view}", ListView)
            list_view.clear()
            for note in self.board.view(view):
                list_view.append(NoteItem(note, self.board.query))

        self.query_one(TagBar).show(self.board.all_tags, self.board.selected_tags)

        status = self.query_one(StatusBar)
        status.pinned = len(self.board.pinned)
        status.active = len(self.board.active)
        status.archived = len(self.board.archived)

    def _selected_note_id(self) -> str | None:
        active_tab = self.query_one(TabbedContent).active
        list_view = self.query_one(f"#list-{active_tab}", ListView)
        item = list_view.highlighted_child
        if isinstance(item, NoteItem):
            return item.note_id
        return None

    def _fail(self, message: str, error: ApiError) -> None:
        log_with_source(logger, "tui", "warning", message, error=error.message)
        self.notify(f"{message}: {error.message}", severity="error")

    # -- filters ----------------------------------------------------------

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.board.query = event.value
        self._render_views()

    @on(Input.Submitted, "#tag-filter")
    def on_tag_submitted(self, event: Input.Submitted) -> None:
        tag = event.value.strip()
        event.input.value = ""
        if not tag:
            return
        if tag not in self.board.all_tags and tag not in self.board.selected_tags:
            self.notify(f"No notes tagged '{tag}'", severity="warning")
            return
        self.board.toggle_tag(tag)
        self._render_views()

    def action_clear_tags(self) -> None:
        self.board.clear_tags()
        self._render_views()

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_show_tab(self, tab_id: str) -> None:
        self.query_one(TabbedContent).active = tab_id

    # -- server actions ---------------------------------------------------

    @work(exclusive=True)
    async def action_refresh(self) -> None:
        status = self.query_one(StatusBar)
        try:
            await self.board.load()
        except ApiError as e:
            status.connected = False
            self._fail("Failed to fetch notes", e)
            return
        status.connected = True
        self._render_views()

    @work(exclusive=True)
    async def action_toggle_pin(self) -> None:
        note_id = self._selected_note_id()
        if note_id is None:
            return
        try:
            note = await self.board.toggle_pin(note_id)
        except ApiError as e:
            self._fail("Failed to update note", e)
            return
        self.notify("Note pinned!" if note.get("isPinned") else "Note unpinned!")
        self._render_views()

    @work(exclusive=True)
    async def action_toggle_archive(self) -> None:
        note_id = self._selected_note_id()
        if note_id is None:
            return
        try:
            note = await self.board.toggle_archive(note_id)
        except ApiError as e:
            self._fail("Failed to update note", e)
            return
        self.notify("Note archived!" if note.get("isArchived") else "Note unarchived!")
        self._render_views()

    @work(exclusive=True)
    async def action_delete_note(self) -> None:
        note_id = self._selected_note_id()
        if note_id is None:
            return
        note = self.board.find(note_id)
        title = note["title"] if note else note_id
        if not await self.push_screen_wait(ConfirmDelete(title)):
            return
        try:
            await self.board.delete(note_id)
        except ApiError as e:
            self._fail("Failed to delete note", e)
            return
        self.notify("Note deleted successfully!")
        self._render_views()

    @work(exclusive=True)
    async def action_new_note(self) -> None:
        values = await self.push_screen_wait(NoteForm(self.palette))
        if not values:
            return
        try:
            await self.board.create(
                values["title"],
                values["content"],
                tags=values["tags"],
                color=values["color"],
            )
        except ApiError as e:
            self._fail("Failed to create note", e)
            return
        self.notify("Note created successfully!")
        self._render_views()
