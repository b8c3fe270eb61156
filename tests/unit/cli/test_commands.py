"""Unit tests for CLI commands."""

from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cli import app
from thinkspace.cli.client import ApiError
from thinkspace.cli.commands import notes as notes_module

runner = CliRunner()


@pytest.fixture
def notes_client(mock_notes_client):
    """Route notes commands to the mock client and widen the console."""
    with patch.object(notes_module, "get_notes_client", return_value=mock_notes_client), \
            patch.object(notes_module, "console", Console(width=200)):
        yield mock_notes_client


class TestMainApp:
    """Tests for main app options."""

    def test_help(self) -> None:
        """Test main help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "ThinkSpace Notes CLI" in result.stdout

    @pytest.mark.parametrize("group", ["server", "db", "notes", "health"])
    def test_groups_registered(self, group: str) -> None:
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0

    def test_verbose_flag(self, notes_client) -> None:
        """Test verbose flag is accepted."""
        with patch("thinkspace.backend.core.logging.setup_logging") as mock_setup:
            result = runner.invoke(app, ["-v", "notes", "tags"])
        assert result.exit_code == 0
        mock_setup.assert_called_once_with(level="INFO", format_type="console")

    def test_debug_flag(self, notes_client) -> None:
        """Test debug flag is accepted."""
        with patch("thinkspace.backend.core.logging.setup_logging") as mock_setup:
            result = runner.invoke(app, ["--debug", "notes", "tags"])
        assert result.exit_code == 0
        assert "Debug mode enabled" in result.stdout
        mock_setup.assert_called_once_with(level="DEBUG", format_type="console")


class TestHealthCommands:
    """Tests for health check commands."""

    def test_health_status_help(self) -> None:
        result = runner.invoke(app, ["health", "status", "--help"])
        assert result.exit_code == 0
        assert "readiness" in result.stdout

    def test_health_ping_help(self) -> None:
        result = runner.invoke(app, ["health", "ping", "--help"])
        assert result.exit_code == 0
        assert "ping" in result.stdout.lower()


class TestListCommand:
    """Tests for `notes list`."""

    def test_lists_active_notes(self, notes_client, wire_note) -> None:
        notes_client.list.return_value = [
            wire_note(title="Shopping"),
            wire_note(title="Archived thing", isArchived=True),
        ]

        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 0
        assert "Shopping" in result.stdout
        assert "Archived thing" not in result.stdout

    def test_archived_view(self, notes_client, wire_note) -> None:
        notes_client.list.return_value = [
            wire_note(title="Shopping"),
            wire_note(title="Old", isArchived=True),
        ]

        result = runner.invoke(app, ["notes", "list", "--view", "archived"])

        assert result.exit_code == 0
        assert "Old" in result.stdout
        assert "Shopping" not in result.stdout

    def test_query_and_tag_filters(self, notes_client, wire_note) -> None:
        notes_client.list.return_value = [
            wire_note(title="Groceries", content="milk", tags=["home", "errands"]),
            wire_note(title="Milk run", tags=["work"]),
            wire_note(title="Garden", tags=["home"]),
        ]

        result = runner.invoke(app, ["notes", "list", "-q", "milk", "-t", "home"])

        assert result.exit_code == 0
        assert "Groceries" in result.stdout
        assert "Milk run" not in result.stdout
        assert "Garden" not in result.stdout

    def test_empty(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 0
        assert "No notes found" in result.stdout

    def test_unknown_view(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "list", "--view", "trash"])

        assert result.exit_code == 2
        notes_client.list.assert_not_called()

    def test_backend_error(self, notes_client) -> None:
        notes_client.list.side_effect = ApiError("Cannot reach backend: refused")

        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 1
        assert "Cannot reach backend" in result.stdout
        notes_client.close.assert_awaited_once()


class TestSearchCommand:
    """Tests for `notes search`."""

    def test_search(self, notes_client, wire_note) -> None:
        notes_client.search.return_value = [wire_note(title="Shopping")]

        result = runner.invoke(app, ["notes", "search", "shop"])

        assert result.exit_code == 0
        notes_client.search.assert_awaited_once_with("shop")
        assert "Shopping" in result.stdout

    def test_no_results(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "search", "zzz"])

        assert result.exit_code == 0
        assert "No matching notes" in result.stdout


class TestCreateCommand:
    """Tests for `notes create`."""

    def test_create(self, notes_client, wire_note) -> None:
        notes_client.create.return_value = wire_note(title="Shopping", content="milk, eggs")

        result = runner.invoke(
            app,
            ["notes", "create", "--title", "Shopping", "-c", "milk, eggs", "-t", "home"],
        )

        assert result.exit_code == 0
        notes_client.create.assert_awaited_once_with(
            "Shopping", "milk, eggs", tags=["home"], color=None
        )
        assert "Note created successfully!" in result.stdout

    def test_validation_message_shown(self, notes_client) -> None:
        notes_client.create.side_effect = ApiError("Title is required", status_code=400)

        result = runner.invoke(app, ["notes", "create", "--title", " ", "-c", "x"])

        assert result.exit_code == 1
        assert "Title is required" in result.stdout

    def test_palette_color_is_sent(self, notes_client, wire_note) -> None:
        notes_client.create.return_value = wire_note(color="#fef9c3")

        result = runner.invoke(
            app,
            ["notes", "create", "--title", "Ideas", "-c", "x", "--color", "#fef9c3"],
        )

        assert result.exit_code == 0
        notes_client.create.assert_awaited_once_with("Ideas", "x", tags=[], color="#fef9c3")
        assert "■ #fef9c3" in result.stdout

    def test_unknown_color_rejected(self, notes_client) -> None:
        result = runner.invoke(
            app,
            ["notes", "create", "--title", "Ideas", "-c", "x", "--color", "chartreuse"],
        )

        assert result.exit_code == 2
        assert "Unknown color 'chartreuse'" in result.stdout
        assert "#bfdbfe" in result.stdout
        notes_client.create.assert_not_called()


class TestEditCommand:
    """Tests for `notes edit`."""

    def test_sends_only_given_fields(self, notes_client, wire_note) -> None:
        note = wire_note(title="Weekly shopping")
        notes_client.update.return_value = note

        result = runner.invoke(app, ["notes", "edit", note["id"], "--title", "Weekly shopping"])

        assert result.exit_code == 0
        notes_client.update.assert_awaited_once_with(note["id"], {"title": "Weekly shopping"})
        assert "Note updated successfully!" in result.stdout

    def test_clear_tags(self, notes_client, wire_note) -> None:
        note = wire_note()
        notes_client.update.return_value = note

        result = runner.invoke(app, ["notes", "edit", note["id"], "--clear-tags"])

        assert result.exit_code == 0
        notes_client.update.assert_awaited_once_with(note["id"], {"tags": []})

    def test_nothing_to_update(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "edit", "abc"])

        assert result.exit_code == 1
        assert "Nothing to update" in result.stdout
        notes_client.update.assert_not_called()

    def test_not_found(self, notes_client) -> None:
        notes_client.update.side_effect = ApiError("Note not found", status_code=404)

        result = runner.invoke(app, ["notes", "edit", "abc", "--title", "x"])

        assert result.exit_code == 1
        assert "Note not found" in result.stdout

    def test_default_color_accepted(self, notes_client, wire_note) -> None:
        note = wire_note()
        notes_client.update.return_value = note

        result = runner.invoke(app, ["notes", "edit", note["id"], "--color", "#ffffff"])

        assert result.exit_code == 0
        notes_client.update.assert_awaited_once_with(note["id"], {"color": "#ffffff"})

    def test_unknown_color_rejected(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "edit", "abc", "--color", "#123456"])

        assert result.exit_code == 2
        assert "notes colors" in result.stdout
        notes_client.update.assert_not_called()


class TestFlagCommands:
    """Tests for pin, unpin, archive and unarchive."""

    @pytest.mark.parametrize("command,field,value,message", [
        ("pin", "isPinned", True, "Note pinned!"),
        ("unpin", "isPinned", False, "Note unpinned!"),
        ("archive", "isArchived", True, "Note archived!"),
        ("unarchive", "isArchived", False, "Note unarchived!"),
    ])
    def test_sets_flag(self, notes_client, wire_note, command, field, value, message) -> None:
        notes_client.update.return_value = wire_note()

        result = runner.invoke(app, ["notes", command, "abc"])

        assert result.exit_code == 0
        notes_client.update.assert_awaited_once_with("abc", {field: value})
        assert message in result.stdout


class TestDeleteCommand:
    """Tests for `notes delete`."""

    def test_delete_with_yes(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "delete", "abc", "-y"])

        assert result.exit_code == 0
        notes_client.delete.assert_awaited_once_with("abc")
        assert "Note deleted successfully" in result.stdout

    def test_confirmation_declined(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "delete", "abc"], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        notes_client.delete.assert_not_called()

    def test_confirmation_accepted(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "delete", "abc"], input="y\n")

        assert result.exit_code == 0
        notes_client.delete.assert_awaited_once_with("abc")


class TestTagsCommand:
    """Tests for `notes tags`."""

    def test_lists_tags_in_first_seen_order(self, notes_client, wire_note) -> None:
        notes_client.list.return_value = [
            wire_note(tags=["work", "urgent"]),
            wire_note(tags=["home", "work"]),
        ]

        result = runner.invoke(app, ["notes", "tags"])

        assert result.exit_code == 0
        assert "#work #urgent #home" in result.stdout

    def test_no_tags(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "tags"])

        assert result.exit_code == 0
        assert "No tags yet" in result.stdout


class TestColorsCommand:
    """Tests for `notes colors`."""

    def test_lists_palette(self, notes_client) -> None:
        result = runner.invoke(app, ["notes", "colors"])

        assert result.exit_code == 0
        swatches = [line for line in result.stdout.splitlines() if line.startswith("■")]
        assert len(swatches) == 10
        assert swatches[0] == "■ #bfdbfe"
        notes_client.list.assert_not_called()

    def test_list_shows_color_column(self, notes_client, wire_note) -> None:
        notes_client.list.return_value = [wire_note(title="Shopping", color="#c8f5d9")]

        result = runner.invoke(app, ["notes", "list"])

        assert result.exit_code == 0
        assert "Color" in result.stdout
        assert "■ #c8f5d9" in result.stdout
