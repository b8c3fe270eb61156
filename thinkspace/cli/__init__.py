"""
CLI Client Module.

Command-line and terminal frontends for the notes backend, built with
Typer, Rich and Textual.

Architecture:
- Frontends are a thin presentation layer over the REST API
- NotesClient (httpx) is the only path to the backend
- NoteBoard holds view state: pinned/active/archived views, text and tag
  filters, match highlighting
- Sends X-Frontend-ID (cli or tui) for log routing

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py tui
"""
