"""
ThinkSpace Notes.

- backend/: Notes API, store, configuration, logging
- cli/: Command-line client, notes data layer and view state (Typer + Rich)
- tui/: Interactive notes board (Textual)
"""
