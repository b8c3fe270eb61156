"""
Terminal UI.

Textual notes board: pinned, active and archived tabs over a NoteBoard,
with search, tag filter and pin/archive/delete actions.
"""
