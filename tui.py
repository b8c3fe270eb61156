"""
ThinkSpace Notes TUI.

Terminal notes board for a running backend.

Usage:
    python tui.py
    python tui.py --debug   # DEBUG logs to logs/system.jsonl
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from thinkspace.tui.app import NotesTUI


def main() -> None:
    if "--debug" in sys.argv:
        from thinkspace.backend.core.logging import setup_logging
        setup_logging(level="DEBUG", enable_console=False, enable_file_logging=True)
    NotesTUI().run()


if __name__ == "__main__":
    main()
