"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import or_, select

from thinkspace.backend.models.note import Note
from thinkspace.backend.repositories.base import BaseRepository

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    async def get_all_newest_first(self) -> list[Note]:
        """Get every note ordered by creation time, newest first."""
        result = await self.session.execute(
            select(Note).order_by(Note.created_at.desc())
        )
        return list(result.scalars().all())

    async def search_text(self, query: str, limit: int = 50) -> list[Note]:
        """
        Search notes whose title or content contains the query (case-insensitive).

        Args:
            query: Search query string
            limit: Maximum number of results

        Returns:
            Matching notes, newest first
        """
        pattern = f"%{escape_like(query)}%"
        result = await self.session.execute(
            select(Note)
            .where(or_(
                Note.title.ilike(pattern, escape=LIKE_ESCAPE),
                Note.content.ilike(pattern, escape=LIKE_ESCAPE),
            ))
            .order_by(Note.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
