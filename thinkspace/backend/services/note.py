"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.

Updates follow a merge-before-write rule: the stored note is read in
full, the supplied fields are overlaid, the complete merged record is
validated, and the whole record is written back.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from thinkspace.backend.core.exceptions import NotFoundError, StoreRequestError, ValidationError
from thinkspace.backend.models.note import Note
from thinkspace.backend.repositories.note import NoteRepository
from thinkspace.backend.schemas.note import DEFAULT_COLOR, NoteCreate, NoteRecord, NoteUpdate
from thinkspace.backend.services.base import BaseService


def _validate_record(document: dict[str, Any]) -> dict[str, Any]:
    """Validate a complete note document, returning the normalized fields."""
    try:
        record = NoteRecord.model_validate(document)
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError(
            "Note validation failed: " + "; ".join(problems),
            details={"fields": problems},
        ) from e
    return record.model_dump()


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, updates, and retrieval with
    proper validation and error handling.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def _get_existing(self, note_id: str) -> Note:
        self._require_valid_id(note_id, label="Note")

        note = await self._execute_db_operation(
            "get_note",
            self.repo.get_by_id_or_none(note_id),
            error_cls=StoreRequestError,
        )
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def list_notes(self) -> list[Note]:
        """
        List every note, newest first.

        Raises:
            StoreError: If the store query fails
        """
        return await self._execute_db_operation(
            "list_notes",
            self.repo.get_all_newest_first(),
        )

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            InvalidIdError: If the id is malformed
            NotFoundError: If note not found
        """
        return await self._get_existing(note_id)

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Pin and archive flags always start false; tags default to empty
        and color to the neutral default.
        """
        self._log_operation("Creating note", title=data.title)

        document = _validate_record({
            "title": data.title,
            "content": data.content,
            "tags": data.tags if data.tags is not None else [],
            "color": data.color if data.color is not None else DEFAULT_COLOR,
            "is_pinned": False,
            "is_archived": False,
        })

        note = await self._execute_db_operation(
            "create_note",
            self.repo.create(**document),
            error_cls=StoreRequestError,
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update_note(self, note_id: str, data: NoteUpdate) -> Note:
        """
        Apply a partial update to a note.

        Supplied fields overwrite, omitted fields keep their stored value.
        updated_at is refreshed even when no field changes.

        Raises:
            InvalidIdError: If the id is malformed
            NotFoundError: If note not found
            ValidationError: If the merged note is not a valid note
        """
        note = await self._get_existing(note_id)
        changes = data.model_dump(exclude_unset=True)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=sorted(changes),
        )

        merged = {**note.to_document(), **changes}
        document = _validate_record(merged)

        return await self._execute_db_operation(
            "update_note",
            self.repo.replace(note, document),
            error_cls=StoreRequestError,
        )

    async def delete_note(self, note_id: str) -> None:
        """
        Permanently delete a note.

        Raises:
            InvalidIdError: If the id is malformed
            NotFoundError: If note not found
        """
        note = await self._get_existing(note_id)

        self._log_operation("Deleting note", note_id=note_id)

        await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note),
            error_cls=StoreRequestError,
        )

    async def search_notes(self, query: str, limit: int = 50) -> list[Note]:
        """Search notes by title or content text."""
        self._log_debug("Searching notes", query=query)
        return await self._execute_db_operation(
            "search_notes",
            self.repo.search_text(query, limit=limit),
        )
