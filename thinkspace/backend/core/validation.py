"""
Note Request Validation.

FastAPI dependencies that reject malformed create/update bodies before
the request reaches the service layer. Failures raise ValidationError,
which the exception handlers turn into a 400 response.

Usage:
    @router.post("")
    async def create_note(data: ValidNoteCreate, db: DbSession): ...
"""

from typing import Annotated

from fastapi import Depends

from thinkspace.backend.core.exceptions import ValidationError
from thinkspace.backend.schemas.note import NoteCreate, NoteUpdate


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_note_create(data: NoteCreate) -> NoteCreate:
    """Require a non-empty title and content on create."""
    if not data.title or not data.content:
        raise ValidationError("Title and content are required")

    if _is_blank(data.title) or _is_blank(data.content):
        raise ValidationError("Title and content cannot be empty")

    return data


def validate_note_update(data: NoteUpdate) -> NoteUpdate:
    """Validate title/content only when the request supplies them."""
    supplied = data.model_fields_set

    if "title" in supplied and _is_blank(data.title):
        raise ValidationError("Title cannot be empty")

    if "content" in supplied and _is_blank(data.content):
        raise ValidationError("Content cannot be empty")

    return data


ValidNoteCreate = Annotated[NoteCreate, Depends(validate_note_create)]
ValidNoteUpdate = Annotated[NoteUpdate, Depends(validate_note_update)]
