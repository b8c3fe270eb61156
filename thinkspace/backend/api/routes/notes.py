"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query

from thinkspace.backend.core.config import get_app_config
from thinkspace.backend.core.dependencies import DbSession, RequestId
from thinkspace.backend.core.validation import ValidNoteCreate, ValidNoteUpdate
from thinkspace.backend.schemas.base import MessageResponse
from thinkspace.backend.schemas.note import NoteResponse
from thinkspace.backend.services.note import NoteService

router = APIRouter()


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="Get every note, newest first.",
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
) -> list[NoteResponse]:
    """List all notes ordered by creation time, descending."""
    service = NoteService(db)
    notes = await service.list_notes()
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/search",
    response_model=list[NoteResponse],
    summary="Search notes",
    description="Case-insensitive text search over title and content.",
)
async def search_notes(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(
        ...,
        min_length=1,
        max_length=200,
        description="Search query",
    ),
) -> list[NoteResponse]:
    """Search notes by title or content."""
    service = NoteService(db)
    limit = get_app_config().database.search_limit
    notes = await service.search_notes(q, limit=limit)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a note with title, content, and optional tags and color.",
)
async def create_note(
    data: ValidNoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Partially update a note. Omitted fields keep their value.",
)
async def update_note(
    note_id: str,
    data: ValidNoteUpdate,
    db: DbSession,
    request_id: RequestId,
) -> NoteResponse:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> MessageResponse:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)
    return MessageResponse(message="Note deleted successfully")
