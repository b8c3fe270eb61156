"""
Note Schemas.

Pydantic schemas for note API request/response validation.

Request schemas are deliberately permissive about presence and emptiness
of title/content; those rules live in core/validation.py so that they
produce the API's own error messages. NoteRecord describes a complete,
storable note and is checked after every create and merge.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from thinkspace.backend.schemas.base import CamelModel

DEFAULT_COLOR = "#ffffff"


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: str | None = Field(
        default=None,
        description="Note title",
        examples=["Shopping"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
        examples=["milk, eggs"],
    )
    tags: list[str] | None = Field(
        default=None,
        description="Free-form labels",
        examples=[["home"]],
    )
    color: str | None = Field(
        default=None,
        description="Color token",
        examples=["#fef9c3"],
    )


class NoteUpdate(CamelModel):
    """Schema for a partial update. Only supplied fields are applied."""

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    color: str | None = None
    is_pinned: bool | None = None
    is_archived: bool | None = None


class NoteRecord(BaseModel):
    """A complete note as written to the store."""

    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    color: str = DEFAULT_COLOR
    is_pinned: bool = False
    is_archived: bool = False

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value

    @field_validator("content")
    @classmethod
    def _content_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content is required")
        return value

    @field_validator("tags")
    @classmethod
    def _strip_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value]

    @field_validator("color")
    @classmethod
    def _color_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("color cannot be empty")
        return value


class NoteResponse(CamelModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tags: list[str] = Field(description="Labels attached to the note")
    color: str = Field(description="Color token")
    is_pinned: bool = Field(description="Whether the note is pinned")
    is_archived: bool = Field(description="Whether the note is archived")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
