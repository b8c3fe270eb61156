"""
Note Model.

Database model for notes, the single persisted entity.
"""

from sqlalchemy import JSON, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from thinkspace.backend.models.base import Base, TimestampMixin, UUIDMixin
from thinkspace.backend.schemas.note import DEFAULT_COLOR

TagsType = JSON().with_variant(JSONB(), "postgresql")

# Fields a client may write; id and timestamps are owned by the store
WRITABLE_FIELDS = ("title", "content", "tags", "color", "is_pinned", "is_archived")


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Title and content carry a text index for store-side search. Tags are
    an ordered JSON array of strings.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index(
            "ix_notes_fulltext",
            text("to_tsvector('simple', title || ' ' || content)"),
            postgresql_using="gin",
        ).ddl_if(dialect="postgresql"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(
        TagsType,
        default=list,
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(32),
        default=DEFAULT_COLOR,
        nullable=False,
    )
    is_pinned: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_archived: Mapped[bool] = mapped_column(default=False, nullable=False)

    def to_document(self) -> dict:
        """Return the writable fields as a plain dict."""
        return {field: getattr(self, field) for field in WRITABLE_FIELDS}

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
