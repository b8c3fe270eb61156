"""
Base Schemas.

Shared API response schemas. Successful responses return the resource
itself; every error response carries a top-level `message`.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from thinkspace.backend.core.utils import utc_now


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str
    code: str
    details: dict[str, Any] | None = None
    request_id: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
