# Pydantic schemas package
from thinkspace.backend.schemas.base import (
    CamelModel,
    ErrorResponse,
    MessageResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
]
