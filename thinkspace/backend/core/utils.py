"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import uuid
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Return a new opaque record identifier."""
    return str(uuid.uuid4())


def is_valid_id(value: str) -> bool:
    """Check whether a value has the shape of a record identifier (UUID)."""
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True
