"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases
or a running backend.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from thinkspace.backend.models.note import Note


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = NoteRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def make_note() -> Any:
    """
    Build detached Note model instances.

    Usage:
        def test_service(make_note):
            note = make_note(title="Shopping", is_pinned=True)
    """

    def _build(**overrides: Any) -> Note:
        fields: dict[str, Any] = {
            "id": "3f2c8a1e-6d4b-4c1a-9e7f-2b5d8c9a0e11",
            "title": "Shopping",
            "content": "milk, eggs",
            "tags": ["home"],
            "color": "#ffffff",
            "is_pinned": False,
            "is_archived": False,
            "created_at": datetime(2025, 5, 25, 10, 0, 0),
            "updated_at": datetime(2025, 5, 25, 10, 0, 0),
        }
        fields.update(overrides)
        return Note(**fields)

    return _build


# =============================================================================
# Notes Client Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_notes_client() -> MagicMock:
    """
    Mock NotesClient for board and command tests.

    Every API method is an AsyncMock; configure return values per test.
    """
    client = MagicMock()
    client.list = AsyncMock(return_value=[])
    client.search = AsyncMock(return_value=[])
    client.get = AsyncMock()
    client.create = AsyncMock()
    client.update = AsyncMock()
    client.delete = AsyncMock(return_value="Note deleted successfully")
    client.close = AsyncMock()
    return client


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                ...
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
