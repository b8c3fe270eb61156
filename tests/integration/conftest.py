"""
Integration Test Fixtures.

Fixtures for integration tests - uses the real application and an
in-memory database. These fixtures build on the root conftest.py
database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from thinkspace.backend.core.database import get_db_session
from thinkspace.backend.main import create_app


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    Every request shares the test session, which is rolled back after the
    test. ASGITransport does not run the lifespan, so no tables are
    created in the configured database.

    Usage:
        async def test_list_notes(client: AsyncClient):
            response = await client.get("/api/notes")
            assert response.status_code == 200
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> Any:
        """
        Assert API response is successful.

        Returns:
            Response JSON data (bare resource, list or message)
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_message: str | None = None,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error with a `message` field.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert "message" in data, f"Missing message: {data}"

        if expected_message is not None:
            assert data["message"] == expected_message, (
                f"Expected message {expected_message!r}, got {data['message']!r}"
            )
        if expected_code is not None:
            assert data.get("code") == expected_code, (
                f"Expected error code {expected_code}, got {data.get('code')}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


@pytest.fixture
async def create_note(client: AsyncClient, api: ApiAssertions) -> Any:
    """
    Create a note through the API and return its JSON.

    Usage:
        async def test_x(create_note):
            note = await create_note(title="Shopping", content="milk")
    """

    async def _create(**payload: Any) -> dict[str, Any]:
        payload.setdefault("title", "Untitled")
        payload.setdefault("content", "Body")
        response = await client.post("/api/notes", json=payload)
        return api.assert_success(response, 201)

    return _create
