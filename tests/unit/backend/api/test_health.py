"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Liveness check (/health)
- Readiness check (/health/ready)
- Database connectivity check
"""

import asyncio
import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from thinkspace.backend.api.health import check_database, health_check, readiness_check


def _session_factory(session: AsyncMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return factory


class TestHealthCheck:
    """Tests for the liveness health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        assert await health_check() == {"status": "healthy"}


class TestCheckDatabase:
    """Tests for the database health check function."""

    @pytest.mark.asyncio
    async def test_returns_healthy_on_successful_connection(self):
        """Should return healthy with latency when database is reachable."""
        session = AsyncMock()

        with patch(
            "thinkspace.backend.core.database.get_session_factory",
            return_value=_session_factory(session),
        ):
            result = await check_database()

        assert result["status"] == "healthy"
        assert isinstance(result["latency_ms"], int)
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_returns_unhealthy_on_connection_error(self):
        """Should return unhealthy with error message when database is unreachable."""
        session = AsyncMock()
        session.execute.side_effect = Exception("unable to open database file")

        with patch(
            "thinkspace.backend.core.database.get_session_factory",
            return_value=_session_factory(session),
        ):
            result = await check_database()

        assert result["status"] == "unhealthy"
        assert "unable to open database file" in result["error"]


class TestReadinessCheck:
    """Tests for the readiness endpoint."""

    @pytest.mark.asyncio
    async def test_returns_200_when_database_healthy(self):
        with patch(
            "thinkspace.backend.api.health.check_database",
            AsyncMock(return_value={"status": "healthy", "latency_ms": 1}),
        ):
            response = await readiness_check()

        assert response.status_code == 200
        body = json.loads(response.body)
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["latency_ms"] == 1

    @pytest.mark.asyncio
    async def test_returns_503_when_database_unhealthy(self):
        with patch(
            "thinkspace.backend.api.health.check_database",
            AsyncMock(return_value={"status": "unhealthy", "error": "down"}),
        ):
            response = await readiness_check()

        assert response.status_code == 503
        assert json.loads(response.body)["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_returns_503_on_timeout(self):
        with patch(
            "thinkspace.backend.api.health.check_database",
            AsyncMock(side_effect=asyncio.TimeoutError),
        ):
            response = await readiness_check()

        assert response.status_code == 503
        assert "timed out" in json.loads(response.body)["checks"]["database"]["error"]
