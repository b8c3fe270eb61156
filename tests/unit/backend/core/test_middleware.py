"""
Unit Tests for Request Context Middleware.

Tests the RequestContextMiddleware functionality including:
- Request ID generation and propagation
- Frontend extraction from X-Frontend-ID header
- Response timing headers
- Structlog context binding
"""

import pytest
from unittest.mock import MagicMock, patch

from starlette.requests import Request
from starlette.responses import Response

from thinkspace.backend.core.middleware import RequestContextMiddleware

CONTEXTVARS = "thinkspace.backend.core.middleware.structlog.contextvars"


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.fixture
    def middleware(self):
        """Create middleware instance."""
        return RequestContextMiddleware(MagicMock())

    @pytest.fixture
    def mock_request(self):
        """Create a mock request."""
        request = MagicMock(spec=Request)
        request.headers = {}
        request.method = "GET"
        request.url = MagicMock()
        request.url.path = "/api/notes"
        request.client = MagicMock()
        request.client.host = "127.0.0.1"
        request.state = MagicMock()
        return request

    # -------------------------------------------------------------------------
    # Frontend (X-Frontend-ID) Tests
    # -------------------------------------------------------------------------

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header,expected", [
        ("cli", "cli"),
        ("tui", "tui"),
        ("web", "web"),
        ("TUI", "tui"),
        ("telegram", "unknown"),
    ])
    async def test_extracts_frontend(self, middleware, mock_request, header, expected):
        """Should normalize known frontends and map the rest to 'unknown'."""
        mock_request.headers = {"X-Frontend-ID": header}

        async def call_next(request):
            assert request.state.frontend == expected
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            await middleware.dispatch(mock_request, call_next)

    @pytest.mark.asyncio
    async def test_frontend_defaults_to_unknown_when_header_missing(self, middleware, mock_request):
        async def call_next(request):
            assert request.state.frontend == "unknown"
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            await middleware.dispatch(mock_request, call_next)

    # -------------------------------------------------------------------------
    # Request ID and Timing Tests
    # -------------------------------------------------------------------------

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            response = await middleware.dispatch(mock_request, call_next)

        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_uses_provided_request_id(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "custom-request-id-123"}

        async def call_next(request):
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == "custom-request-id-123"
        assert mock_request.state.request_id == "custom-request-id-123"

    @pytest.mark.asyncio
    async def test_adds_response_time_header(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Response-Time"].endswith("ms")

    # -------------------------------------------------------------------------
    # Structlog Context Tests
    # -------------------------------------------------------------------------

    @pytest.mark.asyncio
    async def test_binds_context_to_structlog(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "req-1", "X-Frontend-ID": "cli"}

        async def call_next(request):
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS) as mock_contextvars:
            await middleware.dispatch(mock_request, call_next)

        mock_contextvars.bind_contextvars.assert_called_once_with(
            request_id="req-1",
            frontend="cli",
            method="GET",
            path="/api/notes",
        )

    @pytest.mark.asyncio
    async def test_clears_context_on_exception(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        with patch(CONTEXTVARS) as mock_contextvars:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)

        # Once before binding, once in finally
        assert mock_contextvars.clear_contextvars.call_count == 2

    @pytest.mark.asyncio
    async def test_handles_missing_client(self, middleware, mock_request):
        mock_request.client = None

        async def call_next(request):
            return Response(content="OK", status_code=200)

        with patch(CONTEXTVARS):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
