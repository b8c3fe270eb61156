"""
HTTP Client for the notes frontends.

Provides an async HTTP client for the backend API and a notes data layer
on top of it. Every call goes to the network; nothing is cached and
nothing is retried. Failures surface the API's `message` field through
ApiError.
"""

from __future__ import annotations

from typing import Any

import httpx

from thinkspace.backend.core.config import get_app_config, get_server_base_url
from thinkspace.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class ApiError(Exception):
    """Raised when the backend rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _get_client_config() -> tuple[str, float, str]:
    """Load base URL, timeout and API base path from application.yaml."""
    base_url, timeout = get_server_base_url()
    return base_url, timeout, get_app_config().application.client.base_path


def _error_message(response: httpx.Response) -> str:
    """Extract the `message` field from an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"Request failed with status {response.status_code}"


class APIClient:
    """
    HTTP client for backend API communication.

    - Automatic base URL from settings
    - X-Frontend-ID header for log routing
    - Structured logging of requests/responses

    Usage:
        client = APIClient()
        response = await client.get("/health")
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend: str = "cli",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Backend base URL. If None, reads from config/settings/application.yaml.
            timeout: Request timeout in seconds. If None, reads from config/settings/application.yaml.
            frontend: Value sent as X-Frontend-ID and used as log source.
            transport: Optional httpx transport (e.g. ASGITransport in tests).
        """
        try:
            config_base_url, config_timeout, _ = _get_client_config()
        except Exception as e:
            if base_url is None:
                raise RuntimeError(
                    "Could not determine server URL from config/settings/application.yaml"
                ) from e
            config_base_url = base_url
            config_timeout = timeout if timeout is not None else 30.0

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self.frontend = frontend
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the backend.

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        log_with_source(logger, self.frontend, "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                self.frontend,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            self.frontend,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)


class NotesClient:
    """
    Notes data layer used by the CLI and TUI.

    Mirrors the notes API one call per method. Notes are exchanged as
    plain dicts in the API's wire shape (camelCase keys).
    """

    def __init__(self, api: APIClient, base_path: str | None = None) -> None:
        if base_path is None:
            try:
                base_path = _get_client_config()[2]
            except Exception:
                base_path = "/api"
        self.api = api
        self.notes_path = f"{base_path.rstrip('/')}/notes"

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.api.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"Cannot reach backend: {e}") from e

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response.json()

    async def list(self) -> list[dict[str, Any]]:
        """Fetch every note, newest first."""
        return await self._call("GET", self.notes_path)

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Run the server-side text search."""
        return await self._call("GET", f"{self.notes_path}/search", params={"q": query})

    async def get(self, note_id: str) -> dict[str, Any]:
        """Fetch one note."""
        return await self._call("GET", f"{self.notes_path}/{note_id}")

    async def create(
        self,
        title: str,
        content: str,
        tags: list[str] | None = None,
        color: str | None = None,
    ) -> dict[str, Any]:
        """Create a note and return it."""
        payload: dict[str, Any] = {"title": title, "content": content}
        if tags is not None:
            payload["tags"] = tags
        if color is not None:
            payload["color"] = color
        return await self._call("POST", self.notes_path, json=payload)

    async def update(self, note_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Send a partial update and return the merged note."""
        return await self._call("PUT", f"{self.notes_path}/{note_id}", json=changes)

    async def delete(self, note_id: str) -> str:
        """Delete a note and return the server's confirmation message."""
        payload = await self._call("DELETE", f"{self.notes_path}/{note_id}")
        return payload.get("message", "")

    async def close(self) -> None:
        await self.api.close()


# Module-level client instance
_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Get or create the API client singleton."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


async def close_api_client() -> None:
    """Close the API client."""
    global _client
    if _client:
        await _client.close()
        _client = None
