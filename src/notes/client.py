"""Backend RPC client for the notes read operation."""

from typing import Any, Optional, Protocol

import httpx
import structlog

logger = structlog.get_logger().bind(source="notes_client")


class NotesError(Exception):
    """Base exception for notes errors."""

    pass


class BackendCallError(NotesError):
    """Remote call failed: transport error, HTTP error status or bad body."""

    pass


class BackendClient(Protocol):
    """Anything that can execute a named backend operation."""

    async def call(self, operation: str, params: dict) -> Any: ...


class HttpBackendClient:
    """Execute backend operations as JSON POSTs to ``{base_url}/{operation}``."""

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"User-Agent": "notes-feed/0.1"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        self.client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

    async def call(self, operation: str, params: Optional[dict] = None) -> Any:
        """Run ``operation`` and return the decoded JSON envelope."""
        url = f"{self.base_url}/{operation}"
        try:
            logger.debug("backend_call", operation=operation, url=url)
            response = await self.client.post(url, json=params or {})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise BackendCallError(
                f"HTTP {e.response.status_code} calling {operation}"
            ) from e
        except httpx.RequestError as e:
            raise BackendCallError(f"Request error calling {operation}: {e}") from e
        except ValueError as e:
            raise BackendCallError(f"Invalid JSON returned by {operation}") from e

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
