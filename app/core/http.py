"""
HTTP plumbing shared by the backend adapters.

One ``httpx.AsyncClient`` is created per application and handed to every
adapter. ``request_json`` sends a request and returns the decoded body,
turning every transport or status failure into ``ApiError``.
"""
import logging
from typing import Any, Optional
import httpx
from app.core.config import Settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A call to the backend failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, server_message: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = server_message

    def user_message(self, fallback: str) -> str:
        return self.server_message or fallback


def create_api_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    headers = {"Accept": "application/json"}
    if settings.API_TOKEN:
        headers["Authorization"] = f"Bearer {settings.API_TOKEN}"

    return httpx.AsyncClient(
        base_url=settings.API_BASE_URL,
        headers=headers,
        timeout=settings.API_TIMEOUT_SECONDS,
        transport=transport,
    )


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


async def request_json(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> Any:
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.warning(f"{method} {url} failed with status {status_code}")
        raise ApiError(
            f"Request failed with status code {status_code}",
            status_code=status_code,
            server_message=_server_message(e.response),
        ) from e
    except httpx.HTTPError as e:
        logger.warning(f"{method} {url} failed: {e}")
        raise ApiError(str(e) or type(e).__name__) from e

    if not response.content:
        return None

    try:
        return response.json()
    except ValueError as e:
        raise ApiError(f"Invalid JSON in response to {method} {url}", status_code=response.status_code) from e
