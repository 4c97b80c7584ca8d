"""Discovery of WebSocket URLs from a DevTools HTTP endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from cdpclient.lib import oj
from cdpclient.transport.base import ConnectionError

logger = logging.getLogger(__name__)

VERSION_PATH = "/json/version"
LIST_PATH = "/json/list"

DEFAULT_TIMEOUT = 10.0


@dataclass
class BrowserVersion:
    """Browser details reported by /json/version."""

    browser: str
    protocol_version: str
    user_agent: str
    websocket_url: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BrowserVersion":
        return cls(
            browser=data.get("Browser", ""),
            protocol_version=data.get("Protocol-Version", ""),
            user_agent=data.get("User-Agent", ""),
            websocket_url=data.get("webSocketDebuggerUrl"),
        )


@dataclass
class TargetInfo:
    """A debuggable target reported by /json/list."""

    id: str
    type: str
    title: str
    url: str
    websocket_url: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TargetInfo":
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            title=data.get("title", ""),
            url=data.get("url", ""),
            # Absent while another client is attached to the target
            websocket_url=data.get("webSocketDebuggerUrl"),
        )

    def __str__(self) -> str:
        return f"TargetInfo({self.type} {self.id} {self.url})"


async def _get_json(
    endpoint: str,
    path: str,
    client: httpx.AsyncClient | None,
) -> Any:
    url = endpoint.rstrip("/") + path
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise ConnectionError(f"DevTools endpoint request failed: {url}: {e}", cause=e)

    try:
        return oj.loads(response.content)
    except oj.JSONDecodeError as e:
        raise ConnectionError(f"Invalid JSON from {url}", cause=e)


async def get_version(
    endpoint: str,
    client: httpx.AsyncClient | None = None,
) -> BrowserVersion:
    """
    Fetch browser version information.

    Args:
        endpoint: Base HTTP address, e.g. "http://127.0.0.1:9222".
        client: HTTP client to use instead of a temporary one.

    Raises:
        ConnectionError: If the endpoint is unreachable or answers badly.
    """
    data = await _get_json(endpoint, VERSION_PATH, client)
    if not isinstance(data, dict):
        raise ConnectionError(f"Unexpected {VERSION_PATH} payload from {endpoint}")
    return BrowserVersion.from_dict(data)


async def list_targets(
    endpoint: str,
    client: httpx.AsyncClient | None = None,
) -> list[TargetInfo]:
    """List debuggable targets."""
    data = await _get_json(endpoint, LIST_PATH, client)
    if not isinstance(data, list):
        raise ConnectionError(f"Unexpected {LIST_PATH} payload from {endpoint}")
    return [TargetInfo.from_dict(item) for item in data if isinstance(item, dict)]


async def resolve_websocket_url(
    endpoint: str,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Resolve a DevTools HTTP endpoint to the browser's WebSocket URL.

    Raises:
        ConnectionError: If the endpoint does not advertise a WebSocket URL.
    """
    version = await get_version(endpoint, client)
    if not version.websocket_url:
        raise ConnectionError(f"No webSocketDebuggerUrl advertised by {endpoint}")
    logger.debug(f"Resolved {endpoint} to {version.websocket_url}")
    return version.websocket_url
