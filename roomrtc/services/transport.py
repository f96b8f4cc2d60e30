"""HTTP transport used by the room parameters workflow."""
from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ..core.config import Settings, get_settings
from ..core.errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Single-request primitive: return the response body or raise ``TransportError``."""

    async def send(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        timeout: float | None = None,
    ) -> str: ...


class HttpTransport:
    """``Transport`` backed by ``httpx.AsyncClient``.

    The transport does not retry, follow redirects or pool across instances;
    each instance owns one client that is released by ``aclose`` or by leaving
    the ``async with`` block.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.room_http_timeout_ms / 1000),
        )

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(
        self,
        method: str,
        url: str,
        body: str | None = None,
        *,
        timeout: float | None = None,
    ) -> str:
        """Issue one request and return the decoded response body."""

        method = method.upper()
        headers: dict[str, str] = {}
        content: bytes | None = None
        if method == "POST":
            headers["Content-Type"] = self._settings.room_content_type
            content = (body or "").encode("utf-8")

        request_timeout = httpx.Timeout(timeout) if timeout is not None else httpx.USE_CLIENT_DEFAULT
        logger.debug("HTTP %s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=request_timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"HTTP {method} to {url} timeout", url=url) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"HTTP {method} to {url} error: {exc}", url=url) from exc

        if not response.is_success:
            raise TransportError(
                f"Non-200 response to {method} to URL: {url} : {response.status_code} {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )
        return response.text
