"""
HTTP transport for encoded requests.

Sends what the dispatcher encoded and hands back status, headers and raw
body. Anything that prevents a response from arriving is a TransportFault.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

import httpx

from ..core.errors import TransportFault

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedRequest:
    """A fully encoded request, ready for the transport."""
    operation: str
    method: str
    url: str
    path: str  # path + query, relative to the API base url
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass(frozen=True)
class TransportResponse:
    """Raw response as received."""
    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Anything able to send an EncodedRequest."""

    async def send(self, request: EncodedRequest) -> TransportResponse:
        ...


class HttpxTransport:
    """
    Transport backed by an httpx.AsyncClient.

    Usage:
        async with HttpxTransport(timeout=10.0) as transport:
            response = await transport.send(request)
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize transport.

        Args:
            timeout: HTTP request timeout in seconds
            client: Optional preconfigured client (not closed by ``close``)
        """
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client if this transport created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def send(self, request: EncodedRequest) -> TransportResponse:
        """
        Send a request.

        Raises:
            TransportFault: On timeouts, connection errors and invalid urls
        """
        client = await self._get_client()

        try:
            response = await client.request(
                request.method.upper(),
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.TimeoutException as e:
            raise TransportFault(
                f"Request timed out: {request.method.upper()} {request.url}",
                operation=request.operation,
                cause=e,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportFault(
                f"Request failed: {e}",
                operation=request.operation,
                cause=e,
            ) from e

        logger.debug(f"{request.method.upper()} {request.url} -> {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
