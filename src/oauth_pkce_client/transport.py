# oauth_pkce_client/transport.py
"""HTTP transport used by the network-facing operations."""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import httpx

from .errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of an HTTP response."""

    status_code: int
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Performs a single HTTP request and returns status plus body."""

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse: ...


class HttpxTransport:
    """Transport backed by httpx, opening a fresh client for every request."""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the transport.

        Args:
            transport: Optional httpx transport (e.g. httpx.MockTransport)
            timeout: Request timeout in seconds
        """
        self._transport = transport
        self.timeout = timeout

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        logger.debug(f"{method} {url}")
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                response = await client.request(
                    method, url, headers=dict(headers or {}), content=content
                )
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code, content=response.content
        )


def default_transport(transport: Optional[Transport]) -> Transport:
    return transport if transport is not None else HttpxTransport()
