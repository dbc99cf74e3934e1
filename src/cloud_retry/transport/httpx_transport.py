"""
httpx transport adapters.

Maps httpx responses and errors onto the transport contract.
"""

import logging
from typing import TYPE_CHECKING

import httpx

from .base import AsyncTransport, Transport, TransportResponse
from ..exceptions import ConnectionError, TimeoutError, TransportError

if TYPE_CHECKING:
    from ..retry.config import RetryConfig

logger = logging.getLogger(__name__)


def _translate_error(e: httpx.RequestError, method: str, uri: str, timeout: float) -> TransportError:
    """Convert an httpx request failure to a domain transport error."""
    if isinstance(e, httpx.TimeoutException):
        logger.debug(f"{method} {uri} timed out: {e}")
        return TimeoutError(f"Request timed out after {timeout}s", reason=e)
    if isinstance(e, httpx.TransportError):
        logger.debug(f"{method} {uri} transport failure: {e}")
        return ConnectionError(f"Failed to reach {uri}: {e}", reason=e)
    # Decoding errors, redirect loops and other failures after the connection
    logger.debug(f"{method} {uri} request failure: {e}")
    return TransportError(f"Request to {uri} failed: {e}", reason=e)


def _to_response(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        status=response.status_code,
        status_line=response.reason_phrase,
        headers=tuple(response.headers.multi_items()),
        body=response.content,
    )


class HttpxTransport(Transport):
    """
    Transport backed by a synchronous `httpx.Client`.

    Non-2xx responses are returned as-is; classifying them is left to the
    retry policy.
    """

    def __init__(self, client: httpx.Client | None = None):
        """
        Initialize the transport.

        Args:
            client: Client to reuse. When omitted one is created and owned
                by this transport.
        """
        self._owns_client = client is None
        self.client = client or httpx.Client()

    def issue(
        self,
        uri: str,
        method: str,
        headers: tuple[tuple[str, str], ...],
        body: bytes,
        timeout: float,
        config: "RetryConfig",
    ) -> TransportResponse:
        try:
            response = self.client.request(
                method,
                uri,
                headers=list(headers),
                content=body or None,
                timeout=timeout,
            )
        except httpx.RequestError as e:
            raise _translate_error(e, method, uri, timeout) from e
        return _to_response(response)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


class AsyncHttpxTransport(AsyncTransport):
    """Transport backed by an `httpx.AsyncClient`."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient()

    async def issue(
        self,
        uri: str,
        method: str,
        headers: tuple[tuple[str, str], ...],
        body: bytes,
        timeout: float,
        config: "RetryConfig",
    ) -> TransportResponse:
        try:
            response = await self.client.request(
                method,
                uri,
                headers=list(headers),
                content=body or None,
                timeout=timeout,
            )
        except httpx.RequestError as e:
            raise _translate_error(e, method, uri, timeout) from e
        return _to_response(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
