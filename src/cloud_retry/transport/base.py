"""
Transport interface.

Defines the contract the retry driver uses to issue a single attempt.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..retry.config import RetryConfig


@dataclass(frozen=True)
class TransportResponse:
    """A response as received from the wire."""

    status: int
    status_line: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""


class Transport(ABC):
    """
    Abstract base class for transports.

    A transport issues exactly one request per call and never retries.
    """

    @abstractmethod
    def issue(
        self,
        uri: str,
        method: str,
        headers: tuple[tuple[str, str], ...],
        body: bytes,
        timeout: float,
        config: "RetryConfig",
    ) -> TransportResponse:
        """
        Issue a single request.

        Args:
            uri: Target URI
            method: HTTP method
            headers: Request headers as name/value pairs
            body: Raw request body
            timeout: Timeout in seconds
            config: Active retry configuration

        Returns:
            The received response, whatever its status

        Raises:
            TransportError: No response was received
        """
        ...

    def close(self) -> None:
        """Release any resources held by the transport."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncTransport(ABC):
    """
    Abstract base class for transports used by the async driver.

    Same contract as `Transport`, with a coroutine `issue`.
    """

    @abstractmethod
    async def issue(
        self,
        uri: str,
        method: str,
        headers: tuple[tuple[str, str], ...],
        body: bytes,
        timeout: float,
        config: "RetryConfig",
    ) -> TransportResponse:
        """
        Issue a single request.

        Raises:
            TransportError: No response was received
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
