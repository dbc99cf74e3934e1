"""
Request record threaded through every attempt of one logical request.

Records are frozen; each step of the retry loop produces a successor copy.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Mapping

from ..exceptions import TransportError

Headers = tuple[tuple[str, str], ...]

# Set by function invocations that failed despite a 2xx status
FUNCTION_ERROR_HEADER = "x-amz-function-error"


class ResponseType(str, Enum):
    """Classification of a completed attempt."""

    OK = "ok"
    ERROR = "error"


class ErrorType(str, Enum):
    """Where the failure of an attempt originated."""

    SERVICE = "service"  # a response arrived
    TRANSPORT = "transport"  # no response at all


def _normalize_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]] | None,
) -> Headers:
    if headers is None:
        return ()
    if isinstance(headers, Mapping):
        return tuple((str(k), str(v)) for k, v in headers.items())
    return tuple((str(k), str(v)) for k, v in headers)


@dataclass(frozen=True)
class Request:
    """A single outbound request and the state of its latest attempt."""

    uri: str
    method: str = "GET"
    request_headers: Headers = ()
    request_body: bytes = b""
    service: str | None = None

    attempt: int = 0
    should_retry: bool = True

    response_status: int | None = None
    response_status_line: str | None = None
    response_headers: Headers = ()
    response_body: bytes | None = None
    response_type: ResponseType | None = None

    error_type: ErrorType | None = None
    transport_error: TransportError | None = None

    @classmethod
    def build(
        cls,
        uri: str,
        method: str = "GET",
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: bytes = b"",
        service: str | None = None,
        should_retry: bool = True,
    ) -> "Request":
        """Create a fresh record at attempt 0."""
        return cls(
            uri=uri,
            method=method.upper(),
            request_headers=_normalize_headers(headers),
            request_body=body,
            service=service,
            should_retry=should_retry,
        )

    @property
    def is_ok(self) -> bool:
        return self.response_type == ResponseType.OK

    def header(self, name: str) -> str | None:
        """Return the first response header named exactly `name`."""
        for key, value in self.response_headers:
            if key == name:
                return value
        return None

    @property
    def function_error(self) -> str | None:
        """In-band error signal reported by function invocations, if any."""
        return self.header(FUNCTION_ERROR_HEADER)

    def next_attempt(self) -> "Request":
        return replace(self, attempt=self.attempt + 1)

    def with_response(
        self,
        status: int,
        status_line: str | None,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None,
        body: bytes | None,
    ) -> "Request":
        """Record a response; clears anything left over from a previous attempt."""
        return replace(
            self,
            response_status=status,
            response_status_line=status_line,
            response_headers=_normalize_headers(headers),
            response_body=body,
            response_type=None,
            error_type=ErrorType.SERVICE,
            transport_error=None,
        )

    def with_transport_error(self, error: TransportError) -> "Request":
        """Record a transport failure; clears anything left over from a previous attempt."""
        return replace(
            self,
            response_status=None,
            response_status_line=None,
            response_headers=(),
            response_body=None,
            response_type=ResponseType.ERROR,
            error_type=ErrorType.TRANSPORT,
            transport_error=error,
        )

    def with_response_type(self, response_type: ResponseType) -> "Request":
        return replace(self, response_type=response_type)
