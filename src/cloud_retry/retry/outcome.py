"""
Outcome of a retried request.

The driver never raises for a failed request. It returns one of `Success`,
`Exhausted` or `Stopped`, each carrying the final record.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..exceptions import (
    CloudClientError,
    FunctionError,
    RetriesExhaustedError,
    RetryStoppedError,
    ServiceError,
)
from .record import ErrorType, Request

if TYPE_CHECKING:
    from .config import RetryConfig


@dataclass(frozen=True)
class RetryOutcome:
    """Base class for the three terminal states of the retry loop."""

    request: Request

    @property
    def ok(self) -> bool:
        return False

    @property
    def attempts(self) -> int:
        return self.request.attempt

    def raise_for_outcome(self, config: "RetryConfig | None" = None) -> Request:
        """
        Return the final record, or raise an exception describing the failure.

        Args:
            config: Used to flag service errors as retryable by status code

        Returns:
            The final record on success

        Raises:
            TransportError: The last attempt got no response
            FunctionError: The function reported an in-band error
            ServiceError: The last response was classified as an error
        """
        raise self._last_failure(config)

    def _last_failure(self, config: "RetryConfig | None") -> CloudClientError:
        request = self.request
        if request.error_type == ErrorType.TRANSPORT and request.transport_error is not None:
            return request.transport_error

        if request.error_type == ErrorType.SERVICE:
            fields = dict(
                status_code=request.response_status,
                status_line=request.response_status_line,
                headers=request.response_headers,
                body=request.response_body,
                service=request.service,
            )
            function_error = request.function_error
            if function_error is not None:
                return FunctionError(
                    f"{request.method} {request.uri} failed: function error {function_error}",
                    function_error=function_error,
                    **fields,
                )
            retryable = (
                config is not None
                and request.response_status is not None
                and config.should_retry(request.response_status)
            )
            return ServiceError(
                f"{request.method} {request.uri} failed: {request.response_status_line or 'error response'}",
                retryable=retryable,
                **fields,
            )

        return RetriesExhaustedError(
            f"{request.method} {request.uri} failed after {request.attempt} attempts",
            attempts=request.attempt,
            service=request.service,
        )


@dataclass(frozen=True)
class Success(RetryOutcome):
    """An attempt was classified `ok`."""

    @property
    def ok(self) -> bool:
        return True

    def raise_for_outcome(self, config: "RetryConfig | None" = None) -> Request:
        return self.request


@dataclass(frozen=True)
class Exhausted(RetryOutcome):
    """Every allowed attempt was made and none succeeded."""


@dataclass(frozen=True)
class Stopped(RetryOutcome):
    """The decision function ended the loop before the attempt budget ran out."""

    def raise_for_outcome(self, config: "RetryConfig | None" = None) -> Request:
        cause = self._last_failure(config)
        raise RetryStoppedError(
            f"Retry stopped after attempt {self.attempts}: {cause.message}",
            request=self.request,
            status_code=self.request.response_status,
            service=self.request.service,
        ) from cause
