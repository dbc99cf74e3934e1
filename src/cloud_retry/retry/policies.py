"""
Pluggable retry policies.

Response classifiers label a completed attempt `ok` or `error`. Retry
decision functions turn a classified record into a `Decision` telling the
driver whether to issue another attempt.
"""

import logging
from enum import Enum
from typing import Awaitable, NamedTuple, Protocol

from .backoff import AsyncBackoff, Backoff
from .record import Request, ResponseType

logger = logging.getLogger(__name__)


class RetryAction(str, Enum):
    """What the driver should do after a failed attempt."""

    RETRY = "retry"
    ERROR = "error"


class Decision(NamedTuple):
    """Outcome of a retry decision: an action and the record to carry on with."""

    action: RetryAction
    request: Request

    @classmethod
    def retry(cls, request: Request) -> "Decision":
        return cls(RetryAction.RETRY, request)

    @classmethod
    def error(cls, request: Request) -> "Decision":
        return cls(RetryAction.ERROR, request)


class ResponseClassifier(Protocol):
    def __call__(self, request: Request) -> ResponseType: ...


class RetryFun(Protocol):
    def __call__(self, request: Request) -> Decision: ...


class AsyncRetryFun(Protocol):
    def __call__(self, request: Request) -> Awaitable[Decision]: ...


def _is_success_status(status: int | None) -> bool:
    return status is not None and 200 <= status < 300


# --- Response classifiers ---


def only_http_errors(request: Request) -> ResponseType:
    """Treat any 2xx status as success."""
    if _is_success_status(request.response_status):
        return ResponseType.OK
    return ResponseType.ERROR


def lambda_fun_errors(request: Request) -> ResponseType:
    """
    Treat a 2xx status as success unless the function reported an error.

    Function invocations return 200 even when the function itself failed and
    signal the failure through the `x-amz-function-error` header instead.
    """
    if not _is_success_status(request.response_status):
        return ResponseType.ERROR
    if request.function_error is not None:
        return ResponseType.ERROR
    return ResponseType.OK


# --- Retry decision functions ---


def no_retry(request: Request) -> Decision:
    """Never retry. Returns an error decision to keep the same shape as retrying policies."""
    return Decision.error(request)


class DefaultRetry:
    """
    Retry every failed attempt after a backoff delay.

    A record with `should_retry` cleared stops immediately, e.g. when the
    request body was a stream that has already been consumed.
    """

    def __init__(self, backoff: Backoff | None = None):
        self.backoff = backoff or Backoff()

    def __call__(self, request: Request) -> Decision:
        if not request.should_retry:
            logger.debug(f"Retry disabled for {request.method} {request.uri}")
            return Decision.error(request)
        self.backoff(request.attempt)
        return Decision.retry(request)


default_retry = DefaultRetry()


class AsyncDefaultRetry:
    """`DefaultRetry` for the async driver; backs off without blocking the event loop."""

    def __init__(self, backoff: AsyncBackoff | None = None):
        self.backoff = backoff or AsyncBackoff()

    async def __call__(self, request: Request) -> Decision:
        if not request.should_retry:
            logger.debug(f"Retry disabled for {request.method} {request.uri}")
            return Decision.error(request)
        await self.backoff(request.attempt)
        return Decision.retry(request)


async_default_retry = AsyncDefaultRetry()
