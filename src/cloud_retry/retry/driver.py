"""
Retry driver.

Issues attempts through a transport, classifies each response and asks the
configured decision function whether to go again.
"""

import inspect
import logging
from typing import Awaitable, Callable

from ..exceptions import TransportError
from ..transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
    TransportResponse,
)
from .config import RetryConfig
from .outcome import Exhausted, RetryOutcome, Stopped, Success
from .policies import Decision, RetryAction
from .record import Request, ResponseType

logger = logging.getLogger(__name__)

ResultFun = Callable[[Request], Request]
AsyncResultFun = Callable[[Request], Request | Awaitable[Request]]


def _identity(request: Request) -> Request:
    return request


def _label(request: Request) -> str:
    prefix = f"[{request.service}] " if request.service else ""
    return f"{prefix}{request.method} {request.uri}"


def _check_fresh(request: Request) -> None:
    if request.attempt != 0:
        raise ValueError(f"request must start at attempt 0, got {request.attempt}")


def request(
    config: RetryConfig,
    request: Request,
    result_fun: ResultFun | None = None,
    transport: Transport | None = None,
) -> RetryOutcome:
    """
    Issue a request, retrying according to `config`.

    Args:
        config: Attempt budget, timeout and retry policies
        request: Fresh record at attempt 0
        result_fun: Called with every classified response; its returned
            record replaces the current one (default: identity)
        transport: Transport to issue attempts with (default: a new
            `HttpxTransport`, closed before returning)

    Returns:
        `Success`, `Exhausted` or `Stopped` carrying the final record
    """
    _check_fresh(request)
    if transport is None:
        with HttpxTransport() as owned:
            return _request_and_retry(config, request, result_fun or _identity, owned)
    return _request_and_retry(config, request, result_fun or _identity, transport)


async def async_request(
    config: RetryConfig,
    request: Request,
    result_fun: AsyncResultFun | None = None,
    transport: AsyncTransport | None = None,
) -> RetryOutcome:
    """
    Async variant of `request`.

    Attempts and backoff are awaited on the caller's event loop, so each
    call suspends only its own coroutine. `config.retry` and `result_fun`
    may be plain functions or coroutine functions; use a non-blocking
    decision function such as `AsyncDefaultRetry` for backoff.

    Args:
        config: Attempt budget, timeout and retry policies
        request: Fresh record at attempt 0
        result_fun: Called with every classified response (default: identity)
        transport: Async transport (default: a new `AsyncHttpxTransport`,
            closed before returning)

    Returns:
        `Success`, `Exhausted` or `Stopped` carrying the final record
    """
    _check_fresh(request)
    if transport is None:
        async with AsyncHttpxTransport() as owned:
            return await _async_request_and_retry(
                config, request, result_fun or _identity, owned
            )
    return await _async_request_and_retry(
        config, request, result_fun or _identity, transport
    )


def _terminal(decision: Decision, remaining: int, config: RetryConfig) -> RetryOutcome | None:
    action, current = decision
    if remaining == 0:
        logger.warning(f"{_label(current)} giving up after {current.attempt} attempts")
        return Exhausted(current)
    if action == RetryAction.ERROR:
        logger.warning(
            f"{_label(current)} retry stopped after attempt "
            f"{current.attempt}/{config.max_attempts}"
        )
        return Stopped(current)
    return None


def _record_transport_error(current: Request, error: TransportError, config: RetryConfig) -> Request:
    logger.warning(
        f"{_label(current)} transport error on attempt "
        f"{current.attempt}/{config.max_attempts}: {error}"
    )
    return current.with_transport_error(error)


def _classify(current: Request, response: TransportResponse, config: RetryConfig) -> Request:
    current = current.with_response(
        response.status, response.status_line, response.headers, response.body
    )
    return current.with_response_type(config.retry_response_type(current))


def _success_or_none(current: Request, config: RetryConfig) -> RetryOutcome | None:
    if current.response_type == ResponseType.OK:
        if current.attempt > 1:
            logger.info(f"{_label(current)} succeeded on attempt {current.attempt}")
        return Success(current)
    logger.warning(
        f"{_label(current)} failed on attempt "
        f"{current.attempt}/{config.max_attempts}: "
        f"{current.response_status} {current.response_status_line or ''}".rstrip()
    )
    return None


def _request_and_retry(
    config: RetryConfig,
    request: Request,
    result_fun: ResultFun,
    transport: Transport,
) -> RetryOutcome:
    decision = Decision.retry(request)
    remaining = config.max_attempts

    while True:
        outcome = _terminal(decision, remaining, config)
        if outcome is not None:
            return outcome

        current = decision.request.next_attempt()
        try:
            response = transport.issue(
                current.uri,
                current.method,
                current.request_headers,
                current.request_body,
                config.timeout,
                config,
            )
        except TransportError as e:
            current = _record_transport_error(current, e, config)
        else:
            current = result_fun(_classify(current, response, config))
            outcome = _success_or_none(current, config)
            if outcome is not None:
                return outcome

        decision = config.retry(current)
        if inspect.iscoroutine(decision):
            decision.close()
            raise TypeError("coroutine decision functions require async_request")
        remaining -= 1


async def _async_request_and_retry(
    config: RetryConfig,
    request: Request,
    result_fun: AsyncResultFun,
    transport: AsyncTransport,
) -> RetryOutcome:
    decision = Decision.retry(request)
    remaining = config.max_attempts

    while True:
        outcome = _terminal(decision, remaining, config)
        if outcome is not None:
            return outcome

        current = decision.request.next_attempt()
        try:
            response = await transport.issue(
                current.uri,
                current.method,
                current.request_headers,
                current.request_body,
                config.timeout,
                config,
            )
        except TransportError as e:
            current = _record_transport_error(current, e, config)
        else:
            current = result_fun(_classify(current, response, config))
            if inspect.isawaitable(current):
                current = await current
            outcome = _success_or_none(current, config)
            if outcome is not None:
                return outcome

        decision = config.retry(current)
        if inspect.isawaitable(decision):
            decision = await decision
        remaining -= 1
