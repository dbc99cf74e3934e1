"""
Cloud Retry - Retry Logic.

Pluggable response classification, retry decisions and backoff around a
single-attempt transport.
"""

from .backoff import AsyncBackoff, Backoff, BackoffConfig, RetryStrategy, calculate_backoff
from .config import RetryConfig
from .driver import AsyncResultFun, ResultFun, async_request, request
from .outcome import Exhausted, RetryOutcome, Stopped, Success
from .policies import (
    AsyncDefaultRetry,
    AsyncRetryFun,
    Decision,
    DefaultRetry,
    ResponseClassifier,
    RetryAction,
    RetryFun,
    default_retry,
    async_default_retry,
    lambda_fun_errors,
    no_retry,
    only_http_errors,
)
from .record import FUNCTION_ERROR_HEADER, ErrorType, Request, ResponseType

__all__ = [
    # Backoff
    "Backoff",
    "AsyncBackoff",
    "BackoffConfig",
    "RetryStrategy",
    "calculate_backoff",
    # Config
    "RetryConfig",
    # Driver
    "ResultFun",
    "AsyncResultFun",
    "request",
    "async_request",
    # Outcomes
    "RetryOutcome",
    "Success",
    "Exhausted",
    "Stopped",
    # Policies
    "Decision",
    "RetryAction",
    "ResponseClassifier",
    "RetryFun",
    "AsyncRetryFun",
    "DefaultRetry",
    "default_retry",
    "AsyncDefaultRetry",
    "async_default_retry",
    "no_retry",
    "only_http_errors",
    "lambda_fun_errors",
    # Record
    "Request",
    "FUNCTION_ERROR_HEADER",
    "ResponseType",
    "ErrorType",
]
