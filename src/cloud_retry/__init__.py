"""
Cloud Retry - Retry policy core for cloud storage requests.

Decides how often a failed request is retried, how long to wait between
attempts and what counts as a failure in the first place.
"""

from .exceptions import (
    CloudClientError,
    TransportError,
    ConnectionError,
    TimeoutError,
    ServiceError,
    FunctionError,
    RetriesExhaustedError,
    RetryStoppedError,
)
from .retry import (
    FUNCTION_ERROR_HEADER,
    AsyncBackoff,
    AsyncDefaultRetry,
    Backoff,
    BackoffConfig,
    Decision,
    DefaultRetry,
    ErrorType,
    Exhausted,
    Request,
    ResponseType,
    RetryAction,
    RetryConfig,
    RetryOutcome,
    RetryStrategy,
    Stopped,
    Success,
    async_default_retry,
    async_request,
    calculate_backoff,
    default_retry,
    lambda_fun_errors,
    no_retry,
    only_http_errors,
    request,
)
from .transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
    TransportResponse,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Driver
    "request",
    "async_request",
    "Request",
    "FUNCTION_ERROR_HEADER",
    "ResponseType",
    "ErrorType",
    "RetryOutcome",
    "Success",
    "Exhausted",
    "Stopped",
    # Policies
    "Decision",
    "RetryAction",
    "DefaultRetry",
    "default_retry",
    "AsyncDefaultRetry",
    "async_default_retry",
    "no_retry",
    "only_http_errors",
    "lambda_fun_errors",
    # Config and backoff
    "RetryConfig",
    "RetryStrategy",
    "BackoffConfig",
    "Backoff",
    "AsyncBackoff",
    "calculate_backoff",
    # Transports
    "Transport",
    "AsyncTransport",
    "TransportResponse",
    "HttpxTransport",
    "AsyncHttpxTransport",
    # Exceptions
    "CloudClientError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "ServiceError",
    "FunctionError",
    "RetriesExhaustedError",
    "RetryStoppedError",
]
