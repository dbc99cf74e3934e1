"""
Base exception classes for cloud request failures.

Each exception includes a `retryable` flag indicating whether the request
can be safely reissued with the same parameters.
"""


class CloudClientError(Exception):
    """Base exception for all cloud client errors."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
        service: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.status_code = status_code
        self.service = service

    def __str__(self) -> str:
        parts = [self.message]
        if self.service:
            parts.insert(0, f"[{self.service}]")
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class TransportError(CloudClientError):
    """Raised when the request never produced a response. Always retryable."""

    def __init__(
        self,
        message: str = "Transport failed",
        *,
        reason: BaseException | None = None,
        **kwargs,
    ):
        super().__init__(message, retryable=True, **kwargs)
        self.reason = reason


class ConnectionError(TransportError):
    """Raised when connecting to the service fails (DNS, refused, TLS)."""

    def __init__(self, message: str = "Connection failed", **kwargs):
        super().__init__(message, **kwargs)


class TimeoutError(TransportError):
    """Raised when the request times out."""

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, **kwargs)


class ServiceError(CloudClientError):
    """Raised when the service answered but the response was classified as an error."""

    def __init__(
        self,
        message: str = "Service error",
        *,
        status_line: str | None = None,
        headers: tuple[tuple[str, str], ...] = (),
        body: bytes | None = None,
        retryable: bool = False,
        **kwargs,
    ):
        super().__init__(message, retryable=retryable, **kwargs)
        self.status_line = status_line
        self.headers = headers
        self.body = body


class FunctionError(ServiceError):
    """Raised when a function invocation reports failure in-band. Not retryable."""

    def __init__(
        self,
        message: str = "Function error",
        *,
        function_error: str | None = None,
        **kwargs,
    ):
        kwargs["retryable"] = False
        super().__init__(message, **kwargs)
        self.function_error = function_error


class RetriesExhaustedError(CloudClientError):
    """Raised when every attempt failed without a more specific cause."""

    def __init__(self, message: str = "Retry attempts exhausted", *, attempts: int = 0, **kwargs):
        super().__init__(message, retryable=False, **kwargs)
        self.attempts = attempts


class RetryStoppedError(CloudClientError):
    """Raised when the retry policy stopped before the attempt budget ran out."""

    def __init__(self, message: str = "Retry stopped by policy", *, request=None, **kwargs):
        super().__init__(message, retryable=False, **kwargs)
        self.request = request
