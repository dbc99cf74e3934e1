"""
Retry configuration.
"""

from dataclasses import dataclass, field, replace
from typing import Set

from .backoff import AsyncBackoff, Backoff, BackoffConfig
from .policies import (
    AsyncDefaultRetry,
    AsyncRetryFun,
    DefaultRetry,
    ResponseClassifier,
    RetryFun,
    no_retry as never_retry,
    only_http_errors,
)


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts, first one included (default: 10)
        timeout: Per-attempt request timeout in seconds (default: 10.0)
        retry: Retry decision function, sync or coroutine (default: never retry)
        retry_response_type: Response classifier (default: any 2xx is success)
        backoff: Delay tuning used by `with_default_retry`
        retryable_status_codes: Service statuses reported as retryable errors
    """

    max_attempts: int = 10
    timeout: float = 10.0
    retry: RetryFun | AsyncRetryFun = never_retry
    retry_response_type: ResponseClassifier = only_http_errors
    backoff: BackoffConfig = field(default_factory=BackoffConfig)
    retryable_status_codes: Set[int] = field(
        default_factory=lambda: {429, 500, 502, 503, 504}
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def should_retry(self, status_code: int) -> bool:
        """Check if the given status code is worth another attempt."""
        return status_code in self.retryable_status_codes

    @classmethod
    def with_default_retry(cls, **overrides) -> "RetryConfig":
        """Config using the default decision function, backing off per `backoff`."""
        config = cls(**overrides)
        return replace(config, retry=DefaultRetry(Backoff(config.backoff)))

    @classmethod
    def with_async_default_retry(cls, **overrides) -> "RetryConfig":
        """Like `with_default_retry`, for `async_request`: backs off with `asyncio.sleep`."""
        config = cls(**overrides)
        return replace(config, retry=AsyncDefaultRetry(AsyncBackoff(config.backoff)))

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls.with_default_retry(
            max_attempts=15,
            backoff=BackoffConfig(base_delay=0.5, max_delay=120.0),
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls.with_default_retry(
            max_attempts=3,
            backoff=BackoffConfig(base_delay=0.1, max_delay=10.0),
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=1)
