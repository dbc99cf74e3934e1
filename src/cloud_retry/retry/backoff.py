"""
Backoff calculation and the delay capabilities used between attempts.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RetryStrategy(str, Enum):
    """Available backoff strategies."""

    EXPONENTIAL = "exponential"  # delay = base * (2 ** attempt)
    LINEAR = "linear"  # delay = base * (attempt + 1)
    CONSTANT = "constant"  # delay = base
    FULL_JITTER = "full_jitter"  # delay = uniform(0, base * (2 ** attempt)]


@dataclass
class BackoffConfig:
    """
    Delay tuning between attempts.

    Attributes:
        base_delay: Base delay in seconds (default: 0.1)
        max_delay: Maximum delay cap in seconds (default: 60.0)
        strategy: Backoff strategy to use (default: full jitter)
        jitter: Jitter factor as fraction of delay, ignored by full jitter
            (default: 0.25 = ±25%)
    """

    base_delay: float = 0.1
    max_delay: float = 60.0
    strategy: RetryStrategy = RetryStrategy.FULL_JITTER
    jitter: float = 0.25


def calculate_backoff(attempt: int, config: BackoffConfig) -> float:
    """
    Calculate backoff delay for a given attempt.

    Args:
        attempt: Zero-based attempt number
        config: Backoff configuration

    Returns:
        Delay in seconds with jitter applied
    """
    if config.strategy in (RetryStrategy.EXPONENTIAL, RetryStrategy.FULL_JITTER):
        delay = config.base_delay * (2**attempt)
    elif config.strategy == RetryStrategy.LINEAR:
        delay = config.base_delay * (attempt + 1)
    else:  # CONSTANT
        delay = config.base_delay

    # Apply max delay cap
    delay = min(delay, config.max_delay)

    if config.strategy == RetryStrategy.FULL_JITTER:
        # 1.0 - random() lies in (0, 1], so the delay never collapses to zero
        return delay * (1.0 - random.random())

    # Apply jitter (±jitter%)
    if config.jitter > 0:
        jitter_amount = delay * config.jitter * (2 * random.random() - 1)
        delay = delay + jitter_amount

    return max(0, delay)


class Backoff:
    """
    Blocking delay capability handed to retry decision functions.

    The sleeper is injectable so tests can record delays instead of waiting.
    """

    def __init__(
        self,
        config: BackoffConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or BackoffConfig()
        self.sleep = sleep

    def __call__(self, attempt: int) -> float:
        """
        Block the calling thread after a failed attempt.

        Args:
            attempt: One-based number of the attempt that just failed

        Returns:
            The delay slept, in seconds
        """
        delay = self.delay_for(attempt)
        if delay:
            self.sleep(delay)
        return delay

    def delay_for(self, attempt: int) -> float:
        """Delay to apply after the one-based `attempt`; zero before any attempt."""
        if attempt <= 0:
            return 0.0
        delay = calculate_backoff(attempt - 1, self.config)
        logger.debug(f"Backing off {delay:.3f}s after attempt {attempt}")
        return delay


class AsyncBackoff(Backoff):
    """
    Non-blocking delay capability for the async driver.

    Suspends only the awaiting coroutine, so other requests on the same
    event loop keep running while this one backs off.
    """

    def __init__(
        self,
        config: BackoffConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        super().__init__(config, sleep)

    async def __call__(self, attempt: int) -> float:
        delay = self.delay_for(attempt)
        if delay:
            await self.sleep(delay)
        return delay
