"""Tests for backoff and retry configuration - behavior focused."""

import pytest
from cloud_retry.retry import (
    AsyncBackoff,
    AsyncDefaultRetry,
    Backoff,
    BackoffConfig,
    DefaultRetry,
    RetryConfig,
    RetryStrategy,
    calculate_backoff,
    no_retry,
    only_http_errors,
)


class TestCalculateBackoff:
    """Test backoff calculation behavior."""

    def test_backoff_increases_with_attempts(self):
        """Given increasing attempts, delay should grow."""
        config = BackoffConfig(
            base_delay=1.0, strategy=RetryStrategy.EXPONENTIAL, jitter=0
        )

        delay_0 = calculate_backoff(0, config)
        delay_1 = calculate_backoff(1, config)
        delay_2 = calculate_backoff(2, config)

        assert delay_0 < delay_1 < delay_2

    def test_backoff_respects_max_delay(self):
        """Delay never exceeds max_delay config."""
        config = BackoffConfig(base_delay=1.0, max_delay=5.0, jitter=0)

        # Even at high attempt numbers, should not exceed max
        delay = calculate_backoff(100, config)

        assert delay <= config.max_delay

    def test_backoff_with_zero_jitter_is_deterministic(self):
        """When jitter=0, non-random strategies are deterministic."""
        config = BackoffConfig(
            base_delay=1.0, strategy=RetryStrategy.EXPONENTIAL, jitter=0
        )

        delay_a = calculate_backoff(2, config)
        delay_b = calculate_backoff(2, config)

        assert delay_a == delay_b == 4.0

    def test_backoff_with_jitter_varies(self):
        """When jitter > 0, delays should vary (probabilistic)."""
        config = BackoffConfig(
            base_delay=1.0, strategy=RetryStrategy.EXPONENTIAL, jitter=0.25
        )

        delays = [calculate_backoff(2, config) for _ in range(20)]

        assert len(set(delays)) > 1
        assert all(3.0 <= d <= 5.0 for d in delays)

    def test_full_jitter_stays_within_exponential_ceiling(self):
        """Full jitter draws from (0, base * 2 ** attempt]."""
        config = BackoffConfig(base_delay=0.1, strategy=RetryStrategy.FULL_JITTER)

        delays = [calculate_backoff(3, config) for _ in range(50)]

        assert all(0 < d <= 0.8 for d in delays)
        assert len(set(delays)) > 1

    def test_full_jitter_respects_max_delay(self):
        """Full jitter is capped like every other strategy."""
        config = BackoffConfig(
            base_delay=1.0, max_delay=2.0, strategy=RetryStrategy.FULL_JITTER
        )

        delays = [calculate_backoff(30, config) for _ in range(20)]

        assert all(d <= 2.0 for d in delays)

    def test_linear_strategy_grows_linearly(self):
        """Linear strategy: delay = base * (attempt + 1)."""
        config = BackoffConfig(
            base_delay=1.0, strategy=RetryStrategy.LINEAR, jitter=0
        )

        # Linear growth: 1, 2, 3
        assert calculate_backoff(0, config) == 1.0
        assert calculate_backoff(1, config) == 2.0
        assert calculate_backoff(2, config) == 3.0

    def test_constant_strategy_stays_constant(self):
        """Constant strategy: delay = base always."""
        config = BackoffConfig(
            base_delay=2.0, strategy=RetryStrategy.CONSTANT, jitter=0
        )

        delay_0 = calculate_backoff(0, config)
        delay_5 = calculate_backoff(5, config)
        delay_10 = calculate_backoff(10, config)

        assert delay_0 == delay_5 == delay_10 == 2.0


class TestBackoff:
    """Test the blocking backoff capability."""

    def test_sleeps_calculated_delay(self):
        """After attempt N, sleeps the delay for zero-based N - 1."""
        sleeps = []
        backoff = Backoff(
            BackoffConfig(base_delay=1.0, strategy=RetryStrategy.LINEAR, jitter=0),
            sleep=sleeps.append,
        )

        returned = backoff(3)

        assert sleeps == [3.0]
        assert returned == 3.0

    def test_no_sleep_before_first_attempt(self):
        """Attempt 0 means nothing failed yet, so no delay."""
        sleeps = []
        backoff = Backoff(sleep=sleeps.append)

        assert backoff(0) == 0.0
        assert sleeps == []

    def test_defaults_to_backoff_config_defaults(self):
        """Without a config, the default tuning is used."""
        backoff = Backoff()

        assert backoff.config == BackoffConfig()


class TestAsyncBackoff:
    """Test the non-blocking backoff capability."""

    @pytest.mark.asyncio
    async def test_awaits_calculated_delay(self):
        """After attempt N, awaits the sleeper with the delay for N - 1."""
        sleeps = []

        async def sleep(delay):
            sleeps.append(delay)

        backoff = AsyncBackoff(
            BackoffConfig(base_delay=1.0, strategy=RetryStrategy.LINEAR, jitter=0),
            sleep=sleep,
        )

        returned = await backoff(2)

        assert sleeps == [2.0]
        assert returned == 2.0

    @pytest.mark.asyncio
    async def test_no_sleep_before_first_attempt(self):
        """Attempt 0 returns immediately without awaiting the sleeper."""
        sleeps = []

        async def sleep(delay):
            sleeps.append(delay)

        assert await AsyncBackoff(sleep=sleep)(0) == 0.0
        assert sleeps == []


class TestRetryConfig:
    """Test RetryConfig behavior."""

    def test_defaults_never_retry_and_classify_by_status(self):
        """Default config keeps single-decision semantics."""
        config = RetryConfig()

        assert config.retry is no_retry
        assert config.retry_response_type is only_http_errors
        assert config.max_attempts == 10
        assert config.timeout == 10.0

    def test_rejects_zero_attempts(self):
        """max_attempts must be a positive integer."""
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=0)

    def test_rejects_non_positive_timeout(self):
        """timeout must be positive."""
        with pytest.raises(ValueError):
            RetryConfig(timeout=0)

    def test_should_retry_rate_limit_status(self):
        """429 status should be flagged retryable."""
        config = RetryConfig()
        assert config.should_retry(429) is True

    def test_should_retry_server_errors(self):
        """5xx statuses should be flagged retryable."""
        config = RetryConfig()

        assert config.should_retry(500) is True
        assert config.should_retry(502) is True
        assert config.should_retry(503) is True
        assert config.should_retry(504) is True

    def test_should_not_retry_client_errors(self):
        """4xx statuses (except 429) should not be flagged retryable."""
        config = RetryConfig()

        assert config.should_retry(400) is False
        assert config.should_retry(403) is False
        assert config.should_retry(404) is False

    def test_with_default_retry_wires_backoff_config(self):
        """with_default_retry uses DefaultRetry backed by the config's backoff."""
        backoff_config = BackoffConfig(base_delay=0.5)
        config = RetryConfig.with_default_retry(max_attempts=4, backoff=backoff_config)

        assert isinstance(config.retry, DefaultRetry)
        assert config.retry.backoff.config is backoff_config
        assert config.max_attempts == 4

    def test_with_async_default_retry_uses_non_blocking_backoff(self):
        """with_async_default_retry wires AsyncDefaultRetry and AsyncBackoff."""
        backoff_config = BackoffConfig(base_delay=0.5)
        config = RetryConfig.with_async_default_retry(
            max_attempts=4, backoff=backoff_config
        )

        assert isinstance(config.retry, AsyncDefaultRetry)
        assert isinstance(config.retry.backoff, AsyncBackoff)
        assert config.retry.backoff.config is backoff_config
        assert config.max_attempts == 4

    def test_aggressive_preset_has_more_attempts(self):
        """Aggressive preset should have more attempts than default."""
        assert RetryConfig.aggressive().max_attempts > RetryConfig().max_attempts

    def test_conservative_preset_has_fewer_attempts(self):
        """Conservative preset should have fewer attempts than default."""
        assert RetryConfig.conservative().max_attempts < RetryConfig().max_attempts

    def test_no_retry_preset_has_single_attempt(self):
        """No retry preset should allow exactly one attempt."""
        assert RetryConfig.no_retry().max_attempts == 1
