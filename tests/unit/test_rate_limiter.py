"""Unit tests for the in-memory token bucket."""

import pytest

from insider_risk_index.adapters.rate_limiter import TokenBucketRateLimiter
from insider_risk_index.core.interfaces import RateLimiter


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTokenBucketRateLimiter:
    """Refill and isolation behaviour."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(TokenBucketRateLimiter(rate_per_minute=10), RateLimiter)

    def test_burst_then_refused(self) -> None:
        limiter = TokenBucketRateLimiter(rate_per_minute=3, clock=_Clock())
        assert [limiter.allow("10.0.0.1") for _ in range(4)] == [True, True, True, False]

    def test_refills_over_time(self) -> None:
        clock = _Clock()
        limiter = TokenBucketRateLimiter(rate_per_minute=60, burst=1, clock=clock)
        assert limiter.allow("ip") is True
        assert limiter.allow("ip") is False
        clock.now = 1.0
        assert limiter.allow("ip") is True

    def test_keys_are_independent(self) -> None:
        limiter = TokenBucketRateLimiter(rate_per_minute=1, clock=_Clock())
        assert limiter.allow("a") is True
        assert limiter.allow("a") is False
        assert limiter.allow("b") is True

    def test_rate_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(rate_per_minute=0)
