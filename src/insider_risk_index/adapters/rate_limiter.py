"""In-memory token bucket rate limiter.

Satisfies the ``RateLimiter`` Protocol. State is per process; deployments
with several workers should inject a shared-store implementation instead.
"""

import threading
import time
from collections.abc import Callable


class TokenBucketRateLimiter:
    """Per-key token bucket.

    Each key gets a refilling bucket of tokens. A request consumes one
    token; when the bucket is empty the request is refused. Tokens refill
    continuously at ``rate_per_minute / 60`` tokens per second.

    Args:
        rate_per_minute: Sustained requests allowed per minute per key.
        burst: Bucket capacity. Defaults to ``rate_per_minute``.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        rate_per_minute: int,
        burst: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate_per_minute <= 0:
            raise ValueError(f"rate_per_minute must be positive, got {rate_per_minute}")
        self._rate_per_second: float = rate_per_minute / 60.0
        self._burst: float = float(burst if burst is not None else rate_per_minute)
        self._clock = clock
        # key -> (tokens, last_refill_timestamp)
        self._buckets: dict[str, tuple[float, float]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        """Attempt to consume one token for ``key``.

        Args:
            key: Rate limit key.

        Returns:
            True if the request is allowed, False if the bucket is empty.
        """
        with self._lock:
            now = self._clock()
            tokens, last_refill = self._buckets.get(key, (self._burst, now))
            tokens = min(self._burst, tokens + (now - last_refill) * self._rate_per_second)

            if tokens < 1.0:
                self._buckets[key] = (tokens, now)
                return False

            self._buckets[key] = (tokens - 1.0, now)
            return True
