"""
Async rate limiting for external lookups.

Each external source (WHOIS, DNS, crt.sh, page fetches, search engines,
social platforms) gets its own limiter that enforces a minimum interval
between calls. Limiters live in a per-run RateLimiterRegistry so that two
runs never share pacing state.

Usage:
    from name_radar.utils.rate_limiting import RateLimiter

    limiter = RateLimiter(requests_per_second=5.0, source_name="whois")

    await limiter()
    await lookup()
"""

import asyncio
import logging
import time

from name_radar.config import RateLimits

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Async rate limiter for external calls.

    Enforces a minimum interval between calls. Concurrent waiters are
    serialized through an asyncio.Lock, so N callers released at once are
    spread out over N intervals.

    Args:
        requests_per_second: Maximum requests per second allowed
        source_name: Name of the source (for logging/debugging)

    Example:
        >>> limiter = RateLimiter(requests_per_second=10.0, source_name="dns")
        >>> await limiter()  # First call - no wait
        >>> await limiter()  # Second call - waits ~0.1s
    """

    def __init__(self, requests_per_second: float, source_name: str = "default"):
        """
        Initialize rate limiter.

        Args:
            requests_per_second: Maximum requests per second (must be > 0)
            source_name: Name of the source (for debugging)

        Raises:
            ValueError: If requests_per_second <= 0
        """
        if requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be > 0, got {requests_per_second}")

        self.requests_per_second = requests_per_second
        self.source_name = source_name
        self.min_interval = 1.0 / requests_per_second
        self._lock = asyncio.Lock()
        self._last_call: float | None = None

    async def __call__(self) -> None:
        """Wait until the minimum interval has elapsed since the previous call."""
        async with self._lock:
            if self._last_call is not None:
                elapsed = time.monotonic() - self._last_call
                if elapsed < self.min_interval:
                    wait = self.min_interval - elapsed
                    logger.debug(f"[{self.source_name}] rate limit: sleeping {wait:.3f}s")
                    await asyncio.sleep(wait)
            self._last_call = time.monotonic()

    def reset(self) -> None:
        """Reset the rate limiter so the next call goes through immediately."""
        self._last_call = None


class RateLimiterRegistry:
    """
    Per-run collection of limiters, one per external source.

    Built from RateLimits so every run carries its own pacing state.
    """

    def __init__(self, rate_limits: RateLimits | None = None):
        self._rates = (rate_limits or RateLimits()).model_dump()
        self._limiters: dict[str, RateLimiter] = {}

    def get(self, source_name: str) -> RateLimiter:
        """
        Get (or lazily create) the limiter for a source.

        Args:
            source_name: One of the RateLimits field names (e.g. "whois", "crt")

        Raises:
            KeyError: If no rate is configured for source_name
        """
        limiter = self._limiters.get(source_name)
        if limiter is None:
            limiter = RateLimiter(self._rates[source_name], source_name=source_name)
            self._limiters[source_name] = limiter
        return limiter
