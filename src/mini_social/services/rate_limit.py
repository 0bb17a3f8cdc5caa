"""Fixed-window request rate limiting.

Counters live in Redis when ``REDIS_URL`` is configured so that every worker
shares one budget per client; otherwise they are kept in process memory.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

import redis

from mini_social.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    remaining: int
    retry_after: int


class RateLimitService:
    """Counts requests per client key in fixed windows of ``window_seconds``."""

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        redis_url: str | None = None,
        redis_client: Any = None,
        redis_retry_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.limit = limit
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        if redis_client is None and redis_url:
            redis_client = redis.from_url(redis_url)
        self._redis: Any = redis_client
        # After a Redis failure, requests are counted in memory until this time.
        self._redis_retry_seconds = redis_retry_seconds
        self._redis_retry_at = 0.0
        self._counts: dict[tuple[str, int], int] = {}
        self._lock = Lock()

    def _window(self) -> tuple[int, int]:
        now = self._clock()
        window = int(now // self.window_seconds)
        retry_after = int((window + 1) * self.window_seconds - now) or 1
        return window, retry_after

    def _incr_redis(self, key: str, window: int) -> int | None:
        if self._redis is None or self._clock() < self._redis_retry_at:
            return None
        redis_key = f"ratelimit:{key}:{window}"
        try:
            pipe = self._redis.pipeline()
            pipe.incr(redis_key)
            pipe.expire(redis_key, self.window_seconds)
            count, _ = pipe.execute()
            return int(count)
        except redis.RedisError as exc:
            logger.warning(
                "Rate limiter falling back to memory for %ss: %s",
                self._redis_retry_seconds,
                exc,
            )
            self._redis_retry_at = self._clock() + self._redis_retry_seconds
            return None

    def _incr_memory(self, key: str, window: int) -> int:
        with self._lock:
            stale = [k for k in self._counts if k[1] < window]
            for k in stale:
                del self._counts[k]
            count = self._counts.get((key, window), 0) + 1
            self._counts[(key, window)] = count
            return count

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for ``key`` and decide whether it may proceed."""
        window, retry_after = self._window()
        count = self._incr_redis(key, window)
        if count is None:
            count = self._incr_memory(key, window)
        return RateLimitDecision(
            allowed=count <= self.limit,
            remaining=max(0, self.limit - count),
            retry_after=retry_after,
        )


_rate_limiter: RateLimitService | None = None


def get_rate_limiter() -> RateLimitService:
    """Return the process-wide rate limiter built from settings."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RateLimitService(
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
            redis_url=settings.redis_url,
        )
    return _rate_limiter
