"""Tests for fixed-window rate limiting."""

import redis
from fastapi import status

from mini_social.core.settings import settings
from mini_social.services.rate_limit import RateLimitService, get_rate_limiter


class FakeClock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_requests_beyond_limit_are_denied() -> None:
    clock = FakeClock(100.0)
    limiter = RateLimitService(limit=2, window_seconds=60, clock=clock)

    assert limiter.hit("1.2.3.4").allowed is True
    second = limiter.hit("1.2.3.4")
    assert second.allowed is True
    assert second.remaining == 0

    third = limiter.hit("1.2.3.4")
    assert third.allowed is False
    assert third.retry_after == 20


def test_clients_have_separate_budgets() -> None:
    limiter = RateLimitService(limit=1, window_seconds=60, clock=FakeClock(0.0))
    assert limiter.hit("a").allowed is True
    assert limiter.hit("b").allowed is True
    assert limiter.hit("a").allowed is False


def test_new_window_resets_budget() -> None:
    clock = FakeClock(0.0)
    limiter = RateLimitService(limit=1, window_seconds=60, clock=clock)
    assert limiter.hit("a").allowed is True
    assert limiter.hit("a").allowed is False

    clock.now = 61.0
    assert limiter.hit("a").allowed is True


def test_api_rejects_with_429(app, client, monkeypatch) -> None:
    limiter = RateLimitService(limit=2, window_seconds=60, clock=FakeClock(30.0))
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    try:
        assert client.get("/").status_code == status.HTTP_200_OK
        assert client.get("/health").status_code == status.HTTP_200_OK
        response = client.get("/")
    finally:
        app.dependency_overrides.pop(get_rate_limiter, None)

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.headers["Retry-After"] == "30"


def test_disabled_rate_limit_never_counts(app, client) -> None:
    limiter = RateLimitService(limit=0, window_seconds=60)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    try:
        assert client.get("/").status_code == status.HTTP_200_OK
    finally:
        app.dependency_overrides.pop(get_rate_limiter, None)


class FlakyRedis:
    """Minimal Redis stand-in whose pipeline fails while ``down`` is set."""

    def __init__(self) -> None:
        self.down = False
        self.counts: dict[str, int] = {}
        self.executed = 0

    def pipeline(self) -> "FlakyRedis._Pipeline":
        return FlakyRedis._Pipeline(self)

    class _Pipeline:
        def __init__(self, server: "FlakyRedis") -> None:
            self.server = server
            self.key = ""

        def incr(self, key: str) -> None:
            self.key = key

        def expire(self, key: str, seconds: int) -> None:
            pass

        def execute(self) -> list:
            self.server.executed += 1
            if self.server.down:
                raise redis.ConnectionError("connection refused")
            self.server.counts[self.key] = self.server.counts.get(self.key, 0) + 1
            return [self.server.counts[self.key], True]


def test_redis_counts_are_shared() -> None:
    server = FlakyRedis()
    first = RateLimitService(limit=1, window_seconds=60, redis_client=server, clock=FakeClock(0.0))
    second = RateLimitService(limit=1, window_seconds=60, redis_client=server, clock=FakeClock(0.0))

    assert first.hit("a").allowed is True
    assert second.hit("a").allowed is False


def test_redis_is_retried_after_cooldown() -> None:
    clock = FakeClock(0.0)
    server = FlakyRedis()
    limiter = RateLimitService(
        limit=10,
        window_seconds=600,
        redis_client=server,
        redis_retry_seconds=30,
        clock=clock,
    )

    server.down = True
    assert limiter.hit("a").allowed is True
    assert server.executed == 1

    server.down = False
    clock.now = 10.0
    assert limiter.hit("a").allowed is True
    assert server.executed == 1

    clock.now = 31.0
    assert limiter.hit("a").allowed is True
    assert server.executed == 2
    assert server.counts == {"ratelimit:a:0": 1}
