import pytest
import redis.asyncio as redis
from starlette.requests import Request

from dshop.config import settings
from dshop.core.exceptions import RateLimitExceeded
from dshop.core.middleware import RateLimiter, booking_limiter


def _request() -> Request:
    return Request({"type": "http", "client": ("10.0.0.7", 51000), "headers": []})


class _Pipeline:
    def __init__(self, seen: int):
        self.seen = seen

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def zremrangebyscore(self, *args):
        return None

    async def zcard(self, *args):
        return None

    async def zadd(self, *args):
        return None

    async def expire(self, *args):
        return None

    async def execute(self):
        return [0, self.seen, 1, True]


class _Redis:
    def __init__(self, seen: int = 0, broken: bool = False):
        self.seen = seen
        self.broken = broken

    def pipeline(self, transaction: bool = True):
        if self.broken:
            raise redis.ConnectionError("connection refused")
        return _Pipeline(self.seen)


def test_default_limit_comes_from_settings():
    assert RateLimiter().requests_per_minute == settings.rate_limit_per_minute
    assert booking_limiter.requests_per_minute == settings.rate_limit_per_minute
    assert RateLimiter(requests_per_minute=5).requests_per_minute == 5


async def test_disabled_limiter_lets_requests_through():
    limiter = RateLimiter(requests_per_minute=1)
    limiter._redis = _Redis(seen=100)

    await limiter(_request())


async def test_limit_exceeded(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    limiter = RateLimiter(requests_per_minute=3)

    limiter._redis = _Redis(seen=2)
    await limiter(_request())

    limiter._redis = _Redis(seen=3)
    with pytest.raises(RateLimitExceeded):
        await limiter(_request())


async def test_unreachable_redis_fails_open(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    limiter = RateLimiter(requests_per_minute=1)
    limiter._redis = _Redis(broken=True)

    await limiter(_request())
