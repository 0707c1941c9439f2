"""Shared test fixtures."""

from __future__ import annotations

import pytest

from credit_manager.limiter.manager import CreditManager
from credit_manager.limiter.resource import CreditLimitedResource


class FakeRedis:
    """In-memory stand-in for the balance store with a manual clock.

    TTLs count down only when advance() is called, so tests control exactly
    how many seconds pass between writes.
    """

    def __init__(self) -> None:
        self.now = 0
        self.values: dict[str, str] = {}
        self.expires_at: dict[str, int] = {}
        self.writes: list[tuple[str, int]] = []

    def advance(self, seconds: float) -> None:
        self.now += int(seconds)
        for key in [k for k, at in self.expires_at.items() if at <= self.now]:
            self.values.pop(key, None)
            self.expires_at.pop(key, None)

    async def exists(self, *names: str) -> int:
        return sum(1 for n in names if n in self.values)

    async def get(self, name: str) -> str | None:
        return self.values.get(name)

    async def set(self, name: str, value: int, ex: int | None = None) -> bool:
        self.values[name] = str(value)
        self.writes.append((name, int(value)))
        if ex is None:
            self.expires_at.pop(name, None)
        else:
            self.expires_at[name] = self.now + ex
        return True

    async def ttl(self, name: str) -> int:
        if name not in self.values:
            return -2
        if name not in self.expires_at:
            return -1
        return self.expires_at[name] - self.now


class ApiClient(CreditLimitedResource):
    """Regulated resource with a configurable quota."""

    def __init__(self, quota: int) -> None:
        super().__init__()
        self.quota = quota

    def credits_per_minute_limit(self) -> int:
        return self.quota


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def manager(fake_redis: FakeRedis) -> CreditManager:
    return CreditManager(fake_redis)


@pytest.fixture
def make_client():
    """Factory for ApiClient resources: make_client(quota=60)."""
    return ApiClient
