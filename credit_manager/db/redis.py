from typing import Protocol

from redis.asyncio import Redis

from config.settings import settings

_redis_client: Redis | None = None


class BalanceStore(Protocol):
    """Subset of the async Redis API the credit manager relies on."""

    async def exists(self, *names: str) -> int: ...

    async def get(self, name: str) -> str | bytes | None: ...

    async def set(self, name: str, value: int, ex: int | None = None) -> bool | None: ...

    async def ttl(self, name: str) -> int: ...


async def get_redis() -> Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = Redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


async def close_redis() -> None:
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
