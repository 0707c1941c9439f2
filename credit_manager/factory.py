"""Build a CreditManager wired to the shared Redis client and settings."""

from config.settings import settings
from credit_manager.db.redis import get_redis
from credit_manager.limiter.manager import CreditManager


async def create_credit_manager() -> CreditManager:
    redis = await get_redis()
    return CreditManager(redis, key_prefix=settings.credit_key_prefix)
