"""Distributed per-minute credit limiter backed by Redis.

Each registered resource owns one Redis key holding its available credits.
The key is rewritten with a 60s TTL on every persist, so the remaining TTL
doubles as a clock: ``60 - ttl`` is the number of seconds since the last
write. Retrieval refills ``floor(elapsed * quota / 60)`` credits (capped at
quota) and persists the result, which restarts the countdown.

Flow of spend_credits():
  registry lookup → quota check
    → retrieve_balance (refill)
    → accumulate_up_to (sleep) if short → retrieve_balance again
    → persist balance - credits

Read and final persist are separate round-trips: two spenders racing on the
same resource can both pass the balance check. No atomic decrement is made.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from loguru import logger

from credit_manager.limiter.balance_key import DEFAULT_KEY_PREFIX
from credit_manager.limiter.exceptions import (
    InsufficientCreditsError,
    NotRegisteredError,
    QuotaExceededError,
    WindowExceededError,
)
from credit_manager.limiter.registry import RegisteredResource, ResourceRegistry
from credit_manager.limiter.resource import IDENTITY_ATTR, RegulatedResource

if TYPE_CHECKING:
    from loguru import Logger

    from credit_manager.db.redis import BalanceStore


class CreditManager:
    """Tracks shared credit balances and suspends spenders until credits refill."""

    def __init__(
        self,
        redis: BalanceStore,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        log: Logger | None = None,
    ) -> None:
        self._redis = redis
        self._log = log or logger
        self._registry = ResourceRegistry(key_prefix=key_prefix, log=self._log)

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry

    # ── Registration ──────────────────────────────────────────────────

    def add_resource(self, resource: RegulatedResource) -> bool:
        return self._registry.register(resource)

    def remove_resource(self, resource: RegulatedResource) -> bool:
        return self._registry.unregister(resource)

    def _entry(self, resource: RegulatedResource) -> RegisteredResource:
        entry = self._registry.get(resource)
        if entry is None:
            raise NotRegisteredError(getattr(resource, IDENTITY_ATTR, None) or "<no identity>")
        return entry

    # ── Spend ─────────────────────────────────────────────────────────

    async def spend_credits(self, resource: RegulatedResource, credits: int) -> None:
        """Take ``credits`` from the resource's shared balance.

        Suspends the calling task (at most one window) when the balance is
        short. Raises NotRegisteredError, QuotaExceededError,
        WindowExceededError or InsufficientCreditsError; the balance is only
        written when the spend succeeds.
        """
        self._log.debug("[CREDIT] spend_credits credits={credits}", credits=credits)
        if credits < 1:
            return

        entry = self._entry(resource)
        if credits > entry.quota:
            raise QuotaExceededError(credits, entry.quota)

        balance = await self._retrieve(entry)
        self._log.info(
            "[CREDIT] spend {resource_id}: credits={credits} balance={balance}",
            resource_id=entry.resource_id, credits=credits, balance=balance,
        )
        if balance < credits:
            await self._accumulate(entry, credits)
            # Never trust the pre-wait reading: others may have spent or refilled
            balance = await self._retrieve(entry)
            self._log.info(
                "[CREDIT] spend {resource_id} after wait: credits={credits} balance={balance}",
                resource_id=entry.resource_id, credits=credits, balance=balance,
            )

        if balance < credits:
            raise InsufficientCreditsError(credits, balance)

        await self._save_balance(entry, balance - credits)

    # ── Balance ───────────────────────────────────────────────────────

    async def retrieve_balance(self, resource: RegulatedResource) -> int:
        """Current balance after applying replenishment for time since last write."""
        return await self._retrieve(self._entry(resource))

    async def _retrieve(self, entry: RegisteredResource) -> int:
        key = entry.balance_key.key
        window = entry.balance_key.ttl

        # Missing key: first use, or a whole window passed with no writes
        if not await self._redis.exists(key):
            await self._save_balance(entry, entry.quota)
            return entry.quota

        raw = await self._redis.get(key)
        balance = int(raw) if raw is not None else 0
        ttl = await self._redis.ttl(key)
        self._log.debug(
            "[CREDIT] retrieve {resource_id}: balance={balance} ttl={ttl}",
            resource_id=entry.resource_id, balance=balance, ttl=ttl,
        )

        elapsed = window - ttl
        if elapsed > 0:
            add = elapsed * entry.quota // window
            balance = min(balance + add, entry.quota)
            self._log.debug(
                "[CREDIT] retrieve {resource_id}: +{add} after {elapsed}s → {balance}",
                resource_id=entry.resource_id, add=add, elapsed=elapsed, balance=balance,
            )
            await self._save_balance(entry, balance)

        return balance

    async def _save_balance(self, entry: RegisteredResource, balance: int) -> None:
        self._log.debug(
            "[CREDIT] save {resource_id}: balance={balance}",
            resource_id=entry.resource_id, balance=balance,
        )
        await self._redis.set(entry.balance_key.key, balance, ex=entry.balance_key.ttl)

    # ── Accumulate ────────────────────────────────────────────────────

    async def accumulate_up_to(self, resource: RegulatedResource, up_to_credits: int) -> None:
        """Sleep long enough for the balance to refill to ``up_to_credits``.

        Returns without re-reading the balance; callers must retrieve it again.
        """
        await self._accumulate(self._entry(resource), up_to_credits)

    async def _accumulate(self, entry: RegisteredResource, up_to_credits: int) -> None:
        balance = await self._retrieve(entry)
        deficit = up_to_credits - balance
        self._log.info(
            "[CREDIT] accumulate {resource_id}: up_to={up_to} balance={balance} deficit={deficit}",
            resource_id=entry.resource_id, up_to=up_to_credits, balance=balance, deficit=deficit,
        )
        if deficit < 1:
            return

        window = entry.balance_key.ttl
        # ceil(deficit / (quota / window)) in integer arithmetic
        seconds = -(-deficit * window // entry.quota)
        if seconds > window:
            raise WindowExceededError(seconds, window)

        self._log.info(
            "[CREDIT] accumulate {resource_id}: sleep={sleep}s",
            resource_id=entry.resource_id, sleep=seconds,
        )
        await asyncio.sleep(seconds)
