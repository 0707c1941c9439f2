"""Deterministic mapping from a regulated resource to its Redis balance slot."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from credit_manager.limiter.resource import RegulatedResource, resource_id, resource_type_name

DEFAULT_KEY_PREFIX = "credit:balance"
BALANCE_TTL_SEC = 60  # one replenishment window


@dataclass(frozen=True)
class BalanceKey:
    key: str
    ttl: int = BALANCE_TTL_SEC


def type_fingerprint(resource: RegulatedResource) -> str:
    """md5 of the fully qualified class name; separates types sharing an id."""
    return hashlib.md5(resource_type_name(resource).encode("utf-8")).hexdigest()


def derive_balance_key(
    resource: RegulatedResource,
    prefix: str = DEFAULT_KEY_PREFIX,
) -> BalanceKey:
    return BalanceKey(key=f"{prefix}:{type_fingerprint(resource)}:{resource_id(resource)}")
