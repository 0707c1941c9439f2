"""Process-local registry of resources taking part in credit limiting.

Not synchronized: concurrent register/unregister of the same resource must be
serialized by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from credit_manager.limiter.balance_key import DEFAULT_KEY_PREFIX, BalanceKey, derive_balance_key
from credit_manager.limiter.resource import (
    IDENTITY_ATTR,
    RegulatedResource,
    resource_id,
    resource_type_name,
)

if TYPE_CHECKING:
    from loguru import Logger


@dataclass(frozen=True)
class RegisteredResource:
    """Registry entry for one regulated resource."""

    resource_id: str
    resource_type: str
    quota: int  # credits per 60s window, >= 1
    balance_key: BalanceKey


class ResourceRegistry:
    def __init__(
        self,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        log: Logger | None = None,
    ) -> None:
        self._key_prefix = key_prefix
        self._log = log or logger
        self._entries: dict[str, RegisteredResource] = {}

    def register(self, resource: RegulatedResource) -> bool:
        """Add resource. False if quota < 1 or it is already registered."""
        rid = resource_id(resource)
        rtype = resource_type_name(resource)
        quota = int(resource.credits_per_minute_limit())

        if rid in self._entries:
            self._log.warning(
                "[CREDIT] register rejected: {resource_type} {resource_id} already registered",
                resource_type=rtype, resource_id=rid,
            )
            return False
        if quota < 1:
            self._log.warning(
                "[CREDIT] register rejected: {resource_type} {resource_id} quota={quota} < 1",
                resource_type=rtype, resource_id=rid, quota=quota,
            )
            return False

        self._entries[rid] = RegisteredResource(
            resource_id=rid,
            resource_type=rtype,
            quota=quota,
            balance_key=derive_balance_key(resource, self._key_prefix),
        )
        self._log.info(
            "[CREDIT] register {resource_type} {resource_id} quota={quota}/min",
            resource_type=rtype, resource_id=rid, quota=quota,
        )
        return True

    def unregister(self, resource: RegulatedResource) -> bool:
        rid = getattr(resource, IDENTITY_ATTR, None)
        if rid is None or rid not in self._entries:
            return False
        del self._entries[rid]
        self._log.info("[CREDIT] unregister {resource_id}", resource_id=rid)
        return True

    def get(self, resource: RegulatedResource) -> RegisteredResource | None:
        """Lookup only; never assigns an identity to an unseen object."""
        rid = getattr(resource, IDENTITY_ATTR, None)
        if rid is None:
            return None
        return self._entries.get(rid)

    def __contains__(self, resource: object) -> bool:
        rid = getattr(resource, IDENTITY_ATTR, None)
        return rid is not None and rid in self._entries

    def __len__(self) -> int:
        return len(self._entries)
