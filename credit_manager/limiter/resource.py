"""Regulated-resource capability and explicit resource identity.

A resource takes part in credit limiting by exposing its per-minute quota.
Each participating instance also carries an opaque identity token, assigned
at construction (CreditLimitedResource) or lazily on first lookup for any
other object satisfying the protocol.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

IDENTITY_ATTR = "credit_resource_id"


@runtime_checkable
class RegulatedResource(Protocol):
    """Anything that can report how many credits it may spend per minute."""

    def credits_per_minute_limit(self) -> int: ...


class CreditLimitedResource(ABC):
    """Base class for resources that want their identity fixed at construction."""

    def __init__(self) -> None:
        self.credit_resource_id: str = _new_identity()

    @abstractmethod
    def credits_per_minute_limit(self) -> int: ...


def _new_identity() -> str:
    return uuid.uuid4().hex


def resource_id(resource: RegulatedResource) -> str:
    """Return the resource's identity token, assigning one if it has none yet.

    Raises AttributeError for objects that cannot hold attributes
    (e.g. __slots__ without a credit_resource_id slot).
    """
    rid = getattr(resource, IDENTITY_ATTR, None)
    if rid is None:
        rid = _new_identity()
        setattr(resource, IDENTITY_ATTR, rid)
    return rid


def resource_type_name(resource: RegulatedResource) -> str:
    cls = type(resource)
    return f"{cls.__module__}.{cls.__qualname__}"
