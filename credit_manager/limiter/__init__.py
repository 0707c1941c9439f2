from credit_manager.limiter.balance_key import BalanceKey, derive_balance_key
from credit_manager.limiter.exceptions import (
    CreditManagerError,
    InsufficientCreditsError,
    NotRegisteredError,
    QuotaExceededError,
    WindowExceededError,
)
from credit_manager.limiter.manager import CreditManager
from credit_manager.limiter.registry import RegisteredResource, ResourceRegistry
from credit_manager.limiter.resource import CreditLimitedResource, RegulatedResource, resource_id

__all__ = [
    "BalanceKey",
    "CreditLimitedResource",
    "CreditManager",
    "CreditManagerError",
    "InsufficientCreditsError",
    "NotRegisteredError",
    "QuotaExceededError",
    "RegisteredResource",
    "RegulatedResource",
    "ResourceRegistry",
    "WindowExceededError",
    "derive_balance_key",
    "resource_id",
]
