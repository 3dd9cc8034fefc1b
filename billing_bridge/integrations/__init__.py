"""
Integrations layer.
This package contains all code used to communicate with the native store SDKs:
- contracts/: canonical records and the native bridge protocol
- normalizers/: per-platform decoding of native responses
- clients/: platform invokers (mock and real HTTP bridge)

Key rule:
- Application code MUST NOT call invokers directly; it goes through BillingClient.

Switching implementations:
- The selection of mock vs real invokers happens in ONE place (billing_bridge/bootstrap.py).
"""

from .contracts import (
    BridgeMethod,
    Entitlement,
    EntitlementList,
    Item,
    Plan,
    Platform,
    PlatformInvoker,
    Product,
    ProductIdentifierList,
    PurchaseResult,
    Subscription,
    SubscriptionPeriod,
)
from .errors import (
    AuthConfigurationError,
    BillingError,
    CatalogQueryError,
    DecodeError,
    PlatformInvocationError,
    ProductLookupError,
    PurchaseError,
    SubscriptionQueryError,
)
from .normalizers import (
    AndroidResponseNormalizer,
    IosResponseNormalizer,
    ResponseNormalizer,
    normalizer_for,
)

__all__ = [
    # contracts
    "BridgeMethod", "Platform", "PlatformInvoker",
    "Entitlement", "EntitlementList", "Item", "Plan", "Product",
    "ProductIdentifierList", "PurchaseResult", "Subscription", "SubscriptionPeriod",
    # errors
    "AuthConfigurationError", "BillingError", "CatalogQueryError", "DecodeError",
    "PlatformInvocationError", "ProductLookupError", "PurchaseError",
    "SubscriptionQueryError",
    # normalizers
    "AndroidResponseNormalizer", "IosResponseNormalizer", "ResponseNormalizer",
    "normalizer_for",
]
