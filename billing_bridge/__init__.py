"""
Billing bridge: typed async client for native in-app purchase / subscription SDKs.
"""

from billing_bridge.client import BillingClient
from billing_bridge.integrations import (
    AuthConfigurationError,
    BillingError,
    CatalogQueryError,
    DecodeError,
    Entitlement,
    Item,
    Plan,
    Platform,
    PlatformInvocationError,
    PlatformInvoker,
    Product,
    ProductLookupError,
    PurchaseError,
    PurchaseResult,
    Subscription,
    SubscriptionQueryError,
)

__all__ = [
    "BillingClient",
    "Platform",
    "PlatformInvoker",
    "Entitlement",
    "Item",
    "Plan",
    "Product",
    "PurchaseResult",
    "Subscription",
    "AuthConfigurationError",
    "BillingError",
    "CatalogQueryError",
    "DecodeError",
    "PlatformInvocationError",
    "ProductLookupError",
    "PurchaseError",
    "SubscriptionQueryError",
]
