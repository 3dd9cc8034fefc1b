"""
Contracts (data models and the native bridge interface).

Why this exists:
- Mock and real invokers speak the same method names and argument keys
- Normalizers always produce the same canonical records, whatever the platform
- The client relies on stable models, not on ad-hoc dicts

Both mock and real HTTP invokers should use these contracts.
"""

from .interfaces import (
    API_KEY,
    CUSTOMER_ID,
    PRODUCT,
    PRODUCT_IDS,
    SDK_KEY,
    SITE,
    BridgeMethod,
    Platform,
    PlatformInvoker,
)
from .models import (
    BillingRecord,
    Entitlement,
    EntitlementList,
    Item,
    Plan,
    Product,
    ProductIdentifierList,
    PurchaseResult,
    Subscription,
    SubscriptionPeriod,
)

__all__ = [
    # interfaces
    "BridgeMethod", "Platform", "PlatformInvoker",
    "SITE", "API_KEY", "SDK_KEY", "PRODUCT_IDS", "PRODUCT", "CUSTOMER_ID",
    # models
    "BillingRecord", "Entitlement", "EntitlementList", "Item", "Plan",
    "Product", "ProductIdentifierList", "PurchaseResult", "Subscription",
    "SubscriptionPeriod",
]
