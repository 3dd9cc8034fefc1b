"""
Mock Platform Invoker.

⚠️  This is a mock implementation for development and testing.
    It does NOT talk to a device or a native SDK. Every method returns
    realistic-looking payloads shaped like the selected platform's SDK output,
    unless a response or a failure has been scripted for it.

Swap:
Replace with clients/real_http/platform_bridge.py when a native bridge is
reachable (selection happens in billing_bridge/bootstrap.py only).
"""

import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from billing_bridge.integrations.contracts.interfaces import (
    PRODUCT,
    PRODUCT_IDS,
    BridgeMethod,
    Platform,
    PlatformInvoker,
)
from billing_bridge.integrations.errors import PlatformInvocationError

logger = logging.getLogger(__name__)

Responder = Callable[[Dict[str, Any]], Any]


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

_MOCK_PRODUCTS: Dict[str, Dict[str, Any]] = {
    "premium_monthly": {
        "productId": "premium_monthly",
        "productPrice": 4.99,
        "productPriceString": "$4.99",
        "productTitle": "Premium (Monthly)",
        "productDescription": "All premium features, billed every month.",
        "currencyCode": "USD",
        "subscriptionPeriod": {"periodUnit": "month", "numberOfUnits": 1},
    },
    "premium_yearly": {
        "productId": "premium_yearly",
        "productPrice": 49.99,
        "productPriceString": "$49.99",
        "productTitle": "Premium (Yearly)",
        "productDescription": "All premium features, billed once a year.",
        "currencyCode": "USD",
        "subscriptionPeriod": {"periodUnit": "year", "numberOfUnits": 1},
    },
}

_MOCK_SUBSCRIPTION: Dict[str, Any] = {
    "subscription_id": "AzZlGJTGbXxa2Aq1",
    "customer_id": "cust_demo_001",
    "plan_id": "premium_monthly",
    "status": "active",
    "plan_amount": 4.99,
    "activated_at": 1700000000,
    "current_term_start": 1700000000,
    "current_term_end": 1702592000,
}

_MOCK_ITEMS: List[Dict[str, Any]] = [
    {
        "id": "premium",
        "name": "Premium",
        "external_name": "Premium access",
        "description": "Unlocks premium features.",
        "status": "active",
        "type": "plan",
        "item_family_id": "mobile-app",
        "channel": "app_store",
        "is_giftable": False,
        "is_shippable": False,
        "enabled_for_checkout": True,
        "enabled_in_portal": True,
        "resource_version": 1700000000000,
        "updated_at": 1700000000,
    },
]

_MOCK_PLANS: List[Dict[str, Any]] = [
    {
        "id": "premium_monthly",
        "name": "Premium Monthly",
        "invoice_name": "Premium Monthly",
        "description": "Premium, billed monthly.",
        "price": 499,
        "currency_code": "USD",
        "period": 1,
        "period_unit": "month",
        "pricing_model": "flat_fee",
        "charge_model": "flat_fee",
        "free_quantity": 0,
        "status": "active",
        "channel": "app_store",
        "taxable": True,
        "enabled_in_portal": True,
        "resource_version": 1700000000000,
        "updated_at": 1700000000,
    },
]

_MOCK_ENTITLEMENTS: List[Dict[str, Any]] = [
    {
        "subscription_id": "AzZlGJTGbXxa2Aq1",
        "feature_id": "offline-mode",
        "feature_name": "Offline mode",
        "feature_description": "Use the app without a connection.",
        "feature_type": "switch",
        "value": "true",
        "name": "Available",
        "is_overridden": False,
        "is_enabled": True,
    },
]


def _native_shape(record: Dict[str, Any], platform: Platform) -> Dict[str, Any]:
    """Re-key a snake_case record the way the platform SDK would serialise it."""
    if platform is Platform.IOS:
        return dict(record)
    shaped = {}
    for key, value in record.items():
        head, *rest = key.split("_")
        shaped[head + "".join(part.capitalize() for part in rest)] = value
    return shaped


# ---------------------------------------------------------------------------
# Mock invoker
# ---------------------------------------------------------------------------

class MockPlatformInvoker(PlatformInvoker):
    """
    Mock native bridge.

    Parameters
    ----------
    platform : Platform
        Platform whose native payload shapes the seed responses imitate.
    responses : dict
        Scripted raw results per method name. A callable is called with the
        invocation arguments and its return value is used.
    """

    def __init__(
        self,
        platform: Platform = Platform.ANDROID,
        responses: Optional[Mapping[str, Union[Any, Responder]]] = None,
    ):
        self.platform = Platform(platform)
        self._responses: Dict[str, Any] = dict(responses or {})
        self._failures: Dict[str, PlatformInvocationError] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

        logger.info("[BRIDGE MOCK] Invoker initialised (platform=%s)", self.platform.value)

    def set_response(self, method: str, response: Union[Any, Responder]) -> None:
        self._responses[_method_name(method)] = response
        self._failures.pop(_method_name(method), None)

    def fail(self, method: str, code: str, message: str = "", details: Optional[Dict[str, Any]] = None) -> None:
        self._failures[_method_name(method)] = PlatformInvocationError(code, message, details)

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        name = _method_name(method)
        return [args for called, args in self.calls if called == name]

    async def invoke(self, method: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        name = _method_name(method)
        arguments = dict(args or {})
        self.calls.append((name, arguments))
        logger.debug("[BRIDGE MOCK] %s(%s)", name, arguments)

        if name in self._failures:
            raise self._failures[name]
        if name in self._responses:
            response = self._responses[name]
            return response(arguments) if callable(response) else response
        return self._seed_response(name, arguments)

    # ------------------------------------------------------------------
    # Seed responses
    # ------------------------------------------------------------------

    def _seed_response(self, method: str, args: Dict[str, Any]) -> Any:
        if method == BridgeMethod.AUTHENTICATE.value:
            return None
        if method == BridgeMethod.GET_PRODUCTS.value:
            ids = args.get(PRODUCT_IDS) or []
            return [json.dumps(_MOCK_PRODUCTS[pid]) for pid in ids if pid in _MOCK_PRODUCTS]
        if method == BridgeMethod.PURCHASE_PRODUCT.value:
            return json.dumps({
                "subscriptionId": _MOCK_SUBSCRIPTION["subscription_id"],
                "planId": args.get(PRODUCT, ""),
                "status": "active",
            })
        if method == BridgeMethod.RETRIEVE_SUBSCRIPTIONS.value:
            return json.dumps([{"cb_subscription": _native_shape(_MOCK_SUBSCRIPTION, self.platform)}])
        if method == BridgeMethod.RETRIEVE_PRODUCT_IDENTIFIERS.value:
            return json.dumps({"productIdentifiers": list(_MOCK_PRODUCTS)})
        if method == BridgeMethod.GET_ENTITLEMENTS.value:
            return json.dumps({
                "entitlements": [json.dumps(_native_shape(e, self.platform)) for e in _MOCK_ENTITLEMENTS]
            })
        if method == BridgeMethod.RETRIEVE_ALL_ITEMS.value:
            return json.dumps([{"item": _native_shape(item, self.platform)} for item in _MOCK_ITEMS])
        if method == BridgeMethod.RETRIEVE_ALL_PLANS.value:
            return json.dumps([{"plan": _native_shape(plan, self.platform)} for plan in _MOCK_PLANS])
        raise PlatformInvocationError("not_implemented", f"Unknown bridge method '{method}'.")


def _method_name(method: Union[str, BridgeMethod]) -> str:
    return method.value if isinstance(method, BridgeMethod) else str(method)
