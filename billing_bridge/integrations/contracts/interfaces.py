"""
Native bridge protocol.

The method names and argument keys below are the wire contract with the native
iOS / Android layer; they must not be renamed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, Optional, TypeVar

T = TypeVar("T")


class Platform(str, Enum):
    IOS = "ios"
    ANDROID = "android"

    def pick(self, *, ios: T, android: T) -> T:
        """Return the value that belongs to this platform."""
        return ios if self is Platform.IOS else android


class BridgeMethod(str, Enum):
    AUTHENTICATE = "authenticate"
    GET_PRODUCTS = "getProducts"
    PURCHASE_PRODUCT = "purchaseProduct"
    RETRIEVE_SUBSCRIPTIONS = "retrieveSubscriptions"
    RETRIEVE_PRODUCT_IDENTIFIERS = "retrieveProductIdentifiers"
    GET_ENTITLEMENTS = "getEntitlements"
    RETRIEVE_ALL_ITEMS = "retrieveAllItems"
    RETRIEVE_ALL_PLANS = "retrieveAllPlans"


# Argument keys
SITE = "site"
API_KEY = "apiKey"
SDK_KEY = "sdkKey"
PRODUCT_IDS = "productIDs"
PRODUCT = "product"
CUSTOMER_ID = "customerId"


class PlatformInvoker(ABC):
    """Every native bridge transport must implement this interface."""

    @abstractmethod
    async def invoke(self, method: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Call `method` on the native layer and return its raw result
        (a JSON string, a list of JSON strings, or a primitive).

        Raises PlatformInvocationError when the native layer reports a failure.
        """
