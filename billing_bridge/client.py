"""
Billing client.

Typed entry point for application code. Every operation issues exactly one
invocation to the platform invoker, decodes the raw result with the platform's
normalizer and raises the operation's error type on failure.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from billing_bridge.integrations.contracts.interfaces import (
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
from billing_bridge.integrations.contracts.models import (
    Entitlement,
    Item,
    Plan,
    Product,
    PurchaseResult,
    Subscription,
)
from billing_bridge.integrations.errors import (
    AuthConfigurationError,
    BillingError,
    CatalogQueryError,
    OperationError,
    ProductLookupError,
    PurchaseError,
    SubscriptionQueryError,
)
from billing_bridge.integrations.normalizers import ResponseNormalizer, normalizer_for

if TYPE_CHECKING:
    from billing_bridge.utils.bridge_config_loader import BridgeConfig

logger = logging.getLogger(__name__)

R = TypeVar("R")
QueryParams = Optional[Mapping[str, str]]


class BillingClient:
    """
    Facade over a native billing SDK.

    `configure` must be awaited before any other operation; the native layer
    keeps the resulting session, this client holds no session state.
    """

    def __init__(
        self,
        invoker: PlatformInvoker,
        platform: Platform = Platform.ANDROID,
        normalizer: Optional[ResponseNormalizer] = None,
        empty_purchase_is_error: bool = False,
    ) -> None:
        self.invoker = invoker
        self.normalizer = normalizer or normalizer_for(platform)
        self.platform = self.normalizer.platform
        self.empty_purchase_is_error = empty_purchase_is_error
        logger.info("Billing client ready (platform=%s, invoker=%s)", self.platform.value, type(invoker).__name__)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    async def configure(
        self,
        site: str,
        publishable_api_key: str,
        ios_sdk_key: Optional[str] = "",
        android_sdk_key: Optional[str] = "",
    ) -> None:
        """
        Authenticate the native SDK against a billing site.

        site: the site name, e.g. 'mobile-test' for https://mobile-test.chargebee.com.
        publishable_api_key: publishable key generated for the site.
        ios_sdk_key / android_sdk_key: only the current platform's key is sent.
        """
        sdk_key = self.platform.pick(ios=ios_sdk_key, android=android_sdk_key) or ""
        args = {SITE: site, API_KEY: publishable_api_key, SDK_KEY: sdk_key}
        await self._invoke(BridgeMethod.AUTHENTICATE, args, AuthConfigurationError, "Configuration")
        logger.info("Billing SDK configured for site '%s' (%s)", site, self.platform.value)

    async def configure_from(self, config: BridgeConfig) -> None:
        """Configure from the `site` and key fields of a loaded BridgeConfig."""
        await self.configure(
            config.site,
            config.publishable_api_key,
            config.ios_sdk_key,
            config.android_sdk_key,
        )

    # ------------------------------------------------------------------
    # Products & purchases
    # ------------------------------------------------------------------

    async def retrieve_products(self, product_ids: Iterable[str]) -> List[Product]:
        """
        Look products up in the App Store / Play Store.

        Products come back in the order the store returned them, which is not
        necessarily the order of `product_ids`.
        """
        if isinstance(product_ids, str):
            raise ProductLookupError(
                "product_ids must be a collection of identifiers, not a single string.",
                code="invalid_argument",
            )
        ids = list(product_ids)
        if not ids:
            raise ProductLookupError("At least one product identifier is required.", code="invalid_argument")
        return await self._request(
            BridgeMethod.GET_PRODUCTS,
            {PRODUCT_IDS: ids},
            self.normalizer.products,
            ProductLookupError,
            "Product lookup",
        )

    async def purchase_product(self, product: Product, customer_id: Optional[str] = "") -> PurchaseResult:
        """
        Buy `product`, optionally on behalf of `customer_id`.

        An empty customer id lets the backend use the subscription id as the
        customer id. An empty native result is returned as an empty
        PurchaseResult unless the client was built with empty_purchase_is_error.
        """
        args = {PRODUCT: product.id, CUSTOMER_ID: customer_id or ""}
        raw = await self._invoke(BridgeMethod.PURCHASE_PRODUCT, args, PurchaseError, "Purchase")
        if raw == "":
            if self.empty_purchase_is_error:
                raise PurchaseError(
                    f"Purchase of '{product.id}' returned no result.",
                    code="empty_purchase_result",
                    details={"product": product.id},
                )
            logger.warning("Purchase of '%s' returned an empty result", product.id)
            return PurchaseResult.empty(raw)
        return self._decode(raw, self.normalizer.purchase_result, PurchaseError, "Purchase")

    # ------------------------------------------------------------------
    # Subscriptions & entitlements
    # ------------------------------------------------------------------

    async def retrieve_subscriptions(self, query_params: QueryParams) -> List[Subscription]:
        """Query subscriptions, e.g. {"customer_id": "abc"}."""
        return await self._request(
            BridgeMethod.RETRIEVE_SUBSCRIPTIONS,
            _query(query_params),
            self.normalizer.subscriptions,
            SubscriptionQueryError,
            "Subscription query",
        )

    async def retrieve_entitlements(self, query_params: QueryParams) -> List[str]:
        """Entitlements of a subscription, e.g. {"subscriptionId": "XXXXXXX"}."""
        entitlements = await self._request(
            BridgeMethod.GET_ENTITLEMENTS,
            _query(query_params),
            self.normalizer.entitlement_list,
            CatalogQueryError,
            "Entitlement query",
        )
        return list(entitlements.entitlements)

    async def retrieve_entitlement_details(self, query_params: QueryParams) -> List[Entitlement]:
        """Like retrieve_entitlements, with every entry decoded into an Entitlement."""
        entries = await self.retrieve_entitlements(query_params)
        return [self._decode(entry, self.normalizer.entitlement, CatalogQueryError, "Entitlement query")
                for entry in entries]

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    async def retrieve_product_identifiers(self, query_params: QueryParams = None) -> List[str]:
        """Available product identifiers, e.g. {"limit": "10"}."""
        identifiers = await self._request(
            BridgeMethod.RETRIEVE_PRODUCT_IDENTIFIERS,
            _query(query_params),
            self.normalizer.product_identifiers,
            CatalogQueryError,
            "Product identifier query",
        )
        return list(identifiers.product_identifiers)

    async def retrieve_product_identifers(self, query_params: QueryParams = None) -> List[str]:
        warnings.warn(
            "retrieve_product_identifers is deprecated; use retrieve_product_identifiers instead",
            DeprecationWarning,
            stacklevel=2,
        )
        logger.warning("Deprecated retrieve_product_identifers called")
        return await self.retrieve_product_identifiers(query_params)

    async def retrieve_all_items(self, query_params: QueryParams = None) -> List[Item]:
        return await self._request(
            BridgeMethod.RETRIEVE_ALL_ITEMS,
            _query(query_params),
            self.normalizer.items,
            CatalogQueryError,
            "Item query",
        )

    async def retrieve_all_plans(self, query_params: QueryParams = None) -> List[Plan]:
        return await self._request(
            BridgeMethod.RETRIEVE_ALL_PLANS,
            _query(query_params),
            self.normalizer.plans,
            CatalogQueryError,
            "Plan query",
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: BridgeMethod,
        args: Dict[str, Any],
        decode: Callable[[Any], R],
        error_type: Type[OperationError],
        action: str,
    ) -> R:
        raw = await self._invoke(method, args, error_type, action)
        return self._decode(raw, decode, error_type, action)

    async def _invoke(
        self,
        method: BridgeMethod,
        args: Dict[str, Any],
        error_type: Type[OperationError],
        action: str,
    ) -> Any:
        logger.debug("Invoking %s", method.value)
        try:
            return await self.invoker.invoke(method.value, args)
        except BillingError as exc:
            raise error_type.wrap(action, exc) from exc

    @staticmethod
    def _decode(raw: Any, decode: Callable[[Any], R], error_type: Type[OperationError], action: str) -> R:
        try:
            return decode(raw)
        except BillingError as exc:
            raise error_type.wrap(action, exc) from exc


def _query(query_params: QueryParams) -> Dict[str, str]:
    return dict(query_params or {})
