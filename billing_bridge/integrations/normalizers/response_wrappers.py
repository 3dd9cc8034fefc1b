from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from billing_bridge.integrations.contracts.interfaces import Platform
from billing_bridge.integrations.contracts.models import (
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
from billing_bridge.integrations.errors import DecodeError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R")


class ResponseNormalizer(ABC):
    """
    Turns raw native responses into canonical records.

    Product, purchase and container payloads share one shape on both platforms.
    Subscriptions, items, plans and entitlements arrive wrapped in an envelope
    and use platform-specific field naming; subclasses declare both.
    """

    platform: Platform
    subscription_envelope = "cb_subscription"
    item_envelope = "item"
    plan_envelope = "plan"

    @abstractmethod
    def native_key(self, field_name: str) -> str:
        """Native JSON key carrying the canonical `field_name`."""

    # -- Shared shapes --

    def product(self, raw: Any) -> Product:
        data = _expect_object(load_json(raw, "product"), "product")
        period = data.get("subscriptionPeriod")
        return _build_model(
            Product,
            {
                "id": str(_first_non_empty(data, "productId", "id")),
                "price": _coerce_amount(_first_non_empty(data, "productPrice", "price"), "product price"),
                "price_string": str(data.get("productPriceString") or ""),
                "title": str(data.get("productTitle") or ""),
                "description": str(data.get("productDescription") or ""),
                "currency_code": str(data.get("currencyCode") or ""),
                "subscription_period": self._subscription_period(period) if period else None,
            },
            data,
        )

    def products(self, raw: Any) -> List[Product]:
        if raw is None:
            return []
        return self._decode_list(raw, self.product, "products")

    def purchase_result(self, raw: Any) -> PurchaseResult:
        data = _expect_object(load_json(raw, "purchase result"), "purchase result")
        return _build_model(
            PurchaseResult,
            {
                "subscription_id": _string_field(data, "subscriptionId", "subscription_id"),
                "plan_id": _string_field(data, "planId", "plan_id"),
                "status": _string_field(data, "status"),
            },
            data,
        )

    def product_identifiers(self, raw: Any) -> ProductIdentifierList:
        data = _expect_object(load_json(raw, "product identifiers"), "product identifiers")
        return _build_model(
            ProductIdentifierList,
            {"product_identifiers": _string_list(data, "productIdentifiers")},
            data,
        )

    def entitlement_list(self, raw: Any) -> EntitlementList:
        data = _expect_object(load_json(raw, "entitlements"), "entitlements")
        return _build_model(EntitlementList, {"entitlements": _string_list(data, "entitlements")}, data)

    # -- Platform-shaped entities --

    def entitlement(self, raw: Any) -> Entitlement:
        data = _expect_object(load_json(raw, "entitlement"), "entitlement")
        return self._map_fields(data, Entitlement)

    def subscription(self, raw: Any) -> Subscription:
        return self._map_fields(self._unwrap(raw, self.subscription_envelope), Subscription)

    def subscriptions(self, raw: Any) -> List[Subscription]:
        return self._decode_list(raw, self.subscription, "subscriptions")

    def item(self, raw: Any) -> Item:
        return self._map_fields(self._unwrap(raw, self.item_envelope), Item)

    def items(self, raw: Any) -> List[Item]:
        return self._decode_list(raw, self.item, "items")

    def plan(self, raw: Any) -> Plan:
        return self._map_fields(self._unwrap(raw, self.plan_envelope), Plan)

    def plans(self, raw: Any) -> List[Plan]:
        return self._decode_list(raw, self.plan, "plans")

    # -- Helpers --

    def _subscription_period(self, raw: Any) -> SubscriptionPeriod:
        data = _expect_object(raw, "subscription period")
        return _build_model(
            SubscriptionPeriod,
            {
                "unit": str(_first_non_empty(data, "periodUnit", "unit")),
                "number_of_units": _first_non_empty(data, "numberOfUnits", "number_of_units", default=1),
            },
            data,
        )

    def _unwrap(self, element: Any, envelope: str) -> Dict[str, Any]:
        wrapper = _expect_object(load_json(element, envelope), envelope)
        body = wrapper.get(envelope)
        if not isinstance(body, dict):
            raise DecodeError(
                f"Missing '{envelope}' envelope in {self.platform.value} response.",
                payload=wrapper,
            )
        return body

    def _map_fields(self, body: Dict[str, Any], model_type: Type[M]) -> M:
        values: Dict[str, Any] = {}
        for name, info in model_type.model_fields.items():
            value = body.get(self.native_key(name))
            if value is None:
                continue
            if info.annotation is str and not isinstance(value, str):
                value = str(value).lower() if isinstance(value, bool) else str(value)
            values[name] = value
        return _build_model(model_type, values, body)

    def _decode_list(self, raw: Any, decode_one: Callable[[Any], R], label: str) -> List[R]:
        data = load_json(raw, label)
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array of {label}; got {type(data).__name__}.", payload=data)
        # Fail-fast: one bad element fails the whole list.
        return [decode_one(element) for element in data]


class IosResponseNormalizer(ResponseNormalizer):
    """The iOS SDK forwards backend payloads with their snake_case keys."""

    platform = Platform.IOS

    def native_key(self, field_name: str) -> str:
        return field_name


class AndroidResponseNormalizer(ResponseNormalizer):
    """The Android SDK serialises its Kotlin models, so keys are camelCase."""

    platform = Platform.ANDROID

    def native_key(self, field_name: str) -> str:
        head, *rest = field_name.split("_")
        return head + "".join(part.capitalize() for part in rest)


_NORMALIZERS: Dict[Platform, Type[ResponseNormalizer]] = {
    Platform.IOS: IosResponseNormalizer,
    Platform.ANDROID: AndroidResponseNormalizer,
}


def normalizer_for(platform: Platform) -> ResponseNormalizer:
    try:
        normalizer_cls = _NORMALIZERS[Platform(platform)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported platform: {platform!r}") from exc
    logger.debug("Using %s for platform %s", normalizer_cls.__name__, normalizer_cls.platform.value)
    return normalizer_cls()


def load_json(raw: Any, label: str = "response") -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 in {label}.", payload=raw) from exc
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON in {label}: {exc.msg}", payload=raw) from exc
    if isinstance(raw, (dict, list)):
        return raw
    raise DecodeError(f"Unexpected {label} payload type {type(raw).__name__}.", payload=raw)


def _expect_object(data: Any, label: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {label}; got {type(data).__name__}.", payload=data)
    return data


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    values = data.get(key)
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DecodeError(f"Field '{key}' must be a list of strings.", payload=data)
    return values


def _string_field(data: Dict[str, Any], *keys: str) -> str:
    """First present key; blank strings are kept, absent keys read as ""."""
    for key in keys:
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if not isinstance(value, str):
            raise DecodeError(f"Field '{key}' must be a string; got {type(value).__name__}.", payload=data)
        return value
    return ""


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise DecodeError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _coerce_amount(value: Any, label: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Invalid {label}: {value!r}", payload=value) from exc
    if amount < 0:
        raise DecodeError(f"{label.capitalize()} must be >= 0; got {amount}.", payload=value)
    return amount


def _build_model(model_type: Type[M], payload: Dict[str, Any], raw: Any) -> M:
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise DecodeError(f"{model_type.__name__} validation failed: {exc}", payload=raw) from exc
