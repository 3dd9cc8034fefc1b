"""
Canonical billing records.

These are the only shapes application code sees. Both platform normalizers build
exactly these models, whatever field naming the native SDK used.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BillingRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ---------------------------------------------------------------------------
# Store products & purchases
# ---------------------------------------------------------------------------

class SubscriptionPeriod(BillingRecord):
    unit: str
    number_of_units: int = Field(default=1, ge=0)


class Product(BillingRecord):
    """A store product; two products with the same id are the same product."""

    id: str = Field(min_length=1)
    price: float = Field(ge=0)
    price_string: str = ""
    title: str = ""
    description: str = ""
    currency_code: str = ""
    subscription_period: Optional[SubscriptionPeriod] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("Product", self.id))


class PurchaseResult(BillingRecord):
    subscription_id: str
    plan_id: str
    status: str

    @classmethod
    def empty(cls, sentinel: str = "") -> "PurchaseResult":
        return cls(subscription_id=sentinel, plan_id=sentinel, status=sentinel)

    @property
    def is_empty(self) -> bool:
        return not (self.subscription_id or self.plan_id or self.status)


# ---------------------------------------------------------------------------
# Billing backend entities
# ---------------------------------------------------------------------------

class Subscription(BillingRecord):
    subscription_id: str = Field(min_length=1)
    customer_id: str = ""
    plan_id: str = ""
    status: str = ""
    plan_amount: Optional[float] = None
    activated_at: Optional[int] = None          # unix seconds
    current_term_start: Optional[int] = None
    current_term_end: Optional[int] = None


class Item(BillingRecord):
    id: str = Field(min_length=1)
    name: str = ""
    external_name: str = ""
    description: str = ""
    status: str = ""
    type: str = ""
    item_family_id: str = ""
    channel: str = ""
    is_giftable: bool = False
    is_shippable: bool = False
    enabled_for_checkout: bool = True
    enabled_in_portal: bool = True
    resource_version: Optional[int] = None
    updated_at: Optional[int] = None


class Plan(BillingRecord):
    id: str = Field(min_length=1)
    name: str = ""
    invoice_name: str = ""
    description: str = ""
    price: Optional[int] = None                 # minor currency units
    currency_code: str = ""
    period: Optional[int] = None
    period_unit: str = ""
    pricing_model: str = ""
    charge_model: str = ""
    free_quantity: int = 0
    trial_period: Optional[int] = None
    trial_period_unit: str = ""
    status: str = ""
    channel: str = ""
    taxable: bool = True
    enabled_in_portal: bool = True
    resource_version: Optional[int] = None
    updated_at: Optional[int] = None


class Entitlement(BillingRecord):
    subscription_id: str = ""
    feature_id: str = Field(min_length=1)
    feature_name: str = ""
    feature_description: str = ""
    feature_type: str = ""
    value: str = ""
    name: str = ""
    is_overridden: bool = False
    is_enabled: bool = True


# ---------------------------------------------------------------------------
# String containers
# ---------------------------------------------------------------------------

class ProductIdentifierList(BillingRecord):
    product_identifiers: Tuple[str, ...] = ()


class EntitlementList(BillingRecord):
    entitlements: Tuple[str, ...] = ()
