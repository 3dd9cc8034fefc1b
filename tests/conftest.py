"""Pytest fixtures for billing client, normalizer and invoker tests."""

import json

import pytest

from billing_bridge.client import BillingClient
from billing_bridge.integrations.clients.mocks.platform import MockPlatformInvoker
from billing_bridge.integrations.contracts.interfaces import Platform
from billing_bridge.utils.bridge_config_loader import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def clean_billing_env(monkeypatch):
    """Keep developer BILLING_* variables out of the tests."""
    for name in list(ENV_OVERRIDES) + ["BILLING_BRIDGE_TOKEN"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def android_invoker():
    return MockPlatformInvoker(platform=Platform.ANDROID)


@pytest.fixture
def ios_invoker():
    return MockPlatformInvoker(platform=Platform.IOS)


@pytest.fixture
def android_client(android_invoker):
    return BillingClient(android_invoker, platform=Platform.ANDROID)


@pytest.fixture
def ios_client(ios_invoker):
    return BillingClient(ios_invoker, platform=Platform.IOS)


@pytest.fixture
def subscription_payloads():
    """The same logical subscription as each platform SDK reports it."""
    ios = {
        "cb_subscription": {
            "subscription_id": "sub_123",
            "customer_id": "cust_9",
            "plan_id": "premium_monthly",
            "status": "active",
            "plan_amount": 4.99,
            "activated_at": 1700000000,
            "current_term_start": 1700000000,
            "current_term_end": 1702592000,
        }
    }
    android = {
        "cb_subscription": {
            "subscriptionId": "sub_123",
            "customerId": "cust_9",
            "planId": "premium_monthly",
            "status": "active",
            "planAmount": 4.99,
            "activatedAt": 1700000000,
            "currentTermStart": 1700000000,
            "currentTermEnd": 1702592000,
        }
    }
    return {Platform.IOS: ios, Platform.ANDROID: android}


@pytest.fixture
def product_json():
    """Build a product payload the way getProducts returns each element."""

    def build(product_id: str, price: float = 4.99, **extra) -> str:
        body = {
            "productId": product_id,
            "productPrice": price,
            "productPriceString": f"${price}",
            "productTitle": product_id.replace("_", " ").title(),
            "currencyCode": "USD",
        }
        body.update(extra)
        return json.dumps(body)

    return build
