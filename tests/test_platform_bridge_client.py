"""Tests for the HTTP native bridge invoker."""

import json

import httpx
import pytest

from billing_bridge.client import BillingClient
from billing_bridge.integrations.clients.real_http.platform_bridge import HttpPlatformInvoker
from billing_bridge.integrations.contracts.interfaces import Platform
from billing_bridge.integrations.errors import (
    AuthConfigurationError,
    PlatformInvocationError,
    ProductLookupError,
)


def make_invoker(handler, **kwargs):
    return HttpPlatformInvoker(
        base_url="http://bridge.local/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_invoke_posts_method_and_arguments():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"result": '{"productIdentifiers": ["a"]}'})

    invoker = make_invoker(handler, api_key="secret")
    result = await invoker.invoke("retrieveProductIdentifiers", {"limit": "10"})

    assert result == '{"productIdentifiers": ["a"]}'
    assert seen["url"] == "http://bridge.local/invoke/retrieveProductIdentifiers"
    assert seen["body"] == {"method": "retrieveProductIdentifiers", "arguments": {"limit": "10"}}
    assert seen["auth"] == "Bearer secret"


@pytest.mark.asyncio
async def test_empty_body_means_no_result():
    invoker = make_invoker(lambda request: httpx.Response(204))
    assert await invoker.invoke("authenticate", {}) is None


@pytest.mark.asyncio
async def test_native_error_is_raised_with_code_and_details():
    def handler(request):
        return httpx.Response(
            200,
            json={"error": {"code": "2001", "message": "Invalid Sdk Key", "details": {"site": "x"}}},
        )

    with pytest.raises(PlatformInvocationError) as exc_info:
        await make_invoker(handler).invoke("authenticate", {})

    err = exc_info.value
    assert err.code == "2001"
    assert err.message == "Invalid Sdk Key"
    assert err.details["site"] == "x"
    assert err.details["method"] == "authenticate"


@pytest.mark.asyncio
async def test_http_error_status_without_error_body():
    with pytest.raises(PlatformInvocationError) as exc_info:
        await make_invoker(lambda request: httpx.Response(503)).invoke("getProducts", {})
    assert exc_info.value.code == "http_503"
    assert exc_info.value.details["status_code"] == 503


@pytest.mark.asyncio
async def test_non_json_body_is_an_invalid_bridge_response():
    with pytest.raises(PlatformInvocationError) as exc_info:
        await make_invoker(lambda request: httpx.Response(200, text="<html>")).invoke("getProducts", {})
    assert exc_info.value.code == "invalid_bridge_response"


@pytest.mark.asyncio
async def test_transport_failure_is_bridge_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PlatformInvocationError) as exc_info:
        await make_invoker(handler).invoke("getProducts", {})
    assert exc_info.value.code == "bridge_unreachable"


@pytest.mark.asyncio
async def test_missing_base_url_is_a_configuration_error():
    invoker = HttpPlatformInvoker(base_url="")
    with pytest.raises(PlatformInvocationError) as exc_info:
        await invoker.invoke("getProducts", {})
    assert exc_info.value.code == "bridge_not_configured"
    assert exc_info.value.details == {"method": "getProducts"}


@pytest.mark.asyncio
async def test_configure_without_bridge_url_raises_auth_configuration_error():
    client = BillingClient(HttpPlatformInvoker(base_url=""), platform=Platform.IOS)
    with pytest.raises(AuthConfigurationError) as exc_info:
        await client.configure("demo-site", "api-key", "sdk-key")
    assert exc_info.value.code == "bridge_not_configured"
    assert isinstance(exc_info.value.cause, PlatformInvocationError)


@pytest.mark.asyncio
async def test_client_over_http_bridge():
    calls = []

    def handler(request):
        calls.append(json.loads(request.content))
        product = {"productId": "premium_monthly", "productPrice": 4.99, "currencyCode": "USD"}
        return httpx.Response(200, json={"result": [json.dumps(product)]})

    client = BillingClient(make_invoker(handler), platform=Platform.IOS)
    products = await client.retrieve_products(["premium_monthly"])

    assert [p.id for p in products] == ["premium_monthly"]
    assert calls == [{"method": "getProducts", "arguments": {"productIDs": ["premium_monthly"]}}]


@pytest.mark.asyncio
async def test_client_wraps_bridge_failures():
    client = BillingClient(make_invoker(lambda request: httpx.Response(500)), platform=Platform.ANDROID)
    with pytest.raises(ProductLookupError) as exc_info:
        await client.retrieve_products(["premium_monthly"])
    assert isinstance(exc_info.value.cause, PlatformInvocationError)
