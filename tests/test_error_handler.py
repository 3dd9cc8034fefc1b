from billing_bridge.error_handler import BillingErrorHandler
from billing_bridge.integrations.errors import DecodeError, PlatformInvocationError, PurchaseError


def test_handle_exception_returns_payload():
    eh = BillingErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["fallback"] is True
    assert "internal error" in out["message"].lower()
    assert "boom" in out["metadata"]["error"]


def test_handle_billing_error_reports_native_code():
    native = PlatformInvocationError("user_cancelled", "Purchase cancelled")
    try:
        raise PurchaseError.wrap("Purchase", native) from native
    except PurchaseError as exc:
        out = BillingErrorHandler().handle_exception(exc, context={"product": "p1"})

    assert out["code"] == "user_cancelled"
    assert out["message"] == "Purchase failed: Purchase cancelled"
    assert out["metadata"]["native_code"] == "user_cancelled"
    assert out["metadata"]["error"]["type"] == "PurchaseError"
    assert out["metadata"]["context"] == {"product": "p1"}


def test_decode_error_is_a_value_error():
    err = DecodeError("bad shape", payload={"x": 1})
    assert isinstance(err, ValueError)
    assert err.to_dict()["code"] == "decode_error"
    assert err.payload == {"x": 1}
