"""
Billing error taxonomy.

Every failure surfaced by the billing client is a BillingError. Operation errors
(AuthConfigurationError, ProductLookupError, ...) are raised *from* the underlying
PlatformInvocationError or DecodeError, so the native code/message is never lost.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BillingError(Exception):
    """Base class for every error raised by the billing bridge."""

    default_code = "billing_error"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
        if isinstance(self.cause, BillingError):
            payload["cause"] = self.cause.to_dict()
        return payload


class PlatformInvocationError(BillingError):
    """The native layer (or the bridge in front of it) rejected an invocation."""

    default_code = "platform_error"

    def __init__(
        self,
        code: str,
        message: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or f"Platform invocation failed ({code})", code=code, details=details)


class DecodeError(BillingError, ValueError):
    """A native response did not have the expected JSON shape."""

    default_code = "decode_error"

    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class OperationError(BillingError):
    """Failure of a client operation; the underlying error is chained as __cause__."""

    @classmethod
    def wrap(cls, action: str, exc: BillingError) -> "OperationError":
        return cls(f"{action} failed: {exc.message}", code=exc.code, details=exc.details)


class AuthConfigurationError(OperationError):
    default_code = "auth_configuration_error"


class ProductLookupError(OperationError):
    default_code = "product_lookup_error"


class PurchaseError(OperationError):
    default_code = "purchase_error"


class SubscriptionQueryError(OperationError):
    default_code = "subscription_query_error"


class CatalogQueryError(OperationError):
    default_code = "catalog_query_error"
