"""Error handling helpers for application code calling the billing client."""
from typing import Any, Dict
import logging

from billing_bridge.integrations.errors import BillingError, PlatformInvocationError

logger = logging.getLogger(__name__)


class BillingErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Billing operation failed: %s", exc, exc_info=True)
        if isinstance(exc, BillingError):
            native = exc.cause if isinstance(exc.cause, PlatformInvocationError) else None
            return {
                "message": exc.message,
                "code": exc.code,
                "fallback": True,
                "metadata": {
                    "error": exc.to_dict(),
                    "native_code": native.code if native else None,
                    "context": context or {},
                },
            }
        return {
            "message": "An internal error occurred while talking to the store. Please try again later.",
            "code": "internal_error",
            "fallback": True,
            "metadata": {"error": str(exc), "context": context or {}},
        }
