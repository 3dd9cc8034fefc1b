"""
Real HTTP Platform Invoker.

Used when a native bridge process (the host app exposing the store SDK over a
local HTTP endpoint) is configured.

Protocol:
- POST {base_url}{invoke_path}/{method} with {"method": ..., "arguments": {...}}
- 2xx {"result": <raw>}                            -> raw result
- {"error": {"code", "message", "details"}} or 4xx/5xx -> PlatformInvocationError
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

import httpx

from billing_bridge.integrations.contracts.interfaces import PlatformInvoker
from billing_bridge.integrations.errors import PlatformInvocationError

logger = logging.getLogger(__name__)


class HttpPlatformInvoker(PlatformInvoker):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        invoke_path: Optional[str] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("BILLING_BRIDGE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("BILLING_BRIDGE_TOKEN", "")
        self.invoke_path = "/" + (invoke_path or "/invoke").strip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def method_url(self, method: str) -> str:
        return f"{self.base_url}{self.invoke_path}/{method}"

    async def invoke(self, method: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        if not self.base_url:
            raise PlatformInvocationError(
                "bridge_not_configured",
                "BILLING_BRIDGE_URL is not configured.",
                {"method": method},
            )

        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload: Dict[str, Any] = {"method": method, "arguments": dict(args or {})}
        url = self.method_url(method)
        logger.debug("Invoking bridge method %s at %s", method, url)

        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            try:
                response = await client.post(url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                raise PlatformInvocationError(
                    "bridge_unreachable",
                    f"Native bridge request failed: {exc}",
                    {"method": method, "url": url},
                ) from exc

        body = _parse_body(response, method)
        error = body.get("error")
        if error or response.is_error:
            raise _invocation_error(error, response.status_code, method)
        return body.get("result")


def _parse_body(response: httpx.Response, method: str) -> Dict[str, Any]:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError as exc:
        raise PlatformInvocationError(
            "invalid_bridge_response",
            f"Native bridge returned a non-JSON body (HTTP {response.status_code}).",
            {"method": method, "status_code": response.status_code},
        ) from exc
    if not isinstance(body, dict):
        raise PlatformInvocationError(
            "invalid_bridge_response",
            "Native bridge response must be a JSON object.",
            {"method": method, "status_code": response.status_code},
        )
    return body


def _invocation_error(error: Any, status_code: int, method: str) -> PlatformInvocationError:
    if not isinstance(error, dict):
        error = {"message": str(error)} if error else {}
    native_details = error.get("details")
    if isinstance(native_details, dict):
        details = dict(native_details)
    else:
        details = {"native_details": native_details} if native_details is not None else {}
    details.setdefault("method", method)
    details.setdefault("status_code", status_code)
    return PlatformInvocationError(
        str(error.get("code") or f"http_{status_code}"),
        str(error.get("message") or ""),
        details,
    )
