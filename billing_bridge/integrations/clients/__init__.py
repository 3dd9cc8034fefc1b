"""
Platform invoker clients.

- mocks/: in-memory invoker with seed payloads, no native layer required
- real_http/: invoker that forwards calls to a native bridge over HTTP

Both implement contracts.interfaces.PlatformInvoker. The choice between them is
made in ONE place: billing_bridge/bootstrap.py.
"""

from .mocks.platform import MockPlatformInvoker
from .real_http.platform_bridge import HttpPlatformInvoker

__all__ = ["HttpPlatformInvoker", "MockPlatformInvoker"]
