"""
Client wiring.

The selection of mock vs real HTTP invoker happens here and nowhere else.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from typing import Optional

from billing_bridge.client import BillingClient
from billing_bridge.integrations.clients import HttpPlatformInvoker, MockPlatformInvoker
from billing_bridge.integrations.contracts.interfaces import Platform, PlatformInvoker
from billing_bridge.utils.bridge_config_loader import BridgeConfig, load_bridge_config
from billing_bridge.utils.platform_detection import detect_platform

logger = logging.getLogger(__name__)


def create_invoker(config: BridgeConfig, platform: Optional[Platform] = None) -> PlatformInvoker:
    platform = platform or detect_platform(config.platform)
    bridge = config.bridge
    if bridge.transport == "http":
        logger.info("Using HTTP bridge invoker at %s", bridge.base_url)
        return HttpPlatformInvoker(
            base_url=bridge.base_url,
            api_key=os.getenv(bridge.api_key_env, ""),
            invoke_path=bridge.invoke_path,
            timeout_seconds=bridge.timeout_seconds,
        )
    logger.info("Using mock bridge invoker")
    return MockPlatformInvoker(platform=platform)


def create_billing_client(
    config: Optional[BridgeConfig] = None,
    invoker: Optional[PlatformInvoker] = None,
) -> BillingClient:
    config = config or load_bridge_config()
    platform = detect_platform(config.platform)
    return BillingClient(
        invoker or create_invoker(config, platform),
        platform=platform,
        empty_purchase_is_error=config.empty_purchase_is_error,
    )
