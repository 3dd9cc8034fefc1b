"""Pick the native platform the billing client talks to."""

import logging
import sys
from typing import Optional

from billing_bridge.integrations.contracts.interfaces import Platform

logger = logging.getLogger(__name__)


def detect_platform(preference: Optional[str] = "auto", system: Optional[str] = None) -> Platform:
    """
    Explicit "ios"/"android" wins. Otherwise use sys.platform, which reports
    "ios" and "android" on mobile CPython builds; anything else is Android.
    """
    choice = (preference or "auto").strip().lower()
    if choice != "auto":
        return Platform(choice)

    system = (system or sys.platform).lower()
    if system == "ios":
        platform = Platform.IOS
    else:
        platform = Platform.ANDROID
    logger.debug("Detected platform %s from sys.platform=%s", platform.value, system)
    return platform
