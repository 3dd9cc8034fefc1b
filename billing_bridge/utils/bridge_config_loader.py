"""
Billing bridge configuration loader (site credentials, platform, invoker transport).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "bridge_config.yml"

# env var -> (section, key); section None means top level
ENV_OVERRIDES: Dict[str, tuple] = {
    "BILLING_PLATFORM": (None, "platform"),
    "BILLING_SITE": (None, "site"),
    "BILLING_PUBLISHABLE_API_KEY": (None, "publishable_api_key"),
    "BILLING_IOS_SDK_KEY": (None, "ios_sdk_key"),
    "BILLING_ANDROID_SDK_KEY": (None, "android_sdk_key"),
    "BILLING_BRIDGE_TRANSPORT": ("bridge", "transport"),
    "BILLING_BRIDGE_URL": ("bridge", "base_url"),
    "BILLING_BRIDGE_TIMEOUT": ("bridge", "timeout_seconds"),
}


class InvokerConfig(BaseModel):
    transport: Literal["mock", "http"] = "mock"
    base_url: str = "http://127.0.0.1:8765"
    invoke_path: str = "/invoke"
    timeout_seconds: float = Field(default=20.0, gt=0, le=300)
    api_key_env: str = "BILLING_BRIDGE_TOKEN"


class BridgeConfig(BaseModel):
    platform: Literal["auto", "ios", "android"] = "auto"
    site: str = ""
    publishable_api_key: str = ""
    ios_sdk_key: str = ""
    android_sdk_key: str = ""
    empty_purchase_is_error: bool = False
    bridge: InvokerConfig = Field(default_factory=InvokerConfig)


def load_bridge_config(config_path: Optional[Path] = None) -> BridgeConfig:
    """
    Load and validate the bridge configuration.

    Environment variables (see ENV_OVERRIDES) take precedence over the file.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValidationError: If the merged config doesn't match the schema
    """
    data: Dict[str, Any] = {}
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.warning("Bridge config %s not found, using defaults", config_path)
            config_path = None
    elif not Path(config_path).exists():
        raise FileNotFoundError(f"Bridge config file not found: {config_path}")

    if config_path is not None:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    data = apply_env_overrides(data)

    try:
        cfg = BridgeConfig(**data)
        logger.info("Loaded bridge config (platform=%s, transport=%s)", cfg.platform, cfg.bridge.transport)
        return cfg
    except ValidationError as e:
        logger.error("Bridge config validation failed: %s", e)
        raise


def apply_env_overrides(data: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    merged = dict(data)
    merged["bridge"] = dict(merged.get("bridge") or {})
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        target = merged[section] if section else merged
        target[key] = value
    return merged
