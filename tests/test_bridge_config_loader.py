"""Tests for bridge configuration, platform detection and client wiring."""

import pytest
from pydantic import ValidationError

from billing_bridge.bootstrap import create_billing_client, create_invoker
from billing_bridge.integrations.clients import HttpPlatformInvoker, MockPlatformInvoker
from billing_bridge.integrations.contracts.interfaces import Platform
from billing_bridge.utils.bridge_config_loader import BridgeConfig, apply_env_overrides, load_bridge_config
from billing_bridge.utils.platform_detection import detect_platform


CONFIG_YAML = """
platform: ios
site: mobile-test
publishable_api_key: pk_test
ios_sdk_key: ios-key
bridge:
  transport: http
  base_url: http://bridge.local
  timeout_seconds: 5
"""


def test_load_bridge_config_from_yaml(tmp_path):
    path = tmp_path / "bridge_config.yml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    cfg = load_bridge_config(path)

    assert cfg.platform == "ios"
    assert cfg.site == "mobile-test"
    assert cfg.android_sdk_key == ""
    assert cfg.bridge.transport == "http"
    assert cfg.bridge.timeout_seconds == 5.0
    assert cfg.empty_purchase_is_error is False


def test_env_overrides_file_values(tmp_path, monkeypatch):
    path = tmp_path / "bridge_config.yml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    monkeypatch.setenv("BILLING_SITE", "prod-site")
    monkeypatch.setenv("BILLING_BRIDGE_TIMEOUT", "12.5")

    cfg = load_bridge_config(path)

    assert cfg.site == "prod-site"
    assert cfg.bridge.timeout_seconds == 12.5
    assert cfg.bridge.base_url == "http://bridge.local"


def test_apply_env_overrides_ignores_blank_values():
    merged = apply_env_overrides({"site": "keep"}, environ={"BILLING_SITE": "", "BILLING_PLATFORM": "android"})
    assert merged["site"] == "keep"
    assert merged["platform"] == "android"


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bridge_config(tmp_path / "missing.yml")


def test_invalid_config_raises_validation_error(tmp_path):
    path = tmp_path / "bridge_config.yml"
    path.write_text("platform: windows\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_bridge_config(path)


@pytest.mark.parametrize(
    "preference, system, expected",
    [
        ("ios", "linux", Platform.IOS),
        ("android", "ios", Platform.ANDROID),
        ("auto", "ios", Platform.IOS),
        ("auto", "android", Platform.ANDROID),
        ("auto", "linux", Platform.ANDROID),
        (None, "darwin", Platform.ANDROID),
    ],
)
def test_detect_platform(preference, system, expected):
    assert detect_platform(preference, system=system) is expected


def test_create_invoker_selects_transport():
    mock_cfg = BridgeConfig(platform="ios")
    http_cfg = BridgeConfig(bridge={"transport": "http", "base_url": "http://bridge.local"})

    mock = create_invoker(mock_cfg)
    assert isinstance(mock, MockPlatformInvoker)
    assert mock.platform is Platform.IOS
    assert isinstance(create_invoker(http_cfg), HttpPlatformInvoker)


@pytest.mark.asyncio
async def test_create_billing_client_configures_from_config():
    cfg = BridgeConfig(
        platform="android",
        site="mobile-test",
        publishable_api_key="pk_test",
        android_sdk_key="android-key",
        empty_purchase_is_error=True,
    )
    invoker = MockPlatformInvoker(platform=Platform.ANDROID)
    client = create_billing_client(cfg, invoker=invoker)

    await client.configure_from(cfg)

    assert client.platform is Platform.ANDROID
    assert client.empty_purchase_is_error is True
    assert invoker.calls_to("authenticate") == [{"site": "mobile-test", "apiKey": "pk_test", "sdkKey": "android-key"}]
