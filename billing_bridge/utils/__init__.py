"""
Utility modules for the billing bridge
"""
from .bridge_config_loader import BridgeConfig, InvokerConfig, load_bridge_config
from .platform_detection import detect_platform

__all__ = [
    'BridgeConfig',
    'InvokerConfig',
    'load_bridge_config',
    'detect_platform',
]
