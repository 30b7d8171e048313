"""Configuration for jules-bridge.

Settings are read from ``JULES_BRIDGE_*`` environment variables with typed
defaults, so the CLI works without any configuration file.

Example:
    >>> from jules_bridge.config import BridgeSettings
    >>> settings = BridgeSettings()
    >>> settings.jules_api_base_url
    'https://jules.googleapis.com'
"""

from jules_bridge.config.settings import BridgeSettings, load_settings

__all__ = ["BridgeSettings", "load_settings"]
