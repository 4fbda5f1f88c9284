"""Configuration module for WordTrail"""

from wordtrail.config.settings import (
    Settings,
    clear_settings_cache,
    get_settings,
    load_settings,
    override_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "load_settings",
    "clear_settings_cache",
    "override_settings",
]
