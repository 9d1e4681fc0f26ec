"""Configuration package."""

from fundtracker.config.settings import (
    ConfettiSettings,
    Settings,
    StorageSettings,
    TrackerSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "ConfettiSettings",
    "Settings",
    "StorageSettings",
    "TrackerSettings",
    "get_settings",
    "validate_all_settings",
]
