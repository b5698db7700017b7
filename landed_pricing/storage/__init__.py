"""
Storage modules for data persistence.
"""

from landed_pricing.storage.settings_store import (
    PricingSettings,
    SettingsStore,
    SettingsStoreError,
    SettingsValidationError,
    get_store,
)

__all__ = [
    "PricingSettings",
    "SettingsStore",
    "SettingsStoreError",
    "SettingsValidationError",
    "get_store",
]
