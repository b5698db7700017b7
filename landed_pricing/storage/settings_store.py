"""
Settings storage module.

Persists the pricing settings edited by shop admins:
- Yuan to XOF exchange rate
- Freight price per kilogram
- Customs and margin percentages
"""

import json
import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from landed_pricing.pricing.price_calculator import PricingConfiguration

logger = logging.getLogger(__name__)

# Default path for settings file
DEFAULT_SETTINGS_PATH = "data/settings/pricing_settings.json"

PRICING_FIELDS = (
    "exchange_rate_yuan_xof",
    "shipping_price_per_kg",
    "customs_percentage",
    "margin_percentage",
)


class SettingsStoreError(Exception):
    """Raised when stored settings cannot be read or written."""


class SettingsValidationError(SettingsStoreError):
    """Raised when settings fail validation before being saved."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass
class PricingSettings:
    """Pricing settings stored persistently."""

    exchange_rate_yuan_xof: float = 90.0
    shipping_price_per_kg: float = 9000
    customs_percentage: float = 10
    margin_percentage: float = 25
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PricingSettings":
        """
        Create from dictionary.

        Raises:
            SettingsStoreError: If a pricing field is missing or not numeric.
        """
        try:
            return cls(
                exchange_rate_yuan_xof=float(data["exchange_rate_yuan_xof"]),
                shipping_price_per_kg=float(data["shipping_price_per_kg"]),
                customs_percentage=float(data["customs_percentage"]),
                margin_percentage=float(data["margin_percentage"]),
                updated_at=data.get("updated_at"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SettingsStoreError(f"Malformed pricing settings: {e}") from e

    def to_configuration(self) -> PricingConfiguration:
        """Convert to the configuration consumed by the price calculator."""
        return PricingConfiguration.from_mapping(self.to_dict())


def validate_settings(settings: PricingSettings) -> None:
    """
    Validate settings before they are saved.

    Raises:
        SettingsValidationError: If a field is not finite or is out of range.
    """
    for name in PRICING_FIELDS:
        if not math.isfinite(getattr(settings, name)):
            raise SettingsValidationError(f"{name} must be a finite number", field=name)

    if settings.exchange_rate_yuan_xof < 1:
        raise SettingsValidationError(
            "Exchange rate must be at least 1", field="exchange_rate_yuan_xof"
        )
    if settings.shipping_price_per_kg < 1:
        raise SettingsValidationError(
            "Shipping price per kg must be at least 1", field="shipping_price_per_kg"
        )
    for name in ("customs_percentage", "margin_percentage"):
        value = getattr(settings, name)
        if not 0 <= value <= 100:
            raise SettingsValidationError(f"{name} must be between 0 and 100", field=name)


class SettingsStore:
    """Manages persistent storage of pricing settings."""

    def __init__(self, settings_path: Optional[str] = None) -> None:
        """Initialize the settings store."""
        self.settings_path = Path(settings_path or DEFAULT_SETTINGS_PATH)
        self._settings: Optional[PricingSettings] = None

    def exists(self) -> bool:
        """Check if settings have been saved."""
        return self.settings_path.exists()

    def load(self) -> Optional[PricingSettings]:
        """
        Load settings from file.

        Returns:
            Stored settings, or None if none have been saved yet.

        Raises:
            SettingsStoreError: If the file cannot be read or parsed.
        """
        if self._settings is not None:
            return self._settings

        if not self.exists():
            return None

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise SettingsStoreError(f"Failed to load settings from {self.settings_path}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsStoreError(f"Settings file {self.settings_path} does not hold an object")

        self._settings = PricingSettings.from_dict(data)
        return self._settings

    def save(self, settings: PricingSettings) -> PricingSettings:
        """
        Validate and save settings, creating the file if needed.

        Raises:
            SettingsValidationError: If settings are out of range.
            SettingsStoreError: If the file cannot be written.
        """
        validate_settings(settings)
        settings.updated_at = datetime.now(timezone.utc).isoformat()

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(settings.to_dict(), f, indent=2)
        except OSError as e:
            raise SettingsStoreError(f"Failed to save settings to {self.settings_path}: {e}") from e

        self._settings = settings
        logger.info(f"Pricing settings saved to {self.settings_path}")
        return settings

    def update(self, **kwargs: Any) -> PricingSettings:
        """Update specific settings, starting from defaults if none are stored."""
        current = self.load() or PricingSettings()
        updated = PricingSettings(**current.to_dict())
        for key, value in kwargs.items():
            if key in PRICING_FIELDS:
                setattr(updated, key, float(value))
            else:
                logger.debug(f"Ignoring unknown settings field: {key}")

        return self.save(updated)

    def clear(self) -> None:
        """Delete stored settings."""
        self._settings = None
        if self.exists():
            self.settings_path.unlink()
            logger.info("Pricing settings cleared")


# Module-level singleton
_store: Optional[SettingsStore] = None


def get_store(settings_path: Optional[str] = None) -> SettingsStore:
    """Get or create the singleton store instance."""
    global _store
    if _store is None or (settings_path and Path(settings_path) != _store.settings_path):
        _store = SettingsStore(settings_path)
    return _store

