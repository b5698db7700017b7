"""
Pricing settings provider module.

Resolves the pricing configuration from a manual override, the settings
store, or the configured fallback defaults.
"""

import logging
from typing import Any, Mapping, Optional, Tuple

from landed_pricing.pricing.price_calculator import PricingConfiguration
from landed_pricing.storage.settings_store import SettingsStore, SettingsStoreError
from landed_pricing.utils.config_loader import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_PRICING_CONFIGURATION = PricingConfiguration(
    exchange_rate=90.0,
    shipping_per_kg=9000,
    customs_percent=10,
    margin_percent=25,
)


def get_default_configuration(config: Optional[AppConfig] = None) -> PricingConfiguration:
    """
    Get the fallback pricing configuration.

    Args:
        config: Application configuration. Uses built-in defaults if None.

    Returns:
        PricingConfiguration: Fallback configuration.
    """
    defaults = getattr(config, "pricing_defaults", None)
    if defaults is None:
        return DEFAULT_PRICING_CONFIGURATION
    return PricingConfiguration(
        exchange_rate=defaults.exchange_rate,
        shipping_per_kg=defaults.shipping_per_kg,
        customs_percent=defaults.customs_percent,
        margin_percent=defaults.margin_percent,
    )


def resolve_pricing_configuration(
    store: SettingsStore,
    config: Optional[AppConfig] = None,
    manual_override: Optional[Mapping[str, Any]] = None,
) -> Tuple[PricingConfiguration, str]:
    """
    Get the pricing configuration to calculate with.

    Priority:
    1. manual_override (if provided)
    2. Stored settings
    3. Fallback defaults (nothing stored, or the store failed)

    Args:
        store: Settings store to read from.
        config: Application configuration holding the fallback defaults.
        manual_override: Optional configuration fields for this call only.

    Returns:
        Tuple of (configuration, source) where source is one of:
            - "manual_override"
            - "stored"
            - "default"
            - "default (store failed)"

    Raises:
        InvalidConfiguration: If manual_override is missing a field.
    """
    if manual_override is not None:
        logger.info("Using manual pricing configuration override")
        return PricingConfiguration.from_mapping(manual_override), "manual_override"

    default = get_default_configuration(config)

    try:
        settings = store.load()
    except SettingsStoreError as e:
        logger.warning(f"Loading pricing settings failed ({e}), falling back to defaults")
        return default, "default (store failed)"

    if settings is None:
        logger.warning("No pricing settings stored, using defaults")
        return default, "default"

    return settings.to_configuration(), "stored"
