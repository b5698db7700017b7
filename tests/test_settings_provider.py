"""
Tests for pricing configuration resolution.
"""

from pathlib import Path

import pytest

from landed_pricing.pricing.price_calculator import InvalidConfiguration, PricingConfiguration
from landed_pricing.pricing.settings_provider import (
    DEFAULT_PRICING_CONFIGURATION,
    get_default_configuration,
    resolve_pricing_configuration,
)
from landed_pricing.storage.settings_store import PricingSettings, SettingsStore
from landed_pricing.utils.config_loader import AppConfig, PricingDefaultsConfig


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(str(tmp_path / "pricing_settings.json"))


class TestDefaultConfiguration:
    """Tests for the fallback configuration."""

    def test_builtin_default(self) -> None:
        assert DEFAULT_PRICING_CONFIGURATION == PricingConfiguration(90.0, 9000, 10, 25)

    def test_default_without_app_config(self) -> None:
        assert get_default_configuration() == DEFAULT_PRICING_CONFIGURATION

    def test_default_from_app_config(self) -> None:
        config = AppConfig(pricing_defaults=PricingDefaultsConfig(exchange_rate=100.0))
        assert get_default_configuration(config).exchange_rate == 100.0


class TestResolvePricingConfiguration:
    """Tests for resolve_pricing_configuration priority order."""

    def test_nothing_stored_uses_default(self, store: SettingsStore) -> None:
        configuration, source = resolve_pricing_configuration(store)

        assert configuration == DEFAULT_PRICING_CONFIGURATION
        assert source == "default"

    def test_stored_settings(self, store: SettingsStore) -> None:
        store.save(PricingSettings(exchange_rate_yuan_xof=95.0, margin_percentage=30))

        configuration, source = resolve_pricing_configuration(store)

        assert source == "stored"
        assert configuration.exchange_rate == 95.0
        assert configuration.margin_percent == 30

    def test_store_failure_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("not json", encoding="utf-8")

        configuration, source = resolve_pricing_configuration(SettingsStore(str(path)))

        assert configuration == DEFAULT_PRICING_CONFIGURATION
        assert source == "default (store failed)"

    def test_store_failure_uses_configured_default(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{}", encoding="utf-8")
        config = AppConfig(pricing_defaults=PricingDefaultsConfig(margin_percent=40))

        configuration, _ = resolve_pricing_configuration(SettingsStore(str(path)), config)

        assert configuration.margin_percent == 40

    def test_manual_override_wins(self, store: SettingsStore) -> None:
        store.save(PricingSettings())
        override = {"exchange_rate": 80, "shipping_per_kg": 7000, "customs_percent": 5, "margin_percent": 20}

        configuration, source = resolve_pricing_configuration(store, manual_override=override)

        assert source == "manual_override"
        assert configuration == PricingConfiguration(80, 7000, 5, 20)

    def test_incomplete_override_raises(self, store: SettingsStore) -> None:
        with pytest.raises(InvalidConfiguration):
            resolve_pricing_configuration(store, manual_override={"exchange_rate": 80})
