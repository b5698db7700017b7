"""
Product pricing service.

Prices product drafts and catalogs against the current pricing settings.
Extracted from routes and the CLI for:
- Better testability
- One place that resolves which settings apply
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import pandas as pd

from landed_pricing.pricing.price_calculator import (
    CalculationResult,
    InvalidConfiguration,
    InvalidInput,
    PricingConfiguration,
)
from landed_pricing.pricing.pricing_engine import PricingEngine
from landed_pricing.pricing.settings_provider import resolve_pricing_configuration
from landed_pricing.storage.settings_store import SettingsStore
from landed_pricing.utils.config_loader import AppConfig
from landed_pricing.utils.logging_config import pricing_context
from landed_pricing.webapp.exceptions import ConfigurationError, InvalidPriceInputError

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Fill in the price and weight to calculate the final price"


@dataclass
class PricedProduct:
    """A product record with its calculated price."""

    record: dict[str, Any]
    result: CalculationResult
    config_source: str


@dataclass
class RepricingResult:
    """Result of repricing a catalog."""

    results_df: pd.DataFrame
    config_source: str
    stats: dict[str, int] = field(default_factory=dict)


class ProductPricingService:
    """
    Service for pricing products with the stored pricing settings.

    Handles:
    - Settings resolution (override, stored, fallback defaults)
    - Single product drafts from the product form
    - Catalog repricing from spreadsheets
    """

    def __init__(self, store: SettingsStore, app_config: AppConfig | None = None):
        """
        Initialize pricing service.

        Args:
            store: Pricing settings store.
            app_config: Application configuration (fallback defaults, columns).
        """
        self.store = store
        self.app_config = app_config or AppConfig()
        self.logger = logging.getLogger(f"{__name__}.ProductPricingService")

    def resolve_configuration(
        self,
        override: Mapping[str, Any] | None = None,
    ) -> tuple[PricingConfiguration, str]:
        """Resolve the pricing configuration to use."""
        return resolve_pricing_configuration(self.store, self.app_config, override)

    def price_product(self, draft: Mapping[str, Any]) -> PricedProduct:
        """
        Price a product draft.

        Args:
            draft: Product fields; must include ``sourcing_price_yuan`` and
                ``weight_kg``. Other fields are passed through.

        Returns:
            PricedProduct with ``final_price_xof`` set on the record.

        Raises:
            InvalidPriceInputError: If price or weight is missing or not positive.
            ConfigurationError: If the resolved settings are unusable.
        """
        price = draft.get("sourcing_price_yuan")
        weight = draft.get("weight_kg")
        if price is None or weight is None:
            missing = "sourcing_price_yuan" if price is None else "weight_kg"
            raise InvalidPriceInputError(MISSING_INPUT_MESSAGE, field=missing)

        configuration, source = self.resolve_configuration()
        engine = PricingEngine(configuration)

        try:
            result = engine.calculate(price, weight)
        except InvalidInput as e:
            raise InvalidPriceInputError(f"{MISSING_INPUT_MESSAGE}: {e.message}", field=e.field) from e
        except InvalidConfiguration as e:
            raise ConfigurationError(e.message, details={"field": e.field, "source": source}) from e

        record = dict(draft)
        record["final_price_xof"] = result.final_price
        with pricing_context(config_source=source, product=record.get("name")):
            self.logger.info(f"Priced product: ¥{price} / {weight} kg -> {result.final_price} FCFA")
        return PricedProduct(record=record, result=result, config_source=source)

    def reprice_catalog(self, df: pd.DataFrame) -> RepricingResult:
        """
        Reprice every product in a catalog DataFrame.

        Args:
            df: Catalog with sourcing price and weight columns (names from config).

        Returns:
            RepricingResult with priced DataFrame and counts.

        Raises:
            KeyError: If a required column is missing.
            ConfigurationError: If the resolved settings are unusable.
        """
        columns = self.app_config.batch
        configuration, source = self.resolve_configuration()
        engine = PricingEngine(configuration)

        with pricing_context(config_source=source, rows=len(df)):
            self.logger.info(f"Repricing {len(df)} products")
            try:
                priced = engine.calculate_prices_batch(
                    df,
                    price_column=columns.sourcing_price,
                    weight_column=columns.weight,
                    output_column=columns.final_price,
                )
            except InvalidConfiguration as e:
                raise ConfigurationError(e.message, details={"field": e.field, "source": source}) from e

        priced_count = int(priced[columns.final_price].notna().sum())
        stats = {
            "total": len(priced),
            "priced": priced_count,
            "skipped": len(priced) - priced_count,
        }
        self.logger.info(f"Repricing complete: {stats}")
        return RepricingResult(results_df=priced, config_source=source, stats=stats)
