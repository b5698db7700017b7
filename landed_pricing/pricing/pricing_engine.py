"""
Pricing engine module.

Wraps the landed-cost calculator for the places prices are shown:
form previews, catalog spreadsheets and text summaries.
"""

import logging
from typing import Any

import pandas as pd

from landed_pricing.pricing.price_calculator import (
    CalculationResult,
    PricingConfiguration,
    PricingError,
    calculate_final_price,
)

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = [
    "purchase_cost",
    "transport_cost",
    "landed_cost",
    "customs_amount",
    "margin_amount",
]


class PricingEngine:
    """
    Engine for calculating XOF retail prices from CNY sourcing prices.

    Attributes:
        configuration: Pricing configuration, or None while it is loading.
    """

    def __init__(self, configuration: PricingConfiguration | None) -> None:
        self.configuration = configuration

    def calculate(self, sourcing_price: float, weight_kg: float) -> CalculationResult:
        """
        Calculate the price of one unit.

        Raises:
            InvalidInput: If price or weight is not a positive number.
            InvalidConfiguration: If the configuration is missing or invalid.
        """
        return calculate_final_price(sourcing_price, weight_kg, self.configuration)

    def preview(self, sourcing_price: Any, weight_kg: Any) -> CalculationResult | None:
        """
        Calculate a price for display, or None if it cannot be shown yet.

        Nothing is shown until both price and weight are positive numbers
        and the configuration is loaded.
        """
        if self.configuration is None:
            return None
        try:
            return self.calculate(sourcing_price, weight_kg)
        except PricingError as e:
            logger.debug(f"Price preview unavailable: {e}")
            return None

    def calculate_prices_batch(
        self,
        df: pd.DataFrame,
        price_column: str = "sourcing_price_yuan",
        weight_column: str = "weight_kg",
        output_column: str = "final_price_xof",
        include_breakdown: bool = True,
    ) -> pd.DataFrame:
        """
        Calculate XOF prices for a batch of products.

        Args:
            df: DataFrame with sourcing prices and weights.
            price_column: Column name containing CNY prices.
            weight_column: Column name containing weights in kg.
            output_column: Column name for calculated XOF prices.
            include_breakdown: Whether to add the cost breakdown columns.

        Returns:
            pd.DataFrame: Copy of df with price columns added. Rows with
            invalid inputs get None.

        Raises:
            KeyError: If price_column or weight_column is missing.
            InvalidConfiguration: If the configuration is missing or invalid.
        """
        missing = [c for c in (price_column, weight_column) if c not in df.columns]
        if missing:
            raise KeyError(f"Missing columns: {missing}")

        df = df.copy()
        results: list[CalculationResult | None] = []
        skipped = 0

        for price, weight in zip(df[price_column], df[weight_column]):
            if pd.isna(price) or pd.isna(weight):
                results.append(None)
                skipped += 1
                continue
            try:
                results.append(self.calculate(float(price), float(weight)))
            except (TypeError, ValueError):
                results.append(None)
                skipped += 1
            except PricingError as e:
                if e.field not in ("sourcing_price", "weight_kg"):
                    raise
                results.append(None)
                skipped += 1

        df[output_column] = [r.final_price if r else None for r in results]
        if include_breakdown:
            for column in BREAKDOWN_COLUMNS:
                df[column] = [
                    float(getattr(r.breakdown, column)) if r else None for r in results
                ]

        if skipped:
            logger.warning(f"Skipped {skipped}/{len(df)} rows with missing or invalid price/weight")
        logger.info(f"Priced {len(df) - skipped} products")

        return df

    def get_pricing_summary(self, sourcing_price: float, weight_kg: float) -> str:
        """
        Get a human-readable summary of price calculation.

        Args:
            sourcing_price: CNY price to summarize.
            weight_kg: Weight in kg.

        Returns:
            str: Formatted pricing breakdown.
        """
        result = self.calculate(sourcing_price, weight_kg)
        cfg = self.configuration
        b = result.breakdown
        return "\n".join(
            [
                f"Purchase:  ¥{float(sourcing_price):.2f} × {cfg.exchange_rate} = {b.purchase_cost:.0f} FCFA",
                f"Transport: {float(weight_kg)} kg × {cfg.shipping_per_kg} = {b.transport_cost:.0f} FCFA",
                f"Landed:    {b.landed_cost:.0f} FCFA",
                f"Customs ({cfg.customs_percent}%): {b.customs_amount:.0f} FCFA",
                f"Margin ({cfg.margin_percent}%):  {b.margin_amount:.0f} FCFA",
                f"Final price: {result.final_price:,} FCFA",
            ]
        )
