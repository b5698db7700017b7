"""
Tests for the pricing engine module.
"""

import pandas as pd
import pytest

from landed_pricing.pricing.price_calculator import (
    InvalidConfiguration,
    InvalidInput,
    PricingConfiguration,
)
from landed_pricing.pricing.pricing_engine import BREAKDOWN_COLUMNS, PricingEngine


class TestPricingEngine:
    """Tests for PricingEngine class."""

    @pytest.fixture
    def config(self) -> PricingConfiguration:
        """Create test configuration."""
        return PricingConfiguration(90.0, 9000, 10, 25)

    @pytest.fixture
    def engine(self, config: PricingConfiguration) -> PricingEngine:
        """Create test pricing engine."""
        return PricingEngine(config)

    def test_calculate(self, engine: PricingEngine) -> None:
        result = engine.calculate(100, 1)
        assert result.final_price == 24750

    def test_calculate_invalid_input_raises(self, engine: PricingEngine) -> None:
        with pytest.raises(InvalidInput):
            engine.calculate(0, 1)

    def test_get_pricing_summary(self, engine: PricingEngine) -> None:
        summary = engine.get_pricing_summary(50, 0.5)

        assert "¥50.00" in summary
        assert "Customs (10%): 900 FCFA" in summary
        assert "Margin (25%):  2500 FCFA" in summary
        assert "Final price: 12,400 FCFA" in summary


class TestPricingEnginePreview:
    """A preview is only shown once every input is valid."""

    @pytest.fixture
    def engine(self) -> PricingEngine:
        return PricingEngine(PricingConfiguration(90.0, 9000, 10, 25))

    def test_preview_valid(self, engine: PricingEngine) -> None:
        result = engine.preview(50, 0.5)
        assert result is not None
        assert result.final_price == 12400

    @pytest.mark.parametrize(
        "price,weight",
        [(None, 1), (100, None), (None, None), (0, 1), (100, 0), (-5, 1), ("abc", 1)],
    )
    def test_preview_gated(self, engine: PricingEngine, price, weight) -> None:
        assert engine.preview(price, weight) is None

    def test_preview_without_configuration(self) -> None:
        assert PricingEngine(None).preview(100, 1) is None

    def test_preview_with_invalid_configuration(self) -> None:
        engine = PricingEngine(PricingConfiguration(90.0, 9000, -10, 25))
        assert engine.preview(100, 1) is None


class TestPricingEngineBatch:
    """Tests for batch pricing of product DataFrames."""

    @pytest.fixture
    def engine(self) -> PricingEngine:
        return PricingEngine(PricingConfiguration(90.0, 9000, 10, 25))

    @pytest.fixture
    def products(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "name": ["Lamp", "Bag", "No price", "Negative"],
                "sourcing_price_yuan": [100, 50, None, -5],
                "weight_kg": [1, 0.5, 1, 2],
            }
        )

    def test_batch_prices_valid_rows(self, engine: PricingEngine, products: pd.DataFrame) -> None:
        result = engine.calculate_prices_batch(products)

        assert result["final_price_xof"].tolist()[:2] == [24750, 12400]
        assert pd.isna(result.loc[2, "final_price_xof"])
        assert pd.isna(result.loc[3, "final_price_xof"])

    def test_batch_adds_breakdown(self, engine: PricingEngine, products: pd.DataFrame) -> None:
        result = engine.calculate_prices_batch(products)

        for column in BREAKDOWN_COLUMNS:
            assert column in result.columns
        assert result.loc[1, "margin_amount"] == 2500.0

    def test_batch_without_breakdown(self, engine: PricingEngine, products: pd.DataFrame) -> None:
        result = engine.calculate_prices_batch(products, include_breakdown=False)
        assert "landed_cost" not in result.columns

    def test_batch_does_not_modify_input(self, engine: PricingEngine, products: pd.DataFrame) -> None:
        engine.calculate_prices_batch(products)
        assert "final_price_xof" not in products.columns

    def test_batch_custom_columns(self, engine: PricingEngine) -> None:
        df = pd.DataFrame({"price": [100], "kg": [1]})
        result = engine.calculate_prices_batch(
            df, price_column="price", weight_column="kg", output_column="xof"
        )
        assert result.loc[0, "xof"] == 24750

    def test_batch_missing_column(self, engine: PricingEngine) -> None:
        with pytest.raises(KeyError):
            engine.calculate_prices_batch(pd.DataFrame({"sourcing_price_yuan": [1]}))

    def test_batch_without_configuration_raises(self, products: pd.DataFrame) -> None:
        with pytest.raises(InvalidConfiguration):
            PricingEngine(None).calculate_prices_batch(products)
