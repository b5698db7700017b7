"""
Pricing module.

Landed-cost price calculation (CNY sourcing price + weight -> XOF retail
price). Settings resolution lives in ``landed_pricing.pricing.settings_provider``.
"""

from landed_pricing.pricing.price_calculator import (
    CalculationResult,
    CostBreakdown,
    InvalidConfiguration,
    InvalidInput,
    PricingConfiguration,
    PricingError,
    calculate_final_price,
)
from landed_pricing.pricing.pricing_engine import PricingEngine

__all__ = [
    "CalculationResult",
    "CostBreakdown",
    "InvalidConfiguration",
    "InvalidInput",
    "PricingConfiguration",
    "PricingError",
    "calculate_final_price",
    "PricingEngine",
]
