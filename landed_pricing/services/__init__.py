"""
Services layer for landed pricing.

Contains business logic extracted from routes for better testability.
"""

from landed_pricing.services.pricing_service import (
    PricedProduct,
    ProductPricingService,
    RepricingResult,
)

__all__ = ["PricedProduct", "ProductPricingService", "RepricingResult"]
