"""
Pydantic models for request/response bodies of the pricing API.

Provides request validation with sensible defaults and constraints.
"""

from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, validator


class PricingConfigurationModel(BaseModel):
    """Pricing configuration supplied with a calculation request."""

    exchange_rate: float = Field(..., description="XOF per 1 CNY")
    shipping_per_kg: float = Field(..., description="Freight cost per kg (XOF)")
    customs_percent: float = Field(..., description="Customs duty percentage")
    margin_percent: float = Field(..., description="Margin percentage")


class CalculationRequest(BaseModel):
    """
    Request model for the calculate endpoint.

    Price and weight are checked by the calculator itself, so that
    non-positive values come back as INVALID_INPUT errors.
    """

    sourcing_price: float = Field(..., description="Unit price in CNY")
    weight_kg: float = Field(..., description="Shipment weight in kg")
    config_override: Optional[PricingConfigurationModel] = Field(
        None,
        description="Use this configuration instead of the stored settings"
    )

    class Config:
        """Pydantic config."""

        extra = "ignore"


class BreakdownModel(BaseModel):
    """Cost breakdown in XOF."""

    purchase_cost: float
    transport_cost: float
    landed_cost: float
    customs_amount: float
    margin_amount: float


class CalculationResponse(BaseModel):
    """Response model for the calculate endpoint."""

    final_price: int
    breakdown: BreakdownModel
    with_customs: float
    selling_price_raw: float
    config_source: str


class PreviewResponse(BaseModel):
    """Response model for the preview endpoint."""

    available: bool
    result: Optional[CalculationResponse] = None


class SettingsUpdate(BaseModel):
    """Request model for updating pricing settings."""

    exchange_rate_yuan_xof: float = Field(..., ge=1.0, description="XOF per 1 CNY")
    shipping_price_per_kg: float = Field(..., ge=1.0, description="Freight per kg (XOF)")
    customs_percentage: float = Field(..., ge=0.0, le=100.0)
    margin_percentage: float = Field(..., ge=0.0, le=100.0)

    @validator('exchange_rate_yuan_xof', 'shipping_price_per_kg')
    def must_be_finite(cls, v):
        """Reject infinite values."""
        if v != v or v in (float("inf"), float("-inf")):
            raise ValueError("must be a finite number")
        return v


class SettingsResponse(BaseModel):
    """Response model for the settings endpoints."""

    settings: Dict[str, Any]
    source: str
    updated_at: Optional[str] = None
