"""
FastAPI routes for the pricing API.

Handles:
- Reading and saving pricing settings
- Price calculation with cost breakdown
- Display-gated price preview for product forms
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends

from landed_pricing.pricing.price_calculator import (
    CalculationResult,
    InvalidConfiguration,
    InvalidInput,
    calculate_final_price,
)
from landed_pricing.pricing.pricing_engine import PricingEngine
from landed_pricing.pricing.settings_provider import resolve_pricing_configuration
from landed_pricing.storage import settings_store
from landed_pricing.storage.settings_store import SettingsStore, SettingsStoreError
from landed_pricing.utils.config_loader import AppConfig, load_config, load_env
from landed_pricing.webapp.exceptions import (
    InvalidPriceInputError,
    InvalidPricingConfigError,
    SettingsStorageError,
    SettingsValidationError,
)
from landed_pricing.webapp.schemas import (
    CalculationRequest,
    CalculationResponse,
    PreviewResponse,
    SettingsResponse,
    SettingsUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Dependency Injection
# ============================================================================

@lru_cache()
def get_app_config() -> AppConfig:
    """
    Get application config (cached).

    Use as a FastAPI dependency to avoid repeated config loading.
    Clear cache with get_app_config.cache_clear() if config changes.
    """
    load_env()
    return load_config()


def get_settings_store(config: AppConfig = Depends(get_app_config)) -> SettingsStore:
    """Get the pricing settings store for the configured path."""
    return settings_store.get_store(config.paths.settings_file)


def build_calculation_response(result: CalculationResult, source: str) -> CalculationResponse:
    """Convert a calculation result into the API response model."""
    return CalculationResponse(config_source=source, **result.to_dict())


def parse_form_number(value: Optional[str]) -> Optional[float]:
    """Parse a number typed into the product form; blank or malformed text gives None."""
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


# ============================================================================
# Settings
# ============================================================================

@router.get("/api/settings", response_model=SettingsResponse)
async def read_settings(
    store: SettingsStore = Depends(get_settings_store),
    config: AppConfig = Depends(get_app_config),
) -> SettingsResponse:
    """Get the pricing settings calculations currently run with."""
    configuration, source = resolve_pricing_configuration(store, config)
    stored = store.load() if source == "stored" else None
    return SettingsResponse(
        settings=configuration.to_dict(),
        source=source,
        updated_at=stored.updated_at if stored else None,
    )


@router.put("/api/settings", response_model=SettingsResponse)
async def save_settings(
    update: SettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    """Create or update the stored pricing settings."""
    try:
        saved = store.update(**update.dict())
    except settings_store.SettingsValidationError as e:
        raise SettingsValidationError(str(e), field=e.field) from e
    except SettingsStoreError as e:
        logger.error(f"Saving pricing settings failed: {e}")
        raise SettingsStorageError(str(e)) from e

    logger.info(f"Pricing settings updated: {update.dict()}")
    return SettingsResponse(
        settings=saved.to_configuration().to_dict(),
        source="stored",
        updated_at=saved.updated_at,
    )


# ============================================================================
# Calculation
# ============================================================================

@router.post("/api/calculate", response_model=CalculationResponse)
async def calculate(
    request: CalculationRequest,
    store: SettingsStore = Depends(get_settings_store),
    config: AppConfig = Depends(get_app_config),
) -> CalculationResponse:
    """Calculate the final price and cost breakdown for one unit."""
    override = request.config_override.dict() if request.config_override else None
    configuration, source = resolve_pricing_configuration(store, config, override)

    try:
        result = calculate_final_price(request.sourcing_price, request.weight_kg, configuration)
    except InvalidInput as e:
        raise InvalidPriceInputError(e.message, field=e.field) from e
    except InvalidConfiguration as e:
        raise InvalidPricingConfigError(e.message, field=e.field) from e

    return build_calculation_response(result, source)


@router.get("/api/calculate/preview", response_model=PreviewResponse)
async def preview(
    sourcing_price: Optional[str] = None,
    weight_kg: Optional[str] = None,
    store: SettingsStore = Depends(get_settings_store),
    config: AppConfig = Depends(get_app_config),
) -> PreviewResponse:
    """Preview a price while the product form is being filled in."""
    configuration, source = resolve_pricing_configuration(store, config)
    result = PricingEngine(configuration).preview(
        parse_form_number(sourcing_price), parse_form_number(weight_kg)
    )
    if result is None:
        return PreviewResponse(available=False)
    return PreviewResponse(available=True, result=build_calculation_response(result, source))
