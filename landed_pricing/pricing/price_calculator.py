"""
Landed-cost price calculator.

Converts a sourcing price (CNY) and a shipment weight into a local retail
price (XOF) with a full cost breakdown.

Formula:
    landed   = P_cny × R + W_kg × S
    customs  = landed × C / 100
    raw      = (landed + customs) × (1 + M / 100)
    final    = ceil(raw / 50) × 50
Where:
- R = exchange rate (XOF per CNY)
- S = freight cost per kilogram (XOF)
- C = customs duty percentage
- M = margin percentage

The reported margin is the realized one, ``final - (landed + customs)``, so
the breakdown always reconciles against the rounded final price.
"""

import math
import numbers
from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Mapping

# Final prices are rounded up to a multiple of this amount (XOF).
NICE_PRICE_STEP = Decimal("50")

# Working precision for price arithmetic, wide enough that Decimal inputs
# with many fractional digits are not rounded mid-calculation.
PRICE_PRECISION = 60

HUNDRED = Decimal("100")

# Persisted column name -> configuration field name
SETTINGS_COLUMN_ALIASES = {
    "exchange_rate_yuan_xof": "exchange_rate",
    "shipping_price_per_kg": "shipping_per_kg",
    "customs_percentage": "customs_percent",
    "margin_percentage": "margin_percent",
}


class PricingError(Exception):
    """Base exception for price calculation errors."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class InvalidInput(PricingError):
    """Raised when the sourcing price or weight is not a positive finite number."""


class InvalidConfiguration(PricingError):
    """Raised when a pricing configuration field is missing, negative or non-finite."""


def _to_decimal(value: Any) -> Decimal | None:
    """Convert a number to Decimal, or None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (numbers.Real, Decimal)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        if isinstance(value, numbers.Rational) and not isinstance(value, numbers.Integral):
            # Fractions have no decimal str() form
            with localcontext() as ctx:
                ctx.prec = PRICE_PRECISION
                result = Decimal(value.numerator) / Decimal(value.denominator)
        else:
            result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


@dataclass(frozen=True)
class PricingConfiguration:
    """
    Pricing settings consumed by the calculator.

    Attributes:
        exchange_rate: XOF per 1 CNY.
        shipping_per_kg: Freight cost per kilogram (XOF).
        customs_percent: Customs duty rate applied to the landed cost.
        margin_percent: Margin rate applied on top of the duty-inclusive cost.
    """

    exchange_rate: float
    shipping_per_kg: float
    customs_percent: float
    margin_percent: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PricingConfiguration":
        """
        Build a configuration from a dict.

        Accepts either the field names or the persisted settings column names
        (``exchange_rate_yuan_xof``, ``shipping_price_per_kg``, ...).

        Raises:
            InvalidConfiguration: If a field is missing.
        """
        if data is None:
            raise InvalidConfiguration("Pricing configuration is missing")

        values: dict[str, Any] = {}
        for column, name in SETTINGS_COLUMN_ALIASES.items():
            if name in data:
                values[name] = data[name]
            elif column in data:
                values[name] = data[column]
            else:
                raise InvalidConfiguration(
                    f"Pricing configuration is missing '{name}'", field=name
                )
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CostBreakdown:
    """Cost components of a calculated price, all in XOF."""

    purchase_cost: Decimal
    transport_cost: Decimal
    landed_cost: Decimal
    customs_amount: Decimal
    margin_amount: Decimal


@dataclass(frozen=True)
class CalculationResult:
    """Final retail price and the breakdown that produced it."""

    final_price: int
    breakdown: CostBreakdown
    with_customs: Decimal
    selling_price_raw: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "final_price": self.final_price,
            "breakdown": {
                key: float(value) for key, value in asdict(self.breakdown).items()
            },
            "with_customs": float(self.with_customs),
            "selling_price_raw": float(self.selling_price_raw),
        }


def validate_configuration(config: PricingConfiguration | None) -> dict[str, Decimal]:
    """
    Check a configuration and return its fields as Decimals.

    Raises:
        InvalidConfiguration: If config is None or a field is not a
            non-negative finite number.
    """
    if config is None:
        raise InvalidConfiguration("Pricing configuration is missing")

    fields = {}
    for name in ("exchange_rate", "shipping_per_kg", "customs_percent", "margin_percent"):
        raw = getattr(config, name, None)
        value = _to_decimal(raw)
        if value is None:
            raise InvalidConfiguration(
                f"Invalid pricing configuration: {name}={raw!r} is not a finite number",
                field=name,
                value=raw,
            )
        if value < 0:
            raise InvalidConfiguration(
                f"Invalid pricing configuration: {name}={raw!r} must not be negative",
                field=name,
                value=raw,
            )
        fields[name] = value
    return fields


def _validate_input(name: str, raw: Any) -> Decimal:
    value = _to_decimal(raw)
    if value is None:
        raise InvalidInput(f"{name} must be a finite number, got {raw!r}", field=name, value=raw)
    if value <= 0:
        raise InvalidInput(f"{name} must be greater than 0, got {raw!r}", field=name, value=raw)
    return value


def round_nice_price(price: Decimal) -> int:
    """
    Round a price up to the next multiple of 50.

    Prices already on a multiple of 50 are left unchanged.
    """
    steps, remainder = divmod(price, NICE_PRICE_STEP)
    if remainder > 0:
        steps += 1
    return int(steps) * int(NICE_PRICE_STEP)


def calculate_final_price(
    sourcing_price: float,
    weight_kg: float,
    config: PricingConfiguration,
) -> CalculationResult:
    """
    Calculate the retail price of one unit.

    Args:
        sourcing_price: Unit price in CNY.
        weight_kg: Shipment weight of the unit in kilograms.
        config: Pricing configuration.

    Returns:
        CalculationResult: Final price (multiple of 50) and cost breakdown.

    Raises:
        InvalidInput: If sourcing_price or weight_kg is not a positive finite number.
        InvalidConfiguration: If config is missing or has an invalid field.
    """
    price = _validate_input("sourcing_price", sourcing_price)
    weight = _validate_input("weight_kg", weight_kg)
    cfg = validate_configuration(config)

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION

        purchase_cost = price * cfg["exchange_rate"]
        transport_cost = weight * cfg["shipping_per_kg"]
        landed_cost = purchase_cost + transport_cost

        customs_amount = landed_cost * (cfg["customs_percent"] / HUNDRED)
        with_customs = landed_cost + customs_amount

        selling_price_raw = with_customs * (1 + cfg["margin_percent"] / HUNDRED)
        final_price = round_nice_price(selling_price_raw)
        margin_amount = final_price - with_customs

    return CalculationResult(
        final_price=final_price,
        breakdown=CostBreakdown(
            purchase_cost=purchase_cost,
            transport_cost=transport_cost,
            landed_cost=landed_cost,
            customs_amount=customs_amount,
            margin_amount=margin_amount,
        ),
        with_customs=with_customs,
        selling_price_raw=selling_price_raw,
    )
