"""
Custom exceptions for the pricing web application.

Provides a hierarchy of exceptions for clean error handling in routes.
"""

from typing import Optional, Dict, Any


class AppException(Exception):
    """Base exception for application errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AppException):
    """Raised when input validation fails."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class InvalidPriceInputError(ValidationError):
    """Raised when a sourcing price or weight cannot be priced."""

    error_code = "INVALID_INPUT"

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, details)


class InvalidPricingConfigError(ValidationError):
    """Raised when a pricing configuration supplied with a request is invalid."""

    error_code = "INVALID_CONFIGURATION"

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, details)


class SettingsValidationError(ValidationError):
    """Raised when submitted pricing settings are out of range."""

    error_code = "SETTINGS_VALIDATION_ERROR"

    def __init__(self, message: str, field: str):
        super().__init__(message, details={"field": field})


class ConfigurationError(AppException):
    """Raised when stored configuration is unusable."""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class SettingsStorageError(AppException):
    """Raised when pricing settings cannot be saved."""

    status_code = 503
    error_code = "SETTINGS_STORAGE_ERROR"
