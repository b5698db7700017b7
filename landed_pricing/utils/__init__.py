"""
Utility modules.

Common helpers for file I/O, logging, and configuration loading.
"""

from landed_pricing.utils.config_loader import AppConfig, load_config, load_env
from landed_pricing.utils.io_helpers import read_product_sheet, write_product_sheet
from landed_pricing.utils.logging_config import setup_logging

__all__ = [
    "load_config",
    "load_env",
    "AppConfig",
    "setup_logging",
    "read_product_sheet",
    "write_product_sheet",
]
