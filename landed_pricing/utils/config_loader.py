"""
Configuration loader module.

Loads application configuration from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SETTINGS_PATH_ENV = "PRICING_SETTINGS_PATH"


@dataclass
class PathsConfig:
    """File path configuration."""

    settings_file: str = "data/settings/pricing_settings.json"
    output_dir: str = "data/output"


@dataclass
class PricingDefaultsConfig:
    """Fallback pricing settings used when none are stored."""

    exchange_rate: float = 90.0
    shipping_per_kg: float = 9000
    customs_percent: float = 10
    margin_percent: float = 25


@dataclass
class BatchColumnsConfig:
    """Column names for spreadsheet repricing."""

    sourcing_price: str = "sourcing_price_yuan"
    weight: str = "weight_kg"
    final_price: str = "final_price_xof"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "text"
    log_file: str | None = None


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all configuration sections into a single object.
    """

    paths: PathsConfig = field(default_factory=PathsConfig)
    pricing_defaults: PricingDefaultsConfig = field(default_factory=PricingDefaultsConfig)
    batch: BatchColumnsConfig = field(default_factory=BatchColumnsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_env(env_file: Path = Path(".env")) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Path to .env file.
    """
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from: {env_file}")
    else:
        logger.debug(f"No .env file found at: {env_file}")


def load_config(config_file: Path = Path("config/config.yaml")) -> AppConfig:
    """
    Load application configuration from YAML file.

    Args:
        config_file: Path to configuration YAML file.

    Returns:
        AppConfig: Loaded configuration object.

    Raises:
        yaml.YAMLError: If config file is invalid.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_file}. Using defaults.")
        config = AppConfig()
    else:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        config = _parse_config(raw_config) if raw_config else AppConfig()
        logger.info(f"Loaded configuration from: {config_file}")

    settings_override = get_env_var(SETTINGS_PATH_ENV)
    if settings_override:
        config.paths.settings_file = settings_override

    return config


def _parse_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse raw YAML dict into AppConfig dataclass.

    Args:
        raw: Raw dictionary from YAML file.

    Returns:
        AppConfig: Parsed configuration object.
    """
    defaults = AppConfig()

    paths_raw = raw.get("paths") or {}
    paths = PathsConfig(
        settings_file=paths_raw.get("settings_file", defaults.paths.settings_file),
        output_dir=paths_raw.get("output_dir", defaults.paths.output_dir),
    )

    pricing_raw = raw.get("pricing_defaults") or {}
    pricing_defaults = PricingDefaultsConfig(
        exchange_rate=float(pricing_raw.get("exchange_rate", 90.0)),
        shipping_per_kg=float(pricing_raw.get("shipping_per_kg", 9000)),
        customs_percent=float(pricing_raw.get("customs_percent", 10)),
        margin_percent=float(pricing_raw.get("margin_percent", 25)),
    )

    batch_raw = raw.get("batch") or {}
    batch = BatchColumnsConfig(
        sourcing_price=batch_raw.get("sourcing_price", defaults.batch.sourcing_price),
        weight=batch_raw.get("weight", defaults.batch.weight),
        final_price=batch_raw.get("final_price", defaults.batch.final_price),
    )

    logging_raw = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_raw.get("level", "INFO"),
        format=logging_raw.get("format", "text"),
        log_file=logging_raw.get("log_file"),
    )

    server_raw = raw.get("server") or {}
    server = ServerConfig(
        host=server_raw.get("host", defaults.server.host),
        port=int(server_raw.get("port", defaults.server.port)),
    )

    return AppConfig(
        paths=paths,
        pricing_defaults=pricing_defaults,
        batch=batch,
        logging=logging_config,
        server=server,
    )


def get_env_var(key: str, default: str | None = None) -> str | None:
    """
    Get an environment variable with optional default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(key, default)
