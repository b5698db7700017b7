"""
Tests for configuration loading, sheet I/O and logging helpers.
"""

import json
import logging
from dataclasses import fields
from pathlib import Path

import pandas as pd
import pytest
import yaml

from landed_pricing.utils.config_loader import SETTINGS_PATH_ENV, AppConfig, LoggingConfig, load_config
from landed_pricing.utils.io_helpers import (
    default_output_path,
    read_product_sheet,
    write_product_sheet,
)
from landed_pricing.utils.logging_config import (
    PricingContextFilter,
    PricingJsonFormatter,
    pricing_context,
    setup_logging,
)


class TestLoadConfig:
    """Tests for load_config."""

    @pytest.fixture(autouse=True)
    def clear_settings_env(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_PATH_ENV, raising=False)

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.yaml")

        assert config == AppConfig()
        assert config.pricing_defaults.exchange_rate == 90.0
        assert config.pricing_defaults.shipping_per_kg == 9000

    def test_shipped_config_keys_are_all_read(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "config.yaml"
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        config = load_config(path)

        for section, values in raw.items():
            known = {f.name for f in fields(getattr(config, section))}
            assert set(values) <= known, f"unused keys in {section}: {set(values) - known}"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == AppConfig()

    def test_parses_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "\n".join(
                [
                    "paths:",
                    "  settings_file: custom/settings.json",
                    "pricing_defaults:",
                    "  exchange_rate: 88",
                    "  margin_percent: 30",
                    "batch:",
                    "  weight: poids",
                    "logging:",
                    "  level: DEBUG",
                    "  format: json",
                    "server:",
                    "  port: 9000",
                ]
            ),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.paths.settings_file == "custom/settings.json"
        assert config.pricing_defaults.exchange_rate == 88.0
        assert config.pricing_defaults.margin_percent == 30.0
        assert config.pricing_defaults.customs_percent == 10.0
        assert config.batch.weight == "poids"
        assert config.batch.sourcing_price == "sourcing_price_yuan"
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"
        assert config.server.port == 9000

    def test_settings_path_env_override(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv(SETTINGS_PATH_ENV, str(tmp_path / "env_settings.json"))

        config = load_config(tmp_path / "missing.yaml")

        assert config.paths.settings_file == str(tmp_path / "env_settings.json")


class TestProductSheets:
    """Tests for product sheet I/O."""

    @pytest.fixture
    def df(self) -> pd.DataFrame:
        return pd.DataFrame({"name": ["Lamp"], "sourcing_price_yuan": [100.0], "weight_kg": [1.0]})

    @pytest.mark.parametrize("suffix", [".csv", ".xlsx"])
    def test_write_and_read(self, df: pd.DataFrame, tmp_path: Path, suffix: str) -> None:
        path = write_product_sheet(df, tmp_path / "nested" / f"products{suffix}")

        loaded = read_product_sheet(path)

        assert loaded["name"].tolist() == ["Lamp"]
        assert loaded["sourcing_price_yuan"].tolist() == [100.0]

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_product_sheet(tmp_path / "missing.csv")

    def test_read_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "products.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            read_product_sheet(path)

    def test_write_unsupported_format(self, df: pd.DataFrame, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            write_product_sheet(df, tmp_path / "products.json")

    def test_default_output_path(self) -> None:
        path = default_output_path(Path("data/input/catalog.xlsx"), Path("data/output"))
        assert path == Path("data/output/catalog_priced.xlsx")


class TestLogging:
    """Tests for pricing-aware logging."""

    @pytest.fixture
    def restore_root_logger(self):
        root = logging.getLogger()
        level = root.level
        yield root
        for handler in root.handlers[:]:
            if any(isinstance(f, PricingContextFilter) for f in handler.filters):
                handler.close()
                root.removeHandler(handler)
        root.setLevel(level)

    @staticmethod
    def make_record(msg: str) -> logging.LogRecord:
        record = logging.makeLogRecord({"name": "landed_pricing.test", "levelname": "INFO", "msg": msg})
        PricingContextFilter().filter(record)
        return record

    def test_record_without_context(self) -> None:
        record = self.make_record("priced")

        assert record.config_source == "-"
        data = json.loads(PricingJsonFormatter().format(record))
        assert data["message"] == "priced"
        assert data["level"] == "INFO"
        assert data["logger"] == "landed_pricing.test"
        assert "config_source" not in data
        assert "pricing_context" not in data

    def test_context_fields_flattened_into_json(self) -> None:
        with pricing_context(config_source="stored", product="Desk lamp"):
            record = self.make_record("priced")

        assert record.config_source == "stored"
        data = json.loads(PricingJsonFormatter().format(record))
        assert data["config_source"] == "stored"
        assert data["product"] == "Desk lamp"
        assert "pricing_context" not in data

    def test_nested_context_merges_and_resets(self) -> None:
        with pricing_context(config_source="default"):
            with pricing_context(rows=3):
                inner = self.make_record("inner")
            outer = self.make_record("outer")
        after = self.make_record("after")

        assert inner.pricing_context == {"config_source": "default", "rows": 3}
        assert outer.pricing_context == {"config_source": "default"}
        assert after.pricing_context == {}

    def test_setup_logging_json_file(self, tmp_path: Path, restore_root_logger) -> None:
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(LoggingConfig(level="INFO", format="json", log_file=str(log_file)))

        with pricing_context(config_source="manual_override", product="Kettle"):
            logging.getLogger("landed_pricing.test").info("Priced product")
        for handler in restore_root_logger.handlers:
            handler.flush()

        entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        priced = [entry for entry in entries if entry["message"] == "Priced product"]
        assert len(priced) == 1
        assert priced[0]["config_source"] == "manual_override"
        assert priced[0]["product"] == "Kettle"

    def test_setup_logging_text_shows_source(self, tmp_path: Path, restore_root_logger) -> None:
        log_file = tmp_path / "app.log"
        setup_logging(LoggingConfig(level="WARNING", log_file=str(log_file)), verbose=True)

        assert restore_root_logger.level == logging.DEBUG
        with pricing_context(config_source="stored"):
            logging.getLogger("landed_pricing.test").debug("Repricing 2 products")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "[stored] Repricing 2 products" in log_file.read_text(encoding="utf-8")
