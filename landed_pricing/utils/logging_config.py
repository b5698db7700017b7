"""
Logging setup for the pricing tools.

Records carry the pricing context they were emitted under: which settings
were used (stored, default, manual override), and which product or catalog
was being priced. Text logs show the settings source as a prefix; JSON logs
get every context field as a top-level key.
"""

import contextvars
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from pythonjsonlogger import jsonlogger

from landed_pricing.utils.config_loader import LoggingConfig

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(config_source)s] %(message)s"
JSON_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"

_pricing_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "pricing_context", default={}
)


@contextmanager
def pricing_context(**fields: Any) -> Iterator[None]:
    """
    Tag every record logged inside the block with pricing fields.

    Nested blocks add to the enclosing context.

    Example:
        with pricing_context(config_source="stored", product="Desk lamp"):
            logger.info("Priced product")
    """
    token = _pricing_context.set({**_pricing_context.get(), **fields})
    try:
        yield
    finally:
        _pricing_context.reset(token)


class PricingContextFilter(logging.Filter):
    """Copy the active pricing context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _pricing_context.get()
        record.pricing_context = context
        record.config_source = context.get("config_source", "-")
        return True


class PricingJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that flattens the pricing context into the output."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # The filter's attributes arrive as extras; replace them with the flat fields
        log_record.pop("config_source", None)
        log_record.update(log_record.pop("pricing_context", None) or {})


def setup_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """
    Configure the root logger from the ``logging`` config section.

    Args:
        config: Level, format ("text" or "json") and optional log file.
        verbose: Force DEBUG level regardless of the configured one.
    """
    level = "DEBUG" if verbose else config.level
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    if config.format.lower() == "json":
        formatter = PricingJsonFormatter(JSON_FORMAT)
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        log_file = Path(config.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    context_filter = PricingContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.info(f"Logging configured: level={level}, format={config.format}")
