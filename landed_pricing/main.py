"""
CLI entry point for the landed pricing tool.

Prices a single product from the command line, or reprices a whole product
sheet (CSV/Excel) with the stored pricing settings.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from landed_pricing.pricing.price_calculator import InvalidConfiguration, InvalidInput
from landed_pricing.pricing.pricing_engine import PricingEngine
from landed_pricing.services.pricing_service import ProductPricingService
from landed_pricing.storage.settings_store import SettingsStore
from landed_pricing.utils.config_loader import AppConfig, load_config, load_env
from landed_pricing.utils.io_helpers import (
    default_output_path,
    read_product_sheet,
    write_product_sheet,
)
from landed_pricing.utils.logging_config import setup_logging
from landed_pricing.webapp.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Landed-cost pricing tool (CNY sourcing price -> XOF retail price)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m landed_pricing.main --price 100 --weight 1
    python -m landed_pricing.main --input data/input/products.xlsx
    python -m landed_pricing.main --input products.csv --output priced.csv --dry-run
        """,
    )

    parser.add_argument("--price", "-p", type=float, help="Sourcing price in CNY")
    parser.add_argument("--weight", "-w", type=float, help="Shipment weight in kg")

    parser.add_argument(
        "--input", "-i",
        type=Path,
        help="Product sheet to reprice (.csv or .xlsx)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Path for the repriced sheet (default: <output_dir>/<input>_priced)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--settings", "-s",
        type=Path,
        help="Path to pricing settings file (default: from config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run without writing output file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    if args.input is None and (args.price is None or args.weight is None):
        parser.error("either --input or both --price and --weight are required")
    return args


def run_single(service: ProductPricingService, price: float, weight: float) -> int:
    """Print the price breakdown for one product."""
    configuration, source = service.resolve_configuration()
    engine = PricingEngine(configuration)
    try:
        summary = engine.get_pricing_summary(price, weight)
    except InvalidInput as e:
        print(f"\n✗ Error: {e.message}")
        return 1
    except InvalidConfiguration as e:
        print(f"\n✗ Invalid pricing settings ({source}): {e.message}")
        return 1

    print("\n" + "=" * 60)
    print(f"PRICE CALCULATION (settings: {source})")
    print("=" * 60)
    print(summary)
    print("=" * 60 + "\n")
    return 0


def run_batch(service: ProductPricingService, args: argparse.Namespace, config: AppConfig) -> int:
    """Reprice a product sheet."""
    try:
        products_df = read_product_sheet(args.input)
    except FileNotFoundError:
        print(f"\n✗ Error: Input file not found: {args.input}")
        return 1
    except ValueError as e:
        print(f"\n✗ Error: {e}")
        return 1
    logger.info(f"Loaded {len(products_df)} products from {args.input}")

    try:
        result = service.reprice_catalog(products_df)
    except KeyError as e:
        print(f"\n✗ Error: {e.args[0]}")
        return 1
    except ConfigurationError as e:
        print(f"\n✗ Invalid pricing settings: {e.message}")
        return 1

    print("\n" + "=" * 60)
    print("REPRICING SUMMARY")
    print("=" * 60)
    print(f"  Settings used: {result.config_source}")
    print(f"  Total products: {result.stats['total']}")
    print(f"  Priced: {result.stats['priced']}")
    print(f"  Skipped (missing price/weight): {result.stats['skipped']}")

    if args.dry_run:
        print("\n[DRY RUN] - No output file written")
    else:
        output_path = args.output or default_output_path(args.input, Path(config.paths.output_dir))
        try:
            write_product_sheet(result.results_df, output_path)
        except ValueError as e:
            print(f"\n✗ Error: {e}")
            return 1
        print(f"\n✓ Repriced sheet written: {output_path}")

    print("=" * 60 + "\n")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        int: Exit code.
    """
    load_env()
    args = parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.logging, verbose=args.verbose)

    settings_path = args.settings or config.paths.settings_file
    service = ProductPricingService(SettingsStore(str(settings_path)), config)

    try:
        if args.input is not None:
            return run_batch(service, args, config)
        return run_single(service, args.price, args.weight)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
