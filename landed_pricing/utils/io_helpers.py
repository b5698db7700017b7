"""
I/O helper functions.

Reads and writes product sheets (CSV or Excel) for catalog repricing.
"""

import logging
from pathlib import Path

import pandas as pd


logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


def read_product_sheet(file_path: Path) -> pd.DataFrame:
    """
    Read a product sheet into a DataFrame.

    The format is chosen from the file extension (.csv or .xlsx).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file format is unsupported.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    logger.debug(f"Reading product sheet: {file_path}")

    if suffix == ".csv":
        return pd.read_csv(file_path)
    if suffix == ".xlsx":
        return pd.read_excel(file_path, engine="openpyxl")
    raise ValueError(f"Unsupported file format: {suffix} (expected one of {SUPPORTED_SUFFIXES})")


def write_product_sheet(df: pd.DataFrame, file_path: Path) -> Path:
    """
    Write a DataFrame to a product sheet, creating parent directories.

    Raises:
        ValueError: If the file format is unsupported.
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {suffix} (expected one of {SUPPORTED_SUFFIXES})")

    file_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Writing product sheet: {file_path}")

    if suffix == ".csv":
        df.to_csv(file_path, index=False)
    else:
        df.to_excel(file_path, index=False, engine="openpyxl")

    return file_path


def default_output_path(input_path: Path, output_dir: Path) -> Path:
    """Build the output path for a repriced sheet: ``<output_dir>/<stem>_priced<suffix>``."""
    input_path = Path(input_path)
    return Path(output_dir) / f"{input_path.stem}_priced{input_path.suffix}"
