"""
Local Storage - Load Layer

Pure functions for local file storage operations.
Handles Parquet, CSV and JSON files.
"""

import polars as pl
import polars.selectors as cs
import glob
import os
from datetime import date
from pathlib import Path
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)


def _ensure_parent(filepath: str) -> None:
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    _ensure_parent(filepath)
    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_csv(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to CSV file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to CSV: {filepath}")

    _ensure_parent(filepath)
    df.write_csv(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file as a list of records

    JSON has no NaN, so NaN values are written as null.

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    _ensure_parent(filepath)

    nan_counts = {
        col: int(df.get_column(col).is_nan().sum())
        for col in df.select(cs.float()).columns
    }
    nan_counts = {col: count for col, count in nan_counts.items() if count > 0}
    if nan_counts:
        logger.warning(f"Writing NaN values as null in JSON output: {nan_counts}")

    df.with_columns(cs.float().fill_nan(None)).write_json(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_table(df: pl.DataFrame, filepath: Union[str, Path]) -> str:
    """
    Save DataFrame, choosing the format from the file suffix

    Args:
        df: DataFrame to save
        filepath: Destination ending in .parquet, .csv or .json

    Returns:
        str: Path to saved file
    """
    filepath = str(filepath)
    suffix = Path(filepath).suffix.lower()

    if suffix in (".parquet", ".pq"):
        return save_parquet(df, filepath)
    elif suffix == ".csv":
        return save_csv(df, filepath)
    elif suffix == ".json":
        return save_json(df, filepath)
    else:
        raise ValueError(f"Unsupported file type: {suffix or filepath!r}")


def default_output_path(source: Union[str, Path], output_dir: str = "output") -> str:
    """
    Build the dated output path for a rescaled table

    Args:
        source: Input path or URL
        output_dir: Output directory

    Returns:
        str: <output_dir>/rescaled_<stem>_<YYYY-MM-DD>.parquet
    """
    stem = Path(str(source).split("?", 1)[0]).stem or "table"
    today = date.today().strftime("%Y-%m-%d")
    return os.path.join(output_dir, f"rescaled_{stem}_{today}.parquet")


def file_exists(filepath: str) -> bool:
    """
    Check if file exists

    Args:
        filepath: Path to file

    Returns:
        bool: True if file exists
    """
    return os.path.exists(filepath)


def get_latest_file(pattern: str, directory: str = "output") -> Optional[str]:
    """
    Get the latest file matching a pattern

    Args:
        pattern: File pattern to match
        directory: Directory to search

    Returns:
        Optional[str]: Path to latest file or None
    """
    search_pattern = os.path.join(directory, pattern)
    files = glob.glob(search_pattern)

    if not files:
        return None

    # Return the most recently modified file
    return max(files, key=os.path.getmtime)
