"""
Data Validators - Transform Layer

Pure functions for validating rescale inputs and outputs.
"""

import polars as pl
from typing import Dict, Any, Sequence
import logging

logger = logging.getLogger(__name__)


def validate_numeric_columns(df: pl.DataFrame, columns: Sequence[str]) -> bool:
    """
    Validate that columns exist and are numeric

    Args:
        df: DataFrame to check
        columns: Column names that must be numeric

    Returns:
        bool: True if valid, raises exception if invalid
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise ValueError(f"Columns not found: {missing}")

    non_numeric = {
        col: str(df.schema[col]) for col in columns if not df.schema[col].is_numeric()
    }
    if non_numeric:
        raise ValueError(f"Non-numeric columns not supported: {non_numeric}")

    return True


def validate_unit_interval(
    df: pl.DataFrame, columns: Sequence[str], tolerance: float = 1e-9
) -> bool:
    """
    Validate rescaled columns lie inside [0, 1]

    Nulls and NaN values are skipped.

    Args:
        df: Rescaled DataFrame
        columns: Columns to check
        tolerance: Allowed floating-point slack on either bound

    Returns:
        bool: True if valid, raises exception if invalid
    """
    validate_numeric_columns(df, columns)

    for col in columns:
        # NaN sorts above every number in polars comparisons
        values = df.get_column(col).cast(pl.Float64).fill_nan(None)
        out_of_range = ((values < -tolerance) | (values > 1 + tolerance)).sum()
        if out_of_range > 0:
            raise ValueError(
                f"Column '{col}' has {out_of_range} values outside [0, 1]"
            )

    logger.info(f"Unit interval validation passed for {len(columns)} columns")
    return True


def validate_data_quality(df: pl.DataFrame) -> Dict[str, Any]:
    """
    Validate data quality and return quality metrics

    Args:
        df: DataFrame to validate

    Returns:
        Dict: Quality metrics; issues are logged, never raised
    """
    from .transformers import find_constant_columns

    logger.info("Validating data quality")

    quality_metrics = {
        "total_records": df.height,
        "null_counts": {},
        "nan_counts": {},
        "constant_columns": find_constant_columns(df),
        "data_types": df.schema,
    }

    for column in df.columns:
        series = df.get_column(column)
        quality_metrics["null_counts"][column] = series.null_count()
        if series.dtype.is_float():
            quality_metrics["nan_counts"][column] = int(series.is_nan().sum())

    # Log quality issues
    if df.height == 0:
        logger.warning("DataFrame has no rows")

    for column, null_count in quality_metrics["null_counts"].items():
        if null_count > 0:
            logger.warning(f"Column '{column}' has {null_count} null values")

    for column, nan_count in quality_metrics["nan_counts"].items():
        if nan_count > 0:
            logger.warning(f"Column '{column}' has {nan_count} NaN values")

    for column in quality_metrics["constant_columns"]:
        logger.warning(f"Column '{column}' is constant, rescaling yields NaN")

    logger.info("Data quality validation completed")
    return quality_metrics
