"""
Test Validators - Verify input and output checks for the rescale
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl
import pytest
from src.transformation.validators import (
    validate_numeric_columns,
    validate_unit_interval,
    validate_data_quality,
)
import logging

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def test_validate_numeric_columns_passes():
    df = pl.DataFrame({"a": [1, 2], "b": [0.5, 1.5], "c": ["x", "y"]})

    assert validate_numeric_columns(df, ["a", "b"]) is True


def test_validate_numeric_columns_missing_column():
    df = pl.DataFrame({"a": [1, 2]})

    with pytest.raises(ValueError, match="Columns not found"):
        validate_numeric_columns(df, ["a", "z"])


def test_validate_numeric_columns_non_numeric():
    df = pl.DataFrame({"a": [1, 2], "flag": [True, False]})

    with pytest.raises(ValueError, match="flag"):
        validate_numeric_columns(df, ["a", "flag"])


def test_validate_unit_interval_skips_missing_and_nan():
    df = pl.DataFrame({"x": [0.0, 0.5, None, float("nan"), 1.0]})

    assert validate_unit_interval(df, ["x"]) is True


def test_validate_unit_interval_allows_tolerance():
    df = pl.DataFrame({"x": [-1e-12, 1.0 + 1e-12]})

    assert validate_unit_interval(df, ["x"]) is True


def test_validate_unit_interval_rejects_out_of_range():
    df = pl.DataFrame({"x": [0.0, 0.4, 1.2], "y": [0.0, 1.0, 0.5]})

    with pytest.raises(ValueError, match="Column 'x' has 1 values outside"):
        validate_unit_interval(df, ["x", "y"])


def test_validate_data_quality_metrics():
    """Quality metrics report nulls, NaN values and constant columns"""
    print("🧪 Testing validate_data_quality()...")

    df = pl.DataFrame(
        {
            "name": ["a", None, "c"],
            "score": [1.0, float("nan"), None],
            "level": [3, 3, 3],
        }
    )

    metrics = validate_data_quality(df)

    assert metrics["total_records"] == 3
    assert metrics["null_counts"] == {"name": 1, "score": 1, "level": 0}
    assert metrics["nan_counts"] == {"score": 1}
    assert metrics["constant_columns"] == ["score", "level"]


def test_validate_data_quality_logs_warnings(caplog):
    df = pl.DataFrame({"x": [2, 2]})

    with caplog.at_level(logging.WARNING):
        validate_data_quality(df)

    assert "Column 'x' is constant" in caplog.text


def test_validate_data_quality_empty_frame():
    df = pl.DataFrame({"x": []}, schema={"x": pl.Float64})

    metrics = validate_data_quality(df)

    assert metrics["total_records"] == 0
    assert metrics["constant_columns"] == []
