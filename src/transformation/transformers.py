"""
Data Transformers - Transform Layer

Pure functions that apply the range rescale across the columns of a table,
plus the per-column and per-group summaries used alongside it.
"""

import polars as pl
import polars.selectors as cs
import duckdb
from typing import List, Optional, Sequence, Union
from .rescale import rescale01_expr
from .schemas import SUMMARY_SCHEMA, SUPPORTED_AGGREGATIONS
from .validators import validate_numeric_columns
import logging

logger = logging.getLogger(__name__)


def numeric_columns(df: pl.DataFrame) -> List[str]:
    """
    Get numeric column names in table order

    Args:
        df: DataFrame to inspect

    Returns:
        List[str]: Names of numeric columns
    """
    return df.select(cs.numeric()).columns


def _defined_values(series: pl.Series) -> pl.Series:
    # NaN counts as missing for floats
    if series.dtype.is_float():
        series = series.fill_nan(None)
    return series.drop_nulls()


def _resolve_columns(
    df: pl.DataFrame, columns: Optional[Sequence[str]]
) -> List[str]:
    if columns is None:
        return numeric_columns(df)
    columns = list(columns)
    validate_numeric_columns(df, columns)
    return columns


def _group_columns(df: pl.DataFrame, by: Union[str, Sequence[str]]) -> List[str]:
    group_cols = [by] if isinstance(by, str) else list(by)
    missing = [col for col in group_cols if col not in df.columns]
    if missing:
        raise ValueError(f"Grouping columns not found: {missing}")
    return group_cols


def resolve_rescale_columns(
    df: pl.DataFrame,
    columns: Optional[Sequence[str]] = None,
    by: Optional[Union[str, Sequence[str]]] = None,
) -> List[str]:
    """
    Resolve and validate the columns a rescale will touch

    Args:
        df: Input DataFrame
        columns: Requested columns (default: every numeric column)
        by: Optional grouping column(s), never rescaled themselves

    Returns:
        List[str]: Numeric columns to rescale
    """
    columns = _resolve_columns(df, columns)
    if by is not None:
        group_cols = _group_columns(df, by)
        columns = [col for col in columns if col not in group_cols]
    return columns


def rescale_columns(
    df: pl.DataFrame,
    columns: Optional[Sequence[str]] = None,
    by: Optional[Union[str, Sequence[str]]] = None,
) -> pl.DataFrame:
    """
    Rescale columns of a DataFrame onto [0, 1]

    Each column is rescaled independently and replaced under its own name and
    position. Columns not listed are left untouched.

    Args:
        df: Input DataFrame
        columns: Columns to rescale (default: every numeric column)
        by: Optional grouping column(s); min/max are then taken per group

    Returns:
        pl.DataFrame: DataFrame with rescaled columns
    """
    columns = resolve_rescale_columns(df, columns, by)

    logger.info(f"Rescaling {len(columns)} columns to [0, 1] (by={by})")

    if not columns:
        logger.warning("No columns to rescale")
        return df

    exprs = [rescale01_expr(col) for col in columns]
    if by is not None:
        exprs = [expr.over(by) for expr in exprs]

    try:
        rescaled_df = df.with_columns(exprs)
    except Exception as e:
        logger.error(f"❌ Error rescaling columns {columns}: {e}")
        raise

    logger.info(f"Rescaled {rescaled_df.height} rows across columns {columns}")
    return rescaled_df


def find_constant_columns(
    df: pl.DataFrame,
    columns: Optional[Sequence[str]] = None,
    by: Optional[Union[str, Sequence[str]]] = None,
) -> List[str]:
    """
    Find numeric columns whose defined values are all equal

    Rescaling such a column gives NaN for every defined value. With `by`, a
    column is reported when any one group is constant.

    Args:
        df: DataFrame to inspect
        columns: Columns to check (default: every numeric column)
        by: Optional grouping column(s), matching rescale_columns

    Returns:
        List[str]: Constant column names
    """
    constant = []
    for col in resolve_rescale_columns(df, columns, by):
        if by is None:
            defined = _defined_values(df.get_column(col))
            if not defined.is_empty() and defined.n_unique() == 1:
                constant.append(col)
            continue

        expr = pl.col(col)
        if df.schema[col].is_float():
            expr = expr.fill_nan(None)
        distinct = (
            df.group_by(by)
            .agg(expr.drop_nulls().n_unique().alias("distinct"))
            .get_column("distinct")
        )
        if (distinct == 1).any():
            constant.append(col)
    return constant


def describe_columns(
    df: pl.DataFrame, columns: Optional[Sequence[str]] = None
) -> pl.DataFrame:
    """
    Summarise each numeric column

    Args:
        df: DataFrame to analyze
        columns: Columns to describe (default: every numeric column)

    Returns:
        pl.DataFrame: One row per column with SUMMARY_SCHEMA
    """
    columns = _resolve_columns(df, columns)
    logger.info(f"Generating column summary for {len(columns)} columns")

    rows = []
    for col in columns:
        series = df.get_column(col)
        defined = _defined_values(series).cast(pl.Float64)
        rows.append(
            {
                "column": col,
                "dtype": str(series.dtype),
                "count": defined.len(),
                "missing": series.len() - defined.len(),
                "min": defined.min(),
                "max": defined.max(),
                "mean": defined.mean(),
                "median": defined.median(),
            }
        )

    summary_df = pl.DataFrame(rows, schema=SUMMARY_SCHEMA)

    logger.info(f"Generated summary for columns: {columns}")
    return summary_df


def summarise_by_group(
    df: pl.DataFrame,
    by: str,
    value: str,
    agg: str = "mean",
) -> pl.DataFrame:
    """
    Aggregate one numeric column per group with DuckDB

    Args:
        df: Input DataFrame
        by: Grouping column
        value: Numeric column to aggregate
        agg: One of SUPPORTED_AGGREGATIONS

    Returns:
        pl.DataFrame: Columns [by, "<value>_<agg>", "n"], ordered by group
    """
    if agg not in SUPPORTED_AGGREGATIONS:
        raise ValueError(
            f"Unknown aggregation: {agg!r}. "
            f"Expected one of {sorted(SUPPORTED_AGGREGATIONS)}"
        )
    if by not in df.columns:
        raise ValueError(f"Grouping column not found: {by!r}")
    validate_numeric_columns(df, [value])

    logger.info(f"Summarising {value} by {by} ({agg})")

    func = SUPPORTED_AGGREGATIONS[agg]
    sql = f"""
        SELECT
            "{by}"
            , {func}("{value}") AS "{value}_{agg}"
            , COUNT(*) AS n
        FROM input_table
        GROUP BY "{by}"
        ORDER BY "{by}"
    """

    conn = duckdb.connect()
    try:
        conn.register("input_table", df)
        result_df = conn.execute(sql).pl()
    except Exception as e:
        logger.error(f"❌ Error summarising {value} by {by}: {e}")
        raise
    finally:
        conn.close()

    logger.info(f"Summarised {df.height} rows into {result_df.height} groups")
    return result_df
