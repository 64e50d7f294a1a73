"""
Transformation Layer Schemas

Schemas and lookup tables for transformed data structures.
"""

import polars as pl

# One row per numeric column, produced by describe_columns()
SUMMARY_SCHEMA = pl.Schema(
    [
        ("column", pl.String()),
        ("dtype", pl.String()),
        ("count", pl.Int64()),
        ("missing", pl.Int64()),
        ("min", pl.Float64()),
        ("max", pl.Float64()),
        ("mean", pl.Float64()),
        ("median", pl.Float64()),
    ]
)

# agg name -> DuckDB aggregate function
SUPPORTED_AGGREGATIONS = {
    "mean": "AVG",
    "median": "MEDIAN",
    "min": "MIN",
    "max": "MAX",
    "sum": "SUM",
    "count": "COUNT",
}
