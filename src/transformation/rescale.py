"""
Range Rescale - Transform Layer

Linear rescaling of numeric values onto the unit interval [0, 1] using the
values' own minimum and maximum. Missing values (null / None, and NaN) are
left out of the range and stay missing in the output.

A constant input has max - min == 0, so every defined output is NaN.
"""

import numbers
import polars as pl
from typing import Iterable, List, Optional, Tuple, Union

_VALUE = "value"


def rescale01_expr(column: Union[str, pl.Expr]) -> pl.Expr:
    """
    Build the rescale as a polars expression

    Works in select/with_columns and as a window via .over(...).

    Args:
        column: Column name or expression to rescale

    Returns:
        pl.Expr: Float64 expression (x - min) / (max - min)
    """
    expr = pl.col(column) if isinstance(column, str) else column
    expr = expr.cast(pl.Float64)
    return (expr - expr.min()) / (expr.max() - expr.min())


def rescale01_series(series: pl.Series) -> pl.Series:
    """
    Rescale a polars Series onto [0, 1]

    Args:
        series: Numeric Series, nulls allowed

    Returns:
        pl.Series: Float64 Series with the same name and length
    """
    if not series.dtype.is_numeric():
        raise ValueError(
            f"Cannot rescale non-numeric series '{series.name}' ({series.dtype})"
        )

    return (
        series.to_frame(_VALUE)
        .select(rescale01_expr(_VALUE))
        .to_series()
        .alias(series.name)
    )


def _to_float_series(values: Iterable[Optional[float]]) -> pl.Series:
    values = list(values)
    bad = [
        v
        for v in values
        if v is not None and (isinstance(v, bool) or not isinstance(v, numbers.Real))
    ]
    if bad:
        raise ValueError(f"Cannot rescale non-numeric values: {bad[:5]!r}")
    return pl.Series(_VALUE, values, dtype=pl.Float64, strict=False)


def rescale01(values: Iterable[Optional[float]]) -> List[Optional[float]]:
    """Rescale a sequence of numbers (None for missing) onto [0, 1]."""
    series = _to_float_series(values)
    return rescale01_series(series).to_list()


def value_range(
    values: Union[pl.Series, Iterable[Optional[float]]],
) -> Optional[Tuple[float, float]]:
    """
    Get the (min, max) pair over the defined values

    Args:
        values: Series or sequence of numbers, None/null/NaN treated as missing

    Returns:
        Optional[Tuple[float, float]]: (min, max), or None without defined values
    """
    if isinstance(values, pl.Series):
        series = values.cast(pl.Float64)
    else:
        series = _to_float_series(values)

    defined = series.fill_nan(None).drop_nulls()
    if defined.is_empty():
        return None

    return float(defined.min()), float(defined.max())
