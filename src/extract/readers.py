"""
Table Readers - Extract Layer

Functions for reading input tables from local files or remote URLs.
No business logic, just I/O operations that return raw data.
"""

import io
import os
import polars as pl
import requests
from pathlib import Path
from typing import Optional, Union
from src.coreutils.env import PipelineSettings
from src.coreutils.request import new_session, get_content
import logging

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = {
    ".csv": "csv",
    ".parquet": "parquet",
    ".pq": "parquet",
    ".json": "json",
}


def detect_format(path: Union[str, Path]) -> str:
    """
    Detect table format from a file path or URL suffix

    Args:
        path: File path or URL

    Returns:
        str: "csv", "parquet" or "json"
    """
    # Drop any query string before looking at the suffix
    suffix = Path(str(path).split("?", 1)[0]).suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported file type: {suffix or str(path)!r}")
    return SUPPORTED_FORMATS[suffix]


def _read_bytes(source, fmt: str) -> pl.DataFrame:
    if fmt == "csv":
        return pl.read_csv(source, infer_schema_length=10000)
    if fmt == "parquet":
        return pl.read_parquet(source)
    if fmt == "json":
        return pl.read_json(source, infer_schema_length=10000)
    raise ValueError(f"Unsupported format: {fmt!r}")


def read_table(filepath: Union[str, Path], fmt: Optional[str] = None) -> pl.DataFrame:
    """
    Load a DataFrame from a local CSV, Parquet or JSON file

    Args:
        filepath: Path to the file
        fmt: Explicit format, detected from the suffix if omitted

    Returns:
        pl.DataFrame: Loaded DataFrame
    """
    fmt = fmt or detect_format(filepath)
    logger.info(f"Loading DataFrame from {fmt}: {filepath}")

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    df = _read_bytes(filepath, fmt)

    logger.info(f"Loaded {df.height} records from {filepath}")
    return df


def fetch_remote_table(
    url: str,
    fmt: Optional[str] = None,
    session: Optional[requests.Session] = None,
    settings: Optional[PipelineSettings] = None,
) -> pl.DataFrame:
    """
    Download a table over HTTP and parse it

    Args:
        url: URL of a CSV, Parquet or JSON file
        fmt: Explicit format, detected from the URL if omitted
        session: HTTP session to use (a retrying session by default)
        settings: Timeout and retry settings

    Returns:
        pl.DataFrame: Parsed DataFrame
    """
    fmt = fmt or detect_format(url)
    settings = settings or PipelineSettings.from_env()
    session = session or new_session()

    logger.info(f"Fetching remote {fmt} table: {url}")

    content = get_content(
        session,
        url,
        retry_attempts=settings.http_retries,
        timeout=settings.http_timeout,
    )
    df = _read_bytes(io.BytesIO(content), fmt)

    logger.info(f"Fetched {df.height} records from {url}")
    return df


def is_remote(source: Union[str, Path]) -> bool:
    """Check whether a source is an http(s) URL"""
    return str(source).startswith(("http://", "https://"))


def load_source(
    source: Union[str, Path],
    fmt: Optional[str] = None,
    settings: Optional[PipelineSettings] = None,
) -> pl.DataFrame:
    """
    Load a table from a local path or an http(s) URL

    Args:
        source: File path or URL
        fmt: Explicit format, detected from the suffix if omitted
        settings: Settings used for remote downloads

    Returns:
        pl.DataFrame: Loaded DataFrame
    """
    if is_remote(source):
        return fetch_remote_table(str(source), fmt=fmt, settings=settings)
    return read_table(source, fmt=fmt)
