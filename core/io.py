"""Price data I/O and validation module."""

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

import pandas as pd
import streamlit as st

from config import (
    COLUMN_DTYPES,
    DATE_COLUMN_ALIASES,
    MAX_CACHE_ENTRIES,
    PRICE_COLUMN_ALIASES,
)
from core.types import PriceSeries, ValidationResult

logger = logging.getLogger(__name__)


def compute_file_hash(file: BinaryIO) -> str:
    """Compute SHA256 hash of uploaded file for caching."""
    file.seek(0)
    file_hash = hashlib.sha256(file.read()).hexdigest()[:16]
    file.seek(0)
    return file_hash


def read_price_csv(source: Union[str, Path, BinaryIO]) -> pd.DataFrame:
    """
    Read a delimited price file into a DataFrame with normalized headers.

    Raises:
        ValueError: If the file cannot be parsed
    """
    try:
        df = pd.read_csv(source, skipinitialspace=True)
    except Exception as e:
        raise ValueError(f"Failed to parse CSV: {str(e)}")

    df.columns = [str(c).lower().strip() for c in df.columns]
    return df


@st.cache_data(show_spinner=False, max_entries=MAX_CACHE_ENTRIES)
def load_csv_data(file: BinaryIO, file_hash: str) -> pd.DataFrame:
    """
    Load CSV data with caching based on file hash.

    Args:
        file: Uploaded file object
        file_hash: Hash of file content for cache key

    Returns:
        DataFrame with lowercase column names

    Raises:
        ValueError: If file cannot be parsed
    """
    return read_price_csv(file)


def resolve_price_columns(df: pd.DataFrame) -> Tuple[Optional[str], Optional[str]]:
    """
    Pick the date and price columns.

    Known header names win; otherwise the first two columns are used as
    (date, closing price).

    Returns:
        (date_column, price_column), either may be None if absent
    """
    columns = list(df.columns)

    date_col = next((c for c in DATE_COLUMN_ALIASES if c in columns), None)
    price_col = next((c for c in PRICE_COLUMN_ALIASES if c in columns), None)

    if date_col is None:
        remaining = [c for c in columns if c != price_col]
        date_col = remaining[0] if remaining else None
    if price_col is None:
        remaining = [c for c in columns if c != date_col]
        price_col = remaining[0] if remaining else None

    return date_col, price_col


def parse_dates(values: pd.Series) -> pd.Series:
    """
    Parse date strings row by row into naive timestamps.

    Each row may use its own format. Offset-aware values are converted to
    UTC before the zone is dropped; naive values are kept as written.
    Unparseable values become NaT.
    """
    dates = pd.to_datetime(values, errors="coerce", format="mixed", utc=True)
    return dates.dt.tz_convert(None)


def _coerce(df: pd.DataFrame, date_col: str, price_col: str) -> pd.DataFrame:
    dates = parse_dates(df[date_col])
    return pd.DataFrame({
        "date": dates,
        "close": pd.to_numeric(df[price_col], errors="coerce"),
    })


def validate_dataframe(df: pd.DataFrame) -> ValidationResult:
    """
    Validate uploaded DataFrame against schema requirements.

    Checks:
    - Date and price columns present
    - Dates parseable
    - Prices numeric
    - Prices positive
    - At least one usable row

    Args:
        df: DataFrame to validate

    Returns:
        ValidationResult with status and messages
    """
    errors = []
    warnings = []

    date_col, price_col = resolve_price_columns(df)
    if date_col is None or price_col is None:
        errors.append("CSV must have a header row and at least two columns: date, close")
        return ValidationResult(
            is_valid=False,
            errors=errors,
            warnings=warnings,
            row_count=len(df),
        )

    coerced = _coerce(df, date_col, price_col)

    bad_dates = int(coerced["date"].isna().sum())
    if bad_dates:
        warnings.append(f"{bad_dates} rows with unparseable dates will be dropped")

    bad_prices = int(coerced["close"].isna().sum())
    if bad_prices:
        warnings.append(f"{bad_prices} rows with non-numeric prices will be dropped")

    usable = coerced.dropna(subset=["date", "close"])
    dropped = len(coerced) - len(usable)

    non_positive = int((usable["close"] <= 0).sum())
    if non_positive:
        warnings.append(
            f"{non_positive} rows have non-positive prices (start dates using them are skipped)"
        )

    if not usable["date"].is_monotonic_increasing:
        warnings.append("Rows are not in date order (will be sorted)")

    date_range = None
    if usable.empty:
        errors.append("No valid rows found")
    else:
        date_range = (
            usable["date"].min().to_pydatetime(),
            usable["date"].max().to_pydatetime(),
        )

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
        row_count=len(df),
        dropped_rows=dropped,
        date_range=date_range,
    )


def clean_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean and prepare DataFrame for analysis.

    Operations:
    - Select date and price columns
    - Convert date to datetime and price to float
    - Drop rows with invalid dates or prices
    - Sort by date (stable, duplicate dates keep file order)

    Args:
        df: Raw DataFrame

    Returns:
        DataFrame with columns date, close

    Raises:
        ValueError: If the date or price column is missing
    """
    date_col, price_col = resolve_price_columns(df)
    if date_col is None or price_col is None:
        raise ValueError("CSV must have a header row and at least two columns: date, close")

    cleaned = _coerce(df, date_col, price_col)

    before = len(cleaned)
    cleaned = cleaned.dropna(subset=["date", "close"])
    if len(cleaned) < before:
        logger.info("Dropped %d invalid price rows", before - len(cleaned))

    cleaned = cleaned.sort_values("date", kind="mergesort").reset_index(drop=True)
    return cleaned.astype(COLUMN_DTYPES)


def load_price_series(source: Union[str, Path, BinaryIO]) -> PriceSeries:
    """
    Read, clean and freeze a price file.

    Args:
        source: Path or file-like object

    Returns:
        PriceSeries ready for analysis
    """
    series = PriceSeries.from_frame(clean_dataframe(read_price_csv(source)))
    logger.info("Loaded %d price rows", len(series))
    return series
