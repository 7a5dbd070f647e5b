"""Test suite for price CSV ingestion."""

import io

import pandas as pd
import pytest

from core.io import (
    clean_dataframe,
    compute_file_hash,
    load_price_series,
    read_price_csv,
    resolve_price_columns,
    validate_dataframe,
)

SAMPLE_CSV = """Date,Close
2020-01-06,103.5
2020-01-02,100.0
2020-01-03,101.0
not-a-date,99.0
2020-01-03,102.0
2020-01-07,abc
"""


@pytest.fixture
def raw_df():
    return read_price_csv(io.StringIO(SAMPLE_CSV))


def test_read_price_csv_normalizes_headers(raw_df):
    assert list(raw_df.columns) == ["date", "close"]
    assert len(raw_df) == 6


def test_read_price_csv_failure():
    with pytest.raises(ValueError, match="Failed to parse CSV"):
        read_price_csv(io.StringIO(""))


def test_clean_dataframe(raw_df):
    """Invalid rows dropped, sorted by date, duplicate dates kept in file order."""
    df = clean_dataframe(raw_df)

    assert list(df.columns) == ["date", "close"]
    assert df["close"].tolist() == [100.0, 101.0, 102.0, 103.5]
    assert df["date"].is_monotonic_increasing
    assert str(df["date"].dtype) == "datetime64[ns]"


def test_validate_dataframe_warnings(raw_df):
    result = validate_dataframe(raw_df)

    assert result.is_valid
    assert result.row_count == 6
    assert result.dropped_rows == 2
    assert len(result.warnings) == 3  # bad date, bad price, unsorted
    assert result.date_range[0] == pd.Timestamp("2020-01-02").to_pydatetime()
    assert "Valid" in str(result)


def test_validate_dataframe_missing_columns():
    result = validate_dataframe(pd.DataFrame({"date": ["2020-01-01"]}))

    assert not result.is_valid
    assert result.errors


def test_validate_dataframe_no_valid_rows():
    df = pd.DataFrame({"date": ["2020-01-01", "2020-01-02"], "close": ["x", "y"]})
    result = validate_dataframe(df)

    assert not result.is_valid
    assert "No valid rows found" in result.errors


def test_validate_dataframe_non_positive_prices():
    df = pd.DataFrame({"date": ["2020-01-01", "2020-01-02"], "close": [0.0, 5.0]})
    result = validate_dataframe(df)

    assert result.is_valid
    assert any("non-positive" in w for w in result.warnings)


def test_resolve_price_columns():
    """Known names win; otherwise the first two columns are used."""
    assert resolve_price_columns(pd.DataFrame(columns=["open", "close", "date"])) == ("date", "close")
    assert resolve_price_columns(pd.DataFrame(columns=["day", "value"])) == ("day", "value")
    assert resolve_price_columns(pd.DataFrame(columns=["only"])) == ("only", None)


def test_load_price_series(tmp_path):
    path = tmp_path / "stocks.csv"
    path.write_text(SAMPLE_CSV)

    series = load_price_series(path)

    assert len(series) == 4
    assert series.prices.tolist() == [100.0, 101.0, 102.0, 103.5]


def test_clean_dataframe_mixed_date_formats():
    """Each row may use its own calendar date format."""
    raw = read_price_csv(io.StringIO(
        'date,close\n2020-01-01,1.0\n01/02/2020,2.0\n"Jan 3 2020",3.0\n2020-01-04,4.0\n'
    ))

    df = clean_dataframe(raw)

    assert len(df) == 4
    assert df["date"].tolist() == list(pd.date_range("2020-01-01", periods=4, freq="D"))
    assert df["close"].tolist() == [1.0, 2.0, 3.0, 4.0]


def test_mixed_utc_offsets_are_normalized():
    """Offset-aware dates in different zones are converted to naive UTC."""
    raw = read_price_csv(io.StringIO(
        "date,close\n2020-01-01T00:00:00+01:00,1.0\n2020-01-02T00:00:00-05:00,2.0\n"
    ))

    result = validate_dataframe(raw)
    df = clean_dataframe(raw)

    assert result.is_valid
    assert result.dropped_rows == 0
    assert df["date"].tolist() == [
        pd.Timestamp("2019-12-31 23:00"),
        pd.Timestamp("2020-01-02 05:00"),
    ]
    assert str(df["date"].dtype) == "datetime64[ns]"


def test_compute_file_hash():
    buffer = io.BytesIO(b"date,close\n2020-01-01,1\n")
    buffer.seek(5)

    file_hash = compute_file_hash(buffer)

    assert len(file_hash) == 16
    assert buffer.tell() == 0
    assert compute_file_hash(buffer) == file_hash


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
