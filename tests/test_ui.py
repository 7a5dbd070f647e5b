"""Test suite for charts and exports."""

import json

import pandas as pd
import pytest

from core.types import ConeDataPoint, DistributionSummary
from ui.charts import (
    cone_to_frame,
    create_cone_chart,
    create_price_chart,
    create_return_distribution,
    create_returns_overview_chart,
    year_ticks,
)
from ui.exports import export_cone_csv, export_returns_csv, export_run_config_json
from ui.layout import format_delta


@pytest.fixture
def sample_summary():
    return DistributionSummary(
        total_periods=100,
        profitable_percentage=80.0,
        average_return=12.5,
        best_return=60.0,
        worst_return=-20.0,
    )


@pytest.fixture
def sample_cone():
    return [
        ConeDataPoint(0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        ConeDataPoint(0.5, -10.0, -2.0, 5.0, 12.0, 20.0),
        ConeDataPoint(1.0, -15.0, 0.0, 10.0, 25.0, 40.0),
    ]


@pytest.fixture
def sample_returns():
    return pd.DataFrame({
        "start_index": [0, 1, 2],
        "start_date": pd.date_range("2000-01-01", periods=3, freq="D"),
        "buy_price": [100.0, 101.0, 102.0],
        "sell_price": [110.0, 100.0, 120.0],
        "return_pct": [10.0, -0.990099, 17.647059],
    })


def test_returns_overview_chart(sample_summary):
    fig = create_returns_overview_chart(sample_summary)

    assert len(fig.data) == 1
    bar = fig.data[0]
    assert list(bar.x) == ["Worst", "Average", "Best"]
    assert list(bar.y) == [-20.0, 12.5, 60.0]
    assert bar.marker.color[0] != bar.marker.color[2]


def test_cone_chart(sample_cone):
    fig = create_cone_chart(sample_cone, holding_years=10)

    # two traces per band plus the median line
    assert len(fig.data) == 5
    median = fig.data[-1]
    assert list(median.x) == [0.0, 5.0, 10.0]
    assert list(median.y) == [0.0, 5.0, 10.0]


def test_cone_chart_empty():
    assert len(create_cone_chart([], holding_years=10).data) == 0


def test_cone_to_frame(sample_cone):
    df = cone_to_frame(sample_cone)
    assert list(df.columns) == ["time_fraction", "p10", "p25", "p50", "p75", "p90"]
    assert len(df) == 3


def test_year_ticks():
    assert year_ticks(10) == [float(i) for i in range(11)]
    assert len(year_ticks(30)) == 11
    assert year_ticks(1) == [0.0, 1.0]


def test_return_distribution_chart(sample_returns):
    fig = create_return_distribution(sample_returns)
    assert len(fig.data) == 1
    assert len(create_return_distribution(pd.DataFrame()).data) == 0


def test_price_chart():
    df = pd.DataFrame({"date": pd.date_range("2000-01-01", periods=3), "close": [1.0, 2.0, 3.0]})
    assert len(create_price_chart(df).data) == 1


def test_export_returns_csv(sample_returns):
    csv = export_returns_csv(sample_returns)
    lines = csv.strip().splitlines()

    assert lines[0] == "start_index,start_date,buy_price,sell_price,return_pct"
    assert lines[1].startswith("0,2000-01-01,")
    assert export_returns_csv(pd.DataFrame()) == "No returns to export"


def test_export_cone_csv(sample_cone):
    csv = export_cone_csv(sample_cone, holding_years=4)
    lines = csv.strip().splitlines()

    assert lines[0] == "time_fraction,years,p10,p25,p50,p75,p90"
    assert len(lines) == 4
    assert lines[2].startswith("0.5,2.0,")
    assert export_cone_csv([], holding_years=4) == "No cone data to export"


def test_export_run_config_json(sample_summary):
    payload = json.loads(export_run_config_json(
        data_info={"rows": 100},
        parameters={"holding_period_years": 10},
        summary=sample_summary.to_dict(),
    ))

    assert payload["parameters"]["holding_period_years"] == 10
    assert payload["results"]["total_periods"] == 100
    assert "run_id" in payload and "version" in payload


def test_format_delta_carries_sign():
    """Losses render with a leading minus so the metric arrow points down."""
    assert format_delta(-3.456) == "-3.46%"
    assert format_delta(12.5) == "+12.50%"
    assert format_delta(0.0) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
