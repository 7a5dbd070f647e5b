"""Test suite for the cone of certainty estimator."""

import numpy as np
import pytest

from core.cone import checkpoint_offsets, compute_cone, truncated_percentile
from core.errors import AnalysisCancelledError, InputValidationError
from core.types import AveragingWindow, HoldingPeriodConfig

from tests.helpers import make_series


class FakeProgress:
    """Stand-in for a Streamlit progress bar."""

    def __init__(self):
        self.values = []

    def progress(self, value):
        self.values.append(value)


def assert_cone_invariants(cone):
    fractions = [p.time_fraction for p in cone]
    assert fractions[0] == 0.0
    assert all(a < b for a, b in zip(fractions, fractions[1:]))
    for p in cone:
        assert 0.0 <= p.time_fraction <= 1.0
        assert p.p10 <= p.p25 <= p.p50 <= p.p75 <= p.p90


def test_checkpoint_offsets_clamped_to_holding_period():
    """Uneven step lands exactly on the holding period."""
    offsets = checkpoint_offsets(365, 40)

    # step 9: 0, 9, ..., 360, then 365
    assert offsets[0] == 0
    assert offsets[-2] == 360
    assert offsets[-1] == 365
    assert len(offsets) == 42
    assert all(a < b for a, b in zip(offsets, offsets[1:]))


def test_checkpoint_offsets_even_step():
    offsets = checkpoint_offsets(400, 40)
    assert offsets == list(range(0, 401, 10))


def test_checkpoint_offsets_small_budget():
    assert checkpoint_offsets(365, 5) == [0, 73, 146, 219, 292, 365]


def test_truncated_percentile():
    """Percentiles index the sorted array without interpolation."""
    values = np.arange(1, 11, dtype=float)

    assert truncated_percentile(values, 0.10) == 2.0
    assert truncated_percentile(values, 0.50) == 6.0
    assert truncated_percentile(values, 0.90) == 10.0
    assert truncated_percentile(values, 1.00) == 10.0
    assert truncated_percentile(np.array([7.0]), 0.25) == 7.0


def test_cone_invariants(random_walk_series):
    """Fractions increase from 0 to 1 and percentiles are ordered."""
    cone = compute_cone(random_walk_series, HoldingPeriodConfig(holding_days=365))

    assert len(cone) == 42
    assert cone[-1].time_fraction == 1.0
    assert_cone_invariants(cone)


def test_cone_first_point_is_zero(random_walk_series):
    """Without buy averaging the entry and exit coincide at offset 0."""
    first = compute_cone(random_walk_series, HoldingPeriodConfig(holding_days=730))[0]

    assert first.time_fraction == 0.0
    assert (first.p10, first.p25, first.p50, first.p75, first.p90) == (0.0, 0.0, 0.0, 0.0, 0.0)


def test_cone_with_buy_averaging():
    """On a rising series the averaged entry is above the day-0 price."""
    series = make_series(np.linspace(100, 300, 1500))
    config = HoldingPeriodConfig(holding_days=365, buy_averaging=AveragingWindow(60))

    cone = compute_cone(series, config)

    assert cone[0].p90 < 0
    assert cone[-1].p10 > 0
    assert_cone_invariants(cone)


@pytest.mark.parametrize("buy_window,sell_window", [(None, None), (30, None), (None, 45), (60, 90)])
def test_flat_series_cone(buy_window, sell_window):
    """Constant prices give all-zero bands, with or without averaging."""
    series = make_series(np.full(800, 123.45))
    config = HoldingPeriodConfig(
        holding_days=365,
        buy_averaging=AveragingWindow(buy_window) if buy_window else None,
        sell_averaging=AveragingWindow(sell_window) if sell_window else None,
    )

    cone = compute_cone(series, config)

    assert cone
    for p in cone:
        assert (p.p10, p.p25, p.p50, p.p75, p.p90) == (0.0, 0.0, 0.0, 0.0, 0.0)


def test_cone_matches_direct_computation():
    """Strided starts, averaged entries and percentiles agree with a plain loop."""
    rng = np.random.default_rng(3)
    prices = rng.uniform(50, 150, 600)
    holding_days, buy_window = 365, 20
    config = HoldingPeriodConfig(holding_days=holding_days, buy_averaging=AveragingWindow(buy_window))

    cone = compute_cone(make_series(prices), config, max_time_points=12, max_samples=50)

    # (600 - 365) // 50 == 4; 365 // 12 == 30
    step = 4
    offsets = list(range(0, holding_days + 1, 30)) + [holding_days]

    expected = []
    for day_offset in offsets:
        partial = []
        for i in range(0, len(prices) - holding_days + 1, step):
            buy = prices[i:i + buy_window].mean()
            if i + day_offset < len(prices) and buy > 0:
                partial.append((prices[i + day_offset] - buy) / buy * 100)
        partial.sort()
        values = [partial[min(int(len(partial) * p), len(partial) - 1)]
                  for p in (0.10, 0.25, 0.50, 0.75, 0.90)]
        expected.append((day_offset / holding_days, values))

    assert len(cone) == len(expected)
    for point, (fraction, values) in zip(cone, expected):
        assert point.time_fraction == fraction
        assert [point.p10, point.p25, point.p50, point.p75, point.p90] == pytest.approx(values, rel=1e-9)


def test_cone_omits_empty_final_checkpoint():
    """With exactly one holding period of data the final checkpoint has no sell row."""
    series = make_series(np.linspace(100, 105, 365))

    cone = compute_cone(series, HoldingPeriodConfig(holding_days=365))

    assert len(cone) == 41
    assert cone[-1].time_fraction == pytest.approx(360 / 365)


def test_cone_short_series_is_empty():
    series = make_series(np.full(100, 50.0))
    assert compute_cone(series, HoldingPeriodConfig(holding_days=365)) == []


def test_cone_tunable_budgets(random_walk_series):
    """Sampling budgets control checkpoint count without breaking invariants."""
    config = HoldingPeriodConfig(holding_days=365)

    coarse = compute_cone(random_walk_series, config, max_time_points=5, max_samples=10)
    fine = compute_cone(random_walk_series, config, max_time_points=100, max_samples=5000)

    assert [p.time_fraction for p in coarse] == [o / 365 for o in [0, 73, 146, 219, 292, 365]]
    assert len(fine) > len(coarse)
    assert_cone_invariants(coarse)
    assert_cone_invariants(fine)


@pytest.mark.parametrize("kwargs", [{"max_time_points": 0}, {"max_samples": 0}])
def test_cone_rejects_bad_budgets(random_walk_series, kwargs):
    with pytest.raises(InputValidationError):
        compute_cone(random_walk_series, HoldingPeriodConfig(holding_days=365), **kwargs)


def test_cone_skips_non_positive_buy_prices():
    """Zero prices never divide; they just drop out."""
    prices = np.linspace(10, 20, 1200)
    prices[::7] = 0.0

    cone = compute_cone(make_series(prices), HoldingPeriodConfig(holding_days=365))

    assert_cone_invariants(cone)
    assert all(np.isfinite([p.p10, p.p90]).all() for p in cone)


def test_cone_cancellation(random_walk_series):
    """Cancellation is checked before each checkpoint."""
    calls = {"n": 0}

    def should_cancel():
        calls["n"] += 1
        return calls["n"] > 3

    with pytest.raises(AnalysisCancelledError) as exc_info:
        compute_cone(
            random_walk_series,
            HoldingPeriodConfig(holding_days=365),
            should_cancel=should_cancel,
        )

    assert exc_info.value.completed_checkpoints == 3


def test_cone_progress(random_walk_series):
    progress = FakeProgress()

    compute_cone(
        random_walk_series,
        HoldingPeriodConfig(holding_days=365),
        progress_callback=progress,
    )

    assert progress.values[0] == 0
    assert progress.values[-1] == 100
    assert progress.values == sorted(progress.values)


def test_cone_idempotent(random_walk_series):
    config = HoldingPeriodConfig(holding_days=365, buy_averaging=AveragingWindow(20))
    assert compute_cone(random_walk_series, config) == compute_cone(random_walk_series, config)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
