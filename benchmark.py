"""
Benchmark script for return analysis latency.

Generates synthetic daily prices and measures run_analysis execution time
across series lengths and cone sampling budgets.
"""

import argparse
import logging
import time

import numpy as np
import pandas as pd

from config import CONE_MAX_SAMPLES, CONE_MAX_TIME_POINTS, LOG_FORMAT
from core.errors import AnalysisError


# Generate synthetic price data
def generate_synthetic_data(n_rows: int, start_date="1950-01-03", seed: int = 42) -> pd.DataFrame:
    """Generate a geometric random walk of daily closing prices."""
    dates = pd.date_range(start_date, periods=n_rows, freq="D")

    rng = np.random.default_rng(seed)
    returns = rng.normal(0.0003, 0.01, n_rows)
    close = 20 * np.exp(np.cumsum(returns))

    return pd.DataFrame({"date": dates, "close": close})


def benchmark_analysis(
    df: pd.DataFrame,
    holding_years: int,
    dca_years: int = 0,
    max_time_points: int = CONE_MAX_TIME_POINTS,
    max_samples: int = CONE_MAX_SAMPLES,
    iterations: int = 3,
) -> dict:
    """Benchmark one analysis configuration."""
    from core.analysis import run_analysis
    from core.inputs import build_holding_config
    from core.types import PriceSeries

    series = PriceSeries.from_frame(df)
    config = build_holding_config(
        holding_period_years=holding_years,
        dca_buy_enabled=dca_years > 0,
        dca_buy_period_years=max(dca_years, 1),
        dca_sell_enabled=dca_years > 0,
        dca_sell_period_years=max(dca_years, 1),
    )

    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        result = run_analysis(
            series,
            config,
            max_time_points=max_time_points,
            max_samples=max_samples,
        )
        times.append(time.perf_counter() - start)

    return {
        "avg_time": float(np.mean(times)),
        "min_time": float(np.min(times)),
        "max_time": float(np.max(times)),
        "periods": result.summary.total_periods,
        "cone_points": len(result.cone),
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark return analysis")
    parser.add_argument("--iterations", type=int, default=3)
    parser.add_argument("--holding-years", type=int, default=10)
    parser.add_argument("--dca-years", type=int, default=0)
    args = parser.parse_args()

    logging.basicConfig(level="WARNING", format=LOG_FORMAT)

    print("=" * 72)
    print("RETURN ANALYSIS BENCHMARK")
    print("=" * 72)

    for n_rows in [5_000, 10_000, 20_000, 40_000]:
        df = generate_synthetic_data(n_rows)
        print(f"\n{n_rows:,} rows, holding {args.holding_years}y, DCA {args.dca_years}y")

        for time_points, samples in [
            (CONE_MAX_TIME_POINTS, CONE_MAX_SAMPLES),
            (CONE_MAX_TIME_POINTS * 2, CONE_MAX_SAMPLES * 5),
        ]:
            try:
                stats = benchmark_analysis(
                    df,
                    holding_years=args.holding_years,
                    dca_years=args.dca_years,
                    max_time_points=time_points,
                    max_samples=samples,
                    iterations=args.iterations,
                )
            except AnalysisError as e:
                print(f"  cone {time_points}x{samples}: failed ({e})")
                continue

            print(
                f"  cone {time_points}x{samples}: "
                f"avg {stats['avg_time'] * 1000:.1f}ms "
                f"(min {stats['min_time'] * 1000:.1f}ms, max {stats['max_time'] * 1000:.1f}ms) | "
                f"{stats['periods']:,} periods, {stats['cone_points']} cone points"
            )


if __name__ == "__main__":
    main()
