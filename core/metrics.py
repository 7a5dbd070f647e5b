"""Return distribution statistics."""

import math
from typing import Dict, Iterable, Union

import numpy as np
import pandas as pd

from core.errors import EmptyInputError
from core.types import DistributionSummary

ReturnsLike = Union[pd.DataFrame, pd.Series, np.ndarray, Iterable[float]]


class SummaryAccumulator:
    """
    Running reduction of return observations.

    Holds only a count, a profitable count, a sum, a max and a min, so
    returns can be summarized as they are produced and partial
    accumulators can be merged in any order.
    """

    def __init__(self):
        self.count = 0
        self.profitable = 0
        self.total = 0.0
        self.best = -math.inf
        self.worst = math.inf

    def update(self, return_pct: float) -> "SummaryAccumulator":
        self.count += 1
        if return_pct > 0:
            self.profitable += 1
        self.total += return_pct
        self.best = max(self.best, return_pct)
        self.worst = min(self.worst, return_pct)
        return self

    def update_many(self, returns: np.ndarray) -> "SummaryAccumulator":
        """Fold a whole array of returns in at once."""
        returns = np.asarray(returns, dtype=np.float64)
        if returns.size == 0:
            return self

        self.count += int(returns.size)
        self.profitable += int((returns > 0).sum())
        self.total += float(returns.sum())
        self.best = max(self.best, float(returns.max()))
        self.worst = min(self.worst, float(returns.min()))
        return self

    def merge(self, other: "SummaryAccumulator") -> "SummaryAccumulator":
        merged = SummaryAccumulator()
        merged.count = self.count + other.count
        merged.profitable = self.profitable + other.profitable
        merged.total = self.total + other.total
        merged.best = max(self.best, other.best)
        merged.worst = min(self.worst, other.worst)
        return merged

    def finalize(self) -> DistributionSummary:
        """
        Produce headline statistics.

        Raises:
            EmptyInputError: If nothing was accumulated
        """
        if self.count == 0:
            raise EmptyInputError("Cannot summarize an empty set of returns.")

        average = self.total / self.count
        # Float drift in the sum must not push the mean outside [worst, best]
        average = min(max(average, self.worst), self.best)

        return DistributionSummary(
            total_periods=self.count,
            profitable_percentage=100.0 * self.profitable / self.count,
            average_return=average,
            best_return=self.best,
            worst_return=self.worst,
        )


def _as_return_array(returns: ReturnsLike) -> np.ndarray:
    if isinstance(returns, pd.DataFrame):
        if "return_pct" not in returns.columns:
            if returns.empty:
                return np.empty(0, dtype=np.float64)
            raise ValueError("DataFrame must have 'return_pct' column")
        return returns["return_pct"].to_numpy(dtype=np.float64)
    if isinstance(returns, pd.Series):
        return returns.to_numpy(dtype=np.float64)
    if isinstance(returns, np.ndarray):
        return returns.astype(np.float64, copy=False)
    return np.asarray(list(returns), dtype=np.float64)


def summarize(returns: ReturnsLike) -> DistributionSummary:
    """
    Aggregate return observations into headline statistics.

    Metrics computed:
    - Total periods analyzed
    - Profitable percentage (strictly positive returns)
    - Average return
    - Best/worst return

    Args:
        returns: Returns DataFrame (``return_pct`` column), Series or
            sequence of percentage returns

    Returns:
        DistributionSummary

    Raises:
        EmptyInputError: If there are no returns
    """
    return SummaryAccumulator().update_many(_as_return_array(returns)).finalize()


def calculate_return_distribution(returns: ReturnsLike, bins: int = 40) -> Dict:
    """
    Calculate return distribution statistics.

    Args:
        returns: Returns DataFrame, Series or sequence
        bins: Number of histogram bins

    Returns:
        Dictionary with histogram data and statistics
    """
    values = pd.Series(_as_return_array(returns))

    if values.empty:
        return {
            "bins": [],
            "counts": [],
            "mean": 0.0,
            "median": 0.0,
            "std": 0.0,
            "skew": 0.0,
        }

    counts, bin_edges = np.histogram(values, bins=bins)
    bin_centers = (bin_edges[:-1] + bin_edges[1:]) / 2

    return {
        "bins": bin_centers.tolist(),
        "counts": counts.tolist(),
        "mean": float(values.mean()),
        "median": float(values.median()),
        "std": float(values.std()) if len(values) > 1 else 0.0,
        "skew": float(values.skew()) if len(values) > 2 else 0.0,
    }
