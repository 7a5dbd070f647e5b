"""Test data builders."""

import numpy as np
import pandas as pd

from core.types import PriceSeries


def make_series(prices, start="2000-01-01") -> PriceSeries:
    """Build a daily PriceSeries from a list of prices."""
    prices = np.asarray(prices, dtype=np.float64)
    dates = pd.date_range(start, periods=len(prices), freq="D")
    return PriceSeries(dates=dates.to_numpy(), prices=prices)
