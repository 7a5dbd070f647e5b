"""Sliding-window price averaging for dollar-cost averaged entries and exits."""

import logging

import numpy as np
import pandas as pd

from core.types import HoldingPeriodConfig

logger = logging.getLogger(__name__)


def forward_window_means(prices: np.ndarray, window: int) -> np.ndarray:
    """
    Mean of every ``window``-length run of prices, keyed by its first index.

    Uses pandas' rolling sum, which adds the entering price and subtracts the
    leaving one, so the cost is O(N) regardless of window size.

    Args:
        prices: 1-D price array
        window: Number of consecutive prices per mean (>= 1)

    Returns:
        Array of length ``len(prices) - window + 1`` (empty if the window
        does not fit) where ``out[i] = mean(prices[i:i + window])``
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    n = len(prices)
    if window > n:
        return np.empty(0, dtype=np.float64)
    if window == 1:
        return np.asarray(prices, dtype=np.float64).copy()

    rolling = pd.Series(prices, dtype=np.float64).rolling(window, min_periods=window).mean()
    return rolling.to_numpy(dtype=np.float64)[window - 1:]


def entry_prices(prices: np.ndarray, config: HoldingPeriodConfig, count: int) -> np.ndarray:
    """
    Entry (buy) price for the first ``count`` start positions.

    Args:
        prices: Full price array
        config: Holding configuration
        count: Number of start positions needed

    Returns:
        Array of ``count`` buy prices
    """
    if count <= 0:
        return np.empty(0, dtype=np.float64)

    if config.buy_averaging is None:
        return np.asarray(prices[:count], dtype=np.float64)

    window = config.buy_averaging.window_days
    logger.debug("Averaging entry price over %d-day window", window)
    return forward_window_means(prices, window)[:count]


def exit_prices(prices: np.ndarray, config: HoldingPeriodConfig, count: int) -> np.ndarray:
    """
    Exit (sell) price for the first ``count`` start positions.

    The sell window opens on the last day of the holding period.
    """
    if count <= 0:
        return np.empty(0, dtype=np.float64)

    offset = config.holding_days - 1

    if config.sell_averaging is None:
        return np.asarray(prices[offset:offset + count], dtype=np.float64)

    window = config.sell_averaging.window_days
    logger.debug("Averaging exit price over %d-day window", window)
    return forward_window_means(prices[offset:], window)[:count]
