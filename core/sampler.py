"""Holding-period return sampling over every valid start position."""

import logging

import numpy as np
import pandas as pd

from core.errors import InsufficientDataError, NoValidSamplesError
from core.types import HoldingPeriodConfig, PriceSeries
from core.windows import entry_prices, exit_prices

logger = logging.getLogger(__name__)

RETURN_COLUMNS = ["start_index", "start_date", "buy_price", "sell_price", "return_pct"]


def compute_returns(series: PriceSeries, config: HoldingPeriodConfig) -> pd.DataFrame:
    """
    Compute one holding-period return per valid start position.

    For start index ``i`` the position is bought at ``price[i]`` (or the mean
    of the buy averaging window starting at ``i``) and sold at
    ``price[i + holding_days - 1]`` (or the mean of the sell averaging window
    starting there). Starts whose buy price is not positive are skipped.

    Args:
        series: Price history
        config: Holding period and averaging configuration

    Returns:
        DataFrame with columns start_index, start_date, buy_price,
        sell_price, return_pct ordered by start_index

    Raises:
        InsufficientDataError: If the series is shorter than the required window
        NoValidSamplesError: If every start position was skipped
    """
    n = len(series)
    required = config.required_window

    if n < required:
        raise InsufficientDataError(
            "Not enough historical data for the selected periods.",
            required=required,
            available=n,
            context={"holding_days": config.holding_days},
        )

    count = n - required + 1
    prices = series.prices

    buy = entry_prices(prices, config, count)
    sell = exit_prices(prices, config, count)

    valid = buy > 0
    skipped = int(count - valid.sum())
    if skipped:
        logger.debug("Skipped %d start positions with non-positive buy price", skipped)

    if not valid.any():
        raise NoValidSamplesError(
            "Could not calculate any returns. Please check the data and input parameters.",
            context={"candidates": count},
        )

    start_idx = np.flatnonzero(valid)
    buy_valid = buy[valid]
    sell_valid = sell[valid]
    returns = (sell_valid - buy_valid) / buy_valid * 100

    logger.debug(
        "Sampled %d returns from %d rows (required window %d)",
        len(returns), n, required,
    )

    return pd.DataFrame({
        "start_index": start_idx,
        "start_date": series.dates[start_idx],
        "buy_price": buy_valid,
        "sell_price": sell_valid,
        "return_pct": returns,
    }, columns=RETURN_COLUMNS)
