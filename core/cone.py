"""Cone of certainty: percentile bands of in-progress returns over the holding period."""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from config import CONE_MAX_SAMPLES, CONE_MAX_TIME_POINTS, CONE_PERCENTILES
from core.errors import AnalysisCancelledError, InputValidationError
from core.types import ConeDataPoint, HoldingPeriodConfig, PriceSeries
from core.windows import entry_prices

logger = logging.getLogger(__name__)


def checkpoint_offsets(holding_days: int, max_time_points: int = CONE_MAX_TIME_POINTS) -> List[int]:
    """
    Elapsed-day offsets at which the cone is sampled.

    Steps of ``max(1, holding_days // min(max_time_points, holding_days))``
    from 0; the last checkpoint is always exactly ``holding_days``.

    Args:
        holding_days: Holding period in days
        max_time_points: Upper bound on the number of steps

    Returns:
        Strictly increasing list of offsets starting at 0
    """
    num_time_points = min(max_time_points, holding_days)
    time_step = max(1, holding_days // num_time_points)

    offsets = list(range(0, holding_days + 1, time_step))
    if offsets[-1] != holding_days:
        offsets.append(holding_days)
    return offsets


def truncated_percentile(sorted_values: np.ndarray, p: float) -> float:
    """Value at ``floor(len * p)`` of an ascending array, without interpolation."""
    n = len(sorted_values)
    index = min(int(np.floor(n * p)), n - 1)
    return float(sorted_values[index])


def _cone_point(
    time_fraction: float,
    partial_returns: np.ndarray,
    percentiles: Sequence[Tuple[str, float]],
) -> ConeDataPoint:
    ordered = np.sort(partial_returns)
    values = {name: truncated_percentile(ordered, p) for name, p in percentiles}
    return ConeDataPoint(time_fraction=time_fraction, **values)


def compute_cone(
    series: PriceSeries,
    config: HoldingPeriodConfig,
    max_time_points: int = CONE_MAX_TIME_POINTS,
    max_samples: int = CONE_MAX_SAMPLES,
    should_cancel: Optional[Callable[[], bool]] = None,
    progress_callback: Optional[any] = None,
) -> List[ConeDataPoint]:
    """
    Estimate percentile bands of partial returns across the holding period.

    Both axes are downsampled so the work is bounded regardless of series
    length:
    1. At most ``max_time_points`` elapsed-day checkpoints (plus the final
       one at ``holding_days``)
    2. At most about ``max_samples`` evenly strided start positions per
       checkpoint

    At each checkpoint the return from the entry price (averaged if buy
    averaging is enabled) to the price ``day_offset`` rows later is recorded
    for every sampled start whose sell row exists and whose buy price is
    positive. Checkpoints with no recorded returns are omitted. The final
    checkpoint reads the row ``holding_days`` after the start, one past the
    sampler's sell row, so a series exactly ``holding_days`` long ends its
    cone at the previous checkpoint rather than at fraction 1.

    Args:
        series: Price history
        config: Holding period and averaging configuration
        max_time_points: Time checkpoint budget
        max_samples: Start position budget per checkpoint
        should_cancel: Optional callable polled before each checkpoint
        progress_callback: Optional object with ``.progress(int)`` (e.g. a
            Streamlit progress bar)

    Returns:
        Cone points ordered by time_fraction

    Raises:
        InputValidationError: If a sampling budget is not positive
        AnalysisCancelledError: If ``should_cancel`` returns True
    """
    if max_time_points < 1:
        raise InputValidationError(
            f"max_time_points must be >= 1, got {max_time_points}", field="max_time_points"
        )
    if max_samples < 1:
        raise InputValidationError(
            f"max_samples must be >= 1, got {max_samples}", field="max_samples"
        )

    n = len(series)
    holding_days = config.holding_days
    prices = series.prices

    sample_step = max(1, (n - holding_days) // max_samples)
    starts = np.arange(0, n - holding_days + 1, sample_step)
    buy = entry_prices(prices, config, n - holding_days + 1)[starts]
    positive = buy > 0

    offsets = checkpoint_offsets(holding_days, max_time_points)
    logger.debug(
        "Cone sampling %d checkpoints x %d starts (sample step %d)",
        len(offsets), len(starts), sample_step,
    )

    if progress_callback is not None:
        progress_callback.progress(0)

    cone: List[ConeDataPoint] = []

    for k, day_offset in enumerate(offsets):
        if should_cancel is not None and should_cancel():
            logger.info("Cone computation cancelled after %d of %d checkpoints", k, len(offsets))
            raise AnalysisCancelledError(
                "Cone computation cancelled.",
                completed_checkpoints=k,
            )

        sell_idx = starts + day_offset
        mask = positive & (sell_idx < n)

        if mask.any():
            buy_valid = buy[mask]
            partial = (prices[sell_idx[mask]] - buy_valid) / buy_valid * 100
            cone.append(_cone_point(day_offset / holding_days, partial, CONE_PERCENTILES))

        if progress_callback is not None:
            progress_callback.progress(int((k + 1) * 100 / len(offsets)))

    if len(cone) < len(offsets):
        logger.debug("Cone omitted %d empty checkpoints", len(offsets) - len(cone))

    return cone
