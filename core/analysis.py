"""End-to-end return analysis: sampling, summary and cone."""

import logging
import time
from typing import Callable, Optional

from config import CONE_MAX_SAMPLES, CONE_MAX_TIME_POINTS
from core.cone import compute_cone
from core.metrics import summarize
from core.sampler import compute_returns
from core.types import AnalysisResult, HoldingPeriodConfig, PriceSeries

logger = logging.getLogger(__name__)


def run_analysis(
    series: PriceSeries,
    config: HoldingPeriodConfig,
    max_time_points: int = CONE_MAX_TIME_POINTS,
    max_samples: int = CONE_MAX_SAMPLES,
    should_cancel: Optional[Callable[[], bool]] = None,
    progress_callback: Optional[any] = None,
) -> AnalysisResult:
    """
    Run the full analysis for one configuration.

    Steps:
    1. Sample holding-period returns for every valid start
    2. Summarize the return distribution
    3. Estimate the cone of certainty

    Args:
        series: Price history
        config: Validated holding configuration
        max_time_points: Cone time checkpoint budget
        max_samples: Cone start position budget per checkpoint
        should_cancel: Optional cancellation check for the cone loop
        progress_callback: Optional Streamlit progress bar

    Returns:
        AnalysisResult with returns, summary and cone

    Raises:
        AnalysisError: Any component failure, unchanged
    """
    start = time.perf_counter()

    returns = compute_returns(series, config)
    summary = summarize(returns)

    cone = compute_cone(
        series,
        config,
        max_time_points=max_time_points,
        max_samples=max_samples,
        should_cancel=should_cancel,
        progress_callback=progress_callback,
    )

    elapsed = time.perf_counter() - start
    logger.info(
        "Analyzed %d periods (holding %d days, %d cone points) in %.3fs",
        summary.total_periods, config.holding_days, len(cone), elapsed,
    )

    return AnalysisResult(
        config=config,
        returns=returns,
        summary=summary,
        cone=cone,
    )
