"""Data structures for return analysis."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from config import DAYS_PER_YEAR
from core.errors import InputValidationError


@dataclass(frozen=True)
class PriceSeries:
    """Immutable, date-ordered closing prices stored as read-only numpy arrays."""

    dates: np.ndarray
    prices: np.ndarray

    def __post_init__(self):
        """Freeze arrays and check ordering."""
        dates = np.array(self.dates, dtype="datetime64[ns]")
        prices = np.array(self.prices, dtype=np.float64)

        if dates.shape != prices.shape or dates.ndim != 1:
            raise ValueError(
                f"dates and prices must be 1-D arrays of equal length, "
                f"got {dates.shape} and {prices.shape}"
            )
        if len(dates) > 1 and (np.diff(dates) < np.timedelta64(0, "ns")).any():
            raise ValueError("PriceSeries dates must be non-decreasing")

        dates.flags.writeable = False
        prices.flags.writeable = False
        object.__setattr__(self, "dates", dates)
        object.__setattr__(self, "prices", prices)

    def __len__(self) -> int:
        return len(self.prices)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "PriceSeries":
        """Build from a cleaned DataFrame with ``date`` and ``close`` columns."""
        return cls(
            dates=df["date"].to_numpy(dtype="datetime64[ns]"),
            prices=df["close"].to_numpy(dtype=np.float64),
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"date": self.dates, "close": self.prices})

    @property
    def is_empty(self) -> bool:
        return len(self.prices) == 0

    @property
    def date_range(self) -> Optional[tuple[datetime, datetime]]:
        if self.is_empty:
            return None
        return (
            pd.Timestamp(self.dates[0]).to_pydatetime(),
            pd.Timestamp(self.dates[-1]).to_pydatetime(),
        )


@dataclass(frozen=True)
class AveragingWindow:
    """Dollar-cost averaging window, in trading rows."""

    window_days: int

    def __post_init__(self):
        if int(self.window_days) != self.window_days or self.window_days < 1:
            raise InputValidationError(
                f"Averaging window must be a whole number of days >= 1, got {self.window_days}",
                field="window_days",
            )


@dataclass(frozen=True)
class HoldingPeriodConfig:
    """Holding period plus optional buy/sell averaging windows."""

    holding_days: int
    buy_averaging: Optional[AveragingWindow] = None
    sell_averaging: Optional[AveragingWindow] = None

    def __post_init__(self):
        """Validate window sizes against the holding period."""
        if int(self.holding_days) != self.holding_days or self.holding_days < DAYS_PER_YEAR:
            raise InputValidationError(
                f"Holding period must be at least {DAYS_PER_YEAR} days, got {self.holding_days}",
                field="holding_days",
            )
        for side, window in (("buy", self.buy_averaging), ("sell", self.sell_averaging)):
            if window is not None and window.window_days > self.holding_days:
                raise InputValidationError(
                    "DCA period cannot be longer than the holding period.",
                    field=f"{side}_averaging",
                    context={"window_days": window.window_days, "holding_days": self.holding_days},
                )

    @property
    def buy_window_days(self) -> int:
        return self.buy_averaging.window_days if self.buy_averaging else 1

    @property
    def sell_window_days(self) -> int:
        return self.sell_averaging.window_days if self.sell_averaging else 1

    @property
    def required_window(self) -> int:
        """Rows needed for one complete buy-hold-sell observation."""
        return self.holding_days + (self.sell_window_days - 1 if self.sell_averaging else 0)

    @property
    def holding_years(self) -> float:
        return self.holding_days / DAYS_PER_YEAR

    def to_dict(self) -> Dict[str, object]:
        return {
            "holding_days": self.holding_days,
            "dca_buy_days": self.buy_averaging.window_days if self.buy_averaging else None,
            "dca_sell_days": self.sell_averaging.window_days if self.sell_averaging else None,
        }


@dataclass(frozen=True)
class DistributionSummary:
    """Headline statistics of a holding-period return distribution."""

    total_periods: int
    profitable_percentage: float
    average_return: float
    best_return: float
    worst_return: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_periods": self.total_periods,
            "profitable_percentage": self.profitable_percentage,
            "average_return": self.average_return,
            "best_return": self.best_return,
            "worst_return": self.worst_return,
        }


@dataclass(frozen=True)
class ConeDataPoint:
    """Percentiles of partial returns at one elapsed-time checkpoint."""

    time_fraction: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


@dataclass
class AnalysisResult:
    """Complete analysis results."""

    config: HoldingPeriodConfig
    returns: pd.DataFrame
    summary: DistributionSummary
    cone: List[ConeDataPoint] = field(default_factory=list)

    @property
    def has_cone(self) -> bool:
        """Check if any cone checkpoint produced samples."""
        return len(self.cone) > 0

    @property
    def holding_years(self) -> float:
        return self.config.holding_years


@dataclass
class ValidationResult:
    """Result of data validation."""

    is_valid: bool
    errors: list[str]
    warnings: list[str]
    row_count: int
    dropped_rows: int = 0
    date_range: Optional[tuple[datetime, datetime]] = None

    def __str__(self) -> str:
        """Human-readable validation summary."""
        status = "✅ Valid" if self.is_valid else "❌ Invalid"
        parts = [f"{status} ({self.row_count} rows)"]

        if self.date_range:
            start, end = self.date_range
            parts.append(f"Range: {start.date()} to {end.date()}")

        if self.dropped_rows:
            parts.append(f"Dropped: {self.dropped_rows}")
        if self.errors:
            parts.append(f"Errors: {len(self.errors)}")
        if self.warnings:
            parts.append(f"Warnings: {len(self.warnings)}")

        return " | ".join(parts)
