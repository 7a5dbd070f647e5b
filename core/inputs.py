"""
Caller input validation.

Turns the year-based form fields into a HoldingPeriodConfig. Pure functions,
no series access: invalid input is rejected before any computation starts.
"""

from typing import Any

from config import DAYS_PER_YEAR, MAX_HOLDING_YEARS, MIN_DCA_YEARS, MIN_HOLDING_YEARS
from core.errors import InputValidationError
from core.types import AveragingWindow, HoldingPeriodConfig


def parse_years(value: Any) -> int:
    """
    Parse a whole number of years from a form value.

    Raises:
        InputValidationError: If the value is not a whole number
    """
    if isinstance(value, bool):
        raise InputValidationError(f"Expected a whole number of years, got {value!r}")

    if isinstance(value, str):
        value = value.strip()

    try:
        years = float(value)
    except (TypeError, ValueError):
        raise InputValidationError(f"Expected a whole number of years, got {value!r}")

    if not years.is_integer():
        raise InputValidationError(f"Expected a whole number of years, got {value!r}")
    return int(years)


def build_holding_config(
    holding_period_years: Any,
    dca_buy_enabled: bool = False,
    dca_buy_period_years: Any = MIN_DCA_YEARS,
    dca_sell_enabled: bool = False,
    dca_sell_period_years: Any = MIN_DCA_YEARS,
) -> HoldingPeriodConfig:
    """
    Validate form inputs and build the holding configuration.

    Checks (in order):
    - Holding period is a whole number in [1, 100] years
    - Enabled DCA periods are whole numbers of at least 1 year
    - Enabled DCA periods do not exceed the holding period

    Disabled DCA periods are ignored.

    Args:
        holding_period_years: Holding period in years
        dca_buy_enabled: Average the buy price
        dca_buy_period_years: Buy averaging period in years
        dca_sell_enabled: Average the sell price
        dca_sell_period_years: Sell averaging period in years

    Returns:
        HoldingPeriodConfig in days (years x 365)

    Raises:
        InputValidationError: On any invalid field
    """
    try:
        holding_years = parse_years(holding_period_years)
    except InputValidationError:
        holding_years = None

    if holding_years is None or not MIN_HOLDING_YEARS <= holding_years <= MAX_HOLDING_YEARS:
        raise InputValidationError(
            f"Please enter a valid holding period between {MIN_HOLDING_YEARS} "
            f"and {MAX_HOLDING_YEARS} years.",
            field="holding_period_years",
            context={"value": holding_period_years},
        )

    dca_years = {}
    for side, enabled, raw in (
        ("buy", dca_buy_enabled, dca_buy_period_years),
        ("sell", dca_sell_enabled, dca_sell_period_years),
    ):
        if not enabled:
            continue
        try:
            years = parse_years(raw)
        except InputValidationError:
            years = None
        if years is None or years < MIN_DCA_YEARS:
            raise InputValidationError(
                f"DCA periods must be at least {MIN_DCA_YEARS} year.",
                field=f"dca_{side}_period_years",
                context={"value": raw},
            )
        dca_years[side] = years

    for side, years in dca_years.items():
        if years > holding_years:
            raise InputValidationError(
                "DCA period cannot be longer than the holding period.",
                field=f"dca_{side}_period_years",
                context={"value": years, "holding_period_years": holding_years},
            )

    buy_years = dca_years.get("buy")
    sell_years = dca_years.get("sell")

    return HoldingPeriodConfig(
        holding_days=holding_years * DAYS_PER_YEAR,
        buy_averaging=AveragingWindow(buy_years * DAYS_PER_YEAR) if buy_years else None,
        sell_averaging=AveragingWindow(sell_years * DAYS_PER_YEAR) if sell_years else None,
    )
