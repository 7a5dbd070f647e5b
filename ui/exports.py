"""Export utilities for CSV and JSON data."""

import json
import uuid
from datetime import datetime
from typing import Any, Dict, List

import pandas as pd

from config import EXPORT_DATE_FORMAT, VERSION
from core.types import ConeDataPoint
from ui.charts import cone_to_frame


def export_returns_csv(returns_df: pd.DataFrame) -> str:
    """
    Export sampled returns to CSV string.

    Args:
        returns_df: Returns DataFrame

    Returns:
        CSV string
    """
    if returns_df.empty:
        return "No returns to export"

    df = returns_df.copy()

    if "start_date" in df.columns:
        df["start_date"] = pd.to_datetime(df["start_date"]).dt.strftime(EXPORT_DATE_FORMAT)

    return df.to_csv(index=False)


def export_cone_csv(cone: List[ConeDataPoint], holding_years: float) -> str:
    """
    Export cone of certainty points to CSV string.

    Args:
        cone: Cone points
        holding_years: Holding period used to add an elapsed-years column

    Returns:
        CSV string
    """
    if not cone:
        return "No cone data to export"

    df = cone_to_frame(cone)
    df.insert(1, "years", df["time_fraction"] * holding_years)

    return df.to_csv(index=False)


def export_run_config_json(
    data_info: Dict[str, Any],
    parameters: Dict[str, Any],
    summary: Dict[str, Any]
) -> str:
    """
    Export run configuration and results to JSON string.

    Args:
        data_info: Information about input data
        parameters: Analysis parameters
        summary: Summary statistics

    Returns:
        Formatted JSON string
    """
    config = {
        "run_id": str(uuid.uuid4()),
        "timestamp": datetime.now().isoformat(),
        "version": VERSION,
        "data": data_info,
        "parameters": parameters,
        "results": summary
    }

    return json.dumps(config, indent=2, default=str)
