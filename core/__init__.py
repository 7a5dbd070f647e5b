"""Core module for S&P 500 Return Analyzer."""

__all__ = [
    "load_csv_data",
    "load_price_series",
    "validate_dataframe",
    "clean_dataframe",
    "build_holding_config",
    "compute_returns",
    "summarize",
    "compute_cone",
    "run_analysis",
    "PriceSeries",
    "HoldingPeriodConfig",
    "AnalysisResult",
]
