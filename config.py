"""Configuration constants for S&P 500 Return Analyzer."""

from typing import Dict, Tuple

# Application Metadata
APP_TITLE = "S&P 500 Return Analyzer"
APP_ICON = "📈"
APP_SUBTITLE = "Analyze historical returns over different holding periods."
VERSION = "1.0.0"

# Calendar
DAYS_PER_YEAR = 365  # No leap-year adjustment

# Input Bounds
MIN_HOLDING_YEARS = 1
MAX_HOLDING_YEARS = 100
MIN_DCA_YEARS = 1

# Input Defaults
DEFAULT_HOLDING_YEARS = 10
DEFAULT_DCA_BUY_ENABLED = False
DEFAULT_DCA_SELL_ENABLED = False
DEFAULT_DCA_BUY_YEARS = 1
DEFAULT_DCA_SELL_YEARS = 1

# Cone of Certainty Sampling
CONE_MAX_TIME_POINTS = 40
CONE_MAX_SAMPLES = 1000
CONE_PERCENTILES: Tuple[Tuple[str, float], ...] = (
    ("p10", 0.10),
    ("p25", 0.25),
    ("p50", 0.50),
    ("p75", 0.75),
    ("p90", 0.90),
)

# CSV Schema
DEFAULT_DATA_FILE = "stocks.csv"
DATE_COLUMN_ALIASES: Tuple[str, ...] = ("date", "timestamp", "datetime")
PRICE_COLUMN_ALIASES: Tuple[str, ...] = ("close", "adj close", "adj_close", "price")

COLUMN_DTYPES: Dict[str, str] = {
    "date": "datetime64[ns]",
    "close": "float64",
}

# UI Theme
THEME_COLORS = {
    "background": "#111827",
    "surface": "#1F2937",
    "primary": "#22D3EE",  # Cyan
    "secondary": "#06B6D4",
    "warning": "#FFB800",  # Amber
    "error": "#F87171",  # Red
    "win": "#4ADE80",
    "loss": "#F87171",
    "neutral": "#64748B",
    "text": "#FAFAFA",
    "text_dim": "#9CA3AF",
}

# Chart Settings
CHART_HEIGHT = 450
CHART_TEMPLATE = "plotly_dark"
PRICE_LINE_WIDTH = 1.5
MEDIAN_LINE_WIDTH = 2.5
OUTER_BAND_OPACITY = 0.15
INNER_BAND_OPACITY = 0.25
HISTOGRAM_BINS = 40
MAX_X_TICKS = 11

# Performance Settings
MAX_CACHE_ENTRIES = 5
MAX_TABLE_ROWS = 1000

# Export Settings
EXPORT_DATE_FORMAT = "%Y-%m-%d"

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Disclaimers
PROFIT_TOOLTIP = (
    "Based on historical data. Past performance is not an indicator of future results."
)
DCA_TOOLTIP = (
    "Average the {side} price over a period. Assumes buying/selling the same "
    "amount each day for the specified duration."
)
FOOTER_DISCLAIMER = (
    "*Calculations are based on historical S&P 500 data and do not guarantee future returns. "
    "Data analysis is for informational purposes only and does not constitute financial advice."
)
