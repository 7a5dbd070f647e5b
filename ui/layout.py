"""Layout components and custom theme for Streamlit UI."""

from typing import Any, Dict, Optional, Tuple

import streamlit as st

from config import (
    APP_TITLE,
    DCA_TOOLTIP,
    FOOTER_DISCLAIMER,
    MAX_HOLDING_YEARS,
    MIN_DCA_YEARS,
    PROFIT_TOOLTIP,
    THEME_COLORS,
    VERSION,
)
from core.types import DistributionSummary


def apply_custom_theme():
    """
    Apply dark cyan theme with custom CSS.

    Features:
    - Dark background
    - Cyan headline and metric accents
    - Monospace fonts for numbers
    """
    st.markdown(f"""
    <style>
        :root {{
            --primary-color: {THEME_COLORS['primary']};
            --background-color: {THEME_COLORS['background']};
            --surface-color: {THEME_COLORS['surface']};
            --text-color: {THEME_COLORS['text']};
        }}

        h1 {{
            color: {THEME_COLORS['primary']};
            font-weight: 700;
            text-align: center;
        }}

        h3 {{
            color: {THEME_COLORS['text']};
            font-size: 1.3rem;
        }}

        /* Metric cards */
        [data-testid="stMetric"] {{
            background-color: {THEME_COLORS['surface']};
            border-radius: 8px;
            padding: 1rem 1.25rem;
            text-align: center;
        }}

        [data-testid="stMetricValue"] {{
            font-family: 'JetBrains Mono', 'Consolas', monospace;
            font-size: 2rem;
            font-weight: 700;
        }}

        [data-testid="stMetricLabel"] {{
            font-size: 0.85rem;
            color: {THEME_COLORS['text_dim']};
            text-transform: uppercase;
            letter-spacing: 0.5px;
        }}

        .stButton > button[kind="primary"] {{
            background-color: {THEME_COLORS['secondary']};
            border-color: {THEME_COLORS['secondary']};
            font-weight: 600;
        }}

        hr {{
            border-color: {THEME_COLORS['text_dim']};
            opacity: 0.2;
        }}
    </style>
    """, unsafe_allow_html=True)


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def format_delta(value: float) -> Optional[str]:
    """Signed metric delta; Streamlit reads the arrow direction from the sign."""
    if value == 0:
        return None
    return f"{value:+.2f}%"


def render_summary_cards(summary: DistributionSummary):
    """
    Render headline statistics in a card layout.

    Shows 5 key metrics:
    - Chance of Profit
    - Average Return
    - Total Periods Analyzed
    - Best Return
    - Worst Return

    Args:
        summary: Distribution summary
    """
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric(
            label="Chance of Profit*",
            value=format_percent(summary.profitable_percentage),
            help=PROFIT_TOOLTIP,
        )

    with col2:
        avg = summary.average_return
        st.metric(
            label="Average Return",
            value=format_percent(avg),
            delta=format_delta(avg),
            delta_color="normal",
        )

    with col3:
        st.metric(
            label="Total Periods Analyzed",
            value=f"{summary.total_periods:,}",
        )

    col4, col5 = st.columns(2)

    with col4:
        st.metric("Best Return", format_percent(summary.best_return))

    with col5:
        st.metric("Worst Return", format_percent(summary.worst_return))


def render_dca_input(side: str, default_enabled: bool, default_years: int, disabled: bool) -> Tuple[bool, int]:
    """
    Render one dollar-cost averaging toggle plus its period input.

    Args:
        side: "Buy" or "Sell"
        default_enabled: Initial checkbox state
        default_years: Initial period
        disabled: Disable both widgets

    Returns:
        (enabled, period_years)
    """
    col_toggle, col_years = st.columns([2, 1])

    with col_toggle:
        enabled = st.checkbox(
            f"Dollar-Cost Avg {side}",
            value=default_enabled,
            disabled=disabled,
            help=DCA_TOOLTIP.format(side=side.lower()),
            key=f"dca_{side.lower()}_enabled",
        )

    with col_years:
        years = st.number_input(
            f"{side} Period (Years)",
            min_value=MIN_DCA_YEARS,
            max_value=MAX_HOLDING_YEARS,
            value=default_years,
            step=1,
            disabled=disabled or not enabled,
            key=f"dca_{side.lower()}_years",
        )

    return enabled, int(years)


def render_sidebar(app_state: Dict[str, Any]):
    """
    Render sidebar with quick stats and controls.

    Args:
        app_state: Current application state
    """
    with st.sidebar:
        st.markdown("## ⚙️ Controls")

        if st.button("🗑️ Clear Cache", use_container_width=True):
            st.cache_data.clear()
            st.success("Cache cleared!")
            st.rerun()

        st.markdown("---")

        if app_state.get("has_results", False):
            st.markdown("## 📈 Quick Stats")

            summary = app_state.get("summary", {})

            st.metric("Chance of Profit", format_percent(summary.get("profitable_percentage", 0)))
            st.metric("Average Return", format_percent(summary.get("average_return", 0)))
            st.metric("Periods", f"{summary.get('total_periods', 0):,}")

            st.markdown("---")

        st.markdown("## ℹ️ About")
        st.caption(f"""
        **{APP_TITLE} v{VERSION}**

        Historical holding-period returns with optional
        dollar-cost averaging and a cone of certainty.

        Built with Streamlit, pandas, NumPy, and Plotly.
        """)
        st.caption(FOOTER_DISCLAIMER)


def render_validation_status(validation_result):
    """
    Render data validation status with errors/warnings.

    Args:
        validation_result: ValidationResult object
    """
    if validation_result.is_valid:
        st.success(f"Data validated: {validation_result}")
    else:
        st.error(f"Validation failed: {validation_result}")

    if validation_result.errors:
        with st.expander("❌ Errors", expanded=True):
            for error in validation_result.errors:
                st.error(error)

    if validation_result.warnings:
        with st.expander("⚠️ Warnings"):
            for warning in validation_result.warnings:
                st.warning(warning)
