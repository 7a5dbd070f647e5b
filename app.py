"""
S&P 500 Return Analyzer
=======================

Historical holding-period return analysis with optional dollar-cost
averaging and a cone of certainty.
"""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd
import streamlit as st

# Core imports
from core.io import (
    load_csv_data,
    read_price_csv,
    validate_dataframe,
    clean_dataframe,
    compute_file_hash,
)
from core.analysis import run_analysis
from core.errors import AnalysisError
from core.inputs import build_holding_config
from core.metrics import calculate_return_distribution
from core.types import PriceSeries

# UI imports
from ui.layout import (
    apply_custom_theme,
    render_summary_cards,
    render_sidebar,
    render_validation_status,
    render_dca_input,
)
from ui.charts import (
    create_returns_overview_chart,
    create_cone_chart,
    create_return_distribution,
    create_price_chart,
)
from ui.exports import (
    export_returns_csv,
    export_cone_csv,
    export_run_config_json,
)

# Config
from config import (
    APP_TITLE,
    APP_ICON,
    APP_SUBTITLE,
    DEFAULT_DATA_FILE,
    DEFAULT_HOLDING_YEARS,
    DEFAULT_DCA_BUY_ENABLED,
    DEFAULT_DCA_BUY_YEARS,
    DEFAULT_DCA_SELL_ENABLED,
    DEFAULT_DCA_SELL_YEARS,
    FOOTER_DISCLAIMER,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_HOLDING_YEARS,
    MAX_TABLE_ROWS,
    MIN_HOLDING_YEARS,
)

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title=APP_TITLE,
    page_icon=APP_ICON,
    layout="wide",
    initial_sidebar_state="expanded"
)

apply_custom_theme()

# Initialize session state
if "analysis_result" not in st.session_state:
    st.session_state.analysis_result = None

if "price_df" not in st.session_state:
    st.session_state.price_df = None

# Header
st.markdown(f"# {APP_ICON} {APP_TITLE}")
st.caption(APP_SUBTITLE)
st.markdown("---")

tab_data, tab_analysis, tab_returns = st.tabs([
    "📊 Data",
    "📈 Analysis",
    "📋 Returns",
])

# ==================== TAB 1: DATA ====================
with tab_data:
    st.header("Price Data")

    uploaded_csv = st.file_uploader(
        "Upload CSV File",
        type=["csv"],
        help="Header row followed by rows of: date, closing price"
    )

    df_raw = None
    source_name = None

    try:
        if uploaded_csv:
            file_hash = compute_file_hash(uploaded_csv)
            df_raw = load_csv_data(uploaded_csv, file_hash)
            source_name = uploaded_csv.name
        else:
            default_path = Path(__file__).parent / DEFAULT_DATA_FILE
            if default_path.exists():
                df_raw = read_price_csv(default_path)
                source_name = DEFAULT_DATA_FILE
    except ValueError as e:
        st.error(f"Failed to load or parse stock data: {str(e)}")

    if df_raw is None:
        if not uploaded_csv:
            st.info(f"Upload a price CSV or place {DEFAULT_DATA_FILE} next to app.py")
    else:
        st.success(f"Loaded {len(df_raw):,} rows from {source_name}")

        validation = validate_dataframe(df_raw)
        render_validation_status(validation)

        if validation.is_valid:
            price_df = clean_dataframe(df_raw)

            if st.session_state.get("data_source") != source_name:
                st.session_state.analysis_result = None
            st.session_state.price_df = price_df
            st.session_state.data_source = source_name
            st.session_state.validation = validation

            st.subheader("Price History")
            st.plotly_chart(create_price_chart(price_df), use_container_width=True)

            with st.expander("📋 Data Preview"):
                st.dataframe(price_df.head(50), use_container_width=True)
        else:
            st.session_state.price_df = None

# ==================== TAB 2: ANALYSIS ====================
with tab_analysis:
    st.header("Holding Period Analysis")

    if st.session_state.price_df is None:
        st.info("👈 Please load price data in the Data tab first")
        st.stop()

    col_left, col_right = st.columns(2)

    with col_left:
        holding_years = st.number_input(
            "Holding Period (Years)",
            min_value=MIN_HOLDING_YEARS,
            max_value=MAX_HOLDING_YEARS,
            value=DEFAULT_HOLDING_YEARS,
            step=1,
        )

    with col_right:
        dca_buy, dca_buy_years = render_dca_input(
            "Buy", DEFAULT_DCA_BUY_ENABLED, DEFAULT_DCA_BUY_YEARS, disabled=False
        )
        dca_sell, dca_sell_years = render_dca_input(
            "Sell", DEFAULT_DCA_SELL_ENABLED, DEFAULT_DCA_SELL_YEARS, disabled=False
        )

    run_button = st.button(
        "▶️ Calculate",
        type="primary",
        use_container_width=True
    )

    if run_button:
        st.session_state.analysis_result = None
        progress_bar = st.progress(0)

        try:
            config = build_holding_config(
                holding_period_years=holding_years,
                dca_buy_enabled=dca_buy,
                dca_buy_period_years=dca_buy_years,
                dca_sell_enabled=dca_sell,
                dca_sell_period_years=dca_sell_years,
            )

            with st.spinner("Calculating..."):
                series = PriceSeries.from_frame(st.session_state.price_df)
                result = run_analysis(series, config, progress_callback=progress_bar)

            st.session_state.analysis_result = result
            st.session_state.params = {
                "holding_period_years": int(holding_years),
                "dca_buy_enabled": dca_buy,
                "dca_buy_period_years": dca_buy_years if dca_buy else None,
                "dca_sell_enabled": dca_sell,
                "dca_sell_period_years": dca_sell_years if dca_sell else None,
                **config.to_dict(),
            }

        except AnalysisError as e:
            logger.info("Analysis rejected: %s", e)
            st.error(str(e))
        finally:
            progress_bar.empty()

    result = st.session_state.analysis_result

    if result is None:
        st.caption('Enter a holding period and click "Calculate" to see the analysis.')
    else:
        st.markdown("---")
        render_summary_cards(result.summary)

        st.subheader("Returns Overview")
        st.plotly_chart(create_returns_overview_chart(result.summary), use_container_width=True)

        if result.has_cone:
            st.subheader("Cone of Certainty")
            st.caption("Historical return distribution over time")
            st.plotly_chart(
                create_cone_chart(result.cone, result.holding_years),
                use_container_width=True
            )

        st.subheader("Return Distribution")
        st.plotly_chart(create_return_distribution(result.returns), use_container_width=True)

        with st.expander("📊 Distribution Statistics"):
            dist = calculate_return_distribution(result.returns)
            col1, col2, col3, col4 = st.columns(4)
            col1.metric("Mean", f"{dist['mean']:.2f}%")
            col2.metric("Median", f"{dist['median']:.2f}%")
            col3.metric("Std Dev", f"{dist['std']:.2f}%")
            col4.metric("Skew", f"{dist['skew']:.2f}")

        st.caption(FOOTER_DISCLAIMER)

# ==================== TAB 3: RETURNS ====================
with tab_returns:
    st.header("Sampled Returns")

    result = st.session_state.analysis_result

    if result is None:
        st.info("👈 Run an analysis first")
    else:
        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')

        col1, col2, col3 = st.columns(3)

        with col1:
            st.download_button(
                "📥 Download Returns CSV",
                data=export_returns_csv(result.returns),
                file_name=f"returns_{stamp}.csv",
                mime="text/csv"
            )

        with col2:
            st.download_button(
                "📥 Download Cone CSV",
                data=export_cone_csv(result.cone, result.holding_years),
                file_name=f"cone_{stamp}.csv",
                mime="text/csv",
                disabled=not result.has_cone
            )

        with col3:
            data_info = {
                "source": st.session_state.get("data_source"),
                "rows": len(st.session_state.price_df),
            }
            validation = st.session_state.get("validation")
            if validation is not None and validation.date_range:
                data_info["start_date"] = validation.date_range[0].strftime("%Y-%m-%d")
                data_info["end_date"] = validation.date_range[1].strftime("%Y-%m-%d")

            config_json = export_run_config_json(
                data_info=data_info,
                parameters=st.session_state.params,
                summary=result.summary.to_dict()
            )

            st.download_button(
                "📥 Download Config JSON",
                data=config_json,
                file_name=f"config_{stamp}.json",
                mime="application/json"
            )

        returns_display = result.returns.copy()
        returns_display["start_date"] = pd.to_datetime(returns_display["start_date"]).dt.strftime("%Y-%m-%d")
        for col in ["buy_price", "sell_price", "return_pct"]:
            returns_display[col] = returns_display[col].map(lambda x: f"{x:.2f}")

        if len(returns_display) > MAX_TABLE_ROWS:
            st.caption(f"Showing last {MAX_TABLE_ROWS} of {len(returns_display)} periods")
            returns_display = returns_display.tail(MAX_TABLE_ROWS)

        st.dataframe(returns_display, use_container_width=True, height=500)

# Render sidebar
render_sidebar({
    "has_results": st.session_state.analysis_result is not None,
    "summary": st.session_state.analysis_result.summary.to_dict()
    if st.session_state.analysis_result else {},
})
