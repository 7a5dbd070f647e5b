"""UI module for S&P 500 Return Analyzer."""

__all__ = [
    "apply_custom_theme",
    "render_summary_cards",
    "render_sidebar",
    "render_dca_input",
    "create_returns_overview_chart",
    "create_cone_chart",
    "create_return_distribution",
    "create_price_chart",
    "export_returns_csv",
    "export_cone_csv",
    "export_run_config_json",
]
