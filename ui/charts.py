"""Chart generation module using Plotly."""

from typing import List

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from config import (
    CHART_HEIGHT,
    CHART_TEMPLATE,
    HISTOGRAM_BINS,
    INNER_BAND_OPACITY,
    MAX_X_TICKS,
    MEDIAN_LINE_WIDTH,
    OUTER_BAND_OPACITY,
    PRICE_LINE_WIDTH,
    THEME_COLORS,
)
from core.types import ConeDataPoint, DistributionSummary


def _hex_to_rgba(hex_color: str, alpha: float) -> str:
    hex_color = hex_color.lstrip("#")
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


def create_returns_overview_chart(summary: DistributionSummary) -> go.Figure:
    """Create worst / average / best return bar chart."""
    labels = ["Worst", "Average", "Best"]
    values = [summary.worst_return, summary.average_return, summary.best_return]
    colors = [THEME_COLORS["win"] if v > 0 else THEME_COLORS["loss"] for v in values]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=labels,
        y=values,
        marker=dict(color=colors),
        text=[f"{v:.2f}%" for v in values],
        textposition="outside",
        hovertemplate="%{x}: %{y:.2f}%<extra></extra>",
    ))

    fig.add_hline(y=0, line=dict(color=THEME_COLORS["neutral"], width=1))

    fig.update_layout(
        template=CHART_TEMPLATE,
        height=CHART_HEIGHT,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="",
        yaxis_title="Return (%)",
        showlegend=False
    )

    return fig


def cone_to_frame(cone: List[ConeDataPoint]) -> pd.DataFrame:
    """Convert cone points to a DataFrame."""
    columns = ["time_fraction", "p10", "p25", "p50", "p75", "p90"]
    return pd.DataFrame(
        [[getattr(point, c) for c in columns] for point in cone],
        columns=columns,
    )


def year_ticks(holding_years: float) -> List[float]:
    """Evenly spaced x-axis tick positions in years, at most MAX_X_TICKS."""
    num_ticks = int(min(MAX_X_TICKS, holding_years + 1))
    if num_ticks < 2:
        return [0.0, float(holding_years)]
    return np.linspace(0, holding_years, num_ticks).tolist()


def create_cone_chart(cone: List[ConeDataPoint], holding_years: float) -> go.Figure:
    """Create cone of certainty chart with 10-90 and 25-75 percentile bands."""
    fig = go.Figure()

    if cone:
        df = cone_to_frame(cone)
        years = df["time_fraction"] * holding_years
        band_color = THEME_COLORS["secondary"]

        for upper, lower, opacity, name in [
            ("p90", "p10", OUTER_BAND_OPACITY, "10-90th %ile"),
            ("p75", "p25", INNER_BAND_OPACITY, "25-75th %ile"),
        ]:
            fig.add_trace(go.Scatter(
                x=years,
                y=df[lower],
                mode="lines",
                line=dict(width=0),
                hoverinfo="skip",
                showlegend=False,
            ))
            fig.add_trace(go.Scatter(
                x=years,
                y=df[upper],
                name=name,
                mode="lines",
                line=dict(width=0),
                fill="tonexty",
                fillcolor=_hex_to_rgba(band_color, opacity),
                hovertemplate=f"{upper}: %{{y:.2f}}%<extra></extra>",
            ))

        fig.add_trace(go.Scatter(
            x=years,
            y=df["p50"],
            name="Median",
            mode="lines",
            line=dict(color=band_color, width=MEDIAN_LINE_WIDTH),
            hovertemplate="Median: %{y:.2f}%<extra></extra>",
        ))

        fig.add_hline(y=0, line=dict(color=THEME_COLORS["neutral"], width=1))

        fig.update_xaxes(tickvals=year_ticks(holding_years), tickformat=".0f")

    fig.update_layout(
        template=CHART_TEMPLATE,
        height=CHART_HEIGHT,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="Time (Years)",
        yaxis_title="Return (%)",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0)
    )

    return fig


def create_return_distribution(returns_df: pd.DataFrame, bins: int = HISTOGRAM_BINS) -> go.Figure:
    """Create holding-period return histogram."""
    fig = go.Figure()

    if not returns_df.empty and "return_pct" in returns_df.columns:
        returns = returns_df["return_pct"]

        fig.add_trace(go.Histogram(
            x=returns,
            nbinsx=bins,
            name="Return Distribution",
            marker=dict(
                color=THEME_COLORS["secondary"],
                line=dict(color=THEME_COLORS["text"], width=1)
            )
        ))

        # Add mean line
        mean_return = returns.mean()
        fig.add_vline(
            x=mean_return,
            line=dict(color=THEME_COLORS["warning"], width=2, dash="dash"),
            annotation_text=f"Mean: {mean_return:.2f}%",
            annotation_position="top"
        )

    fig.update_layout(
        template=CHART_TEMPLATE,
        height=CHART_HEIGHT,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="Return (%)",
        yaxis_title="Frequency",
        showlegend=False
    )

    return fig


def create_price_chart(price_df: pd.DataFrame) -> go.Figure:
    """Create closing price history chart."""
    fig = go.Figure()

    if not price_df.empty:
        fig.add_trace(go.Scatter(
            x=price_df["date"],
            y=price_df["close"],
            name="Close",
            mode="lines",
            line=dict(color=THEME_COLORS["primary"], width=PRICE_LINE_WIDTH)
        ))

    fig.update_layout(
        template=CHART_TEMPLATE,
        height=CHART_HEIGHT,
        margin=dict(l=10, r=10, t=40, b=10),
        xaxis_title="",
        yaxis_title="Price",
        yaxis_type="log",
        hovermode="x unified",
        showlegend=False
    )

    return fig
