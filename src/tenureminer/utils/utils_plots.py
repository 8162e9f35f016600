"""
Plotting utilities for tenureminer using Plotly.

- Mean age per reference year with the number of serving members on a
  secondary axis (`plot_age_timeseries`)

The function returns a Plotly Figure so you can either `.show()` it
inline in a notebook or tweak it further before saving with
`save_figure`.

Typical usage:

    from tenureminer.utils.utils_plots import plot_age_timeseries, save_figure

    fig = plot_age_timeseries(summary, title="Durchschnittsalter im Bundestag")
    save_figure(fig, "output/age_timeseries.html")
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

AGE_COLOR = "#E3000F"
MEMBERS_COLOR = "#888888"


def _build_title(main_title: str | None, stand_text: str | None) -> tuple[str | None, int]:
    """Combine main title with an optional subtitle and return (title_text, top_margin)."""
    if main_title and stand_text:
        return (
            f"{main_title}<br><sub style='font-size:0.85em; line-height:0.5;'>{stand_text}</sub>",
            100,
        )
    if main_title:
        return main_title, 50
    if stand_text:
        return stand_text, 60
    return None, 40


def plot_age_timeseries(
    summary: pd.DataFrame,
    *,
    title: str | None = None,
    stand_text: str | None = None,
    show_members: bool = True,
) -> go.Figure:
    """
    Line chart of mean age per year.

    Parameters
    ----------
    summary:
        Output of ``yearly_age_summary`` (needs ``year``, ``age_mean`` and
        ``members``).
    title:
        Optional title.
    stand_text:
        Optional subtitle line, e.g. the data collection date.
    show_members:
        Draw the member count as bars on a secondary y axis.
    """
    required = {"year", "age_mean", "members"}
    missing = required - set(summary.columns)
    if missing:
        raise ValueError(f"Missing required columns in summary: {missing}")

    fig = go.Figure()
    if show_members:
        fig.add_trace(
            go.Bar(
                x=summary["year"],
                y=summary["members"],
                name="Members",
                marker_color=MEMBERS_COLOR,
                opacity=0.35,
                yaxis="y2",
                hovertemplate="Year: %{x}<br>Members: %{y:,.0f}<extra></extra>",
            )
        )
    fig.add_trace(
        go.Scatter(
            x=summary["year"],
            y=summary["age_mean"],
            name="Mean age",
            mode="lines",
            line=dict(color=AGE_COLOR, width=2),
            hovertemplate="Year: %{x}<br>Mean age: %{y:.1f}<extra></extra>",
        )
    )

    title_text, top_margin = _build_title(title, stand_text)
    layout = dict(
        title=dict(text=title_text, x=0.5, xanchor="center", font=dict(size=20)),
        xaxis_title="Year",
        yaxis=dict(title="Mean age (years)"),
        margin=dict(l=10, r=10, t=top_margin, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        plot_bgcolor="white",
    )
    if show_members:
        layout["yaxis2"] = dict(title="Members", overlaying="y", side="right", showgrid=False)
    fig.update_layout(**layout)
    return fig


def save_figure(fig: go.Figure, path: str | Path) -> Path:
    """Write the figure as an HTML file (plotly.js is loaded from the CDN)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(path, include_plotlyjs="cdn")
    logger.info("Plot saved to: %s", path)
    return path
