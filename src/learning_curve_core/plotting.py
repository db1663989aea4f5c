"""
Learning Curve Plots

Static plotly figures of training-set percentage vs. performance.
"""

from __future__ import annotations

import math

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from learning_curve_core.curve_config import PlotConfig
from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.use_cases.presentation import (
    axis_values,
    filter_axis,
    melt_learning_curve,
    resolve_plot_axes,
)

# -- Colors --
CURVE_COLORS = [
    "#1a73e8", "#e8710a", "#34a853", "#ea4335", "#9334e6",
    "#f538a0", "#00897b", "#6d4c41", "#546e7a", "#d500f9",
]
DEFAULT_COLOR = "#546e7a"


def _color_map(long_df: pd.DataFrame, color: str | None) -> dict:
    if color is None:
        return {}
    return {
        v: CURVE_COLORS[i % len(CURVE_COLORS)]
        for i, v in enumerate(axis_values(long_df, color))
    }


def _add_curve_traces(
    fig: go.Figure,
    long_df: pd.DataFrame,
    color: str | None,
    colors: dict,
    row: int | None = None,
    col: int | None = None,
    showlegend: bool = True,
) -> None:
    """Add one points+lines trace per value of the color axis"""
    if color is None:
        groups = [(None, long_df)]
    else:
        groups = [(v, filter_axis(long_df, color, v)) for v in axis_values(long_df, color)]

    for value, sub in groups:
        sub = sub.sort_values("percentage", kind="stable")
        line_color = colors.get(value, DEFAULT_COLOR)
        trace = go.Scatter(
            x=sub["percentage"].tolist(),
            y=sub["performance"].tolist(),
            mode="lines+markers",
            name=str(value) if value is not None else "performance",
            legendgroup=str(value),
            showlegend=showlegend and value is not None,
            line=dict(color=line_color, width=2),
            marker=dict(color=line_color, size=8),
        )
        if row is None:
            fig.add_trace(trace)
        else:
            fig.add_trace(trace, row=row, col=col)


def facet_grid(n_panels: int, nrow: int | None = None, ncol: int | None = None) -> tuple[int, int]:
    """
    Grid shape for wrapped facets

    Args:
        n_panels: Number of panels
        nrow: Requested number of rows
        ncol: Requested number of columns

    Returns:
        (nrow, ncol)

    Raises:
        ValidationError: If a requested size is not a positive integer or the grid is too small
    """
    for name, value in (("facet_wrap_nrow", nrow), ("facet_wrap_ncol", ncol)):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
            raise ValidationError(f"{name} must be a positive integer, got {value!r}")

    if nrow is None and ncol is None:
        ncol = math.ceil(math.sqrt(n_panels))
        nrow = math.ceil(n_panels / ncol)
    elif ncol is None:
        ncol = math.ceil(n_panels / nrow)
    elif nrow is None:
        nrow = math.ceil(n_panels / ncol)

    if nrow * ncol < n_panels:
        raise ValidationError(f"A {nrow}x{ncol} grid cannot hold {n_panels} panels")
    return nrow, ncol


def build_curve_figure(
    long_df: pd.DataFrame,
    color: str | None = None,
    title: str | None = None,
    config: PlotConfig | None = None,
) -> go.Figure:
    """
    Single-panel learning curve figure

    Args:
        long_df: Output of melt_learning_curve (possibly filtered)
        color: Axis mapped to color ("measure", "learner" or None)
        title: Figure title
        config: PlotConfig

    Returns:
        plotly Figure
    """
    if config is None:
        config = PlotConfig()

    fig = go.Figure()
    _add_curve_traces(fig, long_df, color, _color_map(long_df, color))
    fig.update_layout(
        title=title,
        xaxis_title="Percentage",
        yaxis_title="Performance",
        legend_title=color.capitalize() if color else None,
        template=config.template,
        height=config.height,
    )
    return fig


def plot_learning_curve(
    result: LearningCurveResult,
    facet: str = "measure",
    pretty_names: bool = True,
    facet_wrap_nrow: int | None = None,
    facet_wrap_ncol: int | None = None,
    config: PlotConfig | None = None,
) -> go.Figure:
    """
    Plot learning curve data

    The facet axis gets one panel per value (independent y axes); the other
    axis is mapped to color. Axes with a single distinct value are not used.

    Args:
        result: Learning curve result
        facet: "measure" or "learner"
        pretty_names: Use measure display names instead of ids
        facet_wrap_nrow: Number of panel rows
        facet_wrap_ncol: Number of panel columns
        config: PlotConfig

    Returns:
        plotly Figure
    """
    if config is None:
        config = PlotConfig()

    long_df = melt_learning_curve(result, pretty_names=pretty_names)
    facet_axis, color = resolve_plot_axes(long_df, facet)
    title = f"Learning Curve: {result.task_id}"

    if facet_axis is None:
        return build_curve_figure(long_df, color, title=title, config=config)

    panels = axis_values(long_df, facet_axis)
    nrow, ncol = facet_grid(len(panels), facet_wrap_nrow, facet_wrap_ncol)
    colors = _color_map(long_df, color)

    fig = make_subplots(
        rows=nrow,
        cols=ncol,
        subplot_titles=[str(p) for p in panels],
        vertical_spacing=0.12 if nrow > 1 else 0.0,
        horizontal_spacing=0.08,
    )
    for idx, panel in enumerate(panels):
        row = idx // ncol + 1
        col = idx % ncol + 1
        _add_curve_traces(
            fig,
            filter_axis(long_df, facet_axis, panel),
            color,
            colors,
            row=row,
            col=col,
            showlegend=(idx == 0),
        )
        fig.update_xaxes(title_text="Percentage", row=row, col=col)

    fig.update_layout(
        title=title,
        legend_title=color.capitalize() if color else None,
        template=config.template,
        height=max(config.height, 300 * nrow),
    )
    return fig
