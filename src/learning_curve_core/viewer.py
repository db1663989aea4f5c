"""
learning-curve-core Result Viewer

Minimal Streamlit app for browsing learning curves interactively.
The interaction axis (measure or learner) is selectable from a drop-down menu;
the other axis is mapped to color.

Usage:
    pip install -e ".[viewer]"
    streamlit run src/learning_curve_core/viewer.py
    streamlit run src/learning_curve_core/viewer.py -- --results-dir results

Requires the package to be installed (e.g. via ``pip install -e .``).
"""

from __future__ import annotations

import argparse
from pathlib import Path

import streamlit as st

from learning_curve_core.curve_config import PlotConfig, load_config
from learning_curve_core.domain.constants import PLOT_MAPPINGS
from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.plotting import build_curve_figure
from learning_curve_core.result_io import find_results, load_result
from learning_curve_core.use_cases.presentation import (
    axis_values,
    filter_axis,
    melt_learning_curve,
    resolve_plot_axes,
    result_to_frame,
)


def render_learning_curve_app(
    result: LearningCurveResult,
    interaction: str = "measure",
    pretty_names: bool = True,
    config: PlotConfig | None = None,
) -> None:
    """Render the learning curve section with a selector for the interaction axis."""
    st.header("Learning Curve")

    long_df = melt_learning_curve(result, pretty_names=pretty_names)
    interaction_axis, color = resolve_plot_axes(long_df, interaction)

    if interaction_axis is None:
        fig = build_curve_figure(long_df, color, title=f"Learning Curve: {result.task_id}", config=config)
    else:
        selected = st.selectbox(
            f"choose a {interaction_axis}",
            options=axis_values(long_df, interaction_axis),
        )
        subset = filter_axis(long_df, interaction_axis, selected)
        fig = build_curve_figure(subset, color, title=f"{result.task_id}: {selected}", config=config)

    st.plotly_chart(fig, use_container_width=True)


def _render_table(result: LearningCurveResult) -> None:
    """Render the result table."""
    st.header("Learning Curve Data")
    st.caption(f"Measures: {', '.join(m.name for m in result.measures)}")
    st.dataframe(result_to_frame(result), use_container_width=True, hide_index=True)


def main() -> None:
    # Parse --results-dir from Streamlit args (after --)
    parser = argparse.ArgumentParser()
    parser.add_argument("--results-dir", default="results")
    args, _ = parser.parse_known_args()

    results_dir = Path(args.results_dir)
    config = load_config()

    st.set_page_config(page_title="learning-curve-core", layout="wide")
    st.title("learning-curve-core Results")

    if not results_dir.exists():
        st.error(f"Results directory not found: `{results_dir}`")
        st.info("Generate a learning curve first:\n```\npython -m learning_curve_core.runner --data data.csv --target y --learners classif.tree\n```")
        return

    results = find_results(results_dir)
    if not results:
        st.warning(f"No result files found in `{results_dir}/`")
        st.info("Generate a learning curve first:\n```\npython -m learning_curve_core.runner --data data.csv --target y --learners classif.tree\n```")
        return

    # Run selector
    run_ids = [r["run_id"] for r in results]
    selected_run_id = st.sidebar.selectbox("Run", run_ids, index=0)
    selected = next(r for r in results if r["run_id"] == selected_run_id)
    result = load_result(selected["path"])

    # Sidebar: plot options
    interaction = st.sidebar.radio(
        "Interaction",
        options=list(PLOT_MAPPINGS),
        index=list(PLOT_MAPPINGS).index(config.plot.facet) if config.plot.facet in PLOT_MAPPINGS else 0,
    )
    pretty_names = st.sidebar.checkbox("Pretty names", value=config.plot.pretty_names)

    # Sidebar info
    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Task**: {result.task_id}")
    st.sidebar.markdown(f"**Learners**: {len(result.learners)}")
    st.sidebar.markdown(f"**Percentages**: {len(result.percentages)}")
    st.sidebar.markdown(f"**Rows**: {len(result.rows)}")

    render_learning_curve_app(result, interaction=interaction, pretty_names=pretty_names, config=config.plot)
    _render_table(result)


if __name__ == "__main__":
    main()
