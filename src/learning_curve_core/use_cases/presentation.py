"""
Learning Curve Presentation

Reshapes LearningCurveResult tables for charting: wide-to-long conversion,
display names, and the choice of facet/interaction and color axes.
"""

import pandas as pd

from learning_curve_core.domain.constants import PLOT_MAPPINGS
from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.measures import replace_dupe_measure_names

ID_COLS = ["learner", "percentage"]


def result_to_frame(result: LearningCurveResult) -> pd.DataFrame:
    """Wide table: learner, percentage, one column per measure id"""
    return pd.DataFrame(list(result.rows), columns=result.columns)


def melt_learning_curve(result: LearningCurveResult, pretty_names: bool = True) -> pd.DataFrame:
    """
    Convert a result into a long table for plotting

    Args:
        result: Learning curve result
        pretty_names: Replace measure ids with their (de-duplicated) display names

    Returns:
        DataFrame with learner, percentage, measure, performance columns.
        `measure` is an ordered categorical following the result's measure order.
    """
    if not isinstance(pretty_names, bool):
        raise ValidationError(f"pretty_names must be a boolean, got {pretty_names!r}")

    wide = result_to_frame(result)
    ids = result.measure_ids
    if pretty_names:
        labels = replace_dupe_measure_names(result.measures, "name")
        wide = wide.rename(columns=dict(zip(ids, labels)))
    else:
        labels = ids

    long = wide.melt(
        id_vars=ID_COLS,
        value_vars=labels,
        var_name="measure",
        value_name="performance",
    )
    long["measure"] = pd.Categorical(long["measure"], categories=labels, ordered=True)
    return long


def axis_values(long_df: pd.DataFrame, axis: str) -> list:
    """Distinct values of an axis in display order"""
    col = long_df[axis]
    if isinstance(col.dtype, pd.CategoricalDtype):
        return [c for c in col.cat.categories if c in set(col)]
    return list(dict.fromkeys(col.tolist()))


def resolve_plot_axes(long_df: pd.DataFrame, primary: str = "measure") -> tuple[str | None, str | None]:
    """
    Choose the facet/interaction axis and the color axis

    The axis not chosen as primary becomes the color axis. Either axis is
    dropped (None) when it has only one distinct value.

    Args:
        long_df: Output of melt_learning_curve
        primary: "measure" or "learner"

    Returns:
        (primary axis or None, color axis or None)

    Raises:
        ValidationError: If primary is not one of the mappings
    """
    if primary not in PLOT_MAPPINGS:
        raise ValidationError(f"Axis must be one of {list(PLOT_MAPPINGS)}, got {primary!r}")
    secondary = next(m for m in PLOT_MAPPINGS if m != primary)

    n_distinct = {m: len(axis_values(long_df, m)) for m in PLOT_MAPPINGS}
    primary_axis = primary if n_distinct[primary] > 1 else None
    color_axis = secondary if n_distinct[secondary] > 1 else None
    return primary_axis, color_axis


def filter_axis(long_df: pd.DataFrame, axis: str, value) -> pd.DataFrame:
    """Rows of the long table where `axis` equals `value`"""
    return long_df[long_df[axis] == value].reset_index(drop=True)
