"""
Use Cases Layer

Aggregates business logic and provides use cases called from the runner and viewer.
"""

from learning_curve_core.use_cases.learning_curve import (
    LearningCurveBuilder,
    check_percentages,
    generate_learning_curve_data,
    make_sampling_variants,
)
from learning_curve_core.use_cases.presentation import (
    axis_values,
    filter_axis,
    melt_learning_curve,
    resolve_plot_axes,
    result_to_frame,
)

__all__ = [
    # learning_curve
    "LearningCurveBuilder",
    "check_percentages",
    "generate_learning_curve_data",
    "make_sampling_variants",
    # presentation
    "axis_values",
    "filter_axis",
    "melt_learning_curve",
    "resolve_plot_axes",
    "result_to_frame",
]
