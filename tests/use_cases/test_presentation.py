"""Tests for learning curve presentation"""

import pandas as pd
import pytest

from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import CurveMeasure
from learning_curve_core.use_cases.presentation import (
    axis_values,
    filter_axis,
    melt_learning_curve,
    resolve_plot_axes,
    result_to_frame,
)


def _result(learners=("A", "B"), measures=None) -> LearningCurveResult:
    if measures is None:
        measures = (
            CurveMeasure("mmce", "Mean misclassification error"),
            CurveMeasure("acc", "Accuracy"),
        )
    rows = []
    for i, learner in enumerate(learners):
        for perc in (0.5, 1.0):
            row = {"learner": learner, "percentage": perc}
            row.update({m.id: 0.1 * (i + 1) + perc for m in measures})
            rows.append(row)
    return LearningCurveResult(task_id="sonar", measures=tuple(measures), rows=tuple(rows))


class TestResultToFrame:
    def test_wide_table(self):
        df = result_to_frame(_result())
        assert list(df.columns) == ["learner", "percentage", "mmce", "acc"]
        assert len(df) == 4


class TestMeltLearningCurve:
    def test_long_table_with_pretty_names(self):
        long_df = melt_learning_curve(_result())
        assert list(long_df.columns) == ["learner", "percentage", "measure", "performance"]
        assert len(long_df) == 8
        assert axis_values(long_df, "measure") == ["Mean misclassification error", "Accuracy"]

    def test_ids_without_pretty_names(self):
        long_df = melt_learning_curve(_result(), pretty_names=False)
        assert axis_values(long_df, "measure") == ["mmce", "acc"]

    def test_measure_order_follows_result(self):
        measures = (CurveMeasure("zeta", "Zeta"), CurveMeasure("alpha", "Alpha"))
        long_df = melt_learning_curve(_result(measures=measures))
        assert isinstance(long_df["measure"].dtype, pd.CategoricalDtype)
        assert list(long_df["measure"].cat.categories) == ["Zeta", "Alpha"]

    def test_duplicate_display_names_are_disambiguated(self):
        measures = (
            CurveMeasure("acc.test.mean", "Accuracy"),
            CurveMeasure("acc.test.sd", "Accuracy", aggregation="test.sd"),
        )
        long_df = melt_learning_curve(_result(measures=measures))
        assert axis_values(long_df, "measure") == ["Accuracy.test.mean", "Accuracy.test.sd"]

    def test_values_are_preserved(self):
        long_df = melt_learning_curve(_result(), pretty_names=False)
        row = long_df[(long_df["learner"] == "B") & (long_df["percentage"] == 0.5) & (long_df["measure"] == "acc")]
        assert row["performance"].iloc[0] == pytest.approx(0.7)

    def test_pretty_names_must_be_bool(self):
        with pytest.raises(ValidationError, match="pretty_names"):
            melt_learning_curve(_result(), pretty_names="yes")


class TestResolvePlotAxes:
    def test_measure_primary(self):
        assert resolve_plot_axes(melt_learning_curve(_result()), "measure") == ("measure", "learner")

    def test_learner_primary(self):
        assert resolve_plot_axes(melt_learning_curve(_result()), "learner") == ("learner", "measure")

    def test_single_measure_drops_measure_axis(self):
        long_df = melt_learning_curve(_result(measures=(CurveMeasure("acc", "Accuracy"),)))
        assert resolve_plot_axes(long_df, "measure") == (None, "learner")
        assert resolve_plot_axes(long_df, "learner") == ("learner", None)

    def test_single_learner_drops_learner_axis(self):
        long_df = melt_learning_curve(_result(learners=("A",)))
        assert resolve_plot_axes(long_df, "measure") == ("measure", None)

    def test_invalid_axis(self):
        with pytest.raises(ValidationError, match="Axis must be one of"):
            resolve_plot_axes(melt_learning_curve(_result()), "percentage")


class TestFilterAxis:
    def test_filter_learner(self):
        sub = filter_axis(melt_learning_curve(_result()), "learner", "B")
        assert set(sub["learner"]) == {"B"}
        assert len(sub) == 4
        assert list(sub.index) == [0, 1, 2, 3]
