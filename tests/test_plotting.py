"""Tests for learning curve plots"""

import plotly.graph_objects as go
import pytest

from learning_curve_core.curve_config import PlotConfig
from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import CurveMeasure
from learning_curve_core.plotting import facet_grid, plot_learning_curve


def _result(learners=("A", "B"), measure_ids=("acc", "mmce")) -> LearningCurveResult:
    names = {"acc": "Accuracy", "mmce": "Mean misclassification error", "ber": "Balanced error rate"}
    measures = tuple(CurveMeasure(mid, names[mid]) for mid in measure_ids)
    rows = []
    for learner in learners:
        for perc in (1.0, 0.2, 0.5):
            row = {"learner": learner, "percentage": perc}
            row.update({mid: perc / 2 for mid in measure_ids})
            rows.append(row)
    return LearningCurveResult(task_id="sonar", measures=measures, rows=tuple(rows))


class TestFacetGrid:
    @pytest.mark.parametrize("n, expected", [(1, (1, 1)), (2, (1, 2)), (3, (2, 2)), (5, (2, 3))])
    def test_default_shape(self, n, expected):
        assert facet_grid(n) == expected

    def test_fixed_rows(self):
        assert facet_grid(3, nrow=3) == (3, 1)

    def test_fixed_columns(self):
        assert facet_grid(5, ncol=2) == (3, 2)

    def test_grid_too_small(self):
        with pytest.raises(ValidationError, match="cannot hold"):
            facet_grid(5, nrow=2, ncol=2)

    @pytest.mark.parametrize("value", [0, -1, 1.5, True])
    def test_invalid_size(self, value):
        with pytest.raises(ValidationError, match="positive integer"):
            facet_grid(2, nrow=value)


class TestPlotLearningCurve:
    def test_facet_by_measure(self):
        fig = plot_learning_curve(_result())
        assert isinstance(fig, go.Figure)
        assert fig.layout.title.text == "Learning Curve: sonar"
        titles = [a.text for a in fig.layout.annotations]
        assert titles == ["Accuracy", "Mean misclassification error"]
        # one trace per learner per panel
        assert len(fig.data) == 4
        assert [t.name for t in fig.data] == ["A", "B", "A", "B"]

    def test_legend_only_on_first_panel(self):
        fig = plot_learning_curve(_result())
        assert [t.showlegend for t in fig.data] == [True, True, False, False]

    def test_traces_sorted_by_percentage(self):
        fig = plot_learning_curve(_result())
        assert list(fig.data[0].x) == [0.2, 0.5, 1.0]
        assert list(fig.data[0].y) == [0.1, 0.25, 0.5]

    def test_facet_by_learner(self):
        fig = plot_learning_curve(_result(), facet="learner", pretty_names=False)
        titles = [a.text for a in fig.layout.annotations]
        assert titles == ["A", "B"]
        assert [t.name for t in fig.data] == ["acc", "mmce", "acc", "mmce"]

    def test_single_measure_single_panel(self):
        fig = plot_learning_curve(_result(measure_ids=("acc",)))
        assert not fig.layout.annotations
        assert [t.name for t in fig.data] == ["A", "B"]

    def test_single_learner_single_measure(self):
        fig = plot_learning_curve(_result(learners=("A",), measure_ids=("acc",)))
        assert len(fig.data) == 1
        assert fig.data[0].showlegend is False

    def test_wrapped_facets(self):
        fig = plot_learning_curve(_result(measure_ids=("acc", "mmce", "ber")), facet_wrap_ncol=1)
        assert len(fig.layout.annotations) == 3
        assert fig.layout.height == 900

    def test_height_from_config(self):
        fig = plot_learning_curve(_result(), config=PlotConfig(height=520))
        assert fig.layout.height == 520

    def test_invalid_facet(self):
        with pytest.raises(ValidationError):
            plot_learning_curve(_result(), facet="percentage")

    def test_invalid_pretty_names(self):
        with pytest.raises(ValidationError):
            plot_learning_curve(_result(), pretty_names=1)
