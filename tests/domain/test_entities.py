"""Tests for domain entities"""

import numpy as np
import pandas as pd
import pytest
from sklearn.tree import DecisionTreeClassifier

from learning_curve_core.domain.entities import (
    Learner,
    LearningCurveResult,
    Task,
)
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import CurveMeasure


def _frame(n: int = 20, labels=("M", "R")) -> pd.DataFrame:
    x = np.linspace(-1, 1, n)
    return pd.DataFrame({
        "x1": x,
        "x2": x ** 2,
        "y": np.where(x > 0, labels[0], labels[1]),
    })


def _result(n_rows: int = 2) -> LearningCurveResult:
    rows = tuple(
        {"learner": "A", "percentage": (i + 1) / n_rows, "acc": 0.5 + i * 0.01}
        for i in range(n_rows)
    )
    return LearningCurveResult(
        task_id="sonar",
        measures=(CurveMeasure(id="acc", name="Accuracy"),),
        rows=rows,
    )


class TestTask:
    def test_classification_task(self):
        task = Task(task_id="t1", data=_frame(), target="y", task_type="classif")
        assert task.size == 20
        assert list(task.features.columns) == ["x1", "x2"]
        assert task.class_levels == ["M", "R"]
        assert task.positive == "M"  # first sorted level
        assert task.is_binary is True
        assert task.supports_stratification is True

    def test_explicit_positive_class(self):
        task = Task(task_id="t1", data=_frame(), target="y", task_type="classif", positive="R")
        assert task.positive == "R"

    def test_positive_class_must_be_a_level(self):
        with pytest.raises(ValidationError, match="not a level"):
            Task(task_id="t1", data=_frame(), target="y", task_type="classif", positive="X")

    def test_regression_task(self):
        data = _frame()
        data["y"] = data["x1"] * 2.0
        task = Task(task_id="t2", data=data, target="y", task_type="regr")
        assert task.class_levels == []
        assert task.positive is None
        assert task.is_binary is False
        assert task.supports_stratification is False

    def test_unknown_task_type(self):
        with pytest.raises(ValidationError, match="Unknown task type"):
            Task(task_id="t1", data=_frame(), target="y", task_type="surv")

    def test_missing_target(self):
        with pytest.raises(ValidationError, match="Target column 'z' not found"):
            Task(task_id="t1", data=_frame(), target="z", task_type="classif")

    def test_single_class_rejected(self):
        data = _frame()
        data["y"] = "M"
        with pytest.raises(ValidationError, match="at least 2 classes"):
            Task(task_id="t1", data=data, target="y", task_type="classif")

    def test_positive_class_given_as_string_matches_integer_level(self):
        data = _frame()
        data["y"] = [0, 1] * 10
        task = Task(task_id="t1", data=data, target="y", task_type="classif", positive="1")
        assert task.positive == 1
        assert isinstance(task.positive, int)

    def test_numeric_levels_sorted_naturally(self):
        data = _frame(30)
        data["y"] = [9, 10, 2] * 10
        task = Task(task_id="t1", data=data, target="y", task_type="classif")
        assert task.class_levels == [2, 9, 10]
        assert task.positive == 2

    def test_multiclass_is_not_binary(self):
        data = _frame(30)
        data["y"] = ["a", "b", "c"] * 10
        task = Task(task_id="t3", data=data, target="y", task_type="classif")
        assert task.class_levels == ["a", "b", "c"]
        assert task.is_binary is False


class TestLearner:
    def test_make_estimator_passes_params(self):
        learner = Learner(id="tree", task_type="classif", factory=DecisionTreeClassifier, params={"max_depth": 2})
        est = learner.make_estimator()
        assert isinstance(est, DecisionTreeClassifier)
        assert est.max_depth == 2

    def test_make_estimator_returns_fresh_instances(self):
        learner = Learner(id="tree", task_type="classif", factory=DecisionTreeClassifier)
        assert learner.make_estimator() is not learner.make_estimator()

    def test_with_id(self):
        learner = Learner(id="tree", task_type="classif", factory=DecisionTreeClassifier)
        renamed = learner.with_id("tree.1")
        assert renamed.id == "tree.1"
        assert learner.id == "tree"
        assert renamed.factory is learner.factory


class TestLearningCurveResult:
    def test_derived_properties(self):
        result = LearningCurveResult(
            task_id="t",
            measures=(CurveMeasure(id="acc", name="Accuracy"), CurveMeasure(id="mmce", name="MMCE")),
            rows=(
                {"learner": "A", "percentage": 0.5, "acc": 0.8, "mmce": 0.2},
                {"learner": "A", "percentage": 1.0, "acc": 0.9, "mmce": 0.1},
                {"learner": "B", "percentage": 0.5, "acc": 0.7, "mmce": 0.3},
                {"learner": "B", "percentage": 1.0, "acc": 0.6, "mmce": 0.4},
            ),
        )
        assert result.measure_ids == ["acc", "mmce"]
        assert result.learners == ["A", "B"]
        assert result.percentages == [0.5, 1.0]
        assert result.columns == ["learner", "percentage", "acc", "mmce"]

    def test_summary_text(self):
        text = str(_result())
        lines = text.splitlines()
        assert lines[0] == "LearningCurveData:"
        assert lines[1] == "Task: sonar"
        assert lines[2] == "Measures: Accuracy"
        assert lines[3].split() == ["learner", "percentage", "acc"]
        assert lines[4].split() == ["A", "0.5000", "0.5000"]
        assert lines[5].split() == ["A", "1.0000", "0.5100"]

    def test_summary_previews_first_rows_only(self):
        result = _result(n_rows=8)
        preview_lines = result.preview().splitlines()
        assert len(preview_lines) == 1 + 6

    def test_dict_round_trip(self):
        result = _result()
        restored = LearningCurveResult.from_dict(result.to_dict())
        assert restored == result
