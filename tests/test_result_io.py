"""Tests for result persistence"""

import json

import pandas as pd
import pytest

from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.domain.value_objects import CurveMeasure
from learning_curve_core.result_io import find_results, load_result, result_paths, save_result


def _result() -> LearningCurveResult:
    return LearningCurveResult(
        task_id="sonar",
        measures=(CurveMeasure("acc.test.mean", "Accuracy"), CurveMeasure("acc.test.sd", "Accuracy", "test.sd")),
        rows=(
            {"learner": "classif.tree", "percentage": 0.5, "acc.test.mean": 0.7, "acc.test.sd": 0.05},
            {"learner": "classif.tree", "percentage": 1.0, "acc.test.mean": 0.8, "acc.test.sd": 0.04},
        ),
    )


class TestResultPaths:
    def test_paths(self, tmp_path):
        paths = result_paths(tmp_path, "run1")
        assert paths["json"] == tmp_path / "learning_curve_run1.json"
        assert paths["csv"] == tmp_path / "learning_curve_run1.csv"
        assert paths["html"] == tmp_path / "learning_curve_run1.html"


class TestSaveAndLoad:
    def test_save_and_load(self, tmp_path):
        paths = result_paths(tmp_path, "run1")
        save_result(_result(), paths["json"], paths["csv"])

        assert load_result(paths["json"]) == _result()

        table = pd.read_csv(paths["csv"])
        assert list(table.columns) == ["learner", "percentage", "acc.test.mean", "acc.test.sd"]
        assert len(table) == 2

    def test_csv_is_optional(self, tmp_path):
        paths = result_paths(tmp_path, "run1")
        save_result(_result(), paths["json"])
        assert paths["json"].exists()
        assert not paths["csv"].exists()

    def test_missing_field(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"task_id": "sonar", "rows": []}), encoding="utf-8")
        with pytest.raises(KeyError, match="measures"):
            load_result(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_result(tmp_path / "missing.json")


class TestFindResults:
    def test_newest_first(self, tmp_path):
        for run_id in ("20240101_000000", "20240301_000000", "20240201_000000"):
            save_result(_result(), result_paths(tmp_path, run_id)["json"])
        (tmp_path / "other.json").write_text("{}", encoding="utf-8")

        found = find_results(tmp_path)
        assert [r["run_id"] for r in found] == ["20240301_000000", "20240201_000000", "20240101_000000"]

    def test_empty_directory(self, tmp_path):
        assert find_results(tmp_path) == []
