"""Tests for curve_config"""

import os
from unittest.mock import patch

import pytest

from learning_curve_core.curve_config import (
    BenchmarkConfig,
    CurveConfig,
    CurveDefaultsConfig,
    PlotConfig,
    ResamplingConfig,
    load_config,
)
from learning_curve_core.domain.constants import DEFAULT_HOLDOUT_SPLIT, DEFAULT_PERCENTAGES


class TestDefaults:
    def test_default_values(self):
        config = CurveConfig()
        assert config.resampling.method == "holdout"
        assert config.resampling.holdout_split == DEFAULT_HOLDOUT_SPLIT
        assert config.curve.percentages == DEFAULT_PERCENTAGES
        assert config.curve.stratify is False
        assert config.benchmark.max_workers == 1
        assert config.benchmark.seed is None
        assert config.plot.facet == "measure"

    def test_percentages_are_not_shared(self):
        a = CurveDefaultsConfig()
        b = CurveDefaultsConfig()
        a.percentages.append(0.05)
        assert b.percentages == DEFAULT_PERCENTAGES


class TestLoadConfig:
    @patch.dict(os.environ, {}, clear=True)
    def test_load_without_env(self):
        config = load_config()
        assert config.resampling.cv_iters == 10
        assert config.benchmark.show_info is True
        assert config.plot.pretty_names is True

    @patch.dict(os.environ, {
        "LCURVE_RESAMPLING_METHOD": "cv",
        "LCURVE_CV_ITERS": "5",
        "LCURVE_PERCENTAGES": "0.25, 0.5, 1.0",
        "LCURVE_STRATIFY": "true",
        "LCURVE_MAX_WORKERS": "4",
        "LCURVE_SEED": "42",
        "LCURVE_SHOW_INFO": "false",
        "LCURVE_PLOT_FACET": "learner",
        "LCURVE_PLOT_HEIGHT": "600",
    }, clear=True)
    def test_load_from_env(self):
        config = load_config()
        assert config.resampling.method == "cv"
        assert config.resampling.cv_iters == 5
        assert config.curve.percentages == [0.25, 0.5, 1.0]
        assert config.curve.stratify is True
        assert config.benchmark.max_workers == 4
        assert config.benchmark.seed == 42
        assert config.benchmark.show_info is False
        assert config.plot.facet == "learner"
        assert config.plot.height == 600

    @patch.dict(os.environ, {"LCURVE_SEED": ""}, clear=True)
    def test_empty_seed_is_none(self):
        assert load_config().benchmark.seed is None

    @patch.dict(os.environ, {"LCURVE_CV_ITERS": "ten"}, clear=True)
    def test_invalid_int(self):
        with pytest.raises(ValueError, match="LCURVE_CV_ITERS"):
            load_config()

    @patch.dict(os.environ, {"LCURVE_HOLDOUT_SPLIT": "two thirds"}, clear=True)
    def test_invalid_float(self):
        with pytest.raises(ValueError, match="LCURVE_HOLDOUT_SPLIT"):
            load_config()

    @patch.dict(os.environ, {"LCURVE_PERCENTAGES": "0.1,half"}, clear=True)
    def test_invalid_float_list(self):
        with pytest.raises(ValueError, match="LCURVE_PERCENTAGES"):
            load_config()


class TestSerialization:
    def test_to_dict(self):
        data = CurveConfig().to_dict()
        assert "curve_config" in data
        assert data["curve_config"]["benchmark"]["max_workers"] == 1

    def test_round_trip(self):
        config = CurveConfig(
            resampling=ResamplingConfig(method="bootstrap", bootstrap_iters=7),
            curve=CurveDefaultsConfig(percentages=[0.5, 1.0], stratify=True),
            benchmark=BenchmarkConfig(max_workers=2, seed=3),
            plot=PlotConfig(facet="learner"),
        )
        assert CurveConfig.from_dict(config.to_dict()) == config

    def test_from_dict_without_wrapper_key(self):
        config = CurveConfig.from_dict({"benchmark": {"seed": 9}})
        assert config.benchmark.seed == 9
        assert config.resampling == ResamplingConfig()
