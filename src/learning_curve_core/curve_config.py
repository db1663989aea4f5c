"""
Learning Curve Configuration

Manages loading from environment variables and default values.
Configuration objects are passed explicitly to the builder, benchmarker and
plotting functions; nothing here is read from process-wide state after load.
"""

import os
from dataclasses import dataclass, field, asdict

from learning_curve_core.domain.constants import (
    DEFAULT_BOOTSTRAP_ITERS,
    DEFAULT_CV_ITERS,
    DEFAULT_HOLDOUT_SPLIT,
    DEFAULT_PERCENTAGES,
    DEFAULT_SUBSAMPLE_ITERS,
)


def _env_bool(key: str, default: bool) -> bool:
    """Convert an environment variable to bool"""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_optional_int(key: str, default: int | None) -> int | None:
    """Convert an environment variable to int, treating an empty value as None"""
    val = os.environ.get(key)
    if val is None:
        return default
    if not val.strip():
        return None
    return _env_int(key, 0)


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


def _env_float_list(key: str, default: list[float]) -> list[float]:
    """Convert an environment variable to a comma-separated list of floats"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return [float(x.strip()) for x in val.split(",") if x.strip()]
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a comma-separated list of numbers.")


@dataclass
class ResamplingConfig:
    """Resampling defaults"""
    method: str = "holdout"
    holdout_split: float = DEFAULT_HOLDOUT_SPLIT
    subsample_iters: int = DEFAULT_SUBSAMPLE_ITERS
    subsample_split: float = DEFAULT_HOLDOUT_SPLIT
    cv_iters: int = DEFAULT_CV_ITERS
    bootstrap_iters: int = DEFAULT_BOOTSTRAP_ITERS


@dataclass
class CurveDefaultsConfig:
    """Defaults for learning curve generation"""
    percentages: list[float] = field(default_factory=lambda: list(DEFAULT_PERCENTAGES))
    stratify: bool = False


@dataclass
class BenchmarkConfig:
    """Benchmark execution configuration"""
    max_workers: int = 1
    seed: int | None = None
    show_info: bool = True


@dataclass
class PlotConfig:
    """Plot defaults"""
    facet: str = "measure"
    pretty_names: bool = True
    height: int = 450
    template: str = "plotly_white"


@dataclass
class CurveConfig:
    """Overall learning curve configuration"""
    resampling: ResamplingConfig = field(default_factory=ResamplingConfig)
    curve: CurveDefaultsConfig = field(default_factory=CurveDefaultsConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"curve_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "CurveConfig":
        """Create from dictionary (handles presence/absence of curve_config key)"""
        config_data = data.get("curve_config", data)
        return cls(
            resampling=ResamplingConfig(**config_data.get("resampling", {})),
            curve=CurveDefaultsConfig(**config_data.get("curve", {})),
            benchmark=BenchmarkConfig(**config_data.get("benchmark", {})),
            plot=PlotConfig(**config_data.get("plot", {})),
        )


def load_config() -> CurveConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        CurveConfig
    """
    resampling = ResamplingConfig(
        method=_env_str("LCURVE_RESAMPLING_METHOD", "holdout"),
        holdout_split=_env_float("LCURVE_HOLDOUT_SPLIT", DEFAULT_HOLDOUT_SPLIT),
        subsample_iters=_env_int("LCURVE_SUBSAMPLE_ITERS", DEFAULT_SUBSAMPLE_ITERS),
        subsample_split=_env_float("LCURVE_SUBSAMPLE_SPLIT", DEFAULT_HOLDOUT_SPLIT),
        cv_iters=_env_int("LCURVE_CV_ITERS", DEFAULT_CV_ITERS),
        bootstrap_iters=_env_int("LCURVE_BOOTSTRAP_ITERS", DEFAULT_BOOTSTRAP_ITERS),
    )
    curve = CurveDefaultsConfig(
        percentages=_env_float_list("LCURVE_PERCENTAGES", list(DEFAULT_PERCENTAGES)),
        stratify=_env_bool("LCURVE_STRATIFY", False),
    )
    benchmark = BenchmarkConfig(
        max_workers=_env_int("LCURVE_MAX_WORKERS", 1),
        seed=_env_optional_int("LCURVE_SEED", None),
        show_info=_env_bool("LCURVE_SHOW_INFO", True),
    )
    plot = PlotConfig(
        facet=_env_str("LCURVE_PLOT_FACET", "measure"),
        pretty_names=_env_bool("LCURVE_PLOT_PRETTY_NAMES", True),
        height=_env_int("LCURVE_PLOT_HEIGHT", 450),
    )
    return CurveConfig(
        resampling=resampling,
        curve=curve,
        benchmark=benchmark,
        plot=plot,
    )
