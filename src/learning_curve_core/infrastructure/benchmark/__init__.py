"""
Benchmark package

Provides the benchmarking collaborator contract and its scikit-learn backend.
"""

from learning_curve_core.infrastructure.benchmark.base import Benchmarker
from learning_curve_core.infrastructure.benchmark.sklearn_backend import (
    SklearnBenchmarker,
    aggregate_performance,
)

__all__ = ["Benchmarker", "SklearnBenchmarker", "aggregate_performance"]
