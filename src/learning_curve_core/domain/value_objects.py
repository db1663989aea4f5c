"""
Domain Value Objects

Defines immutable data structures describing performance measures and
resampling strategies.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from learning_curve_core.domain.constants import (
    AGGREGATIONS,
    DEFAULT_AGGREGATION,
    RESAMPLING_METHODS,
)
from learning_curve_core.domain.errors import ValidationError


@dataclass(frozen=True)
class Measure:
    """Performance measure computed from ground truth and predicted response"""
    id: str
    name: str
    fun: Callable[..., float] = field(compare=False, repr=False)
    task_types: frozenset = frozenset()
    binary_only: bool = False
    minimize: bool = False
    aggregation: str = DEFAULT_AGGREGATION

    def __post_init__(self):
        if self.aggregation not in AGGREGATIONS:
            raise ValidationError(
                f"Unknown aggregation '{self.aggregation}' for measure '{self.id}' "
                f"(available: {list(AGGREGATIONS)})"
            )

    @property
    def column_id(self) -> str:
        """Column header used for the aggregated value, e.g. 'acc.test.mean'"""
        return f"{self.id}.{self.aggregation}"

    def compute(self, truth, response, positive: Any = None) -> float:
        return float(self.fun(truth, response, positive))


@dataclass(frozen=True)
class CurveMeasure:
    """Measure as it appears in a learning curve result (column id + display name)"""
    id: str
    name: str
    aggregation: str = DEFAULT_AGGREGATION
    minimize: bool = False


@dataclass(frozen=True)
class ResampleDesc:
    """Description of a resampling strategy, not yet bound to a task"""
    method: str
    iters: int = 1
    split: float | None = None
    stratify: bool = False

    def __post_init__(self):
        if self.method not in RESAMPLING_METHODS:
            raise ValidationError(
                f"Unknown resampling method: {self.method} (available: {list(RESAMPLING_METHODS)})"
            )
        if isinstance(self.iters, bool) or not isinstance(self.iters, int) or self.iters < 1:
            raise ValidationError("iters must be a positive integer")
        if self.method == "holdout" and self.iters != 1:
            raise ValidationError("holdout resampling has exactly one iteration")
        if self.method == "cv" and self.iters < 2:
            raise ValidationError("cv resampling needs at least 2 folds")
        if self.method in ("holdout", "subsample"):
            if self.split is None or not 0.0 < self.split < 1.0:
                raise ValidationError(f"split must lie strictly between 0 and 1, got {self.split}")
        if not isinstance(self.stratify, bool):
            raise ValidationError("stratify must be a boolean")


@dataclass(frozen=True)
class ResampleInstance:
    """Concrete train/test partition of a task's observations"""
    desc: ResampleDesc
    size: int
    train_indices: tuple[tuple[int, ...], ...]
    test_indices: tuple[tuple[int, ...], ...]

    def __post_init__(self):
        if len(self.train_indices) != len(self.test_indices):
            raise ValidationError("train_indices and test_indices must have the same number of iterations")

    @property
    def iters(self) -> int:
        return len(self.train_indices)

    def iter_splits(self):
        """Yield (iteration, train indices, test indices)"""
        for i, (train, test) in enumerate(zip(self.train_indices, self.test_indices), start=1):
            yield i, list(train), list(test)
