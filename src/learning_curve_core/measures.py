"""
Performance Measures

Built-in measures backed by sklearn.metrics, an explicit MeasureRegistry,
validation against a task, and disambiguation of duplicate measure labels.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import replace
from typing import Sequence

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    balanced_accuracy_score,
    cohen_kappa_score,
    f1_score,
    mean_absolute_error,
    mean_squared_error,
    median_absolute_error,
    r2_score,
)

from learning_curve_core.domain.constants import CLASSIF, DEFAULT_MEASURES, REGR
from learning_curve_core.domain.entities import Task
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import Measure


# --- Measure functions: (truth, response, positive) -> float ---


def _acc(truth, response, positive=None) -> float:
    return accuracy_score(truth, response)


def _mmce(truth, response, positive=None) -> float:
    return 1.0 - accuracy_score(truth, response)


def _ber(truth, response, positive=None) -> float:
    return 1.0 - balanced_accuracy_score(truth, response)


def _kappa(truth, response, positive=None) -> float:
    return cohen_kappa_score(truth, response)


def _f1(truth, response, positive=None) -> float:
    return f1_score(truth, response, pos_label=positive, average="binary", zero_division=0.0)


def _confusion(truth, response, positive) -> tuple[np.ndarray, np.ndarray]:
    return np.asarray(truth) == positive, np.asarray(response) == positive


def _tp(truth, response, positive=None) -> float:
    t, r = _confusion(truth, response, positive)
    return float(np.sum(t & r))


def _fp(truth, response, positive=None) -> float:
    t, r = _confusion(truth, response, positive)
    return float(np.sum(~t & r))


def _tn(truth, response, positive=None) -> float:
    t, r = _confusion(truth, response, positive)
    return float(np.sum(~t & ~r))


def _fn(truth, response, positive=None) -> float:
    t, r = _confusion(truth, response, positive)
    return float(np.sum(t & ~r))


def _mse(truth, response, positive=None) -> float:
    return mean_squared_error(truth, response)


def _rmse(truth, response, positive=None) -> float:
    return float(np.sqrt(mean_squared_error(truth, response)))


def _mae(truth, response, positive=None) -> float:
    return mean_absolute_error(truth, response)


def _medae(truth, response, positive=None) -> float:
    return median_absolute_error(truth, response)


def _rsq(truth, response, positive=None) -> float:
    return r2_score(truth, response)


_CLASSIF = frozenset({CLASSIF})
_REGR = frozenset({REGR})

BUILTIN_MEASURES = [
    Measure("acc", "Accuracy", _acc, _CLASSIF),
    Measure("mmce", "Mean misclassification error", _mmce, _CLASSIF, minimize=True),
    Measure("ber", "Balanced error rate", _ber, _CLASSIF, minimize=True),
    Measure("kappa", "Cohen's kappa", _kappa, _CLASSIF),
    Measure("f1", "F1 measure", _f1, _CLASSIF, binary_only=True),
    Measure("tp", "True positives", _tp, _CLASSIF, binary_only=True),
    Measure("fp", "False positives", _fp, _CLASSIF, binary_only=True, minimize=True),
    Measure("tn", "True negatives", _tn, _CLASSIF, binary_only=True),
    Measure("fn", "False negatives", _fn, _CLASSIF, binary_only=True, minimize=True),
    Measure("mse", "Mean of squared errors", _mse, _REGR, minimize=True),
    Measure("rmse", "Root mean squared error", _rmse, _REGR, minimize=True),
    Measure("mae", "Mean of absolute errors", _mae, _REGR, minimize=True),
    Measure("medae", "Median of absolute errors", _medae, _REGR, minimize=True),
    Measure("rsq", "Coefficient of determination", _rsq, _REGR),
]


class MeasureRegistry:
    """Registry of available measures"""

    def __init__(self, measures: Sequence[Measure] = ()) -> None:
        self._measures: dict[str, Measure] = {}
        for m in measures:
            self.register(m)

    def register(self, measure: Measure) -> Measure:
        if measure.id in self._measures:
            raise ValueError(f"Measure '{measure.id}' is already registered")
        self._measures[measure.id] = measure
        return measure

    def get(self, measure_id: str) -> Measure:
        try:
            return self._measures[measure_id]
        except KeyError:
            raise ValidationError(
                f"Unknown measure: {measure_id} (available: {self.ids()})"
            ) from None

    def ids(self, task_type: str | None = None) -> list[str]:
        return [
            mid for mid, m in self._measures.items()
            if task_type is None or task_type in m.task_types
        ]

    def default_for(self, task: Task) -> Measure:
        return self.get(DEFAULT_MEASURES[task.task_type])

    def __contains__(self, measure_id: str) -> bool:
        return measure_id in self._measures


def default_measure_registry() -> MeasureRegistry:
    """Create a registry populated with the built-in measures"""
    return MeasureRegistry(BUILTIN_MEASURES)


def set_aggregation(measure: Measure, aggregation: str) -> Measure:
    """Return a copy of the measure aggregated with the given method (e.g. "test.sd")"""
    return replace(measure, aggregation=aggregation)


def check_measures(
    measures: str | Measure | Sequence[str | Measure] | None,
    task: Task,
    registry: MeasureRegistry,
) -> list[Measure]:
    """
    Resolve measure specifications and check compatibility with the task

    Args:
        measures: Measure id(s) or Measure instance(s); None selects the task's default measure
        task: Task the measures will be computed on
        registry: Registry used to resolve ids

    Returns:
        List of Measure

    Raises:
        ValidationError: If the list is empty, an id is unknown, or a measure does not fit the task
    """
    if measures is None:
        return [registry.default_for(task)]
    if isinstance(measures, (str, Measure)):
        measures = [measures]
    measures = list(measures)
    if not measures:
        raise ValidationError("At least one measure is required")

    resolved: list[Measure] = []
    for m in measures:
        if isinstance(m, str):
            m = registry.get(m)
        elif not isinstance(m, Measure):
            raise ValidationError(f"Measure must be a measure id or Measure, got {type(m).__name__}")
        if task.task_type not in m.task_types:
            raise ValidationError(
                f"Measure '{m.id}' is not compatible with task '{task.task_id}' ({task.task_type})"
            )
        if m.binary_only and not task.is_binary:
            raise ValidationError(
                f"Measure '{m.id}' requires a binary classification task, "
                f"but task '{task.task_id}' has {len(task.class_levels)} classes"
            )
        resolved.append(m)
    return resolved


def replace_dupe_measure_names(measures: Sequence, attr: str = "id") -> list[str]:
    """
    Build one distinct label per measure from its id or display name

    Colliding labels are suffixed with the measure's aggregation
    (e.g. "acc.test.mean", "acc.test.sd"). Labels that still collide are
    suffixed with their 1-based occurrence number.

    Args:
        measures: Measure or CurveMeasure objects
        attr: "id" or "name"

    Returns:
        List of distinct labels, in measure order
    """
    if attr not in ("id", "name"):
        raise ValueError(f"attr must be 'id' or 'name', got {attr}")

    labels = [getattr(m, attr) for m in measures]
    counts = Counter(labels)
    labels = [
        f"{label}.{m.aggregation}" if counts[label] > 1 else label
        for label, m in zip(labels, measures)
    ]

    while len(set(labels)) < len(labels):
        counts = Counter(labels)
        seen: dict[str, int] = defaultdict(int)
        relabeled = []
        for label in labels:
            if counts[label] > 1:
                seen[label] += 1
                relabeled.append(f"{label}.{seen[label]}")
            else:
                relabeled.append(label)
        labels = relabeled

    return labels
