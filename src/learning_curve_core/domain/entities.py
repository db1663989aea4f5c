"""
Domain Entities

Defines the primary data structures used to build a learning curve.
"""

from dataclasses import dataclass, field, replace
from numbers import Real
from typing import Any, Callable

from learning_curve_core.domain.constants import CLASSIF, PREVIEW_ROWS, TASK_TYPES
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import CurveMeasure


@dataclass(frozen=True)
class Task:
    """Modeling problem: a dataset plus the target column to predict"""
    task_id: str
    data: Any = field(compare=False, repr=False)
    target: str
    task_type: str
    positive: Any = None

    def __post_init__(self):
        if self.task_type not in TASK_TYPES:
            raise ValidationError(f"Unknown task type: {self.task_type} (available: {list(TASK_TYPES)})")
        if self.target not in self.data.columns:
            raise ValidationError(f"Target column '{self.target}' not found in data of task '{self.task_id}'")
        if self.task_type == CLASSIF:
            levels = self.class_levels
            if len(levels) < 2:
                raise ValidationError(f"Classification task '{self.task_id}' needs at least 2 classes")
            if self.positive is None:
                object.__setattr__(self, "positive", levels[0])
            elif self.positive not in levels:
                # CLI values arrive as strings; match them against the typed levels
                matches = [lvl for lvl in levels if str(lvl) == str(self.positive)]
                if not matches:
                    raise ValidationError(f"Positive class '{self.positive}' is not a level of '{self.target}'")
                object.__setattr__(self, "positive", matches[0])

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def features(self):
        return self.data.drop(columns=[self.target])

    @property
    def labels(self):
        return self.data[self.target]

    @property
    def class_levels(self) -> list:
        if self.task_type != CLASSIF:
            return []
        levels = self.labels.dropna().unique().tolist()
        if all(isinstance(lvl, Real) for lvl in levels):
            return sorted(levels)
        return sorted(levels, key=str)

    @property
    def is_binary(self) -> bool:
        return self.task_type == CLASSIF and len(self.class_levels) == 2

    @property
    def supports_stratification(self) -> bool:
        """Only classification targets can be stratified"""
        return self.task_type == CLASSIF


@dataclass(frozen=True)
class Learner:
    """Named learning algorithm configuration"""
    id: str
    task_type: str
    factory: Callable[..., Any] = field(compare=False, repr=False)
    params: dict = field(default_factory=dict)

    def make_estimator(self):
        """Create a fresh, unfitted estimator"""
        return self.factory(**self.params)

    def with_id(self, new_id: str) -> "Learner":
        return replace(self, id=new_id)


@dataclass(frozen=True)
class SamplingVariant:
    """A (learner, percentage) pair materialized as a down-sampled learner"""
    learner_id: str
    percentage: float
    learner_index: int
    percentage_index: int
    learner: Any = field(compare=False, repr=False)

    @property
    def variant_id(self) -> str:
        return self.learner.id


def _format_cell(value) -> str:
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


@dataclass(frozen=True)
class LearningCurveResult:
    """Learning curve data: one row per (learner, percentage), one column per measure"""
    task_id: str
    measures: tuple[CurveMeasure, ...]
    rows: tuple[dict, ...]

    @property
    def measure_ids(self) -> list[str]:
        return [m.id for m in self.measures]

    @property
    def learners(self) -> list[str]:
        """Distinct learner ids in row order"""
        return list(dict.fromkeys(r["learner"] for r in self.rows))

    @property
    def percentages(self) -> list[float]:
        """Distinct percentages in row order"""
        return list(dict.fromkeys(r["percentage"] for r in self.rows))

    @property
    def columns(self) -> list[str]:
        return ["learner", "percentage"] + self.measure_ids

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "measures": [
                {"id": m.id, "name": m.name, "aggregation": m.aggregation, "minimize": m.minimize}
                for m in self.measures
            ],
            "rows": [dict(r) for r in self.rows],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LearningCurveResult":
        measures = tuple(CurveMeasure(**m) for m in data["measures"])
        rows = tuple(dict(r) for r in data["rows"])
        return cls(task_id=data["task_id"], measures=measures, rows=rows)

    def preview(self, n: int = PREVIEW_ROWS) -> str:
        """Fixed-width table of the first n rows"""
        cols = self.columns
        cells = [[_format_cell(r.get(c, "")) for c in cols] for r in self.rows[:n]]
        widths = [max([len(c)] + [len(row[i]) for row in cells]) for i, c in enumerate(cols)]
        lines = ["  ".join(c.rjust(w) for c, w in zip(cols, widths))]
        for row in cells:
            lines.append("  ".join(v.rjust(w) for v, w in zip(row, widths)))
        return "\n".join(lines)

    def __str__(self) -> str:
        return "\n".join([
            "LearningCurveData:",
            f"Task: {self.task_id}",
            f"Measures: {','.join(m.name for m in self.measures)}",
            self.preview(),
        ])
