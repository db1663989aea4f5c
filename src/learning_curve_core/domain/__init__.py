"""
Domain Layer

Defines constants, entities, value objects and errors that form the core of the
learning curve logic.
Has no dependencies on external libraries.
"""

from learning_curve_core.domain.constants import (
    CLASSIF,
    DEFAULT_PERCENTAGES,
    REGR,
    TASK_TYPES,
)
from learning_curve_core.domain.entities import (
    Learner,
    LearningCurveResult,
    SamplingVariant,
    Task,
)
from learning_curve_core.domain.errors import (
    EvaluationError,
    LearningCurveError,
    ValidationError,
)
from learning_curve_core.domain.value_objects import (
    CurveMeasure,
    Measure,
    ResampleDesc,
    ResampleInstance,
)

__all__ = [
    # constants
    "CLASSIF",
    "DEFAULT_PERCENTAGES",
    "REGR",
    "TASK_TYPES",
    # entities
    "Learner",
    "LearningCurveResult",
    "SamplingVariant",
    "Task",
    # errors
    "EvaluationError",
    "LearningCurveError",
    "ValidationError",
    # value objects
    "CurveMeasure",
    "Measure",
    "ResampleDesc",
    "ResampleInstance",
]
