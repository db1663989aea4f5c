"""
Learner Registry

Explicit registry mapping learner ids to scikit-learn estimator factories.
A registry instance is passed to the builder; there is no global lookup table.
"""

from __future__ import annotations

from typing import Any, Callable

from sklearn.linear_model import LinearRegression, LogisticRegression
from sklearn.naive_bayes import GaussianNB
from sklearn.neighbors import KNeighborsClassifier, KNeighborsRegressor
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.tree import DecisionTreeClassifier, DecisionTreeRegressor
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from learning_curve_core.domain.constants import CLASSIF, REGR, TASK_TYPES
from learning_curve_core.domain.entities import Learner, Task
from learning_curve_core.domain.errors import ValidationError


def _scaled(estimator_cls: type) -> Callable[..., Any]:
    """Factory wrapping an estimator in a standardization pipeline"""
    def factory(**params):
        return make_pipeline(StandardScaler(), estimator_cls(**params))
    return factory


class LearnerRegistry:
    """Registry of available learners"""

    def __init__(self) -> None:
        self._learners: dict[str, Learner] = {}

    def register(
        self,
        learner_id: str,
        task_type: str,
        factory: Callable[..., Any],
        **params,
    ) -> Learner:
        """
        Register a learner

        Args:
            learner_id: Unique learner id (e.g. "classif.tree")
            task_type: "classif" or "regr"
            factory: Callable returning an unfitted estimator
            **params: Hyperparameters passed to the factory

        Returns:
            The registered Learner

        Raises:
            ValueError: If the task type is unknown or the id is already registered
        """
        if task_type not in TASK_TYPES:
            raise ValueError(f"Unknown task type: {task_type} (available: {list(TASK_TYPES)})")
        if learner_id in self._learners:
            raise ValueError(f"Learner '{learner_id}' is already registered")
        learner = Learner(id=learner_id, task_type=task_type, factory=factory, params=params)
        self._learners[learner_id] = learner
        return learner

    def get(self, learner_id: str) -> Learner:
        try:
            return self._learners[learner_id]
        except KeyError:
            raise ValidationError(
                f"Unknown learner: {learner_id} (available: {self.ids()})"
            ) from None

    def ids(self, task_type: str | None = None) -> list[str]:
        return [
            lid for lid, lrn in self._learners.items()
            if task_type is None or lrn.task_type == task_type
        ]

    def __contains__(self, learner_id: str) -> bool:
        return learner_id in self._learners

    def __len__(self) -> int:
        return len(self._learners)


def default_learner_registry() -> LearnerRegistry:
    """Create a registry populated with the built-in scikit-learn learners"""
    registry = LearnerRegistry()
    registry.register("classif.logreg", CLASSIF, _scaled(LogisticRegression), max_iter=1000)
    registry.register("classif.tree", CLASSIF, DecisionTreeClassifier, random_state=0)
    registry.register("classif.knn", CLASSIF, _scaled(KNeighborsClassifier), n_neighbors=5)
    registry.register("classif.rf", CLASSIF, RandomForestClassifier, n_estimators=100, random_state=0)
    registry.register("classif.nb", CLASSIF, GaussianNB)
    registry.register("regr.lm", REGR, LinearRegression)
    registry.register("regr.tree", REGR, DecisionTreeRegressor, random_state=0)
    registry.register("regr.knn", REGR, _scaled(KNeighborsRegressor), n_neighbors=5)
    registry.register("regr.rf", REGR, RandomForestRegressor, n_estimators=100, random_state=0)
    return registry


def check_learner(learner: str | Learner, task: Task, registry: LearnerRegistry) -> Learner:
    """
    Resolve a learner specification and check it fits the task

    Args:
        learner: Learner id or Learner instance
        task: Task the learner will be trained on
        registry: Registry used to resolve ids

    Returns:
        Learner

    Raises:
        ValidationError: If the learner cannot be resolved or does not fit the task type
    """
    if isinstance(learner, str):
        learner = registry.get(learner)
    elif not isinstance(learner, Learner):
        raise ValidationError(
            f"Learner must be a learner id or Learner, got {type(learner).__name__}"
        )
    if learner.task_type != task.task_type:
        raise ValidationError(
            f"Learner '{learner.id}' is for '{learner.task_type}' tasks, "
            f"but task '{task.task_id}' is '{task.task_type}'"
        )
    return learner
