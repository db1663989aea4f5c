"""
Benchmarker base class

Defines the contract of the benchmarking collaborator that evaluates a batch of
learners on one task under one resampling strategy.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import pandas as pd

from learning_curve_core.domain.entities import SamplingVariant, Task
from learning_curve_core.domain.value_objects import Measure, ResampleDesc, ResampleInstance

TASK_ID_COL = "task_id"
LEARNER_ID_COL = "learner_id"


class Benchmarker(ABC):
    """Abstract base class for benchmarking backends"""

    @abstractmethod
    def evaluate(
        self,
        variants: Sequence[SamplingVariant],
        task: Task,
        resampling: ResampleDesc | ResampleInstance,
        measures: Sequence[Measure],
    ) -> pd.DataFrame:
        """
        Evaluate every variant under the same resampling partition

        Returns:
            DataFrame with one row per variant and the columns `task_id`,
            `learner_id` (the variant id) and one aggregated column per measure
            named `<measure id>.<aggregation>`, in measure order.

        Raises:
            EvaluationError: If a variant fails to train, predict or score
        """
        pass
