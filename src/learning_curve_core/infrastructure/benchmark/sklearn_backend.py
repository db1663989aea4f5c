"""
scikit-learn benchmarker

Evaluates down-sampled learner variants by delegating fitting and prediction to
scikit-learn estimators. Every variant sees the same resampling partition.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

import numpy as np
import pandas as pd

from learning_curve_core.curve_config import CurveConfig, ResamplingConfig
from learning_curve_core.domain.entities import SamplingVariant, Task
from learning_curve_core.domain.errors import EvaluationError
from learning_curve_core.domain.value_objects import Measure, ResampleDesc, ResampleInstance
from learning_curve_core.infrastructure.benchmark.base import (
    LEARNER_ID_COL,
    TASK_ID_COL,
    Benchmarker,
)
from learning_curve_core.resampling import make_resample_instance

logger = logging.getLogger(__name__)


def aggregate_performance(values: Sequence[float], aggregation: str) -> float:
    """
    Aggregate per-iteration test performance

    Args:
        values: One value per resampling iteration
        aggregation: "test.mean", "test.sd", "test.median", "test.min" or "test.max"

    Returns:
        Aggregated value (sd of a single iteration is 0.0)
    """
    arr = np.asarray(values, dtype=float)
    if aggregation == "test.mean":
        return float(np.mean(arr))
    if aggregation == "test.sd":
        return float(np.std(arr, ddof=1)) if len(arr) > 1 else 0.0
    if aggregation == "test.median":
        return float(np.median(arr))
    if aggregation == "test.min":
        return float(np.min(arr))
    if aggregation == "test.max":
        return float(np.max(arr))
    raise ValueError(f"Unknown aggregation: {aggregation}")


class SklearnBenchmarker(Benchmarker):
    """Benchmarker that trains and scores variants in-process"""

    def __init__(
        self,
        max_workers: int = 1,
        seed: int | None = None,
        show_info: bool = True,
        resampling_config: ResamplingConfig | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1.")
        self.max_workers = max_workers
        self.seed = seed
        self.show_info = show_info
        self.resampling_config = resampling_config or ResamplingConfig()

    @classmethod
    def from_config(cls, config: CurveConfig) -> "SklearnBenchmarker":
        return cls(
            max_workers=config.benchmark.max_workers,
            seed=config.benchmark.seed,
            show_info=config.benchmark.show_info,
            resampling_config=config.resampling,
        )

    def evaluate(
        self,
        variants: Sequence[SamplingVariant],
        task: Task,
        resampling: ResampleDesc | ResampleInstance,
        measures: Sequence[Measure],
    ) -> pd.DataFrame:
        if isinstance(resampling, ResampleDesc):
            instance = make_resample_instance(resampling, task, seed=self.seed)
        else:
            instance = resampling

        seeds = np.random.SeedSequence(self.seed).spawn(len(variants))
        progress = {"current": 0, "total": len(variants)}
        lock = threading.Lock()

        if self.max_workers == 1:
            perfs = [
                self._evaluate_variant(v, task, instance, measures, s, progress, lock)
                for v, s in zip(variants, seeds)
            ]
        else:
            perfs = [None] * len(variants)
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    executor.submit(
                        self._evaluate_variant,
                        variant,
                        task,
                        instance,
                        measures,
                        seed_seq,
                        progress,
                        lock,
                    ): pos
                    for pos, (variant, seed_seq) in enumerate(zip(variants, seeds))
                }
                for future in as_completed(futures):
                    perfs[futures[future]] = future.result()

        columns = [TASK_ID_COL, LEARNER_ID_COL] + [m.column_id for m in measures]
        data = [
            [task.task_id, variant.variant_id] + values
            for variant, values in zip(variants, perfs)
        ]
        return pd.DataFrame(data, columns=columns)

    def _evaluate_variant(
        self,
        variant: SamplingVariant,
        task: Task,
        instance: ResampleInstance,
        measures: Sequence[Measure],
        seed_seq: np.random.SeedSequence,
        progress: dict,
        lock: threading.Lock,
    ) -> list[float]:
        """Train, predict and score one variant on every resampling iteration"""
        rng = np.random.default_rng(seed_seq)
        features = task.features
        labels = task.labels
        per_iter: list[list[float]] = [[] for _ in measures]

        with lock:
            progress["current"] += 1
            logger.log(
                logging.INFO if self.show_info else logging.DEBUG,
                "[%d/%d] Task: %s | Learner: %s | Iterations: %d",
                progress["current"], progress["total"],
                task.task_id, variant.variant_id, instance.iters,
            )

        for iteration, train, test in instance.iter_splits():
            try:
                estimator = variant.learner.train(task, train, rng)
                response = estimator.predict(features.iloc[test])
                truth = labels.iloc[test].to_numpy()
                for values, measure in zip(per_iter, measures):
                    values.append(measure.compute(truth, response, task.positive))
            except Exception as e:
                raise EvaluationError(
                    f"Learner '{variant.variant_id}' failed on task '{task.task_id}' "
                    f"in iteration {iteration}: {e}"
                ) from e

        return [
            aggregate_performance(values, measure.aggregation)
            for values, measure in zip(per_iter, measures)
        ]
