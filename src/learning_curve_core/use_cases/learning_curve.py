"""
Learning Curve Generation

Turns a cross-product of learners and training-set percentages into one batched
benchmark request and reshapes the response into a LearningCurveResult.
"""

from __future__ import annotations

import math
from collections import Counter
from numbers import Real
from typing import Sequence

import pandas as pd

from learning_curve_core.curve_config import CurveConfig
from learning_curve_core.domain.entities import Learner, LearningCurveResult, SamplingVariant, Task
from learning_curve_core.domain.errors import EvaluationError, ValidationError
from learning_curve_core.domain.value_objects import CurveMeasure, Measure, ResampleDesc, ResampleInstance
from learning_curve_core.downsampling import DownsampleWrapper
from learning_curve_core.infrastructure.benchmark.base import LEARNER_ID_COL, TASK_ID_COL, Benchmarker
from learning_curve_core.learners import LearnerRegistry, check_learner, default_learner_registry
from learning_curve_core.measures import (
    MeasureRegistry,
    check_measures,
    default_measure_registry,
    replace_dupe_measure_names,
)
from learning_curve_core.resampling import check_resampling


def check_percentages(percentages) -> list[float]:
    """
    Validate the training-set percentages

    Args:
        percentages: Sequence of at least two numbers in [0, 1]

    Returns:
        The percentages as a list of floats, in input order

    Raises:
        ValidationError: If the sequence is too short or holds a missing, non-numeric or out-of-range value
    """
    if isinstance(percentages, (str, bytes, dict)):
        raise ValidationError(
            f"percentages must be a sequence of numbers, got {type(percentages).__name__}"
        )
    try:
        percentages = list(percentages)
    except TypeError:
        raise ValidationError(
            f"percentages must be a sequence of numbers, got {type(percentages).__name__}"
        ) from None
    if len(percentages) < 2:
        raise ValidationError(f"percentages must contain at least 2 values, got {len(percentages)}")
    for p in percentages:
        if p is None or isinstance(p, bool) or not isinstance(p, Real):
            raise ValidationError(f"percentages must be numbers, got {p!r}")
        if math.isnan(p):
            raise ValidationError("percentages must not contain missing values")
        if not 0.0 <= p <= 1.0:
            raise ValidationError(f"percentages must lie within [0, 1], got {p}")
    return [float(p) for p in percentages]


def _variant_ids(learners: Sequence[Learner], n_percentages: int) -> list[list[str]]:
    """
    Variant ids per learner

    '<id>.<perc index>' when all learner ids are distinct. As soon as one id is
    shared, every variant id becomes '<id>.<learner pos>.<perc index>'; the two
    trailing integers are unique per variant, so no id can collide.
    """
    counts = Counter(lrn.id for lrn in learners)
    with_position = any(c > 1 for c in counts.values())
    ids = []
    for l_pos, lrn in enumerate(learners, start=1):
        base = f"{lrn.id}.{l_pos}" if with_position else lrn.id
        ids.append([f"{base}.{p_pos}" for p_pos in range(1, n_percentages + 1)])
    return ids


def make_sampling_variants(
    learners: Sequence[Learner],
    percentages: Sequence[float],
    stratify: bool,
) -> list[SamplingVariant]:
    """
    Create one down-sampled variant per (learner, percentage)

    Args:
        learners: Resolved learners
        percentages: Validated percentages
        stratify: Stratify the down-sampling by class label

    Returns:
        Variants in learner-major, percentage-minor order
    """
    ids = _variant_ids(learners, len(percentages))
    variants = []
    for l_idx, lrn in enumerate(learners):
        for p_idx, perc in enumerate(percentages):
            wrapper = DownsampleWrapper(
                id=ids[l_idx][p_idx],
                learner=lrn,
                percentage=perc,
                stratify=stratify,
            )
            variants.append(SamplingVariant(
                learner_id=lrn.id,
                percentage=perc,
                learner_index=l_idx,
                percentage_index=p_idx,
                learner=wrapper,
            ))
    return variants


class LearningCurveBuilder:
    """
    Builds learning curve data through an external benchmarking collaborator

    Registries and configuration are passed explicitly; defaults are created per
    builder when they are omitted.
    """

    def __init__(
        self,
        benchmarker: Benchmarker,
        *,
        learner_registry: LearnerRegistry | None = None,
        measure_registry: MeasureRegistry | None = None,
        config: CurveConfig | None = None,
    ) -> None:
        self.benchmarker = benchmarker
        self.learner_registry = learner_registry or default_learner_registry()
        self.measure_registry = measure_registry or default_measure_registry()
        self.config = config or CurveConfig()

    def build(
        self,
        learners: str | Learner | Sequence[str | Learner],
        task: Task,
        resampling: ResampleDesc | ResampleInstance | None = None,
        percentages: Sequence[float] | None = None,
        measures: str | Measure | Sequence[str | Measure] | None = None,
        stratify: bool | None = None,
    ) -> LearningCurveResult:
        """
        Generate learning curve data

        Args:
            learners: Learner id(s) or Learner object(s) to compare
            task: Task to learn
            resampling: ResampleDesc or ResampleInstance (defaults to a single holdout split)
            percentages: Fractions of the training split to train on (x-axis)
            measures: Measure id(s) or Measure object(s) (y-axis); None uses the task default
            stratify: Stratify the down-sampling by class label (classification only)

        Returns:
            LearningCurveResult with |learners| x |percentages| rows

        Raises:
            ValidationError: If any input is invalid; raised before any evaluation
            EvaluationError: Propagated unchanged from the benchmarker
        """
        if not isinstance(task, Task):
            raise ValidationError(f"task must be a Task, got {type(task).__name__}")

        if isinstance(learners, (str, Learner)):
            learners = [learners]
        learners = list(learners)
        if not learners:
            raise ValidationError("At least one learner is required")
        learners = [check_learner(lrn, task, self.learner_registry) for lrn in learners]

        if percentages is None:
            percentages = self.config.curve.percentages
        percentages = check_percentages(percentages)

        measures = check_measures(measures, task, self.measure_registry)

        if stratify is None:
            stratify = self.config.curve.stratify
        if not isinstance(stratify, bool):
            raise ValidationError(f"stratify must be a boolean, got {stratify!r}")
        if stratify and not task.supports_stratification:
            raise ValidationError(
                f"stratify is only supported for classification tasks, "
                f"but task '{task.task_id}' is '{task.task_type}'"
            )

        resampling = check_resampling(
            resampling,
            task,
            config=self.config.resampling,
            seed=self.config.benchmark.seed,
        )

        variants = make_sampling_variants(learners, percentages, stratify)
        perfs = self.benchmarker.evaluate(variants, task, resampling, measures)

        return self._assemble(task, variants, measures, perfs)

    def _assemble(
        self,
        task: Task,
        variants: list[SamplingVariant],
        measures: list[Measure],
        perfs: pd.DataFrame,
    ) -> LearningCurveResult:
        """Reorder the benchmark table to variant order and attach learner/percentage columns"""
        if LEARNER_ID_COL not in perfs.columns:
            raise EvaluationError(f"Benchmark result lacks the '{LEARNER_ID_COL}' column")

        value_cols = [
            pos for pos, col in enumerate(perfs.columns)
            if col not in (TASK_ID_COL, LEARNER_ID_COL)
        ]
        if len(value_cols) != len(measures):
            raise EvaluationError(
                f"Benchmark result has {len(value_cols)} measure columns, expected {len(measures)}"
            )

        variant_ids = [str(vid) for vid in perfs[LEARNER_ID_COL].tolist()]
        dupes = sorted(vid for vid, n in Counter(variant_ids).items() if n > 1)
        if dupes:
            raise EvaluationError(f"Benchmark result has duplicate rows for variants {dupes}")
        by_variant = {vid: pos for pos, vid in enumerate(variant_ids)}
        mids = replace_dupe_measure_names(measures, "id")

        rows = []
        for variant in variants:
            pos = by_variant.get(variant.variant_id)
            if pos is None:
                raise EvaluationError(f"Benchmark result has no row for variant '{variant.variant_id}'")
            values = perfs.iloc[pos, value_cols].tolist()
            row = {"learner": variant.learner_id, "percentage": variant.percentage}
            row.update({mid: float(v) for mid, v in zip(mids, values)})
            rows.append(row)

        curve_measures = tuple(
            CurveMeasure(id=mid, name=m.name, aggregation=m.aggregation, minimize=m.minimize)
            for mid, m in zip(mids, measures)
        )
        return LearningCurveResult(
            task_id=task.task_id,
            measures=curve_measures,
            rows=tuple(rows),
        )


def generate_learning_curve_data(
    learners: str | Learner | Sequence[str | Learner],
    task: Task,
    benchmarker: Benchmarker,
    resampling: ResampleDesc | ResampleInstance | None = None,
    percentages: Sequence[float] | None = None,
    measures: str | Measure | Sequence[str | Measure] | None = None,
    stratify: bool | None = None,
    *,
    learner_registry: LearnerRegistry | None = None,
    measure_registry: MeasureRegistry | None = None,
    config: CurveConfig | None = None,
) -> LearningCurveResult:
    """
    Generate learning curve data with a one-off LearningCurveBuilder

    See LearningCurveBuilder.build for the arguments.
    """
    builder = LearningCurveBuilder(
        benchmarker,
        learner_registry=learner_registry,
        measure_registry=measure_registry,
        config=config,
    )
    return builder.build(
        learners,
        task,
        resampling=resampling,
        percentages=percentages,
        measures=measures,
        stratify=stratify,
    )
