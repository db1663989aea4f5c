"""
Resampling Strategies

Creates resampling descriptions and binds them to a task as concrete
train/test partitions using scikit-learn splitters.
"""

from __future__ import annotations

import numpy as np
from sklearn.model_selection import KFold, ShuffleSplit, StratifiedKFold, StratifiedShuffleSplit
from sklearn.utils import resample

from learning_curve_core.curve_config import ResamplingConfig
from learning_curve_core.domain.entities import Task
from learning_curve_core.domain.errors import ValidationError
from learning_curve_core.domain.value_objects import ResampleDesc, ResampleInstance


def make_resample_desc(
    method: str,
    iters: int | None = None,
    split: float | None = None,
    stratify: bool = False,
    config: ResamplingConfig | None = None,
) -> ResampleDesc:
    """
    Create a resampling description, filling unset values from the configuration

    Args:
        method: "holdout", "subsample", "cv" or "bootstrap"
        iters: Number of iterations (folds for cv)
        split: Fraction of observations used for training (holdout, subsample)
        stratify: Stratify the partition by class label
        config: ResamplingConfig providing defaults

    Returns:
        ResampleDesc

    Raises:
        ValidationError: If the method or any value is invalid
    """
    if config is None:
        config = ResamplingConfig()

    default_iters = {
        "holdout": 1,
        "subsample": config.subsample_iters,
        "cv": config.cv_iters,
        "bootstrap": config.bootstrap_iters,
    }
    default_split = {
        "holdout": config.holdout_split,
        "subsample": config.subsample_split,
    }
    if iters is None:
        iters = default_iters.get(method, 1)
    if split is None:
        split = default_split.get(method)
    return ResampleDesc(method=method, iters=iters, split=split, stratify=stratify)


def _to_tuples(index_sets) -> tuple[tuple[int, ...], ...]:
    return tuple(tuple(int(i) for i in idx) for idx in index_sets)


def make_resample_instance(
    desc: ResampleDesc,
    task: Task,
    seed: int | None = None,
) -> ResampleInstance:
    """
    Bind a resampling description to a task

    Args:
        desc: Resampling description
        task: Task whose observations are partitioned
        seed: Random seed for reproducible partitions

    Returns:
        ResampleInstance

    Raises:
        ValidationError: If stratification is requested for a task that cannot be
            stratified, or the task is too small for the description
    """
    if desc.stratify and not task.supports_stratification:
        raise ValidationError(
            f"Stratified resampling requires a classification task, "
            f"but task '{task.task_id}' is '{task.task_type}'"
        )

    n = task.size
    placeholder = np.zeros((n, 1))
    labels = task.labels.to_numpy() if desc.stratify else None

    try:
        if desc.method in ("holdout", "subsample"):
            splitter_cls = StratifiedShuffleSplit if desc.stratify else ShuffleSplit
            splitter = splitter_cls(n_splits=desc.iters, train_size=desc.split, random_state=seed)
            splits = list(splitter.split(placeholder, labels))
        elif desc.method == "cv":
            splitter_cls = StratifiedKFold if desc.stratify else KFold
            splitter = splitter_cls(n_splits=desc.iters, shuffle=True, random_state=seed)
            splits = list(splitter.split(placeholder, labels))
        else:
            rs = np.random.RandomState(seed)
            all_idx = np.arange(n)
            splits = []
            for _ in range(desc.iters):
                train = resample(all_idx, replace=True, n_samples=n, random_state=rs, stratify=labels)
                test = np.setdiff1d(all_idx, train)
                splits.append((train, test))
    except ValueError as e:
        raise ValidationError(f"Cannot instantiate {desc.method} resampling on task '{task.task_id}': {e}") from e

    return ResampleInstance(
        desc=desc,
        size=n,
        train_indices=_to_tuples(s[0] for s in splits),
        test_indices=_to_tuples(s[1] for s in splits),
    )


def check_resampling(
    resampling: ResampleDesc | ResampleInstance | None,
    task: Task,
    config: ResamplingConfig | None = None,
    seed: int | None = None,
) -> ResampleDesc | ResampleInstance:
    """
    Validate a resampling strategy, defaulting to a single holdout split

    Args:
        resampling: ResampleDesc, ResampleInstance or None
        task: Task the strategy will be applied to
        config: ResamplingConfig providing the default holdout split
        seed: Random seed for the default holdout instance

    Returns:
        ResampleDesc or ResampleInstance

    Raises:
        ValidationError: If the strategy has the wrong type or does not match the task
    """
    if config is None:
        config = ResamplingConfig()

    if resampling is None:
        desc = make_resample_desc("holdout", split=config.holdout_split, config=config)
        return make_resample_instance(desc, task, seed=seed)
    if isinstance(resampling, ResampleDesc):
        if resampling.stratify and not task.supports_stratification:
            raise ValidationError(
                f"Stratified resampling requires a classification task, "
                f"but task '{task.task_id}' is '{task.task_type}'"
            )
        return resampling
    if isinstance(resampling, ResampleInstance):
        if resampling.size != task.size:
            raise ValidationError(
                f"Resample instance has size {resampling.size}, "
                f"but task '{task.task_id}' has {task.size} observations"
            )
        return resampling
    raise ValidationError(
        f"resampling must be a ResampleDesc or ResampleInstance, got {type(resampling).__name__}"
    )
