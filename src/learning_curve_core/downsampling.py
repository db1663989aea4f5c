"""
Down-sampling Wrapper

A derived learner that trains its base learner on a fraction of the training
split it is given, optionally stratified by class label.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from learning_curve_core.domain.entities import Learner, Task


def downsample_indices(
    train_indices,
    labels,
    percentage: float,
    stratify: bool,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Draw a random fraction of the training indices without replacement

    Args:
        train_indices: Positions of the training observations
        labels: Target labels of the full task, indexed by position
        percentage: Fraction of the training indices to keep
        stratify: Draw the fraction separately within each class level
        rng: Random generator

    Returns:
        Sorted array of selected positions (never empty for a non-empty split)
    """
    idx = np.asarray(train_indices, dtype=int)
    if len(idx) == 0 or percentage >= 1.0:
        return idx.copy()

    if stratify:
        split_labels = np.asarray(labels)[idx]
        chosen = []
        for level in dict.fromkeys(split_labels.tolist()):
            members = idx[split_labels == level]
            k = int(round(percentage * len(members)))
            if k > 0:
                chosen.append(rng.choice(members, size=k, replace=False))
        selected = np.concatenate(chosen) if chosen else np.array([], dtype=int)
        if len(selected) == 0:
            selected = rng.choice(idx, size=1, replace=False)
    else:
        k = max(1, int(round(percentage * len(idx))))
        selected = rng.choice(idx, size=k, replace=False)

    return np.sort(selected)


@dataclass(frozen=True)
class DownsampleWrapper:
    """Learner trained on a `percentage` fraction of its assigned training split"""
    id: str
    learner: Learner = field(repr=False)
    percentage: float
    stratify: bool = False

    @property
    def task_type(self) -> str:
        return self.learner.task_type

    def train(self, task: Task, train_indices, rng: np.random.Generator):
        """
        Fit a fresh estimator on a down-sampled part of the training split

        Args:
            task: Task providing features and labels
            train_indices: Positions of the assigned training split
            rng: Random generator driving the down-sampling

        Returns:
            Fitted estimator
        """
        idx = downsample_indices(
            train_indices,
            task.labels.to_numpy(),
            self.percentage,
            self.stratify and task.supports_stratification,
            rng,
        )
        estimator = self.learner.make_estimator()
        estimator.fit(task.features.iloc[idx], task.labels.iloc[idx])
        return estimator
