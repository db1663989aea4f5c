"""
Task Loader

Builds Task objects from pandas DataFrames or CSV files.
"""

from pathlib import Path

import pandas as pd

from learning_curve_core.domain.constants import CLASSIF, REGR
from learning_curve_core.domain.entities import Task
from learning_curve_core.domain.errors import ValidationError


def infer_task_type(target: pd.Series) -> str:
    """
    Infer the task type from the target column

    Numeric (non-boolean) targets are regression targets; everything else is
    treated as class labels.

    Args:
        target: Target column

    Returns:
        "classif" or "regr"
    """
    if pd.api.types.is_bool_dtype(target):
        return CLASSIF
    if pd.api.types.is_numeric_dtype(target):
        return REGR
    return CLASSIF


def _encode_features(data: pd.DataFrame, target: str) -> pd.DataFrame:
    """One-hot encode non-numeric feature columns, leaving the target untouched"""
    features = data.drop(columns=[target])
    categorical = [
        c for c in features.columns
        if not pd.api.types.is_numeric_dtype(features[c]) or pd.api.types.is_bool_dtype(features[c])
    ]
    if categorical:
        features = pd.get_dummies(features, columns=categorical, dtype=float)
    features[target] = data[target].to_numpy()
    return features.reset_index(drop=True)


def make_task(
    data: pd.DataFrame,
    target: str,
    task_id: str | None = None,
    task_type: str | None = None,
    positive=None,
) -> Task:
    """
    Create a Task from a DataFrame

    Args:
        data: Dataset including the target column
        target: Name of the target column
        task_id: Task identifier (defaults to the target name)
        task_type: "classif" or "regr" (inferred from the target when omitted)
        positive: Positive class for binary classification

    Returns:
        Task

    Raises:
        ValidationError: If the target is missing or contains missing values
    """
    if target not in data.columns:
        raise ValidationError(f"Target column '{target}' not found (columns: {list(data.columns)})")
    if data[target].isna().any():
        raise ValidationError(f"Target column '{target}' contains missing values")
    if data.drop(columns=[target]).shape[1] == 0:
        raise ValidationError("Data must contain at least one feature column besides the target")

    if task_type is None:
        task_type = infer_task_type(data[target])

    prepared = _encode_features(data, target)

    return Task(
        task_id=task_id or target,
        data=prepared,
        target=target,
        task_type=task_type,
        positive=positive,
    )


def load_task(
    file_path: str | Path,
    target: str,
    task_id: str | None = None,
    task_type: str | None = None,
    positive=None,
) -> Task:
    """
    Load a task from a CSV file

    Args:
        file_path: Path to the CSV file
        target: Name of the target column
        task_id: Task identifier (defaults to the file stem)
        task_type: "classif" or "regr" (inferred when omitted)
        positive: Positive class for binary classification

    Returns:
        Task

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Data file does not exist: {file_path}")
    data = pd.read_csv(path)
    return make_task(
        data,
        target,
        task_id=task_id or path.stem,
        task_type=task_type,
        positive=positive,
    )
