"""
Result Persistence

Saves and loads LearningCurveResult objects as JSON (with a CSV copy of the
table) for the CLI runner and the viewer.
"""

import json
from pathlib import Path

from learning_curve_core.domain.entities import LearningCurveResult
from learning_curve_core.use_cases.presentation import result_to_frame

RESULT_PREFIX = "learning_curve_"


def result_paths(output_dir: str | Path, run_id: str) -> dict[str, Path]:
    """Output file paths of a run"""
    output_dir = Path(output_dir)
    stem = f"{RESULT_PREFIX}{run_id}"
    return {
        "json": output_dir / f"{stem}.json",
        "csv": output_dir / f"{stem}.csv",
        "html": output_dir / f"{stem}.html",
    }


def save_result(result: LearningCurveResult, json_path: str | Path, csv_path: str | Path | None = None) -> None:
    """
    Save a result as JSON, and optionally its table as CSV

    Args:
        result: Learning curve result
        json_path: Destination of the JSON document
        csv_path: Destination of the CSV table (skipped when None)
    """
    json_path = Path(json_path)
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    if csv_path is not None:
        result_to_frame(result).to_csv(csv_path, index=False)


def load_result(json_path: str | Path) -> LearningCurveResult:
    """
    Load a result saved by save_result

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If a required field is missing
    """
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    for field in ("task_id", "measures", "rows"):
        if field not in data:
            raise KeyError(f"Required field '{field}' is missing: {json_path}")

    return LearningCurveResult.from_dict(data)


def find_results(results_dir: str | Path) -> list[dict]:
    """Saved results in results_dir, newest run id first"""
    results = []
    for path in sorted(Path(results_dir).glob(f"{RESULT_PREFIX}*.json"), reverse=True):
        results.append({
            "run_id": path.stem[len(RESULT_PREFIX):],
            "path": path,
        })
    return results
