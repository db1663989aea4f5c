"""
learning-curve-core CLI Runner

Minimal CLI for generating learning curve data from a CSV file.

Usage:
    python -m learning_curve_core.runner --data data/sonar.csv --target Class --learners classif.tree,classif.knn
    python -m learning_curve_core.runner --data data/sonar.csv --target Class --learners classif.tree \\
        --percentages 0.2,0.4,0.6,0.8,1.0 --measures tp,fp,tn,fn --resampling subsample --iters 5 --plot
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from learning_curve_core.domain.constants import PLOT_MAPPINGS
from learning_curve_core.domain.errors import EvaluationError, ValidationError
from learning_curve_core.curve_config import load_config
from learning_curve_core.infrastructure.benchmark import SklearnBenchmarker
from learning_curve_core.learners import default_learner_registry
from learning_curve_core.measures import default_measure_registry
from learning_curve_core.plotting import plot_learning_curve
from learning_curve_core.resampling import make_resample_desc
from learning_curve_core.result_io import result_paths, save_result
from learning_curve_core.task_loader import load_task
from learning_curve_core.use_cases.learning_curve import LearningCurveBuilder


def _split_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="learning-curve-core: Generate learning curves over training-set size",
    )
    parser.add_argument("--data", required=True, help="Path to the CSV data file")
    parser.add_argument("--target", required=True, help="Name of the target column")
    parser.add_argument("--task-id", default=None, help="Task id (default: data file stem)")
    parser.add_argument(
        "--task-type",
        choices=["classif", "regr"],
        default=None,
        help="Task type (default: inferred from the target column)",
    )
    parser.add_argument("--positive", default=None, help="Positive class for binary classification")
    parser.add_argument(
        "--learners",
        required=True,
        help="Comma-separated list of learner ids (e.g. classif.tree,classif.knn)",
    )
    parser.add_argument(
        "--percentages",
        default=None,
        help="Comma-separated training-set percentages (default: LCURVE_PERCENTAGES)",
    )
    parser.add_argument(
        "--measures",
        default=None,
        help="Comma-separated list of measure ids (default: the task type's default measure)",
    )
    parser.add_argument(
        "--resampling",
        choices=["holdout", "subsample", "cv", "bootstrap"],
        default=None,
        help="Resampling method (default: LCURVE_RESAMPLING_METHOD)",
    )
    parser.add_argument("--iters", type=int, default=None, help="Resampling iterations / folds")
    parser.add_argument("--split", type=float, default=None, help="Training fraction for holdout/subsample")
    parser.add_argument(
        "--stratify",
        action="store_true",
        default=None,
        help="Stratify the down-sampling by class label (classification only)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: LCURVE_SEED)")
    parser.add_argument("--max-workers", type=int, default=None, help="Parallel workers (default: LCURVE_MAX_WORKERS)")
    parser.add_argument("--run-id", default=None, help="Run id used in output file names")
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output files (default: results)",
    )
    parser.add_argument("--plot", action="store_true", help="Also write an HTML learning curve plot")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)

    # Load config and apply CLI overrides
    config = load_config()
    if args.seed is not None:
        config.benchmark.seed = args.seed
    if args.max_workers is not None:
        config.benchmark.max_workers = args.max_workers
    if args.quiet:
        config.benchmark.show_info = False
    if args.plot and config.plot.facet not in PLOT_MAPPINGS:
        print(f"ERROR: LCURVE_PLOT_FACET must be one of {list(PLOT_MAPPINGS)}, got '{config.plot.facet}'")
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if config.benchmark.show_info else logging.WARNING,
        format="  %(message)s",
    )

    run_id = args.run_id if args.run_id else datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = result_paths(output_dir, run_id)

    learners = _split_list(args.learners)
    measures = _split_list(args.measures)

    try:
        percentages = (
            [float(p) for p in _split_list(args.percentages)]
            if args.percentages is not None
            else None
        )
    except ValueError:
        print(f"ERROR: --percentages must be comma-separated numbers, got '{args.percentages}'")
        sys.exit(1)

    # Load task
    print(f"\n=== Loading data: {args.data} ===\n")
    try:
        task = load_task(
            args.data,
            args.target,
            task_id=args.task_id,
            task_type=args.task_type,
            positive=args.positive,
        )
    except (FileNotFoundError, ValidationError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    method = args.resampling or config.resampling.method
    print(f"  Task: {task.task_id} ({task.task_type}, {task.size} observations)")
    print(f"  Learners: {learners}")
    print(f"  Percentages: {percentages or config.curve.percentages}")
    print(f"  Measures: {measures or 'default'}")
    print(f"  Resampling: {method}")
    print(f"  Run ID: {run_id}")
    print()

    builder = LearningCurveBuilder(
        SklearnBenchmarker.from_config(config),
        learner_registry=default_learner_registry(),
        measure_registry=default_measure_registry(),
        config=config,
    )

    print("=== Running Benchmark ===\n")
    try:
        resampling = None
        if args.resampling or args.iters or args.split or method != "holdout":
            resampling = make_resample_desc(
                method,
                iters=args.iters,
                split=args.split,
                config=config.resampling,
            )
        result = builder.build(
            learners,
            task,
            resampling=resampling,
            percentages=percentages,
            measures=measures,
            stratify=args.stratify,
        )
    except ValidationError as e:
        print(f"ERROR: invalid input: {e}")
        sys.exit(1)
    except EvaluationError as e:
        print(f"ERROR: evaluation failed: {e}")
        sys.exit(1)

    print()
    print("=== Learning Curve ===\n")
    print(result)
    print()

    save_result(result, paths["json"], paths["csv"])
    if args.plot:
        fig = plot_learning_curve(
            result,
            facet=config.plot.facet,
            pretty_names=config.plot.pretty_names,
            config=config.plot,
        )
        fig.write_html(str(paths["html"]))

    print("=== Output ===\n")
    print(f"  Result: {paths['json']}")
    print(f"  Table:  {paths['csv']}")
    if args.plot:
        print(f"  Plot:   {paths['html']}")
    print()


if __name__ == "__main__":
    main()
