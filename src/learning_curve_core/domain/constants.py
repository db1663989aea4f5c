"""
Domain Constants

Centrally manages constants shared across the learning curve pipeline.
"""

# Task types
CLASSIF = "classif"
REGR = "regr"
TASK_TYPES = (CLASSIF, REGR)

# Default training-set percentages (x-axis of the learning curve)
DEFAULT_PERCENTAGES = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]

# Resampling methods and their defaults
RESAMPLING_METHODS = ("holdout", "subsample", "cv", "bootstrap")
DEFAULT_HOLDOUT_SPLIT = 2 / 3
DEFAULT_SUBSAMPLE_ITERS = 30
DEFAULT_CV_ITERS = 10
DEFAULT_BOOTSTRAP_ITERS = 30

# Aggregations applied to per-iteration test performance
AGGREGATIONS = ("test.mean", "test.sd", "test.median", "test.min", "test.max")
DEFAULT_AGGREGATION = "test.mean"

# Default measure per task type
DEFAULT_MEASURES = {
    CLASSIF: "mmce",
    REGR: "mse",
}

# Axes the presentation layer can facet or color by
PLOT_MAPPINGS = ("measure", "learner")

# Number of rows shown in the textual summary of a result
PREVIEW_ROWS = 6
