"""
Domain Errors

Exception taxonomy shared by every layer.
"""


class LearningCurveError(Exception):
    """Base class for learning curve errors"""
    pass


class ValidationError(LearningCurveError, ValueError):
    """Malformed or out-of-range input, raised before any evaluation starts"""
    pass


class EvaluationError(LearningCurveError, RuntimeError):
    """Failure reported by the benchmarking collaborator"""
    pass
