"""
Model evaluation: metrics, cross-validation and the injure research sweep.

Public API:
    RegressionMetricsCalculator.build(observations, model)
    cross_validation(pool, folds, runs, method, seed=None) -> CrossValidationResult
    research(pool, methods, tasks=..., degrade=...) -> ResearchResult
"""

from pylinreg.evaluation.metrics import RegressionMetricsCalculator
from pylinreg.evaluation.crossval import (
    FoldAssignment,
    CrossValidationResult,
    cross_validation,
)
from pylinreg.evaluation.research import (
    ResearchTask,
    ResearchResult,
    injure_factors_and_offsets,
    research,
)

__all__ = [
    "RegressionMetricsCalculator",
    "FoldAssignment",
    "CrossValidationResult",
    "cross_validation",
    "ResearchTask",
    "ResearchResult",
    "injure_factors_and_offsets",
    "research",
]
