"""
Statistical stages of the two-sample comparison pipeline.

Modules:
    sanitize:
        Flatten raw inputs, drop missing values and enforce n >= 2.

    descriptive:
        Per-group count, mean, SD, variance and standard error.

    variance:
        Variance-equality assessment: F-test backend with a variance-ratio
        heuristic fallback.

    ttest:
        Pooled or Welch t-test selection and execution.

    effect_size:
        Cohen's d with magnitude classification.

Design Principle:
    This subpackage performs no printing and no plotting. Each function
    consumes the records of the previous stage and returns a new immutable
    record, so every stage can be tested on its own.
"""

from .descriptive import describe_sample, pooled_standard_deviation
from .effect_size import classify_magnitude, compute_effect_size
from .sanitize import clean_sample, sanitize_samples
from .ttest import run_two_sample_ttest, select_variance_mode
from .variance import (
    FTestBackend,
    VarianceRatioHeuristic,
    assess_variance_equality,
    native_variance_backend,
)

__all__ = [
    "clean_sample",
    "sanitize_samples",
    "describe_sample",
    "pooled_standard_deviation",
    "FTestBackend",
    "VarianceRatioHeuristic",
    "assess_variance_equality",
    "native_variance_backend",
    "select_variance_mode",
    "run_two_sample_ttest",
    "classify_magnitude",
    "compute_effect_size",
]
