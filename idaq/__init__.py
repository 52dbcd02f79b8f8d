"""
A Python toolkit for instrumentation and data acquisition (IDAQ) lab work.

Compares two sets of measurements with an automatically selected t-test and
prints a plain-language lab report.

Modules:
    - comparison: Runs the adaptive two-sample comparison pipeline.
    - stats: Sanitizing, descriptive statistics, variance check, t-test, effect size.
    - reporting: Composes the structured lab report.
    - plotting: Box plot of the two compared groups.
    - phase: FFT phase difference between two signals (LVDT calibration).
    - archive: Bundles the working directory into a submission ZIP.
"""

__version__ = "1.0.0"

from .archive import save_submission
from .comparison import compare, run_comparison
from .config import ComparisonConfig
from .phase import dominant_frequency, phase_difference
from .reporting import compose_report, render_report
from .schema import (
    ComparisonResult,
    DescriptiveStats,
    EffectSize,
    EqualityTestUnavailable,
    InsufficientDataError,
    TestResult,
    VarianceAssessment,
)

__all__ = [
    # Comparison
    "compare",
    "run_comparison",
    "ComparisonConfig",
    "compose_report",
    "render_report",
    # Records and errors
    "ComparisonResult",
    "DescriptiveStats",
    "VarianceAssessment",
    "TestResult",
    "EffectSize",
    "InsufficientDataError",
    "EqualityTestUnavailable",
    # Lab utilities
    "phase_difference",
    "dominant_frequency",
    "save_submission",
]
