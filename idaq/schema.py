"""Define the immutable records passed between comparison stages.

Every record is produced by exactly one stage and is read-only downstream.
The exception taxonomy for the comparison pipeline lives here as well so the
stats modules and the orchestration layer share one definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

VARIANCE_METHOD_TEST = "test"
VARIANCE_METHOD_HEURISTIC = "heuristic"

VARIANCE_MODE_EQUAL = "equal"
VARIANCE_MODE_UNEQUAL = "unequal"


class InsufficientDataError(ValueError):
    """Raised when a sample has fewer than two valid values after cleaning."""


class EqualityTestUnavailable(RuntimeError):
    """Raised by the native variance test when it cannot produce a result.

    The variance assessor always recovers from this by switching to the
    variance-ratio heuristic; callers of the pipeline never see it.
    """


@dataclass(frozen=True)
class DescriptiveStats:
    count: int
    mean: float
    standard_deviation: float
    variance: float
    standard_error: float


@dataclass(frozen=True)
class VarianceAssessment:
    """Outcome of the variance-equality check.

    Attributes:
        equality_pvalue: F-test p-value, ``None`` when the heuristic decided.
        variances_equal: Decision used to select the t-test variant.
        method: ``"test"`` (F-test) or ``"heuristic"`` (variance ratio).
        f_statistic: ``var1 / var2`` when the F-test ran.
        ratio_confidence_interval: Confidence interval for the population
            variance ratio when the F-test ran.
        variance_ratio: Largest-to-smallest variance ratio when the heuristic
            decided.
        threshold: Ratio threshold applied by the heuristic.
    """

    equality_pvalue: Optional[float]
    variances_equal: bool
    method: str
    f_statistic: Optional[float] = None
    ratio_confidence_interval: Optional[Tuple[float, float]] = None
    variance_ratio: Optional[float] = None
    threshold: Optional[float] = None


@dataclass(frozen=True)
class TestResult:
    """Outcome of the two-sample t-test.

    ``confidence_interval`` bounds ``mean1 - mean2`` at ``1 - alpha``.
    ``degenerate`` marks a zero or non-finite standard error, where the
    t-statistic is not a ratio of finite quantities and ``p_value`` may be NaN.
    """

    __test__ = False  # not a pytest test class

    reject_null: bool
    p_value: float
    confidence_interval: Tuple[float, float]
    t_statistic: float
    degrees_of_freedom: float
    variance_mode: str
    mean_difference: float
    standard_error: float
    alpha: float
    degenerate: bool = False

    @property
    def interval_contains_zero(self) -> bool:
        low, high = self.confidence_interval
        return bool(low <= 0.0 <= high)


@dataclass(frozen=True)
class EffectSize:
    cohens_d: float
    magnitude_class: str
    pooled_standard_deviation: float


@dataclass(frozen=True)
class ComparisonResult:
    """Complete result record of one two-sample comparison."""

    stats1: DescriptiveStats
    stats2: DescriptiveStats
    variance: VarianceAssessment
    test: TestResult
    effect: EffectSize

    @property
    def n1(self) -> int:
        return self.stats1.count

    @property
    def n2(self) -> int:
        return self.stats2.count

    def as_tuple(self) -> tuple[bool, float, Tuple[float, float], dict]:
        """Return ``(reject_null, p_value, confidence_interval, stats)``."""
        stats = {
            "tstat": self.test.t_statistic,
            "df": self.test.degrees_of_freedom,
        }
        return (
            self.test.reject_null,
            self.test.p_value,
            self.test.confidence_interval,
            stats,
        )
