"""Select and run the two-sample t-test.

The variant follows the variance assessment:

- equal variances: pooled-variance (Student) test, ``df = n1 + n2 - 2``;
- unequal variances: Welch test, Welch-Satterthwaite degrees of freedom.

Both report a two-tailed p-value and a ``1 - alpha`` confidence interval for
``mean1 - mean2`` built from the matching standard error. A zero standard
error is reported through ``TestResult.degenerate`` instead of raising, so
the report can always be rendered.
"""

from __future__ import annotations

import math
from typing import Tuple

from scipy.stats import t as student_t

from ..config import DEFAULT_ALPHA
from ..schema import (
    VARIANCE_MODE_EQUAL,
    VARIANCE_MODE_UNEQUAL,
    DescriptiveStats,
    TestResult,
    VarianceAssessment,
)
from .descriptive import pooled_standard_deviation


def select_variance_mode(assessment: VarianceAssessment) -> str:
    """Return ``"equal"`` when variances are compatible, else ``"unequal"``."""
    if assessment.variances_equal:
        return VARIANCE_MODE_EQUAL
    return VARIANCE_MODE_UNEQUAL


def pooled_standard_error(
    stats1: DescriptiveStats, stats2: DescriptiveStats
) -> Tuple[float, float]:
    """Return ``(standard_error, degrees_of_freedom)`` for the pooled test."""
    n1, n2 = stats1.count, stats2.count
    sp = pooled_standard_deviation(stats1, stats2)
    return sp * math.sqrt(1.0 / n1 + 1.0 / n2), float(n1 + n2 - 2)


def welch_standard_error(
    stats1: DescriptiveStats, stats2: DescriptiveStats
) -> Tuple[float, float]:
    """Return ``(standard_error, degrees_of_freedom)`` for Welch's test.

    Degrees of freedom use the Welch-Satterthwaite approximation
    ``(a + b)^2 / (a^2 / (n1 - 1) + b^2 / (n2 - 1))`` with ``a = v1 / n1`` and
    ``b = v2 / n2``. NaN is returned for the degrees of freedom when both
    variances are zero.
    """
    n1, n2 = stats1.count, stats2.count
    a = stats1.variance / n1
    b = stats2.variance / n2
    se = math.sqrt(a + b)
    denom = a**2 / (n1 - 1) + b**2 / (n2 - 1)
    df = (a + b) ** 2 / denom if denom > 0 else math.nan
    return se, float(df)


def run_two_sample_ttest(
    stats1: DescriptiveStats,
    stats2: DescriptiveStats,
    variance_mode: str,
    alpha: float = DEFAULT_ALPHA,
) -> TestResult:
    """Compute t, df, p-value, confidence interval and decision.

    Args:
        stats1: Group-1 summary.
        stats2: Group-2 summary.
        variance_mode: ``"equal"`` or ``"unequal"``.
        alpha: Significance level; the interval is at ``1 - alpha``.

    Returns:
        TestResult: ``reject_null`` is exactly ``p_value < alpha``.

    Raises:
        ValueError: If ``variance_mode`` is not recognized.

    Note:
        With a zero standard error, a zero mean difference yields ``t = 0`` and
        ``p = 1``; a non-zero difference yields ``t = +/-inf`` and ``p = NaN``.
        Both collapse the interval onto the observed difference and set
        ``degenerate``.
    """
    if variance_mode == VARIANCE_MODE_EQUAL:
        se, df = pooled_standard_error(stats1, stats2)
    elif variance_mode == VARIANCE_MODE_UNEQUAL:
        se, df = welch_standard_error(stats1, stats2)
    else:
        raise ValueError(
            f"variance_mode must be '{VARIANCE_MODE_EQUAL}' or "
            f"'{VARIANCE_MODE_UNEQUAL}', got {variance_mode!r}"
        )

    diff = stats1.mean - stats2.mean

    if se > 0 and math.isfinite(se) and math.isfinite(df) and df > 0:
        t_stat = diff / se
        p_value = float(min(1.0, 2.0 * student_t.sf(abs(t_stat), df)))
        t_crit = float(student_t.ppf(1.0 - alpha / 2.0, df))
        ci = (diff - t_crit * se, diff + t_crit * se)
        degenerate = False
    else:
        if diff == 0:
            t_stat = 0.0
            p_value = 1.0
        else:
            t_stat = math.copysign(math.inf, diff)
            p_value = math.nan
        ci = (diff, diff)
        degenerate = True

    return TestResult(
        reject_null=bool(p_value < alpha),
        p_value=float(p_value),
        confidence_interval=(float(ci[0]), float(ci[1])),
        t_statistic=float(t_stat),
        degrees_of_freedom=float(df),
        variance_mode=variance_mode,
        mean_difference=float(diff),
        standard_error=float(se),
        alpha=float(alpha),
        degenerate=degenerate,
    )
