"""
Adaptive two-sample mean comparison.

Pipeline:
1) Sanitize both samples (flatten, drop NaN, require n >= 2).
2) Summarize each sample (mean, SD, variance, standard error).
3) Assess variance equality (F-test, variance-ratio heuristic as fallback).
4) Run the pooled or Welch t-test selected by step 3.
5) Compute Cohen's d from the pooled SD.
6) Compose and print the lab report.

``run_comparison`` returns the full result record without printing;
``compare`` prints the report and returns the compact
``(reject_null, p_value, confidence_interval, stats)`` tuple.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import ComparisonConfig
from .reporting import compose_report, render_report
from .schema import ComparisonResult
from .stats.descriptive import describe_sample
from .stats.effect_size import compute_effect_size
from .stats.sanitize import sanitize_samples
from .stats.ttest import run_two_sample_ttest, select_variance_mode
from .stats.variance import (
    VarianceEqualityTest,
    assess_variance_equality,
    native_variance_backend,
)

logger = logging.getLogger(__name__)


def resolve_variance_backend(config: ComparisonConfig) -> Optional[VarianceEqualityTest]:
    """Resolve the native variance test for ``config`` once per comparison.

    Returns:
        The F-test backend, or ``None`` when the heuristic should decide.

    Raises:
        ValueError: If ``variance_test == "ftest"`` but the F-test is not
            available in this environment.
    """
    if config.variance_test == "heuristic":
        return None
    backend = native_variance_backend()
    if backend is None and config.variance_test == "ftest":
        raise ValueError("variance_test='ftest' requires SciPy, which is not installed.")
    return backend


def run_comparison(
    data1,
    data2,
    alpha: float | None = None,
    config: ComparisonConfig | None = None,
    backend: Optional[VarianceEqualityTest] = None,
) -> ComparisonResult:
    """Run the full comparison pipeline and return its result record.

    Args:
        data1: Raw measurements for group 1 (any array-like; NaN dropped).
        data2: Raw measurements for group 2.
        alpha: Significance level; overrides ``config.alpha`` when given.
        config: Comparison settings. Defaults to :class:`ComparisonConfig`.
        backend: Explicit variance-equality test, bypassing the probe. Used to
            inject alternative or failing implementations.

    Returns:
        ComparisonResult: All intermediate records plus the test outcome.

    Raises:
        InsufficientDataError: If either sample has fewer than two valid values.
        ValueError: If the configuration is invalid.
    """
    cfg = (config or ComparisonConfig()).with_alpha(alpha)

    sample1, sample2 = sanitize_samples(data1, data2)
    logger.debug("Sanitized samples: n1=%d, n2=%d", sample1.size, sample2.size)

    stats1 = describe_sample(sample1)
    stats2 = describe_sample(sample2)

    if backend is None:
        backend = resolve_variance_backend(cfg)
    variance = assess_variance_equality(
        sample1,
        sample2,
        cfg.alpha,
        ratio_threshold=cfg.ratio_threshold,
        epsilon=cfg.ratio_epsilon,
        backend=backend,
    )
    mode = select_variance_mode(variance)
    logger.debug(
        "Variance assessment via %s: equal=%s -> %s-variance t-test",
        variance.method,
        variance.variances_equal,
        mode,
    )

    test = run_two_sample_ttest(stats1, stats2, mode, cfg.alpha)
    if test.degenerate:
        logger.warning(
            "Degenerate t-test: zero standard error (p=%s)", test.p_value
        )

    effect = compute_effect_size(stats1, stats2, test.mean_difference)
    logger.debug(
        "t=%.4g, df=%.4g, p=%.4g, d=%.3g (%s)",
        test.t_statistic,
        test.degrees_of_freedom,
        test.p_value,
        effect.cohens_d,
        effect.magnitude_class,
    )

    return ComparisonResult(
        stats1=stats1,
        stats2=stats2,
        variance=variance,
        test=test,
        effect=effect,
    )


def compare(
    data1,
    data2,
    alpha: float | None = None,
    *,
    config: ComparisonConfig | None = None,
    plot: bool = False,
    stream: Optional[TextIO] = None,
):
    """Compare two groups of measurements and print the lab report.

    Args:
        data1: Measurements from the first group or sensor.
        data2: Measurements from the second group or sensor.
        alpha: Significance level (default 0.05).
        config: Optional comparison settings.
        plot: Also draw a box plot of both groups.
        stream: Destination of the report; defaults to ``sys.stdout``.

    Returns:
        tuple: ``(reject_null, p_value, confidence_interval, stats)`` where
        ``stats`` holds ``tstat`` and ``df``.

    Example:
        >>> compare([20.1, 20.3, 19.8], [21.0, 21.4, 20.9])  # doctest: +SKIP
    """
    result = run_comparison(data1, data2, alpha=alpha, config=config)
    report = render_report(compose_report(result))
    print(report, file=stream if stream is not None else sys.stdout)

    if plot:
        from .plotting import plot_comparison

        plot_comparison(data1, data2, result.test.p_value)

    return result.as_tuple()
