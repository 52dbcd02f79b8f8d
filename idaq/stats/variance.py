"""Decide whether two samples have compatible variances.

Two interchangeable backends implement the decision:

- ``FTestBackend``: two-sided F-test on the variance ratio (requires SciPy).
- ``VarianceRatioHeuristic``: largest-to-smallest variance ratio compared
  against a threshold (default 4).

The F-test backend is resolved once through a capability probe. When the probe
finds no SciPy, or when the F-test cannot produce a finite statistic, the
assessor switches to the heuristic; that switch never raises.
"""

from __future__ import annotations

import importlib.util
import logging
import math
from typing import Optional, Protocol

import numpy as np

from ..config import DEFAULT_ALPHA, DEFAULT_RATIO_EPSILON, DEFAULT_RATIO_THRESHOLD
from ..schema import (
    VARIANCE_METHOD_HEURISTIC,
    VARIANCE_METHOD_TEST,
    EqualityTestUnavailable,
    VarianceAssessment,
)

HAVE_SCIPY = importlib.util.find_spec("scipy") is not None
if HAVE_SCIPY:
    from scipy.stats import f as fisher_f

logger = logging.getLogger(__name__)


class VarianceEqualityTest(Protocol):
    name: str

    def assess(
        self, sample1: np.ndarray, sample2: np.ndarray, alpha: float
    ) -> VarianceAssessment: ...


class FTestBackend:
    """Two-sample F-test for equal variances.

    ``F = var1 / var2`` with ``(n1 - 1, n2 - 1)`` degrees of freedom. The
    two-sided p-value is ``2 * min(P(F' <= F), P(F' >= F))``. The confidence
    interval for ``sigma1^2 / sigma2^2`` is
    ``[F / F_{1-alpha/2}, F / F_{alpha/2}]``.
    """

    name = "F-test"

    def assess(
        self, sample1: np.ndarray, sample2: np.ndarray, alpha: float
    ) -> VarianceAssessment:
        if not HAVE_SCIPY:
            raise EqualityTestUnavailable("SciPy is not installed.")

        var1 = float(np.var(sample1, ddof=1))
        var2 = float(np.var(sample2, ddof=1))
        df1 = int(np.size(sample1)) - 1
        df2 = int(np.size(sample2)) - 1

        with np.errstate(divide="ignore", invalid="ignore"):
            f_stat = float(np.divide(var1, var2))
        if math.isnan(f_stat):
            raise EqualityTestUnavailable(
                "F statistic is undefined (both sample variances are zero)."
            )

        pvalue = float(
            min(1.0, 2.0 * min(fisher_f.cdf(f_stat, df1, df2), fisher_f.sf(f_stat, df1, df2)))
        )
        if not math.isfinite(pvalue):
            raise EqualityTestUnavailable(f"F-test p-value is not finite ({pvalue}).")

        upper_q = float(fisher_f.ppf(1.0 - alpha / 2.0, df1, df2))
        lower_q = float(fisher_f.ppf(alpha / 2.0, df1, df2))
        with np.errstate(divide="ignore", invalid="ignore"):
            ci = (float(np.divide(f_stat, upper_q)), float(np.divide(f_stat, lower_q)))

        return VarianceAssessment(
            equality_pvalue=pvalue,
            variances_equal=not pvalue < alpha,
            method=VARIANCE_METHOD_TEST,
            f_statistic=f_stat,
            ratio_confidence_interval=ci,
        )


class VarianceRatioHeuristic:
    """Rule-of-thumb variance comparison that never raises."""

    name = "variance-ratio heuristic"

    def __init__(
        self,
        threshold: float = DEFAULT_RATIO_THRESHOLD,
        epsilon: float = DEFAULT_RATIO_EPSILON,
    ) -> None:
        self.threshold = float(threshold)
        self.epsilon = float(epsilon)

    def ratio(self, var1: float, var2: float) -> float:
        return max(var1, var2) / max(min(var1, var2), self.epsilon)

    def assess(
        self, sample1: np.ndarray, sample2: np.ndarray, alpha: float = DEFAULT_ALPHA
    ) -> VarianceAssessment:
        var1 = float(np.var(sample1, ddof=1))
        var2 = float(np.var(sample2, ddof=1))
        ratio = self.ratio(var1, var2)
        return VarianceAssessment(
            equality_pvalue=None,
            variances_equal=not ratio > self.threshold,
            method=VARIANCE_METHOD_HEURISTIC,
            variance_ratio=ratio,
            threshold=self.threshold,
        )


def native_variance_backend() -> Optional[FTestBackend]:
    """Return the F-test backend, or ``None`` when SciPy is unavailable."""
    if HAVE_SCIPY:
        return FTestBackend()
    return None


def assess_variance_equality(
    sample1: np.ndarray,
    sample2: np.ndarray,
    alpha: float = DEFAULT_ALPHA,
    *,
    ratio_threshold: float = DEFAULT_RATIO_THRESHOLD,
    epsilon: float = DEFAULT_RATIO_EPSILON,
    backend: Optional[VarianceEqualityTest] = None,
) -> VarianceAssessment:
    """Assess variance equality with the native test, else the heuristic.

    Args:
        sample1: Cleaned group-1 sample.
        sample2: Cleaned group-2 sample.
        alpha: Significance level of the F-test.
        ratio_threshold: Heuristic threshold on the variance ratio.
        epsilon: Floor for the smaller variance in the heuristic ratio.
        backend: Native test resolved by the caller (usually
            :func:`native_variance_backend`). ``None`` selects the heuristic.

    Returns:
        VarianceAssessment: ``method == "test"`` when the native backend
        produced a result, ``"heuristic"`` otherwise.
    """
    heuristic = VarianceRatioHeuristic(threshold=ratio_threshold, epsilon=epsilon)
    if backend is None:
        logger.info("No variance-equality test available; using %s", heuristic.name)
        return heuristic.assess(sample1, sample2, alpha)

    try:
        return backend.assess(sample1, sample2, alpha)
    except Exception as exc:
        logger.info(
            "%s could not run (%s); falling back to %s",
            getattr(backend, "name", type(backend).__name__),
            exc,
            heuristic.name,
        )
        return heuristic.assess(sample1, sample2, alpha)
