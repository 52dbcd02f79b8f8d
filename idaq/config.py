"""Centralized defaults and validated configuration for two-sample comparisons."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

DEFAULT_ALPHA = 0.05
# Variance ratio above which the heuristic fallback declares variances unequal.
DEFAULT_RATIO_THRESHOLD = 4.0
DEFAULT_RATIO_EPSILON = 1e-12

VARIANCE_TESTS: tuple[str, ...] = ("auto", "ftest", "heuristic")


@dataclass(frozen=True)
class ComparisonConfig:
    """Settings consumed by :func:`idaq.comparison.run_comparison`.

    Attributes:
        alpha: Significance level for both the variance-equality test and the
            t-test. The confidence interval is reported at ``1 - alpha``.
        ratio_threshold: Largest-to-smallest variance ratio above which the
            heuristic fallback treats the variances as unequal. The default of
            4 is a classroom rule of thumb, kept configurable.
        ratio_epsilon: Floor applied to the smaller variance so the heuristic
            ratio never divides by zero.
        variance_test: ``"auto"`` probes for the F-test and falls back to the
            heuristic, ``"ftest"`` requires the F-test, ``"heuristic"`` always
            uses the ratio rule.
    """

    alpha: float = DEFAULT_ALPHA
    ratio_threshold: float = DEFAULT_RATIO_THRESHOLD
    ratio_epsilon: float = DEFAULT_RATIO_EPSILON
    variance_test: str = "auto"

    def __post_init__(self) -> None:
        alpha = float(self.alpha)
        if not math.isfinite(alpha) or not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must lie strictly between 0 and 1, got {self.alpha!r}")
        if not math.isfinite(self.ratio_threshold) or self.ratio_threshold <= 0:
            raise ValueError(
                f"ratio_threshold must be finite and > 0, got {self.ratio_threshold!r}"
            )
        if not math.isfinite(self.ratio_epsilon) or self.ratio_epsilon <= 0:
            raise ValueError(
                f"ratio_epsilon must be finite and > 0, got {self.ratio_epsilon!r}"
            )
        if self.variance_test not in VARIANCE_TESTS:
            raise ValueError(
                f"variance_test must be one of {VARIANCE_TESTS}, got {self.variance_test!r}"
            )

    @property
    def confidence_level(self) -> float:
        return 1.0 - self.alpha

    def with_alpha(self, alpha: float | None) -> "ComparisonConfig":
        """Return a copy using ``alpha`` unless it is ``None``."""
        if alpha is None:
            return self
        return replace(self, alpha=float(alpha))
