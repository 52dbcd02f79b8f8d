"""Cohen's d effect size from the pooled standard deviation."""

from __future__ import annotations

import math

from ..schema import DescriptiveStats, EffectSize
from .descriptive import pooled_standard_deviation

# (upper bound on |d|, label), checked in order.
MAGNITUDE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (0.2, "very small"),
    (0.5, "small"),
    (0.8, "medium"),
)
LARGEST_MAGNITUDE = "large"


def classify_magnitude(cohens_d: float) -> str:
    """Map ``|d|`` onto very small / small / medium / large."""
    size = abs(float(cohens_d))
    for upper, label in MAGNITUDE_THRESHOLDS:
        if size < upper:
            return label
    return LARGEST_MAGNITUDE


def compute_effect_size(
    stats1: DescriptiveStats, stats2: DescriptiveStats, mean_difference: float
) -> EffectSize:
    """Standardize ``mean_difference`` by the pooled SD of both groups.

    The pooled SD is used whichever t-test variant was selected: the effect
    size describes practical magnitude, not significance.
    """
    sp = pooled_standard_deviation(stats1, stats2)
    if sp > 0:
        d = mean_difference / sp
    elif mean_difference == 0:
        d = 0.0
    else:
        d = math.copysign(math.inf, mean_difference)
    return EffectSize(
        cohens_d=float(d),
        magnitude_class=classify_magnitude(d),
        pooled_standard_deviation=float(sp),
    )
