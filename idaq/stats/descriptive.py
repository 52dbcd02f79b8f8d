"""Per-group summary statistics."""

from __future__ import annotations

import math

import numpy as np

from ..schema import DescriptiveStats


def describe_sample(sample: np.ndarray) -> DescriptiveStats:
    """Summarize one cleaned sample using the unbiased (n - 1) variance."""
    arr = np.asarray(sample, dtype=float)
    n = int(arr.size)
    variance = float(np.var(arr, ddof=1))
    sd = math.sqrt(variance)
    return DescriptiveStats(
        count=n,
        mean=float(np.mean(arr)),
        standard_deviation=sd,
        variance=variance,
        standard_error=sd / math.sqrt(n),
    )


def pooled_standard_deviation(stats1: DescriptiveStats, stats2: DescriptiveStats) -> float:
    """Pooled SD: sqrt(((n1-1)v1 + (n2-1)v2) / (n1 + n2 - 2))."""
    n1, n2 = stats1.count, stats2.count
    pooled_var = ((n1 - 1) * stats1.variance + (n2 - 1) * stats2.variance) / (n1 + n2 - 2)
    return math.sqrt(pooled_var)
