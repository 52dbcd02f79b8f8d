"""Clean raw measurement vectors before any statistic is computed."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from ..schema import InsufficientDataError

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 2


def clean_sample(data) -> np.ndarray:
    """Flatten ``data`` into one ordered float vector of finite values.

    Args:
        data: Any array-like of numbers (list, tuple, 1-D or 2-D array,
            pandas Series). ``None``, NaN and ``±inf`` entries are treated
            as missing.

    Returns:
        numpy.ndarray: 1-D float array in the original (row-major) order with
        every non-finite entry removed.
    """
    arr = np.asarray(data, dtype=float).ravel()
    return arr[np.isfinite(arr)]


def sanitize_samples(data1, data2) -> Tuple[np.ndarray, np.ndarray]:
    """Clean both groups and enforce the minimum sample size.

    Args:
        data1: Raw measurements for group 1.
        data2: Raw measurements for group 2.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: Cleaned samples; their sizes are
        ``n1 = len(sample1)`` and ``n2 = len(sample2)``.

    Raises:
        InsufficientDataError: If either cleaned sample has fewer than two
            values. Variance and standard error are undefined below that.
    """
    sample1 = clean_sample(data1)
    sample2 = clean_sample(data2)

    for label, raw, sample in (("data1", data1, sample1), ("data2", data2, sample2)):
        dropped = int(np.asarray(raw, dtype=float).size - sample.size)
        if dropped:
            logger.debug("Dropped %d missing or non-finite value(s) from %s", dropped, label)
        if sample.size < MIN_SAMPLE_SIZE:
            raise InsufficientDataError(
                f"{label} has {sample.size} valid value(s) after removing missing "
                f"entries; at least {MIN_SAMPLE_SIZE} are required."
            )

    return sample1, sample2
