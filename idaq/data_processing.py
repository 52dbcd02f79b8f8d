"""
Load measurement columns from DAQ/CSV exports.

Two table layouts are supported:

- wide: one column per group (``sensor_A``, ``sensor_B``); shorter columns are
  padded with empty cells, which become NaN and are later dropped by the
  sanitizer;
- long: one grouping column plus one value column with exactly two groups.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
import pandas as pd


def load_measurements(filepath) -> pd.DataFrame:
    """Load a CSV export into a DataFrame."""
    return pd.read_csv(filepath)


def _require_column(df: pd.DataFrame, column: str) -> None:
    if column not in df.columns:
        raise KeyError(
            f"Column '{column}' not found. Available columns: {list(df.columns)}"
        )


def extract_column(df: pd.DataFrame, column: str) -> np.ndarray:
    """Return ``column`` as floats; non-numeric cells become NaN.

    Raises:
        KeyError: If ``column`` is missing.
    """
    _require_column(df, column)
    return pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float)


def extract_wide_groups(
    df: pd.DataFrame, group1: str, group2: str
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the two measurement columns of a wide table."""
    return extract_column(df, group1), extract_column(df, group2)


def extract_long_groups(
    df: pd.DataFrame, group_col: str, value_col: str
) -> Tuple[Tuple[str, str], np.ndarray, np.ndarray]:
    """Split a long table into the two groups named in ``group_col``.

    Groups keep their order of first appearance.

    Returns:
        tuple: ``((label1, label2), values1, values2)``.

    Raises:
        KeyError: If either column is missing.
        ValueError: If ``group_col`` does not hold exactly two groups.
    """
    _require_column(df, group_col)
    _require_column(df, value_col)

    labels = df[group_col].dropna().astype(str).str.strip()
    groups = list(dict.fromkeys(labels))
    if len(groups) != 2:
        raise ValueError(
            f"Column '{group_col}' must contain exactly two groups, found {len(groups)}: {groups}"
        )

    values = pd.to_numeric(df[value_col], errors="coerce")
    first = values[labels.reindex(df.index) == groups[0]].to_numpy(dtype=float)
    second = values[labels.reindex(df.index) == groups[1]].to_numpy(dtype=float)
    return (groups[0], groups[1]), first, second
