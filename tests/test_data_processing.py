import numpy as np
import pandas as pd
import pytest

from idaq.data_processing import extract_column, extract_long_groups, extract_wide_groups


def test_extract_wide_groups_coerces_non_numeric_to_nan():
    df = pd.DataFrame({"sensor_A": [1.0, 2.0, 3.0], "sensor_B": ["4.0", "bad", None]})
    a, b = extract_wide_groups(df, "sensor_A", "sensor_B")
    assert a.tolist() == [1.0, 2.0, 3.0]
    assert b[0] == 4.0
    assert np.isnan(b[1]) and np.isnan(b[2])


def test_missing_column_lists_available_columns():
    df = pd.DataFrame({"sensor_A": [1.0]})
    with pytest.raises(KeyError, match="sensor_A"):
        extract_column(df, "sensor_C")


def test_extract_long_groups_keeps_first_appearance_order():
    df = pd.DataFrame(
        {
            "sensor": ["B", "A", "B", "A", "A"],
            "reading": [2.0, 1.0, 2.5, 1.5, 1.2],
        }
    )
    labels, first, second = extract_long_groups(df, "sensor", "reading")
    assert labels == ("B", "A")
    assert first.tolist() == [2.0, 2.5]
    assert second.tolist() == [1.0, 1.5, 1.2]


def test_extract_long_groups_requires_two_groups():
    df = pd.DataFrame({"sensor": ["A", "B", "C"], "reading": [1.0, 2.0, 3.0]})
    with pytest.raises(ValueError, match="exactly two groups"):
        extract_long_groups(df, "sensor", "reading")
