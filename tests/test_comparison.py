"""End-to-end tests for the adaptive two-sample comparison."""

import io
import math

import numpy as np
import pytest

from idaq.comparison import compare, resolve_variance_backend, run_comparison
from idaq.config import ComparisonConfig
from idaq.schema import ComparisonResult, InsufficientDataError
from idaq.stats import variance as variance_mod

SENSOR_A = [12.1, 11.8, 12.6, 12.3, 11.9, 12.4]
SENSOR_B = [11.2, 11.9, 11.5, 11.0, 11.7, 11.4]


def test_identical_samples_do_not_reject():
    data = [1.0, 2.0, 3.0, 4.0, 5.0]
    result = run_comparison(data, list(data))
    assert result.test.p_value == pytest.approx(1.0)
    assert result.test.reject_null is False
    assert result.effect.cohens_d == 0.0


def test_identical_constant_samples_do_not_reject():
    result = run_comparison([7.0, 7.0, 7.0], [7.0, 7.0])
    assert result.test.p_value == 1.0
    assert result.test.reject_null is False
    assert result.test.degenerate is True


def test_missing_value_is_dropped_and_pipeline_proceeds():
    result = run_comparison([1, 2, 3, 4, 5], [1, 2, 3, 4, 5, np.nan])
    assert result.n1 == 5
    assert result.n2 == 5


def test_infinite_reading_is_dropped_and_statistics_stay_finite():
    result = run_comparison([1, 2, 3, math.inf], [1, 2, 3])
    assert result.n1 == 3
    assert result.variance.method == "test"
    assert math.isfinite(result.variance.f_statistic)
    assert result.test.degenerate is False
    assert result.test.p_value == pytest.approx(1.0)
    low, high = result.test.confidence_interval
    assert math.isfinite(low) and math.isfinite(high)
    assert low <= 0.0 <= high


def test_single_value_sample_fails_before_statistics():
    with pytest.raises(InsufficientDataError):
        run_comparison([5], [1, 2, 3])


def test_reject_null_consistent_with_p_value_on_random_pairs():
    rng = np.random.default_rng(2305)
    for _ in range(25):
        a = rng.normal(10.0, rng.uniform(0.5, 3.0), size=rng.integers(3, 15))
        b = rng.normal(10.5, rng.uniform(0.5, 3.0), size=rng.integers(3, 15))
        alpha = float(rng.choice([0.01, 0.05, 0.1]))
        result = run_comparison(a, b, alpha=alpha)
        assert result.test.reject_null == (result.test.p_value < alpha)
        low, high = result.test.confidence_interval
        assert low <= high
        assert np.sign(result.effect.cohens_d) == np.sign(result.test.mean_difference)


def test_scale_invariance():
    base = run_comparison(SENSOR_A, SENSOR_B)
    scaled = run_comparison(
        np.asarray(SENSOR_A) * 1000.0, np.asarray(SENSOR_B) * 1000.0
    )
    assert scaled.test.p_value == pytest.approx(base.test.p_value, rel=1e-9)
    assert scaled.test.reject_null == base.test.reject_null
    assert scaled.effect.magnitude_class == base.effect.magnitude_class
    assert scaled.test.variance_mode == base.test.variance_mode
    assert np.allclose(
        scaled.test.confidence_interval,
        np.asarray(base.test.confidence_interval) * 1000.0,
    )


def test_unequal_spread_selects_welch():
    tight = [10.1, 9.9, 10.0, 10.2, 9.8]
    wide = [8.0, 12.0, 5.0, 15.0, 10.0]
    result = run_comparison(tight, wide)
    assert result.variance.method == "test"
    assert result.variance.variances_equal is False
    assert result.test.variance_mode == "unequal"


def test_effect_size_always_uses_pooled_sd():
    tight = [10.1, 9.9, 10.0, 10.2, 9.8]
    wide = [8.0, 12.0, 5.0, 15.0, 10.0]
    result = run_comparison(tight, wide)
    n1, n2 = result.n1, result.n2
    sp = math.sqrt(
        ((n1 - 1) * result.stats1.variance + (n2 - 1) * result.stats2.variance)
        / (n1 + n2 - 2)
    )
    assert np.isclose(result.effect.pooled_standard_deviation, sp)


def test_heuristic_config_forces_fallback():
    config = ComparisonConfig(variance_test="heuristic")
    result = run_comparison(SENSOR_A, SENSOR_B, config=config)
    assert result.variance.method == "heuristic"
    assert result.variance.equality_pvalue is None


def test_fallback_used_when_scipy_probe_fails(monkeypatch):
    monkeypatch.setattr(variance_mod, "HAVE_SCIPY", False)
    result = run_comparison(SENSOR_A, SENSOR_B)
    assert result.variance.method == "heuristic"
    with pytest.raises(ValueError, match="requires SciPy"):
        resolve_variance_backend(ComparisonConfig(variance_test="ftest"))


def test_alpha_argument_overrides_config():
    result = run_comparison(SENSOR_A, SENSOR_B, alpha=0.01, config=ComparisonConfig(alpha=0.2))
    assert result.test.alpha == 0.01


def test_compare_returns_tuple_and_prints_report(capsys):
    h, p, ci, stats = compare(SENSOR_A, SENSOR_B)
    out = capsys.readouterr().out
    assert isinstance(h, bool)
    assert h == (p < 0.05)
    assert ci[0] <= ci[1]
    assert set(stats) == {"tstat", "df"}
    assert "IDAQ LAB REPORT: T-TEST ANALYSIS" in out
    assert f"{p:.4f}" in out


def test_compare_writes_to_given_stream(capsys):
    buf = io.StringIO()
    compare(SENSOR_A, SENSOR_B, stream=buf)
    assert capsys.readouterr().out == ""
    assert "STATUS:" in buf.getvalue()


def test_compare_can_draw_box_plot():
    import matplotlib.pyplot as plt

    plt.close("all")
    compare(SENSOR_A, SENSOR_B, plot=True, stream=io.StringIO())
    assert len(plt.get_fignums()) == 1
    plt.close("all")


def test_run_comparison_returns_result_record():
    result = run_comparison(SENSOR_A, SENSOR_B)
    assert isinstance(result, ComparisonResult)
    h, p, ci, stats = result.as_tuple()
    assert stats["tstat"] == result.test.t_statistic
    assert stats["df"] == result.test.degrees_of_freedom
