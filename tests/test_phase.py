import numpy as np
import pytest

from idaq.phase import dominant_frequency, phase_difference, wrap_degrees

FS = 1000.0
N = 1000
T = np.arange(N) / FS


def _pair(shift_deg, freq=50.0, offset=2.5):
    primary = np.sin(2 * np.pi * freq * T) + offset
    secondary = 0.4 * np.sin(2 * np.pi * freq * T + np.radians(shift_deg)) - offset
    return primary, secondary


@pytest.mark.parametrize("shift", [30.0, -45.0, 0.0, 120.0])
def test_phase_difference_recovers_shift(shift):
    primary, secondary = _pair(shift)
    out = phase_difference(primary, secondary, FS)
    assert out.shape == (1,)
    assert out[0] == pytest.approx(shift, abs=0.5)


def test_null_point_flip_is_wrapped_into_range():
    primary, secondary = _pair(190.0)
    out = phase_difference(primary, secondary, FS)
    assert -180.0 <= out[0] < 180.0
    assert out[0] == pytest.approx(-170.0, abs=0.5)


def test_matrix_input_processes_each_capture():
    shifts = [10.0, -90.0, 170.0]
    pairs = [_pair(s) for s in shifts]
    primary = np.column_stack([p for p, _ in pairs])
    secondary = np.column_stack([s for _, s in pairs])
    out = phase_difference(primary, secondary, FS)
    assert out.shape == (3,)
    assert np.allclose(out, shifts, atol=0.5)


def test_integer_daq_counts_are_accepted():
    primary, secondary = _pair(30.0)
    out = phase_difference(
        np.round(primary * 1000).astype(np.int16),
        np.round(secondary * 1000).astype(np.int16),
        FS,
    )
    assert out[0] == pytest.approx(30.0, abs=1.0)


def test_wrap_degrees():
    assert wrap_degrees(-350.0) == pytest.approx(10.0)
    assert wrap_degrees(190.0) == pytest.approx(-170.0)
    assert wrap_degrees(45.0) == pytest.approx(45.0)


def test_dominant_frequency():
    primary, _ = _pair(0.0, freq=120.0)
    assert dominant_frequency(primary, FS)[0] == pytest.approx(120.0)


def test_shape_mismatch_and_bad_fs_raise():
    primary, secondary = _pair(0.0)
    with pytest.raises(ValueError, match="shapes differ"):
        phase_difference(primary, secondary[:-1], FS)
    with pytest.raises(ValueError, match="Sampling frequency"):
        phase_difference(primary, secondary, 0.0)
