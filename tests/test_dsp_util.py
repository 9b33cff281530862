import math

import pytest

from lyracodec.dsp_util import INT16_MAX, INT16_MIN, clip_to_int16, log_spectral_distance


def test_log_spectral_distance():
    first = [float(i) for i in range(10)]
    second = [float(i) for i in range(1, 11)]
    assert log_spectral_distance(first, second) == pytest.approx(10.0, abs=1e-4)


def test_log_spectral_distance_of_identical_spectra_is_zero():
    spectrum = [0.5, 1.5, -2.0, 3.25]
    assert log_spectral_distance(spectrum, spectrum) == 0.0


def test_log_spectral_distance_is_symmetric():
    first = [0.1, 0.7, 2.0]
    second = [1.0, -0.3, 0.5]
    assert log_spectral_distance(first, second) == pytest.approx(
        log_spectral_distance(second, first)
    )


def test_log_spectral_distance_size_mismatch_raises():
    with pytest.raises(ValueError):
        log_spectral_distance([1.0, 2.0], [1.0])


def test_log_spectral_distance_empty_is_nan():
    distance = log_spectral_distance([], [])
    assert str(distance) == "nan"
    assert math.isnan(distance)


def test_clip():
    assert clip_to_int16(10000000) == INT16_MAX
    assert clip_to_int16(0) == 0
    assert clip_to_int16(-10000000) == INT16_MIN


def test_clip_keeps_values_in_range():
    assert clip_to_int16(1234.0) == 1234
    assert clip_to_int16(-1234.0) == -1234


def test_clip_rejects_nan():
    with pytest.raises(ValueError):
        clip_to_int16(math.nan)