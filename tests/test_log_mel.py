import math

import pytest

from lyracodec.log_mel import (
    LogMelSpectrogramExtractor,
    lower_freq_limit,
    normalization_factor,
    silence_value,
    upper_freq_limit,
)

SAMPLE_RATE_HZ = 16000
NUM_MEL_BINS = 10
HOP_LENGTH = 5
WINDOW_LENGTH = 10

WAV_DATA = [
    7954, 10085, 8733, 10844, 29949,
    -549, 20833, 30345, 18086, 11375,
    -27309, 12323, -22891, -23360, 11958,
]

MEL_BINS = [
    [0.62146081, 0.62146081, 0.79771997, 1.00416802, 0.73013308, 0.96676503,
     0.87643814, 0.89284485, 0.90586112, 0.8633126],
    [0.62146081, 0.62146081, 0.89000145, 1.09644949, 0.76740002, 1.00403196,
     0.8919037, 0.99746922, 1.06052462, 1.08220812],
    [0.62146081, 0.62146081, 0.83526758, 1.04171563, 0.82093681, 1.05756876,
     0.96348656, 1.01345318, 1.07686605, 1.12100911],
]


@pytest.fixture
def extractor():
    return LogMelSpectrogramExtractor(
        SAMPLE_RATE_HZ, NUM_MEL_BINS, HOP_LENGTH, WINDOW_LENGTH
    )


def test_three_frames_equal_expected(extractor):
    for index, expected in enumerate(MEL_BINS):
        frame = WAV_DATA[index * HOP_LENGTH : (index + 1) * HOP_LENGTH]
        features = extractor.extract(frame)
        assert features == pytest.approx(expected, abs=1e-5)


def test_frame_longer_than_expected(extractor):
    with pytest.raises(ValueError):
        extractor.extract([0] * (HOP_LENGTH + 1))


def test_frame_shorter_than_expected(extractor):
    with pytest.raises(ValueError):
        extractor.extract(WAV_DATA[: HOP_LENGTH - 1])


def test_window_shorter_than_hop_fails():
    with pytest.raises(ValueError):
        LogMelSpectrogramExtractor(SAMPLE_RATE_HZ, NUM_MEL_BINS, 10, 5)


def test_silent_audio_gives_silence_value(extractor):
    features = extractor.extract([0] * HOP_LENGTH)
    assert len(features) == NUM_MEL_BINS
    assert features == pytest.approx([silence_value()] * NUM_MEL_BINS)


def test_hop_length_property(extractor):
    assert extractor.hop_length_samples == HOP_LENGTH


def test_frequency_limits():
    assert lower_freq_limit() == 0.0
    assert upper_freq_limit(16000) == pytest.approx(7920.0)


def test_normalization_and_silence():
    assert normalization_factor() == 10.0
    assert silence_value() == pytest.approx(math.log(500.0) / 10.0, abs=1e-6)
    assert silence_value() == pytest.approx(0.62146081, abs=1e-6)