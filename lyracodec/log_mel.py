"""Log mel spectrogram features extracted from consecutive frames of audio."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from lyracodec.spectral import MelFilterbank, Spectrogram, next_power_of_two

_NORM = np.float32(10.0)
_LOG_FLOOR = np.float32(500.0)
_LOWER_FREQ_LIMIT = 0.0
_UPPER_FREQ_LIMIT_FACTOR = 0.495


def lower_freq_limit() -> float:
    """Return the lower frequency limit of the mel filterbank in Hz."""
    return _LOWER_FREQ_LIMIT


def upper_freq_limit(sample_rate_hz: int) -> float:
    """Return the upper frequency limit of the mel filterbank in Hz."""
    return _UPPER_FREQ_LIMIT_FACTOR * sample_rate_hz


def normalization_factor() -> float:
    """Return the factor the log mel features are divided by."""
    return float(_NORM)


def silence_value() -> float:
    """Return the feature value that represents silence."""
    return float(np.float32(math.log(float(_LOG_FLOOR))) / _NORM)


class LogMelSpectrogramExtractor:
    """Extracts normalized log mel features from frames of hop-length audio.

    Frames are expected in order: each call continues the spectrogram of the
    previous ones.
    """

    def __init__(
        self,
        sample_rate_hz: int,
        num_mel_bins: int,
        hop_length_samples: int,
        window_length_samples: int,
    ) -> None:
        if window_length_samples < hop_length_samples:
            raise ValueError(
                f"Window length samples was {window_length_samples} but must be "
                f">= hop length samples which was {hop_length_samples}."
            )
        self._spectrogram = Spectrogram(window_length_samples, hop_length_samples)
        # Prime the internal queue so the first hop of audio yields one slice.
        self._spectrogram.compute(np.zeros(window_length_samples))

        fft_bins = next_power_of_two(window_length_samples) // 2 + 1
        self._mel_filterbank = MelFilterbank(
            fft_bins,
            float(sample_rate_hz),
            num_mel_bins,
            lower_freq_limit(),
            upper_freq_limit(sample_rate_hz),
        )
        self._hop_length_samples = hop_length_samples

    @property
    def hop_length_samples(self) -> int:
        """Number of samples each frame of audio must have."""
        return self._hop_length_samples

    def extract(self, audio: Sequence[int]) -> list[float]:
        """Return the log mel features of one hop of audio."""
        samples = np.asarray(audio, dtype=float).ravel()
        if len(samples) != self._hop_length_samples:
            raise ValueError(
                f"Audio frame should have {self._hop_length_samples} samples "
                f"but instead had {len(samples)}."
            )
        slices = self._spectrogram.compute(samples)
        if len(slices) != 1:
            raise RuntimeError("Spectrogram had unexpected number of output frames.")

        mel = self._mel_filterbank.compute(slices[0]).astype(np.float32)
        features = np.log(np.maximum(mel, _LOG_FLOOR)) / _NORM
        return [float(value) for value in features]