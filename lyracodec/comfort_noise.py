"""Comfort noise estimated from log mel features with a random phase."""

from __future__ import annotations

import cmath
import math
import random
from collections.abc import Sequence

import numpy as np

from lyracodec.dsp_util import clip_to_int16
from lyracodec.log_mel import lower_freq_limit, normalization_factor, upper_freq_limit
from lyracodec.spectral import InverseSpectrogram, MelFilterbank, next_power_of_two


class ComfortNoiseGenerator:
    """Generates audio samples whose spectrum matches the given log mel features."""

    def __init__(
        self,
        sample_rate_hz: int,
        num_mel_bins: int,
        window_length_samples: int,
        hop_length_samples: int,
    ) -> None:
        fft_size = next_power_of_two(window_length_samples)
        self._num_fft_bins = fft_size // 2 + 1
        self._mel_filterbank = MelFilterbank(
            self._num_fft_bins,
            float(sample_rate_hz),
            num_mel_bins,
            lower_freq_limit(),
            upper_freq_limit(sample_rate_hz),
        )
        self._inverse_spectrogram = InverseSpectrogram(fft_size, hop_length_samples)
        self._num_mel_bins = num_mel_bins
        self._hop_length_samples = hop_length_samples
        self._log_mel_features: list[float] = []
        self._squared_magnitude_fft = np.zeros(0)
        self._reconstructed: list[int] = []
        self._random = random.Random()

    def add_features(self, features: Sequence[float]) -> None:
        """Replace the features that the noise is generated from."""
        self._log_mel_features = [float(value) for value in features]

    def generate_samples(self, num_samples: int) -> list[int]:
        """Return ``num_samples`` samples of noise, at most one hop at a time."""
        if num_samples > self._hop_length_samples:
            raise ValueError(
                "Number of samples requested cannot be larger than the hop length "
                f"{self._hop_length_samples}, but was {num_samples}."
            )
        if num_samples < 0:
            raise ValueError(
                "Number of samples requested must be greater than or equal to 0, "
                f"but was {num_samples}."
            )
        if len(self._log_mel_features) != self._num_mel_bins:
            raise ValueError(
                f"Size of features is {len(self._log_mel_features)}, "
                f"but should be {self._num_mel_bins}."
            )

        if num_samples > len(self._reconstructed):
            self._fft_from_features()
            self._invert_fft()

        samples = self._reconstructed[:num_samples]
        del self._reconstructed[:num_samples]
        return samples

    def reset(self) -> None:
        """Forget the features and any buffered samples."""
        self._log_mel_features = []
        self._squared_magnitude_fft = np.zeros(0)
        self._reconstructed = []

    def _fft_from_features(self) -> None:
        norm = np.float32(normalization_factor())
        mel_features = [
            float(np.exp(np.float32(value) * norm)) for value in self._log_mel_features
        ]
        squared = self._mel_filterbank.estimate_inverse(mel_features)
        if len(squared) != self._num_fft_bins:
            raise RuntimeError(
                f"Size of squared-magnitude FFT is {len(squared)}, "
                f"but should be {self._num_fft_bins}."
            )
        self._squared_magnitude_fft = squared

    def _invert_fft(self) -> None:
        spectrum = [
            math.sqrt(power)
            * cmath.exp(1j * self._random.uniform(0.0, 2.0 * math.pi))
            for power in self._squared_magnitude_fft
        ]
        samples = self._inverse_spectrogram.process([spectrum])
        if len(samples) != self._hop_length_samples:
            raise RuntimeError(
                f"Size of samples gotten from inverse FFT operation is "
                f"{len(samples)}, but should be {self._hop_length_samples}."
            )
        self._reconstructed.extend(
            clip_to_int16(float(np.float32(sample))) for sample in samples
        )