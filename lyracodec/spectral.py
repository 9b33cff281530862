"""Spectrogram, mel filterbank and inverse spectrogram building blocks."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np


def next_power_of_two(value: int) -> int:
    """Return the smallest power of two that is at least ``value``."""
    if value < 0:
        raise ValueError(f"Value must not be negative, but was {value}.")
    if value <= 1:
        return 1
    return 1 << (value - 1).bit_length()


def _freq_to_mel(freq: float) -> float:
    return 1127.0 * math.log1p(freq / 700.0)


class Spectrogram:
    """Streaming squared-magnitude spectrogram with a periodic Hann window."""

    def __init__(self, window_length: int, step_length: int) -> None:
        if window_length < 2:
            raise ValueError(
                f"Window length must be at least 2, but was {window_length}."
            )
        if step_length < 1:
            raise ValueError(
                f"Step length must be at least 1, but was {step_length}."
            )
        self.window_length = window_length
        self.step_length = step_length
        self.fft_length = next_power_of_two(window_length)
        indices = np.arange(window_length)
        self._window = 0.5 - 0.5 * np.cos(2.0 * np.pi * indices / window_length)
        self._queue = np.zeros(0)
        self._samples_to_skip = 0

    @property
    def num_bins(self) -> int:
        """Number of frequency bins in each output slice."""
        return self.fft_length // 2 + 1

    def compute(self, samples: Iterable[float]) -> list[np.ndarray]:
        """Feed samples and return one slice for every complete window."""
        incoming = np.asarray(list(samples), dtype=float).ravel()
        skipped = min(self._samples_to_skip, len(incoming))
        self._samples_to_skip -= skipped
        queue = np.concatenate([self._queue, incoming[skipped:]])

        slices = []
        start = 0
        while len(queue) - start >= self.window_length:
            frame = queue[start : start + self.window_length] * self._window
            spectrum = np.fft.rfft(frame, n=self.fft_length)
            slices.append(spectrum.real**2 + spectrum.imag**2)
            start += self.step_length

        self._samples_to_skip += max(0, start - len(queue))
        self._queue = queue[start:].copy()
        return slices


class MelFilterbank:
    """Triangular mel filterbank applied to the magnitude of a power spectrum."""

    def __init__(
        self,
        num_fft_bins: int,
        sample_rate: float,
        num_mel_bins: int,
        lower_freq_limit: float,
        upper_freq_limit: float,
    ) -> None:
        if num_fft_bins < 2:
            raise ValueError(
                f"Number of FFT bins must be at least 2, but was {num_fft_bins}."
            )
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, but was {sample_rate}.")
        if num_mel_bins < 1:
            raise ValueError(
                f"Number of mel bins must be at least 1, but was {num_mel_bins}."
            )
        if lower_freq_limit < 0:
            raise ValueError(
                f"Lower frequency limit must not be negative, "
                f"but was {lower_freq_limit}."
            )
        if upper_freq_limit <= lower_freq_limit:
            raise ValueError(
                f"Upper frequency limit {upper_freq_limit} must be larger than "
                f"the lower frequency limit {lower_freq_limit}."
            )
        self.num_fft_bins = num_fft_bins
        self.num_mel_bins = num_mel_bins

        mel_low = _freq_to_mel(lower_freq_limit)
        mel_high = _freq_to_mel(upper_freq_limit)
        mel_spacing = (mel_high - mel_low) / (num_mel_bins + 1)
        centers = [mel_low + mel_spacing * (i + 1) for i in range(num_mel_bins + 1)]

        hz_per_bin = 0.5 * sample_rate / (num_fft_bins - 1)
        self._start = int(1.5 + lower_freq_limit / hz_per_bin)
        self._end = int(upper_freq_limit / hz_per_bin)

        band_mapper = np.full(num_fft_bins, -2, dtype=int)
        weights = np.zeros(num_fft_bins)
        channel = 0
        for index in range(num_fft_bins):
            if index < self._start or index > self._end:
                continue
            mel = _freq_to_mel(index * hz_per_bin)
            while channel < num_mel_bins and centers[channel] < mel:
                channel += 1
            band = channel - 1
            band_mapper[index] = band
            if band >= 0:
                weights[index] = (centers[band + 1] - mel) / (
                    centers[band + 1] - centers[band]
                )
            else:
                weights[index] = (centers[0] - mel) / (centers[0] - mel_low)
        self._band_mapper = band_mapper
        self._weights = weights

        channel_weights = np.zeros(num_mel_bins)
        for index in self._active_bins():
            band, weight = band_mapper[index], weights[index]
            if band >= 0:
                channel_weights[band] += weight
            if band + 1 < num_mel_bins:
                channel_weights[band + 1] += 1.0 - weight
        self._channel_weights = channel_weights

    def _active_bins(self) -> range:
        return range(self._start, min(self._end, self.num_fft_bins - 1) + 1)

    def compute(self, power_spectrum: Sequence[float]) -> np.ndarray:
        """Return the mel energies of a squared-magnitude spectrum."""
        spectrum = np.asarray(power_spectrum, dtype=float).ravel()
        if len(spectrum) != self.num_fft_bins:
            raise ValueError(
                f"Spectrum has {len(spectrum)} bins, "
                f"but {self.num_fft_bins} were expected."
            )
        output = np.zeros(self.num_mel_bins)
        for index in self._active_bins():
            magnitude = math.sqrt(spectrum[index])
            weighted = magnitude * self._weights[index]
            band = self._band_mapper[index]
            if band >= 0:
                output[band] += weighted
            if band + 1 < self.num_mel_bins:
                output[band + 1] += magnitude - weighted
        return output

    def estimate_inverse(self, mel_features: Sequence[float]) -> np.ndarray:
        """Estimate the squared-magnitude spectrum that gave these mel energies."""
        mel = np.asarray(mel_features, dtype=float).ravel()
        if len(mel) != self.num_mel_bins:
            raise ValueError(
                f"Got {len(mel)} mel features, "
                f"but {self.num_mel_bins} were expected."
            )
        valid = self._channel_weights > 0
        averages = np.zeros(self.num_mel_bins)
        averages[valid] = mel[valid] / self._channel_weights[valid]

        magnitudes = np.zeros(self.num_fft_bins)
        for index in self._active_bins():
            band, weight = self._band_mapper[index], self._weights[index]
            total = 0.0
            norm = 0.0
            if band >= 0 and valid[band]:
                total += weight * averages[band]
                norm += weight
            if band + 1 < self.num_mel_bins and valid[band + 1]:
                total += (1.0 - weight) * averages[band + 1]
                norm += 1.0 - weight
            if norm > 0:
                magnitudes[index] = total / norm
        return magnitudes**2


class InverseSpectrogram:
    """Overlap-add reconstruction of time samples from complex spectrum slices."""

    def __init__(self, fft_length: int, step_length: int) -> None:
        if fft_length < 2:
            raise ValueError(f"FFT length must be at least 2, but was {fft_length}.")
        if not 1 <= step_length <= fft_length:
            raise ValueError(
                f"Step length must be between 1 and {fft_length}, "
                f"but was {step_length}."
            )
        self.fft_length = fft_length
        self.step_length = step_length
        self._buffer = np.zeros(fft_length)

    @property
    def num_bins(self) -> int:
        """Number of frequency bins each slice must have."""
        return self.fft_length // 2 + 1

    def process(self, spectrogram: Iterable[Sequence[complex]]) -> np.ndarray:
        """Return ``step_length`` samples for every slice of the spectrogram."""
        slices = [np.asarray(s, dtype=complex).ravel() for s in spectrogram]
        for spectrum in slices:
            if len(spectrum) != self.num_bins:
                raise ValueError(
                    f"Spectrum slice has {len(spectrum)} bins, "
                    f"but {self.num_bins} were expected."
                )
        output = []
        for spectrum in slices:
            self._buffer += np.fft.irfft(spectrum, n=self.fft_length)
            output.append(self._buffer[: self.step_length].copy())
            self._buffer = np.concatenate(
                [self._buffer[self.step_length :], np.zeros(self.step_length)]
            )
        if not output:
            return np.zeros(0)
        return np.concatenate(output)