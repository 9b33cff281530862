"""Buffering of split-band samples so that any number of samples can be produced."""

from __future__ import annotations

from collections.abc import Callable, Sequence

MergeFunction = Callable[[Sequence[Sequence[int]]], Sequence[int]]
SampleGenerator = Callable[[int], Sequence[Sequence[int]]]


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


class BufferMerger:
    """Merges split-band samples and keeps the excess for later requests.

    A generative model can only produce time-domain samples in multiples of
    the number of bands; samples generated beyond a request are kept (at most
    ``num_bands - 1`` of them) and handed out first on the next request.
    """

    def __init__(self, num_bands: int, merge: MergeFunction | None = None) -> None:
        if not _is_power_of_two(num_bands):
            raise ValueError(
                f"Number of bands has to be a power of 2, but was {num_bands}."
            )
        if merge is None and num_bands != 1:
            raise ValueError(
                f"A merge function is required to merge {num_bands} bands."
            )
        self._num_bands = num_bands
        self._merge = merge
        self._leftover: list[int] = []

    @property
    def num_bands(self) -> int:
        """Number of bands the merger combines."""
        return self._num_bands

    def num_samples_to_generate(self, num_samples: int) -> int:
        """Return how many band-split samples must be generated for a request."""
        leftover = len(self._leftover)
        if num_samples < leftover:
            return 0
        per_band = -(-(num_samples - leftover) // self._num_bands)
        return per_band * self._num_bands

    def buffer_and_merge(
        self, sample_generator: SampleGenerator, num_samples: int
    ) -> list[int]:
        """Return exactly ``num_samples`` samples, generating new ones as needed.

        ``sample_generator`` is called with the total number of samples to
        generate and returns one sequence of samples per band.
        """
        if num_samples < 0:
            raise ValueError(
                f"Number of samples must not be negative, but was {num_samples}."
            )
        num_to_generate = self.num_samples_to_generate(num_samples)
        new_samples = self._merge_bands(sample_generator(num_to_generate))
        if len(new_samples) != num_to_generate:
            raise ValueError(
                f"Merging produced {len(new_samples)} samples, "
                f"but {num_to_generate} were expected."
            )

        num_leftover_used = min(len(self._leftover), num_samples)
        samples = self._leftover[:num_leftover_used]
        del self._leftover[:num_leftover_used]

        num_to_copy = num_samples - num_leftover_used
        samples.extend(new_samples[:num_to_copy])
        self._leftover.extend(new_samples[num_to_copy:])
        return samples

    def reset(self) -> None:
        """Drop any buffered leftover samples."""
        self._leftover.clear()

    def _merge_bands(self, split_samples: Sequence[Sequence[int]]) -> list[int]:
        if self._num_bands == 1:
            if not split_samples:
                raise ValueError("The sample generator returned no bands.")
            return [int(sample) for sample in split_samples[0]]
        assert self._merge is not None
        return [int(sample) for sample in self._merge(split_samples)]