# lyracodec

Signal-processing components for a low-bitrate speech codec, written in
Python on top of NumPy.

## What is inside

- `lyracodec.log_mel.LogMelSpectrogramExtractor` turns successive hops of
  16-bit audio into normalised log-mel feature vectors. The module also
  offers `lower_freq_limit()`, `upper_freq_limit(sample_rate_hz)`,
  `normalization_factor()` and `silence_value()`.
- `lyracodec.comfort_noise.ComfortNoiseGenerator` estimates audio from
  log-mel features by inverting the mel filterbank and adding a random
  phase. `add_features` sets the features, `generate_samples` returns at
  most one hop of samples per call, and `reset` clears features and
  buffered samples.
- `lyracodec.buffer_merger.BufferMerger` buffers samples that arrive split
  into bands and merges them with a merge function you supply, so that any
  number of samples can be requested. Excess samples are kept for the next
  request; `num_samples_to_generate` tells how many must be generated.
- `lyracodec.gilbert_model.GilbertModel` simulates bursts of lost packets
  with a two-state Markov chain. With `random_seed=False` it is seeded with
  a fixed value and gives the same sequence every run.
- `lyracodec.spectral` holds `Spectrogram`, `MelFilterbank`,
  `InverseSpectrogram` and `next_power_of_two`, on which the extractor and
  the generator are built.
- `lyracodec.dsp_util` provides `log_spectral_distance` and `clip_to_int16`.
- `lyracodec.timing` provides `get_timing_stats`, returning a `TimingStats`
  record, and `print_stats_and_write_csv`, which logs the statistics and
  writes the timings to `<output_dir>/<title>.csv` (by default under
  `/tmp/benchmarks/`).

## Installation

```
pip install lyracodec
```

## Example

```python
from lyracodec.log_mel import LogMelSpectrogramExtractor
from lyracodec.comfort_noise import ComfortNoiseGenerator

extractor = LogMelSpectrogramExtractor(
    sample_rate_hz=16000, num_mel_bins=10,
    hop_length_samples=5, window_length_samples=10,
)
features = extractor.extract([7954, 10085, 8733, 10844, 29949])

noise = ComfortNoiseGenerator(
    sample_rate_hz=16000, num_mel_bins=10,
    window_length_samples=10, hop_length_samples=5,
)
noise.add_features(features)
samples = noise.generate_samples(5)
```

Simulating packet loss:

```python
from lyracodec.gilbert_model import GilbertModel

model = GilbertModel(packet_loss_rate=0.5, average_burst_length=2.0,
                     random_seed=False)
received = [model.is_packet_received() for _ in range(10)]
```

Merging two bands by interleaving them:

```python
from lyracodec.buffer_merger import BufferMerger

def interleave(bands):
    return [sample for group in zip(*bands) for sample in group]

merger = BufferMerger(2, interleave)
n = merger.num_samples_to_generate(7)
first = merger.buffer_and_merge(lambda count: [list(range(count // 2))] * 2, 7)
# first == [0, 0, 1, 1, 2, 2, 3]; one sample is kept for the next call
```

Invalid arguments raise `ValueError`.

## What the package does not do

The package has no encoder or decoder: it does not quantise features, pack
them into packets, or synthesise speech with a neural model. It reads and
writes no audio files and has no command-line tools; it is a library of
components to be called from Python.

## Running the tests

```
pip install -e ".[test]"
pytest
```