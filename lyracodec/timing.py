"""Summary statistics and CSV output for per-call timings."""

from __future__ import annotations

import logging
import math
import struct
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("/tmp/benchmarks/")


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


@dataclass(frozen=True)
class TimingStats:
    """Max, mean, min, count and standard deviation of a series of timings."""

    max_microsecs: int
    mean_microsecs: int
    min_microsecs: int
    num_calls: int
    standard_deviation: float


def get_timing_stats(timings_microsecs: Iterable[int]) -> TimingStats:
    """Compute statistics over timings given in microseconds.

    The mean is an integer truncated toward zero; the first timing is left out
    of the deviation, as it usually includes warm-up.
    """
    timings = [int(t) for t in timings_microsecs]
    if not timings:
        raise ValueError("Cannot compute timing statistics of no timings.")
    num_calls = len(timings)
    mean = _truncating_div(sum(timings), num_calls)
    total = 0.0
    for timing in timings[1:]:
        variance = _truncating_div((timing - mean) ** 2, num_calls)
        total = _f32(total + _f32(float(variance)))
    return TimingStats(
        max_microsecs=max(timings),
        mean_microsecs=mean,
        min_microsecs=min(timings),
        num_calls=num_calls,
        standard_deviation=_f32(math.sqrt(total)),
    )


def print_stats_and_write_csv(
    timings: Iterable[int],
    title: str,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
) -> TimingStats:
    """Log statistics of the timings and write them to <output_dir>/<title>.csv."""
    values = [int(t) for t in timings]
    stats = get_timing_stats(values)
    logger.info(
        "%s stats for generating %d frames of audio, max: %d us, "
        "min: %d us, mean: %d us, stdev: %s.",
        title,
        stats.num_calls,
        stats.max_microsecs,
        stats.min_microsecs,
        stats.mean_microsecs,
        f"{stats.standard_deviation:g}",
    )

    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    with (directory / f"{title}.csv").open("w", encoding="utf-8") as csv_file:
        csv_file.write("Time(us)\n")
        csv_file.writelines(f"{value}\n" for value in values)
    return stats