"""Gilbert model that simulates bursts of packet loss."""

from __future__ import annotations

import random
import struct

_MT_STATE_SIZE = 624
_DEFAULT_SEED = 5489
_TWO_POW_32 = 4294967296.0
_LARGEST_BELOW_ONE = 1.0 - 2.0**-24


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _mersenne_twister(seed: int) -> random.Random:
    """Return a generator seeded the way the standard 32-bit Mersenne Twister is."""
    state = [seed & 0xFFFFFFFF]
    for index in range(1, _MT_STATE_SIZE):
        previous = state[-1]
        state.append((1812433253 * (previous ^ (previous >> 30)) + index) & 0xFFFFFFFF)
    generator = random.Random()
    generator.setstate((3, tuple(state) + (_MT_STATE_SIZE,), None))
    return generator


class GilbertModel:
    """Two-state Markov chain deciding whether each packet is received or lost."""

    def __init__(
        self,
        packet_loss_rate: float,
        average_burst_length: float,
        random_seed: bool = True,
    ) -> None:
        packet_loss_rate = _f32(packet_loss_rate)
        average_burst_length = _f32(average_burst_length)
        if average_burst_length < 1.0:
            raise ValueError(
                "Average Burst Length has to be at least 1, "
                f"but was {average_burst_length}."
            )
        if packet_loss_rate < 0.0:
            raise ValueError(
                f"Packet Loss Rate has to be positive, but was {packet_loss_rate}."
            )
        limit = _f32(average_burst_length / _f32(average_burst_length + 1.0))
        if packet_loss_rate > limit:
            raise ValueError(
                "Packet Loss Rate cannot be larger than "
                f"average_burst_length/(average_burst_length+1)={limit}, "
                f"but was {packet_loss_rate}."
            )

        seed = random.SystemRandom().getrandbits(32) if random_seed else _DEFAULT_SEED
        self._received_to_lost = _f32(
            packet_loss_rate
            / _f32(average_burst_length * _f32(1.0 - packet_loss_rate))
        )
        self._lost_to_received = _f32(1.0 / average_burst_length)
        self._received = True
        self._generator = _mersenne_twister(seed)

    def _uniform(self) -> float:
        value = _f32(float(self._generator.getrandbits(32))) / _TWO_POW_32
        return value if value < 1.0 else _LARGEST_BELOW_ONE

    def is_packet_received(self) -> bool:
        """Advance the model and return whether the current packet was received."""
        current = self._received
        if self._received:
            if self._uniform() < self._received_to_lost:
                self._received = False
        elif self._uniform() < self._lost_to_received:
            self._received = True
        return current