"""Speech-codec components: log-mel features, comfort noise, band merging,
packet-loss simulation, spectral building blocks and timing statistics."""

__version__ = "0.1.0"

__all__ = [
    "buffer_merger",
    "comfort_noise",
    "dsp_util",
    "gilbert_model",
    "log_mel",
    "spectral",
    "timing",
]