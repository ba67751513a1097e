"""Maps frequency bands onto FFT bin index ranges.

Pure functions: the result only depends on the band, the sample rate and the
transform size, so ``map_all`` is computed once per format and cached.
Indices are not clamped to the spectrum length here; readers clamp.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from bandpulse.frequency_bands import FREQUENCY_BANDS


class ConfigurationError(ValueError):
    """Raised for an unusable analysis format (sample rate, FFT size, ...)."""


@dataclass(frozen=True)
class BinRange:
    start: int
    end: int

    def __len__(self):
        return max(0, self.end - self.start)


def _check_format(sample_rate, fft_size):
    if isinstance(fft_size, bool) or not isinstance(fft_size, int):
        raise ConfigurationError(f"fft_size must be an integer, got {fft_size!r}")
    if fft_size <= 0:
        raise ConfigurationError(f"fft_size must be positive, got {fft_size}")
    if not sample_rate > 0:
        raise ConfigurationError(f"sample_rate must be positive, got {sample_rate!r}")


def map_band(band, sample_rate=44100, fft_size=1024):
    """Return the ``BinRange`` covering ``band`` for the given format.

    ``start = floor(min_hz / bin_hz)`` and ``end = ceil(max_hz / bin_hz)``
    where ``bin_hz = sample_rate / fft_size``.
    """
    _check_format(sample_rate, fft_size)

    bin_hz = sample_rate / fft_size
    return BinRange(
        start=math.floor(band.min_hz / bin_hz),
        end=math.ceil(band.max_hz / bin_hz),
    )


@lru_cache(maxsize=8)
def map_all(sample_rate=44100, fft_size=1024):
    """Bin range of every band in ``FREQUENCY_BANDS``, keyed by band id.

    The returned mapping is read-only and shared between callers.
    """
    return MappingProxyType({
        name: map_band(band, sample_rate, fft_size)
        for name, band in FREQUENCY_BANDS.items()
    })
