"""Spectrum source contract and byte-spectrum conversion.

A spectrum source hands the analyzer one magnitude spectrum per call to
``analyze()``: ``fft_size // 2`` unsigned bytes, the same format a browser
``AnalyserNode`` produces with ``getByteFrequencyData``. ``ByteSpectrum``
implements that conversion on top of numpy so any sample provider (PyAudio,
tests) can feed it raw time-domain blocks.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from bandpulse.bin_mapper import ConfigurationError

logger = logging.getLogger(__name__)

MIN_FFT_SIZE = 32
MAX_FFT_SIZE = 32768


class DeviceAccessError(RuntimeError):
    """The input device is missing, busy, or access was denied."""


class ByteSpectrum:
    """Blackman-windowed FFT, temporal smoothing, dB to byte mapping.

    Args:
        fft_size:  power of two in [32, 32768]; output has ``fft_size // 2`` bins
        smoothing: weight of the previous frame in [0, 1)
        min_db:    level mapped to byte 0
        max_db:    level mapped to byte 255
    """

    def __init__(self, fft_size=1024, smoothing=0.8, min_db=-100.0, max_db=-30.0):
        if isinstance(fft_size, bool) or not isinstance(fft_size, int):
            raise ConfigurationError(f"fft_size must be an integer, got {fft_size!r}")
        if not MIN_FFT_SIZE <= fft_size <= MAX_FFT_SIZE or fft_size & (fft_size - 1):
            raise ConfigurationError(
                f"fft_size must be a power of two in [{MIN_FFT_SIZE}, {MAX_FFT_SIZE}], got {fft_size}"
            )
        if not 0.0 <= smoothing < 1.0:
            raise ConfigurationError(f"smoothing must be in [0, 1), got {smoothing}")
        if not min_db < max_db:
            raise ConfigurationError(f"min_db must be below max_db, got {min_db} / {max_db}")

        self.fft_size = fft_size
        self.smoothing = smoothing
        self.min_db = min_db
        self.max_db = max_db

        self.window = np.blackman(fft_size).astype(np.float64)
        self.previous = np.zeros(fft_size // 2, dtype=np.float64)
        self._scale = 255.0 / (max_db - min_db)

    @property
    def bin_count(self):
        return self.fft_size // 2

    def process(self, samples) -> np.ndarray:
        """Convert the latest ``fft_size`` samples into a byte spectrum."""
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim > 1:
            samples = samples.mean(axis=1)

        frame = np.zeros(self.fft_size, dtype=np.float64)
        tail = samples[-self.fft_size:]
        frame[self.fft_size - len(tail):] = tail

        magnitudes = np.abs(np.fft.rfft(frame * self.window))[:self.bin_count]
        magnitudes /= self.fft_size

        self.previous = self.smoothing * self.previous + (1.0 - self.smoothing) * magnitudes

        with np.errstate(divide="ignore"):
            db = 20.0 * np.log10(self.previous)

        scaled = np.floor(self._scale * (db - self.min_db))
        return np.clip(np.nan_to_num(scaled, neginf=0.0), 0, 255).astype(np.uint8)

    def reset(self):
        self.previous[:] = 0.0


class SpectrumSource(ABC):
    """Black-box provider of byte magnitude spectra for ``BandAnalyzer``."""

    def __init__(self, sample_rate=44100, fft_size=1024, smoothing=0.8,
                 min_db=-100.0, max_db=-30.0):
        self.sample_rate = sample_rate
        self.min_db = min_db
        self.max_db = max_db
        self.spectrum = ByteSpectrum(fft_size, smoothing, min_db, max_db)

    @property
    def fft_size(self):
        return self.spectrum.fft_size

    @property
    def level_db(self):
        """Loudness of the last input block, ``-inf`` when unknown."""
        return float("-inf")

    def configure(self, fft_size, smoothing):
        self.spectrum = ByteSpectrum(fft_size, smoothing, self.min_db, self.max_db)
        logger.debug("spectrum configured: fft_size=%d smoothing=%.2f", fft_size, smoothing)

    def set_sample_rate(self, sample_rate):
        self.sample_rate = sample_rate
        self.spectrum.reset()

    def analyze(self) -> np.ndarray:
        return self.spectrum.process(self.latest_samples())

    @abstractmethod
    def latest_samples(self) -> np.ndarray:
        """The most recent ``fft_size`` mono samples."""

    @abstractmethod
    async def start(self):
        """Open the input device. Raises ``DeviceAccessError``."""

    @abstractmethod
    async def stop(self):
        """Release the input device. Safe to call when not started."""
