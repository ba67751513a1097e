import random

import numpy as np
import pytest

from bandpulse.object_pool import ObjectPool, Particle
from bandpulse.spectrum import DeviceAccessError, SpectrumSource


class FakeSpectrumSource(SpectrumSource):
    """Spectrum source returning a preset byte spectrum, no audio device."""

    def __init__(self, sample_rate=44100, fft_size=1024, fail_start=False):
        super().__init__(sample_rate=sample_rate, fft_size=fft_size)
        self.fail_start = fail_start
        self.fail_analyze = False
        self.next_spectrum = np.zeros(fft_size // 2, dtype=np.uint8)
        self.analyze_calls = 0
        self.start_calls = 0
        self.stop_calls = 0
        self.rate_changes = []

    def fill(self, value):
        self.next_spectrum = np.full(self.fft_size // 2, value, dtype=np.uint8)

    def set_sample_rate(self, sample_rate):
        super().set_sample_rate(sample_rate)
        self.rate_changes.append(sample_rate)

    def analyze(self):
        self.analyze_calls += 1
        if self.fail_analyze:
            raise RuntimeError("spectrum unavailable")
        return self.next_spectrum

    def latest_samples(self):
        return np.zeros(self.fft_size, dtype=np.float32)

    async def start(self):
        self.start_calls += 1
        if self.fail_start:
            raise DeviceAccessError("permission denied")

    async def stop(self):
        self.stop_calls += 1


@pytest.fixture
def fake_source():
    return FakeSpectrumSource()


@pytest.fixture
def pool():
    return ObjectPool(Particle, initial_size=0, max_size=200)


@pytest.fixture
def rng():
    return random.Random(1234)
