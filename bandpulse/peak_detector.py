"""Per-category transient detection with a decaying peak memory.

A peak fires when the smoothed energy beats both the decayed value of the
last peak and an absolute threshold. While a loud note decays, the memory
stays above it and suppresses re-triggers; a louder hit re-triggers
immediately.
"""

from dataclasses import dataclass

from bandpulse.frequency_bands import Category


@dataclass
class PeakState:
    value: float = 0.0
    is_peak: bool = False

    def reset(self):
        self.value = 0.0
        self.is_peak = False


class PeakDetector:
    def __init__(self, threshold=0.7, decay=0.95):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"peak threshold must be in [0, 1], got {threshold}")
        if not 0.0 < decay < 1.0:
            raise ValueError(f"peak decay must be in (0, 1), got {decay}")

        self.threshold = threshold
        self.decay = decay
        self.states = {c: PeakState() for c in Category}

    def detect(self, category, energy) -> PeakState:
        peak = self.states[Category(category)]

        # decay first, every cycle
        peak.value *= self.decay

        if energy > peak.value and energy > self.threshold:
            peak.value = energy
            peak.is_peak = True
        else:
            peak.is_peak = False

        return peak

    def reset(self):
        for peak in self.states.values():
            peak.reset()
