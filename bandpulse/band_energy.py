"""Band energy extraction from a byte magnitude spectrum.

The upstream spectrum holds one byte per bin (0..255), so averages are
divided by 255 to land in [0, 1].
"""

import numpy as np

MAGNITUDE_SCALE = 255.0


def average_energy(spectrum, bin_range) -> float:
    """Mean magnitude of ``spectrum[start:end]`` normalised to [0, 1].

    The range is clamped to the spectrum; an empty clamped range (a band
    above Nyquist, for instance) gives 0.0.
    """
    start = max(0, bin_range.start)
    end = min(len(spectrum), bin_range.end)
    if end <= start:
        return 0.0

    values = np.asarray(spectrum[start:end], dtype=np.float64)
    return float(values.mean() / MAGNITUDE_SCALE)


def weighted_energy(energies, weights) -> float:
    """Weighted sum of band energies, in declared order.

    No normalisation by the sum of weights: callers keep weights on the
    scale they want (usually summing to 1.0).
    """
    if len(energies) != len(weights):
        raise ValueError(
            f"got {len(energies)} energies for {len(weights)} weights"
        )
    return float(sum(e * w for e, w in zip(energies, weights)))


class CategoryEnergy:
    """Raw energies of one category for the current cycle.

    Updated in place every cycle; ``bands`` keeps the group's band order.
    """

    __slots__ = ("bands", "combined")

    def __init__(self, band_names):
        self.bands = {name: 0.0 for name in band_names}
        self.combined = 0.0

    def values(self):
        return list(self.bands.values())

    def clear(self):
        for name in self.bands:
            self.bands[name] = 0.0
        self.combined = 0.0

    def as_dict(self):
        return {**self.bands, "combined": self.combined}

    def __repr__(self):
        parts = " ".join(f"{k}={v:.3f}" for k, v in self.bands.items())
        return f"CategoryEnergy({parts} combined={self.combined:.3f})"
