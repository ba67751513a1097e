import numpy as np

from bandpulse.frequency_bands import Category


class EnergyHistory:
    """Fixed-capacity circular buffer of raw energies.

    ``cursor`` is the next write position; once the buffer has wrapped the
    oldest sample sits at ``(cursor - capacity) % capacity``.
    """

    def __init__(self, capacity=43):
        if capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.buffer = np.zeros(capacity, dtype=np.float32)
        self.cursor = 0
        self.count = 0

    def push(self, value):
        self.buffer[self.cursor] = value
        self.cursor = (self.cursor + 1) % self.capacity
        self.count = min(self.count + 1, self.capacity)

    def values(self):
        """Stored samples, oldest first."""
        if self.count < self.capacity:
            return self.buffer[:self.count].copy()
        start = (self.cursor - self.capacity) % self.capacity
        return np.concatenate([self.buffer[start:], self.buffer[:start]])

    def mean(self):
        if self.count == 0:
            return 0.0
        return float(np.mean(self.values()))

    def clear(self):
        self.buffer[:] = 0.0
        self.cursor = 0
        self.count = 0

    def __len__(self):
        return self.count


class EnergySmoother:
    """Per-category exponential moving average plus energy history.

    ``s += (raw - s) * alpha`` once per cycle per category. Categories listed
    in ``history_categories`` also record every raw value in an
    ``EnergyHistory``.
    """

    def __init__(self, alpha=0.3, history_size=43,
                 history_categories=(Category.DRUMS, Category.BASS)):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"smoothing alpha must be in (0, 1], got {alpha}")

        self.alpha = alpha
        self.state = np.zeros(len(Category), dtype=np.float64)
        self.histories = {
            Category(c): EnergyHistory(history_size) for c in history_categories
        }

    def update(self, category, raw):
        category = Category(category)
        self.state[category] += (raw - self.state[category]) * self.alpha

        history = self.histories.get(category)
        if history is not None:
            history.push(raw)

        return float(self.state[category])

    def value(self, category):
        return float(self.state[Category(category)])

    def values(self):
        return {c: float(self.state[c]) for c in Category}

    def history(self, category):
        return self.histories.get(Category(category))

    def reset(self):
        self.state[:] = 0.0
        for history in self.histories.values():
            history.clear()
