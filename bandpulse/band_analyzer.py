# bandpulse/band_analyzer.py

"""Analysis cycle: spectrum in, per-category energies and peaks out.

The host owns one ``BandAnalyzer`` and calls ``cycle()`` once per rendered
frame. Each cycle pulls one spectrum snapshot from the source, computes the
raw band energies of every category, folds them into smoothed values and
history, runs peak detection and leaves the results readable through
``get_energies()``, ``get_raw_energies()`` and ``get_peaks()`` until the next
cycle. Device acquisition is the only asynchronous step.
"""

import logging

from bandpulse.band_energy import CategoryEnergy, average_energy, weighted_energy
from bandpulse.bin_mapper import map_all
from bandpulse.frequency_bands import Category, VISUALIZER_GROUPS
from bandpulse.peak_detector import PeakDetector
from bandpulse.smoothing import EnergySmoother
from bandpulse.spectrum import DeviceAccessError

logger = logging.getLogger(__name__)


class BandAnalyzer:
    def __init__(
        self,
        source,
        fft_size=1024,
        spectrum_smoothing=0.8,
        energy_smoothing=0.3,
        peak_threshold=0.7,
        peak_decay=0.95,
        history_size=43,
        history_categories=(Category.DRUMS, Category.BASS),
    ):
        self.source = source
        self.fft_size = fft_size
        self.spectrum_smoothing = spectrum_smoothing

        self.smoother = EnergySmoother(
            alpha=energy_smoothing,
            history_size=history_size,
            history_categories=history_categories,
        )
        self.peak_detector = PeakDetector(
            threshold=peak_threshold,
            decay=peak_decay,
        )

        # one record per category, updated in place every cycle
        self.energy_cache = {
            c: CategoryEnergy(VISUALIZER_GROUPS[c].bands) for c in Category
        }

        self.bin_ranges = None
        self.last_spectrum = None
        self.cycle_count = 0
        self.is_initialized = False
        self.is_listening = False

    # -----------------------------------------------------

    async def init(self):
        """Configure the source and compute the bin mapping.

        A bad format raises ``ConfigurationError``; that is a programming
        error, not something to retry.
        """
        if self.is_initialized:
            return True

        self.source.configure(self.fft_size, self.spectrum_smoothing)
        self.bin_ranges = map_all(self.source.sample_rate, self.fft_size)

        self.is_initialized = True
        logger.info(
            "BandAnalyzer initialized (sample_rate=%s, fft_size=%d)",
            self.source.sample_rate,
            self.fft_size,
        )
        return True

    async def start_listening(self):
        """Acquire the input device. Returns False when it is unavailable."""
        if self.is_listening:
            return True

        if not self.is_initialized:
            await self.init()

        try:
            await self.source.start()
        except DeviceAccessError as e:
            logger.error("Failed to start microphone: %s", e)
            return False

        self.is_listening = True
        logger.info("Started listening")
        return True

    async def stop_listening(self):
        if not self.is_listening:
            return
        self.is_listening = False
        await self.source.stop()
        logger.info("Stopped listening")

    def update_format(self, sample_rate, fft_size=None):
        """Recompute bin ranges after a device or FFT size change.

        The new format is validated before anything changes, so a
        ``ConfigurationError`` leaves the analyzer and its source as they were.
        """
        new_fft = self.fft_size if fft_size is None else fft_size
        ranges = map_all(sample_rate, new_fft)

        if new_fft != self.fft_size:
            self.source.configure(new_fft, self.spectrum_smoothing)
            self.fft_size = new_fft

        if sample_rate != self.source.sample_rate:
            self.source.set_sample_rate(sample_rate)
        self.bin_ranges = ranges
        logger.info("Bin ranges remapped (sample_rate=%s, fft_size=%d)", sample_rate, self.fft_size)

    # -----------------------------------------------------

    def cycle(self):
        if not self.is_listening or self.bin_ranges is None:
            return

        try:
            spectrum = self.source.analyze()
        except Exception:
            logger.exception("Spectrum read failed, skipping cycle")
            return

        # raw energies for every category first
        for category in Category:
            self._update_raw(category, spectrum)

        # then smoothing + history
        smoothed = {}
        for category in Category:
            smoothed[category] = self.smoother.update(
                category, self.energy_cache[category].combined
            )

        # then peaks on the fresh smoothed values
        for category in Category:
            self.peak_detector.detect(category, smoothed[category])

        self.last_spectrum = spectrum
        self.cycle_count += 1

    def _update_raw(self, category, spectrum):
        group = VISUALIZER_GROUPS[category]
        energy = self.energy_cache[category]

        try:
            for name in group.bands:
                energy.bands[name] = average_energy(spectrum, self.bin_ranges[name])
            energy.combined = weighted_energy(energy.values(), group.weights)
        except Exception:
            logger.exception("Energy computation failed for %s", category.label)
            energy.clear()

    # -----------------------------------------------------

    def get_energies(self):
        """Smoothed energy in [0, 1] per category."""
        return self.smoother.values()

    def get_raw_energies(self):
        """Per-band breakdown; shared records, read only."""
        return self.energy_cache

    def get_peaks(self):
        """Peak state per category; shared records, read only."""
        return self.peak_detector.states

    def get_history(self, category):
        return self.smoother.history(category)

    def get_spectrum(self):
        """Spectrum snapshot used by the last cycle, or None."""
        return self.last_spectrum

    # -----------------------------------------------------

    async def dispose(self):
        """Release the device and clear all analysis state. Idempotent."""
        await self.stop_listening()

        self.smoother.reset()
        self.peak_detector.reset()
        for energy in self.energy_cache.values():
            energy.clear()

        self.bin_ranges = None
        self.last_spectrum = None
        self.cycle_count = 0
        self.is_initialized = False
