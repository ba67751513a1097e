import json

import config


class RuntimeConfig:
    """Read-only view over ``config/bandpulse.json``.

    Every property falls back to the module default in :mod:`config` when
    the JSON file leaves the key out.
    """

    def __init__(self, json_path=None, data=None):
        if data is not None:
            self.cfg = data
        else:
            with open(json_path, "r", encoding="utf-8") as f:
                self.cfg = json.load(f)

    @classmethod
    def defaults(cls):
        return cls(data={})

    def _get(self, section, key, default):
        value = self.cfg.get(section, {}).get(key)
        return default if value is None else value

    # --- Audio ---
    @property
    def DEVICE_RATE(self):
        return int(self._get("audio", "device_rate", config.DEVICE_RATE))

    @property
    def ANALYSIS_RATE(self):
        rate = self.cfg.get("audio", {}).get("analysis_rate")
        return None if rate is None else int(rate)

    @property
    def CHANNELS(self):
        return int(self._get("audio", "channels", config.CHANNELS))

    @property
    def FRAMES_PER_BUFFER(self):
        return int(self._get("audio", "frames_per_buffer", config.FRAMES_PER_BUFFER))

    @property
    def MIN_DB(self):
        return float(self._get("audio", "min_db", config.MIN_DB))

    @property
    def MAX_DB(self):
        return float(self._get("audio", "max_db", config.MAX_DB))

    @property
    def SILENCE_DB(self):
        return float(self._get("audio", "silence_db", config.SILENCE_DB))

    # --- Analysis ---
    @property
    def FFT_SIZE(self):
        return int(self._get("analysis", "fft_size", config.FFT_SIZE))

    @property
    def SPECTRUM_SMOOTHING(self):
        return float(self._get("analysis", "spectrum_smoothing", config.SPECTRUM_SMOOTHING))

    @property
    def ENERGY_SMOOTHING(self):
        return float(self._get("analysis", "energy_smoothing", config.ENERGY_SMOOTHING))

    @property
    def HISTORY_SIZE(self):
        return int(self._get("analysis", "history_size", config.HISTORY_SIZE))

    # --- Peaks ---
    @property
    def PEAK_THRESHOLD(self):
        return float(self._get("peaks", "threshold", config.PEAK_THRESHOLD))

    @property
    def PEAK_DECAY(self):
        return float(self._get("peaks", "decay", config.PEAK_DECAY))

    # --- Render ---
    @property
    def FRAME_RATE(self):
        return int(self._get("render", "frame_rate", config.FRAME_RATE))

    @property
    def CANVAS_WIDTH(self):
        return int(self._get("render", "width", config.CANVAS_WIDTH))

    @property
    def CANVAS_HEIGHT(self):
        return int(self._get("render", "height", config.CANVAS_HEIGHT))

    # --- Memory ---
    @property
    def CLEANUP_INTERVAL(self):
        return float(self._get("memory", "cleanup_interval", config.CLEANUP_INTERVAL))

    @property
    def MONITOR_INTERVAL(self):
        return float(self._get("memory", "monitor_interval", config.MONITOR_INTERVAL))

    @property
    def MEMORY_WARNING_THRESHOLD(self):
        return float(self._get("memory", "warning_threshold", config.MEMORY_WARNING_THRESHOLD))

    @property
    def COLOR_CACHE_SIZE(self):
        return int(self._get("memory", "color_cache_size", config.COLOR_CACHE_SIZE))
