"""Memory housekeeping for the render side.

Keeps a registry of object pools, a bounded colour cache, reusable scratch
arrays and a list of cleanup hooks. ``update(now)`` is called from the frame
loop: every ``cleanup_interval`` seconds the hooks run, and while monitoring
is on the process memory is checked every ``monitor_interval`` seconds. The
manager never touches analyzer state; it only calls the hooks it was given.
"""

import logging
from collections import OrderedDict

import numpy as np
import psutil

logger = logging.getLogger(__name__)


class ColorCache:
    """Bounded LRU map from ``(r, g, b, a)`` to a shared colour tuple."""

    def __init__(self, capacity=1000):
        if capacity <= 0:
            raise ValueError(f"color cache capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries = OrderedDict()

    def get(self, r, g, b, a=255):
        key = (int(r), int(g), int(b), int(a))
        color = self._entries.get(key)
        if color is not None:
            self._entries.move_to_end(key)
            return color

        self._entries[key] = key
        if len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
        return key

    def __contains__(self, key):
        return key in self._entries

    def __len__(self):
        return len(self._entries)

    def clear(self):
        self._entries.clear()


class MemoryManager:
    def __init__(
        self,
        cleanup_interval=30.0,
        monitor_interval=10.0,
        warning_threshold=0.8,
        color_cache_size=1000,
    ):
        self.pools = {}
        self.cleanup_callbacks = []
        self.cleanup_interval = cleanup_interval
        self.monitor_interval = monitor_interval
        self.warning_threshold = warning_threshold

        self.last_cleanup = 0.0
        self.last_check = 0.0
        self.is_monitoring = False

        self.temp_arrays = {
            size: np.zeros(size, dtype=np.float32) for size in (256, 512, 1024)
        }
        self.color_cache = ColorCache(color_cache_size)

        self._process = psutil.Process()

    # -----------------------------------------------------

    def register_pool(self, name, pool):
        self.pools[name] = pool

    def get_temp_array(self, size):
        """Shared float32 scratch array of ``size`` elements."""
        array = self.temp_arrays.get(size)
        if array is None:
            array = np.zeros(size, dtype=np.float32)
            self.temp_arrays[size] = array
        return array

    def get_color(self, r, g, b, a=255):
        return self.color_cache.get(r, g, b, a)

    def on_cleanup(self, callback):
        self.cleanup_callbacks.append(callback)

    # -----------------------------------------------------

    def update(self, now):
        if now - self.last_cleanup > self.cleanup_interval:
            self.perform_cleanup()
            self.last_cleanup = now

        if self.is_monitoring and now - self.last_check > self.monitor_interval:
            self.last_check = now
            if self.is_memory_critical():
                logger.warning("Memory usage critical, forcing cleanup")
                self.perform_cleanup()
                self.release_temp_arrays()

    def perform_cleanup(self):
        for callback in list(self.cleanup_callbacks):
            try:
                callback()
            except Exception as e:
                logger.warning("Cleanup callback %r failed: %s", callback, e)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Memory stats: %s", self.get_stats())

    def release_temp_arrays(self):
        for array in self.temp_arrays.values():
            array.fill(0.0)

    # -----------------------------------------------------

    def memory_usage(self):
        """Process resident memory as a fraction of physical memory."""
        rss = self._process.memory_info().rss
        return rss / psutil.virtual_memory().total

    def is_memory_critical(self):
        return self.memory_usage() > self.warning_threshold

    def start_monitoring(self, interval=None):
        if interval is not None:
            self.monitor_interval = interval
        self.is_monitoring = True

    def stop_monitoring(self):
        self.is_monitoring = False

    def get_stats(self):
        return {
            "pools": {name: pool.get_stats() for name, pool in self.pools.items()},
            "color_cache_size": len(self.color_cache),
            "rss_bytes": self._process.memory_info().rss,
            "memory_usage_percent": self.memory_usage() * 100.0,
        }

    def dispose(self):
        self.stop_monitoring()
        for pool in self.pools.values():
            pool.clear()
        self.pools.clear()
        self.color_cache.clear()
        self.cleanup_callbacks.clear()
