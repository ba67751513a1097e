# config/__init__.py
"""Default tuning values for BandPulse.

These are the values used when ``config/bandpulse.json`` does not override
them. Peak threshold and decay are empirical and worth retuning per source.
"""

# --- Audio ---
DEVICE_RATE = 44100
CHANNELS = 1
FRAMES_PER_BUFFER = 512
MIN_DB = -100.0
MAX_DB = -30.0
SILENCE_DB = -70.0

# --- Analysis ---
FFT_SIZE = 1024
SPECTRUM_SMOOTHING = 0.8
ENERGY_SMOOTHING = 0.3
HISTORY_SIZE = 43  # ~0.7s at 60 fps

# --- Peaks ---
PEAK_THRESHOLD = 0.7
PEAK_DECAY = 0.95

# --- Render ---
FRAME_RATE = 60
CANVAS_WIDTH = 960
CANVAS_HEIGHT = 640

# --- Memory ---
CLEANUP_INTERVAL = 30.0
MONITOR_INTERVAL = 10.0
MEMORY_WARNING_THRESHOLD = 0.8
COLOR_CACHE_SIZE = 1000

# --- OSC ---
OSC_IP = "127.0.0.1"
OSC_PORT = 12000
OSC_PREFIX = "/BandPulse"
