"""Live microphone input as a ``SpectrumSource``.

PyAudio runs the capture callback on its own thread; the callback only
down-mixes, optionally resamples, measures loudness and appends to a ring of
the last ``fft_size`` samples. The frame loop reads that ring through
``analyze()``.
"""

import asyncio
import logging
import threading

import aubio
import numpy as np
import pyaudio
import soxr

from bandpulse.spectrum import DeviceAccessError, SpectrumSource

logger = logging.getLogger(__name__)


def list_input_devices():
    """Return ``(index, name, max_input_channels, default_sample_rate)`` tuples."""
    pa = pyaudio.PyAudio()
    try:
        devices = []
        for i in range(pa.get_device_count()):
            info = pa.get_device_info_by_index(i)
            if info.get("maxInputChannels", 0) > 0:
                devices.append((
                    i,
                    info["name"],
                    int(info["maxInputChannels"]),
                    int(info["defaultSampleRate"]),
                ))
        return devices
    finally:
        pa.terminate()


class PyAudioSpectrumSource(SpectrumSource):
    def __init__(
        self,
        device_index=None,
        channels=1,
        device_rate=44100,
        analysis_rate=None,
        frames_per_buffer=512,
        fft_size=1024,
        smoothing=0.8,
        min_db=-100.0,
        max_db=-30.0,
    ):
        super().__init__(
            sample_rate=analysis_rate or device_rate,
            fft_size=fft_size,
            smoothing=smoothing,
            min_db=min_db,
            max_db=max_db,
        )
        self.device_index = device_index
        self.channels = channels
        self.device_rate = device_rate
        self.frames_per_buffer = frames_per_buffer

        self.pa = None
        self.stream = None
        self._resampler = None

        self._lock = threading.Lock()
        self._ring = np.zeros(fft_size, dtype=np.float32)
        self._level_db = float("-inf")

    @property
    def level_db(self):
        return self._level_db

    @property
    def is_open(self):
        return self.stream is not None

    def configure(self, fft_size, smoothing):
        super().configure(fft_size, smoothing)
        with self._lock:
            self._ring = np.zeros(fft_size, dtype=np.float32)

    def audio_callback(self, in_data, frame_count, time_info, status):
        audio = np.frombuffer(in_data, dtype=np.float32)

        # interleaved → mono
        if self.channels > 1:
            audio = audio.reshape(-1, self.channels).mean(axis=1)

        with self._lock:
            resampler = self._resampler
        if resampler is not None:
            audio = resampler.resample_chunk(audio)

        audio = np.ascontiguousarray(audio, dtype=np.float32)
        if audio.size == 0:
            return (None, pyaudio.paContinue)

        self._level_db = float(aubio.db_spl(audio))

        with self._lock:
            size = self._ring.size
            n = audio.size
            if n >= size:
                self._ring[:] = audio[-size:]
            else:
                self._ring[:size - n] = self._ring[n:]
                self._ring[size - n:] = audio

        return (None, pyaudio.paContinue)

    def latest_samples(self):
        with self._lock:
            return self._ring.copy()

    async def start(self):
        if self.stream is not None:
            return
        await asyncio.to_thread(self._open)

    async def stop(self):
        await asyncio.to_thread(self._close)

    def set_sample_rate(self, sample_rate):
        """Change the analysis rate; an open stream resamples to it from the next block."""
        super().set_sample_rate(sample_rate)
        with self._lock:
            self._resampler = self._make_resampler()
            self._ring[:] = 0.0
        logger.info("Analysis rate set to %d Hz (device %d Hz)", sample_rate, self.device_rate)

    def _make_resampler(self):
        if self.sample_rate == self.device_rate:
            return None
        return soxr.ResampleStream(
            self.device_rate,
            self.sample_rate,
            1,
            dtype="float32",
            quality="HQ",
        )

    def _open(self):
        with self._lock:
            self._resampler = self._make_resampler()

        self.pa = pyaudio.PyAudio()
        try:
            self.stream = self.pa.open(
                format=pyaudio.paFloat32,
                channels=self.channels,
                rate=self.device_rate,
                input=True,
                input_device_index=self.device_index,
                frames_per_buffer=self.frames_per_buffer,
                stream_callback=self.audio_callback,
            )
            self.stream.start_stream()
        except (OSError, ValueError) as e:
            self._release()
            raise DeviceAccessError(
                f"cannot open input device {self.device_index if self.device_index is not None else '(default)'}: {e}"
            ) from e

        logger.info(
            "🎧 Listening (PyAudio) device=%s rate=%d → %d Hz",
            self.device_index if self.device_index is not None else "default",
            self.device_rate,
            self.sample_rate,
        )

    def _close(self):
        if self.stream is not None:
            self.stream.stop_stream()
            self.stream.close()
            self.stream = None
            logger.info("Stopping audio stream...")
        if self.pa is not None:
            self.pa.terminate()
            self.pa = None
        self._level_db = float("-inf")

    def _release(self):
        """Drop a half-opened stream after a failed start."""
        if self.stream is not None:
            try:
                self.stream.close()
            except OSError as e:
                logger.warning("Closing failed audio stream: %s", e)
            self.stream = None
        if self.pa is not None:
            self.pa.terminate()
            self.pa = None
