# audio.py
import sys
import threading

import numpy as np


class AudioRadius:
    """
    Microphone level -> influence radius.

    level 0..1 maps linearly into [radius_min, radius_max]. No level (no mic)
    keeps the last radius. Every so often a pulse forces radius_max for a few
    frames regardless of what the mic hears.
    """

    def __init__(self, radius_min=80.0, radius_max=320.0, pulse_every=(240, 600), pulse_frames=12, seed=0):
        self.radius_min = float(radius_min)
        self.radius_max = float(radius_max)
        self.pulse_every = (int(pulse_every[0]), int(max(pulse_every[0], pulse_every[1])))
        self.pulse_frames = int(pulse_frames)
        self.rng = np.random.default_rng(seed)

        self.radius = self.radius_min
        self._pulse_until = -1
        self._next_pulse = self._draw_next(0)

    def _draw_next(self, frame):
        lo, hi = self.pulse_every
        if lo <= 0:
            return None
        return frame + int(self.rng.integers(lo, hi + 1))

    def pulsing(self, frame) -> bool:
        return frame < self._pulse_until

    def update(self, level, frame: int) -> float:
        if self._next_pulse is not None and frame >= self._next_pulse:
            self._pulse_until = frame + self.pulse_frames
            self._next_pulse = self._draw_next(frame)

        if self.pulsing(frame):
            return self.radius_max

        if level is not None:
            lv = float(np.clip(level, 0.0, 1.0))
            self.radius = self.radius_min + (self.radius_max - self.radius_min) * lv
        return self.radius


class MicMeter:
    """Block RMS from the default input device, scaled by `gain` and clipped to 0..1."""

    def __init__(self, gain=8.0, sample_rate=44100, block=1024, device=None):
        self.gain = float(gain)
        self.sample_rate = int(sample_rate)
        self.block = int(block)
        self.device = device

        self._level = None
        self.last_status = None
        self._lock = threading.Lock()
        self._stream = None

    @property
    def level(self):
        with self._lock:
            return self._level

    def _cb(self, indata, frames, t, status):
        if status:
            # overflow etc. still carries usable samples
            self.last_status = str(status)
            print(f"⚠️  Mic: {status}", file=sys.stderr)
        mono = indata[:, 0]
        rms = float(np.sqrt(np.mean(mono * mono))) if len(mono) else 0.0
        with self._lock:
            self._level = float(np.clip(rms * self.gain, 0.0, 1.0))

    def start(self):
        if self._stream is not None:
            return
        import sounddevice as sd

        self._stream = sd.InputStream(
            device=self.device, channels=1, samplerate=self.sample_rate,
            blocksize=self.block, dtype="float32", callback=self._cb,
        )
        self._stream.start()

    def stop(self):
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
