# events.py
# Transient effects that live outside individual particles.

from __future__ import annotations
from dataclasses import dataclass
import heapq
import itertools

import numpy as np


class Shockwave:
    """
    Radial push from a clap. Strength decays geometrically each frame and the
    event clears itself once it drops below `epsilon`.
    """

    def __init__(self, radius=800.0, decay=0.9, epsilon=0.1):
        self.radius = float(radius)
        self.decay = float(decay)
        self.epsilon = float(epsilon)
        self.center = None
        self.strength = 0.0

    @property
    def active(self) -> bool:
        return self.center is not None and self.strength > 0.0

    def trigger(self, center, strength):
        self.center = (float(center[0]), float(center[1]))
        self.strength = float(strength)

    def clear(self):
        self.center = None
        self.strength = 0.0

    def step(self):
        if not self.active:
            return
        self.strength *= self.decay
        if self.strength < self.epsilon:
            self.clear()

    def force(self, pos: np.ndarray) -> np.ndarray:
        """(N, 2) outward force for particles at `pos`; zero when inactive."""
        out = np.zeros_like(pos, dtype=np.float32)
        if not self.active or len(pos) == 0:
            return out

        diff = pos - np.array(self.center, dtype=np.float32)[None, :]
        d = np.linalg.norm(diff, axis=1)
        inside = (d < self.radius) & (d > 1e-6)
        if np.any(inside):
            falloff = 1.0 - d[inside] / self.radius
            dirn = diff[inside] / d[inside][:, None]
            out[inside] = dirn * (self.strength * falloff)[:, None]
        return out


@dataclass(order=True)
class ScheduledEvent:
    due: int
    seq: int
    index: int
    payload: object
    generation: int


class EventQueue:
    """
    Delayed per-particle mutations, drained once per frame by the loop.

    `invalidate()` is called whenever the particle set is rebuilt or
    compacted; anything scheduled before that is dropped, and drain() also
    skips indices that no longer exist.
    """

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()
        self.generation = 0

    def __len__(self):
        return len(self._heap)

    def schedule(self, due: int, index: int, payload=None):
        heapq.heappush(self._heap, ScheduledEvent(int(due), next(self._seq), int(index), payload, self.generation))

    def invalidate(self):
        self.generation += 1
        self._heap.clear()

    def drain(self, frame: int, count: int):
        """Pop every event due at or before `frame` that still targets a live particle."""
        ready = []
        while self._heap and self._heap[0].due <= frame:
            ev = heapq.heappop(self._heap)
            if ev.generation != self.generation:
                continue
            if ev.index < 0 or ev.index >= count:
                continue
            ready.append(ev)
        return ready
