# smoothing.py
from __future__ import annotations

from dataclasses import dataclass


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass
class _State:
    x: float = 0.0
    y: float = 0.0
    init: bool = False


class LerpSmoother:
    """
    Exponential low-pass on a 2D point: current = lerp(current, target, factor).

    Smaller factor = smoother / laggier. The first sample snaps so a hand
    doesn't sweep in from (0, 0) when it appears.
    """

    def __init__(self, factor: float = 0.3):
        self.factor = min(1.0, max(0.0, float(factor)))
        self.s = _State()

    def update(self, pos: tuple[float, float]) -> tuple[float, float]:
        x, y = float(pos[0]), float(pos[1])
        if not self.s.init:
            self.s.x, self.s.y = x, y
            self.s.init = True
        else:
            self.s.x = lerp(self.s.x, x, self.factor)
            self.s.y = lerp(self.s.y, y, self.factor)
        return (self.s.x, self.s.y)


class HandSmoothers:
    """One smoother per stable hand id; ids not seen in a frame are dropped."""

    def __init__(self, factor: float = 0.3):
        self.factor = factor
        self._by_id: dict = {}

    def update(self, samples: dict) -> dict:
        """samples: {hand_id: (x, y)} -> {hand_id: smoothed (x, y)}"""
        for hid in list(self._by_id):
            if hid not in samples:
                del self._by_id[hid]

        out = {}
        for hid, pos in samples.items():
            sm = self._by_id.get(hid)
            if sm is None:
                sm = self._by_id[hid] = LerpSmoother(self.factor)
            out[hid] = sm.update(pos)
        return out

    def reset(self) -> None:
        self._by_id.clear()
