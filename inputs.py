# inputs.py
# Shapes the core consumes: a list of influence points plus an optional audio level.
# Positions are canvas pixels and already smoothed.

from __future__ import annotations
from dataclasses import dataclass, field

from gestures import Gesture, PALM, INDEX_TIP, classify, count_fingers
from smoothing import HandSmoothers


@dataclass(frozen=True)
class InfluencePoint:
    position: tuple[float, float]
    gesture: Gesture = Gesture.DEFAULT
    id: object = 0
    fingers: int | None = None


@dataclass(frozen=True)
class InputSnapshot:
    points: tuple = ()
    audio_level: float | None = None
    palms: tuple = field(default=())   # clap detection only


EMPTY = InputSnapshot()


class PointerInput:
    """Mouse position; sits at the canvas centre until the first move."""

    def __init__(self, width, height):
        self.pos = (width * 0.5, height * 0.5)
        self._moved = False

    def move(self, x, y):
        self.pos = (float(x), float(y))
        self._moved = True

    def resize(self, width, height):
        if not self._moved:
            self.pos = (width * 0.5, height * 0.5)

    def point(self) -> InfluencePoint:
        return InfluencePoint(position=self.pos, gesture=Gesture.DEFAULT, id="pointer")

    def snapshot(self, audio_level=None) -> InputSnapshot:
        return InputSnapshot(points=(self.point(),), audio_level=audio_level)


def _as_hands_list(hand_result):
    if hand_result is None:
        return []
    if isinstance(hand_result, dict) and isinstance(hand_result.get("hands"), list):
        return hand_result["hands"]
    if isinstance(hand_result, (list, tuple)):
        return list(hand_result)
    return []


class HandInput:
    """
    Tracker output -> smoothed influence points.

    The fingertip drives the force; the palm is tracked separately for clap
    detection. Hands that drop out lose their smoothing state.
    """

    def __init__(self, smoothing=0.3, max_hands=2):
        self.max_hands = int(max_hands)
        self._tips = HandSmoothers(smoothing)
        self._palms = HandSmoothers(smoothing)
        self.last_landmarks = []   # canvas px, for the skeleton overlay

    def reset(self):
        self._tips.reset()
        self._palms.reset()
        self.last_landmarks = []

    def update(self, hand_result, width, height):
        """Returns (points, palms) in canvas pixels."""
        hands = _as_hands_list(hand_result)[: self.max_hands]

        tips, palms, meta = {}, {}, {}
        self.last_landmarks = []
        for i, hand in enumerate(hands):
            lms = hand.get("landmarks") if isinstance(hand, dict) else None
            if not lms or len(lms) < 21:
                continue
            hid = hand.get("label") or i
            if hid in tips:
                hid = f"{hid}{i}"

            px = [(float(x) * width, float(y) * height) for x, y in lms]
            self.last_landmarks.append(px)

            tips[hid] = px[INDEX_TIP]
            palms[hid] = px[PALM]
            meta[hid] = (classify(lms), count_fingers(lms))

        tips_s = self._tips.update(tips)
        palms_s = self._palms.update(palms)

        points = tuple(
            InfluencePoint(position=tips_s[hid], gesture=meta[hid][0], id=hid, fingers=meta[hid][1])
            for hid in tips_s
        )
        return points, tuple(palms_s[hid] for hid in palms_s)

    def snapshot(self, hand_result, width, height, audio_level=None) -> InputSnapshot:
        points, palms = self.update(hand_result, width, height)
        return InputSnapshot(points=points, audio_level=audio_level, palms=palms)
