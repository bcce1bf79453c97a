# gestures.py
# Hand pose labels and the visual/force tables keyed by them.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20
PALM = 9  # middle finger base, steadier than the wrist

# tip -> base joint used for the "extended" test
FINGER_BASES = (
    (THUMB_TIP, 2),
    (INDEX_TIP, 5),
    (MIDDLE_TIP, 9),
    (RING_TIP, 13),
    (PINKY_TIP, 17),
)


class Gesture(Enum):
    DEFAULT = "default"
    OPEN = "open"
    FIST = "fist"
    POINTING = "pointing"


@dataclass(frozen=True)
class GestureStyle:
    radius_scale: float
    strength_scale: float
    color: tuple  # RGBA


GESTURE_STYLES = {
    Gesture.DEFAULT: GestureStyle(1.0, 1.0, (32, 127, 255, 255)),
    Gesture.OPEN: GestureStyle(2.5, 3.5, (255, 196, 32, 255)),
    Gesture.FIST: GestureStyle(0.5, 0.5, (255, 48, 96, 255)),
    Gesture.POINTING: GestureStyle(0.75, 1.5, (64, 255, 160, 255)),
}

# base diameter per number of raised fingers ("0".."5")
FINGER_COUNT_DIAMETER = {
    0: 6.0,
    1: 12.0,
    2: 18.0,
    3: 24.0,
    4: 30.0,
    5: 36.0,
}


def parse_gesture(label) -> Gesture:
    """Map a free-form label to a Gesture; anything unknown is DEFAULT."""
    if isinstance(label, Gesture):
        return label
    if label is None:
        return Gesture.DEFAULT
    try:
        return Gesture(str(label).strip().lower())
    except ValueError:
        return Gesture.DEFAULT


def style_for(gesture) -> GestureStyle:
    return GESTURE_STYLES.get(parse_gesture(gesture), GESTURE_STYLES[Gesture.DEFAULT])


def finger_diameter(count, default: float) -> float:
    if count is None:
        return float(default)
    return float(FINGER_COUNT_DIAMETER.get(int(count), default))


def extended_fingers(landmarks):
    """
    (thumb, index, middle, ring, pinky) booleans.

    A finger is up when its tip sits above its base joint in screen space
    (smaller y). Landmarks are (x, y) pairs, normalised or pixels.
    """
    if landmarks is None or len(landmarks) < 21:
        return (False,) * 5
    return tuple(landmarks[tip][1] < landmarks[base][1] for tip, base in FINGER_BASES)


def count_fingers(landmarks) -> int:
    return sum(1 for up in extended_fingers(landmarks) if up)


def classify(landmarks) -> Gesture:
    if landmarks is None or len(landmarks) < 21:
        return Gesture.DEFAULT

    _, index, middle, ring, pinky = extended_fingers(landmarks)
    fingers = (index, middle, ring, pinky)

    if all(fingers):
        return Gesture.OPEN
    if not any(fingers):
        return Gesture.FIST
    if index and not (middle or ring or pinky):
        return Gesture.POINTING
    return Gesture.DEFAULT


class ClapDetector:
    """
    Two palms meeting after being apart.

    Armed once the palms are farther than `release_px`; fires when they come
    within `distance_px`, then waits `cooldown` frames before re-arming.
    """

    def __init__(self, distance_px=90.0, release_px=180.0, cooldown=20):
        self.distance_px = float(distance_px)
        self.release_px = float(max(release_px, distance_px))
        self.cooldown = int(cooldown)
        self._armed = False
        self._last_frame = None

    def reset(self):
        self._armed = False

    def update(self, palms, frame: int):
        """palms: list of (x, y) canvas positions. Returns the clap centre or None."""
        if palms is None or len(palms) < 2:
            self._armed = False
            return None

        a, b = palms[0], palms[1]
        d = math.hypot(float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))

        if d > self.release_px:
            self._armed = True
            return None

        if not self._armed or d > self.distance_px:
            return None

        if self._last_frame is not None and frame - self._last_frame < self.cooldown:
            return None

        self._armed = False
        self._last_frame = frame
        return ((float(a[0]) + float(b[0])) * 0.5, (float(a[1]) + float(b[1])) * 0.5)
