import pytest

from gestures import (
    ClapDetector,
    Gesture,
    GESTURE_STYLES,
    classify,
    count_fingers,
    extended_fingers,
    finger_diameter,
    parse_gesture,
    style_for,
)


@pytest.mark.parametrize("up, expected", [
    ((True, True, True, True, True), Gesture.OPEN),
    ((False, True, True, True, True), Gesture.OPEN),
    ((False, False, False, False, False), Gesture.FIST),
    ((True, False, False, False, False), Gesture.FIST),
    ((False, True, False, False, False), Gesture.POINTING),
    ((False, True, True, False, False), Gesture.DEFAULT),
])
def test_classify(hand, up, expected):
    assert classify(hand(up)) is expected


def test_extended_uses_tip_above_base(hand):
    assert extended_fingers(hand((True, False, True, False, True))) == (True, False, True, False, True)
    assert count_fingers(hand((True, False, True, False, True))) == 3


def test_short_landmark_list_is_default():
    assert classify([(0.5, 0.5)] * 5) is Gesture.DEFAULT
    assert classify(None) is Gesture.DEFAULT
    assert count_fingers([]) == 0


@pytest.mark.parametrize("label, expected", [
    ("open", Gesture.OPEN),
    (" FIST ", Gesture.FIST),
    ("pointing", Gesture.POINTING),
    (Gesture.OPEN, Gesture.OPEN),
    ("wave", Gesture.DEFAULT),
    ("", Gesture.DEFAULT),
    (None, Gesture.DEFAULT),
])
def test_parse_gesture(label, expected):
    assert parse_gesture(label) is expected


def test_style_table():
    assert style_for("open").radius_scale == 2.5
    assert style_for("open").strength_scale == 3.5
    assert style_for(Gesture.FIST).radius_scale == 0.5
    assert style_for(Gesture.FIST).strength_scale == 0.5
    assert style_for("mystery") == GESTURE_STYLES[Gesture.DEFAULT]


def test_every_gesture_has_a_style():
    assert set(GESTURE_STYLES) == set(Gesture)


def test_finger_diameter_falls_back():
    assert finger_diameter(3, 20.0) == 24.0
    assert finger_diameter(9, 20.0) == 20.0
    assert finger_diameter(None, 20.0) == 20.0


def test_clap_needs_hands_apart_first():
    det = ClapDetector(distance_px=90, release_px=180, cooldown=0)
    assert det.update([(100, 100), (150, 100)], frame=1) is None   # never apart
    assert det.update([(0, 100), (400, 100)], frame=2) is None     # arms
    assert det.update([(180, 100), (240, 100)], frame=3) == (210.0, 100.0)
    assert det.update([(200, 100), (220, 100)], frame=4) is None   # still together


def test_clap_cooldown():
    det = ClapDetector(distance_px=90, release_px=180, cooldown=10)
    det.update([(0, 0), (400, 0)], frame=1)
    assert det.update([(0, 0), (10, 0)], frame=2) is not None
    det.update([(0, 0), (400, 0)], frame=3)
    assert det.update([(0, 0), (10, 0)], frame=5) is None
    det.update([(0, 0), (400, 0)], frame=20)
    assert det.update([(0, 0), (10, 0)], frame=21) is not None


def test_clap_one_hand_disarms():
    det = ClapDetector()
    det.update([(0, 0), (400, 0)], frame=1)
    det.update([(0, 0)], frame=2)
    assert det.update([(0, 0), (10, 0)], frame=3) is None
