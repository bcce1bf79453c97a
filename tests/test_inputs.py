import pytest

from gestures import Gesture
from inputs import EMPTY, HandInput, InputSnapshot, PointerInput
from smoothing import HandSmoothers, LerpSmoother


def test_pointer_defaults_to_centre():
    ptr = PointerInput(800, 600)
    assert ptr.pos == (400.0, 300.0)
    snap = ptr.snapshot(audio_level=0.3)
    assert len(snap.points) == 1
    assert snap.points[0].position == (400.0, 300.0)
    assert snap.points[0].gesture is Gesture.DEFAULT
    assert snap.audio_level == 0.3


def test_pointer_resize_keeps_real_position():
    ptr = PointerInput(800, 600)
    ptr.resize(400, 200)
    assert ptr.pos == (200.0, 100.0)
    ptr.move(10, 20)
    ptr.resize(1000, 1000)
    assert ptr.pos == (10.0, 20.0)


def test_empty_snapshot():
    assert EMPTY.points == ()
    assert EMPTY.audio_level is None
    assert InputSnapshot().palms == ()


def test_lerp_smoother_first_sample_snaps():
    sm = LerpSmoother(0.25)
    assert sm.update((100, 50)) == (100.0, 50.0)
    assert sm.update((200, 50)) == (125.0, 50.0)


def test_lerp_smoother_residual_shrinks_geometrically():
    sm = LerpSmoother(0.2)
    sm.update((0, 0))
    for _ in range(10):
        x, _ = sm.update((100, 0))
    assert 100 - x == pytest.approx(100 * 0.8 ** 10)


def test_hand_smoothers_forget_lost_hands():
    hs = HandSmoothers(0.5)
    hs.update({"Left": (0, 0), "Right": (10, 10)})
    out = hs.update({"Left": (100, 0)})
    assert set(out) == {"Left"}
    assert out["Left"] == (50.0, 0.0)
    # a hand that comes back starts fresh
    assert hs.update({"Left": (100, 0), "Right": (0, 0)})["Right"] == (0.0, 0.0)


def test_hand_input_builds_points(hand):
    hi = HandInput(smoothing=0.5)
    result = {"hands": [
        {"landmarks": hand((False, True, True, True, True), x=0.25), "label": "Left"},
        {"landmarks": hand((False, True, False, False, False), x=0.75), "label": "Right"},
    ]}
    snap = hi.snapshot(result, 800, 600, audio_level=0.1)
    assert [p.id for p in snap.points] == ["Left", "Right"]
    assert snap.points[0].gesture is Gesture.OPEN
    assert snap.points[1].gesture is Gesture.POINTING
    assert snap.points[0].fingers == 4
    # index fingertip, normalised -> canvas px
    assert snap.points[0].position == pytest.approx((200.0, 0.4 * 600))
    assert len(snap.palms) == 2
    assert len(hi.last_landmarks) == 2
    assert snap.audio_level == 0.1


def test_hand_input_no_hands(hand):
    hi = HandInput()
    assert hi.update(None, 800, 600) == ((), ())
    assert hi.update({"hands": [{"landmarks": [(0.5, 0.5)] * 3}]}, 800, 600) == ((), ())
    assert hi.last_landmarks == []


def test_hand_input_caps_hand_count(hand):
    hi = HandInput(max_hands=1)
    hands = [{"landmarks": hand(), "label": f"h{i}"} for i in range(3)]
    points, palms = hi.update(hands, 800, 600)
    assert len(points) == 1
    assert len(palms) == 1
