import numpy as np

from app import App
from params import Params


def headless(variant="gesture", **kw):
    return App(Params.for_variant(variant), 800, 600, use_camera=False, **kw)


def test_no_audio_skips_gate_and_audio_radius():
    app = headless("audio", use_audio=False)
    assert app.gate.running
    assert app.loop.audio_enabled is False
    app.loop.tick(app._snapshot())
    assert app.loop.field.radius == app.params.influence_radius
    app.close()


def test_audio_variant_waits_for_click():
    app = headless("audio")
    assert not app.gate.running
    assert app.loop.audio_enabled is True
    app.close()


def test_resize_forgets_hand_smoothing(hand):
    app = headless()
    result = {"hands": [{"landmarks": hand((False, True, False, False, False)), "label": "Left"}]}
    app.hands.snapshot(result, 800, 600)
    assert app.hands.last_landmarks
    app.resize(400, 300)
    assert app.hands.last_landmarks == []
    assert len(app.loop.field) > 0
    # first sample after the resize snaps to the new canvas instead of easing
    snap = app.hands.snapshot(result, 400, 300)
    x, y = snap.points[0].position
    tip = hand((False, True, False, False, False))[8]
    assert np.allclose((x, y), (tip[0] * 400, tip[1] * 300))
    app.close()
