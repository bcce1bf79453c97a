import numpy as np
import pytest

from audio import AudioRadius, MicMeter


def no_pulse(**kw):
    return AudioRadius(80.0, 320.0, pulse_every=(0, 0), **kw)


@pytest.mark.parametrize("level, expected", [
    (0.0, 80.0),
    (0.5, 200.0),
    (1.0, 320.0),
    (3.0, 320.0),
    (-1.0, 80.0),
])
def test_level_maps_linearly(level, expected):
    assert no_pulse().update(level, frame=1) == pytest.approx(expected)


def test_missing_level_holds_last_radius():
    ar = no_pulse()
    assert ar.update(None, 1) == pytest.approx(80.0)
    ar.update(0.25, 2)
    assert ar.update(None, 3) == pytest.approx(140.0)


def test_pulse_forces_max_for_a_few_frames():
    ar = AudioRadius(80.0, 320.0, pulse_every=(5, 5), pulse_frames=3)
    radii = [ar.update(0.0, f) for f in range(1, 12)]
    assert radii[:4] == [80.0] * 4            # frames 1-4
    assert radii[4:7] == [320.0] * 3          # frames 5-7 pulse
    assert radii[7:9] == [80.0] * 2           # back to the mic
    assert radii[9] == 320.0                  # next pulse at frame 10


def test_pulse_does_not_overwrite_held_radius():
    ar = AudioRadius(80.0, 320.0, pulse_every=(2, 2), pulse_frames=1)
    ar.update(0.5, 1)
    assert ar.update(None, 2) == 320.0
    assert ar.update(None, 3) == pytest.approx(200.0)


def test_mic_callback_rms_is_clipped():
    mic = MicMeter(gain=2.0)
    assert mic.level is None
    block = np.full((256, 1), 0.25, dtype=np.float32)
    mic._cb(block, 256, None, None)
    assert mic.level == pytest.approx(0.5)
    mic._cb(np.ones((256, 1), dtype=np.float32), 256, None, None)
    assert mic.level == 1.0


def test_mic_stop_without_start_is_safe():
    MicMeter().stop()


def test_mic_callback_keeps_measuring_on_status_flag(capsys):
    mic = MicMeter(gain=2.0)
    mic._cb(np.full((256, 1), 0.25, dtype=np.float32), 256, None, "input overflow")
    assert mic.level == pytest.approx(0.5)
    assert mic.last_status == "input overflow"
    assert "input overflow" in capsys.readouterr().err
