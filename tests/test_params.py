import pytest

from app import parse_args
from params import Params, VARIANTS


@pytest.mark.parametrize("name", sorted(VARIANTS))
def test_every_variant_builds(name):
    p = Params.for_variant(name)
    for key, value in VARIANTS[name].items():
        assert getattr(p, key) == value
    assert p.min_diameter <= p.max_diameter
    assert 0.0 <= p.damping < 1.0


def test_unknown_variant_raises():
    with pytest.raises(ValueError):
        Params.for_variant("kaleidoscope")


def test_variants_do_not_share_state():
    a = Params.for_variant("clap")
    a.shock_strength = 1.0
    assert Params.for_variant("clap").shock_strength != 1.0


def test_default_config_has_no_ambient_motion():
    p = Params()
    assert p.drift_force == 0.0
    assert p.breathing == 0.0


def test_cli_defaults():
    args = parse_args([])
    assert args.variant == "gesture"
    assert not args.no_camera


def test_cli_rejects_unknown_variant():
    with pytest.raises(SystemExit):
        parse_args(["--variant", "nope"])


def test_cli_flags():
    args = parse_args(["--variant", "audio", "--no-camera", "--no-audio", "--width", "640"])
    assert args.variant == "audio"
    assert args.no_camera and args.no_audio
    assert args.width == 640
