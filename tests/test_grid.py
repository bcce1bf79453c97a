import numpy as np
import pytest

from grid import build_origins, lattice, lattice_shape, legacy_lattice, scatter
from params import Params


def test_lattice_counts_800x600():
    assert lattice_shape(800, 600, 60) == (13, 10)
    pts = lattice(800, 600, 60)
    assert pts.shape == (130, 2)
    assert pts.dtype == np.float32


def test_lattice_is_centred():
    pts = lattice(800, 600, 60)
    xs, ys = pts[:, 0], pts[:, 1]
    assert xs.min() == pytest.approx(800 - xs.max())
    assert ys.min() == pytest.approx(600 - ys.max())
    assert xs.min() == pytest.approx(40.0)
    assert ys.min() == pytest.approx(30.0)


def test_lattice_spacing_between_neighbours():
    pts = lattice(800, 600, 60)
    xs = np.unique(pts[:, 0])
    assert np.allclose(np.diff(xs), 60.0)


def test_lattice_too_small_canvas_is_empty():
    assert lattice(50, 50, 60).shape == (0, 2)


@pytest.mark.parametrize("spacing", [0, -5])
def test_bad_spacing_raises(spacing):
    with pytest.raises(ValueError):
        lattice(800, 600, spacing)


def test_legacy_maps_onto_inner_band():
    pts = legacy_lattice(700, 700, 30, rows=20, cols=20)
    assert pts.shape == (400, 2)
    assert pts[:, 0].min() == pytest.approx(60.0)
    assert pts[:, 0].max() == pytest.approx(640.0)
    assert pts[:, 1].min() == pytest.approx(60.0)
    assert pts[:, 1].max() == pytest.approx(640.0)


def test_legacy_single_column_sits_at_start():
    pts = legacy_lattice(700, 700, 30, rows=3, cols=1)
    assert np.allclose(pts[:, 0], 60.0)


def test_scatter_exact_count_and_bounds():
    pts = scatter(800, 600, 2000, np.random.default_rng(1))
    assert pts.shape == (2000, 2)
    assert (pts[:, 0] >= 0).all() and (pts[:, 0] < 800).all()
    assert (pts[:, 1] >= 0).all() and (pts[:, 1] < 600).all()


def test_scatter_is_seeded():
    a = scatter(800, 600, 50, np.random.default_rng(3))
    b = scatter(800, 600, 50, np.random.default_rng(3))
    assert np.array_equal(a, b)


def test_build_origins_dispatch():
    p = Params()
    p.spacing = 60
    p.scatter_count = 10
    assert len(build_origins("lattice", 800, 600, p)) == 130
    assert len(build_origins("scatter", 800, 600, p, np.random.default_rng(0))) == 10
    assert len(build_origins("legacy", 800, 600, p)) == p.legacy_rows * p.legacy_cols
    with pytest.raises(ValueError):
        build_origins("hexagonal", 800, 600, p)
