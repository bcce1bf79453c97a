# grid.py
# Origin layouts for the dot field. Every builder returns an (N, 2) float32 array.

from __future__ import annotations
import math
import numpy as np

MODES = ("lattice", "legacy", "scatter")


def _check_spacing(s):
    if s <= 0:
        raise ValueError(f"grid spacing must be positive, got {s}")


def lattice_shape(width, height, spacing):
    """(cols, rows) that fit the canvas."""
    _check_spacing(spacing)
    return int(math.floor(width / spacing)), int(math.floor(height / spacing))


def lattice(width, height, spacing) -> np.ndarray:
    """
    Regular lattice centred on the canvas.

    Margins are symmetric: the leftmost and rightmost origins sit the same
    distance from their edges (same for top/bottom).
    """
    cols, rows = lattice_shape(width, height, spacing)
    if cols <= 0 or rows <= 0:
        return np.zeros((0, 2), dtype=np.float32)

    off_x = (width - cols * spacing) / 2.0 + spacing / 2.0
    off_y = (height - rows * spacing) / 2.0 + spacing / 2.0

    ii, jj = np.meshgrid(np.arange(cols), np.arange(rows), indexing="ij")
    xs = ii.ravel() * spacing + off_x
    ys = jj.ravel() * spacing + off_y
    return np.stack([xs, ys], axis=1).astype(np.float32)


def _map_index(n, lo, hi):
    if n <= 1:
        return np.array([lo], dtype=np.float64)[:max(n, 0)]
    return lo + np.arange(n) * (hi - lo) / (n - 1)


def legacy_lattice(width, height, spacing, rows=None, cols=None) -> np.ndarray:
    """
    Fixed-grid layout: indices map linearly onto [2s, W - 2s] x [2s, H - 2s].
    Not truly centred; kept for the original look.
    """
    _check_spacing(spacing)
    if cols is None or rows is None:
        c, r = lattice_shape(width, height, spacing)
        cols = c if cols is None else cols
        rows = r if rows is None else rows

    xs = _map_index(int(cols), 2 * spacing, width - 2 * spacing)
    ys = _map_index(int(rows), 2 * spacing, height - 2 * spacing)
    if xs.size == 0 or ys.size == 0:
        return np.zeros((0, 2), dtype=np.float32)

    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    return np.stack([gx.ravel(), gy.ravel()], axis=1).astype(np.float32)


def scatter(width, height, count, rng=None) -> np.ndarray:
    """Exactly `count` origins, uniform over [0, W) x [0, H)."""
    if rng is None:
        rng = np.random.default_rng()
    pts = rng.random((int(count), 2)) * np.array([width, height], dtype=np.float64)
    return pts.astype(np.float32)


def build_origins(mode, width, height, params, rng=None) -> np.ndarray:
    if mode == "lattice":
        return lattice(width, height, params.spacing)
    if mode == "legacy":
        return legacy_lattice(width, height, params.spacing,
                              rows=params.legacy_rows, cols=params.legacy_cols)
    if mode == "scatter":
        return scatter(width, height, params.scatter_count, rng)
    raise ValueError(f"unknown grid mode {mode!r} (choose from {', '.join(MODES)})")
