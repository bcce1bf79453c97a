# perlin.py
# Seeded 3D Perlin noise over numpy arrays.
# Output lands in [0, 1] so it can be scaled straight into an angle.

from __future__ import annotations
import numpy as np


def _fade(t):
    # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _grad(h, x, y, z):
    # 12 edge gradients of a cube, picked by the low 4 bits of the hash
    h = h & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where(h & 1, -u, u) + np.where(h & 2, -v, v)


class Perlin3:
    """
    Classic improved Perlin noise.

    noise(x, y, z) accepts scalars or broadcastable arrays.
    """

    def __init__(self, seed: int = 0, octaves: int = 1, falloff: float = 0.5):
        rng = np.random.default_rng(seed)
        perm = rng.permutation(256).astype(np.int64)
        self._perm = np.concatenate([perm, perm])
        self.octaves = max(1, int(octaves))
        self.falloff = float(falloff)

    def _single(self, x, y, z):
        p = self._perm

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        zi = np.floor(z).astype(np.int64)
        xf = x - xi
        yf = y - yi
        zf = z - zi
        xi &= 255
        yi &= 255
        zi &= 255

        u = _fade(xf)
        v = _fade(yf)
        w = _fade(zf)

        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        x1 = _grad(p[aa], xf, yf, zf) + u * (_grad(p[ba], xf - 1, yf, zf) - _grad(p[aa], xf, yf, zf))
        x2 = _grad(p[ab], xf, yf - 1, zf) + u * (_grad(p[bb], xf - 1, yf - 1, zf) - _grad(p[ab], xf, yf - 1, zf))
        y1 = x1 + v * (x2 - x1)

        x3 = _grad(p[aa + 1], xf, yf, zf - 1) + u * (
            _grad(p[ba + 1], xf - 1, yf, zf - 1) - _grad(p[aa + 1], xf, yf, zf - 1))
        x4 = _grad(p[ab + 1], xf, yf - 1, zf - 1) + u * (
            _grad(p[bb + 1], xf - 1, yf - 1, zf - 1) - _grad(p[ab + 1], xf, yf - 1, zf - 1))
        y2 = x3 + v * (x4 - x3)

        return y1 + w * (y2 - y1)

    def noise(self, x, y, z=0.0):
        x, y, z = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )

        total = np.zeros(x.shape, dtype=np.float64)
        amp = 1.0
        amp_sum = 0.0
        freq = 1.0
        for _ in range(self.octaves):
            total += amp * self._single(x * freq, y * freq, z * freq)
            amp_sum += amp
            amp *= self.falloff
            freq *= 2.0

        # raw perlin sits in roughly [-1, 1]
        out = np.clip(0.5 + 0.5 * (total / amp_sum), 0.0, 1.0)
        if out.ndim == 0:
            return float(out)
        return out
