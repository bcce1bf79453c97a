"""
Spring-damper dot field.

State (one row per dot):
- origin:   Nx2 anchor, set when the dot is created
- pos:      Nx2 canvas pixels
- vel:      Nx2 pixels / frame
- diameter: N, derived each frame, clamped to [min, max]
- color:    Nx4 RGBA float (0..255)

Per frame, in order:
- ambient drift along a noise angle
- repulsion from every influence point (gesture scales radius + strength)
- shockwave push (if one is live)
- spring back toward origin, damping, explicit Euler integrate
- diameter from displacement (or pointer distance), color eased toward the
  nearest point's gesture color

Dots never read each other, so everything is vectorised over N.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

from gestures import Gesture, finger_diameter, parse_gesture, style_for
from perlin import Perlin3

TAU = 2.0 * math.pi


@dataclass(frozen=True)
class Particle:
    origin: tuple[float, float]
    position: tuple[float, float]
    velocity: tuple[float, float]
    diameter: float
    color: tuple[float, float, float, float]


def repulsion(pos: np.ndarray, point, radius: float, strength: float) -> np.ndarray:
    """
    (N, 2) force pushing dots away from `point`.

    Magnitude falls off linearly: `strength` at distance 0, nothing at
    `radius` and beyond. A dot sitting exactly on the point is pushed along +x.
    """
    out = np.zeros((len(pos), 2), dtype=np.float32)
    if len(pos) == 0 or radius <= 0.0 or strength == 0.0:
        return out

    diff = pos - np.array([point[0], point[1]], dtype=np.float32)[None, :]
    d = np.linalg.norm(diff, axis=1)
    inside = d < radius
    if not np.any(inside):
        return out

    dirn = np.zeros_like(diff)
    dirn[:, 0] = 1.0
    moving = inside & (d > 1e-6)
    dirn[moving] = diff[moving] / d[moving][:, None]

    mag = strength * (1.0 - d[inside] / radius)
    out[inside] = dirn[inside] * mag[:, None]
    return out


def diameter_for(dist, half_range: float, d_min: float, d_max, wobble=0.0):
    """
    Map distance-from-origin [0, half_range] onto [d_max, d_min], add the
    breathing wobble, then clamp. d_max may be per-dot.
    """
    dist = np.asarray(dist, dtype=np.float32)
    d_max = np.broadcast_to(np.asarray(d_max, dtype=np.float32), dist.shape)
    if half_range <= 0.0:
        d = np.full(dist.shape, d_min, dtype=np.float32)
    else:
        d = d_max + (d_min - d_max) * (dist / half_range)
    return np.clip(d + wobble, d_min, d_max).astype(np.float32)


def lerp_color(color, target, t: float):
    """Exponential ease: moves `t` of the remaining way toward target."""
    color = np.asarray(color, dtype=np.float32)
    target = np.asarray(target, dtype=np.float32)
    return color + (target - color) * float(t)


class ParticleField:
    def __init__(self, params, seed=None):
        self.params = params
        self.seed = params.seed if seed is None else seed
        self.noise = Perlin3(seed=self.seed)
        self.rng = np.random.default_rng(self.seed)

        # last frame's effective radius + nearest-point distances (reveal)
        self.radius = float(params.influence_radius)
        self.nearest = np.zeros(0, dtype=np.float32)

        self.rebuild(np.zeros((0, 2), dtype=np.float32))

    # ---------------- lifecycle ----------------

    def rebuild(self, origins):
        """Drop every dot and start fresh, at rest on the new origins."""
        origins = np.asarray(origins, dtype=np.float32).reshape(-1, 2)
        n = len(origins)
        p = self.params

        self.origin = origins.copy()
        self.pos = origins.copy()
        self.vel = np.zeros((n, 2), dtype=np.float32)
        self.diameter = np.full(n, p.max_diameter, dtype=np.float32)
        self.color = np.tile(np.array(p.default_color, dtype=np.float32), (n, 1))
        self.next_color = self.color.copy()
        self.progress = np.ones(n, dtype=np.float32)
        self.alive = np.ones(n, dtype=bool)
        self.nearest = np.full(n, np.inf, dtype=np.float32)

    def __len__(self):
        return len(self.pos)

    def particle(self, i: int) -> Particle:
        return Particle(
            origin=(float(self.origin[i, 0]), float(self.origin[i, 1])),
            position=(float(self.pos[i, 0]), float(self.pos[i, 1])),
            velocity=(float(self.vel[i, 0]), float(self.vel[i, 1])),
            diameter=float(self.diameter[i]),
            color=tuple(float(c) for c in self.color[i]),
        )

    # ---------------- creator / black hole ----------------

    def spawn(self, point, n: int, rng=None) -> int:
        """Append up to n dots around `point`; each is anchored where it appears."""
        p = self.params
        room = max(0, int(p.max_particles) - len(self))
        n = min(int(n), room)
        if n <= 0:
            return 0
        rng = self.rng if rng is None else rng

        jitter = (rng.random((n, 2)) - 0.5) * 2.0 * p.spawn_jitter
        new = (np.array(point, dtype=np.float32)[None, :] + jitter).astype(np.float32)
        col = np.tile(np.array(p.default_color, dtype=np.float32), (n, 1))

        self.origin = np.concatenate([self.origin, new])
        self.pos = np.concatenate([self.pos, new.copy()])
        self.vel = np.concatenate([self.vel, np.zeros((n, 2), dtype=np.float32)])
        self.diameter = np.concatenate([self.diameter, np.full(n, p.min_diameter, dtype=np.float32)])
        self.color = np.concatenate([self.color, col])
        self.next_color = np.concatenate([self.next_color, col.copy()])
        self.progress = np.concatenate([self.progress, np.ones(n, dtype=np.float32)])
        self.alive = np.concatenate([self.alive, np.ones(n, dtype=bool)])
        self.nearest = np.concatenate([self.nearest, np.full(n, np.inf, dtype=np.float32)])
        return n

    def consume(self, point, radius: float) -> int:
        """Mark every dot within `radius` of `point` dead. Returns how many."""
        if len(self) == 0:
            return 0
        d = np.linalg.norm(self.pos - np.array(point, dtype=np.float32)[None, :], axis=1)
        hit = self.alive & (d < radius)
        self.alive[hit] = False
        return int(hit.sum())

    def compact(self) -> bool:
        """Remove dead dots. True if anything was removed (indices shifted)."""
        if self.alive.all():
            return False
        keep = self.alive
        for name in ("origin", "pos", "vel", "diameter", "color", "next_color", "progress", "nearest"):
            setattr(self, name, getattr(self, name)[keep])
        self.alive = np.ones(len(self.pos), dtype=bool)
        return True

    # ---------------- color transitions ----------------

    def start_transition(self, indices, color):
        """Begin a radial wipe toward `color` on the given dots."""
        idx = np.asarray(indices, dtype=np.int64).reshape(-1)
        idx = idx[(idx >= 0) & (idx < len(self))]
        if idx.size == 0:
            return

        # a wipe already underway becomes the new outer color
        t = self.progress[idx][:, None]
        self.color[idx] = self.color[idx] + (self.next_color[idx] - self.color[idx]) * t
        self.next_color[idx] = np.array(color, dtype=np.float32)
        self.progress[idx] = 0.0

    def _advance_transitions(self):
        moving = self.progress < 1.0
        if not np.any(moving):
            return
        self.progress[moving] = np.minimum(1.0, self.progress[moving] + self.params.transition_step)
        done = moving & (self.progress >= 1.0)
        self.color[done] = self.next_color[done]

    # ---------------- per-frame update ----------------

    def _point_params(self, pt, base_radius):
        p = self.params
        style = style_for(pt.gesture)
        radius = base_radius * style.radius_scale
        strength = p.repulsion * style.strength_scale
        if p.creator:
            g = parse_gesture(pt.gesture)
            if g is Gesture.FIST:
                strength = -p.black_hole_strength
            elif g is Gesture.OPEN:
                # the creating hand places dots, it doesn't scatter them
                strength = 0.0
        return radius, strength

    def step(self, snapshot, frame: int, radius=None, shockwave=None):
        p = self.params
        n = len(self)
        base_r = float(p.influence_radius if radius is None else radius)
        self.radius = base_r
        if n == 0:
            return

        points = tuple(snapshot.points) if snapshot is not None else ()

        # 1) Ambient drift
        if p.drift_force > 0.0:
            a = self.noise.noise(self.pos[:, 0] * p.noise_scale,
                                 self.pos[:, 1] * p.noise_scale,
                                 frame * p.noise_speed) * TAU * 2.0
            self.vel[:, 0] += p.drift_force * np.cos(a).astype(np.float32)
            self.vel[:, 1] += p.drift_force * np.sin(a).astype(np.float32)

        # 2) Repulsion, one term per point, summed
        radii = []
        for pt in points:
            r, s = self._point_params(pt, base_r)
            radii.append(r)
            self.vel += repulsion(self.pos, pt.position, r, s)

        # 3) Shockwave
        if shockwave is not None and shockwave.active:
            self.vel += shockwave.force(self.pos)

        # 4-6) Spring, damping, integrate
        self.vel += p.spring * (self.origin - self.pos)
        self.vel *= p.damping
        self.pos += self.vel

        # distance from every dot to every point, after the move
        if points:
            centers = np.array([pt.position for pt in points], dtype=np.float32)
            dists = np.linalg.norm(self.pos[None, :, :] - centers[:, None, :], axis=2)
            nearest_i = np.argmin(dists, axis=0)
            self.nearest = dists[nearest_i, np.arange(n)]
        else:
            nearest_i = None
            self.nearest = np.full(n, np.inf, dtype=np.float32)

        # 7) Diameter
        self.diameter = self._diameters(points, nearest_i, base_r, frame)

        # 8) Color
        if p.color_mode == "transition":
            self._advance_transitions()
        else:
            target = self._target_colors(points, nearest_i, radii)
            self.color = lerp_color(self.color, target, p.color_lerp)
            self.next_color = self.color.copy()

    def _diameters(self, points, nearest_i, base_r, frame):
        p = self.params
        n = len(self)

        upper = np.full(n, p.max_diameter, dtype=np.float32)
        if p.finger_sizes and points:
            # per-dot base from the nearest hand's finger count
            bases = np.array([finger_diameter(pt.fingers, p.max_diameter) for pt in points], dtype=np.float32)
            upper = bases[nearest_i]

        wobble = 0.0
        if p.breathing > 0.0:
            phase = (self.origin[:, 0] + self.origin[:, 1]) * p.breathing_phase
            wobble = p.breathing * np.sin(frame * p.breathing_speed + phase)

        if p.size_from == "pointer":
            # closer to the pointer -> smaller; no pointer means full size
            reach = np.minimum(self.nearest, base_r)
            return diameter_for(base_r - reach, base_r, p.min_diameter, upper, wobble)

        disp = np.linalg.norm(self.pos - self.origin, axis=1)
        return diameter_for(disp, base_r * 0.5, p.min_diameter, upper, wobble)

    def _target_colors(self, points, nearest_i, radii):
        p = self.params
        n = len(self)
        target = np.tile(np.array(p.default_color, dtype=np.float32), (n, 1))
        if not points:
            return target

        palette = np.array([p.default_color if parse_gesture(pt.gesture) is Gesture.DEFAULT
                            else style_for(pt.gesture).color for pt in points], dtype=np.float32)
        limit = np.array(radii, dtype=np.float32)[nearest_i]
        in_range = self.nearest < limit
        target[in_range] = palette[nearest_i[in_range]]
        return target
