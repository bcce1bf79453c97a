# render.py
# cv2 drawing for the dot field and its overlays.
# Nothing here reads global renderer state: the view transform is passed in.

from __future__ import annotations
from dataclasses import dataclass
import cv2
import numpy as np

# MediaPipe's 21-point hand topology
HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (0, 17), (17, 18), (18, 19), (19, 20),
)

ALPHA_LEVELS = 16


@dataclass(frozen=True)
class ViewTransform:
    """Sim space -> screen space. Mirroring gives the selfie view for camera input."""
    width: float
    mirror_x: bool = True

    def apply(self, pts):
        pts = np.array(pts, dtype=np.float32, copy=True).reshape(-1, 2)
        if self.mirror_x:
            pts[:, 0] = self.width - pts[:, 0]
        return pts

    # mirroring is its own inverse
    invert = apply

    def point(self, x, y):
        p = self.apply([(x, y)])[0]
        return (float(p[0]), float(p[1]))


def _bgr(rgba):
    return (int(rgba[2]), int(rgba[1]), int(rgba[0]))


def reveal_alpha(nearest, radius):
    """Alpha 0..255 from distance: 0 at `radius`, fully opaque by radius/2."""
    nearest = np.asarray(nearest, dtype=np.float32)
    half = radius * 0.5
    if half <= 0.0:
        return np.zeros(nearest.shape, dtype=np.float32)
    a = (radius - nearest) / (radius - half) * 255.0
    return np.clip(np.nan_to_num(a, nan=0.0, neginf=0.0), 0.0, 255.0)


def _circle(canvas, c, d, color):
    r = int(round(float(d) * 0.5))
    if r <= 0:
        return
    cv2.circle(canvas, (int(round(float(c[0]))), int(round(float(c[1])))), r, color, -1, cv2.LINE_AA)


def draw_field(canvas, field, transform: ViewTransform, reveal=False) -> int:
    """
    Draw every dot onto `canvas` (BGR uint8, in place).

    Returns the number of dots submitted. With `reveal`, alpha follows
    the distance to the nearest influence point and fully transparent dots
    are skipped.
    """
    n = len(field)
    if n == 0:
        return 0

    screen = transform.apply(field.pos)
    alpha = field.color[:, 3].astype(np.float32)
    if reveal:
        alpha = alpha * (reveal_alpha(field.nearest, field.radius) / 255.0)

    visible = field.alive & (alpha > 0.0)
    if not np.any(visible):
        return 0

    opaque = visible & (alpha >= 254.5)
    for i in np.flatnonzero(opaque):
        _draw_dot(canvas, field, screen, i)

    # translucent dots: bucket by alpha, blend each bucket once
    faded = np.flatnonzero(visible & ~opaque)
    if faded.size:
        levels = np.ceil(alpha[faded] / 255.0 * ALPHA_LEVELS).astype(np.int32)
        for lv in np.unique(levels):
            layer = canvas.copy()
            for i in faded[levels == lv]:
                _draw_dot(layer, field, screen, i)
            a = float(lv) / ALPHA_LEVELS
            cv2.addWeighted(layer, a, canvas, 1.0 - a, 0.0, dst=canvas)

    return int(visible.sum())


def _draw_dot(canvas, field, screen, i):
    d = field.diameter[i]
    _circle(canvas, screen[i], d, _bgr(field.color[i]))
    prog = field.progress[i]
    if prog < 1.0:
        # radial wipe: new color grows from the centre
        _circle(canvas, screen[i], d * prog, _bgr(field.next_color[i]))


def draw_skeleton(canvas, hands_px, transform: ViewTransform, color=(235, 245, 255)):
    """hands_px: list of 21-point lists in sim pixels."""
    for pts in hands_px:
        if len(pts) < 21:
            continue
        scr = transform.apply(pts).astype(np.int32)
        for a, b in HAND_CONNECTIONS:
            cv2.line(canvas, (int(scr[a, 0]), int(scr[a, 1])), (int(scr[b, 0]), int(scr[b, 1])), color, 2, cv2.LINE_AA)
        for x, y in scr:
            cv2.circle(canvas, (int(x), int(y)), 3, color, -1, cv2.LINE_AA)


def draw_thumbnail(canvas, frame_bgr, scale=0.2, margin=12, mirror=True):
    if frame_bgr is None:
        return
    h, w = canvas.shape[:2]
    tw = max(1, int(w * scale))
    th = max(1, int(frame_bgr.shape[0] * tw / max(1, frame_bgr.shape[1])))
    if tw + margin > w or th + margin > h:
        return
    thumb = cv2.resize(frame_bgr, (tw, th), interpolation=cv2.INTER_AREA)
    if mirror:
        thumb = cv2.flip(thumb, 1)
    y0 = h - th - margin
    x0 = w - tw - margin
    canvas[y0:y0 + th, x0:x0 + tw] = thumb
    cv2.rectangle(canvas, (x0 - 1, y0 - 1), (x0 + tw, y0 + th), (25, 25, 25), 1)


class Backdrop:
    """Blurred, darkened camera frame behind the dots. Sized to the canvas."""

    def __init__(self, width, height, blur=25, dim=0.45):
        self.blur = int(blur) | 1
        self.dim = float(dim)
        self.buffer = None
        self.resize(width, height)

    def resize(self, width, height):
        self.size = (int(width), int(height))
        self.buffer = np.zeros((self.size[1], self.size[0], 3), dtype=np.uint8)

    def update(self, frame_bgr, mirror=True):
        if frame_bgr is None:
            return
        img = cv2.resize(frame_bgr, self.size, interpolation=cv2.INTER_LINEAR)
        if mirror:
            img = cv2.flip(img, 1)
        img = cv2.GaussianBlur(img, (self.blur, self.blur), 0)
        self.buffer = cv2.convertScaleAbs(img, alpha=self.dim, beta=0)

    def draw(self, canvas):
        if self.buffer.shape[:2] == canvas.shape[:2]:
            canvas[:] = self.buffer


def _text(canvas, s, org, scale, color=(235, 245, 255)):
    cv2.putText(canvas, s, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (25, 25, 25), 4, cv2.LINE_AA)
    cv2.putText(canvas, s, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2, cv2.LINE_AA)


def draw_start_screen(canvas, title="click to start"):
    h, w = canvas.shape[:2]
    canvas[:] = (18, 18, 18)
    (tw, th), _ = cv2.getTextSize(title, cv2.FONT_HERSHEY_SIMPLEX, 1.0, 2)
    _text(canvas, title, ((w - tw) // 2, (h + th) // 2), 1.0)
