# loop.py
# One tick per display refresh: read the latest snapshot, update, draw.

from __future__ import annotations
from enum import Enum
import numpy as np

from audio import AudioRadius
from events import EventQueue, Shockwave
from gestures import ClapDetector, Gesture, parse_gesture, style_for
from grid import MODES, build_origins
from inputs import EMPTY
from render import draw_field
from sim import ParticleField


class GateState(Enum):
    START = "start"
    RUNNING = "running"


class StartGate:
    """'Click to start' screen. One-way: START -> RUNNING on the first press."""

    def __init__(self, enabled=True):
        self.state = GateState.START if enabled else GateState.RUNNING

    @property
    def running(self) -> bool:
        return self.state is GateState.RUNNING

    def press(self) -> bool:
        """Returns True only on the press that opened the gate."""
        if self.state is GateState.START:
            self.state = GateState.RUNNING
            return True
        return False


class SketchState:
    """
    Everything the sketch mutates between frames.

    Built once in FrameLoop.__init__ and reset (field rebuilt, pending events
    dropped) on every resize/regrid.
    """

    def __init__(self, params, width, height):
        self.params = params
        self.width = int(width)
        self.height = int(height)
        self.frame = 0
        self.grid_mode = params.grid_mode
        self.rng = np.random.default_rng(params.seed)

        self.field = ParticleField(params)
        self.shockwave = Shockwave(params.shock_radius, params.shock_decay, params.shock_epsilon)
        self.events = EventQueue()
        self.audio = AudioRadius(params.audio_radius_min, params.audio_radius_max,
                                 params.pulse_every, params.pulse_frames, seed=params.seed)
        self.clap = ClapDetector(params.clap_distance_px, params.clap_release_px, params.clap_cooldown)

        # last gesture a color wipe was started for (transition variant)
        self.wipe_gesture = Gesture.DEFAULT


class FrameLoop:
    def __init__(self, params, width, height):
        self.params = params
        # audio radius only while a level source is running
        self.audio_enabled = bool(params.audio)
        self.state = SketchState(params, width, height)
        self.resize(width, height)

    @property
    def field(self):
        return self.state.field

    @property
    def frame(self):
        return self.state.frame

    # ---------------- lifecycle ----------------

    def resize(self, width, height):
        st = self.state
        st.width, st.height = int(width), int(height)
        self.regrid()

    def regrid(self, mode=None):
        st = self.state
        if mode is not None:
            if mode not in MODES:
                raise ValueError(f"unknown grid mode {mode!r}")
            st.grid_mode = mode
        origins = build_origins(st.grid_mode, st.width, st.height, self.params, st.rng)
        st.field.rebuild(origins)
        st.events.invalidate()
        st.wipe_gesture = Gesture.DEFAULT
        st.clap.reset()

    def cycle_grid_mode(self):
        i = MODES.index(self.state.grid_mode)
        self.regrid(MODES[(i + 1) % len(MODES)])
        return self.state.grid_mode

    def shock_at(self, point, strength=None):
        p = self.params
        self.state.shockwave.trigger(point, p.shock_strength if strength is None else strength)

    # ---------------- per frame ----------------

    def tick(self, snapshot=None):
        st = self.state
        p = self.params
        snapshot = EMPTY if snapshot is None else snapshot
        st.frame += 1
        frame = st.frame

        if p.shockwave:
            center = st.clap.update(snapshot.palms, frame)
            if center is not None:
                st.shockwave.trigger(center, p.shock_strength)

        if p.creator:
            self._create_and_destroy(snapshot)

        radius = st.audio.update(snapshot.audio_level, frame) if self.audio_enabled else p.influence_radius

        for ev in st.events.drain(frame, len(st.field)):
            st.field.start_transition([ev.index], ev.payload)

        st.field.step(snapshot, frame, radius=radius, shockwave=st.shockwave)
        st.shockwave.step()

        if p.color_mode == "transition":
            self._schedule_wipe(snapshot, frame)

    def _create_and_destroy(self, snapshot):
        st = self.state
        p = self.params
        for pt in snapshot.points:
            g = parse_gesture(pt.gesture)
            if g is Gesture.OPEN:
                st.field.spawn(pt.position, p.spawn_per_frame, st.rng)
            elif g is Gesture.FIST:
                st.field.consume(pt.position, p.black_hole_radius)
        if st.field.compact():
            st.events.invalidate()

    def _schedule_wipe(self, snapshot, frame):
        """Start a staggered wipe when the lead hand's gesture changes."""
        st = self.state
        lead = parse_gesture(snapshot.points[0].gesture) if snapshot.points else Gesture.DEFAULT
        if lead is st.wipe_gesture:
            return
        st.wipe_gesture = lead

        color = self.params.default_color if lead is Gesture.DEFAULT else style_for(lead).color
        center = np.array([st.width * 0.5, st.height * 0.5], dtype=np.float32)
        dist = np.linalg.norm(st.field.origin - center[None, :], axis=1)
        delays = np.floor(dist * self.params.transition_delay).astype(np.int64)
        for i, delay in enumerate(delays):
            st.events.schedule(frame + int(delay), i, color)

    def render(self, canvas, transform):
        """Dots only; background and overlays are drawn by the caller."""
        return draw_field(canvas, self.state.field, transform, reveal=self.params.reveal)
