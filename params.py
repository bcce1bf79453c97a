class Params:
    """
    All tunable knobs live here so you don't hunt through code.

    Defaults describe the plain "spring" sketch. Variants only override
    what they embellish (see VARIANTS below).
    """
    def __init__(self):
        # Grid layout
        self.grid_mode = "lattice"     # "lattice" | "legacy" | "scatter"
        self.spacing = 30.0            # px between origins
        self.scatter_count = 2000      # particles in scatter mode
        self.legacy_rows = 20
        self.legacy_cols = 20

        # Dot visuals
        self.min_diameter = 2.0
        self.max_diameter = 20.0
        self.default_color = (32, 127, 255, 255)   # RGBA, electric blue
        self.background = (240, 240, 240)          # RGB
        self.size_from = "displacement"  # or "pointer": shrink near the pointer

        # Spring-damper
        self.spring = 0.05             # stiffness toward origin
        self.damping = 0.85            # velocity multiplier per frame

        # Influence
        self.influence_radius = 150.0  # px
        self.repulsion = 6.0           # force at distance 0

        # Ambient drift (noise)
        self.drift_force = 0.0         # 0 = off
        self.noise_scale = 0.005       # spatial frequency
        self.noise_speed = 0.005       # per frame

        # Breathing (sinusoidal diameter wobble)
        self.breathing = 0.0           # px amplitude, 0 = off
        self.breathing_speed = 0.05
        self.breathing_phase = 0.01

        # Color
        self.color_mode = "lerp"       # "lerp" | "transition"
        self.color_lerp = 0.1          # fraction per frame
        self.transition_step = 0.05    # progress per frame
        self.transition_delay = 0.05   # frames per px from canvas centre

        # Reveal (alpha by distance to nearest pointer)
        self.reveal = False

        # Per-finger-count base diameter instead of max_diameter
        self.finger_sizes = False

        # Audio-reactive influence radius
        self.audio = False
        self.audio_radius_min = 80.0
        self.audio_radius_max = 320.0
        self.audio_gain = 8.0          # RMS multiplier before clipping
        self.pulse_every = (240, 600)  # frames between pulses (min, max)
        self.pulse_frames = 12

        # Clap shockwave
        self.shockwave = False
        self.shock_strength = 30.0
        self.shock_radius = 800.0
        self.shock_decay = 0.9
        self.shock_epsilon = 0.1
        self.clap_distance_px = 90.0
        self.clap_release_px = 180.0
        self.clap_cooldown = 20        # frames

        # Creator / black hole
        self.creator = False
        self.spawn_per_frame = 4
        self.spawn_jitter = 12.0       # px
        self.max_particles = 4000
        self.black_hole_strength = 4.0
        self.black_hole_radius = 24.0  # px, destroyed inside

        # Hand input
        self.hand_smoothing = 0.3      # lerp factor, smaller = smoother
        self.seed = 0

    @classmethod
    def for_variant(cls, name):
        if name not in VARIANTS:
            raise ValueError(f"unknown variant {name!r} (choose from {', '.join(sorted(VARIANTS))})")
        p = cls()
        for key, value in VARIANTS[name].items():
            setattr(p, key, value)
        return p


# Each variant is a set of overrides on top of the defaults.
VARIANTS = {
    "classic": {
        "grid_mode": "legacy",
        "size_from": "pointer",
        "spring": 1.0,
        "damping": 0.0,
        "repulsion": 0.0,
    },
    "spring": {},
    "drift": {
        "drift_force": 0.15,
        "breathing": 1.5,
    },
    "gesture": {
        "spacing": 40.0,
        "drift_force": 0.1,
    },
    "audio": {
        "audio": True,
        "drift_force": 0.1,
    },
    "clap": {
        "shockwave": True,
        "spacing": 36.0,
        "drift_force": 0.1,
    },
    "creator": {
        "grid_mode": "scatter",
        "scatter_count": 600,
        "creator": True,
        "max_diameter": 10.0,
    },
    "reveal": {
        "reveal": True,
        "spacing": 24.0,
        "max_diameter": 14.0,
    },
    "transition": {
        "color_mode": "transition",
        "spacing": 40.0,
    },
    "fingers": {
        "finger_sizes": True,
        "spacing": 40.0,
        "max_diameter": 36.0,
    },
}
