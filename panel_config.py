#!/usr/bin/env python3
"""
PANEL CONFIGURATION
===================

Tunables for the dual-stick flight control panel.

Left stick:  vertical = throttle, horizontal = yaw
Right stick: vertical = pitch,    horizontal = roll

Smoothing is applied once per rendered frame (not scaled by frame time),
so the apparent response speed follows the display refresh rate.
"""

import os

# ── Window ──────────────────────────────────────────────────────────────
WINDOW_SIZE = (1100, 720)
WINDOW_TITLE = "Drone Flight Control Panel"
FRAME_RATE_CAP = 60          # pygame Clock.tick() cap, 0 = uncapped
DEFAULT_FPS = 60             # shown until the first 1 s window completes

# ── Flight model ────────────────────────────────────────────────────────
SMOOTHING_FACTOR = 0.1       # per-frame blend weight, current -> target
MAX_ALTITUDE = 5.0           # world units at 100% throttle
MAX_ATTITUDE_DEG = 30.0      # pitch / roll limit
MAX_THROTTLE = 100.0
RPM_PER_THROTTLE = 100.0     # mock: rpm = throttle * 100
PROPELLER_COUNT = 4

# ── Keyboard ────────────────────────────────────────────────────────────
KEY_STEP = 5.0               # degrees or % per key press

# ── Joysticks ───────────────────────────────────────────────────────────
JOYSTICK_RADIUS = 80         # travel radius in pixels
JOYSTICK_HANDLE_RADIUS = 20
JOYSTICK_SIZE = 200          # square widget edge in pixels

# ── Drone model ─────────────────────────────────────────────────────────
MODEL_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "models", "drone.json")
MODEL_SCALE = 1.2
MODEL_LOAD_DELAY_FRAMES = 30  # frames rendered before the model "arrives"

# ── Camera ──────────────────────────────────────────────────────────────
CAMERA_POSITION = (5.0, 5.0, 5.0)
CAMERA_FOV_DEG = 75.0

# ── Recording ───────────────────────────────────────────────────────────
RECORD_FPS = 20
RECORD_EVERY_N_FRAMES = 3
RECORD_MIN_FRAMES = 20

# ── Console output ──────────────────────────────────────────────────────
VERBOSE = False
