#!/usr/bin/env python3
"""
Shared constants for the Double Pendulum Simulator.

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. None of these are changed at runtime.
"""
import math

# Physics
GRAVITY = 9.81  # m/s^2
TICK_DT = 0.016  # seconds of simulation time per tick
DAMPING = 0.9999  # angular velocity multiplier applied every tick

# Initial chain (both links)
DEFAULT_ANGLE = math.pi / 4  # rad, from the downward vertical
DEFAULT_LENGTH = 1.0
DEFAULT_MASS = 1.0

# Trail
TRAIL_TTL = 20.0  # seconds a trail sample stays visible

# Interaction
CAPTURE_RADIUS = 0.1  # simulation units

# Logical viewport spans [-VIEW_EXTENT, VIEW_EXTENT] on both axes
VIEW_EXTENT = 3.0

# Rendering (window)
VIEW_WIDTH = 800
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
ROD_COLOR = (255, 255, 255)
BOB_COLOR = (255, 255, 255)
TRAIL_COLOR = (255, 255, 255)
DRAG_COLOR = (255, 255, 0)
HUD_COLOR = (200, 200, 200)
BOB_HALF_SIZE = 0.05  # simulation units

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
