#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

These are small, fast functions for vector math used throughout the app.
"""
import math
from typing import Tuple


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_sub(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return (a[0] - b[0], a[1] - b[1])


def vec_len(a: Tuple[float, float]) -> float:
    return math.hypot(a[0], a[1])


def vec_dist(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two points."""
    return vec_len(vec_sub(a, b))


def polar_offset(length: float, angle: float) -> Tuple[float, float]:
    """Offset of a rod of `length` hanging at `angle` from the downward vertical."""
    return (length * math.sin(angle), -length * math.cos(angle))


def angle_from_down(p: Tuple[float, float]) -> float:
    """Angle of point p as seen from the origin, measured from the downward vertical."""
    return math.atan2(p[0], -p[1])
