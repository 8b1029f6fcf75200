#!/usr/bin/env python3
"""
Viewport utilities for pixel-to-simulation transforms.

The logical viewport is fixed: [-VIEW_EXTENT, VIEW_EXTENT] on both axes with y
pointing up, stretched over whatever pixel size the window currently has
(pixel origin top-left, y pointing down).
"""
from typing import Tuple
from .constants import VIEW_EXTENT, VIEW_WIDTH, VIEW_HEIGHT


def to_sim_space(pixel_x: float, pixel_y: float, width: float, height: float) -> Tuple[float, float]:
    """Map a pixel position onto the logical [-3, 3] x [-3, 3] viewport."""
    span = 2.0 * VIEW_EXTENT
    sim_x = (pixel_x / width) * span - VIEW_EXTENT
    sim_y = ((height - pixel_y) / height) * span - VIEW_EXTENT
    return (sim_x, sim_y)


def to_pixel_space(sim_x: float, sim_y: float, width: float, height: float) -> Tuple[float, float]:
    """Inverse of to_sim_space; returns float pixels."""
    span = 2.0 * VIEW_EXTENT
    px = (sim_x + VIEW_EXTENT) / span * width
    py = height - (sim_y + VIEW_EXTENT) / span * height
    return (px, py)


class Viewport:
    """
    Current window size plus the fixed logical extent.
    """

    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT):
        self.size = (width, height)

    def set_size(self, w: int, h: int) -> None:
        self.size = (w, h)

    def screen_to_world(self, screen: Tuple[float, float]) -> Tuple[float, float]:
        return to_sim_space(screen[0], screen[1], self.size[0], self.size[1])

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        # Left as floats; non-finite positions are filtered by the renderer.
        return to_pixel_space(pos[0], pos[1], self.size[0], self.size[1])

    def units_to_pixels(self, length: float) -> float:
        """Convert a simulation-space length to pixels along the x axis."""
        return length * self.size[0] / (2.0 * VIEW_EXTENT)
