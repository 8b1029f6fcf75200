#!/usr/bin/env python3
"""
Data models for the Double Pendulum Simulator.

This module defines the small value types shared between physics, interaction,
the trail and rendering.

Units and usage
- angles are in radians measured from the downward vertical, positive
  counter-clockwise; angular velocities in rad/s.
- positions are (x, y) in simulation space: origin at the anchor, y up,
  visible extent [-3, 3] on both axes.
- Access to these objects from the host is coordinated by SimulationController
  using a lock.
"""
import enum
from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class Link:
    """
    One rigid arm of the pendulum chain.

    Fields:
    - angle: Angle from the downward vertical (rad), unbounded
    - angular_velocity: rad/s
    - length: Rod length, fixed at construction
    - mass: Point mass at the far end of the rod, fixed at construction
    """
    angle: float
    length: float = 1.0
    mass: float = 1.0
    angular_velocity: float = 0.0

    def __post_init__(self):
        if self.length <= 0 or self.mass <= 0:
            raise ValueError(f"link length and mass must be positive, got {self.length}, {self.mass}")
        self._frozen = True

    def __setattr__(self, name, value):
        if name in ("length", "mass") and getattr(self, "_frozen", False):
            raise AttributeError(f"Link.{name} is fixed at construction")
        super().__setattr__(name, value)


@dataclass
class TrailSample:
    """A timestamped end-effector position; opacity is recomputed every tick."""
    position: Tuple[float, float]
    timestamp: float
    opacity: float = 1.0

    def __post_init__(self):
        self._frozen = True

    def __setattr__(self, name, value):
        if name in ("position", "timestamp") and getattr(self, "_frozen", False):
            raise AttributeError(f"TrailSample.{name} is fixed at creation")
        super().__setattr__(name, value)


class InteractionState(enum.Enum):
    FREE = "Free"
    DRAGGING = "Dragging"


@dataclass
class InputState:
    """
    Pointer state as last reported by the host.

    `press_pending` latches a button-down edge until the next tick consumes it,
    so a click between two frames is never lost.
    """
    pointer: Tuple[float, float] = field(default=(0.0, 0.0))
    button_down: bool = False
    press_pending: bool = False

    def move(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def button(self, pressed: bool) -> None:
        if pressed and not self.button_down:
            self.press_pending = True
        self.button_down = bool(pressed)

    def consume_press(self) -> bool:
        """Return the latched press edge and clear it."""
        pending = self.press_pending
        self.press_pending = False
        return pending
