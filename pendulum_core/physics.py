#!/usr/bin/env python3
"""
Core Physics Engine for the Double Pendulum Simulator

Responsibilities
- Compute the angular accelerations of a two-link pendulum from the textbook
  closed-form equations (Lagrangian mechanics, point masses on massless rods).
- Advance the chain with a damped semi-implicit Euler step.
- Walk the chain from the fixed anchor to get each joint's Cartesian position.

Units and conventions
- Angles are in radians measured from the downward vertical.
- Angular velocities are in rad/s; time steps in seconds.
- The anchor sits at the origin; y points up, so a hanging link has y < 0.

Numerical notes
- Semi-implicit Euler: velocity is updated first and the *updated* velocity
  moves the angle. This is markedly more stable than explicit Euler for
  oscillators at the same step size.
- Damping multiplies every angular velocity by a constant factor each step,
  so energy decays exponentially in the absence of input.
- The shared denominator 2*m1 + m2 - m2*cos(2*(a1 - a2)) is not guarded. With
  positive masses it is bounded below by 2*m1, but NaN/inf inputs propagate
  into later ticks unchanged.
- Only two links are supported. A chain with more links needs a numeric
  mass-matrix solve, which would be a separate dynamics function with the same
  signature as two_link_accelerations.
"""

import math
from typing import List, Optional, Sequence, Tuple
from .constants import DEFAULT_ANGLE, DEFAULT_LENGTH, DEFAULT_MASS
from .data_models import Link
from .vector_utils import polar_offset


def two_link_accelerations(inner: Link, outer: Link, gravity: float) -> Tuple[float, float]:
    """
    Angular accelerations (a1'', a2'') of a double pendulum.

        a1'' = [ -g(2m1+m2) sin(a1) - m2 g sin(a1-2a2)
                 - 2 sin(a1-a2) m2 (w2^2 l2 + w1^2 l1 cos(a1-a2)) ]
               / [ l1 (2m1 + m2 - m2 cos(2a1-2a2)) ]

        a2'' = [ 2 sin(a1-a2) ( w1^2 l1 (m1+m2) + g(m1+m2) cos(a1)
                 + w2^2 l2 m2 cos(a1-a2) ) ]
               / [ l2 (2m1 + m2 - m2 cos(2a1-2a2)) ]

    Args:
        inner: Link attached to the anchor.
        outer: Link attached to the inner link's far end.
        gravity: Gravitational acceleration (m/s^2).

    Returns:
        (inner angular acceleration, outer angular acceleration) in rad/s^2.
    """
    m1, m2 = inner.mass, outer.mass
    l1, l2 = inner.length, outer.length
    a1, a2 = inner.angle, outer.angle
    w1, w2 = inner.angular_velocity, outer.angular_velocity
    g = gravity

    delta = a1 - a2
    shared = 2 * m1 + m2 - m2 * math.cos(2 * a1 - 2 * a2)

    num1 = -g * (2 * m1 + m2) * math.sin(a1)
    num2 = -m2 * g * math.sin(a1 - 2 * a2)
    num3 = -2 * math.sin(delta) * m2
    num4 = w2 * w2 * l2 + w1 * w1 * l1 * math.cos(delta)
    acc1 = (num1 + num2 + num3 * num4) / (l1 * shared)

    num1 = 2 * math.sin(delta)
    num2 = w1 * w1 * l1 * (m1 + m2)
    num3 = g * (m1 + m2) * math.cos(a1)
    num4 = w2 * w2 * l2 * m2 * math.cos(delta)
    acc2 = num1 * (num2 + num3 + num4) / (l2 * shared)

    return acc1, acc2


class PendulumChain:
    """
    Two rigid links hanging from a fixed anchor at the origin.

    links[0] is the inner link, links[1] the outer one whose far end is the
    end effector that the user can grab and whose path the trail records.
    """

    def __init__(self, links: Optional[Sequence[Link]] = None):
        if links is None:
            links = [Link(DEFAULT_ANGLE, DEFAULT_LENGTH, DEFAULT_MASS),
                     Link(DEFAULT_ANGLE, DEFAULT_LENGTH, DEFAULT_MASS)]
        links = list(links)
        if len(links) != 2:
            raise ValueError(f"PendulumChain needs exactly two links, got {len(links)}")
        self.links: List[Link] = links

    @property
    def inner(self) -> Link:
        return self.links[0]

    @property
    def outer(self) -> Link:
        return self.links[-1]

    def forward_kinematics(self) -> List[Tuple[float, float]]:
        """
        Far-end position of each link, walking out from the anchor.

        Returns:
            [(x1, y1), (x2, y2)] in simulation space.
        """
        x, y = 0.0, 0.0
        points = []
        for link in self.links:
            dx, dy = polar_offset(link.length, link.angle)
            x += dx
            y += dy
            points.append((x, y))
        return points

    def end_effector(self) -> Tuple[float, float]:
        return self.forward_kinematics()[-1]

    def integrate(self, dt: float, gravity: float, damping: float) -> None:
        """
        Advance both links by one damped semi-implicit Euler step.

        Both accelerations are evaluated from the state at the start of the
        step, then each link does: w += a*dt; w *= damping; angle += w*dt.

        Args:
            dt: Step size in seconds.
            gravity: Gravitational acceleration (m/s^2).
            damping: Per-step velocity multiplier, < 1 for energy loss.
        """
        accelerations = two_link_accelerations(self.inner, self.outer, gravity)
        for link, acc in zip(self.links, accelerations):
            link.angular_velocity += acc * dt
            link.angular_velocity *= damping
            link.angle += link.angular_velocity * dt

    def override_last_angle(self, angle: float) -> None:
        """Pin the outer link to `angle` at rest; the inner link is left alone."""
        self.outer.angle = angle
        self.outer.angular_velocity = 0.0

    def reset(self, angles: Sequence[float]) -> None:
        """Put each link at the given angle with zero velocity."""
        for link, angle in zip(self.links, angles):
            link.angle = float(angle)
            link.angular_velocity = 0.0

    def angles(self) -> Tuple[float, float]:
        return (self.inner.angle, self.outer.angle)

    def angular_velocities(self) -> Tuple[float, float]:
        return (self.inner.angular_velocity, self.outer.angular_velocity)

    def total_energy(self, gravity: float) -> float:
        """
        Total mechanical energy (kinetic + potential) of the two point masses.

        Potential energy is zero at the anchor height, so a chain hanging
        straight down has energy -g * (l1 * (m1 + m2) + l2 * m2).
        """
        m1, m2 = self.inner.mass, self.outer.mass
        l1, l2 = self.inner.length, self.outer.length
        a1, a2 = self.inner.angle, self.outer.angle
        w1, w2 = self.inner.angular_velocity, self.outer.angular_velocity

        kinetic = (0.5 * m1 * (l1 * w1) ** 2
                   + 0.5 * m2 * ((l1 * w1) ** 2 + (l2 * w2) ** 2
                                 + 2 * l1 * l2 * w1 * w2 * math.cos(a1 - a2)))
        potential = -(m1 + m2) * gravity * l1 * math.cos(a1) - m2 * gravity * l2 * math.cos(a2)
        return kinetic + potential
