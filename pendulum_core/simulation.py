#!/usr/bin/env python3
"""
Simulation controller: the per-tick orchestrator and the state shared with
the host.

What this module does
- Owns the pendulum chain, the interaction state machine, the fading trail and
  the pointer input state.
- step(dt, current_time) runs one tick: interaction decision, then either the
  drag override or physics integration, then a trail update from the outer
  link's tip.
- Exposes read-only snapshots (link endpoints, trail samples) for rendering.

Threading model
- The host's render thread is the only caller of step(). The control window
  runs on another thread, so every public method takes a re-entrant lock and
  pointer writes land as whole InputState updates between ticks.

Timing
- step() takes an explicit dt and simulation time and reads no clock, so it can
  be driven deterministically. advance(dt) is a convenience that keeps an
  internal simulation clock for hosts that do not track one.
"""
import logging
import threading
from typing import List, Optional, Tuple
from .camera import Viewport
from .constants import DAMPING, GRAVITY, TRAIL_TTL, VIEW_HEIGHT, VIEW_WIDTH
from .data_models import InputState, InteractionState, Link
from .interaction import InteractionController
from .physics import PendulumChain
from .presets_loader import ChainPreset
from .trail import TrailBuffer

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Shared state between the control window and the render thread.
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, chain: Optional[PendulumChain] = None,
                 viewport_size: Tuple[int, int] = (VIEW_WIDTH, VIEW_HEIGHT),
                 gravity: float = GRAVITY, damping: float = DAMPING, trail_ttl: float = TRAIL_TTL):
        self.lock = threading.RLock()
        self.chain = chain if chain is not None else PendulumChain()
        self.interaction = InteractionController()
        self.trail = TrailBuffer()
        self.inputs = InputState()
        self.viewport = Viewport(*viewport_size)

        self.gravity = gravity
        self.damping = damping
        self.trail_ttl = trail_ttl

        self.running = True  # app running
        self.playing = True  # simulation running
        self.show_trail = True
        self.sim_time = 0.0
        self.last_event_msg: Optional[str] = None

    # -----------------------
    # Input from the host
    # -----------------------

    def on_pointer_move(self, x: float, y: float) -> None:
        with self.lock:
            self.inputs.move(x, y)

    def on_pointer_button(self, pressed: bool) -> None:
        with self.lock:
            self.inputs.button(pressed)

    def set_viewport_size(self, w: int, h: int) -> None:
        with self.lock:
            self.viewport.set_size(w, h)

    @property
    def viewport_size(self) -> Tuple[int, int]:
        return self.viewport.size

    # -----------------------
    # Per-tick driver
    # -----------------------

    def step(self, dt: float, current_time: float) -> None:
        """Advance the core by one tick of length dt ending at current_time."""
        with self.lock:
            before = self.interaction.state
            state = self.interaction.update(self.chain, self.inputs, self.viewport)
            if state is not before:
                self.last_event_msg = "Dragging outer link." if state is InteractionState.DRAGGING else "Released."

            if state is InteractionState.FREE:
                self.chain.integrate(dt, self.gravity, self.damping)

            self.trail.append(self.chain.end_effector(), current_time)
            self.trail.expire(current_time, self.trail_ttl)
            self.trail.refresh_opacity(current_time, self.trail_ttl)
            self.sim_time = current_time

    def advance(self, dt: float) -> None:
        """Step by dt on the internal simulation clock."""
        with self.lock:
            self.step(dt, self.sim_time + dt)

    # -----------------------
    # Read-only snapshots
    # -----------------------

    def link_endpoints(self) -> List[Tuple[float, float]]:
        """Anchor followed by each link's far end."""
        with self.lock:
            return [(0.0, 0.0)] + self.chain.forward_kinematics()

    def trail_samples(self) -> List[Tuple[float, float, float]]:
        with self.lock:
            return self.trail.samples()

    @property
    def interaction_state(self) -> InteractionState:
        with self.lock:
            return self.interaction.state

    def energy(self) -> float:
        with self.lock:
            return self.chain.total_energy(self.gravity)

    # -----------------------
    # Commands from the control window
    # -----------------------

    def reset(self, preset: Optional[ChainPreset] = None) -> None:
        """
        Restart from a preset (or the default chain): fresh chain, empty trail,
        clock at zero, interaction released.
        """
        with self.lock:
            if preset is not None:
                # Copy so the preset stays reusable after the chain moves
                self.chain = PendulumChain([Link(l.angle, l.length, l.mass) for l in preset.links])
            else:
                self.chain = PendulumChain()
            self.trail.clear()
            self.interaction.reset()
            self.inputs.press_pending = False
            self.sim_time = 0.0
            name = preset.name if preset is not None else "default chain"
            self.last_event_msg = f"Reset to {name}."
            logger.info("simulation reset to %s", name)

    def clear_trail(self) -> None:
        with self.lock:
            self.trail.clear()
