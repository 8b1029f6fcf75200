#!/usr/bin/env python3
"""
Mouse interaction for the pendulum: decides each tick whether the chain runs
under physics or has its outer link slaved to the pointer.

States
- FREE: the chain evolves by integration.
- DRAGGING: the outer link's angle follows the pointer, measured from the
  anchor, and its angular velocity is held at zero.

Transitions
- FREE -> DRAGGING on a button press, or while the button is held and the
  pointer comes within CAPTURE_RADIUS of the end effector.
- DRAGGING -> FREE as soon as the button is up at tick time.

Only the outer link is driven. The inner link keeps its last physics value,
so the tip does not land exactly under the cursor unless the inner link
happens to hang straight down.
"""
import logging
from .constants import CAPTURE_RADIUS
from .camera import Viewport
from .data_models import InputState, InteractionState
from .physics import PendulumChain
from .vector_utils import angle_from_down, vec_dist

logger = logging.getLogger(__name__)


class InteractionController:
    """
    Two-state machine arbitrating between physics and pointer override.
    """

    def __init__(self, capture_radius: float = CAPTURE_RADIUS):
        self.capture_radius = capture_radius
        self.state = InteractionState.FREE

    @property
    def dragging(self) -> bool:
        return self.state is InteractionState.DRAGGING

    def update(self, chain: PendulumChain, inputs: InputState,
               viewport: Viewport) -> InteractionState:
        """
        Run one tick of the state machine and apply the drag override.

        Consumes the latched press edge in `inputs`. Returns the state the
        tick ends in; when it is DRAGGING the chain has already been updated
        and must not be integrated this tick.
        """
        pointer = viewport.screen_to_world(inputs.pointer)
        pressed = inputs.consume_press()

        if self.state is InteractionState.FREE:
            if pressed:
                self._enter(InteractionState.DRAGGING, "button pressed")
            elif inputs.button_down and vec_dist(pointer, chain.end_effector()) < self.capture_radius:
                self._enter(InteractionState.DRAGGING, "end effector recaptured")

        if self.state is InteractionState.DRAGGING:
            if not inputs.button_down:
                self._enter(InteractionState.FREE, "button released")
            else:
                chain.override_last_angle(angle_from_down(pointer))

        return self.state

    def reset(self) -> None:
        self.state = InteractionState.FREE

    def _enter(self, state: InteractionState, reason: str) -> None:
        logger.debug("interaction %s -> %s (%s)", self.state.value, state.value, reason)
        self.state = state
