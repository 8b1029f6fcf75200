#!/usr/bin/env python3
"""
Double Pendulum Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Shares one SimulationController between them; all access goes through its
  re-entrant lock.
- Draws the chain and its fading trail, forwards mouse input to the controller, and
  offers presets plus play/pause/step/reset controls.

Threading model
- PygameRenderer runs in a background thread and performs, strictly in this order each
  frame: input handling, one simulation tick, drawing. It is the only thread that
  steps the simulation.
- The UI class runs in the main thread via Dear PyGui. It reads controller state on a
  periodic frame callback and invokes lock-protected SimulationController methods.

Units and conventions
- Simulation space spans [-3, 3] on both axes with the anchor at the origin and y up.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python pendulum_sim.py`

Mouse
- Left-press anywhere to grab the outer link; it follows the cursor angle around the
  anchor until the button is released. While holding the button, sweeping the cursor
  over the free end re-grabs it.
"""

import logging
import math
import threading
from typing import List, Optional, Tuple

import pygame
import dearpygui.dearpygui as dpg

from pendulum_core.constants import (
    BACKGROUND_COLOR,
    BOB_COLOR,
    BOB_HALF_SIZE,
    DRAG_COLOR,
    HUD_COLOR,
    ROD_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    TICK_DT,
    TRAIL_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from pendulum_core.data_models import InteractionState
from pendulum_core.presets_loader import DEFAULT_PRESET, list_presets, load_preset
from pendulum_core.simulation import SimulationController
from pendulum_core.vector_utils import clamp

logger = logging.getLogger("pendulum_sim")

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: forwards mouse input, ticks the simulation, draws chain, trail and HUD.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.viewport = sim.viewport  # one window size for input mapping and drawing
        self.surface = None
        self.clock = None
        self.running = True
        self.step_requests = 0

    def request_step(self):
        """Ask for one tick on the next frame even while paused."""
        with self.sim.lock:
            self.step_requests += 1

    def run(self):
        pygame.init()
        pygame.display.set_caption("Double Pendulum - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()

        while self.running and self.sim.running:
            # Input handling
            self.handle_events()

            # Simulation tick: fixed dt on the simulation clock, so pausing does not
            # age the trail.
            with self.sim.lock:
                ticks = 1 if self.sim.playing else 0
                ticks += self.step_requests
                self.step_requests = 0
            for _ in range(ticks):
                self.sim.advance(TICK_DT)

            # Draw
            self.draw()

            # Limit FPS
            self.clock.tick(TARGET_FPS)

        pygame.quit()
        logger.info("renderer stopped")

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.sim.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # left click
                    self.sim.on_pointer_move(*event.pos)
                    self.sim.on_pointer_button(True)

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.sim.on_pointer_move(*event.pos)
                    self.sim.on_pointer_button(False)

            elif event.type == pygame.MOUSEMOTION:
                self.sim.on_pointer_move(*event.pos)

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                with self.sim.lock:
                    self.sim.playing = not self.sim.playing

    def draw_trail(self, surf, samples: List[Tuple[float, float, float]]):
        # Each segment takes the opacity of its newer end, blended over the background
        prev = None
        for x, y, opacity in samples:
            pt = _safe_point(self.viewport.world_to_screen((x, y)))
            if pt is None:
                prev = None
                continue
            if prev is not None:
                pygame.draw.aaline(surf, _fade(TRAIL_COLOR, opacity), prev, pt)
            prev = pt

    def draw_chain(self, surf, endpoints: List[Tuple[float, float]], dragging: bool):
        half = max(1, int(round(self.viewport.units_to_pixels(BOB_HALF_SIZE))))
        points = [_safe_point(self.viewport.world_to_screen(p)) for p in endpoints]

        # Rods
        for a, b in zip(points, points[1:]):
            if a is not None and b is not None:
                pygame.draw.line(surf, ROD_COLOR, a, b, 2)

        # Bobs (the anchor has none)
        for i, p in enumerate(points[1:], start=1):
            if p is None:
                continue
            color = DRAG_COLOR if dragging and i == len(points) - 1 else BOB_COLOR
            pygame.draw.rect(surf, color, pygame.Rect(p[0] - half, p[1] - half, 2 * half, 2 * half))

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Snapshot under the lock for consistency during draw
        with self.sim.lock:
            endpoints = self.sim.link_endpoints()
            samples = self.sim.trail_samples() if self.sim.show_trail else []
            dragging = self.sim.interaction_state is InteractionState.DRAGGING
            playing = self.sim.playing
            sim_time = self.sim.sim_time

        if len(samples) > 1:
            self.draw_trail(surf, samples)
        self.draw_chain(surf, endpoints, dragging)

        # HUD text
        draw_text(surf, "Left-drag: swing outer link | Space: Pause/Play", 10, 10, HUD_COLOR)
        draw_text(surf, f"t = {sim_time:7.2f} s  [{'Playing' if playing else 'Paused'}]", 10, 30, HUD_COLOR)

        pygame.display.flip()

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def _safe_point(pt) -> Optional[Tuple[int, int]]:
    # NaN/inf from a degenerate chain state, or anything far off-screen, is not drawn
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

def _fade(color, opacity):
    """Blend color over the background by opacity."""
    a = clamp(opacity, 0.0, 1.0)
    return tuple(int(bg + (c - bg) * a) for c, bg in zip(color, BACKGROUND_COLOR))

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: presets, simulation controls, live readouts.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer

        self.status_msg_id = None
        self.state_text_id = None
        self.time_text_id = None
        self.angles_text_id = None
        self.energy_text_id = None
        self.trail_text_id = None

        self._preset_map = {}

        self._build_ui()

        # Periodic UI sync using frame callbacks (for wider DPG version support)
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback (~10Hz at 60 FPS)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Double Pendulum - Controls', width=420, height=360)

        with dpg.window(label="Controls", width=400, height=340, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                for fn, display in list_presets():
                    self._preset_map[display] = fn
                preset_items = list(self._preset_map.keys())
                default_item = next((d for d, fn in self._preset_map.items() if fn == DEFAULT_PRESET),
                                    preset_items[0] if preset_items else "")
                dpg.add_combo(preset_items, default_value=default_item, width=220, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step ▶", callback=self._step_once)
                dpg.add_button(label="Reset", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Trail", default_value=True, callback=self._toggle_trail)
                dpg.add_button(label="Clear Trail", callback=self._clear_trail)

            dpg.add_separator()

            dpg.add_text("State")
            self.state_text_id = dpg.add_text("Interaction: Free")
            self.time_text_id = dpg.add_text("t = 0.00 s")
            self.angles_text_id = dpg.add_text("")
            self.energy_text_id = dpg.add_text("")
            self.trail_text_id = dpg.add_text("")

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_play(self):
        with self.sim.lock:
            self.sim.playing = not self.sim.playing
            state = "Playing" if self.sim.playing else "Paused"
        self._set_status(f"Simulation {state}.")

    def _step_once(self):
        # The renderer thread owns stepping; queue a single tick for it
        with self.sim.lock:
            self.sim.playing = False
        self.renderer.request_step()
        self._set_status("Stepped one tick.")

    def _toggle_trail(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_trail = bool(value)
        self._set_status(f"Trail {'ON' if value else 'OFF'}.")

    def _clear_trail(self):
        self.sim.clear_trail()
        self._set_status("Trail cleared.")

    def load_preset(self, name: str):
        fn = self._preset_map.get(name.strip())
        if fn is None:
            self.sim.reset()
            return
        preset = load_preset(fn)
        if preset is None:
            self._set_error(f"Preset '{name}' is invalid; see log.")
            return
        self.sim.reset(preset)

    def _sync_ui_with_sim(self):
        """
        Periodic UI update: interaction state, clock, angles, energy, trail size and any
        event message left by the controller.
        """
        with self.sim.lock:
            state = self.sim.interaction_state
            sim_time = self.sim.sim_time
            a1, a2 = self.sim.chain.angles()
            energy = self.sim.energy()
            trail_len = len(self.sim.trail)
            msg = self.sim.last_event_msg
            self.sim.last_event_msg = None

        dpg.set_value(self.state_text_id, f"Interaction: {state.value}")
        dpg.set_value(self.time_text_id, f"t = {sim_time:.2f} s")
        dpg.set_value(self.angles_text_id,
                      f"Angles: {math.degrees(a1):8.2f} deg, {math.degrees(a2):8.2f} deg")
        dpg.set_value(self.energy_text_id, f"Energy: {energy:.4f} J")
        dpg.set_value(self.trail_text_id, f"Trail samples: {trail_len}")
        if msg:
            self._set_status(msg)
        # Reschedule next sync
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def build_default_scene(sim: SimulationController):
    preset = load_preset(DEFAULT_PRESET)
    sim.reset(preset)

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    sim = SimulationController()
    build_default_scene(sim)

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim, renderer)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        # Stop simulation and renderer
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()
