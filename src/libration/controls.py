"""Keyboard vocabulary and its effect on the simulation state."""
from __future__ import annotations

from enum import Enum

import pygame

from .core.model import SimulationState


class Action(str, Enum):
    TOGGLE_PLAY = "toggle_play"
    ECCENTRICITY_UP = "eccentricity_up"
    ECCENTRICITY_DOWN = "eccentricity_down"
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    TOGGLE_CENTER = "toggle_center"


KEY_BINDINGS: dict[int, Action] = {
    pygame.K_SPACE: Action.TOGGLE_PLAY,
    pygame.K_e: Action.ECCENTRICITY_UP,
    pygame.K_q: Action.ECCENTRICITY_DOWN,
    pygame.K_z: Action.ZOOM_IN,
    pygame.K_x: Action.ZOOM_OUT,
    pygame.K_c: Action.TOGGLE_CENTER,
}

KEY_HELP: tuple[tuple[str, str], ...] = (
    ("Space", "play / pause"),
    ("E / Q", "eccentricity +/-"),
    ("Z / X", "zoom in / out"),
    ("C", "center on Moon"),
    ("H", "toggle HUD"),
    ("Esc", "quit"),
)


def apply_action(state: SimulationState, action: Action) -> None:
    step = state.cfg.eccentricity_step
    zoom = state.cfg.zoom_factor
    if action is Action.TOGGLE_PLAY:
        state.toggle_play()
    elif action is Action.ECCENTRICITY_UP:
        state.adjust_eccentricity(step)
    elif action is Action.ECCENTRICITY_DOWN:
        state.adjust_eccentricity(-step)
    elif action is Action.ZOOM_IN:
        state.adjust_scale(1.0 / zoom)
    elif action is Action.ZOOM_OUT:
        state.adjust_scale(zoom)
    elif action is Action.TOGGLE_CENTER:
        state.toggle_center_on_moon()


def handle_key(state: SimulationState, key: int) -> Action | None:
    """Apply the action bound to *key*; unbound keys are ignored."""

    action = KEY_BINDINGS.get(key)
    if action is None:
        return None
    if action is Action.TOGGLE_CENTER and not state.center_on_moon_enabled:
        return None
    apply_action(state, action)
    return action


__all__ = ["Action", "KEY_BINDINGS", "KEY_HELP", "apply_action", "handle_key"]
