from __future__ import annotations

import math
from typing import Sequence

import pygame

from libration.controls import KEY_HELP
from libration.core.kinematics import OrbitState
from libration.core.model import SimulationState

from .assets import Color, get_text_surface


def hud_lines(
    state: SimulationState,
    orbit: OrbitState,
    fps: float | None = None,
    *,
    show_help: bool = True,
) -> list[str]:
    """Text rows for the heads-up display."""

    lines = [
        f"{'PLAYING' if state.playing else 'PAUSED'}   period {state.period_seconds:g} s",
        f"phase      {state.phase:6.3f}",
        f"e          {state.eccentricity:6.2f}",
        f"libration  {math.degrees(orbit.libration):+7.2f} deg",
        f"scale      {state.scale:8.2f}",
    ]
    if state.center_on_moon_enabled:
        lines.append(f"frame      {'Moon' if state.center_on_moon else 'Earth'}")
    if fps is not None:
        lines.append(f"fps        {fps:6.1f}")
    if show_help:
        lines.append("")
        for key, description in KEY_HELP:
            if key == "C" and not state.center_on_moon_enabled:
                continue
            lines.append(f"{key:<7}{description}")
    return lines


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    background_color: Color,
    padding: tuple[int, int] = (12, 10),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(font.size(text)[0] for text, _ in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=10,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    return panel_surface
