"""Rendering helpers for the libration viewer."""

from .camera import Camera
from .assets import get_text_surface, load_font
from .draw import draw_body, draw_orbit_line, draw_scene, draw_segment
from .scene import Circle, Line, Polygon, Polyline, build_scene, indicator_geometry
from .ui import build_text_panel, hud_lines

__all__ = [
    "Camera",
    "Circle",
    "Line",
    "Polygon",
    "Polyline",
    "build_scene",
    "build_text_panel",
    "draw_body",
    "draw_orbit_line",
    "draw_scene",
    "draw_segment",
    "get_text_surface",
    "hud_lines",
    "indicator_geometry",
    "load_font",
]
