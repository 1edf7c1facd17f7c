"""Per-frame primitive list built from the simulation state."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from libration.core.config import RENDER_CFG, RenderCfg
from libration.core.kinematics import OrbitState, TWO_PI, sample_orbit_path
from libration.core.model import SimulationState

from .camera import Camera

ScreenPoint = tuple[float, float]
Color = tuple[int, int, int]


@dataclass(frozen=True)
class Circle:
    center: ScreenPoint
    radius: float
    color: Color
    tag: str = ""


@dataclass(frozen=True)
class Polyline:
    points: tuple[ScreenPoint, ...]
    color: Color
    width: int = 1
    closed: bool = False
    tag: str = ""


@dataclass(frozen=True)
class Line:
    start: ScreenPoint
    end: ScreenPoint
    color: Color
    width: int = 1
    tag: str = ""


@dataclass(frozen=True)
class Polygon:
    points: tuple[ScreenPoint, ...]
    color: Color
    tag: str = ""


Primitive = Union[Circle, Polyline, Line, Polygon]


def _rotate(x: float, y: float, angle: float) -> tuple[float, float]:
    c = math.cos(angle)
    s = math.sin(angle)
    return x * c - y * s, x * s + y * c


def indicator_geometry(
    moon_position: tuple[float, float],
    phase: float,
    length: float,
    arrow_size: float,
) -> tuple[tuple[float, float], tuple[tuple[float, float], ...]]:
    """Tip of the orientation arrow and its head triangle, in world units.

    The arrow points along +x in the Moon's body frame, which turns by
    ``-phase * 2pi`` over one period (synchronous rotation).
    """
    angle = -phase * TWO_PI
    mx, my = moon_position
    local_head = (
        (length, 0.0),
        (length - arrow_size, arrow_size / 2.0),
        (length - arrow_size, -arrow_size / 2.0),
    )
    head = tuple(
        (mx + rx, my + ry) for rx, ry in (_rotate(px, py, angle) for px, py in local_head)
    )
    return head[0], head


def build_scene(
    state: SimulationState,
    viewport_size: tuple[int, int],
    render_cfg: RenderCfg = RENDER_CFG,
    *,
    orbit: OrbitState | None = None,
) -> list[Primitive]:
    """Return drawable primitives in paint order, in screen pixels."""

    cfg = state.cfg
    orbit = orbit or state.orbit()
    camera = Camera.for_view(viewport_size, state.scale, orbit.position, state.center_on_moon)
    moon = camera.world_to_screen(*orbit.position)
    origin = camera.world_to_screen(0.0, 0.0)

    primitives: list[Primitive] = []

    if render_cfg.show_earth_moon_line:
        primitives.append(Line(origin, moon, render_cfg.earth_moon_line_color, tag="earth_moon_line"))

    primitives.append(
        Circle(
            origin,
            camera.length_to_screen(render_cfg.earth_radius),
            render_cfg.earth_color,
            tag="earth",
        )
    )

    path = sample_orbit_path(state.eccentricity, cfg.moon_orbit_radius, cfg.orbit_sample_step)
    screen_points = camera.world_to_screen_many(path.points())
    primitives.append(
        Polyline(
            tuple((float(x), float(y)) for x, y in screen_points),
            render_cfg.orbit_color,
            render_cfg.orbit_line_width,
            closed=True,
            tag="orbit",
        )
    )

    if render_cfg.show_orientation_indicator:
        tip, head = indicator_geometry(
            orbit.position,
            state.phase,
            render_cfg.indicator_length,
            render_cfg.indicator_arrow_size,
        )
        primitives.append(
            Line(moon, camera.world_to_screen(*tip), render_cfg.indicator_color, tag="indicator")
        )
        primitives.append(
            Polygon(
                tuple(camera.world_to_screen(*p) for p in head),
                render_cfg.indicator_color,
                tag="indicator_head",
            )
        )

    primitives.append(
        Circle(
            moon,
            camera.length_to_screen(render_cfg.moon_radius),
            render_cfg.moon_color,
            tag="moon",
        )
    )
    return primitives


__all__ = [
    "Circle",
    "Line",
    "Polygon",
    "Polyline",
    "Primitive",
    "build_scene",
    "indicator_geometry",
]
