from __future__ import annotations

from typing import Iterable, Sequence

import pygame

from .scene import Circle, Line, Polygon, Polyline, Primitive


def draw_body(
    surface: pygame.Surface,
    position: tuple[float, float],
    radius: float,
    *,
    color: tuple[int, int, int],
) -> None:
    if radius <= 0.0:
        return
    pygame.draw.circle(surface, color, position, max(1.0, radius))


def draw_orbit_line(
    surface: pygame.Surface,
    color: tuple[int, int, int],
    points: Sequence[tuple[float, float]],
    width: int,
    *,
    closed: bool = False,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, closed, points)
    else:
        pygame.draw.lines(surface, color, closed, points, width)
        pygame.draw.aalines(surface, color, closed, points)


def draw_segment(
    surface: pygame.Surface,
    start: tuple[float, float],
    end: tuple[float, float],
    *,
    color: tuple[int, int, int],
    width: int = 1,
) -> None:
    if width <= 1:
        pygame.draw.aaline(surface, color, start, end)
    else:
        pygame.draw.line(surface, color, start, end, width)


def draw_scene(surface: pygame.Surface, primitives: Iterable[Primitive]) -> None:
    for primitive in primitives:
        if isinstance(primitive, Circle):
            draw_body(surface, primitive.center, primitive.radius, color=primitive.color)
        elif isinstance(primitive, Polyline):
            draw_orbit_line(
                surface,
                primitive.color,
                primitive.points,
                primitive.width,
                closed=primitive.closed,
            )
        elif isinstance(primitive, Line):
            draw_segment(
                surface,
                primitive.start,
                primitive.end,
                color=primitive.color,
                width=primitive.width,
            )
        elif isinstance(primitive, Polygon):
            pygame.draw.polygon(surface, primitive.color, primitive.points)
        else:
            raise TypeError(f"Unsupported primitive: {primitive!r}")
