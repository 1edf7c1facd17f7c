from __future__ import annotations

import numpy as np


class Camera:
    """Maps world units to screen pixels.

    The world origin (Earth) sits at the viewport centre unless a different
    focus is set. Screen y grows downward and world y is not flipped.
    """

    def __init__(
        self,
        size: tuple[int, int],
        scale: float,
        *,
        focus: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        if scale <= 0.0:
            raise ValueError(f"Camera scale must be positive. Got: {scale}")
        self._size = size
        self._focus = np.array(focus, dtype=float)
        self._pixels_per_unit = min(size) / scale

    @classmethod
    def for_view(
        cls,
        size: tuple[int, int],
        scale: float,
        moon_position: tuple[float, float],
        center_on_moon: bool,
    ) -> "Camera":
        focus = moon_position if center_on_moon else (0.0, 0.0)
        return cls(size, scale, focus=focus)

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def focus(self) -> np.ndarray:
        return self._focus

    @property
    def pixels_per_unit(self) -> float:
        return self._pixels_per_unit

    def screen_center(self) -> tuple[float, float]:
        width, height = self._size
        return width / 2.0, height / 2.0

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        cx, cy = self.screen_center()
        fx, fy = self._focus
        ppu = self._pixels_per_unit
        return cx + (x - fx) * ppu, cy + (y - fy) * ppu

    def world_to_screen_many(self, points: np.ndarray) -> np.ndarray:
        center = np.array(self.screen_center(), dtype=float)
        return center + (points - self._focus) * self._pixels_per_unit

    def length_to_screen(self, length: float) -> float:
        return length * self._pixels_per_unit
