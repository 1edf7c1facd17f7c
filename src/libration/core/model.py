"""Mutable simulation state for the libration viewer."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .config import SIM_CFG, SimulationCfg
from .kinematics import OrbitState, solve_moon_position


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


@dataclass
class SimulationState:
    """Playback, orbit shape and framing; owned by the event loop.

    Every event is accepted in every mode. Events that make no sense in the
    current mode (ticking while paused) are no-ops.
    """

    playing: bool = False
    scale: float = SIM_CFG.initial_scale
    phase: float = 0.0
    period_seconds: float = SIM_CFG.period_seconds
    eccentricity: float = SIM_CFG.initial_eccentricity
    last_tick: float | None = None
    center_on_moon: bool = False
    center_on_moon_enabled: bool = SIM_CFG.center_on_moon_enabled
    cfg: SimulationCfg = SIM_CFG

    @classmethod
    def from_config(cls, cfg: SimulationCfg = SIM_CFG) -> "SimulationState":
        return cls(
            playing=cfg.start_playing,
            scale=clamp(cfg.initial_scale, cfg.min_scale, cfg.max_scale),
            period_seconds=cfg.period_seconds,
            eccentricity=clamp(
                cfg.initial_eccentricity, cfg.min_eccentricity, cfg.max_eccentricity
            ),
            center_on_moon_enabled=cfg.center_on_moon_enabled,
            cfg=cfg,
        )

    @property
    def mode(self) -> str:
        return "playing" if self.playing else "paused"

    def tick(self, now: float) -> float:
        """Advance phase by the wall-clock time since the previous tick.

        Returns the phase increment that was applied.
        """
        if not self.playing:
            return 0.0
        delta = 0.0
        if self.last_tick is not None:
            delta = (now - self.last_tick) / self.period_seconds
            self.phase += delta
            # Only the upper bound is wrapped; negative phase is left as is.
            if self.phase >= 1.0:
                self.phase -= math.floor(self.phase)
        self.last_tick = now
        return delta

    def toggle_play(self) -> None:
        self.playing = not self.playing
        if not self.playing:
            self.last_tick = None

    def adjust_eccentricity(self, delta: float) -> None:
        value = round(self.eccentricity + delta, 10)
        self.eccentricity = clamp(value, self.cfg.min_eccentricity, self.cfg.max_eccentricity)

    def adjust_scale(self, factor: float) -> None:
        self.scale = clamp(self.scale * factor, self.cfg.min_scale, self.cfg.max_scale)

    def toggle_center_on_moon(self) -> None:
        if self.center_on_moon_enabled:
            self.center_on_moon = not self.center_on_moon

    def orbit(self) -> OrbitState:
        return solve_moon_position(
            self.phase,
            self.eccentricity,
            self.cfg.moon_orbit_radius,
            tol=self.cfg.kepler_tolerance,
            max_iterations=self.cfg.kepler_max_iterations,
        )


__all__ = ["SimulationState", "clamp"]
