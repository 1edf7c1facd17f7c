"""Keplerian kinematics of the Moon on a focus-centred ellipse."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .config import SIM_CFG

TWO_PI = 2.0 * math.pi

Point = tuple[float, float]
Segment = tuple[Point, Point]


class KeplerConvergenceError(RuntimeError):
    """Raised when both Newton-Raphson starts hit the iteration cap."""


@dataclass(frozen=True)
class OrbitState:
    """Derived orbital quantities for one instant."""

    mean_anomaly: float
    eccentric_anomaly: float
    true_anomaly: float
    orbital_radius: float
    position: Point

    @property
    def libration(self) -> float:
        """Optical libration in longitude, ``true - mean`` wrapped to (-pi, pi]."""

        return wrap_to_pi(self.true_anomaly - self.mean_anomaly)


def wrap_to_pi(angle: float) -> float:
    wrapped = math.fmod(angle + math.pi, TWO_PI)
    if wrapped <= 0.0:
        wrapped += TWO_PI
    return wrapped - math.pi


def mean_anomaly_from_phase(phase: float) -> float:
    """Map orbital phase to mean anomaly in (-pi, pi]."""

    mean_anomaly = phase * TWO_PI
    if mean_anomaly > math.pi:
        mean_anomaly -= TWO_PI
    return mean_anomaly


def _newton_kepler(mean_anomaly, eccentricity, ecc_anom, tol, max_iterations):
    for _ in range(max_iterations):
        f = ecc_anom - eccentricity * math.sin(ecc_anom) - mean_anomaly
        df = 1.0 - eccentricity * math.cos(ecc_anom)
        step = f / df
        ecc_anom -= step
        if abs(step) <= tol:
            return ecc_anom
    return None


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tol: float = SIM_CFG.kepler_tolerance,
    max_iterations: int = SIM_CFG.kepler_max_iterations,
) -> float:
    """
    Solve Kepler's equation ``E - e sin(E) = M`` for the eccentric anomaly.

    Newton-Raphson starting from ``E = M``; stops after the first Newton step
    no larger than *tol*. Near periapsis at high eccentricity that guess can
    bounce around the root for hundreds of steps, so when it runs out of
    iterations the solve restarts from ``E = +/-pi`` (sign of *M*), from
    where Newton's method approaches the root monotonically.
    """
    if not (0.0 <= eccentricity < 1.0):
        raise ValueError(f"Kepler solver requires 0 <= e < 1. Got: {eccentricity}")

    ecc_anom = _newton_kepler(mean_anomaly, eccentricity, mean_anomaly, tol, max_iterations)
    if ecc_anom is None:
        ecc_anom = _newton_kepler(
            mean_anomaly, eccentricity, math.copysign(math.pi, mean_anomaly), tol, max_iterations
        )
    if ecc_anom is None:
        raise KeplerConvergenceError(
            f"Kepler solver did not converge in {max_iterations} iterations "
            f"(M={mean_anomaly!r}, e={eccentricity!r})"
        )
    return ecc_anom


def true_anomaly_from_eccentric(eccentric_anomaly: float, eccentricity: float) -> float:
    return math.atan2(
        math.sqrt(1.0 - eccentricity * eccentricity) * math.sin(eccentric_anomaly),
        math.cos(eccentric_anomaly) - eccentricity,
    )


def orbital_radius(p: float, phi: float, eccentricity: float) -> float:
    """Conic radius law about the focus: ``r = p / (1 + e cos(phi))``."""

    return p / (1.0 + eccentricity * math.cos(phi))


def polar_to_xy(r: float, phi: float) -> Point:
    """Project to drawing coordinates with periapsis on the negative x axis."""

    return -r * math.cos(phi), r * math.sin(phi)


def solve_moon_position(
    phase: float,
    eccentricity: float,
    p: float = SIM_CFG.moon_orbit_radius,
    *,
    tol: float = SIM_CFG.kepler_tolerance,
    max_iterations: int = SIM_CFG.kepler_max_iterations,
) -> OrbitState:
    mean_anomaly = mean_anomaly_from_phase(phase)
    ecc_anom = solve_kepler(mean_anomaly, eccentricity, tol, max_iterations)
    true_anom = true_anomaly_from_eccentric(ecc_anom, eccentricity)
    r = orbital_radius(p, true_anom, eccentricity)
    return OrbitState(
        mean_anomaly=mean_anomaly,
        eccentric_anomaly=ecc_anom,
        true_anomaly=true_anom,
        orbital_radius=r,
        position=polar_to_xy(r, true_anom),
    )


class OrbitPath:
    """Closed orbit outline sampled at fixed angular steps.

    Iterating yields ``(start, end)`` segments; every iteration starts over.
    """

    def __init__(self, eccentricity: float, p: float, step: float) -> None:
        if step <= 0.0:
            raise ValueError(f"step must be positive. Got: {step}")
        self.eccentricity = eccentricity
        self.p = p
        self.step = step

    def angles(self) -> np.ndarray:
        starts = np.arange(0.0, TWO_PI, self.step, dtype=float)
        return np.append(starts, starts[-1] + self.step)

    def points(self) -> np.ndarray:
        phi = self.angles()
        r = self.p / (1.0 + self.eccentricity * np.cos(phi))
        return np.column_stack((-r * np.cos(phi), r * np.sin(phi)))

    def polyline(self) -> list[Point]:
        return [(float(x), float(y)) for x, y in self.points()]

    def __len__(self) -> int:
        return len(self.angles()) - 1

    def __iter__(self) -> Iterator[Segment]:
        vertices = self.polyline()
        for start, end in zip(vertices, vertices[1:]):
            yield start, end


def sample_orbit_path(
    eccentricity: float,
    p: float = SIM_CFG.moon_orbit_radius,
    step: float = SIM_CFG.orbit_sample_step,
) -> OrbitPath:
    return OrbitPath(eccentricity, p, step)


__all__ = [
    "KeplerConvergenceError",
    "OrbitPath",
    "OrbitState",
    "TWO_PI",
    "mean_anomaly_from_phase",
    "orbital_radius",
    "polar_to_xy",
    "sample_orbit_path",
    "solve_kepler",
    "solve_moon_position",
    "true_anomaly_from_eccentric",
    "wrap_to_pi",
]
