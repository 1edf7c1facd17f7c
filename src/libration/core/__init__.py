"""Simulation core: configuration, Kepler kinematics and state machine."""

from .config import RENDER_CFG, SIM_CFG, RenderCfg, SimulationCfg, variant_configs
from .kinematics import (
    KeplerConvergenceError,
    OrbitPath,
    OrbitState,
    sample_orbit_path,
    solve_kepler,
    solve_moon_position,
)
from .model import SimulationState

__all__ = [
    "KeplerConvergenceError",
    "OrbitPath",
    "OrbitState",
    "RENDER_CFG",
    "RenderCfg",
    "SIM_CFG",
    "SimulationCfg",
    "SimulationState",
    "sample_orbit_path",
    "solve_kepler",
    "solve_moon_position",
    "variant_configs",
]
