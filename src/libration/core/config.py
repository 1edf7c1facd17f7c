"""Configuration dataclasses for the libration viewer."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True)
class SimulationCfg:
    period_seconds: float = 8.0
    initial_scale: float = 100.0
    initial_eccentricity: float = 0.0
    start_playing: bool = False
    moon_orbit_radius: float = 40.0
    eccentricity_step: float = 0.1
    min_eccentricity: float = 0.0
    max_eccentricity: float = 0.99
    zoom_factor: float = 1.1
    min_scale: float = 1.0
    max_scale: float = 100_000.0
    kepler_tolerance: float = 1e-10
    kepler_max_iterations: int = 100
    orbit_sample_step: float = 0.01
    tick_rate_hz: float = 33.0
    center_on_moon_enabled: bool = True
    log_every_ticks: int = 10

    def __post_init__(self) -> None:
        if not self.period_seconds > 0.0:
            raise ValueError(f"period_seconds must be positive. Got: {self.period_seconds}")
        if not self.initial_scale > 0.0:
            raise ValueError(f"initial_scale must be positive. Got: {self.initial_scale}")
        if not 0.0 < self.min_scale <= self.max_scale:
            raise ValueError("Scale bounds must satisfy 0 < min_scale <= max_scale.")
        if not 0.0 <= self.min_eccentricity <= self.max_eccentricity < 1.0:
            raise ValueError(
                "Eccentricity bounds must satisfy 0 <= min_eccentricity <= max_eccentricity < 1."
            )
        if not self.orbit_sample_step > 0.0 or not math.isfinite(self.orbit_sample_step):
            raise ValueError(f"orbit_sample_step must be positive. Got: {self.orbit_sample_step}")
        if not self.tick_rate_hz > 0.0:
            raise ValueError(f"tick_rate_hz must be positive. Got: {self.tick_rate_hz}")

    @property
    def tick_interval_ms(self) -> int:
        return max(1, int(round(1000.0 / self.tick_rate_hz)))


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    background_color: tuple[int, int, int] = (0, 0, 0)
    earth_radius: float = 5.0
    earth_color: tuple[int, int, int] = (0, 255, 255)
    moon_radius: float = 1.5
    moon_color: tuple[int, int, int] = (178, 178, 178)
    orbit_color: tuple[int, int, int] = (178, 178, 178)
    orbit_line_width: int = 1
    indicator_length: float = 20.0
    indicator_arrow_size: float = 2.0
    indicator_color: tuple[int, int, int] = (204, 0, 0)
    earth_moon_line_color: tuple[int, int, int] = (127, 255, 255)
    show_orientation_indicator: bool = True
    show_earth_moon_line: bool = True
    show_hud: bool = True
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, 160)
    hud_font_names: tuple[str, ...] = ("consolas", "dejavusansmono", "couriernew")
    hud_font_size: int = 16
    window_title: str = "Libracja Księżyca"


VARIANTS = ("full", "basic")


def variant_configs(
    variant: str,
    sim_cfg: SimulationCfg | None = None,
    render_cfg: RenderCfg | None = None,
) -> tuple[SimulationCfg, RenderCfg]:
    """Return config pair with the feature set of *variant* switched on or off."""

    if variant not in VARIANTS:
        raise ValueError(f"Unknown variant {variant!r}; expected one of {VARIANTS}")
    sim_cfg = sim_cfg or SIM_CFG
    render_cfg = render_cfg or RENDER_CFG
    enabled = variant == "full"
    return (
        replace(sim_cfg, center_on_moon_enabled=enabled),
        replace(
            render_cfg,
            show_orientation_indicator=enabled,
            show_earth_moon_line=enabled,
        ),
    )


def config_meta(sim_cfg: SimulationCfg, render_cfg: RenderCfg) -> dict:
    return {"simulation": asdict(sim_cfg), "render": asdict(render_cfg)}


SIM_CFG = SimulationCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "RENDER_CFG",
    "SIM_CFG",
    "VARIANTS",
    "RenderCfg",
    "SimulationCfg",
    "config_meta",
    "variant_configs",
]
