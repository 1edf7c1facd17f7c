"""
Libration viewer
================

Interactive pygame animation of the Moon's optical libration: the Moon runs
along a Keplerian ellipse around Earth while its orientation turns at a
constant rate.
"""
from __future__ import annotations

import argparse
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import Sequence

import pygame
from pygame.locals import DOUBLEBUF, RESIZABLE

from libration.controls import handle_key
from libration.core.config import (
    RENDER_CFG,
    SIM_CFG,
    VARIANTS,
    RenderCfg,
    SimulationCfg,
    config_meta,
    variant_configs,
)
from libration.core.kinematics import OrbitState
from libration.core.logging_utils import RunLogger
from libration.core.model import SimulationState
from libration.render import build_scene, build_text_panel, draw_scene, hud_lines, load_font


def _set_display_mode_with_vsync(size: tuple[int, int], flags: int) -> pygame.Surface:
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except pygame.error as err:
        # Some platforms reject the vsync request even if the keyword is supported.
        try:
            return pygame.display.set_mode(size, flags)
        except pygame.error:
            raise err


def create_display(render_cfg: RenderCfg) -> pygame.Surface:
    """Open the window; raises ``pygame.error`` when no display is available."""

    pygame.display.set_caption(render_cfg.window_title)
    return _set_display_mode_with_vsync(
        (render_cfg.width, render_cfg.height), RESIZABLE | DOUBLEBUF
    )


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    state: SimulationState,
    orbit: OrbitState,
    fps: float,
    render_cfg: RenderCfg,
) -> None:
    lines = [(text, render_cfg.hud_text_color) for text in hud_lines(state, orbit, fps)]
    panel = build_text_panel(font, lines, background_color=render_cfg.hud_background_color)
    surface.blit(panel, (16, 16))


def run(
    screen: pygame.Surface,
    sim_cfg: SimulationCfg = SIM_CFG,
    render_cfg: RenderCfg = RENDER_CFG,
    *,
    log_dir: Path | None = None,
) -> None:
    """Run the event loop until the window is closed."""

    clock = pygame.time.Clock()
    font = load_font(render_cfg.hud_font_names, render_cfg.hud_font_size)
    state = SimulationState.from_config(sim_cfg)
    show_hud = render_cfg.show_hud

    logger: RunLogger | None = None
    if log_dir is not None:
        logger = RunLogger(log_dir)
        logger.write_meta(config_meta(sim_cfg, render_cfg))
        print(f"Recording session to {logger.run_dir}")

    start = time.perf_counter()
    tick_count = 0
    running = True
    try:
        while running:
            # --- Input ---
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    if event.key == pygame.K_h:
                        show_hud = not show_hud
                        continue
                    action = handle_key(state, event.key)
                    if action is not None and logger is not None:
                        logger.log_action(time.perf_counter() - start, action.value, state)

            # --- Tick ---
            now = time.perf_counter()
            state.tick(now)
            orbit = state.orbit()
            if state.playing:
                tick_count += 1
                if logger is not None and tick_count % max(1, sim_cfg.log_every_ticks) == 0:
                    logger.log_sample(now - start, state, orbit)

            # --- Render ---
            screen.fill(render_cfg.background_color)
            draw_scene(screen, build_scene(state, screen.get_size(), render_cfg, orbit=orbit))
            if show_hud:
                draw_hud(screen, font, state, orbit, clock.get_fps(), render_cfg)
            pygame.display.flip()
            clock.tick(sim_cfg.tick_rate_hz)
    finally:
        if logger is not None:
            logger.close()


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x")
        width, height = int(width_text), int(height_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("window size must be positive")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="libration",
        description="Animate the Moon's libration on a Keplerian orbit.",
    )
    parser.add_argument("--variant", choices=VARIANTS, default="full",
                        help="'basic' hides the orientation overlays and the Moon framing toggle")
    parser.add_argument("--period", type=float, default=SIM_CFG.period_seconds,
                        help="seconds per orbit (default: %(default)s)")
    parser.add_argument("--eccentricity", type=float, default=SIM_CFG.initial_eccentricity,
                        help="initial eccentricity, clamped to [0, 0.99]")
    parser.add_argument("--scale", type=float, default=SIM_CFG.initial_scale,
                        help="world units across the smaller window side (default: %(default)s)")
    parser.add_argument("--size", type=parse_size, default=(RENDER_CFG.width, RENDER_CFG.height),
                        help="window size as WIDTHxHEIGHT")
    parser.add_argument("--fps", type=float, default=SIM_CFG.tick_rate_hz,
                        help="tick rate in Hz (default: %(default)s)")
    parser.add_argument("--play", action="store_true", help="start playing immediately")
    parser.add_argument("--log", action="store_true", help="record the session as CSV")
    parser.add_argument("--log-dir", type=Path, default=Path("data") / "runs",
                        help="directory for recorded sessions (default: %(default)s)")
    return parser


def configs_from_args(args: argparse.Namespace) -> tuple[SimulationCfg, RenderCfg]:
    sim_cfg = replace(
        SIM_CFG,
        period_seconds=args.period,
        initial_eccentricity=args.eccentricity,
        initial_scale=args.scale,
        tick_rate_hz=args.fps,
        start_playing=args.play,
    )
    width, height = args.size
    render_cfg = replace(RENDER_CFG, width=width, height=height)
    return variant_configs(args.variant, sim_cfg, render_cfg)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        sim_cfg, render_cfg = configs_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    pygame.init()
    try:
        screen = create_display(render_cfg)
    except pygame.error as exc:
        print(f"libration: cannot initialise display: {exc}", file=sys.stderr)
        pygame.quit()
        return 1

    try:
        run(screen, sim_cfg, render_cfg, log_dir=args.log_dir if args.log else None)
    except KeyboardInterrupt:
        # Ctrl+C ends the session like closing the window.
        return 0
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
