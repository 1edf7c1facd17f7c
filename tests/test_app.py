import argparse
import csv

import pygame
import pytest

from libration import app


def test_parse_size():
    assert app.parse_size("640x480") == (640, 480)
    assert app.parse_size("800X600") == (800, 600)
    for bad in ("640", "axb", "0x10", "-5x5"):
        with pytest.raises(argparse.ArgumentTypeError):
            app.parse_size(bad)


def test_configs_from_args_basic_variant():
    args = app.build_parser().parse_args(
        ["--variant", "basic", "--period", "4", "--eccentricity", "0.3", "--size", "640x480", "--play"]
    )
    sim_cfg, render_cfg = app.configs_from_args(args)
    assert sim_cfg.period_seconds == 4.0
    assert sim_cfg.initial_eccentricity == 0.3
    assert sim_cfg.start_playing is True
    assert not sim_cfg.center_on_moon_enabled
    assert (render_cfg.width, render_cfg.height) == (640, 480)
    assert not render_cfg.show_orientation_indicator


def test_defaults_are_full_variant():
    sim_cfg, render_cfg = app.configs_from_args(app.build_parser().parse_args([]))
    assert sim_cfg.center_on_moon_enabled
    assert render_cfg.show_earth_moon_line


def test_invalid_period_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--period", "0"])
    assert excinfo.value.code == 2


def test_display_failure_is_fatal(monkeypatch, capsys):
    def fail(render_cfg):
        raise pygame.error("no video device")

    monkeypatch.setattr(app, "create_display", fail)
    assert app.main([]) == 1
    assert "no video device" in capsys.readouterr().err


def test_run_processes_keys_until_quit(display, tmp_path):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_e))
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app.run(display, log_dir=tmp_path)

    run_id = (tmp_path / "last_run.txt").read_text(encoding="utf-8")
    with (tmp_path / run_id / "events.csv").open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert [row["type"] for row in rows] == ["toggle_play", "eccentricity_up"]
    assert rows[1]["e"] == "0.1"
    assert (tmp_path / run_id / "meta.json").exists()


def test_run_quits_on_escape(display):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    app.run(display)


def test_ctrl_c_during_session_exits_cleanly(monkeypatch):
    quits = []

    def interrupted(screen, sim_cfg, render_cfg, *, log_dir=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(app, "create_display", lambda render_cfg: pygame.Surface((10, 10)))
    monkeypatch.setattr(app, "run", interrupted)
    monkeypatch.setattr(app.pygame, "quit", lambda: quits.append(True))
    assert app.main([]) == 0
    assert quits == [True]
