"""Analyze a recorded libration session and generate figures."""
from __future__ import annotations

import argparse
import csv
import math
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
DEFAULT_RUNS_DIR = Path("data") / "runs"


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            events.append(
                {
                    "t": float(row["t"]),
                    "type": row["type"],
                    "phase": float(row["phase"]),
                    "e": float(row["e"]),
                    "details": row.get("details") or "",
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def peak_libration_deg(ts: Dict[str, np.ndarray]) -> float:
    libration = ts.get("libration", np.array([]))
    if not libration.size:
        return 0.0
    return float(np.degrees(np.max(np.abs(libration))))


def plot_anomalies(fig_dir: Path, ts: Dict[str, np.ndarray]) -> Path:
    order = np.argsort(ts["phase"])
    phase = ts["phase"][order]
    fig, ax = plt.subplots(figsize=(7, 4.5))
    ax.plot(phase, ts["mean_anomaly"][order], ".", markersize=2, label="mean anomaly M")
    ax.plot(phase, ts["eccentric_anomaly"][order], ".", markersize=2, label="eccentric anomaly E")
    ax.plot(phase, ts["true_anomaly"][order], ".", markersize=2, label="true anomaly ν")
    ax.set_xlabel("phase")
    ax.set_ylabel("angle [rad]")
    ax.set_title("Anomalies over one period")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")
    fig.tight_layout()
    out = fig_dir / "anomalies.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def plot_libration(fig_dir: Path, ts: Dict[str, np.ndarray]) -> Path:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], np.degrees(ts["libration"]), lw=1.2)
    ax.axhline(0.0, color="gray", lw=0.8, alpha=0.6)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("libration in longitude [deg]")
    ax.set_title("Optical libration")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    out = fig_dir / "libration.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def plot_orbit(fig_dir: Path, ts: Dict[str, np.ndarray]) -> Path:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["x"], ts["y"], ".", markersize=2, label="Moon")
    ax.plot(0, 0, "o", color="tab:cyan", label="Earth")
    ax.set_aspect("equal", "box")
    ax.invert_yaxis()
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Recorded Moon positions")
    ax.legend(loc="upper right")
    fig.tight_layout()
    out = fig_dir / "orbit.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def print_summary(
    run_path: Path,
    ts: Dict[str, np.ndarray],
    event_summary: Dict[str, int],
) -> None:
    eccentricities = sorted({round(float(e), 2) for e in ts.get("e", np.array([]))})
    print(f"Run: {run_path}")
    print(f" Samples: {len(ts.get('t', []))}")
    print(" Eccentricities: " + (", ".join(f"{e:.2f}" for e in eccentricities) or "none"))
    print(f" Peak |libration|: {peak_libration_deg(ts):.2f} deg")
    if eccentricities:
        e_max = max(eccentricities)
        # First-order amplitude of the optical libration in longitude: 2e rad.
        print(f" First-order estimate for e={e_max:.2f}: {math.degrees(2.0 * e_max):.2f} deg")
    print(
        " Events:"
        + (", ".join(f" {etype}: {count}" for etype, count in sorted(event_summary.items())) or " none")
    )


def resolve_run_dir(run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
        return run_path
    last_run_file = base_runs_dir / "last_run.txt"
    if not last_run_file.exists():
        raise FileNotFoundError("No run given and last_run.txt is missing.")
    return base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded session and write figures.")
    parser.add_argument("run_dir", nargs="?", help="path or id of a recorded run")
    parser.add_argument("--runs-dir", type=Path, default=DEFAULT_RUNS_DIR,
                        help="directory holding recorded runs (default: %(default)s)")
    args = parser.parse_args(argv)

    try:
        run_path = resolve_run_dir(args.run_dir, args.runs_dir)
    except FileNotFoundError as exc:
        parser.error(str(exc))

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing timeseries.csv or events.csv.")

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or not ts.get("t", np.array([])).size:
        parser.error("timeseries.csv is empty; nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_anomalies(fig_dir, ts)
    plot_libration(fig_dir, ts)
    plot_orbit(fig_dir, ts)

    print_summary(run_path, ts, summarize_events(events))


if __name__ == "__main__":
    main()
