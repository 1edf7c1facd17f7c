# Kepler solver, radius law and orbit sampling
import math

import numpy as np
import pytest

from libration.core.kinematics import (
    KeplerConvergenceError,
    mean_anomaly_from_phase,
    orbital_radius,
    polar_to_xy,
    sample_orbit_path,
    solve_kepler,
    solve_moon_position,
    true_anomaly_from_eccentric,
    wrap_to_pi,
)

P = 40.0


def bisect_kepler(M, e, tol=1e-14):
    lo, hi = -math.pi - 1.0, math.pi + 1.0
    while hi - lo > tol:
        mid = 0.5 * (lo + hi)
        if mid - e * math.sin(mid) - M > 0.0:
            hi = mid
        else:
            lo = mid
    return 0.5 * (lo + hi)


@pytest.mark.parametrize("e", np.linspace(0.0, 0.99, 12))
def test_radius_positive_and_finite(e):
    for phi in np.linspace(0.0, 2.0 * math.pi, 73):
        r = orbital_radius(P, phi, e)
        assert math.isfinite(r)
        assert r > 0.0


def test_mean_anomaly_normalized():
    assert mean_anomaly_from_phase(0.0) == 0.0
    assert math.isclose(mean_anomaly_from_phase(0.25), math.pi / 2)
    assert math.isclose(mean_anomaly_from_phase(0.5), math.pi)
    assert math.isclose(mean_anomaly_from_phase(0.75), -math.pi / 2)
    for phase in np.linspace(0.0, 0.999, 100):
        M = mean_anomaly_from_phase(phase)
        assert -math.pi < M <= math.pi


def test_circular_orbit_identity():
    # If e=0, E = nu = M
    for phase in np.linspace(0.0, 0.999, 50):
        orbit = solve_moon_position(phase, 0.0, P)
        assert abs(orbit.eccentric_anomaly - orbit.mean_anomaly) < 1e-8
        assert abs(orbit.true_anomaly - orbit.mean_anomaly) < 1e-8
        assert math.isclose(orbit.orbital_radius, P)


@pytest.mark.parametrize("e", [0.1, 0.3, 0.5, 0.7, 0.9, 0.99])
def test_kepler_round_trip(e):
    for M in np.linspace(-math.pi, math.pi, 41):
        E = solve_kepler(M, e)
        assert abs((E - e * math.sin(E)) - M) <= 1e-10


@pytest.mark.parametrize("e", [0.98, 0.99])
def test_dense_phase_sweep_at_high_eccentricity(e):
    # Near periapsis the E = M start needs the pi restart to stay under the cap.
    for phase in np.linspace(0.0, 1.0, 100_001):
        orbit = solve_moon_position(phase, e, P)
        E = orbit.eccentric_anomaly
        assert abs((E - e * math.sin(E)) - orbit.mean_anomaly) <= 1e-10


def test_restart_from_pi_converges_where_first_start_stalls():
    M = -0.15707963267947367
    E = solve_kepler(M, 0.99)
    assert abs((E - 0.99 * math.sin(E)) - M) <= 1e-10
    assert E < 0.0


def test_concrete_scenario_half_eccentricity_quarter_phase():
    orbit = solve_moon_position(0.25, 0.5, P)
    assert math.isclose(orbit.mean_anomaly, math.pi / 2)
    expected = bisect_kepler(math.pi / 2, 0.5)
    assert abs(orbit.eccentric_anomaly - expected) < 1e-9
    assert abs(orbit.eccentric_anomaly - 2.021) < 1e-3
    residual = orbit.eccentric_anomaly - 0.5 * math.sin(orbit.eccentric_anomaly) - math.pi / 2
    assert abs(residual) <= 1e-10


def test_true_anomaly_matches_radius_from_eccentric_anomaly():
    # r = a (1 - e cos E) with a = p / (1 - e^2)
    e = 0.6
    for phase in (0.05, 0.2, 0.4, 0.6, 0.9):
        orbit = solve_moon_position(phase, e, P)
        a = P / (1.0 - e * e)
        assert math.isclose(
            orbit.orbital_radius, a * (1.0 - e * math.cos(orbit.eccentric_anomaly)), rel_tol=1e-9
        )


def test_true_anomaly_at_apsides():
    assert math.isclose(true_anomaly_from_eccentric(0.0, 0.5), 0.0, abs_tol=1e-15)
    assert math.isclose(true_anomaly_from_eccentric(math.pi, 0.5), math.pi)


def test_periapsis_faces_negative_x():
    orbit = solve_moon_position(0.0, 0.5, P)
    x, y = orbit.position
    assert math.isclose(x, -P / 1.5)
    assert y == 0.0


def test_projection_sign_convention():
    x, y = polar_to_xy(2.0, math.pi / 2)
    assert abs(x) < 1e-12
    assert math.isclose(y, 2.0)


def test_libration_positive_after_periapsis():
    orbit = solve_moon_position(0.1, 0.5, P)
    assert orbit.true_anomaly > orbit.mean_anomaly
    assert orbit.libration > 0.0
    assert solve_moon_position(0.9, 0.5, P).libration < 0.0


def test_libration_zero_for_circular_orbit():
    for phase in np.linspace(0.0, 0.99, 20):
        assert abs(solve_moon_position(phase, 0.0, P).libration) < 1e-12


def test_wrap_to_pi():
    assert math.isclose(wrap_to_pi(math.pi), math.pi)
    assert math.isclose(wrap_to_pi(-math.pi), math.pi)
    assert math.isclose(wrap_to_pi(3 * math.pi / 2), -math.pi / 2)
    assert math.isclose(wrap_to_pi(-3 * math.pi / 2), math.pi / 2)
    assert wrap_to_pi(0.0) == 0.0


def test_solver_rejects_non_elliptic_eccentricity():
    with pytest.raises(ValueError):
        solve_kepler(1.0, 1.0)
    with pytest.raises(ValueError):
        solve_kepler(1.0, -0.1)


def test_solver_iteration_cap():
    with pytest.raises(KeplerConvergenceError):
        solve_kepler(2.0, 0.9, max_iterations=1)


def test_circular_orbit_path_has_constant_radius():
    pts = sample_orbit_path(0.0, P).points()
    radii = np.hypot(pts[:, 0], pts[:, 1])
    assert np.allclose(radii, P, atol=1e-9)


def test_orbit_path_segments_are_connected_and_restartable():
    path = sample_orbit_path(0.4, P, 0.01)
    first = list(path)
    second = list(path)
    assert first == second
    assert len(first) == len(path) == math.ceil(2 * math.pi / 0.01)
    for (_, end), (start, _) in zip(first, first[1:]):
        assert end == start


def test_orbit_path_closes_the_loop():
    step = 0.01
    path = sample_orbit_path(0.0, P, step)
    segments = list(path)
    first_start = np.array(segments[0][0])
    last_end = np.array(segments[-1][1])
    assert np.linalg.norm(last_end - first_start) <= P * step


def test_orbit_path_matches_scalar_radius_law():
    e = 0.7
    path = sample_orbit_path(e, P, 0.25)
    for phi, (x, y) in zip(path.angles(), path.polyline()):
        ex, ey = polar_to_xy(orbital_radius(P, phi, e), phi)
        assert math.isclose(x, ex, abs_tol=1e-9)
        assert math.isclose(y, ey, abs_tol=1e-9)


def test_orbit_path_rejects_bad_step():
    with pytest.raises(ValueError):
        sample_orbit_path(0.1, P, 0.0)
