import numpy as np
import pytest
from epi_sim.models.ode import SI, SIS, SIR, model_class
from epi_sim.utils.params import TimeGrid


def _cons_total(traj, tol=1e-3):
    return np.allclose(traj.totals(), 1.0, atol=tol)


def test_si_monotone_and_conservation():
    m = SI(beta=0.5)
    traj = m.integrate(dict(S=0.99, I=0.01), TimeGrid(40, 0.1))
    S, I = traj["S"], traj["I"]
    assert _cons_total(traj)
    assert np.all(np.diff(S) <= 1e-8)   # S nonincreasing (allow tiny num. jitter)
    assert np.all(np.diff(I) >= -1e-8)  # I nondecreasing
    assert S[-1] < S[0]
    assert I[-1] > I[0]


def test_sis_equilibrium_threshold():
    # R0 = beta/gamma
    m1 = SIS(beta=0.09, gamma=0.1)     # R0 < 1 -> disease-free
    m2 = SIS(beta=0.3,  gamma=0.1)     # R0 > 1 -> endemic
    y0 = dict(S=0.99, I=0.01)

    traj = m1.integrate(y0, TimeGrid(800, 1.0))
    assert _cons_total(traj)
    assert traj.final("I") < 5e-6           # I* ~ 0

    traj = m2.integrate(y0, TimeGrid(800, 1.0))
    I_star = 1.0 - 1.0/m2.R0()  # I* = 1 - 1/R0
    assert np.isclose(traj.final("I"), I_star, rtol=0.05)


def test_sis_long_horizon_matches_equilibrium():
    beta, gamma = 0.5, 0.2
    traj = SIS(beta=beta, gamma=gamma).integrate((0.99, 0.01), TimeGrid(1000, 0.5))
    assert abs(traj.final("I") - (1 - gamma/beta)) <= 0.05 * (1 - gamma/beta)


def test_sir_closed_population_properties():
    m = SIR(beta=0.3, gamma=0.1)
    traj = m.integrate(dict(S=0.99, I=0.01, R=0.0), TimeGrid(200, 0.1))
    S, I, R = traj["S"], traj["I"], traj["R"]
    assert _cons_total(traj)
    assert np.all(np.diff(S) <= 1e-8)   # S nonincreasing
    assert np.all(np.diff(R) >= -1e-8)  # R nondecreasing
    assert I[-1] < 1e-3                 # epidemic burns out eventually


@pytest.mark.parametrize("kind, y0, params", [
    ("SI", (0.99, 0.01), dict(beta=1.0)),
    ("SIS", (0.5, 0.5), dict(beta=1.0, gamma=0.01)),
    ("SIS", (0.99, 0.01), dict(beta=0.05, gamma=1.0)),
    ("SIR", (0.999, 0.001, 0.0), dict(beta=1.0, gamma=0.05)),
    ("SIR", (0.6, 0.1, 0.3), dict(beta=0.2, gamma=0.5)),
])
def test_conservation_along_trajectory(kind, y0, params):
    m = model_class(kind)(**params)
    traj = m.integrate(y0, TimeGrid(1000, 1.0))
    assert traj.conservation_error() < 1e-3
    assert traj.ok


def test_integration_is_deterministic():
    m = SIR(beta=0.4, gamma=0.1)
    a = m.integrate((0.99, 0.01, 0.0), TimeGrid(150, 0.25))
    b = m.integrate((0.99, 0.01, 0.0), TimeGrid(150, 0.25))
    assert np.array_equal(a.states, b.states)
    assert np.array_equal(a.times, b.times)


def test_trajectory_samples_grid():
    traj = SI(beta=0.3).integrate((0.99, 0.01), TimeGrid(10, 3))
    assert np.allclose(traj.times, [0, 3, 6, 9])
    t0, state0 = next(traj.samples())
    assert t0 == 0.0
    assert np.allclose(state0, (0.99, 0.01))


def test_models_require_gamma_when_recovering():
    with pytest.raises(ValueError):
        SIS(beta=0.3)
    with pytest.raises(ValueError):
        SIR(beta=0.3)
    # SI ignores gamma
    assert SI(beta=0.3, gamma=0.2).params.gamma is None


def test_wrong_state_length_rejected():
    with pytest.raises(ValueError):
        SIR(beta=0.3, gamma=0.1).integrate((0.9, 0.1), TimeGrid(50, 1))
