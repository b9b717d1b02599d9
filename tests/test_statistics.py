import numpy as np
import pytest

from epi_sim.analysis.sentinels import Sentinel
from epi_sim.analysis.statistics import (
    StatisticsRecord,
    compute_statistics,
    first_time,
    max_growth_rate,
)
from epi_sim.errors import ParameterRangeWarning
from epi_sim.models.kinds import ModelKind
from epi_sim.models.trajectory import Trajectory
from epi_sim.simulate import simulate
from epi_sim.utils.params import Parameters


def test_sir_reference_scenario():
    res = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.3, gamma=0.1,
                   t_max=200, dt=0.1)
    stats = res.statistics
    assert np.isclose(stats["R0"], 3.0)
    assert 0.25 <= stats["peak_infected"] <= 0.35
    assert stats["final_recovered"] > 0.9
    assert np.isclose(stats["herd_immunity_threshold"], 2.0 / 3.0, atol=1e-3)
    assert 0 < stats["peak_time"] < 200
    assert stats["epidemic_duration"] > 0
    assert np.isclose(stats["attack_rate"], 0.99 - stats["final_susceptible"])


def test_sis_reference_scenario():
    res = simulate(model="SIS", initial=(0.99, 0.01), beta=0.3, gamma=0.15, t_max=300)
    stats = res.statistics
    assert stats["R0"] == 0.3 / 0.15
    assert np.isclose(stats["equilibrium_infected"], 0.5)
    assert np.isclose(stats["equilibrium_susceptible"], 0.5)
    assert abs(stats["final_infected"] - 0.5) < 0.05
    assert stats["converged"] is True
    assert isinstance(stats["time_to_equilibrium"], float)


def test_si_reference_scenario():
    res = simulate(model="SI", initial=(0.99, 0.01), beta=0.3, t_max=200)
    stats = res.statistics
    assert stats["final_infected"] > 0.99
    assert stats["time_to_50pct"] < stats["time_to_90pct"] < stats["time_to_99pct"]
    # logistic growth: steepest at I = 1/2, with slope beta/4
    assert abs(stats["max_infection_rate"] - 0.3 / 4) < 1e-3
    assert abs(stats["max_infection_rate_time"] - np.log(99) / 0.3) < 0.5


def test_si_milestone_not_reached():
    res = simulate(model="SI", initial=(0.99, 0.01), beta=0.01, t_max=50, dt=1.0)
    stats = res.statistics
    assert stats["time_to_50pct"] is Sentinel.NOT_REACHED
    assert stats["time_to_99pct"] is Sentinel.NOT_REACHED


def test_sis_subcritical():
    res = simulate(model="SIS", initial=(0.99, 0.01), beta=0.1, gamma=0.2, t_max=300)
    stats = res.statistics
    assert stats["equilibrium_infected"] == 0.0
    assert stats["equilibrium_susceptible"] == 1.0
    assert stats["time_to_equilibrium"] is Sentinel.NOT_APPLICABLE
    assert stats["final_infected"] < 1e-6


def test_sis_gamma_zero_reports_r0_undefined():
    with pytest.warns(ParameterRangeWarning):
        res = simulate(model="SIS", initial=(0.99, 0.01), beta=0.3, gamma=0.0, t_max=100)
    stats = res.statistics
    assert stats["R0"] is Sentinel.UNDEFINED
    assert stats["equilibrium_infected"] is Sentinel.UNDEFINED
    assert stats["time_to_equilibrium"] is Sentinel.UNDEFINED
    assert stats["overshoot"] is Sentinel.UNDEFINED
    # degenerates to SI: still a valid trajectory
    assert stats["final_infected"] > 0.99


def test_sir_gamma_zero_and_subcritical():
    with pytest.warns(ParameterRangeWarning):
        res = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.3, gamma=0.0, t_max=100)
    assert res.statistics["R0"] is Sentinel.UNDEFINED
    assert res.statistics["herd_immunity_threshold"] is Sentinel.UNDEFINED

    res = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.05, gamma=0.1, t_max=100)
    assert res.statistics["herd_immunity_threshold"] is Sentinel.NOT_APPLICABLE


def test_sir_duration_zero_below_threshold():
    res = simulate(model="SIR", initial=(0.9995, 0.0005, 0.0), beta=0.05, gamma=0.5,
                   t_max=50, dt=0.5)
    assert res.statistics["epidemic_duration"] == 0.0


def test_peak_time_is_stable_under_dt_refinement():
    coarse = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.3, gamma=0.1, dt=0.1)
    fine = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.3, gamma=0.1, dt=0.01)
    assert abs(coarse.statistics["peak_time"] - fine.statistics["peak_time"]) <= 0.1 + 1e-9
    assert abs(coarse.statistics["peak_infected"] - fine.statistics["peak_infected"]) < 1e-4
    assert abs(coarse.statistics["final_recovered"] - fine.statistics["final_recovered"]) < 1e-6


def test_first_time_uses_earliest_sample():
    t = np.array([0.0, 1.0, 2.0, 3.0])
    assert first_time(t, np.array([False, True, True, False])) == 1.0
    assert first_time(t, np.zeros(4, dtype=bool)) is Sentinel.NOT_REACHED


def test_max_growth_rate_left_endpoint():
    t = np.array([0.0, 0.5, 1.0, 1.5])
    I = np.array([0.1, 0.2, 0.5, 0.6])
    rate, when = max_growth_rate(t, I)
    assert np.isclose(rate, 0.6)
    assert when == 0.5


def test_statistics_from_handmade_trajectory():
    traj = Trajectory(
        kind=ModelKind.SIR,
        labels=("S", "I", "R"),
        times=[0.0, 1.0, 2.0, 3.0],
        states=[[0.9, 0.7, 0.6, 0.6],
                [0.1, 0.2, 0.1, 0.0005],
                [0.0, 0.1, 0.3, 0.3995]],
    )
    stats = compute_statistics(traj, Parameters(beta=0.3, gamma=0.1))
    assert stats["peak_infected"] == 0.2
    assert stats["peak_time"] == 1.0
    assert stats["epidemic_duration"] == 2.0
    assert np.isclose(stats["attack_rate"], 0.3)


def test_statistics_record_is_read_only_mapping():
    res = simulate(model="SI", initial=(0.99, 0.01), beta=0.3, t_max=60)
    stats = res.statistics
    assert isinstance(stats, StatisticsRecord)
    assert stats.kind is ModelKind.SI
    with pytest.raises(TypeError):
        stats["final_infected"] = 0.0
    series = stats.to_series()
    assert list(series.index) == list(stats.keys())


def test_statistics_need_gamma_for_recovery_models():
    traj = simulate(model="SIS", initial=(0.99, 0.01), beta=0.3, gamma=0.1, t_max=60).trajectory
    with pytest.raises(ValueError):
        compute_statistics(traj, Parameters(beta=0.3))
