"""
Summary statistics computed from an integrated trajectory.

Each model kind has its own set of metrics. Threshold times ("first time I
reaches 50%") are read off the sample grid without interpolation: the
answer is the time of the earliest sample satisfying the condition, so
its accuracy is bounded by ``dt``.

Metrics without a numeric value are reported as ``Sentinel`` members:
``NOT_REACHED`` (threshold never met within the horizon),
``NOT_APPLICABLE`` (e.g. herd immunity when R₀ ≤ 1) and ``UNDEFINED``
(anything that depends on R₀ when γ = 0).
"""
from __future__ import annotations
from collections.abc import Mapping
from typing import Callable, Dict, Iterator, Union
import numpy as np
import pandas as pd

from epi_sim.analysis.equilibria import (
    herd_immunity_threshold,
    reproduction_number,
    sis_equilibria,
)
from epi_sim.analysis.sentinels import Sentinel
from epi_sim.models.kinds import ModelKind
from epi_sim.models.trajectory import Trajectory
from epi_sim.utils.params import Parameters

Metric = Union[float, bool, Sentinel]

SI_MILESTONES = (0.5, 0.9, 0.99)
SIS_EQUILIBRIUM_BAND = 0.05     # relative distance from I* counted as "at equilibrium"
SIS_CONVERGED_TOL = 0.02        # absolute distance of final I from I*
EPIDEMIC_THRESHOLD = 0.001      # I at or above this counts as an ongoing epidemic


class StatisticsRecord(Mapping):
    """
    Read-only mapping from metric name to value or ``Sentinel``.

    Examples
    --------
    >>> stats = compute_statistics(traj, Parameters(beta=0.3, gamma=0.1))
    >>> stats["R0"]
    2.9999999999999996
    >>> stats.to_series()      # for tabular display
    """

    def __init__(self, kind: ModelKind | str, values: Dict[str, Metric]):
        self._kind = ModelKind.parse(kind)
        self._values = dict(values)

    @property
    def kind(self) -> ModelKind:
        return self._kind

    def __getitem__(self, key: str) -> Metric:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"StatisticsRecord({self._kind.value}, {self._values!r})"

    def to_series(self) -> pd.Series:
        return pd.Series(self._values, name=self._kind.value, dtype=object)


# ============================================================================
# Helpers
# ============================================================================

def first_time(times: np.ndarray, mask: np.ndarray) -> Union[float, Sentinel]:
    """Time of the earliest sample where ``mask`` holds, else NOT_REACHED."""
    hits = np.flatnonzero(mask)
    if hits.size == 0:
        return Sentinel.NOT_REACHED
    return float(times[hits[0]])


def max_growth_rate(times: np.ndarray, series: np.ndarray):
    """
    Largest finite-difference slope between consecutive samples.

    Returns ``(rate, time)`` where time is the left end of the steepest
    interval.
    """
    if series.size < 2:
        return Sentinel.NOT_APPLICABLE, Sentinel.NOT_APPLICABLE
    rates = np.diff(series) / np.diff(times)
    k = int(np.argmax(rates))
    return float(rates[k]), float(times[k])


# ============================================================================
# Per-model statistics
# ============================================================================

def si_statistics(traj: Trajectory, params: Parameters | None = None) -> StatisticsRecord:
    """Final state, 50/90/99% milestones and steepest growth of I."""
    t, S, I = traj.times, traj["S"], traj["I"]
    rate, rate_time = max_growth_rate(t, I)

    values: Dict[str, Metric] = {
        "final_infected": float(I[-1]),
        "final_susceptible": float(S[-1]),
    }
    for level in SI_MILESTONES:
        values[f"time_to_{round(level * 100)}pct"] = first_time(t, I >= level)
    values["max_infection_rate"] = rate
    values["max_infection_rate_time"] = rate_time
    return StatisticsRecord(ModelKind.SI, values)


def sis_statistics(traj: Trajectory, params: Parameters) -> StatisticsRecord:
    """R₀, endemic equilibrium, peak/overshoot and time to equilibrium."""
    t, S, I = traj.times, traj["S"], traj["I"]
    R0 = reproduction_number(params.beta, params.gamma)
    S_star, I_star = sis_equilibria(R0)
    peak = float(I.max())
    final_I = float(I[-1])

    if isinstance(R0, Sentinel):
        overshoot: Metric = Sentinel.UNDEFINED
        converged: Metric = Sentinel.UNDEFINED
        time_to_eq: Metric = Sentinel.UNDEFINED
    else:
        overshoot = peak > I_star
        converged = abs(final_I - I_star) < SIS_CONVERGED_TOL
        if R0 > 1.0:
            time_to_eq = first_time(t, np.abs(I - I_star) <= SIS_EQUILIBRIUM_BAND * I_star)
        else:
            # I* = 0 exactly; a relative band around zero is meaningless
            time_to_eq = Sentinel.NOT_APPLICABLE

    return StatisticsRecord(ModelKind.SIS, {
        "R0": R0,
        "equilibrium_infected": I_star,
        "equilibrium_susceptible": S_star,
        "final_infected": final_I,
        "final_susceptible": float(S[-1]),
        "peak_infected": peak,
        "overshoot": overshoot,
        "time_to_equilibrium": time_to_eq,
        "converged": converged,
    })


def sir_statistics(traj: Trajectory, params: Parameters) -> StatisticsRecord:
    """R₀, epidemic peak, final sizes, duration and herd-immunity threshold."""
    t, S, I, R = traj.times, traj["S"], traj["I"], traj["R"]
    R0 = reproduction_number(params.beta, params.gamma)
    k_peak = int(np.argmax(I))

    active = np.flatnonzero(I >= EPIDEMIC_THRESHOLD)
    duration = float(t[active[-1]] - t[active[0]]) if active.size else 0.0

    return StatisticsRecord(ModelKind.SIR, {
        "R0": R0,
        "peak_infected": float(I[k_peak]),
        "peak_time": float(t[k_peak]),
        "final_recovered": float(R[-1]),
        "final_susceptible": float(S[-1]),
        "attack_rate": float(S[0] - S[-1]),
        "epidemic_duration": duration,
        "herd_immunity_threshold": herd_immunity_threshold(R0),
    })


_STATISTICS: Dict[ModelKind, Callable[[Trajectory, Parameters], StatisticsRecord]] = {
    ModelKind.SI: si_statistics,
    ModelKind.SIS: sis_statistics,
    ModelKind.SIR: sir_statistics,
}


def compute_statistics(traj: Trajectory, params: Parameters) -> StatisticsRecord:
    """
    Statistics for ``traj``, chosen by its model kind.

    Args:
        traj: Integrated trajectory
        params: Parameters the trajectory was produced with

    Raises:
        ValueError: SIS/SIR statistics requested without ``gamma``.
    """
    kind = ModelKind.parse(traj.kind)
    if kind is not ModelKind.SI and params.gamma is None:
        raise ValueError(f"{kind} statistics require gamma")
    return _STATISTICS[kind](traj, params)
