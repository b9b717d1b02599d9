"""
One-call simulation: request in, trajectory and statistics out.

    from epi_sim import simulate

    res = simulate(model="SIR", initial=(0.99, 0.01, 0.0), beta=0.3, gamma=0.1)
    res.statistics["peak_infected"]
    res.trajectory.to_dataframe()

``simulate`` is a pure function of its request. It keeps no state between
calls; memoization, if wanted, belongs to the caller (see
``epi_sim.sweeps.cached_simulator``).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple, Union
import warnings

from epi_sim.analysis.statistics import StatisticsRecord, compute_statistics
from epi_sim.errors import ParameterRangeWarning
from epi_sim.models.kinds import ModelKind
from epi_sim.models.ode import make_model, model_class
from epi_sim.models.trajectory import Trajectory
from epi_sim.utils.initial import as_state_vector, normalize_initial_state
from epi_sim.utils.params import (
    DEFAULT_BETA,
    DEFAULT_DT,
    DEFAULT_T_MAX,
    Parameters,
    TimeGrid,
    check_parameter_ranges,
)

InitialFractions = Union[Sequence[float], Dict[str, float], None]


@dataclass(frozen=True)
class SimulationRequest:
    """
    Everything needed to run one simulation.

    ``initial`` may be a sequence ordered like the model's compartments, a
    mapping ``{"S": ..., "I": ...}`` (missing compartments are 0) or None for
    the model's default. It is stored as a tuple, so requests are hashable
    and can key a cache. The fractions need not sum to one.
    """
    model: ModelKind | str
    initial: InitialFractions = None
    beta: float = DEFAULT_BETA
    gamma: Optional[float] = None
    t_max: float = DEFAULT_T_MAX
    dt: float = DEFAULT_DT

    def __post_init__(self):
        kind = ModelKind.parse(self.model)
        cls = model_class(kind)
        if self.initial is None:
            initial = cls.default_initial
        else:
            initial = tuple(float(x) for x in as_state_vector(self.initial, cls.state_labels))
        if cls.has_recovery and self.gamma is None:
            raise ValueError(f"{kind} model requires gamma")

        object.__setattr__(self, "model", kind)
        object.__setattr__(self, "initial", initial)
        # fail fast on malformed numbers and grids
        Parameters(self.beta, self.gamma)
        TimeGrid(self.t_max, self.dt)

    @property
    def params(self) -> Parameters:
        gamma = self.gamma if model_class(self.model).has_recovery else None
        return Parameters(beta=self.beta, gamma=gamma)

    @property
    def grid(self) -> TimeGrid:
        return TimeGrid(t_max=self.t_max, dt=self.dt)

    def range_messages(self):
        p = self.params
        return check_parameter_ranges(p.beta, p.gamma, self.t_max, self.dt, self.initial)


@dataclass(frozen=True, eq=False)
class SimulationResponse:
    request: SimulationRequest
    initial_state: Tuple[float, ...]
    trajectory: Trajectory
    statistics: StatisticsRecord
    range_warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def normalized(self) -> bool:
        """True if the initial fractions had to be rescaled."""
        return self.initial_state != tuple(self.request.initial)

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.range_warnings + self.trajectory.warnings


def simulate(request: Optional[SimulationRequest] = None, **fields) -> SimulationResponse:
    """
    Normalize, integrate and summarize one simulation.

    Args:
        request: A SimulationRequest, or None to build one from ``fields``
            (``model``, ``initial``, ``beta``, ``gamma``, ``t_max``, ``dt``).

    Returns:
        SimulationResponse with the normalized initial state, trajectory
        and statistics.

    Raises:
        InvalidInitialConditionError: initial fractions sum to zero or have
            the wrong number of compartments.
        IntegrationError: the solver failed.
        ValueError: malformed request (unknown model, missing gamma, bad grid).

    Warns:
        ParameterRangeWarning: inputs outside the documented ranges.
        NumericalWarning: the trajectory drifted (also kept on the result).
    """
    if request is None:
        request = SimulationRequest(**fields)
    elif fields:
        raise TypeError("pass either a SimulationRequest or keyword fields, not both")

    range_msgs = tuple(request.range_messages())
    for message in range_msgs:
        warnings.warn(f"{request.model}: {message}", ParameterRangeWarning, stacklevel=2)

    params = request.params
    model = make_model(request.model, params)
    y0 = normalize_initial_state(request.initial, model.labels)
    traj = model.integrate(y0, request.grid)
    stats = compute_statistics(traj, params)

    return SimulationResponse(
        request=request,
        initial_state=tuple(float(x) for x in y0),
        trajectory=traj,
        statistics=stats,
        range_warnings=range_msgs,
    )
