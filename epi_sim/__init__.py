"""SI/SIS/SIR compartmental epidemic simulation and trajectory statistics."""

from epi_sim.models import ModelKind, Trajectory, SI, SIS, SIR, make_model, derivative
from epi_sim.analysis import Sentinel, StatisticsRecord, compute_statistics
from epi_sim.errors import (
    InvalidInitialConditionError,
    IntegrationError,
    NumericalWarning,
    ParameterRangeWarning,
)
from epi_sim.utils import Parameters, TimeGrid, normalize_initial_state
from epi_sim.simulate import SimulationRequest, SimulationResponse, simulate

__version__ = "0.1.0"

__all__ = [
    "ModelKind",
    "Trajectory",
    "SI",
    "SIS",
    "SIR",
    "make_model",
    "derivative",
    "Sentinel",
    "StatisticsRecord",
    "compute_statistics",
    "InvalidInitialConditionError",
    "IntegrationError",
    "NumericalWarning",
    "ParameterRangeWarning",
    "Parameters",
    "TimeGrid",
    "normalize_initial_state",
    "SimulationRequest",
    "SimulationResponse",
    "simulate",
]
