from .kinds import ModelKind
from .trajectory import Trajectory
from .base import ODEBase
from .ode import (
    MassActionModel,
    SI,
    SIS,
    SIR,
    MODEL_REGISTRY,
    mass_action_rhs,
    model_class,
    make_model,
    derivative,
    required_parameters,
)

__all__ = [
    "ModelKind",
    "Trajectory",
    "ODEBase",
    "MassActionModel",
    "SI",
    "SIS",
    "SIR",
    "MODEL_REGISTRY",
    "mass_action_rhs",
    "model_class",
    "make_model",
    "derivative",
    "required_parameters",
]
