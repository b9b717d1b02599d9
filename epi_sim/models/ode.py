"""
SI, SIS and SIR models on population fractions (closed population).

All three share the mass-action infection term β·S·I and differ only in
where the recovery flow γ·I goes:

    SI   no recovery
    SIS  back into S (no immunity)
    SIR  into a new compartment R (permanent immunity)

so they are written once, as ``mass_action_rhs`` with two switches, and the
model classes just set those switches. Whatever the switches, the
derivatives sum to exactly zero and total population is conserved.

Based on Keeling & Rohani (2008) - Modeling Infectious Diseases.
"""
from typing import Callable, ClassVar, Dict, Optional, Tuple, Type, Union
import numpy as np

from epi_sim.analysis.equilibria import reproduction_number, Value
from epi_sim.analysis.sentinels import Sentinel
from epi_sim.models.base import ODEBase
from epi_sim.models.kinds import ModelKind
from epi_sim.utils.params import Parameters

Derivative = Callable[[float, np.ndarray, Parameters], np.ndarray]


def mass_action_rhs(y: np.ndarray, beta: float, gamma: float,
                    has_recovery: bool, immunity: bool) -> np.ndarray:
    """
    Derivatives for the SI/SIS/SIR family.

    Args:
        y: State (S, I) or (S, I, R)
        beta: Transmission rate
        gamma: Recovery rate (unused without recovery)
        has_recovery: Infected individuals leave I at rate gamma
        immunity: Recovered individuals go to R instead of back to S

    Returns:
        dS/dt, dI/dt[, dR/dt]
    """
    S, I = y[0], y[1]
    infection = beta * S * I
    recovery = gamma * I if has_recovery else 0.0

    dS = -infection
    dI = +infection - recovery
    if immunity:
        return np.array([dS, dI, +recovery])
    return np.array([dS + recovery, dI])


class MassActionModel(ODEBase):
    """
    Base for the SI/SIS/SIR models.

    Subclasses set ``kind``, ``state_labels``, ``has_recovery`` and
    ``immunity``; the right-hand side is shared.
    """
    kind: ClassVar[ModelKind]
    state_labels: ClassVar[Tuple[str, ...]]
    has_recovery: ClassVar[bool]
    immunity: ClassVar[bool]
    default_initial: ClassVar[Tuple[float, ...]]

    def __init__(self, beta: float, gamma: Optional[float] = None):
        if self.has_recovery and gamma is None:
            raise ValueError(f"{self.kind} model requires gamma")
        if not self.has_recovery:
            gamma = None
        self.params = Parameters(beta=beta, gamma=gamma)

    @classmethod
    def from_params(cls, params: Parameters) -> "MassActionModel":
        return cls(beta=params.beta, gamma=params.gamma)

    @property
    def labels(self) -> Tuple[str, ...]:
        return self.state_labels

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        p = self.params
        return mass_action_rhs(y, p.beta, p.gamma or 0.0,
                               self.has_recovery, self.immunity)

    def R0(self) -> Value:
        """
        Basic reproduction number R₀ = β/γ.

        ``Sentinel.NOT_APPLICABLE`` for models without recovery and
        ``Sentinel.UNDEFINED`` when γ = 0.
        """
        if not self.has_recovery:
            return Sentinel.NOT_APPLICABLE
        return reproduction_number(self.params.beta, self.params.gamma)

    def __repr__(self) -> str:
        p = self.params
        if self.has_recovery:
            return f"{type(self).__name__}(beta={p.beta}, gamma={p.gamma})"
        return f"{type(self).__name__}(beta={p.beta})"


# ============================================================================
# SI Model
# ============================================================================

class SI(MassActionModel):
    """
    Simple SI model (no recovery).

    dS/dt = -beta * S * I
    dI/dt = +beta * S * I

    I never decreases; everyone is eventually infected.
    """
    kind = ModelKind.SI
    state_labels = ("S", "I")
    has_recovery = False
    immunity = False
    default_initial = (0.99, 0.01)


# ============================================================================
# SIS Model
# ============================================================================

class SIS(MassActionModel):
    """
    SIS model with recovery but no immunity.

    dS/dt = -beta * S * I + gamma * I
    dI/dt = +beta * S * I - gamma * I

    R0 = beta/gamma; for R0 > 1 the infection settles at I* = 1 - 1/R0.
    """
    kind = ModelKind.SIS
    state_labels = ("S", "I")
    has_recovery = True
    immunity = False
    default_initial = (0.99, 0.01)


# ============================================================================
# SIR Model
# ============================================================================

class SIR(MassActionModel):
    """
    Classic SIR model (closed population).

    dS/dt = -beta * S * I
    dI/dt = +beta * S * I - gamma * I
    dR/dt = +gamma * I

    R0 = beta/gamma
    """
    kind = ModelKind.SIR
    state_labels = ("S", "I", "R")
    has_recovery = True
    immunity = True
    default_initial = (0.999, 0.001, 0.0)


# ============================================================================
# Registry
# ============================================================================

MODEL_REGISTRY: Dict[ModelKind, Type[MassActionModel]] = {
    ModelKind.SI: SI,
    ModelKind.SIS: SIS,
    ModelKind.SIR: SIR,
}


def model_class(kind: Union[ModelKind, str]) -> Type[MassActionModel]:
    """Look up a model class by kind, e.g. ``model_class("SIR")``."""
    return MODEL_REGISTRY[ModelKind.parse(kind)]


def make_model(kind: Union[ModelKind, str], params: Parameters) -> MassActionModel:
    return model_class(kind).from_params(params)


def derivative(kind: Union[ModelKind, str]) -> Derivative:
    """
    Derivative function ``f(t, state, params)`` for ``kind``.

    Example: ``derivative("SIS")(0.0, np.array([0.9, 0.1]), Parameters(0.3, 0.1))``
    """
    cls = model_class(kind)

    def f(t: float, state: np.ndarray, params: Parameters) -> np.ndarray:
        return mass_action_rhs(np.asarray(state, dtype=float), params.beta,
                               params.gamma or 0.0, cls.has_recovery, cls.immunity)

    return f


def required_parameters(kind: Union[ModelKind, str]) -> Tuple[str, ...]:
    return ("beta", "gamma") if model_class(kind).has_recovery else ("beta",)
