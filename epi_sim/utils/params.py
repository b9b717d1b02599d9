from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import math
import numpy as np

# Ranges over which the models are numerically meaningful. Values outside
# are still simulated, only flagged.
PARAMETER_RANGES: Dict[str, Tuple[float, float]] = {
    "beta": (0.01, 1.0),
    "gamma": (0.01, 1.0),
    "t_max": (50.0, 1000.0),
    "dt": (0.01, 1.0),
    "fraction": (0.0, 1.0),
}

DEFAULT_BETA = 0.3
DEFAULT_GAMMA = 0.1
DEFAULT_T_MAX = 200.0
DEFAULT_DT = 0.1


def _require_finite(name: str, value: Optional[float]) -> None:
    if value is not None and not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value}")


@dataclass(frozen=True)
class Parameters:
    """Disease parameters; ``gamma`` is ignored by models without recovery."""
    beta: float = DEFAULT_BETA
    gamma: Optional[float] = None

    def __post_init__(self):
        _require_finite("beta", self.beta)
        _require_finite("gamma", self.gamma)


@dataclass(frozen=True)
class TimeGrid:
    """
    Uniform sampling grid ``0, dt, 2dt, ...`` bounded above by ``t_max``.

    Sample times are computed as ``k * dt`` rather than by repeated addition,
    so the grid has no cumulative rounding drift.
    """
    t_max: float = DEFAULT_T_MAX
    dt: float = DEFAULT_DT

    def __post_init__(self):
        _require_finite("t_max", self.t_max)
        _require_finite("dt", self.dt)
        if self.t_max <= 0:
            raise ValueError(f"t_max must be positive, got {self.t_max}")
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.dt > self.t_max:
            raise ValueError(f"dt ({self.dt}) must not exceed t_max ({self.t_max})")

    @property
    def n_steps(self) -> int:
        return int(math.floor(self.t_max / self.dt + 1e-9))

    def times(self) -> np.ndarray:
        t = self.dt * np.arange(self.n_steps + 1, dtype=float)
        # guard against k*dt landing a hair above t_max
        t[-1] = min(t[-1], self.t_max)
        return t

    @property
    def t_span(self) -> Tuple[float, float]:
        return (0.0, float(self.times()[-1]))


def check_parameter_ranges(beta: float, gamma: Optional[float] = None,
                           t_max: Optional[float] = None, dt: Optional[float] = None,
                           fractions: Sequence[float] = ()) -> List[str]:
    """
    Compare inputs against PARAMETER_RANGES.

    Returns one message per out-of-range value (empty when all are inside).
    Nothing is rejected here; the caller decides whether to warn.
    """
    messages = []
    named = [("beta", beta), ("gamma", gamma), ("t_max", t_max), ("dt", dt)]
    for name, value in named:
        if value is None:
            continue
        lo, hi = PARAMETER_RANGES[name]
        if not lo <= value <= hi:
            messages.append(f"{name}={value} outside documented range [{lo}, {hi}]")

    lo, hi = PARAMETER_RANGES["fraction"]
    for k, x in enumerate(fractions):
        if not lo <= x <= hi:
            messages.append(f"initial fraction #{k}={x} outside [{lo}, {hi}]")
    return messages
