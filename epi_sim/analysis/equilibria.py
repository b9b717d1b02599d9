"""
Closed-form quantities for the SI/SIS/SIR models on population fractions.

This module provides the basic reproduction number, the SIS endemic
equilibrium, the herd-immunity threshold and the SIR final-size relation.
Degenerate inputs (``gamma = 0``) give ``Sentinel.UNDEFINED`` instead of
raising ``ZeroDivisionError``.

Based on Keeling & Rohani (2008), Chapter 2.
"""

import numpy as np
from typing import Optional, Tuple, Union

from epi_sim.analysis.sentinels import Sentinel

Value = Union[float, Sentinel]


# ============================================================================
# Reproduction number
# ============================================================================

def reproduction_number(beta: float, gamma: Optional[float]) -> Value:
    """
    Basic reproduction number R₀ = β/γ.

    Args:
        beta: Transmission rate
        gamma: Recovery rate; ``None`` means the model has no recovery

    Returns:
        β/γ, ``Sentinel.NOT_APPLICABLE`` when there is no recovery, or
        ``Sentinel.UNDEFINED`` when γ = 0.

    Examples:
        >>> reproduction_number(0.3, 0.1)
        2.9999999999999996
    """
    if gamma is None:
        return Sentinel.NOT_APPLICABLE
    if gamma == 0:
        return Sentinel.UNDEFINED
    return beta / gamma


def epidemic_regime(R0: Value) -> str:
    """
    Classify R₀ against the epidemic threshold.

    Returns one of "subcritical" (R₀ < 1, infection dies out), "critical"
    (R₀ = 1), "supercritical" (R₀ > 1, epidemic or endemic persistence) or
    "undefined".
    """
    if isinstance(R0, Sentinel):
        return "undefined"
    if R0 < 1.0:
        return "subcritical"
    if R0 == 1.0:
        return "critical"
    return "supercritical"


# ============================================================================
# SIS Model Equilibria
# ============================================================================

def sis_equilibria(R0: Value) -> Tuple[Value, Value]:
    """
    Endemic equilibrium for the SIS model.

    I* = max(0, 1 - 1/R₀), S* = 1 - I*. When R₀ ≤ 1 the only equilibrium is
    disease-free, (1, 0). An undefined R₀ gives undefined equilibria.

    Args:
        R0: Basic reproduction number (or a sentinel)

    Returns:
        (S*, I*)

    Examples:
        >>> sis_equilibria(2.0)
        (0.5, 0.5)
    """
    if isinstance(R0, Sentinel):
        return Sentinel.UNDEFINED, Sentinel.UNDEFINED
    if R0 <= 1.0:
        return 1.0, 0.0
    I_star = 1.0 - 1.0 / R0
    return 1.0 - I_star, I_star


# ============================================================================
# SIR Model - Final Size
# ============================================================================

def sir_final_size(s0: float, R0: Value, tol: float = 1e-10,
                   max_iter: int = 1000) -> Value:
    """
    Final susceptible fraction for the SIR model from the implicit relation

        s_∞ = s₀ · exp(-R₀(1 - s_∞))

    valid when the epidemic starts without recovered individuals.

    Args:
        s0: Initial susceptible fraction
        R0: Basic reproduction number
        tol: Convergence tolerance
        max_iter: Maximum fixed-point iterations

    Returns:
        s_inf, or ``Sentinel.UNDEFINED`` if R₀ is undefined

    Examples:
        >>> s_inf = sir_final_size(s0=0.99, R0=3.0)
        >>> 0.05 < s_inf < 0.07
        True
    """
    if isinstance(R0, Sentinel):
        return Sentinel.UNDEFINED

    # Iterate from 0 so the sequence climbs to the smallest fixed point,
    # the epidemiologically meaningful one.
    s_inf = 0.0
    for _ in range(max_iter):
        s_new = s0 * np.exp(-R0 * (1.0 - s_inf))
        if abs(s_new - s_inf) < tol:
            return float(s_new)
        s_inf = s_new

    return float(s_inf)


def attack_rate_from_final_size(s0: float, s_inf: float) -> float:
    """
    Fraction of the population infected during the epidemic.

    Examples:
        >>> attack_rate_from_final_size(s0=0.99, s_inf=0.01)
        0.98
    """
    return s0 - s_inf


# ============================================================================
# Herd immunity
# ============================================================================

def herd_immunity_threshold(R0: Value) -> Value:
    """
    Immune fraction above which transmission cannot be sustained.

    Formula: p_c = 1 - 1/R₀

    Returns ``Sentinel.NOT_APPLICABLE`` when R₀ ≤ 1 (no epidemic to stop)
    and ``Sentinel.UNDEFINED`` when R₀ itself is undefined.

    Examples:
        >>> herd_immunity_threshold(5.0)
        0.8
    """
    if isinstance(R0, Sentinel):
        return Sentinel.UNDEFINED
    if R0 <= 1.0:
        return Sentinel.NOT_APPLICABLE
    return 1.0 - 1.0 / R0
