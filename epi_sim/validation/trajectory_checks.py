"""
Numerical sanity checks for integrated trajectories.

The compartment models conserve total population exactly, and every
compartment is a fraction in [0, 1]. A numerical solution can still drift
from either property when ``beta`` or ``dt`` are extreme. These checks
measure how far a trajectory has drifted; they never modify it.

Usage:
    from epi_sim.validation import validate_trajectory

    results = validate_trajectory(traj)
    failed = [r for r in results if not r.passed]
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import numpy as np

from epi_sim.models.trajectory import Trajectory

CONSERVATION_TOL = 1e-3
BOUNDS_TOL = 1e-6


@dataclass
class ValidationResult:
    """Result from a single check."""
    test_name: str
    passed: bool
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return f"{status}: {self.test_name}\n  {self.message}"


def check_finite(traj: Trajectory) -> ValidationResult:
    bad = ~np.isfinite(traj.states)
    if not bad.any():
        return ValidationResult("Finite Values", True, "All samples are finite")

    first = int(np.argmax(bad.any(axis=0)))
    return ValidationResult(
        test_name="Finite Values",
        passed=False,
        message=f"Non-finite state values from t={traj.times[first]:g} onwards",
        details={"first_index": first, "n_bad": int(bad.sum())},
    )


def check_conservation(traj: Trajectory, tolerance: float = CONSERVATION_TOL) -> ValidationResult:
    """
    Verify the compartment sum stays at 1.

    Parameters
    ----------
    traj : Trajectory
        Integrated trajectory
    tolerance : float
        Largest acceptable |sum - 1| over all samples (default: 1e-3)

    Returns
    -------
    ValidationResult
        Pass if the maximum drift is below tolerance
    """
    totals = traj.totals()
    drift = np.abs(totals - 1.0)
    # nan compares False, so non-finite samples are left to check_finite
    max_error = float(np.nanmax(drift)) if np.isfinite(drift).any() else 0.0
    passed = max_error < tolerance
    return ValidationResult(
        test_name="Conservation",
        passed=passed,
        message=(
            f"Max conservation error: {max_error:.2e} "
            f"{'<' if passed else '>='} {tolerance:.2e}"
        ),
        details={
            "max_error": max_error,
            "tolerance": tolerance,
            "worst_time": float(traj.times[int(np.nanargmax(drift))]) if max_error > 0 else None,
        },
    )


def check_bounds(traj: Trajectory, tolerance: float = BOUNDS_TOL) -> ValidationResult:
    """Verify every compartment stays within [0, 1] up to ``tolerance``."""
    finite = traj.states[np.isfinite(traj.states)]
    low = float(finite.min()) if finite.size else 0.0
    high = float(finite.max()) if finite.size else 1.0
    passed = low >= -tolerance and high <= 1.0 + tolerance
    if passed:
        message = f"All compartments within [0, 1] (min={low:.3g}, max={high:.3g})"
    else:
        message = f"Compartment values left [0, 1]: min={low:.3g}, max={high:.3g}"
    return ValidationResult(
        test_name="Bounds",
        passed=passed,
        message=message,
        details={"min": low, "max": high, "tolerance": tolerance},
    )


def validate_trajectory(traj: Trajectory,
                        conservation_tol: float = CONSERVATION_TOL,
                        bounds_tol: float = BOUNDS_TOL) -> List[ValidationResult]:
    """Run all checks and return their results in a fixed order."""
    return [
        check_finite(traj),
        check_conservation(traj, conservation_tol),
        check_bounds(traj, bounds_tol),
    ]
