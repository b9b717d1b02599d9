"""
Initial-condition handling.

Raw fractions supplied by a caller are not guaranteed to sum to one. They
are rescaled only when the sum is off by more than ``SUM_TOLERANCE``; small
floating drift is passed through untouched.
"""
from __future__ import annotations
from typing import Dict, Sequence, Tuple
import numpy as np

from epi_sim.errors import InvalidInitialConditionError

SUM_TOLERANCE = 0.01


def initial_sum_check(fractions: Sequence[float],
                      tol: float = SUM_TOLERANCE) -> Tuple[float, bool]:
    """Return ``(total, ok)`` where ok means ``|total - 1| <= tol``."""
    total = float(np.sum(np.asarray(fractions, dtype=float)))
    return total, abs(total - 1.0) <= tol


def as_state_vector(y0: Dict[str, float] | Sequence[float], labels: Sequence[str]) -> np.ndarray:
    labels = list(labels)
    if isinstance(y0, dict):
        unknown = set(y0) - set(labels)
        if unknown:
            raise InvalidInitialConditionError(
                f"unknown compartments {sorted(unknown)}; model has {labels}"
            )
        return np.array([y0.get(k, 0.0) for k in labels], dtype=float)

    y0v = np.asarray(y0, dtype=float)
    if y0v.ndim != 1 or len(y0v) != len(labels):
        raise InvalidInitialConditionError(
            f"expected {len(labels)} initial fractions for states {labels}, "
            f"got {y0v.size}"
        )
    return y0v


def normalize_initial_state(y0: Dict[str, float] | Sequence[float],
                            labels: Sequence[str],
                            tol: float = SUM_TOLERANCE) -> np.ndarray:
    """
    Turn raw initial fractions into a unit-sum state vector.

    Args:
        y0: Fractions ordered like ``labels``, or a mapping label -> fraction
            (missing labels count as 0).
        labels: Compartment labels of the active model, e.g. ("S", "I", "R").
        tol: Sums within ``tol`` of 1 are left as they are.

    Returns:
        A new float array; the input is never modified.

    Raises:
        InvalidInitialConditionError: wrong number of compartments, non-finite
            values, or a sum that is not positive (normalization undefined).

    Examples:
        >>> normalize_initial_state([2, 2], ("S", "I"))
        array([0.5, 0.5])
    """
    y0v = as_state_vector(y0, labels)
    if not np.all(np.isfinite(y0v)):
        raise InvalidInitialConditionError(f"initial fractions must be finite, got {y0v}")

    total, ok = initial_sum_check(y0v, tol)
    if total <= 0.0:
        raise InvalidInitialConditionError(
            f"initial fractions sum to {total}; cannot normalize {dict(zip(labels, y0v))}"
        )
    if ok:
        return y0v.copy()
    return y0v / total

