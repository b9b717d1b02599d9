from .trajectory_checks import (
    ValidationResult,
    check_finite,
    check_conservation,
    check_bounds,
    validate_trajectory,
)

__all__ = [
    "ValidationResult",
    "check_finite",
    "check_conservation",
    "check_bounds",
    "validate_trajectory",
]
