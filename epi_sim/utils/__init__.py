from .initial import normalize_initial_state, initial_sum_check
from .params import Parameters, TimeGrid, PARAMETER_RANGES, check_parameter_ranges

__all__ = [
    "normalize_initial_state",
    "initial_sum_check",
    "Parameters",
    "TimeGrid",
    "PARAMETER_RANGES",
    "check_parameter_ranges",
]
