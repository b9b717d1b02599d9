from .parameter_sweep import run_parameter_sweep
from .runners import cached_simulator, run_batch

__all__ = ["run_parameter_sweep", "cached_simulator", "run_batch"]
