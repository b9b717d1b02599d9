"""
Exception and warning types raised by epi_sim.

Every failure is local to the request that produced it: callers catch
these like any other Python exception and the next simulation is
unaffected.
"""


class InvalidInitialConditionError(ValueError):
    """Initial fractions cannot be turned into a valid state (e.g. zero sum)."""


class IntegrationError(RuntimeError):
    """The ODE solver failed to reach the end of the time grid."""


class NumericalWarning(UserWarning):
    """Trajectory drifted from conservation or left the [0, 1] range."""


class ParameterRangeWarning(UserWarning):
    """An input lies outside the documented, numerically meaningful range."""
