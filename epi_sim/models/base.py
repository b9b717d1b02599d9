#/!/usr/bin/env python3


from typing import Dict, List, Optional, Sequence
import dataclasses
import warnings
import numpy as np
from scipy.integrate import solve_ivp

from epi_sim.errors import IntegrationError, NumericalWarning
from epi_sim.models.kinds import ModelKind
from epi_sim.models.trajectory import Trajectory
from epi_sim.utils.initial import as_state_vector
from epi_sim.utils.params import TimeGrid
from epi_sim.validation.trajectory_checks import validate_trajectory

Array = np.ndarray

# Tight enough that compartment-sum drift and sampling jitter stay far below
# the 1e-3 conservation tolerance over 1000-day horizons.
RTOL = 1e-8
ATOL = 1e-10


class ODEBase:
    kind: Optional[ModelKind] = None

    @property
    def labels(self) -> Sequence[str]:
        raise NotImplementedError

    def rhs(self, t: float, y: Array) -> Array: # type: ignore
        raise NotImplementedError

    def integrate(
        self,
        y0: Dict[str, float] | np.ndarray | List[float],
        grid: TimeGrid,
        stiff_fallback: bool = True,
        check: bool = True,
        **solve_kw
    ) -> Trajectory:
        """
        Integrate the ODE system and sample it on ``grid``.

        Args:
            y0 (Dict[str, float] | np.ndarray | List[float]):
                Initial state. Either a mapping from state label to value
                (e.g. {'S': 0.99, 'I': 0.01}) or values ordered as
                ``self.labels``. The state is used as given; normalize it
                first with ``normalize_initial_state`` if needed.
            grid (TimeGrid): Sample times ``0, dt, 2dt, ...``.
            stiff_fallback (bool): Retry with the implicit BDF method if the
                explicit solver raises.
            check (bool): Run the trajectory checks and attach failures as
                warnings on the result.
            **solve_kw: Passed on to ``scipy.integrate.solve_ivp``
                (``method``, ``rtol``, ``atol``, ``max_step``, ...).

        Returns:
            Trajectory with one sample per grid point.

        Raises:
            IntegrationError: the solver did not reach the end of the grid.
        """
        labels = list(self.labels)
        y0v = as_state_vector(y0, labels)
        t_eval = grid.times()

        def f(t, y):
            return self.rhs(t, y)

        method = solve_kw.pop("method", "RK45")
        solve_kw.setdefault("rtol", RTOL)
        solve_kw.setdefault("atol", ATOL)
        try:
            sol = solve_ivp(f, grid.t_span, y0v, method=method, t_eval=t_eval, **solve_kw)
        except Exception:
            if stiff_fallback and method != "BDF":
                sol = solve_ivp(f, grid.t_span, y0v, method="BDF", t_eval=t_eval, **solve_kw)
            else:
                raise

        if not sol.success or sol.y.shape[1] != t_eval.size:
            t_stop = sol.t[-1] if sol.t.size else 0.0
            raise IntegrationError(
                f"{self.kind} integration stopped at t={t_stop:g} "
                f"of {grid.t_span[1]:g}: {sol.message}"
            )

        traj = Trajectory(kind=self.kind, labels=tuple(labels), times=t_eval, states=sol.y)
        if not check:
            return traj

        problems = [r.message for r in validate_trajectory(traj) if not r.passed]
        for message in problems:
            warnings.warn(f"{self.kind}: {message}", NumericalWarning, stacklevel=2)
        if problems:
            traj = dataclasses.replace(traj, warnings=tuple(problems))
        return traj
