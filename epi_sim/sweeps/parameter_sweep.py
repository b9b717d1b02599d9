# epi_sim/sweeps/parameter_sweep.py
from __future__ import annotations
from dataclasses import fields, replace
from typing import Any, Callable, Dict, Iterable, Optional
import itertools
import numpy as np
import pandas as pd

from epi_sim.analysis.sentinels import is_sentinel
from epi_sim.simulate import SimulationRequest, SimulationResponse, simulate

_REQUEST_FIELDS = {f.name for f in fields(SimulationRequest)}


def run_parameter_sweep(
    base_request: SimulationRequest,
    sweep_parameters: Dict[str, Iterable],
    *,
    fixed_parameters: Optional[Dict[str, Any]] = None,
    run_function: Callable[[SimulationRequest], SimulationResponse] = simulate,
    sentinels_as_nan: bool = False,
) -> pd.DataFrame:
    """
    Runs simulations over a grid of request fields and collects statistics.

    Parameters
    ----------
    base_request : SimulationRequest
        Request supplying every field that is not swept or fixed.
    sweep_parameters : Dict[str, Iterable]
        Request field name -> values, e.g. ``{"beta": np.linspace(0.1, 1, 10)}``.
        All combinations (Cartesian product) are run.
    fixed_parameters : Optional[Dict[str, Any]], optional
        Request fields overridden for every run.
    run_function : Callable, optional
        Runs one request; defaults to ``simulate``. Pass a cached simulator
        from ``cached_simulator`` to reuse results across sweeps.
    sentinels_as_nan : bool, optional
        Replace ``Sentinel`` statistics by NaN so columns are numeric.

    Returns
    -------
    pd.DataFrame
        One row per run: the swept values followed by every statistic, plus
        ``n_warnings`` (numerical and range warnings attached to the run).
    """
    if fixed_parameters is None:
        fixed_parameters = {}

    unknown = (set(sweep_parameters) | set(fixed_parameters)) - _REQUEST_FIELDS
    if unknown:
        raise ValueError(f"Unknown request fields: {sorted(unknown)}")

    base = replace(base_request, **fixed_parameters) if fixed_parameters else base_request

    param_names = list(sweep_parameters.keys())
    param_values = [list(v) for v in sweep_parameters.values()]

    results_list = []
    for combo in itertools.product(*param_values):
        swept = dict(zip(param_names, combo))
        res = run_function(replace(base, **swept))

        row: Dict[str, Any] = {
            k: (float(v) if isinstance(v, (int, float, np.number)) else v)
            for k, v in swept.items()
        }
        for name, value in res.statistics.items():
            if sentinels_as_nan and is_sentinel(value):
                value = np.nan
            row[name] = value
        row["n_warnings"] = len(res.warnings)
        results_list.append(row)

    return pd.DataFrame(results_list)
