# epi_sim/analysis/__init__.py

from .sentinels import Sentinel, is_sentinel
from .equilibria import (
    reproduction_number,
    epidemic_regime,
    sis_equilibria,
    sir_final_size,
    attack_rate_from_final_size,
    herd_immunity_threshold,
)
from .statistics import (
    StatisticsRecord,
    compute_statistics,
    si_statistics,
    sis_statistics,
    sir_statistics,
)

__all__ = [
    "Sentinel",
    "is_sentinel",

    # from equilibria.py
    "reproduction_number",
    "epidemic_regime",
    "sis_equilibria",
    "sir_final_size",
    "attack_rate_from_final_size",
    "herd_immunity_threshold",

    # from statistics.py
    "StatisticsRecord",
    "compute_statistics",
    "si_statistics",
    "sis_statistics",
    "sir_statistics",
]
