from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Tuple
import numpy as np
import pandas as pd

from epi_sim.models.kinds import ModelKind

Array = np.ndarray


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Time series produced by one integration.

    ``states`` follows the ``solve_ivp`` convention: shape
    ``(n_compartments, n_times)``, rows ordered like ``labels``. Both arrays
    are flagged read-only on construction.

    ``warnings`` holds the messages of any numerical checks that failed
    (conservation drift, bounds excursions, non-finite samples). A trajectory
    with warnings is still returned so the caller can inspect it.
    """
    kind: ModelKind
    labels: Tuple[str, ...]
    times: Array            # type: ignore
    states: Array           # type: ignore
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        times = np.array(self.times, dtype=float)
        states = np.array(self.states, dtype=float)
        if states.shape != (len(self.labels), times.size):
            raise ValueError(
                f"states shape {states.shape} does not match "
                f"{len(self.labels)} labels x {times.size} times"
            )
        times.setflags(write=False)
        states.setflags(write=False)
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "states", states)
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def __len__(self) -> int:
        return self.times.size

    def __getitem__(self, label: str) -> Array:
        try:
            return self.states[self.labels.index(label)]
        except ValueError:
            raise KeyError(f"no compartment {label!r}; have {self.labels}") from None

    @property
    def ok(self) -> bool:
        return not self.warnings

    def final(self, label: str) -> float:
        return float(self[label][-1])

    def initial(self, label: str) -> float:
        return float(self[label][0])

    def samples(self) -> Iterator[Tuple[float, Tuple[float, ...]]]:
        """Yield ``(time, state)`` pairs in time order."""
        for k, t in enumerate(self.times):
            yield float(t), tuple(float(v) for v in self.states[:, k])

    def totals(self) -> Array:
        """Sum over compartments at each sample (ideally all ones)."""
        return self.states.sum(axis=0)

    def conservation_error(self) -> float:
        return float(np.max(np.abs(self.totals() - 1.0)))

    def phase(self, x: str = "S", y: str = "I") -> Tuple[Array, Array]:
        """Series for an x-y phase portrait; first/last entries are start/end."""
        return self[x], self[y]

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular form: a ``time`` column plus one column per compartment."""
        data = {"time": self.times}
        for label, row in zip(self.labels, self.states):
            data[label] = row
        return pd.DataFrame(data)
