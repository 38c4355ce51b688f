"""Summary statistics of a finished simulation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from goblin_sim.simulation.model import Model


@dataclass
class Report:
    """Results of simulating a :class:`Model`.

    ``gold`` lists every goblin that ever lived; dead goblins keep the gold
    they held when they died.
    """

    alive_count: int
    dead_count: int
    gold: np.ndarray
    duration_ms: float = 0.0

    @classmethod
    def from_model(cls, model: Model) -> Report:
        gold = np.array(model.gold.raw_values(), copy=True)
        return cls(
            alive_count=len(gold) - model.dead_count,
            dead_count=model.dead_count,
            gold=gold,
        )

    # ── statistics ────────────────────────────────────────────────────────

    @property
    def max(self) -> int:
        return int(self.gold.max()) if len(self.gold) else 0

    @property
    def mean(self) -> float:
        return float(self._as_float().mean()) if len(self.gold) else 0.0

    @property
    def stdev(self) -> float:
        """Sample standard deviation (``n - 1`` denominator)."""
        if len(self.gold) < 2:
            return 0.0
        return float(self._as_float().std(ddof=1))

    def _as_float(self) -> np.ndarray:
        # gold may be an object array of unbounded ints
        return self.gold.astype(np.float64)

    def histogram(self) -> tuple[np.ndarray, np.ndarray]:
        """Distinct gold amounts and how many goblins hold each."""
        return np.unique(self.gold, return_counts=True)

    def metrics(self) -> dict[str, float]:
        return {
            "alive": float(self.alive_count),
            "dead": float(self.dead_count),
            "max_gold": float(self.max),
            "mean_gold": self.mean,
            "stdev_gold": self.stdev,
        }

    # ── output ────────────────────────────────────────────────────────────

    def print(self, verbose: bool = False) -> None:
        if verbose:
            print(f"Gold: {self.gold.tolist()}")
        print(f"Alive: {self.alive_count}")
        print(f"Dead: {self.dead_count}")
        print(f"Max gold: {self.max}")
        print(f"Mean: {self.mean:.3f}")
        print(f"Stdev: {self.stdev:.3f}")
        if self.duration_ms:
            print(f"Duration: {self.duration_ms:.0f} ms.")

    def save_histogram(self, path: str | Path) -> Path:
        """Write the histogram as a ``gold,count`` CSV and return its path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        values, counts = self.histogram()
        np.savetxt(
            path,
            np.column_stack([values, counts]),
            fmt="%d",
            delimiter=",",
            header="gold,count",
            comments="",
        )
        return path
