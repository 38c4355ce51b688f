"""Raw values paired with a weighted sampler."""

from __future__ import annotations

from typing import Any

import numpy as np

from goblin_sim.sampling.errors import IndexOutOfRangeError, SlotDisabledError
from goblin_sim.sampling.weight import IntWeight, Weight
from goblin_sim.sampling.weighted_sampler import WeightedSampler


class WeightedCollection:
    """Dense, append-only arena of weighted slots.

    Every slot keeps its raw value for reporting. Disabling a slot removes
    its weight from sampling for good but leaves the raw value in place, so
    :meth:`raw_values` still shows what the slot held when it was disabled.
    """

    def __init__(self, capacity: int, weight: Weight | None = None) -> None:
        self.weight = weight if weight is not None else IntWeight()
        self.sampler = WeightedSampler(capacity, self.weight)
        self._values = self.weight.zeros(capacity)
        self._disabled = np.zeros(capacity, dtype=np.bool_)

    @classmethod
    def with_capacity(cls, capacity: int, weight: Weight | None = None) -> WeightedCollection:
        return cls(capacity, weight)

    @property
    def capacity(self) -> int:
        return self.sampler.capacity

    @property
    def total(self) -> Any:
        """Active weight across all enabled slots."""
        return self.sampler.total

    @property
    def disabled_count(self) -> int:
        return int(self._disabled[: len(self)].sum())

    @property
    def active_count(self) -> int:
        return len(self) - self.disabled_count

    def push(self, value: Any) -> int:
        """Append a new slot holding *value* and return its index."""
        index = self.sampler.push(value)
        self._values[index] = value
        return index

    def add(self, index: int, delta: Any) -> None:
        """Add *delta* to both the raw value and the active weight of *index*."""
        self._check_enabled(index)
        self.sampler.add(index, delta)
        self._values[index] += delta

    def disable(self, index: int) -> None:
        """Zero the slot's sampling weight, keeping its raw value."""
        self._check_enabled(index)
        current = self.weight.cast(self._values[index])
        self.sampler.add(index, -current)
        self._disabled[index] = True

    def is_disabled(self, index: int) -> bool:
        if not 0 <= index < len(self):
            raise IndexOutOfRangeError(index, len(self))
        return bool(self._disabled[index])

    def sample(self, rng: np.random.Generator) -> int | None:
        """Draw an enabled slot proportionally to its weight, or ``None``."""
        return self.sampler.weighted_index(rng)

    def raw_values(self) -> np.ndarray:
        """Read-only view of every slot's raw value, disabled ones included."""
        view = self._values[: len(self)]
        view.flags.writeable = False
        return view

    def _check_enabled(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexOutOfRangeError(index, len(self))
        if self._disabled[index]:
            raise SlotDisabledError(index)

    def __len__(self) -> int:
        return len(self.sampler)
