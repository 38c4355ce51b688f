"""Weighted index sampling over a Fenwick tree."""

from __future__ import annotations

from typing import Any

import numpy as np

from goblin_sim.sampling.errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    WeightOverflowError,
    WeightUnderflowError,
)
from goblin_sim.sampling.fenwick_tree import FenwickTree
from goblin_sim.sampling.weight import IntWeight, Weight


class WeightedSampler:
    """Append-only set of weighted slots with O(log n) updates.

    Slots are pushed one at a time and never removed; a slot drops out of
    sampling once its active weight reaches zero. :meth:`weighted_index`
    draws a slot with probability proportional to its active weight.
    """

    def __init__(self, capacity: int, weight: Weight | None = None) -> None:
        self.weight = weight if weight is not None else IntWeight()
        self._tree = FenwickTree(capacity, self.weight)
        self.size = 0

    @classmethod
    def with_capacity(cls, capacity: int, weight: Weight | None = None) -> WeightedSampler:
        return cls(capacity, weight)

    @property
    def capacity(self) -> int:
        return self._tree.capacity

    @property
    def total(self) -> Any:
        """Sum of all active weights."""
        return self._tree.sum(0, self.size)

    # ── mutation ──────────────────────────────────────────────────────────

    def push(self, weight: Any) -> int:
        """Append a slot with *weight* and return its index."""
        if self.size == self.capacity:
            raise CapacityExceededError(self.capacity)
        if weight < self.weight.zero:
            raise WeightUnderflowError(f"Cannot push negative weight {weight}")
        self._check_total(weight)

        index = self.size
        self._tree.add(index, weight)
        self.size += 1
        return index

    def add(self, index: int, delta: Any) -> None:
        """Apply *delta* to the active weight of slot *index*."""
        if not 0 <= index < self.size:
            raise IndexOutOfRangeError(index, self.size)
        current = self.weight_at(index)
        if current + delta < self.weight.zero:
            raise WeightUnderflowError(
                f"Slot {index} has weight {current}, cannot apply delta {delta}"
            )
        self._check_total(delta)
        self._tree.add(index, delta)

    def weight_at(self, index: int) -> Any:
        """Active weight of slot *index*."""
        if not 0 <= index < self.size:
            raise IndexOutOfRangeError(index, self.size)
        return self._tree.sum(index, index + 1)

    def _check_total(self, delta: Any) -> None:
        limit = self.weight.max_value
        if limit is not None and self.total + delta > limit:
            raise WeightOverflowError(
                f"Total weight would exceed {limit} after adding {delta}"
            )

    # ── sampling ──────────────────────────────────────────────────────────

    def weighted_index(self, rng: np.random.Generator) -> int | None:
        """Draw a slot index proportionally to active weight.

        Returns ``None`` when every slot has zero weight (or none exist).
        Consumes exactly one draw from *rng* otherwise.
        """
        total = self.total
        if total == self.weight.zero:
            return None

        need = self.weight.draw(rng, self.weight.one, total)
        a, b = 0, self.size
        while b - a > 1:
            half = a + (b - a) // 2
            s = self._tree.sum(a, half)
            if s < need:
                need -= s
                a = half
            else:  # ties resolve to the lower half
                b = half
        return a

    def __len__(self) -> int:
        return self.size
