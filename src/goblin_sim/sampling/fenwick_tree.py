"""Binary indexed (Fenwick) tree for O(log n) prefix sums."""

from __future__ import annotations

from typing import Any

from goblin_sim.sampling.errors import IndexOutOfRangeError
from goblin_sim.sampling.weight import IntWeight, Weight


class FenwickTree:
    """A fixed-capacity Fenwick tree of point deltas.

    Node ``j`` (1-based) stores the total of the ``j & -j`` positions
    ending at ``j - 1``. Position *i* (0-based) maps to node ``i + 1``;
    node 0 is unused.
    """

    def __init__(self, capacity: int, weight: Weight | None = None) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.weight = weight if weight is not None else IntWeight()
        self._tree = self.weight.zeros(capacity + 1)

    @classmethod
    def with_capacity(cls, capacity: int, weight: Weight | None = None) -> FenwickTree:
        return cls(capacity, weight)

    # ── public API ────────────────────────────────────────────────────────

    def add(self, index: int, delta: Any) -> None:
        """Apply *delta* to position *index*."""
        if not 0 <= index < self.capacity:
            raise IndexOutOfRangeError(index, self.capacity)
        delta = self.weight.cast(delta)
        j = index + 1
        while j <= self.capacity:
            self._tree[j] += delta
            j += j & -j

    def prefix(self, k: int) -> Any:
        """Total of positions ``[0, k)``."""
        if not 0 <= k <= self.capacity:
            raise IndexOutOfRangeError(k, self.capacity)
        total = self.weight.zero
        j = k
        while j > 0:
            total += self._tree[j]
            j -= j & -j
        return self.weight.cast(total)

    def sum(self, start: int, stop: int) -> Any:
        """Total of positions in the half-open range ``[start, stop)``."""
        if not 0 <= start <= self.capacity:
            raise IndexOutOfRangeError(start, self.capacity)
        if not start <= stop <= self.capacity:
            raise IndexOutOfRangeError(stop, self.capacity)
        if start == stop:
            return self.weight.zero
        return self.prefix(stop) - self.prefix(start)

    def __len__(self) -> int:
        return self.capacity
