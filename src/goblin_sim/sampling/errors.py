"""Exceptions raised by the weighted sampling structures."""

from __future__ import annotations


class SamplerError(Exception):
    """Base class for all sampling errors."""


class IndexOutOfRangeError(SamplerError, IndexError):
    """A slot index outside the valid range was referenced."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of range for length {length}")
        self.index = index
        self.length = length


class CapacityExceededError(SamplerError, OverflowError):
    """A push was attempted on a structure that is already full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Capacity {capacity} exceeded")
        self.capacity = capacity


class WeightUnderflowError(SamplerError, ArithmeticError):
    """An operation would leave a slot with negative active weight."""


class WeightOverflowError(SamplerError, OverflowError):
    """An operation would push the total weight past the representable maximum."""


class SlotDisabledError(SamplerError):
    """The slot was already disabled and cannot be modified."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Slot {index} is disabled")
        self.index = index
