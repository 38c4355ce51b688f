"""Weight kinds — the numeric capabilities a sampler needs from its weights.

A weight kind bundles the additive identity, the smallest positive
increment, a storage dtype and a uniform draw over an inclusive range.
Kinds are registered by name; the simulation picks one through the
``model.weight`` config key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Type

import numpy as np

_REGISTRY: dict[str, Type[Weight]] = {}

# bounds below this fit a single int64 draw
_INT64_SPAN = 2**62


def register(name: str) -> Callable:
    """Decorator to register a weight kind under *name*."""

    def wrapper(cls: Type[Weight]) -> Type[Weight]:
        if name in _REGISTRY:
            raise ValueError(f"Weight kind '{name}' is already registered")
        cls.name = name
        _REGISTRY[name] = cls
        return cls

    return wrapper


def get_weight(name: str) -> Weight:
    """Instantiate a registered weight kind by name."""
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise ValueError(f"Unknown weight kind '{name}'. Available: {available}")
    return _REGISTRY[name]()


def available_weights() -> list[str]:
    """Return sorted list of registered weight kind names."""
    return sorted(_REGISTRY)


class Weight(ABC):
    """Capability interface for a numeric weight type."""

    name: str = ""
    dtype: np.dtype

    @property
    @abstractmethod
    def zero(self) -> Any:
        """Additive identity."""

    @property
    @abstractmethod
    def one(self) -> Any:
        """Smallest positive increment, the lower bound of every draw."""

    @property
    @abstractmethod
    def max_value(self) -> Any:
        """Largest total the storage dtype can hold, or ``None`` if unbounded."""

    @abstractmethod
    def cast(self, value: Any) -> Any:
        """Convert a stored value to a plain Python scalar."""

    @abstractmethod
    def draw(self, rng: np.random.Generator, low: Any, high: Any) -> Any:
        """Draw one value uniformly from the inclusive range ``[low, high]``."""

    def zeros(self, n: int) -> np.ndarray:
        return np.zeros(n, dtype=self.dtype)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@register("int")
class IntWeight(Weight):
    """Exact integer weights stored as int64."""

    dtype = np.dtype(np.int64)

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    @property
    def max_value(self) -> int:
        return int(np.iinfo(np.int64).max)

    def cast(self, value: Any) -> int:
        return int(value)

    def draw(self, rng: np.random.Generator, low: int, high: int) -> int:
        return int(rng.integers(low, high, endpoint=True))


@register("bigint")
class BigIntWeight(Weight):
    """Unbounded Python integers stored in an object array.

    Slower than :class:`IntWeight` but never overflows, for runs where
    weights grow geometrically.
    """

    dtype = np.dtype(object)

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    @property
    def max_value(self) -> None:
        return None

    def cast(self, value: Any) -> int:
        return int(value)

    def zeros(self, n: int) -> np.ndarray:
        out = np.empty(n, dtype=object)
        out[:] = 0
        return out

    def draw(self, rng: np.random.Generator, low: int, high: int) -> int:
        if high < _INT64_SPAN:
            return int(rng.integers(low, high, endpoint=True))
        span = high - low
        # rejection sampling over just enough random bits
        nbits = span.bit_length()
        nbytes = (nbits + 7) // 8
        while True:
            x = int.from_bytes(rng.bytes(nbytes), "little") >> (8 * nbytes - nbits)
            if x <= span:
                return low + x
