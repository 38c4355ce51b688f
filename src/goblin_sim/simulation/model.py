"""Population model of goblins earning gold, being born and dying."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

import numpy as np

from goblin_sim.sampling.weight import IntWeight, get_weight
from goblin_sim.sampling.weighted_collection import WeightedCollection

if TYPE_CHECKING:
    from goblin_sim.simulation.report import Report

IncomeFn = Callable[[int], int]


class RandomStrategy(Enum):
    """How a goblin is chosen for income or death."""

    UNIFORM = "uniform"  # equal chance among the alive
    WEIGHTED = "weighted"  # gold is the weight


def make_income(cfg: dict) -> IncomeFn:
    """Build an income function from an ``income`` config section.

    ``constant`` adds ``amount`` gold; ``proportional`` adds ``rate`` of the
    current gold, but never less than ``minimum``.
    """
    kind = cfg.get("type", "constant")
    if kind == "constant":
        amount = int(cfg.get("amount", 1))
        return lambda gold: gold + amount
    if kind == "proportional":
        rate = float(cfg["rate"])
        minimum = int(cfg.get("minimum", 1))
        return lambda gold: gold + max(minimum, int(gold * rate))
    raise ValueError(f"Unknown income type '{kind}'. Available: constant, proportional")


@dataclass
class ModelOptions:
    """Parameters of a simulation run.

    ``max_steps`` bounds how many goblins can ever exist and sizes the
    underlying collections.
    """

    max_steps: int
    rng: np.random.Generator
    initial_gold: int = 1
    income: IncomeFn = field(default=lambda gold: gold + 1)
    rnd_income: RandomStrategy = RandomStrategy.WEIGHTED
    rnd_death: RandomStrategy = RandomStrategy.UNIFORM
    p_income: float = 1.0
    p_birth: float = 1.0
    p_death: float = 0.5
    weight: str = "int"  # weight kind for gold

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        get_weight(self.weight)
        if self.initial_gold < 0:
            raise ValueError(f"initial_gold must be non-negative, got {self.initial_gold}")
        for name in ("p_income", "p_birth", "p_death"):
            p = getattr(self, name)
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {p}")


class Model:
    """Goblin population driven by income, birth and death events.

    Two collections share slot indices: ``alive`` holds weight 1 per living
    goblin (for uniform picks) and ``gold`` holds each goblin's gold (for
    weighted picks). A dead goblin is disabled in both.
    """

    def __init__(self, options: ModelOptions) -> None:
        self.options = options
        self.alive = WeightedCollection(options.max_steps, IntWeight())
        self.gold = WeightedCollection(options.max_steps, get_weight(options.weight))
        self.dead_count = 0

    def init(self) -> None:
        """Start the population with a single goblin."""
        self.give_life()

    def sim(self) -> None:
        """Advance the model by one step."""
        self.sim_income()
        self.sim_birth()
        self.sim_death()

    def finish(self) -> Report:
        from goblin_sim.simulation.report import Report

        return Report.from_model(self)

    @property
    def population(self) -> int:
        return len(self.gold)

    @property
    def alive_count(self) -> int:
        return self.population - self.dead_count

    # ── events ────────────────────────────────────────────────────────────

    def sim_income(self) -> None:
        if self._chance(self.options.p_income):
            goblin = self.random_goblin(self.options.rnd_income)
            if goblin is not None:
                self.add_income(goblin)

    def sim_birth(self) -> None:
        if self._chance(self.options.p_birth):
            self.give_life()

    def sim_death(self) -> None:
        if self._chance(self.options.p_death):
            goblin = self.random_goblin(self.options.rnd_death)
            if goblin is not None:
                self.kill(goblin)

    def give_life(self) -> int:
        self.alive.push(1)
        return self.gold.push(self.options.initial_gold)

    def add_income(self, goblin: int) -> None:
        current = self.gold.weight.cast(self.gold.raw_values()[goblin])
        self.gold.add(goblin, self.options.income(current) - current)

    def kill(self, goblin: int) -> None:
        self.alive.disable(goblin)
        self.gold.disable(goblin)
        self.dead_count += 1

    def random_goblin(self, strategy: RandomStrategy) -> int | None:
        if strategy is RandomStrategy.UNIFORM:
            return self.alive.sample(self.options.rng)
        return self.gold.sample(self.options.rng)

    def _chance(self, p: float) -> bool:
        return bool(self.options.rng.random() < p)
