"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


class FixedDraw:
    """Stand-in random source that always returns the same draw.

    Records every ``(low, high)`` range it was asked for.
    """

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def integers(self, low: int, high: int, endpoint: bool = False) -> int:
        assert endpoint, "draws must be over an inclusive range"
        self.calls.append((low, high))
        return self.value


@pytest.fixture
def fixed_draw() -> type[FixedDraw]:
    return FixedDraw


@pytest.fixture
def configs_dir() -> Path:
    """Path to the configs/ directory."""
    return Path(__file__).resolve().parent.parent / "configs"


@pytest.fixture
def default_config(configs_dir: Path) -> dict:
    """Load the default config dict."""
    from goblin_sim.utils.config import load_yaml

    return load_yaml(configs_dir / "default.yaml")


@pytest.fixture
def small_config(tmp_path: Path) -> dict:
    """A quick, quiet config that writes outputs under a temp dir."""
    return {
        "seed": 3,
        "model": {
            "max_steps": 500,
            "initial_gold": 1,
            "income": {"type": "constant", "amount": 1},
            "rnd_income": "weighted",
            "rnd_death": "uniform",
            "p_income": 1.0,
            "p_birth": 0.6,
            "p_death": 0.5,
        },
        "simulation": {"log_freq": 100, "progress": False},
        "paths": {"output_dir": str(tmp_path / "outputs")},
        "mlflow": {"enabled": False},
    }
