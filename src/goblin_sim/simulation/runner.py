"""Main simulation loop."""

from __future__ import annotations

import time
from pathlib import Path

from tqdm import tqdm

from goblin_sim.simulation.model import Model, ModelOptions, RandomStrategy, make_income
from goblin_sim.simulation.report import Report
from goblin_sim.utils.config import get_path
from goblin_sim.utils.logging import ExperimentLogger
from goblin_sim.utils.seeding import make_rng


def parse_strategy(value: str) -> RandomStrategy:
    try:
        return RandomStrategy(value)
    except ValueError:
        available = ", ".join(s.value for s in RandomStrategy)
        raise ValueError(f"Unknown random strategy '{value}'. Available: {available}") from None


def build_model(config: dict) -> Model:
    """Create a :class:`Model` from the ``model`` section and top-level ``seed``."""
    model_cfg = get_path(config, "model")
    options = ModelOptions(
        max_steps=int(get_path(config, "model.max_steps")),
        rng=make_rng(config.get("seed")),
        initial_gold=int(model_cfg.get("initial_gold", 1)),
        income=make_income(model_cfg.get("income", {})),
        rnd_income=parse_strategy(model_cfg.get("rnd_income", "weighted")),
        rnd_death=parse_strategy(model_cfg.get("rnd_death", "uniform")),
        p_income=float(model_cfg.get("p_income", 1.0)),
        p_birth=float(model_cfg.get("p_birth", 1.0)),
        p_death=float(model_cfg.get("p_death", 0.5)),
        weight=model_cfg.get("weight", "int"),
    )
    return Model(options)


def run(config: dict, logger: ExperimentLogger | None = None) -> Report:
    """Run one simulation to completion and return its report.

    Steps: init → ``max_steps - 1`` sim steps → report → log.
    """
    sim_cfg = config.get("simulation", {})
    log_freq = int(sim_cfg.get("log_freq", 1000))

    model = build_model(config)
    if logger is not None:
        logger.log_params(config)

    start = time.perf_counter()
    model.init()

    steps = range(1, model.options.max_steps)
    pbar = tqdm(steps, desc="Simulating", disable=not sim_cfg.get("progress", True))
    for step in pbar:
        model.sim()

        if step % log_freq == 0:
            if logger is not None:
                logger.log_metrics(
                    {
                        "population/alive": float(model.alive_count),
                        "population/dead": float(model.dead_count),
                        "population/total_gold": float(model.gold.total),
                    },
                    step=step,
                )
            pbar.set_postfix(alive=model.alive_count, dead=model.dead_count)

    report = model.finish()
    report.duration_ms = (time.perf_counter() - start) * 1000.0

    # ── outputs ───────────────────────────────────────────────────────────
    output_dir = config.get("paths", {}).get("output_dir")
    hist_path = None
    if output_dir:
        hist_path = report.save_histogram(Path(output_dir) / "histogram.csv")

    if logger is not None:
        metrics = {f"report/{k}": v for k, v in report.metrics().items()}
        metrics["report/duration_ms"] = report.duration_ms
        logger.log_metrics(metrics)
        if hist_path is not None:
            logger.log_artifact(hist_path)

    return report
